# base/session.py
# ------------------------------------------------------------
# Session user: what the portal knows about the logged-in person.
# التوكن وبيانات المستخدم محفوظة داخل الجلسة فقط.
# ------------------------------------------------------------
from __future__ import annotations

import time
from dataclasses import asdict, dataclass
from typing import Any, Optional

from .roles import Role, normalize_role

SESSION_TOKEN_KEY = "backend_token"
SESSION_USER_KEY = "backend_user"
SESSION_VALIDATED_AT_KEY = "backend_validated_at"


@dataclass(frozen=True)
class SessionUser:
    id: str
    email: str
    name: str
    role: Role
    department: str = ""
    designation: str = ""

    is_authenticated = True

    @classmethod
    def from_payload(cls, payload: dict) -> "SessionUser":
        """
        Build from the backend's user JSON. Raises UnknownRoleError when the
        role cannot be mapped.
        """
        email = (payload.get("email") or "").strip()
        return cls(
            id=str(payload.get("id") or payload.get("_id") or payload.get("userId") or ""),
            email=email,
            name=payload.get("name") or email.split("@")[0],
            role=normalize_role(payload.get("role")),
            department=payload.get("department") or payload.get("dept") or "",
            designation=payload.get("designation") or "",
        )

    def to_session(self) -> dict:
        data = asdict(self)
        data["role"] = self.role.value
        return data

    @classmethod
    def from_session(cls, data: dict) -> "SessionUser":
        return cls(**{**data, "role": Role(data["role"])})


def extract_auth(payload: Any) -> tuple[Optional[str], Optional[dict]]:
    """
    Login and /auth/me answer {"data": {"token", "user"}} or {"token", "user"}.
    """
    if not isinstance(payload, dict):
        return None, None
    body = payload.get("data") if isinstance(payload.get("data"), dict) else payload
    token = body.get("token") or body.get("access_token")
    user = body.get("user")
    return token, user if isinstance(user, dict) else None


def start_session(request, token: str, user: SessionUser) -> None:
    request.session.cycle_key()
    request.session[SESSION_TOKEN_KEY] = token
    request.session[SESSION_USER_KEY] = user.to_session()
    request.session[SESSION_VALIDATED_AT_KEY] = time.time()


def refresh_session(request, token: Optional[str], user: Optional[SessionUser]) -> None:
    if token:
        request.session[SESSION_TOKEN_KEY] = token
    if user:
        request.session[SESSION_USER_KEY] = user.to_session()
    request.session[SESSION_VALIDATED_AT_KEY] = time.time()


def get_token(request) -> Optional[str]:
    return request.session.get(SESSION_TOKEN_KEY)


def get_session_user(request) -> Optional[SessionUser]:
    data = request.session.get(SESSION_USER_KEY)
    if not data or not get_token(request):
        return None
    try:
        return SessionUser.from_session(data)
    except (KeyError, TypeError, ValueError):
        return None


def needs_revalidation(request, max_age: int) -> bool:
    validated_at = request.session.get(SESSION_VALIDATED_AT_KEY) or 0
    return (time.time() - validated_at) >= max_age


def end_session(request) -> None:
    request.session.flush()
