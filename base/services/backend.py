# base/services/backend.py
"""
HTTP client for the appraisal backend.

The portal owns no data: users, appraisal parts and statuses all live behind
the backend's REST endpoints. Every request carries the caller's bearer token
explicitly; a client is built per request by the session middleware and
closed once the response is returned.
"""
from __future__ import annotations

import logging
from typing import Any, Optional

import httpx
from django.conf import settings

logger = logging.getLogger(__name__)


# ============================================================
# Errors
# ============================================================

class BackendError(Exception):
    """Non-2xx answer from the backend."""

    def __init__(self, status_code: int, message: str = "", payload: Any = None):
        self.status_code = status_code
        self.message = message or f"Backend error ({status_code})"
        self.payload = payload
        super().__init__(self.message)


class BackendAuthError(BackendError):
    """401/403: token missing, expired or not allowed."""


class BackendUnavailable(BackendError):
    """Network failure or timeout; the backend never answered."""

    def __init__(self, message: str = "Failed to connect to backend"):
        super().__init__(503, message)


def _extract_message(payload: Any) -> str:
    if isinstance(payload, dict):
        for key in ("message", "detail", "error"):
            value = payload.get(key)
            if isinstance(value, str) and value:
                return value
    return ""


# ============================================================
# Client
# ============================================================

class BackendClient:
    """
    Thin JSON client over httpx.

    - get/post/delete return the decoded JSON body (None when empty).
    - errors are raised as BackendError / BackendAuthError / BackendUnavailable.
    """

    def __init__(
        self,
        base_url: str,
        token: Optional[str] = None,
        timeout: float = 10.0,
        transport: Optional[httpx.BaseTransport] = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.token = token
        headers = {"Accept": "application/json"}
        if token:
            headers["Authorization"] = f"Bearer {token}"
        self._http = httpx.Client(
            base_url=self.base_url,
            headers=headers,
            timeout=timeout,
            transport=transport,
        )

    def close(self) -> None:
        self._http.close()

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        self.close()

    # ---------------------------------------------
    # Low level
    # ---------------------------------------------
    def request(self, method: str, path: str, json: Any = None) -> Any:
        path = "/" + path.lstrip("/")
        try:
            if json is None:
                response = self._http.request(method, path)
            else:
                response = self._http.request(method, path, json=json)
        except httpx.TransportError as exc:
            logger.warning("Backend %s %s unreachable: %s", method, path, exc)
            raise BackendUnavailable() from exc

        logger.debug("Backend %s %s -> %s", method, path, response.status_code)
        payload = self._decode(response)

        if response.is_success:
            return payload

        message = _extract_message(payload) or response.reason_phrase
        logger.warning("Backend %s %s failed (%s): %s", method, path, response.status_code, message)
        if response.status_code in (401, 403):
            raise BackendAuthError(response.status_code, message, payload)
        raise BackendError(response.status_code, message, payload)

    @staticmethod
    def _decode(response: httpx.Response) -> Any:
        if not response.content:
            return None
        try:
            return response.json()
        except ValueError:
            return {"message": response.text}

    def get(self, path: str) -> Any:
        return self.request("GET", path)

    def post(self, path: str, json: Any = None) -> Any:
        return self.request("POST", path, json=json if json is not None else {})

    def delete(self, path: str, json: Any = None) -> Any:
        return self.request("DELETE", path, json=json)

    # ---------------------------------------------
    # Auth
    # ---------------------------------------------
    def login(self, email: str, password: str) -> Any:
        return self.post("/auth/login", {"email": email, "password": password})

    def me(self) -> Any:
        return self.get("/auth/me")

    def logout(self) -> Any:
        return self.post("/auth/logout")

    def change_password(self, current_password: str, new_password: str) -> Any:
        return self.post(
            "/auth/change-password",
            {"currentPassword": current_password, "newPassword": new_password},
        )

    def forgot_password(self, email: str) -> Any:
        return self.post("/auth/forgot-password", {"email": email})

    def health(self) -> Any:
        return self.get("/health")

    # ---------------------------------------------
    # Admin users
    # ---------------------------------------------
    def list_users(self) -> Any:
        return self.get("/admin/getUsers")

    def add_user(self, data: dict) -> Any:
        return self.post("/admin/addUser", data)

    def update_user(self, data: dict) -> Any:
        return self.post("/admin/updateUser", data)

    def delete_user(self, user_id: str, role: str) -> Any:
        return self.delete("/admin/deleteUser", {"id": user_id, "role": role})

    # ---------------------------------------------
    # Appraisal record: (department, user_id, part)
    # ---------------------------------------------
    def get_part(self, department: str, user_id: str, part: str) -> Any:
        return self.get(f"/{department}/{user_id}/{part}")

    def save_part(self, department: str, user_id: str, part: str, payload: dict) -> Any:
        return self.post(f"/{department}/{user_id}/{part}", payload)

    def get_status(self, department: str, user_id: str) -> Any:
        return self.get(f"/{department}/{user_id}/get-status")

    def get_total_marks(self, department: str, user_id: str) -> Any:
        return self.get(f"/{department}/total_marks/{user_id}")

    def mark_director_given(self, department: str, user_id: str) -> Any:
        return self.post(f"/{department}/{user_id}/director-mark-given")

    def save_interaction_marks(self, department: str, user_id: str, payload: dict, college: bool = True) -> Any:
        kind = "college_external_interaction_marks" if college else "external_interaction_marks"
        return self.post(f"/{department}/{kind}/{user_id}", payload)

    # ---------------------------------------------
    # Listings
    # ---------------------------------------------
    def list_faculty(self, scope: str) -> Any:
        return self.get(f"/{scope.strip('/')}")

    def director_stats(self) -> Any:
        return self.get("/director/stats")

    # ---------------------------------------------
    # External reviewers
    # ---------------------------------------------
    def list_externals(self) -> Any:
        return self.get("/get-externals")

    def create_external(self, data: dict) -> Any:
        return self.post("/create-external", data)

    def delete_external(self, external_id: str) -> Any:
        return self.delete(f"/externals/{external_id}")

    def assign_external(self, department: str, user_id: str, external_id: str) -> Any:
        return self.post(
            "/director/assign-external",
            {"department": department, "facultyId": user_id, "externalId": external_id},
        )


def make_client(token: Optional[str] = None) -> BackendClient:
    """Build a client from settings (BACKEND_URL / BACKEND_TIMEOUT)."""
    return BackendClient(
        settings.BACKEND_URL,
        token=token,
        timeout=getattr(settings, "BACKEND_TIMEOUT", 10.0),
    )


def unwrap_list(payload: Any, *keys: str) -> list:
    """
    Listing endpoints answer either a bare list or an envelope such as
    {"data": [...]} / {"users": [...]}.
    """
    if isinstance(payload, list):
        return payload
    if isinstance(payload, dict):
        for key in keys + ("data", "items", "results"):
            value = payload.get(key)
            if isinstance(value, list):
                return value
    return []
