"""
FAMS - Test Configuration and Fixtures

The portal keeps no data of its own, so every test talks to a FakeBackend
mounted through httpx.MockTransport in place of the real appraisal backend.
"""
import json
import time

import httpx
import pytest
from django.conf import settings
from django.contrib.messages import get_messages

from base.roles import Role
from base.services import backend as backend_module
from base.services.backend import BackendClient
from base.session import (
    SESSION_TOKEN_KEY,
    SESSION_USER_KEY,
    SESSION_VALIDATED_AT_KEY,
    SessionUser,
)

BACKEND_URL = "http://backend.test"


class FakeBackend:
    """
    Routes (method, path) to canned answers and records every request.

    - on("GET", "/CSE/u1/A", {"A": {...}})
    - on("POST", "/CSE/u1/A", status=500)
    - on("GET", "/health", error=httpx.ConnectError("down"))
    Unrouted requests answer 404.
    """

    def __init__(self):
        self.routes = {}
        self.calls = []

    def on(self, method, path, json=None, status=200, error=None):
        self.routes[(method.upper(), path)] = (status, json, error)
        return self

    def __call__(self, request: httpx.Request) -> httpx.Response:
        body = json.loads(request.content) if request.content else None
        self.calls.append({
            "method": request.method,
            "path": request.url.path,
            "json": body,
            "authorization": request.headers.get("Authorization"),
        })
        status, payload, error = self.routes.get(
            (request.method, request.url.path), (404, {"message": "Not found"}, None)
        )
        if error is not None:
            raise error
        if payload is None:
            return httpx.Response(status)
        return httpx.Response(status, json=payload)

    def client(self, token=None) -> BackendClient:
        return BackendClient(BACKEND_URL, token=token, transport=httpx.MockTransport(self))

    # ---------------------------------------------
    # Assertions helpers
    # ---------------------------------------------
    def requests(self, method=None, path=None):
        return [
            c for c in self.calls
            if (method is None or c["method"] == method) and (path is None or c["path"] == path)
        ]

    def writes(self):
        """Every request that would change backend state."""
        return [c for c in self.calls if c["method"] in ("POST", "PUT", "PATCH", "DELETE")]

    def last(self, method, path):
        found = self.requests(method, path)
        assert found, f"no {method} {path} in {[(c['method'], c['path']) for c in self.calls]}"
        return found[-1]


@pytest.fixture
def backend(monkeypatch):
    """FakeBackend wired into the session middleware's client factory."""
    fake = FakeBackend()
    monkeypatch.setattr(backend_module, "make_client", lambda token=None: fake.client(token))
    return fake


# ============================================================
# Users & sessions
# ============================================================

USER_DEFAULTS = {
    Role.FACULTY: {"id": "u1", "department": "CSE", "designation": "Professor"},
    Role.HOD: {"id": "h1", "department": "CSE", "designation": "hod"},
    Role.DEAN: {"id": "d1", "department": "CSE", "designation": "dean"},
    Role.ASSOCIATE_DEAN: {"id": "ad1", "department": "CSE", "designation": "associate_dean"},
    Role.VERIFICATION_TEAM: {"id": "v1", "department": "CSE"},
    Role.DIRECTOR: {"id": "dir1"},
    Role.EXTERNAL: {"id": "x1"},
    Role.COLLEGE_EXTERNAL: {"id": "cx1"},
    Role.ADMIN: {"id": "a1"},
}


def make_user(role=Role.FACULTY, **overrides) -> SessionUser:
    data = {
        "email": f"{role.value}@college.edu",
        "name": role.label,
        "department": "",
        "designation": "",
        **USER_DEFAULTS[role],
        **overrides,
    }
    return SessionUser(role=role, **data)


def put_session(client, **values):
    """Write keys into the signed-cookie session of the test client."""
    session = client.session
    for key, value in values.items():
        session[key] = value
    session.save()
    client.cookies[settings.SESSION_COOKIE_NAME] = session.session_key


@pytest.fixture
def login(client, backend):
    """login(Role.HOD, department="ECE") → SessionUser now logged into `client`."""
    def _login(role=Role.FACULTY, validated_at=None, **overrides):
        user = make_user(role, **overrides)
        put_session(
            client,
            **{
                SESSION_TOKEN_KEY: f"token-{user.id}",
                SESSION_USER_KEY: user.to_session(),
                SESSION_VALIDATED_AT_KEY: time.time() if validated_at is None else validated_at,
            },
        )
        return user
    return _login


def messages_of(response):
    return [str(m) for m in get_messages(response.wsgi_request)]


# ============================================================
# Record payloads
# ============================================================

def part_d_record(**overrides):
    record = {
        "portfolioType": "both",
        "selfAwardedMarks": 40,
        "deanMarks": 0,
        "hodMarks": 0,
        "isMarkHOD": False,
        "isMarkDean": False,
        "isAdministrativeRole": False,
        "administrativeRole": "",
        "adminSelfAwardedMarks": 0,
        "directorMarks": 0,
        "adminDeanMarks": 0,
        "instituteLevelPortfolio": "Institute work",
        "departmentLevelPortfolio": "Department work",
    }
    record.update(overrides)
    return record


def faculty_rows():
    return [
        {"id": "f1", "name": "Asha Rao", "employeeId": "EMP-001", "department": "CSE",
         "designation": "Professor", "status": "verification_pending"},
        {"id": "f2", "name": "Vikram Shah", "employeeId": "EMP-002", "department": "ECE",
         "designation": "Assistant Professor", "status": "submitted"},
        {"id": "f3", "name": "Meera Iyer", "employeeId": "EMP-003", "department": "CSE",
         "designation": "Associate Professor", "status": "done"},
    ]
