# base/middleware.py
from __future__ import annotations

import logging

from django.conf import settings

from .roles import UnknownRoleError
from .services import backend
from .session import (
    SessionUser,
    end_session,
    extract_auth,
    get_session_user,
    get_token,
    needs_revalidation,
    refresh_session,
)

logger = logging.getLogger(__name__)


class BackendSessionMiddleware:
    """
    يجهّز لكل طلب عميل backend يحمل توكن الجلسة (request.backend)
    ومستخدم الجلسة (request.session_user)، ثم يغلق العميل بعد الاستجابة.
    يجب وضعه بعد SessionMiddleware.
    """
    def __init__(self, get_response):
        self.get_response = get_response

    def __call__(self, request):
        token = get_token(request)
        request.backend = backend.make_client(token)
        request.session_user = get_session_user(request)

        if request.session_user and needs_revalidation(request, settings.AUTH_REVALIDATE_SECONDS):
            self._revalidate(request)

        try:
            response = self.get_response(request)
        finally:
            request.backend.close()
        return response

    def _drop_session(self, request):
        end_session(request)
        request.session_user = None
        request.backend.close()
        request.backend = backend.make_client(None)

    def _revalidate(self, request):
        try:
            payload = request.backend.me()
        except backend.BackendAuthError:
            logger.info("Session token rejected by backend; ending session for %s", request.session_user.email)
            self._drop_session(request)
            return
        except backend.BackendError:
            # backend down: keep the session, try again next request
            logger.warning("Could not revalidate session for %s", request.session_user.email, exc_info=True)
            return

        token, user_payload = extract_auth(payload)
        user = None
        if user_payload:
            try:
                user = SessionUser.from_payload(user_payload)
            except UnknownRoleError:
                logger.warning("Backend returned an unknown role for %s; ending session", request.session_user.email)
                self._drop_session(request)
                return
        refresh_session(request, token, user)
        if token and token != request.backend.token:
            request.backend.close()
            request.backend = backend.make_client(token)
        if user:
            request.session_user = user
