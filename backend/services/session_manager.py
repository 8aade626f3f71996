"""Session cookie management.

The session is the Appwrite session secret, kept client-side in a
single HTTP-only cookie and resolved through a session-scoped Appwrite
client on each request.
"""

import logging

from fastapi import Request, Response

from config import settings
from integrations.appwrite_client import AppwriteClient
from integrations.exceptions import IdentityStoreError
from models.user import UserRecord
from services.user_service import get_user_info

logger = logging.getLogger(__name__)


class SessionManager:
    """Read, write and clear the session cookie."""

    def __init__(
        self,
        appwrite: AppwriteClient,
        cookie_name: str | None = None,
        secure: bool | None = None,
    ):
        self._appwrite = appwrite
        self.cookie_name = cookie_name or settings.SESSION_COOKIE_NAME
        self._secure = settings.is_production if secure is None else secure

    def establish_session(self, response: Response, session_secret: str) -> None:
        """Store the session secret in a site-wide, HTTP-only, strict cookie.

        Raises:
            IdentityStoreError: The identity store returned no secret.
        """
        if not session_secret:
            raise IdentityStoreError("Appwrite session secret missing")

        response.set_cookie(
            key=self.cookie_name,
            value=session_secret,
            path="/",
            httponly=True,
            samesite="strict",
            secure=self._secure,
        )

    def clear_session(self, request: Request, response: Response) -> None:
        """Delete the cookie and invalidate the session server-side.

        An unreachable identity store is treated as already logged out.
        """
        self.discard_session(response, request.cookies.get(self.cookie_name) or "")

    def discard_session(self, response: Response, session_secret: str) -> None:
        """Delete the cookie and, when there is one, the session behind ``session_secret``."""
        response.delete_cookie(key=self.cookie_name, path="/")
        if not session_secret:
            return

        try:
            self._appwrite.delete_session(session_secret, "current")
        except IdentityStoreError as e:
            logger.info("Session delete failed, treating as logged out: %s", e)

    def get_current_user(self, request: Request) -> UserRecord | None:
        """Resolve the cookie to a user document, or ``None`` if there is no valid session."""
        session_secret = request.cookies.get(self.cookie_name)
        if not session_secret:
            return None

        try:
            account = self._appwrite.get_account(session_secret)
        except IdentityStoreError as e:
            logger.info("No valid session: %s", e)
            return None

        logger.debug("Session user found: %s", account.get("$id"))
        return get_user_info(self._appwrite, account.get("email", ""))
