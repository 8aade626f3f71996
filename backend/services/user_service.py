"""User provisioning: sign-up, sign-in and user document lookup."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from fastapi import Response

from integrations.appwrite_client import AppwriteClient
from integrations.exceptions import BankingError, IdentityStoreError
from models.user import UserRecord
from services.password_service import PasswordHashingService

if TYPE_CHECKING:
    from services.session_manager import SessionManager

logger = logging.getLogger(__name__)


def _find_user(appwrite: AppwriteClient, email: str) -> UserRecord | None:
    """Like :func:`get_user_info`, but store failures raise IdentityStoreError."""
    result = appwrite.list_documents(appwrite.user_collection_id, {"email": email})
    documents = result.get("documents") or []
    if not documents:
        logger.info("User document not found in Appwrite")
        return None
    return UserRecord.from_document(documents[0])


def get_user_info(appwrite: AppwriteClient, email: str) -> UserRecord | None:
    """Return the user document for ``email``, or ``None``.

    Store failures are logged and reported as "not found".
    """
    try:
        return _find_user(appwrite, email)
    except IdentityStoreError as e:
        logger.warning("User lookup failed: %s", e)
        return None


class UserService:
    """Create identity accounts and their user documents."""

    def __init__(
        self,
        appwrite: AppwriteClient,
        sessions: SessionManager,
        password_hasher: PasswordHashingService | None = None,
    ):
        self._appwrite = appwrite
        self._sessions = sessions
        self._hasher = password_hasher or PasswordHashingService()

    def get_user_info(self, email: str) -> UserRecord | None:
        return get_user_info(self._appwrite, email)

    def sign_up(
        self,
        response: Response,
        *,
        email: str,
        password: str,
        first_name: str,
        last_name: str,
        address1: str = "",
        city: str = "",
        state: str = "",
        postal_code: str = "",
        date_of_birth: str = "",
        ssn: str = "",
    ) -> UserRecord:
        """Create the account, its user document and a session.

        Steps are not rolled back: if document creation fails the identity
        account remains.

        Raises:
            IdentityStoreError: Any Appwrite step failed.
        """
        try:
            new_account = self._appwrite.create_account(
                email, password, f"{first_name} {last_name}".strip()
            )
            logger.info("Appwrite account created: %s", new_account["$id"])

            draft = UserRecord(
                id="",
                email=email,
                first_name=first_name,
                last_name=last_name,
                user_id=new_account["$id"],
                username=email.split("@")[0],
                password_hash=self._hasher.hash(password),
                address1=address1,
                city=city,
                state=state,
                postal_code=postal_code,
                date_of_birth=date_of_birth,
                ssn=ssn,
            )
            document = self._appwrite.create_document(
                self._appwrite.user_collection_id, draft.to_document()
            )
            logger.info("User document created: %s", document["$id"])

            session = self._appwrite.create_email_password_session(email, password)
            self._sessions.establish_session(response, session.get("secret", ""))
        except IdentityStoreError as e:
            logger.error("Sign up failed: %s", e)
            raise

        return UserRecord.from_document(document)

    def sign_in(self, response: Response, email: str, password: str) -> UserRecord | None:
        """Authenticate, set the session cookie and return the user.

        Accounts created before user documents existed get a document
        back-filled from the identity account. A failed user lookup is not
        "not found" and never back-fills. Errors are logged and reported as
        ``None``; a session created before the error is deleted again.
        """
        try:
            session = self._appwrite.create_email_password_session(email, password)
        except IdentityStoreError as e:
            logger.error("Sign in failed: %s", e)
            return None

        secret = session.get("secret", "")
        try:
            self._sessions.establish_session(response, secret)

            user = _find_user(self._appwrite, email)
            if user is None:
                user = self._backfill_user(secret, password)
            return user
        except BankingError as e:
            logger.error("Sign in failed: %s", e)
            self._sessions.discard_session(response, secret)
            return None

    def _backfill_user(self, session_secret: str, password: str) -> UserRecord:
        """Create the missing user document for an existing identity account."""
        account = self._appwrite.get_account(session_secret)
        name_parts = (account.get("name") or "").split(" ")
        email = account.get("email") or ""
        draft = UserRecord(
            id="",
            email=email,
            first_name=name_parts[0],
            last_name=" ".join(name_parts[1:]),
            user_id=account.get("$id") or "",
            username=email.split("@")[0],
            password_hash=self._hasher.hash(password),
        )
        document = self._appwrite.create_document(
            self._appwrite.user_collection_id, draft.to_document()
        )
        logger.info("Back-filled user document %s", document["$id"])
        return UserRecord.from_document(document)
