"""Appwrite API client.

Wraps the ``appwrite`` server SDK for the two roles the app needs:

- an *admin* client authenticated with the project API key, used to
  create accounts, sessions and documents;
- a *session* client authenticated with a user's session secret (taken
  from the session cookie), used to resolve and delete that session.

Every SDK failure is re-raised as :class:`IdentityStoreError`.
"""

import logging
from typing import Any, Callable

from appwrite.client import Client
from appwrite.exception import AppwriteException
from appwrite.id import ID
from appwrite.models import AppwriteModel, Document, DocumentList
from appwrite.query import Query
from appwrite.services.account import Account
from appwrite.services.databases import Databases

from config import settings
from integrations.exceptions import IdentityStoreError

logger = logging.getLogger(__name__)


class AppwriteClient:
    """Wrapper around the Appwrite Account and Databases services."""

    def __init__(
        self,
        endpoint: str | None = None,
        project_id: str | None = None,
        api_key: str | None = None,
        database_id: str | None = None,
        user_collection_id: str | None = None,
        bank_collection_id: str | None = None,
    ):
        self._endpoint = endpoint or settings.APPWRITE_ENDPOINT
        self._project_id = project_id or settings.APPWRITE_PROJECT_ID
        self._api_key = api_key or settings.APPWRITE_API_KEY
        self._database_id = database_id or settings.APPWRITE_DATABASE_ID
        self.user_collection_id = user_collection_id or settings.APPWRITE_USER_COLLECTION_ID
        self.bank_collection_id = bank_collection_id or settings.APPWRITE_BANK_COLLECTION_ID

        # Lazily created on first use
        self._admin: Client | None = None

    def is_configured(self) -> bool:
        """Check if the project, API key and collections are configured."""
        return all((
            self._project_id,
            self._api_key,
            self._database_id,
            self.user_collection_id,
            self.bank_collection_id,
        ))

    def _get_admin_client(self) -> Client:
        """Return (and cache) an API-key authenticated client."""
        if self._admin is None:
            client = Client()
            client.set_endpoint(self._endpoint)
            client.set_project(self._project_id)
            client.set_key(self._api_key)
            self._admin = client
            logger.info(
                "Appwrite admin client: endpoint=%s, project=%s, key=<configured>",
                self._endpoint,
                self._project_id,
            )
        return self._admin

    def _get_session_client(self, session_secret: str) -> Client:
        """Return a new client scoped to a single user session."""
        client = Client()
        client.set_endpoint(self._endpoint)
        client.set_project(self._project_id)
        client.set_session(session_secret)
        return client

    @staticmethod
    def _to_dict(result: Any) -> Any:
        """Flatten SDK response models into the plain dicts callers consume.

        Documents keep their custom attributes at the top level next to
        ``$id``, the same shape as the raw REST response.
        """
        if isinstance(result, Document):
            return {**(result.data or {}), "$id": result.id}
        if isinstance(result, DocumentList):
            return {
                "total": int(result.total),
                "documents": [AppwriteClient._to_dict(d) for d in result.documents],
            }
        if isinstance(result, AppwriteModel):
            return result.to_dict()
        return result

    @staticmethod
    def _call(operation: str, fn: Callable[..., Any], *args, **kwargs) -> Any:
        """Invoke an SDK method, mapping AppwriteException to IdentityStoreError."""
        try:
            result = fn(*args, **kwargs)
        except AppwriteException as e:
            message = f"Appwrite {operation} failed: {e.message}"
            raise IdentityStoreError(message, status_code=e.code or None) from e
        return AppwriteClient._to_dict(result)

    # ------------------------------------------------------------------
    # Accounts & sessions
    # ------------------------------------------------------------------

    def create_account(self, email: str, password: str, name: str) -> dict:
        """Create an identity account and return it."""
        account = Account(self._get_admin_client())
        return self._call(
            "account create",
            account.create,
            user_id=ID.unique(),
            email=email,
            password=password,
            name=name,
        )

    def create_email_password_session(self, email: str, password: str) -> dict:
        """Authenticate and return the session (including its ``secret``)."""
        account = Account(self._get_admin_client())
        return self._call(
            "session create",
            account.create_email_password_session,
            email=email,
            password=password,
        )

    def get_account(self, session_secret: str) -> dict:
        """Return the identity account that owns ``session_secret``."""
        account = Account(self._get_session_client(session_secret))
        return self._call("account get", account.get)

    def delete_session(self, session_secret: str, session_id: str = "current") -> None:
        """Invalidate a session server-side."""
        account = Account(self._get_session_client(session_secret))
        self._call("session delete", account.delete_session, session_id=session_id)

    # ------------------------------------------------------------------
    # Documents
    # ------------------------------------------------------------------

    def create_document(self, collection_id: str, data: dict) -> dict:
        """Create a document with a store-generated id and return it."""
        databases = Databases(self._get_admin_client())
        return self._call(
            "document create",
            databases.create_document,
            database_id=self._database_id,
            collection_id=collection_id,
            document_id=ID.unique(),
            data=data,
        )

    def list_documents(self, collection_id: str, filters: dict[str, str]) -> dict:
        """List documents matching every ``attribute == value`` filter.

        Returns:
            The raw list response: ``{"total": int, "documents": [...]}``.
        """
        databases = Databases(self._get_admin_client())
        queries = [Query.equal(attribute, [value]) for attribute, value in filters.items()]
        return self._call(
            "document list",
            databases.list_documents,
            database_id=self._database_id,
            collection_id=collection_id,
            queries=queries,
        )
