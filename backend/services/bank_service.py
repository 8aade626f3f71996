"""Bank account document creation and queries."""

import logging

from integrations.appwrite_client import AppwriteClient
from integrations.exceptions import IdentityStoreError
from models.bank_account import BankAccountRecord

logger = logging.getLogger(__name__)


class BankService:
    """Read and write BankAccountRecords in the Appwrite bank collection.

    Reads log store failures and return an empty result; writes raise.
    """

    def __init__(self, appwrite: AppwriteClient):
        self._appwrite = appwrite

    def create_bank_account(
        self,
        *,
        user_id: str,
        bank_id: str,
        account_id: str,
        access_token: str,
        funding_source_url: str,
        shareable_id: str,
    ) -> BankAccountRecord:
        """Persist a new bank account document.

        Raises:
            IdentityStoreError: The document could not be created.
        """
        draft = BankAccountRecord(
            id="",
            user_id=user_id,
            bank_id=bank_id,
            account_id=account_id,
            access_token=access_token,
            funding_source_url=funding_source_url,
            shareable_id=shareable_id,
        )
        try:
            document = self._appwrite.create_document(
                self._appwrite.bank_collection_id, draft.to_document()
            )
        except IdentityStoreError as e:
            logger.error("Failed to create bank account for user %s: %s", user_id, e)
            raise
        logger.info("Created bank account %s for user %s", document["$id"], user_id)
        return BankAccountRecord.from_document(document)

    def _list(self, filters: dict[str, str]) -> dict | None:
        try:
            return self._appwrite.list_documents(self._appwrite.bank_collection_id, filters)
        except IdentityStoreError as e:
            logger.warning("Bank lookup %s failed: %s", sorted(filters), e)
            return None

    def find_banks(self, user_id: str) -> list[BankAccountRecord]:
        """Like :meth:`get_banks`, but a store failure raises.

        Raises:
            IdentityStoreError: The bank collection could not be read.
        """
        result = self._appwrite.list_documents(
            self._appwrite.bank_collection_id, {"userId": user_id}
        )
        return [BankAccountRecord.from_document(d) for d in result.get("documents") or []]

    def get_banks(self, user_id: str) -> list[BankAccountRecord]:
        """All bank accounts owned by ``user_id``, in store order."""
        try:
            return self.find_banks(user_id)
        except IdentityStoreError as e:
            logger.warning("Bank lookup for user %s failed: %s", user_id, e)
            return []

    def get_bank(self, document_id: str) -> BankAccountRecord | None:
        result = self._list({"$id": document_id})
        documents = (result or {}).get("documents") or []
        if not documents:
            return None
        return BankAccountRecord.from_document(documents[0])

    def get_bank_by_account_id(self, account_id: str) -> BankAccountRecord | None:
        """The bank account for a Plaid ``account_id``.

        Returns ``None`` unless exactly one document matches; an ambiguous
        match is never resolved arbitrarily.
        """
        result = self._list({"accountId": account_id})
        if result is None or result.get("total") != 1:
            return None
        documents = result.get("documents") or []
        if len(documents) != 1:
            return None
        return BankAccountRecord.from_document(documents[0])
