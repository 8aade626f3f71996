"""Account linking: turn a Plaid Link public token into a bank account record.

The flow is a fixed sequence with no retries:

1. exchange the public token for an access token and item id
2. fetch the Item's accounts and take the first one
3. derive the shareable id from the account id
4. persist the bank account (no Dwolla funding source yet)
5. revalidate the home view

Nothing is rolled back; a failure after step 1 leaves the exchanged
token unused.
"""

import logging

from integrations.exceptions import AggregatorError, AggregatorFetchError, BankingError
from integrations.plaid_client import PlaidClient
from models.user import UserRecord
from services.bank_service import BankService
from services.page_cache import PageCache
from utils.shareable_id import ShareableIdCipher, get_shareable_id_cipher

logger = logging.getLogger(__name__)

HOME_PATH = "/"


class AccountLinkingService:
    """Orchestrates Plaid, the bank collection and the page cache."""

    def __init__(
        self,
        plaid: PlaidClient,
        banks: BankService,
        page_cache: PageCache,
        cipher: ShareableIdCipher | None = None,
    ):
        self._plaid = plaid
        self._banks = banks
        self._page_cache = page_cache
        self._cipher = cipher or get_shareable_id_cipher()

    def create_link_token(self, user: UserRecord) -> dict:
        """Create a Link token for ``user``.

        Raises:
            AggregatorError: Plaid refused to create the token.
        """
        try:
            link_token = self._plaid.create_link_token(
                client_user_id=user.id,
                client_name=user.full_name,
            )
        except AggregatorError as e:
            logger.error("Failed to create Plaid link token: %s", e)
            raise
        return {"link_token": link_token}

    def exchange_public_token(self, public_token: str, user: UserRecord) -> dict:
        """Link the first account behind ``public_token`` to ``user``.

        Raises:
            AggregatorExchangeError: The public token was rejected.
            AggregatorFetchError: The accounts could not be fetched, or
                the Item has none.
            IdentityStoreError: The bank account could not be saved.
        """
        try:
            exchange = self._plaid.exchange_public_token(public_token)
            access_token = exchange["access_token"]
            item_id = exchange["item_id"]

            accounts = self._plaid.get_accounts(access_token)
            if not accounts:
                raise AggregatorFetchError(f"Plaid returned no accounts for item {item_id}")
            # Only the first account of an Item is linked.
            account = accounts[0]

            self._banks.create_bank_account(
                user_id=user.id,
                bank_id=item_id,
                account_id=account.id,
                access_token=access_token,
                funding_source_url="",
                shareable_id=self._cipher.encrypt(account.id),
            )

            self._page_cache.revalidate_path(HOME_PATH)
        except BankingError as e:
            logger.error("An error occurred while exchanging public token: %s", e)
            raise

        logger.info("Linked item %s for user %s", item_id, user.id)
        return {"public_token_exchange": "complete"}
