"""Plaid API client.

Wraps the plaid-python SDK for the bank-linking flow: creating Link
tokens, exchanging a Link ``public_token`` for a durable access token,
listing the accounts behind an Item, and minting processor tokens for
Dwolla funding sources.
"""

import json
import logging
from dataclasses import dataclass

from plaid import ApiException, Environment
from plaid.api.plaid_api import PlaidApi
from plaid.api_client import ApiClient
from plaid.configuration import Configuration
from plaid.model.accounts_get_request import AccountsGetRequest
from plaid.model.country_code import CountryCode
from plaid.model.item_public_token_exchange_request import ItemPublicTokenExchangeRequest
from plaid.model.link_token_create_request import LinkTokenCreateRequest
from plaid.model.link_token_create_request_user import LinkTokenCreateRequestUser
from plaid.model.processor_token_create_request import ProcessorTokenCreateRequest
from plaid.model.products import Products

from config import settings
from integrations.exceptions import (
    AggregatorError,
    AggregatorExchangeError,
    AggregatorFetchError,
)

logger = logging.getLogger(__name__)

# Map PLAID_ENVIRONMENT setting to SDK host URLs.
# Plaid's Development environment is deprecated; only sandbox and production
# are supported.
_ENVIRONMENT_MAP: dict[str, str] = {
    "sandbox": Environment.Sandbox,
    "production": Environment.Production,
}


@dataclass
class PlaidAccount:
    """An account returned by ``/accounts/get``."""

    id: str


class PlaidClient:
    """Wrapper around the Plaid API."""

    def __init__(
        self,
        client_id: str | None = None,
        secret: str | None = None,
        environment: str | None = None,
    ):
        self._client_id = client_id or settings.PLAID_CLIENT_ID
        self._secret = secret or settings.PLAID_SECRET
        self._environment = environment or settings.PLAID_ENVIRONMENT

        # Lazily created on first use
        self._api: PlaidApi | None = None

    def _get_api(self) -> PlaidApi:
        """Return (and cache) a PlaidApi instance."""
        if self._api is None:
            env_key = self._environment.lower()
            host = _ENVIRONMENT_MAP.get(env_key)
            if host is None:
                logger.warning(
                    "Unknown PLAID_ENVIRONMENT=%r, falling back to sandbox. "
                    "Valid values: sandbox, production",
                    self._environment,
                )
                host = Environment.Sandbox
            logger.info(
                "Plaid API client: environment=%s, host=%s, client_id=<configured>",
                env_key,
                host,
            )
            configuration = Configuration(
                host=host,
                api_key={
                    "clientId": self._client_id,
                    "secret": self._secret,
                },
            )
            api_client = ApiClient(configuration)
            self._api = PlaidApi(api_client)
        return self._api

    def is_configured(self) -> bool:
        """Check if Plaid credentials are configured."""
        return bool(self._client_id) and bool(self._secret)

    # ------------------------------------------------------------------
    # Link Token & Token Exchange
    # ------------------------------------------------------------------

    def create_link_token(self, client_user_id: str, client_name: str) -> str:
        """Create a Plaid Link token for the browser-based linking widget.

        Args:
            client_user_id: Stable id of the user starting Link.
            client_name: Display name shown inside Link.

        Returns:
            The link_token string to be passed to Plaid Link.
        """
        api = self._get_api()
        request = LinkTokenCreateRequest(
            user=LinkTokenCreateRequestUser(client_user_id=client_user_id),
            client_name=client_name,
            products=[Products(p) for p in settings.split_list(settings.PLAID_PRODUCTS)],
            country_codes=[CountryCode(c) for c in settings.split_list(settings.PLAID_COUNTRY_CODES)],
            language="en",
        )
        try:
            response = api.link_token_create(request)
        except ApiException as e:
            raise AggregatorError(self._error_message(e, "link token create"), status_code=e.status) from e
        except Exception as e:
            raise AggregatorError(f"Plaid link token create failed: {e}") from e
        return response["link_token"]

    def exchange_public_token(self, public_token: str) -> dict:
        """Exchange a Plaid Link public_token for a permanent access_token.

        Returns:
            Dict with ``access_token`` and ``item_id``.

        Raises:
            AggregatorExchangeError: Plaid rejected the public token.
            AggregatorError: Plaid could not be reached.
        """
        api = self._get_api()
        request = ItemPublicTokenExchangeRequest(public_token=public_token)
        try:
            response = api.item_public_token_exchange(request)
        except ApiException as e:
            raise AggregatorExchangeError(
                self._error_message(e, "public token exchange"), status_code=e.status
            ) from e
        except Exception as e:
            raise AggregatorError(f"Plaid public token exchange failed: {e}") from e
        return {
            "access_token": response["access_token"],
            "item_id": response["item_id"],
        }

    # ------------------------------------------------------------------
    # Accounts
    # ------------------------------------------------------------------

    def get_accounts(self, access_token: str) -> list[PlaidAccount]:
        """Return the accounts behind an Item, in the order Plaid lists them.

        Raises:
            AggregatorFetchError: Plaid rejected the access token.
        """
        api = self._get_api()
        try:
            response = api.accounts_get(AccountsGetRequest(access_token=access_token))
        except ApiException as e:
            raise AggregatorFetchError(
                self._error_message(e, "accounts get"), status_code=e.status
            ) from e
        except Exception as e:
            raise AggregatorFetchError(f"Plaid accounts get failed: {e}") from e

        accounts: list[PlaidAccount] = []
        for acct in response.get("accounts", []) or []:
            acct_id = acct.get("account_id", "")
            if not acct_id:
                continue
            accounts.append(PlaidAccount(id=acct_id))
        return accounts

    def create_processor_token(
        self, access_token: str, account_id: str, processor: str = "dwolla"
    ) -> str:
        """Create a processor token that lets Dwolla debit the account."""
        api = self._get_api()
        request = ProcessorTokenCreateRequest(
            access_token=access_token,
            account_id=account_id,
            processor=processor,
        )
        try:
            response = api.processor_token_create(request)
        except ApiException as e:
            raise AggregatorError(
                self._error_message(e, "processor token create"), status_code=e.status
            ) from e
        except Exception as e:
            raise AggregatorError(f"Plaid processor token create failed: {e}") from e
        return response["processor_token"]

    # ------------------------------------------------------------------
    # Error mapping
    # ------------------------------------------------------------------

    @staticmethod
    def _error_message(exc: ApiException, operation: str) -> str:
        """Build a readable message from a Plaid ApiException body."""
        message = f"Plaid {operation} failed: {exc.reason or exc}"
        try:
            body = json.loads(exc.body) if exc.body else {}
        except (TypeError, ValueError):
            return message
        error_code = body.get("error_code", "")
        error_message = body.get("error_message", "")
        if error_message:
            message = f"Plaid {operation} failed ({error_code}): {error_message}"
        return message
