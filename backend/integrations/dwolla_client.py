"""Dwolla API client.

Wraps the dwollav2 SDK for customer, funding-source and transfer
creation. Dwolla answers resource creation with ``201 Created`` and a
``Location`` header; those URLs are what the rest of the app stores.
"""

import logging

import dwollav2

from config import settings
from integrations.exceptions import ConfigurationError, PaymentNetworkError

logger = logging.getLogger(__name__)

_VALID_ENVIRONMENTS = ("sandbox", "production")


def resolve_environment(
    value: str | None = None,
    *,
    production: bool | None = None,
    throw_on_missing: bool = False,
) -> str:
    """Resolve the Dwolla environment, never silently choosing production.

    Args:
        value: Raw environment value. Defaults to ``DWOLLA_ENVIRONMENT``,
            then the legacy ``DWOLLA_ENV``.
        production: Whether the app runs in production. Defaults to
            ``settings.is_production``.
        throw_on_missing: Raise instead of falling back when running in
            production.

    Returns:
        ``"sandbox"`` or ``"production"``.

    Raises:
        ConfigurationError: The value is missing/invalid, the app runs in
            production and ``throw_on_missing`` is set.
    """
    if value is None:
        value = settings.DWOLLA_ENVIRONMENT.strip() or settings.DWOLLA_ENV.strip()
    if production is None:
        production = settings.is_production

    env = value.strip().lower()
    if env in _VALID_ENVIRONMENTS:
        return env
    if production and throw_on_missing:
        raise ConfigurationError(
            "Dwolla environment should either be set to `sandbox` or `production`"
        )

    logger.warning(
        "DWOLLA_ENVIRONMENT not set or invalid (got: %r). Defaulting to sandbox.",
        value,
    )
    return "sandbox"


class DwollaClient:
    """Wrapper around the Dwolla API.

    Construct one per process (see ``api.dependencies``) and pass it to
    the services that need it.
    """

    def __init__(
        self,
        key: str | None = None,
        secret: str | None = None,
        environment: str | None = None,
        throw_on_missing: bool = False,
    ):
        self._key = key or settings.DWOLLA_KEY
        self._secret = secret or settings.DWOLLA_SECRET
        self._environment = resolve_environment(environment, throw_on_missing=throw_on_missing)

        if (not self._key or not self._secret) and settings.is_production and throw_on_missing:
            raise ConfigurationError("DWOLLA_KEY and DWOLLA_SECRET must be set in production")

        # Lazily created on first use
        self._client: dwollav2.Client | None = None

    @property
    def environment(self) -> str:
        return self._environment

    def is_configured(self) -> bool:
        """Check if Dwolla credentials are configured."""
        return bool(self._key) and bool(self._secret)

    def _get_client(self) -> dwollav2.Client:
        """Return (and cache) a dwollav2.Client instance."""
        if self._client is None:
            logger.info("Dwolla API client: environment=%s, key=<configured>", self._environment)
            self._client = dwollav2.Client(
                key=self._key,
                secret=self._secret,
                environment=self._environment,
            )
        return self._client

    def _post(self, operation: str, path: str, body: dict | None = None):
        """POST with a fresh application token, mapping SDK errors."""
        try:
            token = self._get_client().Auth.client()
            if body is None:
                return token.post(path)
            return token.post(path, body)
        except dwollav2.Error as e:
            logger.error("%s failed: %s", operation, e)
            raise PaymentNetworkError(
                f"Dwolla {operation} failed: {e}",
                status_code=getattr(e, "status", None),
            ) from e
        except Exception as e:
            logger.error("%s failed: %s", operation, e)
            raise PaymentNetworkError(f"Dwolla {operation} failed: {e}") from e

    # ------------------------------------------------------------------
    # Customers & funding sources
    # ------------------------------------------------------------------

    def create_customer(self, customer: dict) -> str:
        """Create a Dwolla customer and return its resource URL."""
        res = self._post("customer create", "customers", customer)
        return res.headers["location"]

    def create_on_demand_authorization(self) -> dict:
        """Create an on-demand authorization and return its ``_links``."""
        res = self._post("on-demand authorization create", "on-demand-authorizations")
        return res.body["_links"]

    def create_funding_source(
        self,
        customer_id: str,
        funding_source_name: str,
        plaid_token: str,
        links: dict | None = None,
    ) -> str:
        """Attach a bank (via Plaid processor token) to a customer."""
        body: dict = {
            "name": funding_source_name,
            "plaidToken": plaid_token,
        }
        if links:
            body["_links"] = links
        res = self._post(
            "funding source create",
            f"customers/{customer_id}/funding-sources",
            body,
        )
        return res.headers["location"]

    def add_funding_source(
        self,
        dwolla_customer_id: str,
        processor_token: str,
        bank_name: str,
    ) -> str:
        """Authorize on demand, then create the funding source.

        Returns:
            The funding source URL.
        """
        links = self.create_on_demand_authorization()
        return self.create_funding_source(
            customer_id=dwolla_customer_id,
            funding_source_name=bank_name,
            plaid_token=processor_token,
            links=links,
        )

    # ------------------------------------------------------------------
    # Transfers
    # ------------------------------------------------------------------

    def create_transfer(
        self,
        source_funding_source_url: str,
        destination_funding_source_url: str,
        amount: str,
    ) -> str:
        """Move ``amount`` USD between two funding sources.

        Returns:
            The transfer URL.
        """
        body = {
            "_links": {
                "source": {"href": source_funding_source_url},
                "destination": {"href": destination_funding_source_url},
            },
            "amount": {"currency": "USD", "value": amount},
        }
        res = self._post("transfer create", "transfers", body)
        return res.headers["location"]
