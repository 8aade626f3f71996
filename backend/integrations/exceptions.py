"""Typed exception hierarchy for banking operations.

Collaborator failures (Appwrite, Plaid, Dwolla) are raised as
``ExternalServiceError`` subclasses so callers can tell "the operation
failed" apart from "nothing was found" (``NotFoundError``).
"""


class BankingError(Exception):
    """Base exception for all application errors."""


class ExternalServiceError(BankingError):
    """A call to an external collaborator failed.

    Carries the service name and, when the collaborator reported one,
    the HTTP status code.
    """

    def __init__(
        self,
        message: str,
        service_name: str = "",
        status_code: int | None = None,
    ):
        self.service_name = service_name
        self.status_code = status_code
        super().__init__(message)


class IdentityStoreError(ExternalServiceError):
    """Appwrite account, session, or document call failed."""

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message, service_name="Appwrite", status_code=status_code)


class AggregatorError(ExternalServiceError):
    """Plaid call failed."""

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message, service_name="Plaid", status_code=status_code)


class AggregatorExchangeError(AggregatorError):
    """Public token was rejected (invalid or expired)."""

    pass


class AggregatorFetchError(AggregatorError):
    """Access token was rejected or no accounts came back."""

    pass


class PaymentNetworkError(ExternalServiceError):
    """Dwolla call failed."""

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message, service_name="Dwolla", status_code=status_code)


class NotFoundError(BankingError):
    """An expected single document is absent or ambiguous."""

    pass


class ConfigurationError(BankingError):
    """A required credential or setting is missing."""

    pass


class InvalidShareableIdError(BankingError):
    """A shareable id could not be decrypted (wrong key or tampered)."""

    pass
