"""Shareable account identifiers.

A shareable id is the Plaid ``account_id`` encrypted with AES-SIV, so it
can be handed to other users (e.g. as a transfer recipient) without
exposing the raw id. AES-SIV is deterministic: the same account id
always yields the same shareable id, which keeps ids stable across
links and lets the receiver side decrypt and look the account up.
"""

import base64
import binascii
import logging
from functools import lru_cache

from cryptography.exceptions import InvalidTag
from cryptography.hazmat.primitives.ciphers.aead import AESSIV

from config import settings
from integrations.exceptions import ConfigurationError, InvalidShareableIdError

logger = logging.getLogger(__name__)

_KEY_BIT_LENGTH = 512  # AES-256-SIV
_ASSOCIATED_DATA = [b"shareable-account-id"]


def _b64encode(data: bytes) -> str:
    return base64.urlsafe_b64encode(data).rstrip(b"=").decode("ascii")


def _b64decode(text: str) -> bytes:
    padded = text + "=" * (-len(text) % 4)
    return base64.urlsafe_b64decode(padded.encode("ascii"))


class ShareableIdCipher:
    """Deterministic, reversible transform between account ids and shareable ids."""

    def __init__(self, key: bytes):
        try:
            self._aead = AESSIV(key)
        except ValueError as e:
            raise ConfigurationError(f"Invalid SHAREABLE_ID_KEY: {e}") from e

    @staticmethod
    def generate_key() -> str:
        """Return a new urlsafe-base64 key suitable for ``SHAREABLE_ID_KEY``."""
        return _b64encode(AESSIV.generate_key(bit_length=_KEY_BIT_LENGTH))

    @classmethod
    def from_encoded_key(cls, encoded_key: str) -> "ShareableIdCipher":
        try:
            key = _b64decode(encoded_key.strip())
        except (binascii.Error, ValueError) as e:
            raise ConfigurationError("SHAREABLE_ID_KEY is not valid base64") from e
        return cls(key)

    def encrypt(self, account_id: str) -> str:
        """Encrypt an account id into a urlsafe shareable id."""
        ciphertext = self._aead.encrypt(account_id.encode("utf-8"), _ASSOCIATED_DATA)
        return _b64encode(ciphertext)

    def decrypt(self, shareable_id: str) -> str:
        """Recover the account id from a shareable id.

        Raises:
            InvalidShareableIdError: Malformed, tampered, or encrypted with
                a different key.
        """
        try:
            ciphertext = _b64decode(shareable_id)
            return self._aead.decrypt(ciphertext, _ASSOCIATED_DATA).decode("utf-8")
        except (InvalidTag, binascii.Error, ValueError, UnicodeError) as e:
            raise InvalidShareableIdError("Invalid shareable id") from e


def _resolve_key() -> str:
    """Determine the key to use.

    Order: configured ``SHAREABLE_ID_KEY`` (env, .env or keychain), then a
    freshly generated key persisted to the keychain. Outside production an
    ephemeral key is used as a last resort.

    Raises ``ConfigurationError`` in production when no key can be
    configured or persisted.
    """
    if settings.SHAREABLE_ID_KEY:
        return settings.SHAREABLE_ID_KEY

    key = ShareableIdCipher.generate_key()
    from services.credential_manager import set_credential

    if set_credential("SHAREABLE_ID_KEY", key):
        logger.info("Generated new shareable id key and stored in keychain")
        return key

    if settings.is_production:
        raise ConfigurationError(
            "SHAREABLE_ID_KEY is not configured and could not be stored in the keychain"
        )
    logger.warning(
        "Could not store shareable id key in keychain; using an ephemeral key. "
        "Shareable ids will not survive a restart."
    )
    return key


@lru_cache
def get_shareable_id_cipher() -> ShareableIdCipher:
    """Get or create the process-wide cipher (cached)."""
    return ShareableIdCipher.from_encoded_key(_resolve_key())
