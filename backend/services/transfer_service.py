"""Transfers between linked bank accounts over Dwolla."""

import logging
from decimal import Decimal

from integrations.dwolla_client import DwollaClient
from integrations.exceptions import NotFoundError, PaymentNetworkError
from models.user import UserRecord
from services.bank_service import BankService
from utils.shareable_id import ShareableIdCipher, get_shareable_id_cipher

logger = logging.getLogger(__name__)


class TransferService:
    """Send money from one of the user's banks to a recipient's shareable id."""

    def __init__(
        self,
        banks: BankService,
        dwolla: DwollaClient,
        cipher: ShareableIdCipher | None = None,
    ):
        self._banks = banks
        self._dwolla = dwolla
        self._cipher = cipher or get_shareable_id_cipher()

    def create_transfer(
        self,
        user: UserRecord,
        source_bank_id: str,
        recipient_shareable_id: str,
        amount: Decimal,
    ) -> str:
        """Create the transfer and return its Dwolla URL.

        Raises:
            NotFoundError: A bank is missing, not owned by ``user``, or has
                no funding source.
            InvalidShareableIdError: The recipient id does not decrypt.
            PaymentNetworkError: Dwolla rejected the transfer.
        """
        source = self._banks.get_bank(source_bank_id)
        if source is None or source.user_id != user.id:
            raise NotFoundError(f"Bank not found: {source_bank_id}")

        receiver_account_id = self._cipher.decrypt(recipient_shareable_id)
        receiver = self._banks.get_bank_by_account_id(receiver_account_id)
        if receiver is None:
            raise NotFoundError("Recipient bank not found")

        for bank in (source, receiver):
            if not bank.funding_source_url:
                raise NotFoundError(f"Bank {bank.id} has no funding source")

        try:
            transfer_url = self._dwolla.create_transfer(
                source_funding_source_url=source.funding_source_url,
                destination_funding_source_url=receiver.funding_source_url,
                amount=f"{amount:.2f}",
            )
        except PaymentNetworkError as e:
            logger.error("Transfer fund failed: %s", e)
            raise

        logger.info("Transfer created from bank %s to bank %s", source.id, receiver.id)
        return transfer_url
