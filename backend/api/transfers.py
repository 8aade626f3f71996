"""Transfer endpoints."""

from fastapi import APIRouter, Depends, HTTPException

from api.dependencies import get_dwolla_client, get_transfer_service, require_user
from api.helpers import http_error
from integrations.dwolla_client import DwollaClient
from integrations.exceptions import BankingError
from models.user import UserRecord
from schemas.bank import TransferRequest, TransferResponse
from services.transfer_service import TransferService

router = APIRouter(prefix="/api/transfers", tags=["transfers"])


@router.post("", response_model=TransferResponse)
def create_transfer(
    body: TransferRequest,
    user: UserRecord = Depends(require_user),
    dwolla: DwollaClient = Depends(get_dwolla_client),
    service: TransferService = Depends(get_transfer_service),
):
    """Send money from one of the user's banks to a recipient's shareable id."""
    if not dwolla.is_configured():
        raise HTTPException(status_code=400, detail="Dwolla is not configured")

    try:
        transfer_url = service.create_transfer(
            user,
            source_bank_id=body.source_bank_id,
            recipient_shareable_id=body.recipient_shareable_id,
            amount=body.amount,
        )
    except BankingError as e:
        raise http_error(e) from e
    return TransferResponse(transfer_url=transfer_url)
