"""Linked bank account endpoints."""

from fastapi import APIRouter, Depends, HTTPException

from api.dependencies import get_bank_service, require_user
from models.user import UserRecord
from schemas.bank import BankAccountResponse
from services.bank_service import BankService

router = APIRouter(prefix="/api/banks", tags=["banks"])


@router.get("", response_model=list[BankAccountResponse])
def list_banks(
    user: UserRecord = Depends(require_user),
    service: BankService = Depends(get_bank_service),
):
    """List the current user's linked bank accounts."""
    return [BankAccountResponse.model_validate(b) for b in service.get_banks(user.id)]


@router.get("/by-account/{account_id}", response_model=BankAccountResponse)
def get_bank_by_account_id(
    account_id: str,
    user: UserRecord = Depends(require_user),
    service: BankService = Depends(get_bank_service),
):
    """Get the bank linked to a Plaid account id (must be unique)."""
    bank = service.get_bank_by_account_id(account_id)
    if bank is None or bank.user_id != user.id:
        raise HTTPException(status_code=404, detail=f"Bank not found for account: {account_id}")
    return BankAccountResponse.model_validate(bank)


@router.get("/{document_id}", response_model=BankAccountResponse)
def get_bank(
    document_id: str,
    user: UserRecord = Depends(require_user),
    service: BankService = Depends(get_bank_service),
):
    bank = service.get_bank(document_id)
    if bank is None or bank.user_id != user.id:
        raise HTTPException(status_code=404, detail=f"Bank not found: {document_id}")
    return BankAccountResponse.model_validate(bank)
