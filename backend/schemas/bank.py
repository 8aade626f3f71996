"""Pydantic schemas for bank linking, bank queries and transfers."""

from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field

from schemas.user import UserResponse


class BankAccountResponse(BaseModel):
    """Public view of a linked bank account (no access token)."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    user_id: str
    bank_id: str
    account_id: str
    funding_source_url: str
    shareable_id: str


class LinkTokenResponse(BaseModel):
    link_token: str


class ExchangeTokenRequest(BaseModel):
    public_token: str


class ExchangeTokenResponse(BaseModel):
    public_token_exchange: str


class TransferRequest(BaseModel):
    source_bank_id: str
    recipient_shareable_id: str
    amount: Decimal = Field(gt=0, decimal_places=2)


class TransferResponse(BaseModel):
    transfer_url: str


class HomeResponse(BaseModel):
    """Data behind the home view."""

    user: UserResponse
    banks: list[BankAccountResponse]
    total_banks: int
