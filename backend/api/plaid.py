"""Plaid Link API endpoints.

Provides the server-side endpoints for the Plaid Link browser-based
flow: creating link tokens and exchanging public tokens into linked
bank accounts.
"""

import logging

from fastapi import APIRouter, Depends, HTTPException

from api.dependencies import get_account_linking_service, get_plaid_client, require_user
from api.helpers import http_error
from integrations.exceptions import BankingError
from integrations.plaid_client import PlaidClient
from models.user import UserRecord
from schemas.bank import ExchangeTokenRequest, ExchangeTokenResponse, LinkTokenResponse
from services.account_linking_service import AccountLinkingService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/plaid", tags=["plaid"])


@router.post("/link-token", response_model=LinkTokenResponse)
def create_link_token(
    user: UserRecord = Depends(require_user),
    plaid: PlaidClient = Depends(get_plaid_client),
    service: AccountLinkingService = Depends(get_account_linking_service),
):
    """Create a Plaid Link token for the frontend."""
    if not plaid.is_configured():
        raise HTTPException(status_code=400, detail="Plaid is not configured")

    try:
        return service.create_link_token(user)
    except BankingError as e:
        raise http_error(e) from e


@router.post("/exchange-token", response_model=ExchangeTokenResponse)
def exchange_token(
    body: ExchangeTokenRequest,
    user: UserRecord = Depends(require_user),
    plaid: PlaidClient = Depends(get_plaid_client),
    service: AccountLinkingService = Depends(get_account_linking_service),
):
    """Exchange a Plaid Link public_token and store the linked account."""
    if not plaid.is_configured():
        raise HTTPException(status_code=400, detail="Plaid is not configured")

    try:
        return service.exchange_public_token(body.public_token, user)
    except BankingError as e:
        raise http_error(e) from e
