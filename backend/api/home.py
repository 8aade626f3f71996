"""Home view data endpoint, cached until a mutation revalidates it."""

import logging

from fastapi import APIRouter, Depends

from api.dependencies import get_bank_service, get_page_cache, require_user
from integrations.exceptions import IdentityStoreError
from models.user import UserRecord
from schemas.bank import BankAccountResponse, HomeResponse
from schemas.user import UserResponse
from services.account_linking_service import HOME_PATH
from services.bank_service import BankService
from services.page_cache import PageCache

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/home", tags=["home"])


@router.get("", response_model=HomeResponse)
def get_home(
    user: UserRecord = Depends(require_user),
    banks: BankService = Depends(get_bank_service),
    page_cache: PageCache = Depends(get_page_cache),
):
    """Return the user and their linked banks for the home view.

    When the bank collection cannot be read the view is served without
    banks and is not cached, so the next request reads the store again.
    """
    cached = page_cache.get(HOME_PATH, user.id)
    if cached is not None:
        return cached

    try:
        accounts = banks.find_banks(user.id)
    except IdentityStoreError as e:
        logger.warning("Home view served without banks for user %s: %s", user.id, e)
        return _home_payload(user, [])

    payload = _home_payload(user, accounts)
    page_cache.set(HOME_PATH, user.id, payload)
    return payload


def _home_payload(user: UserRecord, accounts) -> HomeResponse:
    return HomeResponse(
        user=UserResponse.model_validate(user),
        banks=[BankAccountResponse.model_validate(b) for b in accounts],
        total_banks=len(accounts),
    )
