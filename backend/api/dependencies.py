"""FastAPI dependencies wiring collaborators into services.

External clients are constructed once per process (cached) and passed
explicitly to the services; tests replace them through
``app.dependency_overrides``.
"""

from functools import lru_cache

from fastapi import Depends, HTTPException, Request, status

from api.helpers import http_error
from integrations.appwrite_client import AppwriteClient
from integrations.dwolla_client import DwollaClient
from integrations.exceptions import ConfigurationError
from integrations.plaid_client import PlaidClient
from models.user import UserRecord
from services.account_linking_service import AccountLinkingService
from services.bank_service import BankService
from services.page_cache import PageCache
from services.session_manager import SessionManager
from services.transfer_service import TransferService
from services.user_service import UserService
from utils.shareable_id import ShareableIdCipher, get_shareable_id_cipher


@lru_cache
def get_appwrite_client() -> AppwriteClient:
    return AppwriteClient()


@lru_cache
def get_plaid_client() -> PlaidClient:
    return PlaidClient()


@lru_cache
def get_dwolla_client() -> DwollaClient:
    return DwollaClient()


def get_cipher() -> ShareableIdCipher:
    try:
        return get_shareable_id_cipher()
    except ConfigurationError as e:
        raise http_error(e) from e


def get_page_cache(request: Request) -> PageCache:
    return request.app.state.page_cache


def get_session_manager(
    appwrite: AppwriteClient = Depends(get_appwrite_client),
) -> SessionManager:
    return SessionManager(appwrite)


def get_user_service(
    appwrite: AppwriteClient = Depends(get_appwrite_client),
    sessions: SessionManager = Depends(get_session_manager),
) -> UserService:
    return UserService(appwrite, sessions)


def get_bank_service(
    appwrite: AppwriteClient = Depends(get_appwrite_client),
) -> BankService:
    return BankService(appwrite)


def get_account_linking_service(
    plaid: PlaidClient = Depends(get_plaid_client),
    banks: BankService = Depends(get_bank_service),
    page_cache: PageCache = Depends(get_page_cache),
    cipher: ShareableIdCipher = Depends(get_cipher),
) -> AccountLinkingService:
    return AccountLinkingService(plaid, banks, page_cache, cipher)


def get_transfer_service(
    banks: BankService = Depends(get_bank_service),
    dwolla: DwollaClient = Depends(get_dwolla_client),
    cipher: ShareableIdCipher = Depends(get_cipher),
) -> TransferService:
    return TransferService(banks, dwolla, cipher)


def get_current_user(
    request: Request,
    sessions: SessionManager = Depends(get_session_manager),
) -> UserRecord | None:
    """The logged-in user, or ``None`` when there is no valid session."""
    return sessions.get_current_user(request)


def require_user(
    user: UserRecord | None = Depends(get_current_user),
) -> UserRecord:
    """Like :func:`get_current_user` but answers 401 when logged out."""
    if user is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
        )
    return user
