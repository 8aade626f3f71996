"""Authentication endpoints: sign-up, sign-in, logout and current user."""

import logging

from fastapi import APIRouter, Depends, HTTPException, Request, Response, status

from api.dependencies import (
    get_appwrite_client,
    get_session_manager,
    get_user_service,
    require_user,
)
from api.helpers import http_error
from integrations.appwrite_client import AppwriteClient
from integrations.exceptions import BankingError
from models.user import UserRecord
from schemas.user import SignInRequest, SignUpRequest, UserResponse
from services.session_manager import SessionManager
from services.user_service import UserService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/auth", tags=["auth"])


def _require_appwrite(appwrite: AppwriteClient) -> None:
    if not appwrite.is_configured():
        raise HTTPException(status_code=400, detail="Appwrite is not configured")


@router.post("/sign-up", response_model=UserResponse)
def sign_up(
    body: SignUpRequest,
    response: Response,
    appwrite: AppwriteClient = Depends(get_appwrite_client),
    service: UserService = Depends(get_user_service),
):
    """Create an account, its user document and a session cookie."""
    _require_appwrite(appwrite)
    try:
        user = service.sign_up(response, **body.model_dump())
    except BankingError as e:
        raise http_error(e) from e
    return UserResponse.model_validate(user)


@router.post("/sign-in", response_model=UserResponse)
def sign_in(
    body: SignInRequest,
    response: Response,
    appwrite: AppwriteClient = Depends(get_appwrite_client),
    service: UserService = Depends(get_user_service),
):
    """Authenticate and set the session cookie."""
    _require_appwrite(appwrite)
    user = service.sign_in(response, body.email, body.password)
    if user is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid email or password",
        )
    return UserResponse.model_validate(user)


@router.post("/logout")
def logout(
    request: Request,
    response: Response,
    sessions: SessionManager = Depends(get_session_manager),
):
    """Clear the session cookie and invalidate the session."""
    sessions.clear_session(request, response)
    return {"status": "ok"}


@router.get("/me", response_model=UserResponse)
def read_current_user(user: UserRecord = Depends(require_user)):
    return UserResponse.model_validate(user)
