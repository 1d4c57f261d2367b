# healthbuddy/api/routers/auth.py
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from healthbuddy.core.config import get_db
from healthbuddy.core.security import (
    create_access_token,
    create_refresh_token,
    get_current_user,
    load_user,
    verify_refresh_token,
)
from healthbuddy.services.user_auth import user_auth_service
from healthbuddy.models.user_auth import UserAuth
from healthbuddy.schemas.user_auth import (
    SignUpRequest,
    LoginRequest,
    TokenResponse,
    RefreshTokenRequest,
    UserAuthOut,
    SuccessResponse,
)

router = APIRouter(prefix="/auth", tags=["Authentication"])


def _issue_tokens(user: UserAuth) -> TokenResponse:
    return TokenResponse(
        access_token=create_access_token(data={"sub": str(user.id)}),
        refresh_token=create_refresh_token(data={"sub": str(user.id)}),
        user=UserAuthOut.model_validate(user),
    )


# =====================================================================
# PUBLIC ENDPOINTS - No authentication required
# =====================================================================

@router.post(
    "/sign-up",
    response_model=UserAuthOut,
    status_code=status.HTTP_201_CREATED,
    summary="Create an account"
)
def sign_up(data: SignUpRequest, db: Session = Depends(get_db)):
    """
    Register a new account and its profile.

    - **email**: Valid email address (required)
    - **password**: 6 to 72 characters (required)
    - **name**: Display name (optional)

    The profile starts with `has_seen_welcome = false`.
    """
    return user_auth_service.sign_up(db, data)


@router.post("/sign-in", response_model=TokenResponse, summary="Sign in with password")
def sign_in(login_data: LoginRequest, db: Session = Depends(get_db)):
    """
    Authenticate and receive access and refresh tokens.
    """
    user = user_auth_service.authenticate(db, login_data)
    return _issue_tokens(user)


@router.post("/refresh", response_model=TokenResponse, summary="Refresh access token")
def refresh_token(refresh_data: RefreshTokenRequest, db: Session = Depends(get_db)):
    """
    Get a new token pair using a refresh token.
    """
    user_id = verify_refresh_token(refresh_data.refresh_token)
    user = load_user(db, user_id)
    return _issue_tokens(user)


# =====================================================================
# AUTHENTICATED ENDPOINTS
# =====================================================================

@router.post("/sign-out", response_model=SuccessResponse, summary="Sign out")
def sign_out(current_user: UserAuth = Depends(get_current_user)):
    """
    Acknowledge sign-out. Tokens are stateless; the client discards them.
    """
    return SuccessResponse(message="Signed out")


@router.get("/session", response_model=UserAuthOut, summary="Get current session user")
def get_session(current_user: UserAuth = Depends(get_current_user)):
    return current_user
