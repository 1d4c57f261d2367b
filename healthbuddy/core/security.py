# healthbuddy/core/security.py
from datetime import datetime, timedelta, timezone
from uuid import UUID

from jose import JWTError, jwt
from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy.orm import Session

from healthbuddy.core.config import settings, get_db
from healthbuddy.crud.user_auth import crud_user_auth
from healthbuddy.models.user_auth import UserAuth


# =====================================================================
# JWT TOKEN CONFIGURATION
# =====================================================================

security = HTTPBearer()


# =====================================================================
# TOKEN CREATION
# =====================================================================

def create_access_token(data: dict) -> str:
    """
    Create JWT access token.

    Args:
        data: Dictionary containing user data (typically {"sub": user_id})

    Returns:
        Encoded JWT access token
    """
    to_encode = data.copy()
    expire = datetime.now(timezone.utc) + timedelta(
        minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES
    )
    to_encode.update({"exp": expire, "type": "access"})
    return jwt.encode(to_encode, settings.SECRET_KEY, algorithm=settings.ALGORITHM)


def create_refresh_token(data: dict) -> str:
    """Create JWT refresh token."""
    to_encode = data.copy()
    expire = datetime.now(timezone.utc) + timedelta(
        days=settings.REFRESH_TOKEN_EXPIRE_DAYS
    )
    to_encode.update({"exp": expire, "type": "refresh"})
    return jwt.encode(
        to_encode, settings.REFRESH_SECRET_KEY, algorithm=settings.ALGORITHM
    )


# =====================================================================
# TOKEN VERIFICATION
# =====================================================================

def verify_token(token: str, secret_key: str, token_type: str = "access") -> str:
    """
    Verify JWT token and return user_id.

    Args:
        token: JWT token string
        secret_key: Secret key for decoding
        token_type: Type of token ("access" or "refresh")

    Returns:
        User ID from token

    Raises:
        HTTPException: If token is invalid or expired
    """
    credentials_exception = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Could not validate credentials",
        headers={"WWW-Authenticate": "Bearer"},
    )

    try:
        payload = jwt.decode(token, secret_key, algorithms=[settings.ALGORITHM])
    except JWTError:
        raise credentials_exception

    user_id = payload.get("sub")
    if user_id is None:
        raise credentials_exception

    if payload.get("type") != token_type:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=f"Invalid token type. Expected {token_type}",
            headers={"WWW-Authenticate": "Bearer"},
        )

    return user_id


def verify_access_token(token: str) -> str:
    return verify_token(token, settings.SECRET_KEY, "access")


def verify_refresh_token(token: str) -> str:
    return verify_token(token, settings.REFRESH_SECRET_KEY, "refresh")


# =====================================================================
# USER AUTHENTICATION DEPENDENCIES
# =====================================================================

def load_user(db: Session, user_id: str) -> UserAuth:
    """Resolve a token subject to a user row, or fail with 401."""
    try:
        user = crud_user_auth.get(db, id=UUID(user_id))
    except ValueError:
        user = None

    if user is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="User not found",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return user


def get_current_user(
    credentials: HTTPAuthorizationCredentials = Depends(security),
    db: Session = Depends(get_db),
) -> UserAuth:
    """
    Get current authenticated user from the bearer token.

    The token, not any id in the request body, decides who the caller is.
    """
    user_id = verify_access_token(credentials.credentials)
    return load_user(db, user_id)
