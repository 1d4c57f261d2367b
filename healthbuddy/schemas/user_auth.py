# schemas/user_auth.py
from pydantic import BaseModel, EmailStr, Field, ConfigDict
from typing import Optional
from datetime import datetime
from uuid import UUID


# =====================================================================
# 1. READ SCHEMAS
# =====================================================================

class UserAuthOut(BaseModel):
    """Public user fields returned by auth endpoints."""
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    email: EmailStr
    created_at: Optional[datetime] = None
    last_login_at: Optional[datetime] = None

# =====================================================================
# 2. AUTH SCHEMAS
# =====================================================================

class SignUpRequest(BaseModel):
    """Account creation request. Also creates the user's profile row."""
    email: EmailStr
    password: str = Field(..., min_length=6, max_length=72)
    name: Optional[str] = Field(None, max_length=255)

class LoginRequest(BaseModel):
    """User login request."""
    email: EmailStr
    password: str = Field(..., min_length=1)

class TokenResponse(BaseModel):
    """Authentication token response."""
    access_token: str
    token_type: str = "bearer"
    refresh_token: str
    user: UserAuthOut

class RefreshTokenRequest(BaseModel):
    """Refresh token request."""
    refresh_token: str

# =====================================================================
# RESPONSE WRAPPERS
# =====================================================================

class SuccessResponse(BaseModel):
    """Generic success response."""
    success: bool = True
    message: str
