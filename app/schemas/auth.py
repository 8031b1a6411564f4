"""Request/response schemas for auth, profile and admin-management endpoints."""

from pydantic import BaseModel, EmailStr, Field, field_validator

from app.core.roles import Role
from app.core.security import (
    PASSWORD_MAX_LEN,
    PASSWORD_MIN_LEN,
    USERNAME_MAX_LEN,
    USERNAME_MIN_LEN,
)


class LoginRequest(BaseModel):
    """Credentials for login."""

    username: str = Field(
        ..., min_length=USERNAME_MIN_LEN, max_length=USERNAME_MAX_LEN, description="Username"
    )
    password: str = Field(..., min_length=1, max_length=PASSWORD_MAX_LEN, description="Password")


class UserPublic(BaseModel):
    """Safe projection of a user (no password hash, no stored refresh token)."""

    id: int
    username: str
    email: str
    role: Role

    class Config:
        from_attributes = True


class TokenResponse(BaseModel):
    """Access/refresh pair returned after login. The refresh token is also set as a cookie."""

    access_token: str = Field(..., description="JWT access token")
    token_type: str = Field(default="bearer", description="Token type")
    expires_in: int = Field(..., description="Access token lifetime in seconds")
    refresh_token: str = Field(..., description="JWT refresh token (single use)")
    user: UserPublic


class RefreshRequest(BaseModel):
    """Refresh token in the body; when omitted the refresh cookie is used."""

    refresh_token: str | None = Field(default=None, description="Refresh token")


class RefreshResponse(BaseModel):
    access_token: str
    token_type: str = "bearer"
    expires_in: int
    refresh_token: str


class LogoutRequest(BaseModel):
    """Optional refresh token to revoke together with the current access token."""

    refresh_token: str | None = None


class MessageResponse(BaseModel):
    message: str


class CreateAdminRequest(BaseModel):
    username: str = Field(..., min_length=USERNAME_MIN_LEN, max_length=USERNAME_MAX_LEN)
    email: EmailStr
    password: str = Field(..., min_length=PASSWORD_MIN_LEN, max_length=PASSWORD_MAX_LEN)


class UpdateProfileRequest(BaseModel):
    """New username/email; password is changed only when a non-empty value is sent."""

    username: str = Field(..., min_length=USERNAME_MIN_LEN, max_length=USERNAME_MAX_LEN)
    email: EmailStr
    password: str | None = Field(default=None, max_length=PASSWORD_MAX_LEN)

    @field_validator("password")
    @classmethod
    def validate_password(cls, v: str | None) -> str | None:
        # Empty keeps the current password; anything else must meet the minimum.
        if v and len(v) < PASSWORD_MIN_LEN:
            raise ValueError(f"password must be at least {PASSWORD_MIN_LEN} characters")
        return v


class Identity(BaseModel):
    """Authenticated caller attached to the request by the access gate."""

    user_id: int
    username: str
    role: str
    raw_token: str = Field(repr=False)
