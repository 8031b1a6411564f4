"""Login, token refresh, logout and own-profile endpoints."""

from typing import Annotated

from fastapi import APIRouter, Body, Depends, Request, Response

from app.api.errors import app_error_response
from app.api.v1.deps import (
    authenticate,
    check_role,
    get_app_settings,
    get_auth_service,
    login_rate_limit,
)
from app.core.config import Settings
from app.core.errors import (
    InsufficientPermissionsError,
    InvalidRefreshTokenError,
    RefreshTokenRevokedError,
    UserNotFoundError,
)
from app.core.roles import Role
from app.schemas.auth import (
    Identity,
    LoginRequest,
    LogoutRequest,
    MessageResponse,
    RefreshRequest,
    RefreshResponse,
    TokenResponse,
    UpdateProfileRequest,
    UserPublic,
)
from app.services.auth_service import AuthService

router = APIRouter()


def _set_refresh_cookie(response: Response, refresh_token: str, settings: Settings) -> None:
    response.set_cookie(
        key=settings.REFRESH_COOKIE_NAME,
        value=refresh_token,
        max_age=settings.REFRESH_TOKEN_EXPIRE_DAYS * 24 * 60 * 60,
        path="/",
        secure=settings.REFRESH_COOKIE_SECURE,
        httponly=True,
        samesite="lax",
    )


def _clear_refresh_cookie(response: Response, settings: Settings) -> None:
    response.delete_cookie(
        key=settings.REFRESH_COOKIE_NAME,
        path="/",
        secure=settings.REFRESH_COOKIE_SECURE,
        httponly=True,
        samesite="lax",
    )


def _presented_refresh_token(body_token: str | None, request: Request, settings: Settings) -> str | None:
    return body_token or request.cookies.get(settings.REFRESH_COOKIE_NAME)


@router.post("/login", response_model=TokenResponse, dependencies=[Depends(login_rate_limit)])
def login(
    body: LoginRequest,
    response: Response,
    auth_service: Annotated[AuthService, Depends(get_auth_service)],
    settings: Annotated[Settings, Depends(get_app_settings)],
) -> TokenResponse:
    """
    Authenticate with username and password; returns an access/refresh token pair.
    Include the access token in the Authorization header as: Bearer <access_token>.
    The refresh token is also set as an HttpOnly cookie.
    """
    result = auth_service.login(body.username, body.password)
    _set_refresh_cookie(response, result.refresh_token, settings)
    return TokenResponse(
        access_token=result.access_token,
        token_type="bearer",
        expires_in=settings.ACCESS_TOKEN_EXPIRE_MINUTES * 60,
        refresh_token=result.refresh_token,
        user=UserPublic.model_validate(result.user),
    )


@router.post("/refresh", response_model=RefreshResponse)
def refresh(
    request: Request,
    response: Response,
    auth_service: Annotated[AuthService, Depends(get_auth_service)],
    settings: Annotated[Settings, Depends(get_app_settings)],
    body: Annotated[RefreshRequest | None, Body()] = None,
) -> RefreshResponse | Response:
    """
    Exchange a refresh token (JSON body or cookie) for a new pair.
    The presented refresh token cannot be used again.
    """
    token = _presented_refresh_token(body.refresh_token if body else None, request, settings)
    try:
        if not token:
            raise InvalidRefreshTokenError("Refresh token not provided.")
        pair = auth_service.refresh_token(token)
    except (InvalidRefreshTokenError, RefreshTokenRevokedError, UserNotFoundError) as e:
        error_response = app_error_response(e)
        _clear_refresh_cookie(error_response, settings)
        return error_response

    _set_refresh_cookie(response, pair.refresh_token, settings)
    return RefreshResponse(
        access_token=pair.access_token,
        token_type="bearer",
        expires_in=settings.ACCESS_TOKEN_EXPIRE_MINUTES * 60,
        refresh_token=pair.refresh_token,
    )


@router.post("/logout", response_model=MessageResponse)
def logout(
    request: Request,
    response: Response,
    identity: Annotated[Identity, Depends(authenticate)],
    auth_service: Annotated[AuthService, Depends(get_auth_service)],
    settings: Annotated[Settings, Depends(get_app_settings)],
    body: Annotated[LogoutRequest | None, Body()] = None,
) -> MessageResponse:
    """Revoke the current access token and any presented refresh token."""
    refresh_token = _presented_refresh_token(body.refresh_token if body else None, request, settings)
    auth_service.logout(identity.user_id, identity.raw_token, refresh_token)
    _clear_refresh_cookie(response, settings)
    return MessageResponse(message="Logged out; tokens revoked.")


@router.get("/profile", response_model=UserPublic)
def get_own_profile(
    identity: Annotated[Identity, Depends(authenticate)],
    auth_service: Annotated[AuthService, Depends(get_auth_service)],
) -> UserPublic:
    return UserPublic.model_validate(auth_service.get_user(identity.user_id))


@router.get("/profile/{user_id}", response_model=UserPublic)
def get_profile(
    user_id: int,
    identity: Annotated[Identity, Depends(authenticate)],
    auth_service: Annotated[AuthService, Depends(get_auth_service)],
) -> UserPublic:
    """Own profile for anyone; other users' profiles for super admins only."""
    if user_id != identity.user_id:
        try:
            check_role(identity.role, Role.SUPER_ADMIN)
        except InsufficientPermissionsError:
            raise InsufficientPermissionsError("You can only access your own profile.") from None
    return UserPublic.model_validate(auth_service.get_user(user_id))


@router.put("/profile", response_model=UserPublic)
def update_profile(
    body: UpdateProfileRequest,
    identity: Annotated[Identity, Depends(authenticate)],
    auth_service: Annotated[AuthService, Depends(get_auth_service)],
) -> UserPublic:
    """Update own username/email; password only changes when a non-empty one is sent."""
    return UserPublic.model_validate(auth_service.update_profile(identity.user_id, body))
