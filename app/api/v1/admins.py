"""Super-admin only: manage admin accounts."""

from typing import Annotated

from fastapi import APIRouter, Depends, status

from app.api.v1.deps import get_auth_service, require_super_admin
from app.schemas.auth import CreateAdminRequest, Identity, UserPublic
from app.services.auth_service import AuthService

router = APIRouter()


@router.post("", response_model=UserPublic, status_code=status.HTTP_201_CREATED)
def create_admin(
    body: CreateAdminRequest,
    _super_admin: Annotated[Identity, Depends(require_super_admin)],
    auth_service: Annotated[AuthService, Depends(get_auth_service)],
) -> UserPublic:
    """Create a new admin-role user. 409 if the username or email is already in use."""
    return UserPublic.model_validate(auth_service.create_admin(body))
