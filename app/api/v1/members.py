"""Member profile endpoints: public read-only and admin CRUD."""

from typing import Annotated

from fastapi import APIRouter, Depends, status

from app.api.v1.deps import get_member_service, require_admin
from app.schemas.auth import Identity, MessageResponse
from app.schemas.content import MemberCreate, MemberOut, MembersListResponse, MemberUpdate
from app.services.member_service import MemberService

public_router = APIRouter()
admin_router = APIRouter()

MemberServiceDep = Annotated[MemberService, Depends(get_member_service)]
AdminDep = Annotated[Identity, Depends(require_admin)]


def _list_response(service: MemberService) -> MembersListResponse:
    members = service.list_all()
    return MembersListResponse(
        items=[MemberOut.model_validate(m) for m in members],
        total=len(members),
    )


@public_router.get("", response_model=MembersListResponse)
def list_members(service: MemberServiceDep) -> MembersListResponse:
    return _list_response(service)


@public_router.get("/{member_id}", response_model=MemberOut)
def get_member(member_id: int, service: MemberServiceDep) -> MemberOut:
    return MemberOut.model_validate(service.get_by_id(member_id))


@admin_router.get("", response_model=MembersListResponse)
def admin_list_members(_admin: AdminDep, service: MemberServiceDep) -> MembersListResponse:
    return _list_response(service)


@admin_router.get("/{member_id}", response_model=MemberOut)
def admin_get_member(member_id: int, _admin: AdminDep, service: MemberServiceDep) -> MemberOut:
    return MemberOut.model_validate(service.get_by_id(member_id))


@admin_router.post("", response_model=MemberOut, status_code=status.HTTP_201_CREATED)
def create_member(body: MemberCreate, _admin: AdminDep, service: MemberServiceDep) -> MemberOut:
    """Create a member profile. 409 if the email is already used by another member."""
    return MemberOut.model_validate(service.create(body))


@admin_router.put("/{member_id}", response_model=MemberOut)
def update_member(
    member_id: int, body: MemberUpdate, _admin: AdminDep, service: MemberServiceDep
) -> MemberOut:
    return MemberOut.model_validate(service.update(member_id, body))


@admin_router.delete("/{member_id}", response_model=MessageResponse)
def delete_member(member_id: int, _admin: AdminDep, service: MemberServiceDep) -> MessageResponse:
    service.delete(member_id)
    return MessageResponse(message="Member deleted.")
