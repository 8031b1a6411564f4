"""Member profile CRUD orchestration."""

import logging
from typing import TYPE_CHECKING

from app.core.errors import EmailTakenError, MemberNotFoundError
from app.models.member import Member
from app.repositories.base import DuplicateRecordError, RecordNotFoundError
from app.schemas.content import MemberCreate, MemberUpdate

if TYPE_CHECKING:
    from app.repositories.members import MemberRepository

logger = logging.getLogger(__name__)

_TEXT_FIELDS = (
    "full_name",
    "title_position",
    "email",
    "phone_number",
    "linkedin",
    "business_card",
    "display_image",
    "detail_image",
    "biography",
)
_LIST_FIELDS = ("practice_focus", "education", "language")


class MemberService:
    def __init__(self, repo: "MemberRepository") -> None:
        self.repo = repo

    def _email_owner(self, email: str) -> Member | None:
        try:
            return self.repo.get_by_email(email)
        except RecordNotFoundError:
            return None

    def create(self, data: MemberCreate) -> Member:
        if self._email_owner(data.email) is not None:
            raise EmailTakenError()
        member = Member(**data.model_dump())
        try:
            member = self.repo.create(member)
        except DuplicateRecordError as e:
            raise EmailTakenError() from e
        logger.info("Member created", extra={"member_id": member.id})
        return member

    def list_all(self) -> list[Member]:
        return self.repo.list_all()

    def get_by_id(self, member_id: int) -> Member:
        try:
            return self.repo.get_by_id(member_id)
        except RecordNotFoundError:
            raise MemberNotFoundError() from None

    def update(self, member_id: int, data: MemberUpdate) -> Member:
        """Partial update: empty strings and empty lists leave the field as it is."""
        member = self.get_by_id(member_id)
        if data.email and data.email != member.email:
            owner = self._email_owner(data.email)
            if owner is not None and owner.id != member_id:
                raise EmailTakenError()
        for field in _TEXT_FIELDS:
            value = getattr(data, field)
            if value:
                setattr(member, field, value)
        for field in _LIST_FIELDS:
            value = getattr(data, field)
            if value:
                setattr(member, field, list(value))
        try:
            member = self.repo.update(member)
        except DuplicateRecordError as e:
            raise EmailTakenError() from e
        logger.info("Member updated", extra={"member_id": member_id})
        return member

    def delete(self, member_id: int) -> None:
        self.get_by_id(member_id)
        self.repo.soft_delete(member_id)
        logger.info("Member deleted", extra={"member_id": member_id})
