"""Member profile store. Soft-deleted rows are invisible to every query here."""

from datetime import UTC, datetime

from sqlalchemy.orm import Query, Session

from app.models.member import Member
from app.repositories.base import RecordNotFoundError, store_errors

ENTITY = "Member"


class MemberRepository:
    def __init__(self, session: Session) -> None:
        self.session = session

    def _live(self) -> Query:
        return self.session.query(Member).filter(Member.deleted_at.is_(None))

    def create(self, member: Member) -> Member:
        with store_errors(self.session, ENTITY, ("email",)):
            self.session.add(member)
            self.session.commit()
            self.session.refresh(member)
        return member

    def list_all(self) -> list[Member]:
        with store_errors(self.session, ENTITY):
            return self._live().order_by(Member.id.asc()).all()

    def get_by_id(self, member_id: int) -> Member:
        with store_errors(self.session, ENTITY):
            member = self._live().filter(Member.id == member_id).first()
        if member is None:
            raise RecordNotFoundError(ENTITY, member_id)
        return member

    def get_by_email(self, email: str) -> Member:
        with store_errors(self.session, ENTITY):
            member = self._live().filter(Member.email == email).first()
        if member is None:
            raise RecordNotFoundError(ENTITY, email)
        return member

    def update(self, member: Member) -> Member:
        with store_errors(self.session, ENTITY, ("email",)):
            self.session.add(member)
            self.session.commit()
            self.session.refresh(member)
        return member

    def soft_delete(self, member_id: int) -> None:
        with store_errors(self.session, ENTITY):
            self._live().filter(Member.id == member_id).update(
                {Member.deleted_at: datetime.now(UTC)}, synchronize_session="fetch"
            )
            self.session.commit()
