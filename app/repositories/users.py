"""Credential store: user records looked up by id, username or email."""

from sqlalchemy.orm import Session

from app.models.user import User
from app.repositories.base import RecordNotFoundError, store_errors

ENTITY = "User"
UNIQUE_FIELDS = ("username", "email")


class UserRepository:
    """SQLAlchemy-backed user store. Every mutation commits on its own."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def create(self, user: User) -> User:
        with store_errors(self.session, ENTITY, UNIQUE_FIELDS):
            self.session.add(user)
            self.session.commit()
            self.session.refresh(user)
        return user

    def get_by_id(self, user_id: int) -> User:
        with store_errors(self.session, ENTITY):
            user = self.session.get(User, user_id)
        if user is None:
            raise RecordNotFoundError(ENTITY, user_id)
        return user

    def get_by_username(self, username: str) -> User:
        with store_errors(self.session, ENTITY):
            user = self.session.query(User).filter(User.username == username).first()
        if user is None:
            raise RecordNotFoundError(ENTITY, username)
        return user

    def get_by_email(self, email: str) -> User:
        with store_errors(self.session, ENTITY):
            user = self.session.query(User).filter(User.email == email).first()
        if user is None:
            raise RecordNotFoundError(ENTITY, email)
        return user

    def update(self, user: User) -> User:
        with store_errors(self.session, ENTITY, UNIQUE_FIELDS):
            self.session.add(user)
            self.session.commit()
            self.session.refresh(user)
        return user

    def update_refresh_token(self, user_id: int, refresh_token: str | None) -> None:
        """Store (or clear, with None) the user's current refresh token."""
        with store_errors(self.session, ENTITY):
            updated = (
                self.session.query(User)
                .filter(User.id == user_id)
                .update({User.refresh_token: refresh_token}, synchronize_session="fetch")
            )
            self.session.commit()
        if not updated:
            raise RecordNotFoundError(ENTITY, user_id)
