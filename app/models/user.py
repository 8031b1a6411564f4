"""ORM model for staff users (auth and RBAC)."""

from sqlalchemy import Column, Enum, Integer, String, Text

from app.core.roles import Role
from app.models.base import Base, TimestampMixin


class User(TimestampMixin, Base):
    """
    Staff account for JWT authentication and role-based access control.

    role: 'admin' or 'super_admin'. password_hash is never serialized outward.
    """

    __tablename__ = "users"

    id = Column(Integer, primary_key=True, autoincrement=True)
    username = Column(String(255), nullable=False, unique=True, index=True)
    email = Column(String(255), nullable=False, unique=True, index=True)
    password_hash = Column(String(255), nullable=False)
    role = Column(
        Enum(
            Role,
            name="user_role",
            native_enum=False,
            length=20,
            values_callable=lambda roles: [r.value for r in roles],
        ),
        nullable=False,
        default=Role.ADMIN,
    )
    refresh_token = Column(Text, nullable=True)

    def __repr__(self) -> str:
        return f"<User(id={self.id}, username={self.username!r}, role={self.role})>"
