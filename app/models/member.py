"""ORM model for member (staff) profiles shown on the public site."""

from sqlalchemy import JSON, Column, Integer, String, Text

from app.models.base import Base, SoftDeleteMixin, TimestampMixin


class Member(TimestampMixin, SoftDeleteMixin, Base):
    __tablename__ = "members"

    id = Column(Integer, primary_key=True, autoincrement=True)
    full_name = Column(String(255), nullable=False)
    title_position = Column(String(255), nullable=False)
    email = Column(String(255), nullable=False, unique=True, index=True)
    phone_number = Column(String(64), nullable=False, default="")
    linkedin = Column(String(1024), nullable=False, default="")
    business_card = Column(String(2048), nullable=False, default="")
    display_image = Column(String(2048), nullable=False, default="")
    detail_image = Column(String(2048), nullable=False, default="")
    biography = Column(Text, nullable=False, default="")
    practice_focus = Column(JSON, nullable=False, default=list)
    education = Column(JSON, nullable=False, default=list)
    language = Column(JSON, nullable=False, default=list)
