"""ORM model for news articles."""

import enum

from sqlalchemy import Column, Enum, Integer, String, Text

from app.models.base import Base, SoftDeleteMixin, TimestampMixin


class NewsStatus(str, enum.Enum):
    POSTED = "Posted"
    DRAFTED = "Drafted"


class News(TimestampMixin, SoftDeleteMixin, Base):
    """News article; public listings only show Posted rows."""

    __tablename__ = "news"

    id = Column(Integer, primary_key=True, autoincrement=True)
    news_title = Column(String(512), nullable=False)
    slug = Column(String(600), nullable=False, unique=True, index=True)
    category = Column(String(255), nullable=False, index=True)
    status = Column(
        Enum(
            NewsStatus,
            name="news_status",
            native_enum=False,
            length=20,
            values_callable=lambda statuses: [s.value for s in statuses],
        ),
        nullable=False,
        default=NewsStatus.DRAFTED,
        index=True,
    )
    content = Column(Text, nullable=False, default="")
    image = Column(String(2048), nullable=False, default="")
