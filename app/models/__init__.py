"""SQLAlchemy ORM models."""

from app.models.base import Base
from app.models.blacklisted_token import BlacklistedToken
from app.models.member import Member
from app.models.news import News, NewsStatus
from app.models.user import User

__all__ = ["Base", "BlacklistedToken", "Member", "News", "NewsStatus", "User"]
