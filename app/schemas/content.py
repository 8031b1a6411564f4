"""Pydantic schemas for news and member content endpoints."""

from datetime import datetime

from pydantic import BaseModel, EmailStr, Field

from app.models.news import NewsStatus


class PaginationMeta(BaseModel):
    page: int
    limit: int
    total: int
    total_pages: int


class NewsCreate(BaseModel):
    news_title: str = Field(..., min_length=1, max_length=512)
    category: str = Field(..., min_length=1, max_length=255)
    status: str = Field(default=NewsStatus.DRAFTED.value, description="Posted or Drafted")
    content: str = ""
    image: str = Field(default="", max_length=2048, description="Image URL or path")


class NewsUpdate(BaseModel):
    """Partial update: omitted or empty fields keep their current value."""

    news_title: str | None = Field(default=None, max_length=512)
    category: str | None = Field(default=None, max_length=255)
    status: str | None = None
    content: str | None = None
    image: str | None = Field(default=None, max_length=2048)


class NewsOut(BaseModel):
    id: int
    news_title: str
    slug: str
    category: str
    status: NewsStatus
    content: str
    image: str
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class NewsListResponse(BaseModel):
    items: list[NewsOut]
    meta: PaginationMeta


class MemberCreate(BaseModel):
    full_name: str = Field(..., min_length=1, max_length=255)
    title_position: str = Field(..., min_length=1, max_length=255)
    email: EmailStr
    phone_number: str = Field(default="", max_length=64)
    linkedin: str = Field(default="", max_length=1024)
    business_card: str = Field(default="", max_length=2048)
    display_image: str = Field(default="", max_length=2048)
    detail_image: str = Field(default="", max_length=2048)
    biography: str = ""
    practice_focus: list[str] = Field(default_factory=list)
    education: list[str] = Field(default_factory=list)
    language: list[str] = Field(default_factory=list)


class MemberUpdate(BaseModel):
    """Partial update: omitted or empty fields keep their current value."""

    full_name: str | None = Field(default=None, max_length=255)
    title_position: str | None = Field(default=None, max_length=255)
    email: EmailStr | None = None
    phone_number: str | None = Field(default=None, max_length=64)
    linkedin: str | None = Field(default=None, max_length=1024)
    business_card: str | None = Field(default=None, max_length=2048)
    display_image: str | None = Field(default=None, max_length=2048)
    detail_image: str | None = Field(default=None, max_length=2048)
    biography: str | None = None
    practice_focus: list[str] | None = None
    education: list[str] | None = None
    language: list[str] | None = None


class MemberOut(BaseModel):
    id: int
    full_name: str
    title_position: str
    email: str
    phone_number: str
    linkedin: str
    business_card: str
    display_image: str
    detail_image: str
    biography: str
    practice_focus: list[str]
    education: list[str]
    language: list[str]
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class MembersListResponse(BaseModel):
    items: list[MemberOut]
    total: int
