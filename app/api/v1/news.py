"""News endpoints: public read-only listing and the admin CRUD surface."""

from typing import Annotated

from fastapi import APIRouter, Depends, Query, status

from app.api.v1.deps import get_news_service, require_admin
from app.schemas.auth import Identity, MessageResponse
from app.schemas.content import NewsCreate, NewsListResponse, NewsOut, NewsUpdate
from app.services.news_service import DEFAULT_PAGE_SIZE, MAX_PAGE_SIZE, NewsPage, NewsService

public_router = APIRouter()
admin_router = APIRouter()

Page = Annotated[int, Query(ge=1, description="1-based page number")]
Limit = Annotated[int, Query(ge=1, le=MAX_PAGE_SIZE, description="Items per page")]
OrderBy = Annotated[
    str,
    Query(description="id_asc|id_desc|title_asc|title_desc|created_at_asc|created_at_desc|updated_at_asc|updated_at_desc"),
]
NewsServiceDep = Annotated[NewsService, Depends(get_news_service)]
AdminDep = Annotated[Identity, Depends(require_admin)]


def _list_response(page: NewsPage) -> NewsListResponse:
    return NewsListResponse(
        items=[NewsOut.model_validate(n) for n in page.items],
        meta=page.meta,
    )


# Public


@public_router.get("", response_model=NewsListResponse)
def list_published_news(
    service: NewsServiceDep,
    page: Page = 1,
    limit: Limit = DEFAULT_PAGE_SIZE,
    order_by: OrderBy = "created_at_desc",
    category: str | None = None,
) -> NewsListResponse:
    """Published news only, newest first by default."""
    return _list_response(service.list_published(page, limit, order_by, category))


@public_router.get("/slug/{slug}", response_model=NewsOut)
def get_news_by_slug(slug: str, service: NewsServiceDep) -> NewsOut:
    return NewsOut.model_validate(service.get_by_slug(slug))


@public_router.get("/{news_id}", response_model=NewsOut)
def get_published_news(news_id: int, service: NewsServiceDep) -> NewsOut:
    return NewsOut.model_validate(service.get_published(news_id))


# Admin (admin or super_admin)


@admin_router.get("", response_model=NewsListResponse)
def list_all_news(
    _admin: AdminDep,
    service: NewsServiceDep,
    page: Page = 1,
    limit: Limit = DEFAULT_PAGE_SIZE,
    order_by: OrderBy = "created_at_desc",
    category: str | None = None,
) -> NewsListResponse:
    """All live news regardless of status."""
    return _list_response(service.list_all(page, limit, order_by, category))


@admin_router.get("/drafts", response_model=NewsListResponse)
def list_drafts(
    _admin: AdminDep,
    service: NewsServiceDep,
    page: Page = 1,
    limit: Limit = DEFAULT_PAGE_SIZE,
    order_by: OrderBy = "created_at_desc",
) -> NewsListResponse:
    return _list_response(service.list_drafts(page, limit, order_by))


@admin_router.get("/drafts/{news_id}", response_model=NewsOut)
def get_draft(news_id: int, _admin: AdminDep, service: NewsServiceDep) -> NewsOut:
    return NewsOut.model_validate(service.get_draft(news_id))


@admin_router.post("/drafts/{news_id}/publish", response_model=NewsOut)
def publish_draft(news_id: int, _admin: AdminDep, service: NewsServiceDep) -> NewsOut:
    """Move a draft to Posted. 400 if the article is not a draft."""
    return NewsOut.model_validate(service.publish(news_id))


@admin_router.get("/{news_id}", response_model=NewsOut)
def get_news(news_id: int, _admin: AdminDep, service: NewsServiceDep) -> NewsOut:
    return NewsOut.model_validate(service.get_by_id(news_id))


@admin_router.post("", response_model=NewsOut, status_code=status.HTTP_201_CREATED)
def create_news(body: NewsCreate, _admin: AdminDep, service: NewsServiceDep) -> NewsOut:
    return NewsOut.model_validate(service.create(body))


@admin_router.put("/{news_id}", response_model=NewsOut)
def update_news(
    news_id: int, body: NewsUpdate, _admin: AdminDep, service: NewsServiceDep
) -> NewsOut:
    return NewsOut.model_validate(service.update(news_id, body))


@admin_router.delete("/{news_id}", response_model=MessageResponse)
def delete_news(news_id: int, _admin: AdminDep, service: NewsServiceDep) -> MessageResponse:
    service.delete(news_id)
    return MessageResponse(message="News deleted.")
