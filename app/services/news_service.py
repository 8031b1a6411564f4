"""News CRUD orchestration: validation, slugs, pagination and draft publishing."""

import logging
import math
from typing import TYPE_CHECKING, NamedTuple

from app.core.errors import (
    InvalidNewsStatusError,
    NewsNotDraftError,
    NewsNotFoundError,
    StoreFailureError,
)
from app.core.slug import slug_with_random_id
from app.models.news import News, NewsStatus
from app.repositories.base import DuplicateRecordError, RecordNotFoundError
from app.repositories.news import DEFAULT_NEWS_ORDERING, NEWS_ORDERINGS
from app.schemas.content import NewsCreate, NewsUpdate, PaginationMeta

if TYPE_CHECKING:
    from app.repositories.news import NewsRepository

logger = logging.getLogger(__name__)

DEFAULT_PAGE_SIZE = 10
MAX_PAGE_SIZE = 100
# Retries when a freshly generated slug collides with an existing one.
SLUG_ATTEMPTS = 3


class NewsPage(NamedTuple):
    items: list[News]
    meta: PaginationMeta


def parse_status(value: str) -> NewsStatus:
    try:
        return NewsStatus(value)
    except ValueError:
        raise InvalidNewsStatusError(
            f"Invalid news status {value!r}; expected one of "
            + ", ".join(s.value for s in NewsStatus)
        ) from None


def normalize_paging(page: int, limit: int) -> tuple[int, int]:
    """Clamp page to >= 1 and limit to 1..MAX_PAGE_SIZE."""
    page = max(page, 1)
    limit = min(max(limit, 1), MAX_PAGE_SIZE)
    return page, limit


def normalize_order(order_by: str | None) -> str:
    return order_by if order_by in NEWS_ORDERINGS else DEFAULT_NEWS_ORDERING


class NewsService:
    def __init__(self, repo: "NewsRepository") -> None:
        self.repo = repo

    def _page(
        self,
        page: int,
        limit: int,
        order_by: str | None,
        status: NewsStatus | None = None,
        category: str | None = None,
    ) -> NewsPage:
        page, limit = normalize_paging(page, limit)
        items, total = self.repo.list_page(
            limit=limit,
            offset=(page - 1) * limit,
            order_by=normalize_order(order_by),
            status=status,
            category=category or None,
        )
        meta = PaginationMeta(
            page=page,
            limit=limit,
            total=total,
            total_pages=math.ceil(total / limit) if total else 0,
        )
        return NewsPage(items, meta)

    def create(self, data: NewsCreate) -> News:
        status = parse_status(data.status)
        for attempt in range(1, SLUG_ATTEMPTS + 1):
            news = News(
                news_title=data.news_title,
                slug=slug_with_random_id(data.news_title),
                category=data.category,
                status=status,
                content=data.content,
                image=data.image,
            )
            try:
                news = self.repo.create(news)
                break
            except DuplicateRecordError:
                self._slug_collision(attempt, "creating")
        logger.info("News created", extra={"news_id": news.id, "status": status.value})
        return news

    def list_all(
        self,
        page: int = 1,
        limit: int = DEFAULT_PAGE_SIZE,
        order_by: str | None = None,
        category: str | None = None,
    ) -> NewsPage:
        """Every live article regardless of status (admin view)."""
        return self._page(page, limit, order_by, category=category)

    def list_published(
        self,
        page: int = 1,
        limit: int = DEFAULT_PAGE_SIZE,
        order_by: str | None = None,
        category: str | None = None,
    ) -> NewsPage:
        return self._page(page, limit, order_by, status=NewsStatus.POSTED, category=category)

    def list_drafts(
        self, page: int = 1, limit: int = DEFAULT_PAGE_SIZE, order_by: str | None = None
    ) -> NewsPage:
        return self._page(page, limit, order_by, status=NewsStatus.DRAFTED)

    def get_by_id(self, news_id: int, status: NewsStatus | None = None) -> News:
        try:
            return self.repo.get_by_id(news_id, status=status)
        except RecordNotFoundError:
            raise NewsNotFoundError() from None

    def get_published(self, news_id: int) -> News:
        return self.get_by_id(news_id, status=NewsStatus.POSTED)

    def get_draft(self, news_id: int) -> News:
        return self.get_by_id(news_id, status=NewsStatus.DRAFTED)

    def get_by_slug(self, slug: str) -> News:
        """Public lookup: only posted articles resolve by slug."""
        try:
            return self.repo.get_by_slug(slug, status=NewsStatus.POSTED)
        except RecordNotFoundError:
            raise NewsNotFoundError() from None

    @staticmethod
    def _slug_collision(attempt: int, action: str) -> None:
        """Log a retryable slug collision, or give up after SLUG_ATTEMPTS."""
        if attempt == SLUG_ATTEMPTS:
            logger.error("Slug still colliding after %s attempts %s news", SLUG_ATTEMPTS, action)
            raise StoreFailureError()
        logger.info("Slug collision %s news; retrying", action)

    def update(self, news_id: int, data: NewsUpdate) -> News:
        """Partial update; a new title also regenerates the slug."""
        status = parse_status(data.status) if data.status else None
        for attempt in range(1, SLUG_ATTEMPTS + 1):
            # Re-read each attempt: a failed save rolls back and expires pending changes.
            news = self.get_by_id(news_id)
            if status is not None:
                news.status = status
            if data.news_title:
                news.news_title = data.news_title
                news.slug = slug_with_random_id(data.news_title)
            if data.category:
                news.category = data.category
            if data.content:
                news.content = data.content
            if data.image:
                news.image = data.image
            try:
                news = self.repo.update(news)
                break
            except DuplicateRecordError:
                self._slug_collision(attempt, "updating")
        logger.info("News updated", extra={"news_id": news_id})
        return news

    def delete(self, news_id: int) -> None:
        self.get_by_id(news_id)
        self.repo.soft_delete(news_id)
        logger.info("News deleted", extra={"news_id": news_id})

    def publish(self, news_id: int) -> News:
        news = self.get_by_id(news_id)
        if news.status != NewsStatus.DRAFTED:
            raise NewsNotDraftError()
        self.repo.set_status(news_id, NewsStatus.POSTED)
        logger.info("News published", extra={"news_id": news_id})
        return self.get_by_id(news_id)
