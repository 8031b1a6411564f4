"""News store. Soft-deleted rows are invisible to every query here."""

from datetime import UTC, datetime

from sqlalchemy.orm import Query, Session

from app.models.news import News, NewsStatus
from app.repositories.base import RecordNotFoundError, store_errors

ENTITY = "News"

# order_by key -> ORDER BY clause
NEWS_ORDERINGS = {
    "id_asc": News.id.asc(),
    "id_desc": News.id.desc(),
    "title_asc": News.news_title.asc(),
    "title_desc": News.news_title.desc(),
    "created_at_asc": News.created_at.asc(),
    "created_at_desc": News.created_at.desc(),
    "updated_at_asc": News.updated_at.asc(),
    "updated_at_desc": News.updated_at.desc(),
}
DEFAULT_NEWS_ORDERING = "created_at_desc"


class NewsRepository:
    def __init__(self, session: Session) -> None:
        self.session = session

    def _live(self) -> Query:
        return self.session.query(News).filter(News.deleted_at.is_(None))

    def create(self, news: News) -> News:
        with store_errors(self.session, ENTITY, ("slug",)):
            self.session.add(news)
            self.session.commit()
            self.session.refresh(news)
        return news

    def list_page(
        self,
        limit: int,
        offset: int,
        order_by: str = DEFAULT_NEWS_ORDERING,
        status: NewsStatus | None = None,
        category: str | None = None,
    ) -> tuple[list[News], int]:
        """Return one page of news plus the total matching count."""
        query = self._live()
        if status is not None:
            query = query.filter(News.status == status)
        if category:
            query = query.filter(News.category == category)
        ordering = NEWS_ORDERINGS.get(order_by, NEWS_ORDERINGS[DEFAULT_NEWS_ORDERING])
        with store_errors(self.session, ENTITY):
            total = query.count()
            items = query.order_by(ordering, News.id.desc()).offset(offset).limit(limit).all()
        return items, total

    def get_by_id(self, news_id: int, status: NewsStatus | None = None) -> News:
        query = self._live().filter(News.id == news_id)
        if status is not None:
            query = query.filter(News.status == status)
        with store_errors(self.session, ENTITY):
            news = query.first()
        if news is None:
            raise RecordNotFoundError(ENTITY, news_id)
        return news

    def get_by_slug(self, slug: str, status: NewsStatus | None = None) -> News:
        query = self._live().filter(News.slug == slug)
        if status is not None:
            query = query.filter(News.status == status)
        with store_errors(self.session, ENTITY):
            news = query.first()
        if news is None:
            raise RecordNotFoundError(ENTITY, slug)
        return news

    def update(self, news: News) -> News:
        with store_errors(self.session, ENTITY, ("slug",)):
            self.session.add(news)
            self.session.commit()
            self.session.refresh(news)
        return news

    def set_status(self, news_id: int, status: NewsStatus) -> None:
        with store_errors(self.session, ENTITY):
            self._live().filter(News.id == news_id).update(
                {News.status: status}, synchronize_session="fetch"
            )
            self.session.commit()

    def soft_delete(self, news_id: int) -> None:
        with store_errors(self.session, ENTITY):
            self._live().filter(News.id == news_id).update(
                {News.deleted_at: datetime.now(UTC)}, synchronize_session="fetch"
            )
            self.session.commit()
