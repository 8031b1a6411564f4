"""Shared repository plumbing: lookup/duplicate errors and SQLAlchemy error translation."""

import logging
from collections.abc import Iterator, Sequence
from contextlib import contextmanager

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from app.core.errors import StoreFailureError

logger = logging.getLogger(__name__)


class RecordNotFoundError(Exception):
    """A lookup matched no (live) row."""

    def __init__(self, entity: str, key: object) -> None:
        self.entity = entity
        self.key = key
        super().__init__(f"{entity} not found: {key!r}")


class DuplicateRecordError(Exception):
    """A write violated a unique constraint. field is the column, when it can be told."""

    def __init__(self, entity: str, field: str | None = None) -> None:
        self.entity = entity
        self.field = field
        super().__init__(f"{entity} already exists" + (f" ({field})" if field else ""))


def conflicting_field(error: IntegrityError, candidates: Sequence[str]) -> str | None:
    """Best-effort guess of the unique column named in a driver's integrity error."""
    text = str(getattr(error, "orig", error)).lower()
    for name in candidates:
        if name.lower() in text:
            return name
    return None


@contextmanager
def store_errors(session: Session, entity: str, unique_fields: Sequence[str] = ()) -> Iterator[None]:
    """
    Translate SQLAlchemy failures inside the block.

    Unique violations become DuplicateRecordError, anything else StoreFailureError.
    The session is rolled back in both cases so it stays usable.
    """
    try:
        yield
    except IntegrityError as e:
        session.rollback()
        raise DuplicateRecordError(entity, conflicting_field(e, unique_fields)) from e
    except SQLAlchemyError as e:
        session.rollback()
        logger.exception("Store operation on %s failed", entity)
        raise StoreFailureError() from e
