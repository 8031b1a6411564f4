"""Test doubles shared by the test modules: settings, clock, in-memory stores, SQLite sessions."""

from datetime import UTC, datetime, timedelta

from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app.core.config import Settings
from app.core.database import build_engine
from app.core.errors import StoreFailureError
from app.core.security import token_fingerprint
from app.models import Base
from app.models.user import User
from app.repositories.base import DuplicateRecordError, RecordNotFoundError
from app.services.token_codec import TokenCodec

TEST_SECRET = "unit-test-secret"


def make_settings(**overrides: object) -> Settings:
    """Settings isolated from the developer's .env, with a cheap bcrypt cost."""
    values: dict[str, object] = {
        "APP_ENV": "dev",
        "DATABASE_URL": "sqlite://",
        "JWT_SECRET": TEST_SECRET,
        "BCRYPT_ROUNDS": 4,
        "LOGIN_RATE_LIMIT_PER_MINUTE": 1000,
    }
    values.update(overrides)
    return Settings(_env_file=None, **values)


class FrozenClock:
    """Callable clock that only moves when told to."""

    def __init__(self, start: datetime | None = None) -> None:
        self.now = start or datetime.now(UTC).replace(microsecond=0)

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs: float) -> None:
        self.now += timedelta(**kwargs)


def make_codec(clock: FrozenClock | None = None, secret: str = TEST_SECRET) -> TokenCodec:
    if clock is None:
        return TokenCodec(secret=secret)
    return TokenCodec(secret=secret, clock=clock)


def make_sqlite_session_factory() -> sessionmaker:
    """In-memory SQLite shared across threads (TestClient runs sync routes in a pool)."""
    engine = build_engine("sqlite://", poolclass=StaticPool)
    Base.metadata.create_all(engine)
    return sessionmaker(bind=engine, autocommit=False, autoflush=False)


class InMemoryUserRepository:
    """Dict-backed stand-in for UserRepository with the same error contract."""

    def __init__(self) -> None:
        self.rows: dict[int, User] = {}
        self._next_id = 1
        self.fail_refresh_token_updates = False
        self.refresh_token_updates: list[tuple[int, str | None]] = []

    def _conflict(self, user: User) -> str | None:
        for other in self.rows.values():
            if other is user or other.id == user.id:
                continue
            if other.username == user.username:
                return "username"
            if other.email == user.email:
                return "email"
        return None

    def create(self, user: User) -> User:
        field = self._conflict(user)
        if field:
            raise DuplicateRecordError("User", field)
        user.id = self._next_id
        self._next_id += 1
        self.rows[user.id] = user
        return user

    def get_by_id(self, user_id: int) -> User:
        if user_id not in self.rows:
            raise RecordNotFoundError("User", user_id)
        return self.rows[user_id]

    def get_by_username(self, username: str) -> User:
        for user in self.rows.values():
            if user.username == username:
                return user
        raise RecordNotFoundError("User", username)

    def get_by_email(self, email: str) -> User:
        for user in self.rows.values():
            if user.email == email:
                return user
        raise RecordNotFoundError("User", email)

    def update(self, user: User) -> User:
        field = self._conflict(user)
        if field:
            raise DuplicateRecordError("User", field)
        self.rows[user.id] = user
        return user

    def update_refresh_token(self, user_id: int, refresh_token: str | None) -> None:
        if self.fail_refresh_token_updates:
            raise StoreFailureError()
        user = self.get_by_id(user_id)
        user.refresh_token = refresh_token
        self.refresh_token_updates.append((user_id, refresh_token))


class InMemoryBlacklistRepository:
    """Dict-backed stand-in for BlacklistRepository keyed by token fingerprint."""

    def __init__(self, clock: FrozenClock | None = None) -> None:
        self.entries: dict[str, tuple[int, datetime]] = {}
        self.fail_adds = False
        self._clock = clock or (lambda: datetime.now(UTC))

    def add(self, token: str, user_id: int, expires_at: datetime) -> bool:
        if self.fail_adds:
            raise StoreFailureError()
        key = token_fingerprint(token)
        if key in self.entries:
            _, current = self.entries[key]
            self.entries[key] = (user_id, max(current, expires_at))
            return False
        self.entries[key] = (user_id, expires_at)
        return True

    def expiry_of(self, token: str) -> datetime | None:
        entry = self.entries.get(token_fingerprint(token))
        return entry[1] if entry else None

    def is_blacklisted(self, token: str, now: datetime | None = None) -> bool:
        now = now or self._clock()
        entry = self.entries.get(token_fingerprint(token))
        return entry is not None and entry[1] > now

    def cleanup_expired(self, now: datetime | None = None) -> int:
        now = now or self._clock()
        expired = [k for k, (_, exp) in self.entries.items() if exp <= now]
        for key in expired:
            del self.entries[key]
        return len(expired)
