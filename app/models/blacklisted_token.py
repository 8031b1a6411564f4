"""ORM model for revoked session tokens."""

from sqlalchemy import Column, DateTime, Integer, String, func

from app.models.base import Base


class BlacklistedToken(Base):
    """
    A token revoked before its natural expiry (logout or refresh rotation).

    Only the SHA-256 fingerprint of the token is kept. expires_at mirrors the
    token's own exp, so rows past it are inert and can be pruned at any time.
    """

    __tablename__ = "blacklisted_tokens"

    id = Column(Integer, primary_key=True, autoincrement=True)
    token_hash = Column(String(64), nullable=False, unique=True, index=True)
    user_id = Column(Integer, nullable=False, index=True)
    expires_at = Column(DateTime(timezone=True), nullable=False, index=True)
    created_at = Column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
    )
