"""URL slugs for news articles."""

import re
import secrets
import unicodedata

_NON_ALNUM = re.compile(r"[^a-z0-9]+")
_SLUG_RE = re.compile(r"^[a-z0-9-]+$")

SLUG_SUFFIX_LEN = 10


def slugify(title: str) -> str:
    """Lowercase ASCII slug: accents stripped, runs of other characters collapsed to '-'."""
    normalized = unicodedata.normalize("NFKD", title or "")
    ascii_only = "".join(ch for ch in normalized if not unicodedata.combining(ch))
    return _NON_ALNUM.sub("-", ascii_only.lower()).strip("-")


def random_suffix(length: int = SLUG_SUFFIX_LEN) -> str:
    return secrets.token_hex(length // 2 + 1)[:length]


def slug_with_random_id(title: str) -> str:
    """Slug plus a random hex suffix, so equal titles still get distinct slugs."""
    base = slugify(title)
    suffix = random_suffix()
    return f"{base}-{suffix}" if base else suffix


def is_valid_slug(slug: str) -> bool:
    return bool(slug) and bool(_SLUG_RE.match(slug))
