"""Profile adapter — turns stored profile rows into scoring-ready CandidateProfile values.

Profiles arrive with aliased and optional fields (``tags`` vs ``interests``,
``last_seen`` vs ``updated_at``). They are resolved here once so the scorers
never branch on field names.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Iterable, Mapping

# Untyped profiles score and display as this type; learning skips them
DEFAULT_PROFILE_TYPE = "standard"


@dataclass(frozen=True)
class CandidateProfile:
    email: str
    full_name: str | None = None
    avatar_url: str | None = None
    photos: tuple[str, ...] = ()
    bio: str = ""
    city: str | None = None
    profile_type: str | None = None
    age: int | None = None
    tags: frozenset[str] = field(default_factory=frozenset)
    looking_for: frozenset[str] = field(default_factory=frozenset)
    archetypes: frozenset[str] = field(default_factory=frozenset)
    essentials: frozenset[str] = field(default_factory=frozenset)
    dealbreakers: frozenset[str] = field(default_factory=frozenset)
    last_lat: float | None = None
    last_lng: float | None = None
    last_seen: datetime | None = None
    verified: bool = False
    verified_seller: bool = False
    verified_organizer: bool = False

    @property
    def is_verified(self) -> bool:
        return self.verified or self.verified_seller or self.verified_organizer


def _string_set(values: Iterable[Any] | None) -> frozenset[str]:
    if not values:
        return frozenset()
    return frozenset(str(v) for v in values if v is not None and str(v) != "")


def _get(source: Any, name: str) -> Any:
    if isinstance(source, Mapping):
        return source.get(name)
    return getattr(source, name, None)


def _as_datetime(value: Any) -> datetime | None:
    if not value:
        return None
    if isinstance(value, datetime):
        return value
    return datetime.fromisoformat(str(value).replace("Z", "+00:00"))


def to_candidate(row: Any) -> CandidateProfile:
    """Build a CandidateProfile from an ORM row or a plain mapping."""
    tags = _get(row, "tags") or _get(row, "interests")
    photos = _get(row, "photos") or []
    age = _get(row, "age")

    return CandidateProfile(
        email=_get(row, "email"),
        full_name=_get(row, "full_name"),
        avatar_url=_get(row, "avatar_url"),
        photos=tuple(photos),
        bio=_get(row, "bio") or "",
        city=_get(row, "city") or None,
        profile_type=_get(row, "profile_type") or None,
        age=int(age) if age else None,
        tags=_string_set(tags),
        looking_for=_string_set(_get(row, "looking_for")),
        archetypes=_string_set(_get(row, "archetypes")),
        essentials=_string_set(_get(row, "essentials")),
        dealbreakers=_string_set(_get(row, "dealbreakers")),
        last_lat=_get(row, "last_lat"),
        last_lng=_get(row, "last_lng"),
        last_seen=_as_datetime(_get(row, "last_seen") or _get(row, "updated_at")),
        verified=bool(_get(row, "verified")),
        verified_seller=bool(_get(row, "verified_seller")),
        verified_organizer=bool(_get(row, "verified_organizer")),
    )
