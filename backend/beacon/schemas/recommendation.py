"""Pydantic schemas for recommendation requests and responses."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

MAX_PAGE_SIZE = 50


class ScoreBreakdown(BaseModel):
    """Per-candidate score terms for one ranking request."""

    distance: int
    interest: int
    activity: int
    completeness: int
    compatibility: int
    ml: float | None = None
    overall: float
    distance_km: float | None = None


class RecommendationParams(BaseModel):
    """Caller-supplied ranking options."""

    model_config = ConfigDict(extra="forbid")

    lat: float | None = None
    lng: float | None = None
    limit: int = Field(20, ge=1)
    offset: int = Field(0, ge=0)
    min_score: float = Field(0, ge=0)
    exclude_blocked: bool = True

    @property
    def page_size(self) -> int:
        return min(self.limit, MAX_PAGE_SIZE)


class RecommendedProfile(BaseModel):
    """Public subset of a candidate profile plus its scores."""

    email: str
    full_name: str | None = None
    avatar_url: str | None = None
    photos: list[str] = []
    bio: str | None = None
    city: str | None = None
    profile_type: str
    tags: list[str] = []
    looking_for: list[str] = []
    last_seen: datetime | None = None
    verified: bool
    scores: ScoreBreakdown
    match_percentage: int


class RecommendationPage(BaseModel):
    recommendations: list[RecommendedProfile]
    total: int
    offset: int
    limit: int
    has_more: bool
    ml_enabled: bool
    preference_count: int
