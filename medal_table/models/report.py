from datetime import datetime, timezone
from typing import Dict, List, Union

from pydantic import BaseModel, ConfigDict, Field, field_serializer

from .enums import SourceTier
from .team import SCORING_WEIGHTS, Team


class FetchResult(BaseModel):
    """Ranked teams together with the fallback tier that produced them."""

    model_config = ConfigDict(frozen=True)

    tier: SourceTier
    source: str
    teams: List[Team]


class MedalReport(BaseModel):
    """Response envelope served by /api/medals."""

    model_config = ConfigDict(populate_by_name=True)

    updated_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc), alias="updatedAt"
    )
    source: str
    scoring: Dict[str, Union[int, float]] = Field(default_factory=lambda: dict(SCORING_WEIGHTS))
    teams: List[Team] = []

    @field_serializer("updated_at")
    def _serialize_updated_at(self, value: datetime) -> str:
        # ISO-8601 in UTC with millisecond precision, e.g. 2026-02-14T09:30:00.123Z
        value = value.astimezone(timezone.utc)
        return value.strftime("%Y-%m-%dT%H:%M:%S.") + f"{value.microsecond // 1000:03d}Z"

    @classmethod
    def from_result(cls, result: FetchResult) -> "MedalReport":
        return cls(source=result.source, teams=result.teams)
