# medal_table/models/team.py
from typing import Any, Dict, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, computed_field, model_validator

# Weight per medal tier used for the ranking score
SCORING_WEIGHTS: Dict[str, Union[int, float]] = {"gold": 3, "silver": 1.5, "bronze": 1}


class RawRecord(BaseModel):
    """Source-shaped team data before normalization.

    Count fields are left untyped on purpose: sources deliver ints, strings
    ("12", " 7 ") or nothing at all, and coercion is the Normalizer's job.
    """

    name: Any = None  # str, or {"text": str} from standings cells
    code: Optional[str] = None
    gold: Any = None
    silver: Any = None
    bronze: Any = None
    total: Any = None


class Team(BaseModel):
    """Canonical, immutable medal count for one team."""

    model_config = ConfigDict(frozen=True)

    code: str = ""
    name: str = ""
    gold: int = Field(0, ge=0)
    silver: int = Field(0, ge=0)
    bronze: int = Field(0, ge=0)
    total: int = Field(0, ge=0)

    @model_validator(mode="before")
    @classmethod
    def _default_total(cls, data: Any) -> Any:
        # A missing total is the sum of the three tiers
        if isinstance(data, dict) and data.get("total") is None:
            data = dict(data)
            data["total"] = sum(int(data.get(tier) or 0) for tier in SCORING_WEIGHTS)
        return data

    @computed_field  # type: ignore[misc]
    @property
    def score(self) -> float:
        """Weighted ranking score (gold*3 + silver*1.5 + bronze)."""
        return (
            self.gold * SCORING_WEIGHTS["gold"]
            + self.silver * SCORING_WEIGHTS["silver"]
            + self.bronze * SCORING_WEIGHTS["bronze"]
        )
