from typing import Any, Iterable, List, Optional
import re

from loguru import logger

from medal_table.models.team import RawRecord, Team
from medal_table.scrapers.base_scraper import NormalizationError

_WHOLE_NUMBER = re.compile(r"^\d{1,3}(,\d{3})+$|^\d+$")


def coerce_count(value: Any, field: str = "count") -> int:
    """Coerces a raw medal count into a non-negative int.

    ``None`` and blank strings count as zero. Digit strings may carry
    surrounding whitespace and thousands separators. Anything else raises
    NormalizationError instead of letting a bogus value leak into totals.
    """
    if value is None:
        return 0
    if isinstance(value, bool):
        raise NormalizationError(f"{field} must be a number, got {value!r}")
    if isinstance(value, int):
        if value < 0:
            raise NormalizationError(f"{field} must not be negative, got {value}")
        return value
    if isinstance(value, float):
        if value != value or value < 0 or not value.is_integer():
            raise NormalizationError(f"{field} must be a whole number, got {value!r}")
        return int(value)
    if isinstance(value, str):
        text = value.strip()
        if not text:
            return 0
        if not _WHOLE_NUMBER.match(text):
            raise NormalizationError(f"{field} is not a whole number: {value!r}")
        return int(text.replace(",", ""))
    raise NormalizationError(f"{field} has unsupported type {type(value).__name__}")


def cell_text(cell: Any) -> str:
    """Unwraps a team cell that is either a plain string or ``{"text": ...}``."""
    if isinstance(cell, dict):
        cell = cell.get("text")
    if cell is None:
        return ""
    return str(cell).strip()


def derive_code(name: str) -> str:
    return name[:3].upper()


class Normalizer:
    """Turns source-shaped RawRecords into canonical Team records."""

    def normalize_record(self, raw: RawRecord) -> Team:
        """Normalizes a single record. Raises NormalizationError on bad counts."""
        name = cell_text(raw.name)
        gold = coerce_count(raw.gold, "gold")
        silver = coerce_count(raw.silver, "silver")
        bronze = coerce_count(raw.bronze, "bronze")

        total: Optional[int] = None
        # Blank or numeric zero means absent; a string "0" is an explicit total
        if raw.total not in (None, "") and not (
            isinstance(raw.total, (int, float)) and raw.total == 0
        ):
            total = coerce_count(raw.total, "total")

        code = (raw.code or "").strip() or derive_code(name)
        return Team(
            code=code,
            name=name,
            gold=gold,
            silver=silver,
            bronze=bronze,
            total=total,
        )

    def normalize(self, records: Iterable[RawRecord]) -> List[Team]:
        """Normalizes records, skipping (and logging) the ones that fail."""
        teams: List[Team] = []
        skipped = 0
        for raw in records:
            try:
                teams.append(self.normalize_record(raw))
            except NormalizationError as e:
                skipped += 1
                logger.warning(f"Skipping medal record {raw.model_dump()}: {e}")
        if skipped:
            logger.info(
                f"Normalization kept {len(teams)} team(s), skipped {skipped} invalid record(s)."
            )
        return teams
