"""Shared parsing for the "medal standings" JSON shape.

Both the structured API and the JSON embedded in the primary page carry
the same structure::

    [{"rows": [{"cells": [{"text": "Norway"}, "12", "7", "7", "26"]}, ...]}]

Only the first standings group is read.
"""

from typing import Any, List

from loguru import logger

from medal_table.models.team import RawRecord


def standings_to_records(standings: Any) -> List[RawRecord]:
    """Maps each row of the first standings group to a RawRecord."""
    if not isinstance(standings, list) or not standings:
        return []
    first = standings[0]
    rows = first.get("rows") if isinstance(first, dict) else None
    if not isinstance(rows, list):
        return []

    records: List[RawRecord] = []
    for row in rows:
        cells = row.get("cells") if isinstance(row, dict) else None
        if not isinstance(cells, list) or not cells:
            logger.debug(f"Skipping standings row without cells: {row!r}")
            continue
        team_cell, gold, silver, bronze, total = (list(cells) + [None] * 5)[:5]
        records.append(
            RawRecord(name=team_cell, gold=gold, silver=silver, bronze=bronze, total=total)
        )
    return records
