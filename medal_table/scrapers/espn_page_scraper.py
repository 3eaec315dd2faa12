import json
import re
from typing import Callable, List, Optional, Tuple

from loguru import logger

from medal_table.calculation.ranking import rank_teams
from medal_table.models.team import RawRecord, Team
from medal_table.normalization.normalizer import Normalizer
from .standings import standings_to_records

_NAME_CHARS = r"A-Za-zÀ-ÖØ-öø-ÿ .()'’-"

# Page state JSON: "medalStandings":[...],"medalLeaders"
EMBEDDED_STANDINGS_RE = re.compile(
    r'"medalStandings":(\[.*?\]),"medalLeaders"', re.DOTALL
)

# Text rendering of the table: "Image: Flag of Norway NOR Norway | 12 | 7 | 7 | 26"
INLINE_ROW_RE = re.compile(
    r"Image:\s*[A-Za-z ]+\s*([A-Z]{3})\s+([" + _NAME_CHARS + r"]+?)"
    r"\s*\|\s*(\d+)\s*\|\s*(\d+)\s*\|\s*(\d+)\s*\|\s*(\d+)"
)

# Server-rendered table row with the team code in a data-text attribute
TABLE_ROW_RE = re.compile(
    r'<tr[^>]*>\s*<td[^>]*data-text="([A-Z]{3})"[^>]*>.*?</td>'
    r".*?<td[^>]*>\s*([" + _NAME_CHARS + r"]+?)\s*</td>"
    r".*?<td[^>]*>\s*(\d+)\s*</td>"
    r".*?<td[^>]*>\s*(\d+)\s*</td>"
    r".*?<td[^>]*>\s*(\d+)\s*</td>",
    re.DOTALL | re.IGNORECASE,
)


def embedded_json_records(html: str) -> List[RawRecord]:
    match = EMBEDDED_STANDINGS_RE.search(html)
    if not match:
        return []
    try:
        standings = json.loads(match.group(1))
    except (ValueError, RecursionError) as e:
        logger.warning(f"Failed to parse embedded medalStandings JSON: {e}")
        return []
    return standings_to_records(standings)


def inline_text_records(html: str) -> List[RawRecord]:
    return [
        RawRecord(
            code=m.group(1),
            name=m.group(2).strip(),
            gold=m.group(3),
            silver=m.group(4),
            bronze=m.group(5),
            total=m.group(6),
        )
        for m in INLINE_ROW_RE.finditer(html)
    ]


def table_row_records(html: str) -> List[RawRecord]:
    # No total column in this layout; the Normalizer sums the tiers
    return [
        RawRecord(
            code=m.group(1).upper(),
            name=m.group(2).strip(),
            gold=m.group(3),
            silver=m.group(4),
            bronze=m.group(5),
        )
        for m in TABLE_ROW_RE.finditer(html)
    ]


PAGE_STRATEGIES: Tuple[Tuple[str, Callable[[str], List[RawRecord]]], ...] = (
    ("embedded-json", embedded_json_records),
    ("inline-text", inline_text_records),
    ("table-rows", table_row_records),
)


def parse_primary_page(html: str, normalizer: Optional[Normalizer] = None) -> List[Team]:
    """Extracts ranked teams from the primary medals page.

    Strategies are tried in order and the first one producing teams wins.
    Returns an empty list when nothing on the page matches.
    """
    normalizer = normalizer or Normalizer()
    for name, strategy in PAGE_STRATEGIES:
        teams = normalizer.normalize(strategy(html))
        if teams:
            logger.debug(f"Primary page matched via {name}: {len(teams)} teams")
            return rank_teams(teams)
        logger.debug(f"Primary page strategy {name} found no teams")
    return []
