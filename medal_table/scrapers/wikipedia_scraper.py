import html as html_lib
import re
from typing import List, Optional

from loguru import logger

from medal_table.calculation.ranking import rank_teams
from medal_table.models.team import RawRecord, Team
from medal_table.normalization.normalizer import Normalizer

MEDAL_TABLE_RE = re.compile(
    r'<table class="wikitable sortable plainrowheaders[^"]*"[^>]*>(.*?)</table>',
    re.DOTALL | re.IGNORECASE,
)

# Optional rank cell (absent on tied rows covered by a rowspan), the row
# header with the team name, then gold, silver, bronze and total cells.
MEDAL_ROW_RE = re.compile(
    r"<tr[^>]*>\s*"
    r"(?:<t[dh](?![^>]*scope=\"row\")[^>]*>\s*\d*\s*</t[dh]>\s*)?"
    r'<th scope="row"[^>]*>(.*?)</th>\s*'
    r"<td[^>]*>\s*(\d+)\s*</td>\s*"
    r"<td[^>]*>\s*(\d+)\s*</td>\s*"
    r"<td[^>]*>\s*(\d+)\s*</td>\s*"
    r"<td[^>]*>\s*(\d+)\s*</td>",
    re.DOTALL | re.IGNORECASE,
)

_TAG_RE = re.compile(r"<[^>]+>")
_FOOTNOTE_RE = re.compile(r"\[[^\]]*\]")


def clean_team_name(raw: str) -> str:
    """Strips markup, entities, footnote markers and the host '*' from a name."""
    text = _TAG_RE.sub("", raw)
    text = html_lib.unescape(text).replace("\xa0", " ")
    text = _FOOTNOTE_RE.sub("", text)
    return " ".join(text.split()).rstrip("*").strip()


def parse_wikipedia_page(html: str, normalizer: Optional[Normalizer] = None) -> List[Team]:
    """Extracts ranked teams from the first sortable medal table on the page."""
    table = MEDAL_TABLE_RE.search(html)
    if not table:
        logger.debug("No medal table found on wiki page")
        return []

    records = [
        RawRecord(
            name=clean_team_name(m.group(1)),
            gold=m.group(2),
            silver=m.group(3),
            bronze=m.group(4),
            total=m.group(5),
        )
        for m in MEDAL_ROW_RE.finditer(table.group(1))
    ]
    return rank_teams((normalizer or Normalizer()).normalize(records))
