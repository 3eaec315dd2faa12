from typing import Any, List, Optional

from loguru import logger

from medal_table.calculation.ranking import rank_teams
from medal_table.models.team import Team
from medal_table.normalization.normalizer import Normalizer
from .base_scraper import EmptyResultError
from .standings import standings_to_records


def parse_api_payload(data: Any, normalizer: Optional[Normalizer] = None) -> List[Team]:
    """Parses the structured medals endpoint response into ranked teams.

    Accepts either ``{"medalStandings": [...]}`` or the bare standings list.
    An empty result raises EmptyResultError so the caller falls back.
    """
    standings = data.get("medalStandings") if isinstance(data, dict) else data
    records = standings_to_records(standings)
    teams = (normalizer or Normalizer()).normalize(records)
    if not teams:
        raise EmptyResultError("API returned no medal entries")
    logger.debug(f"Parsed {len(teams)} teams from API payload")
    return rank_teams(teams)
