from typing import Any, Callable, Dict, List, NamedTuple, Optional, Sequence

from loguru import logger

from medal_table.config.settings import AppSettings, settings as default_settings
from medal_table.models.enums import FetchMode, SourceTier
from medal_table.models.report import FetchResult
from medal_table.models.team import Team
from .base_scraper import EmptyResultError, HttpTransport, MedalDataUnavailable, ScraperError
from .curl_fetcher import CurlFetcher
from .espn_api_scraper import parse_api_payload
from .espn_page_scraper import parse_primary_page
from .wikipedia_scraper import parse_wikipedia_page


class SourceStrategy(NamedTuple):
    """One fallback tier: where to fetch, how to fetch and how to parse."""

    tier: SourceTier
    url: str
    mode: FetchMode
    parse: Callable[[Any], List[Team]]
    headers: Optional[Dict[str, str]] = None


def default_strategies(app_settings: Optional[AppSettings] = None) -> List[SourceStrategy]:
    """API first, then the primary page, then the wiki page."""
    s = app_settings or default_settings
    api_headers = {"Accept": "application/json, text/plain, */*"}
    if s.pamedia_api_key:
        api_headers["apikey"] = s.pamedia_api_key
    return [
        SourceStrategy(SourceTier.API, str(s.api_url), FetchMode.JSON, parse_api_payload, api_headers),
        SourceStrategy(SourceTier.PAGE, str(s.source_url), FetchMode.TEXT, parse_primary_page),
        SourceStrategy(SourceTier.WIKI, str(s.wiki_url), FetchMode.TEXT, parse_wikipedia_page),
    ]


class MedalOrchestrator:
    """Runs the fallback chain until one tier yields teams.

    Tiers run strictly one after another. A thrown error and an empty
    result are treated alike: log a warning and move to the next tier.
    """

    def __init__(
        self,
        transport: Optional[HttpTransport] = None,
        strategies: Optional[Sequence[SourceStrategy]] = None,
    ):
        self.transport = transport or HttpTransport(fallback=CurlFetcher())
        self.strategies = list(strategies) if strategies is not None else default_strategies()

    async def _run(self, strategy: SourceStrategy) -> List[Team]:
        if strategy.mode == FetchMode.JSON:
            payload = await self.transport.fetch_json(strategy.url, headers=strategy.headers)
        else:
            payload = await self.transport.fetch_text(strategy.url, headers=strategy.headers)
        teams = strategy.parse(payload)
        if not teams:
            raise EmptyResultError(f"No medal entries parsed from {strategy.url}")
        return teams

    async def fetch(self) -> FetchResult:
        """Returns the ranked teams from the first tier that produces any."""
        errors: List[str] = []
        for strategy in self.strategies:
            logger.info(f"Fetching medals from {strategy.tier.value} source: {strategy.url}")
            try:
                teams = await self._run(strategy)
            except ScraperError as e:
                logger.warning(f"{strategy.tier.value} source failed, falling back: {e}")
                errors.append(f"{strategy.tier.value}: {e}")
                continue
            except Exception as e:
                logger.opt(exception=e).warning(
                    f"{strategy.tier.value} source raised {type(e).__name__}, falling back: {e}"
                )
                errors.append(f"{strategy.tier.value}: {e}")
                continue
            logger.success(f"Loaded {len(teams)} teams from {strategy.tier.value} source")
            return FetchResult(tier=strategy.tier, source=strategy.url, teams=teams)

        raise MedalDataUnavailable(
            "Could not load medal table from any source", errors=errors
        )

    async def close(self):
        await self.transport.close()
