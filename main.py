import sys
import asyncio
import argparse

# --- Settings/Logging ---
from medal_table.logging.setup import setup_logging
from medal_table.config.settings import settings

setup_logging()

from loguru import logger

import uvicorn
from rich import print
from rich.panel import Panel
from rich.table import Table

from medal_table.api.server import create_app
from medal_table.models.report import FetchResult
from medal_table.scrapers.base_scraper import ScraperError
from medal_table.scrapers.orchestrator import MedalOrchestrator


def render_table(result: FetchResult) -> Table:
    """Builds a rich table of the ranked teams."""
    table = Table(title=f"Medal table ({result.tier.value}: {result.source})")
    for column in ("#", "Code", "Team", "Gold", "Silver", "Bronze", "Total", "Score"):
        table.add_column(column, justify="left" if column in ("Code", "Team") else "right")
    for rank, team in enumerate(result.teams, start=1):
        table.add_row(
            str(rank),
            team.code,
            team.name,
            str(team.gold),
            str(team.silver),
            str(team.bronze),
            str(team.total),
            f"{team.score:g}",
        )
    return table


async def run_fetch_once() -> int:
    """Runs the fallback chain once and prints the ranking."""
    orchestrator = MedalOrchestrator()
    try:
        result = await orchestrator.fetch()
    except ScraperError as e:
        logger.error(f"Unable to load medal data: {e}")
        for detail in getattr(e, "errors", []):
            logger.error(f"  {detail}")
        return 1
    finally:
        await orchestrator.close()

    print(render_table(result))
    return 0


def serve() -> None:
    """Starts the HTTP server."""
    logger.info(f"Games code: {settings.games_code}")
    print(
        Panel(
            f"Medal table server listening on http://localhost:{settings.port}",
            title="Medal Table",
        )
    )
    uvicorn.run(
        create_app(),
        host=settings.host,
        port=settings.port,
        log_config=None,  # keep the loguru intercept in place
    )


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description="Weighted medal table service.")
    parser.add_argument(
        "command",
        nargs="?",
        default="serve",
        choices=["serve", "fetch"],
        help="'serve' runs the HTTP API (default); 'fetch' prints the table once.",
    )
    args = parser.parse_args(argv)

    if args.command == "fetch":
        return asyncio.run(run_fetch_once())
    serve()
    return 0


if __name__ == "__main__":
    try:
        sys.exit(main())
    except KeyboardInterrupt:
        logger.info("Execution interrupted by user (KeyboardInterrupt).")
        sys.exit(0)
    except Exception as e:
        logger.exception(f"Unhandled exception in main execution: {e}")
        sys.exit(1)
