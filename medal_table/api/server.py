from pathlib import Path
from typing import AsyncIterator, Optional

from fastapi import Depends, FastAPI
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles
from loguru import logger

from medal_table.config.settings import settings
from medal_table.models.report import MedalReport
from medal_table.scrapers.orchestrator import MedalOrchestrator

ERROR_BODY = {"error": "Unable to load medal data"}


class NoCacheStaticFiles(StaticFiles):
    """Static files served with immediate expiry and no entity tag."""

    def file_response(self, *args, **kwargs):
        response = super().file_response(*args, **kwargs)
        response.headers["Cache-Control"] = "public, max-age=0"
        if "etag" in response.headers:
            del response.headers["etag"]
        return response


async def get_orchestrator() -> AsyncIterator[MedalOrchestrator]:
    """One orchestrator (and HTTP client) per request, closed afterwards."""
    orchestrator = MedalOrchestrator()
    try:
        yield orchestrator
    finally:
        await orchestrator.close()


def create_app(static_dir: Optional[str] = None) -> FastAPI:
    app = FastAPI(title="Medal Table", docs_url=None, redoc_url=None)

    @app.get("/api/medals")
    async def medals(orchestrator: MedalOrchestrator = Depends(get_orchestrator)):
        try:
            result = await orchestrator.fetch()
        except Exception:
            logger.exception("Failed to load medal data")
            return JSONResponse(status_code=500, content=ERROR_BODY)

        logger.info(f"Serving {len(result.teams)} teams from {result.tier.value} ({result.source})")
        report = MedalReport.from_result(result)
        return JSONResponse(
            content=report.model_dump(mode="json", by_alias=True),
            headers={"Cache-Control": "no-store"},
        )

    @app.get("/healthz")
    async def healthz():
        return {"status": "ok", "gamesCode": settings.games_code}

    directory = Path(static_dir or settings.static_dir)
    if directory.is_dir():
        app.mount("/", NoCacheStaticFiles(directory=directory, html=True), name="static")
    else:
        logger.warning(f"Static directory {directory} not found; front end disabled")

    return app
