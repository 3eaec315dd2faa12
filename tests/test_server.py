import pytest
from fastapi.testclient import TestClient

from conftest import PAGE_URL, WIKI_URL
from medal_table.api.server import create_app, get_orchestrator
from medal_table.models.enums import SourceTier
from medal_table.models.report import FetchResult
from medal_table.models.team import Team
from medal_table.scrapers.base_scraper import MedalDataUnavailable


class FakeOrchestrator:
    def __init__(self, result=None, error=None):
        self.result = result
        self.error = error

    async def fetch(self):
        if self.error:
            raise self.error
        return self.result


@pytest.fixture
def static_dir(tmp_path):
    (tmp_path / "index.html").write_text("<html><body>medals</body></html>")
    return tmp_path


def client_for(orchestrator, static_dir):
    app = create_app(static_dir=str(static_dir))
    app.dependency_overrides[get_orchestrator] = lambda: orchestrator
    return TestClient(app)


def test_medals_endpoint_returns_report(static_dir):
    teams = [
        Team(code="NOR", name="Norway", gold=12, silver=7, bronze=7),
        Team(code="ITA", name="Italy", gold=10, silver=5, bronze=3, total=18),
    ]
    result = FetchResult(tier=SourceTier.WIKI, source=WIKI_URL, teams=teams)
    response = client_for(FakeOrchestrator(result=result), static_dir).get("/api/medals")

    assert response.status_code == 200
    assert response.headers["cache-control"] == "no-store"
    body = response.json()
    assert set(body) == {"updatedAt", "source", "scoring", "teams"}
    assert body["updatedAt"].endswith("Z")
    assert body["source"] == WIKI_URL
    assert body["scoring"] == {"gold": 3, "silver": 1.5, "bronze": 1}
    assert isinstance(body["scoring"]["gold"], int)
    assert isinstance(body["scoring"]["bronze"], int)
    assert body["teams"][0] == {
        "code": "NOR",
        "name": "Norway",
        "gold": 12,
        "silver": 7,
        "bronze": 7,
        "total": 26,
        "score": 58.5,
    }


def test_source_reports_tier_that_produced_data(static_dir):
    result = FetchResult(
        tier=SourceTier.PAGE, source=PAGE_URL, teams=[Team(code="NOR", name="Norway", gold=1)]
    )
    body = client_for(FakeOrchestrator(result=result), static_dir).get("/api/medals").json()
    assert body["source"] == PAGE_URL


def test_pipeline_failure_returns_generic_500(static_dir):
    error = MedalDataUnavailable("all sources failed", errors=["api: secret detail"])
    response = client_for(FakeOrchestrator(error=error), static_dir).get("/api/medals")
    assert response.status_code == 500
    assert response.json() == {"error": "Unable to load medal data"}


def test_static_files_are_not_cached(static_dir):
    response = client_for(FakeOrchestrator(), static_dir).get("/")
    assert response.status_code == 200
    assert "medals" in response.text
    assert response.headers["cache-control"] == "public, max-age=0"
    assert "etag" not in response.headers


def test_healthz(static_dir):
    response = client_for(FakeOrchestrator(), static_dir).get("/healthz")
    assert response.json()["status"] == "ok"


def test_missing_static_dir_disables_front_end(tmp_path):
    app = create_app(static_dir=str(tmp_path / "missing"))
    app.dependency_overrides[get_orchestrator] = lambda: FakeOrchestrator()
    assert TestClient(app).get("/").status_code == 404
