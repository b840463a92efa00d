"""HTTP surface tests through FastAPI's TestClient."""

import pytest
from fastapi.testclient import TestClient

from nhl_stats.api.app import create_app
from nhl_stats.upstream.espn_client import ESPNClient
from nhl_stats.upstream.nhl_client import NHLClient

from conftest import ESPN_BASE, NHL_BASE, FakeUpstream, espn_route, nhl_route


@pytest.fixture
def serve(league_routes):
    def build(nhl_routes=None, espn_routes=None):
        routes = league_routes if nhl_routes is None else nhl_routes
        nhl_fake = FakeUpstream({nhl_route(k): v for k, v in routes.items()})
        espn_fake = FakeUpstream({espn_route(k): v for k, v in (espn_routes or {}).items()})
        app = create_app(
            nhl_client=NHLClient(client=nhl_fake.client(), base_url=NHL_BASE),
            espn_client=ESPNClient(client=espn_fake.client(), base_url=ESPN_BASE),
        )
        return TestClient(app), nhl_fake

    return build


def test_health(serve):
    client, _ = serve()
    with client:
        response = client.get("/health")

    assert response.status_code == 200
    assert response.json()["status"] == "ok"


def test_entrypoints_listing(serve):
    client, _ = serve()
    with client:
        body = client.get("/entrypoints").json()

    assert body["count"] == 7
    keys = {e["key"] for e in body["entrypoints"]}
    assert keys == {"overview", "standings", "player", "leaders", "team", "report", "schedule"}
    report = next(e for e in body["entrypoints"] if e["key"] == "report")
    assert report["price"]["amount"] == 5000


def test_invoke_standings(serve):
    client, nhl = serve()
    with client:
        response = client.post("/entrypoints/standings/invoke", json={"input": {"conference": "eastern"}})

    assert response.status_code == 200
    output = response.json()["output"]
    assert output["count"] == 2
    assert output["standings"][0]["team"] == "WSH"
    assert nhl.paths == ["/v1/standings/now"]


def test_invoke_without_body_uses_defaults(serve):
    client, _ = serve()
    with client:
        response = client.post("/entrypoints/overview/invoke")

    assert response.status_code == 200
    assert response.json()["output"]["dataSource"] == "NHL Official API (live)"


def test_invalid_input_is_400(serve):
    client, nhl = serve()
    with client:
        response = client.post("/entrypoints/leaders/invoke", json={"input": {"limit": 50}})

    assert response.status_code == 400
    assert response.json()["detail"][0]["loc"] == ["limit"]
    assert nhl.requests == []


def test_unknown_operation_is_404(serve):
    client, _ = serve()
    with client:
        response = client.post("/entrypoints/injuries/invoke", json={"input": {}})

    assert response.status_code == 404


def test_upstream_failure_is_502(serve, league_routes):
    league_routes["/standings/now"] = 503
    client, _ = serve(league_routes)
    with client:
        response = client.post("/entrypoints/standings/invoke", json={"input": {}})

    assert response.status_code == 502
    detail = response.json()["detail"]
    assert detail["source"] == "NHL"
    assert detail["upstream_status"] == 503
    assert detail["message"] == "NHL API error: 503"
