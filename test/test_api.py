import pytest
from fastapi.testclient import TestClient

from walkify import main
from walkify.config.place_types import Category
from walkify.exceptions import RouteGenerationError
from walkify.models.response import RouteResult, RouteWaypoint
from walkify.services.route.poi_aggregator import PoiAggregator

from conftest import StubResolver, place


class StubRouteService:
    def __init__(self, result=None, error=None, aggregator=None):
        self.result = result
        self.error = error
        self.aggregator = aggregator
        self.calls = []

    async def generate_route_from_text(self, origin, text, route_mode=None):
        self.calls.append((origin, text, route_mode))
        if self.error is not None:
            raise self.error
        return self.result


@pytest.fixture
def client():
    return TestClient(main.app)


def test_health_check(client):
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json()["status"] == "healthy"


def test_route_query_returns_route(monkeypatch, client):
    route = RouteResult(
        points=[(50.4501, 30.5234), (50.4541, 30.5334)],
        waypoints=[RouteWaypoint(location=(50.452, 30.528), name="Кава", category=Category.CAFE, marker="cafe")],
        distance_km=1.2,
        estimated_time_minutes=16,
        locations=["Маріїнський парк", "Кава"],
    )
    stub = StubRouteService(result=route)
    monkeypatch.setattr(main, "route_service", stub)

    response = client.post(
        "/api/v1/routes/query",
        json={"text": "прогулянка до парку через кав'ярню", "origin": {"lat": 50.4501, "lng": 30.5234}},
    )

    assert response.status_code == 200
    body = response.json()
    assert body["distance_km"] == 1.2
    assert body["locations"] == ["Маріїнський парк", "Кава"]
    assert body["waypoints"][0]["marker"] == "cafe"
    # Origin reaches the service as (lng, lat)
    assert stub.calls == [((30.5234, 50.4501), "прогулянка до парку через кав'ярню", None)]


def test_route_query_passes_route_mode(monkeypatch, client):
    stub = StubRouteService(result=RouteResult())
    monkeypatch.setattr(main, "route_service", stub)

    response = client.post(
        "/api/v1/routes/query",
        json={"text": "прогулянка", "origin": {"lat": 50.45, "lng": 30.52}, "route_mode": "exploration"},
    )

    assert response.status_code == 200
    assert stub.calls[0][2] == "exploration"


def test_user_facing_failure_maps_to_422(monkeypatch, client):
    stub = StubRouteService(error=RouteGenerationError("Не вдалося знайти музей поблизу вас."))
    monkeypatch.setattr(main, "route_service", stub)

    response = client.post("/api/v1/routes/query", json={"text": "до музею", "origin": {"lat": 50.45, "lng": 30.52}})

    assert response.status_code == 422
    assert response.json()["detail"] == "Не вдалося знайти музей поблизу вас."


def test_unexpected_failure_maps_to_500(monkeypatch, client):
    monkeypatch.setattr(main, "route_service", StubRouteService(error=RuntimeError("boom")))

    response = client.post("/api/v1/routes/query", json={"text": "до парку", "origin": {"lat": 50.45, "lng": 30.52}})

    assert response.status_code == 500
    assert "boom" in response.json()["detail"]


def test_parse_endpoint_runs_rule_parser(client):
    response = client.post("/parse", json={"text": "прогулянка до парку 3 км"})

    assert response.status_code == 200
    body = response.json()
    assert body["destination_category"] == "park"
    assert body["target_distance_km"] == 3.0
    assert body["is_exploration"] is False


def test_nearby_pois_endpoint(monkeypatch, client):
    park = place("Маріїнський парк", 30.5364, 50.4467, Category.PARK)
    resolver = StubResolver(by_category={Category.PARK: [park]})
    monkeypatch.setattr(main, "route_service", StubRouteService(aggregator=PoiAggregator(resolver)))

    response = client.post(
        "/api/v1/pois/nearby",
        json={"center": {"lat": 50.4501, "lng": 30.5234}, "categories": ["park"], "radius_m": 2000},
    )

    assert response.status_code == 200
    assert [p["name"] for p in response.json()] == ["Маріїнський парк"]
    assert resolver.nearby_calls == [((30.5234, 50.4501), Category.PARK, 2000, 1)]
