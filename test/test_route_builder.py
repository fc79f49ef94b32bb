import math

import pytest

from walkify.config.place_types import Category
from walkify.exceptions import ProviderError, RouteGenerationError
from walkify.models.response import RouteWaypoint
from walkify.services.route.response_builder import ResponseBuilderService
from walkify.services.route.route_builder import RouteBuilder

from conftest import ORIGIN, FakeDirections, place

DESTINATION = (30.5334, 50.4601)
STOP = (30.5284, 50.4521)


@pytest.mark.asyncio
async def test_points_start_at_origin_and_end_at_destination():
    builder = RouteBuilder(FakeDirections())

    route = await builder.build_route(ORIGIN, DESTINATION, [STOP])

    first_lat, first_lng = route.points[0]
    last_lat, last_lng = route.points[-1]
    assert math.isclose(first_lat, ORIGIN[1]) and math.isclose(first_lng, ORIGIN[0])
    assert math.isclose(last_lat, DESTINATION[1]) and math.isclose(last_lng, DESTINATION[0])


@pytest.mark.asyncio
async def test_directions_receive_ordered_lng_lat_coordinates():
    directions = FakeDirections()
    builder = RouteBuilder(directions)

    await builder.build_route(ORIGIN, DESTINATION, [STOP])

    assert directions.calls == [[ORIGIN, STOP, DESTINATION]]


@pytest.mark.asyncio
async def test_distance_and_time_are_converted():
    builder = RouteBuilder(FakeDirections(distances_m=[1234.567]))

    route = await builder.build_route(ORIGIN, DESTINATION)

    assert route.distance_km == 1.23
    # 1234.567 m at 1.25 m/s is ~987.65 s
    assert route.estimated_time_minutes == 16


@pytest.mark.asyncio
async def test_waypoints_get_placeholder_names():
    builder = RouteBuilder(FakeDirections())

    route = await builder.build_route(ORIGIN, DESTINATION, [STOP, (30.5300, 50.4550)])

    assert [w.name for w in route.waypoints] == ["Проміжна точка 1", "Проміжна точка 2"]
    assert route.waypoints[0].location == (STOP[1], STOP[0])
    assert route.waypoints[0].marker == "custom"
    assert route.locations == []


@pytest.mark.asyncio
async def test_missing_route_raises_user_facing_error():
    builder = RouteBuilder(FakeDirections(no_route_on=[1]))

    with pytest.raises(RouteGenerationError):
        await builder.build_route(ORIGIN, DESTINATION)


@pytest.mark.asyncio
async def test_provider_failure_raises_user_facing_error():
    builder = RouteBuilder(FakeDirections(error=ProviderError("mapbox: API error 500", status_code=500)))

    with pytest.raises(RouteGenerationError) as exc_info:
        await builder.build_route(ORIGIN, DESTINATION)

    assert exc_info.value.status_code == 422
    assert isinstance(exc_info.value.__cause__, ProviderError)


@pytest.mark.asyncio
async def test_response_builder_replaces_placeholders():
    builder = RouteBuilder(FakeDirections())
    route = await builder.build_route(ORIGIN, DESTINATION, [STOP])
    cafe = place("Кава", STOP[0], STOP[1], Category.CAFE)
    museum = place("Музей", 30.53, 50.45, Category.MUSEUM)

    named = ResponseBuilderService().with_stops(route, [cafe, museum], locations=["Парк", "Кава", "Музей"])

    assert named.waypoints == [
        RouteWaypoint(location=(STOP[1], STOP[0]), name="Кава", category=Category.CAFE, marker="cafe"),
        RouteWaypoint(location=(50.45, 30.53), name="Музей", category=Category.MUSEUM, marker="custom"),
    ]
    assert named.locations == ["Парк", "Кава", "Музей"]
    assert named.points == route.points
