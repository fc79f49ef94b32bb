import pytest

from walkify.config.place_types import Category
from walkify.services.route.poi_aggregator import PoiAggregator

from conftest import ORIGIN, StubResolver, place

LNG, LAT = ORIGIN

PARK_1 = place("Маріїнський парк", LNG + 0.010, LAT + 0.004, Category.PARK)
PARK_2 = place("Хрещатий парк", LNG + 0.012, LAT - 0.002, Category.PARK)
CAFE_1 = place("Кава на Хрещатику", LNG + 0.002, LAT + 0.001, Category.CAFE)
# Same spot as PARK_1, reported as a museum
MUSEUM_AT_PARK = place("Музей у парку", LNG + 0.0102, LAT + 0.0041, Category.MUSEUM)


@pytest.mark.asyncio
async def test_one_place_per_category_in_category_order():
    resolver = StubResolver(by_category={Category.PARK: [PARK_1, PARK_2], Category.CAFE: [CAFE_1]})
    aggregator = PoiAggregator(resolver)

    pois = await aggregator.search_nearby_pois(ORIGIN, [Category.CAFE, Category.PARK], radius_m=3000)

    assert pois == [CAFE_1, PARK_1]
    assert [call[3] for call in resolver.nearby_calls] == [1, 1]


@pytest.mark.asyncio
async def test_limit_per_type_is_honoured():
    resolver = StubResolver(by_category={Category.PARK: [PARK_1, PARK_2], Category.CAFE: [CAFE_1]})
    aggregator = PoiAggregator(resolver)

    pois = await aggregator.search_nearby_pois(
        ORIGIN, [Category.PARK, Category.CAFE], radius_m=3000, limit_per_type=2
    )

    assert pois == [PARK_1, PARK_2, CAFE_1]
    assert resolver.nearby_calls[0] == (ORIGIN, Category.PARK, 3000, 2)


@pytest.mark.asyncio
async def test_places_on_the_same_spot_are_deduplicated():
    resolver = StubResolver(by_category={Category.PARK: [PARK_1], Category.MUSEUM: [MUSEUM_AT_PARK]})
    aggregator = PoiAggregator(resolver)

    pois = await aggregator.search_nearby_pois(ORIGIN, [Category.PARK, Category.MUSEUM], radius_m=3000)

    assert pois == [PARK_1]


class GreedyResolver(StubResolver):
    """Returns every known place regardless of the requested limit."""

    async def find_places_nearby(self, origin, category, radius_m=5000, limit=1):
        self.nearby_calls.append((origin, category, radius_m, limit))
        return list(self.by_category.get(category, []))


@pytest.mark.asyncio
async def test_stops_once_total_limit_is_reached():
    resolver = GreedyResolver(by_category={Category.PARK: [PARK_1, PARK_2], Category.CAFE: [CAFE_1]})
    aggregator = PoiAggregator(resolver)

    pois = await aggregator.search_nearby_pois(ORIGIN, [Category.PARK, Category.CAFE], radius_m=3000)

    assert pois == [PARK_1, PARK_2]
    assert [call[1] for call in resolver.nearby_calls] == [Category.PARK]


@pytest.mark.asyncio
async def test_empty_categories_find_nothing():
    resolver = StubResolver()
    aggregator = PoiAggregator(resolver)

    assert await aggregator.search_nearby_pois(ORIGIN, [], radius_m=3000) == []
    assert resolver.nearby_calls == []
