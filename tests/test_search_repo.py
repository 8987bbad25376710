import random

import pytest

from travelbot.graph.nodes_search import format_flight_results, format_hotel_results
from travelbot.repositories.search_repo import MockSearchRepo
from travelbot.utils.schemas import FlightResult, FlightSlots, HotelSlots


@pytest.fixture
def repo():
    return MockSearchRepo(rng=random.Random(42), delay=0)


@pytest.mark.asyncio
async def test_flights_match_route_and_are_sorted_by_price(repo):
    flights = await repo.search_flights(
        FlightSlots(from_city="New York", to_city="Los Angeles", departure_date="2024-12-25")
    )
    assert 3 <= len(flights) <= 5
    assert all(f.from_ == "New York" and f.to == "Los Angeles" for f in flights)
    prices = [f.price for f in flights]
    assert prices == sorted(prices)
    assert len({f.id for f in flights}) == len(flights)


@pytest.mark.asyncio
async def test_hotels_match_location_and_are_sorted_by_price(repo):
    hotels = await repo.search_hotels(HotelSlots(location="Paris", check_in="2025-03-01"))
    assert 4 <= len(hotels) <= 7
    assert {h.location for h in hotels} == {"Paris"}
    assert all(3 <= h.rating <= 5 for h in hotels)
    prices = [h.price_per_night for h in hotels]
    assert prices == sorted(prices)


@pytest.mark.asyncio
async def test_flight_search_needs_route(repo):
    with pytest.raises(ValueError):
        await repo.search_flights(FlightSlots(from_city="Boston"))


@pytest.mark.asyncio
async def test_hotel_search_needs_location(repo):
    with pytest.raises(ValueError):
        await repo.search_hotels(HotelSlots(check_in="2025-03-01"))


def test_flight_result_wire_names():
    f = FlightResult(
        id="x",
        airline="United",
        flight_number="UN1000",
        from_="Boston",
        to="Denver",
        departure_time="09:00",
        arrival_time="12:30",
        duration="3h 30m",
        price=410,
    )
    d = f.model_dump(by_alias=True)
    assert d["from"] == "Boston"
    assert d["flightNumber"] == "UN1000"
    assert d["departureTime"] == "09:00"
    assert d["currency"] == "USD"


@pytest.mark.asyncio
async def test_formatting_lists_every_result(repo):
    flights = await repo.search_flights(FlightSlots(from_city="Boston", to_city="Denver"))
    text = format_flight_results(flights)
    assert text.startswith(f"Found {len(flights)} flights:")
    assert "Boston → Denver" in text

    hotels = await repo.search_hotels(HotelSlots(location="Rome"))
    text = format_hotel_results(hotels)
    assert text.startswith(f"Found {len(hotels)} hotels in Rome:")
    assert text.count("/night") == len(hotels)


def test_formatting_empty_results():
    assert format_flight_results([]) == "Sorry, no flights found for your search criteria."
    assert format_hotel_results([]) == "Sorry, no hotels found for your search criteria."
