import asyncio

from travelbot.graph.nodes_search import format_flight_results, format_hotel_results
from travelbot.repositories.search_repo import MockSearchRepo
from travelbot.utils.schemas import FlightSlots, HotelSlots

r = MockSearchRepo(delay=0)
flights = asyncio.run(
    r.search_flights(FlightSlots(from_city="New York", to_city="Los Angeles", passenger_count=1))
)
print(format_flight_results(flights))
hotels = asyncio.run(r.search_hotels(HotelSlots(location="Paris", guest_count=2)))
print(format_hotel_results(hotels))
