import asyncio
import os
import random
import uuid
from typing import List, Optional

from ..utils.schemas import FlightResult, FlightSlots, HotelResult, HotelSlots

SEARCH_DELAY = float(os.getenv("SEARCH_DELAY_SECONDS", "0.5"))

AIRLINES = ["American Airlines", "Delta", "United", "Southwest", "JetBlue"]

HOTEL_NAMES = [
    "Grand Plaza Hotel",
    "Luxury Suites",
    "City Center Inn",
    "Boutique Resort",
    "Business Hotel",
    "Comfort Lodge",
    "Premium Towers",
]

AMENITIES = [
    ["Free WiFi", "Pool", "Gym", "Restaurant"],
    ["Free WiFi", "Spa", "Room Service", "Concierge"],
    ["Free WiFi", "Business Center", "Parking"],
    ["Free WiFi", "Pool", "Bar", "Laundry"],
    ["Free WiFi", "Gym", "Restaurant", "Airport Shuttle"],
    ["Free WiFi", "Pool", "Spa", "Room Service", "Valet Parking"],
    ["Free WiFi", "Business Center", "Restaurant", "Gym"],
]


class MockSearchRepo:
    """Generates plausible flight and hotel offers; no external inventory."""

    def __init__(self, rng: Optional[random.Random] = None, delay: float = SEARCH_DELAY):
        self.rng = rng or random.Random()
        self.delay = delay

    async def search_flights(self, slots: FlightSlots) -> List[FlightResult]:
        if not (slots.from_city and slots.to_city):
            raise ValueError("flight search needs origin and destination")
        if self.delay:
            await asyncio.sleep(self.delay)

        rnd = self.rng
        results: List[FlightResult] = []
        for i in range(rnd.randint(3, 5)):
            airline = rnd.choice(AIRLINES)
            dep_hour = rnd.randint(0, 23)
            hours = rnd.randint(2, 9)
            results.append(
                FlightResult(
                    id=str(uuid.uuid4()),
                    airline=airline,
                    flight_number=f"{airline[:2].upper()}{rnd.randint(1000, 9999)}",
                    from_=slots.from_city,
                    to=slots.to_city,
                    departure_time=f"{dep_hour:02d}:{rnd.randint(0, 59):02d}",
                    arrival_time=f"{(dep_hour + hours) % 24:02d}:{rnd.randint(0, 59):02d}",
                    duration=f"{hours}h {rnd.randint(0, 59)}m",
                    price=rnd.randint(200, 999) + i * 50,
                    currency="USD",
                )
            )
        return sorted(results, key=lambda r: r.price)

    async def search_hotels(self, slots: HotelSlots) -> List[HotelResult]:
        if not slots.location:
            raise ValueError("hotel search needs a location")
        if self.delay:
            await asyncio.sleep(self.delay)

        rnd = self.rng
        results: List[HotelResult] = []
        for i in range(rnd.randint(4, 7)):
            rating = rnd.randint(3, 5)
            results.append(
                HotelResult(
                    id=str(uuid.uuid4()),
                    name=rnd.choice(HOTEL_NAMES),
                    location=slots.location,
                    rating=rating,
                    price_per_night=rnd.randint(80, 379) + rating * 20,
                    currency="USD",
                    amenities=list(rnd.choice(AMENITIES)),
                    image_url=f"https://picsum.photos/400/300?random={i}",
                )
            )
        return sorted(results, key=lambda r: r.price_per_night)
