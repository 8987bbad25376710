"""
Shared fixtures: a dialog manager wired to scripted, in-process collaborators.
"""
import random

import pytest

from travelbot.graph.deps import DialogDeps
from travelbot.graph.graph import DialogManager
from travelbot.graph.nodes_fallback import handle_out_of_domain
from travelbot.models import Intent
from travelbot.utils.memory import SessionStore
from travelbot.utils.schemas import FlightResult, HotelResult


class ScriptedNLU:
    """Returns queued intents / slot updates in order; records every call."""

    def __init__(self):
        self.intents = []
        self.updates = []
        self.classified = []
        self.extracted = []

    async def classify_intent(self, message):
        self.classified.append(message)
        return self.intents.pop(0) if self.intents else Intent.OTHER

    async def extract_slots(self, message, intent, existing=None):
        self.extracted.append((message, intent, existing))
        return self.updates.pop(0) if self.updates else {}


class FakeSearch:
    def __init__(self):
        self.fail = False
        self.calls = []

    async def search_flights(self, slots):
        self.calls.append(("flights", slots))
        if self.fail:
            raise ConnectionError("flight backend down")
        return [
            FlightResult(
                id="f1",
                airline="Delta",
                flight_number="DE1234",
                from_=slots.from_city,
                to=slots.to_city,
                departure_time="08:15",
                arrival_time="11:40",
                duration="3h 25m",
                price=320,
            )
        ]

    async def search_hotels(self, slots):
        self.calls.append(("hotels", slots))
        if self.fail:
            raise ConnectionError("hotel backend down")
        return [
            HotelResult(
                id="h1",
                name="Grand Plaza Hotel",
                location=slots.location,
                rating=4,
                price_per_night=180,
                amenities=["Free WiFi", "Pool"],
            )
        ]


@pytest.fixture
def nlu():
    return ScriptedNLU()


@pytest.fixture
def search():
    return FakeSearch()


@pytest.fixture
def store():
    return SessionStore()


@pytest.fixture
def deps(store, nlu, search):
    rng = random.Random(7)
    return DialogDeps(
        store=store,
        classify_intent=nlu.classify_intent,
        extract_slots=nlu.extract_slots,
        search_flights=search.search_flights,
        search_hotels=search.search_hotels,
        fallback=lambda message: handle_out_of_domain(message, rng),
        timeout=5,
    )


@pytest.fixture
def manager(deps):
    return DialogManager(deps)
