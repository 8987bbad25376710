import pytest
from pydantic import ValidationError

from travelbot.models import Intent, Stage
from travelbot.utils.memory import SessionStore
from travelbot.utils.schemas import FlightSlots


def test_new_session_defaults():
    store = SessionStore()
    s = store.get_or_create("u1")
    assert s.user_id == "u1"
    assert s.stage == Stage.INTENT_DETECTION
    assert s.intent is None
    assert s.flight_slots is None and s.hotel_slots is None and s.combined_slots is None
    assert s.conversation_history == []


def test_get_or_create_is_idempotent():
    store = SessionStore()
    assert store.get_or_create("u1") is store.get_or_create("u1")
    assert store.count() == 1


def test_update_merges_only_given_fields():
    store = SessionStore()
    store.update("u1", intent=Intent.FLIGHT, stage=Stage.SLOT_EXTRACTION)
    s = store.update("u1", flight_slots=FlightSlots(from_city="Boston"))

    assert s.intent == Intent.FLIGHT
    assert s.stage == Stage.SLOT_EXTRACTION
    assert s.flight_slots.from_city == "Boston"
    assert store.get_or_create("u1") == s


def test_update_accepts_plain_dicts_and_coerces_enums():
    store = SessionStore()
    s = store.update("u1", stage="search", hotel_slots={"location": "Paris", "guest_count": 2})
    assert s.stage is Stage.SEARCH
    assert s.hotel_slots.guest_count == 2


def test_update_rejects_invalid_slots_and_keeps_session():
    store = SessionStore()
    before = store.update("u1", intent=Intent.FLIGHT, flight_slots={"passenger_count": 2})

    with pytest.raises(ValidationError):
        store.update("u1", flight_slots={"passenger_count": 0})

    assert store.get_or_create("u1") == before


def test_user_id_cannot_be_changed():
    store = SessionStore()
    s = store.update("u1", user_id="someone-else")
    assert s.user_id == "u1"


def test_history_is_append_only_and_ordered():
    store = SessionStore()
    store.append_message("u1", "user", "hello")
    store.append_message("u1", "assistant", "hi there")
    store.update("u1", stage=Stage.SLOT_EXTRACTION)
    store.append_message("u1", "user", "flight please")

    hist = store.get_or_create("u1").conversation_history
    assert [(m.role, m.content) for m in hist] == [
        ("user", "hello"),
        ("assistant", "hi there"),
        ("user", "flight please"),
    ]
    assert hist[0].timestamp <= hist[1].timestamp <= hist[2].timestamp


def test_clear_starts_fresh():
    store = SessionStore()
    store.update("u1", intent=Intent.HOTEL)
    store.append_message("u1", "user", "hotel")
    store.clear("u1")

    assert store.count() == 0
    s = store.get_or_create("u1")
    assert s.intent is None and s.conversation_history == []


def test_count_tracks_distinct_users():
    store = SessionStore()
    for uid in ("a", "b", "c", "a"):
        store.get_or_create(uid)
    assert store.count() == 3


def test_turn_lock_is_per_user():
    store = SessionStore()
    assert store.lock("a") is store.lock("a")
    assert store.lock("a") is not store.lock("b")


def test_update_carries_history_over_without_copying():
    store = SessionStore()
    store.append_message("u1", "user", "flight to Oslo")
    hist = store.get_or_create("u1").conversation_history

    s = store.update("u1", intent=Intent.FLIGHT, flight_slots=FlightSlots(to_city="Oslo"))

    assert s.conversation_history is hist
    assert [m.content for m in s.conversation_history] == ["flight to Oslo"]


def test_update_cannot_replace_history():
    store = SessionStore()
    store.append_message("u1", "user", "hello")
    s = store.update("u1", conversation_history=[])
    assert [m.content for m in s.conversation_history] == ["hello"]


def test_clear_keeps_turn_lock():
    store = SessionStore()
    lock = store.lock("u1")
    store.get_or_create("u1")
    store.clear("u1")
    assert store.lock("u1") is lock
