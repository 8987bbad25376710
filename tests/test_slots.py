import pytest
from pydantic import ValidationError

from travelbot.graph.slots import SlotField, evaluate, merge_slots
from travelbot.models import Intent
from travelbot.utils.schemas import CombinedSlots, FlightSlots, HotelSlots


FULL_FLIGHT = dict(
    from_city="New York", to_city="Los Angeles", departure_date="2024-12-25", passenger_count=1
)


def test_flight_complete_without_return_date():
    r = evaluate(Intent.FLIGHT, FlightSlots(**FULL_FLIGHT))
    assert r.is_complete and r.missing == []


def test_flight_complete_with_return_date():
    r = evaluate(Intent.FLIGHT, FlightSlots(**FULL_FLIGHT, return_date="2025-01-02"))
    assert r.is_complete


@pytest.mark.parametrize("dropped", ["from_city", "to_city", "departure_date", "passenger_count"])
def test_flight_incomplete_when_any_required_missing(dropped):
    data = {k: v for k, v in FULL_FLIGHT.items() if k != dropped}
    r = evaluate(Intent.FLIGHT, FlightSlots(**data, return_date="2025-01-02"))
    assert not r.is_complete
    assert r.missing == [SlotField(dropped)]


def test_flight_missing_in_declaration_order():
    r = evaluate(Intent.FLIGHT, FlightSlots(to_city="Paris"))
    assert r.labels == ["origin city", "departure date", "number of passengers"]


def test_hotel_missing_in_declaration_order():
    r = evaluate(Intent.HOTEL, None)
    assert r.labels == ["hotel location", "check-in date", "check-out date", "number of guests"]


def test_both_lists_flight_then_hotel_fields():
    r = evaluate(Intent.BOTH, CombinedSlots(to_city="Tokyo", location="Tokyo"))
    assert r.missing == [
        SlotField.ORIGIN_CITY,
        SlotField.DEPARTURE_DATE,
        SlotField.PASSENGER_COUNT,
        SlotField.CHECK_IN,
        SlotField.CHECK_OUT,
        SlotField.GUEST_COUNT,
    ]


@pytest.mark.parametrize("intent", [None, Intent.OTHER])
def test_no_task_is_never_complete(intent):
    r = evaluate(intent, None)
    assert not r.is_complete and r.missing == []


@pytest.mark.parametrize(
    "intent,slots",
    [
        (Intent.FLIGHT, FlightSlots(from_city="Boston")),
        (Intent.FLIGHT, FlightSlots(**FULL_FLIGHT)),
        (Intent.HOTEL, HotelSlots(location="Rome")),
        (Intent.BOTH, CombinedSlots(to_city="Tokyo")),
    ],
)
def test_merging_nothing_changes_nothing(intent, slots):
    assert merge_slots(intent, slots, {}) == slots


def test_merge_into_nothing_starts_empty():
    assert merge_slots(Intent.HOTEL, None, {}) == HotelSlots()


def test_later_values_win_and_none_never_overwrites():
    cur = FlightSlots(from_city="Boston", to_city="Miami", passenger_count=2)
    out = merge_slots(Intent.FLIGHT, cur, {"to_city": "Denver", "from_city": None})
    assert out.from_city == "Boston"
    assert out.to_city == "Denver"
    assert out.passenger_count == 2


def test_passenger_count_defaults_once_flight_data_arrives():
    out = merge_slots(Intent.FLIGHT, None, {"from_city": "New York", "to_city": "Los Angeles"})
    assert out.passenger_count == 1


def test_guest_count_defaults_once_hotel_data_arrives():
    out = merge_slots(Intent.HOTEL, None, {"location": "Paris"})
    assert out.guest_count == 1


def test_combined_copies_flight_values_into_empty_hotel_fields():
    out = merge_slots(
        Intent.BOTH,
        None,
        {"to_city": "London", "departure_date": "2025-03-01", "return_date": "2025-03-08",
         "passenger_count": 3},
    )
    assert out.location == "London"
    assert out.check_in == "2025-03-01"
    assert out.check_out == "2025-03-08"
    assert out.guest_count == 3


def test_combined_keeps_explicit_hotel_values():
    out = merge_slots(Intent.BOTH, None, {"to_city": "London", "location": "Windsor"})
    assert out.location == "Windsor"


def test_merge_rejects_invalid_values():
    with pytest.raises(ValidationError):
        merge_slots(Intent.FLIGHT, None, {"passenger_count": -2})


def test_other_carries_no_slots():
    with pytest.raises(ValueError):
        merge_slots(Intent.OTHER, None, {"from_city": "Boston"})
