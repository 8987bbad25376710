# travelbot/graph/slots.py
"""
Slot completeness and progressive merge.

Field identifiers (SlotField) are separate from the phrases shown to users
(SLOT_LABELS), so the follow-up wording can change without touching the
completeness rules.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional

from pydantic import BaseModel

from ..models import Intent, Session, slot_model
from ..utils.schemas import FLIGHT_FIELDS, HOTEL_FIELDS


class SlotField(str, Enum):
    # values are the slot model attribute names
    ORIGIN_CITY = "from_city"
    DESTINATION_CITY = "to_city"
    DEPARTURE_DATE = "departure_date"
    PASSENGER_COUNT = "passenger_count"
    HOTEL_LOCATION = "location"
    CHECK_IN = "check_in"
    CHECK_OUT = "check_out"
    GUEST_COUNT = "guest_count"


SLOT_LABELS: Dict[SlotField, str] = {
    SlotField.ORIGIN_CITY: "origin city",
    SlotField.DESTINATION_CITY: "destination city",
    SlotField.DEPARTURE_DATE: "departure date",
    SlotField.PASSENGER_COUNT: "number of passengers",
    SlotField.HOTEL_LOCATION: "hotel location",
    SlotField.CHECK_IN: "check-in date",
    SlotField.CHECK_OUT: "check-out date",
    SlotField.GUEST_COUNT: "number of guests",
}

_FLIGHT_REQUIRED = [
    SlotField.ORIGIN_CITY,
    SlotField.DESTINATION_CITY,
    SlotField.DEPARTURE_DATE,
    SlotField.PASSENGER_COUNT,
]
_HOTEL_REQUIRED = [
    SlotField.HOTEL_LOCATION,
    SlotField.CHECK_IN,
    SlotField.CHECK_OUT,
    SlotField.GUEST_COUNT,
]

# declaration order; the follow-up synthesizer relies on it
REQUIRED_FIELDS: Dict[Intent, List[SlotField]] = {
    Intent.FLIGHT: _FLIGHT_REQUIRED,
    Intent.HOTEL: _HOTEL_REQUIRED,
    Intent.BOTH: _FLIGHT_REQUIRED + _HOTEL_REQUIRED,
    Intent.OTHER: [],
}


def label(slot: Any) -> str:
    """Display phrase for a field; unknown fields are shown as given."""
    if isinstance(slot, SlotField):
        return SLOT_LABELS[slot]
    return str(slot)


@dataclass(frozen=True)
class Completeness:
    is_complete: bool
    missing: List[SlotField] = field(default_factory=list)

    @property
    def labels(self) -> List[str]:
        return [label(s) for s in self.missing]


def _filled(value: Any) -> bool:
    return value not in (None, "", 0)


def evaluate(intent: Optional[Intent], slots: Optional[BaseModel]) -> Completeness:
    """Check the slot object against the required fields of ``intent``."""
    if intent is None or intent is Intent.OTHER:
        return Completeness(is_complete=False)

    missing = [
        f
        for f in REQUIRED_FIELDS[intent]
        if slots is None or not _filled(getattr(slots, f.value, None))
    ]
    return Completeness(is_complete=not missing, missing=missing)


def evaluate_session(session: Session) -> Completeness:
    return evaluate(session.intent, session.current_slots())


# --- merge policy ---

# combined bookings: hotel field <- flight field when the hotel one is empty
_COMBINED_AUTOFILL = (
    ("location", "to_city"),
    ("check_in", "departure_date"),
    ("check_out", "return_date"),
    ("guest_count", "passenger_count"),
)


def merge_slots(
    intent: Intent, existing: Optional[BaseModel], update: Dict[str, Any]
) -> BaseModel:
    """
    Merge newly extracted fields into the intent's slot object.

    Later values win field by field and ``None`` never overwrites. An empty
    update returns the existing object unchanged. A non-empty update also
    applies the count defaults (1) and, for ``Both``, copies flight values
    into empty hotel fields. Raises ValidationError for invalid values.
    """
    model = slot_model(intent)
    if model is None:
        raise ValueError(f"intent {intent!r} carries no slots")

    if existing is None:
        existing = model()
    if not update:
        return existing

    data = existing.model_dump(exclude_none=True)
    data.update({k: v for k, v in update.items() if v is not None})

    if intent is Intent.BOTH:
        for hotel_key, flight_key in _COMBINED_AUTOFILL:
            if not data.get(hotel_key) and data.get(flight_key):
                data[hotel_key] = data[flight_key]

    if intent in (Intent.FLIGHT, Intent.BOTH) and "passenger_count" not in data:
        if any(data.get(k) for k in FLIGHT_FIELDS):
            data["passenger_count"] = 1
    if intent in (Intent.HOTEL, Intent.BOTH) and "guest_count" not in data:
        if any(data.get(k) for k in HOTEL_FIELDS):
            data["guest_count"] = 1

    return model.model_validate(data)
