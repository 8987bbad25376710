# travelbot/graph/followup.py
from __future__ import annotations

from typing import Any, Dict, Optional, Sequence, Tuple

from ..models import Intent
from .slots import SlotField, label

SINGLE_QUESTIONS: Dict[SlotField, str] = {
    SlotField.ORIGIN_CITY: "Where would you like to fly from?",
    SlotField.DESTINATION_CITY: "Where would you like to fly to?",
    SlotField.DEPARTURE_DATE: "When would you like to depart?",
    SlotField.PASSENGER_COUNT: "How many passengers will be traveling?",
    SlotField.HOTEL_LOCATION: "Which city would you like to stay in?",
    SlotField.CHECK_IN: "When would you like to check in?",
    SlotField.CHECK_OUT: "When would you like to check out?",
    SlotField.GUEST_COUNT: "How many guests will be staying?",
}

# asked first when several fields are outstanding
PRIORITY = [
    SlotField.ORIGIN_CITY,
    SlotField.DEPARTURE_DATE,
    SlotField.PASSENGER_COUNT,
    SlotField.CHECK_IN,
    SlotField.CHECK_OUT,
    SlotField.GUEST_COUNT,
]

PAIR_QUESTIONS: Dict[Tuple[SlotField, SlotField], str] = {
    (SlotField.ORIGIN_CITY, SlotField.DEPARTURE_DATE): (
        "Where would you like to fly from and when would you like to depart?"
    ),
    (SlotField.DEPARTURE_DATE, SlotField.PASSENGER_COUNT): (
        "When would you like to depart and how many passengers will be traveling?"
    ),
    (SlotField.CHECK_IN, SlotField.CHECK_OUT): (
        "When would you like to check in and check out?"
    ),
}


def single_question(slot: Any) -> str:
    q = SINGLE_QUESTIONS.get(slot)
    if q:
        return q
    return f"Could you please provide the {label(slot)}?"


def follow_up_question(missing: Sequence[Any], intent: Optional[Intent] = None) -> str:
    """
    Build one question for the outstanding fields.

    ``missing`` is the evaluator's ordered list. With several fields left the
    global PRIORITY order decides which one or two are asked for. ``intent``
    does not change the wording today; it is accepted so callers pass the
    same context the evaluator saw.
    """
    if len(missing) == 1:
        return single_question(missing[0])

    outstanding = [f for f in PRIORITY if f in missing]

    if len(outstanding) == 1:
        return single_question(outstanding[0])

    if len(outstanding) >= 2:
        first, second = outstanding[0], outstanding[1]
        pair = PAIR_QUESTIONS.get((first, second))
        if pair:
            return pair
        return (
            f"I need to know: {label(first)} and {label(second)}. "
            "Could you provide these details?"
        )

    # nothing from the priority list is missing
    listed = ", ".join(label(f) for f in list(missing)[:3])
    return f"I need a few more details: {listed}. Could you provide this information?"
