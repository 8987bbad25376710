from datetime import datetime, timezone
from enum import Enum
from typing import List, Literal, Optional, Type

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from .utils.schemas import CombinedSlots, FlightSlots, HotelSlots


class Intent(str, Enum):
    FLIGHT = "Flight"
    HOTEL = "Hotel"
    BOTH = "Both"
    OTHER = "Other"


class Stage(str, Enum):
    INTENT_DETECTION = "intent_detection"
    SLOT_EXTRACTION = "slot_extraction"
    SEARCH = "search"
    COMPLETE = "complete"  # reserved, never entered by the dialog graph


# intent -> (session attribute, slot model). Other has no entry.
SLOT_BINDINGS = {
    Intent.FLIGHT: ("flight_slots", FlightSlots),
    Intent.HOTEL: ("hotel_slots", HotelSlots),
    Intent.BOTH: ("combined_slots", CombinedSlots),
}

SLOT_ATTRS = tuple(attr for attr, _ in SLOT_BINDINGS.values())


def slot_attr(intent: Optional[Intent]) -> Optional[str]:
    binding = SLOT_BINDINGS.get(intent)
    return binding[0] if binding else None


def slot_model(intent: Optional[Intent]) -> Optional[Type[BaseModel]]:
    binding = SLOT_BINDINGS.get(intent)
    return binding[1] if binding else None


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Message(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    role: Literal["user", "assistant"]
    content: str
    timestamp: datetime = Field(default_factory=_utcnow)


class Session(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    user_id: str
    stage: Stage = Stage.INTENT_DETECTION
    intent: Optional[Intent] = None

    flight_slots: Optional[FlightSlots] = None
    hotel_slots: Optional[HotelSlots] = None
    combined_slots: Optional[CombinedSlots] = None

    conversation_history: List[Message] = Field(default_factory=list)

    def current_slots(self) -> Optional[BaseModel]:
        """Slot object for the active intent, or None."""
        attr = slot_attr(self.intent)
        return getattr(self, attr) if attr else None
