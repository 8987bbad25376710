# travelbot/nlu/entity_extractor.py
from __future__ import annotations

import asyncio
import json
import logging
import re
from functools import partial
from typing import Any, Dict, Optional

from pydantic import BaseModel, ValidationError

from ..llm.ollama_client import chat
from ..models import Intent, slot_model
from .intent_classifier import ChatFn

logger = logging.getLogger(__name__)

SYSTEM = "You extract travel booking details from user messages and reply with JSON only."

FLIGHT_FIELDS = """- fromCity: Origin city/airport
- toCity: Destination city/airport
- departureDate: Departure date (YYYY-MM-DD format)
- returnDate: Return date (YYYY-MM-DD format, only for round trips)
- passengerCount: Number of passengers"""

HOTEL_FIELDS = """- location: Hotel location/city
- checkIn: Check-in date (YYYY-MM-DD format)
- checkOut: Check-out date (YYYY-MM-DD format)
- guestCount: Number of guests"""

COMBINED_HINTS = """Examples:
- "Plan a trip to Tokyo" -> {"toCity": "Tokyo", "location": "Tokyo"}
- "Book flight and hotel to Paris for 2 people" -> {"toCity": "Paris", "location": "Paris", "passengerCount": 2, "guestCount": 2}
- "Trip to London from NYC" -> {"fromCity": "New York", "toCity": "London", "location": "London"}"""

TEMPLATE = """Extract {what} information from the user's message. Return a JSON object with the following fields (only include fields that are mentioned):

{fields}
{hints}
User message: "{message}"

Existing information: {existing}

Return only valid JSON without any explanation:"""

_DESCRIBE = {
    Intent.FLIGHT: ("flight booking", FLIGHT_FIELDS, ""),
    Intent.HOTEL: ("hotel booking", HOTEL_FIELDS, ""),
    Intent.BOTH: (
        "travel booking (flights and hotels)",
        f"Flight fields:\n{FLIGHT_FIELDS}\n\nHotel fields:\n{HOTEL_FIELDS}",
        f"\n{COMBINED_HINTS}\n",
    ),
}

_JSON_OBJ = re.compile(r"\{[\s\S]*\}")


def build_prompt(message: str, intent: Intent, existing: Optional[BaseModel]) -> str:
    what, fields, hints = _DESCRIBE[intent]
    known = existing.model_dump(by_alias=True, exclude_none=True) if existing else {}
    return TEMPLATE.format(
        what=what,
        fields=fields,
        hints=hints,
        message=message,
        existing=json.dumps(known),
    )


def parse_slots(raw: Optional[str], intent: Intent) -> Dict[str, Any]:
    """
    Pull the slot fields out of a model reply.

    Returns snake_case field -> value for the fields the reply actually
    contained. Replies without a JSON object, with invalid JSON, or with
    values the slot model rejects give ``{}``.
    """
    model = slot_model(intent)
    if model is None or not raw:
        return {}

    m = _JSON_OBJ.search(raw)
    if not m:
        return {}
    try:
        data = json.loads(m.group(0))
    except json.JSONDecodeError:
        return {}
    if not isinstance(data, dict):
        return {}

    data = {k: v for k, v in data.items() if v is not None and v != ""}
    try:
        parsed = model.model_validate(data)
    except ValidationError as e:
        logger.warning("discarding invalid %s slots: %s", intent.value, e.errors())
        return {}
    return parsed.model_dump(exclude_unset=True, exclude_none=True)


class EntityExtractor:
    def __init__(self, chat_fn: ChatFn = partial(chat, json_mode=True)) -> None:
        self._chat = chat_fn

    async def extract_slots(
        self, message: str, intent: Intent, existing: Optional[BaseModel] = None
    ) -> Dict[str, Any]:
        if slot_model(intent) is None:
            return {}

        msgs = [
            {"role": "system", "content": SYSTEM},
            {"role": "user", "content": build_prompt(message, intent, existing)},
        ]
        try:
            raw = await asyncio.to_thread(self._chat, msgs)
        except Exception as e:
            logger.warning("slot extraction failed for %s: %r", intent.value, e)
            return {}
        return parse_slots(raw, intent)
