from __future__ import annotations

import asyncio
import logging
from typing import List

from langchain_core.runnables import RunnableConfig

from ..models import Intent, Stage
from ..utils.schemas import FlightResult, HotelResult
from .responses import SEARCH_ERROR, ErrorResponse, SearchResultsResponse
from .state import TurnState

logger = logging.getLogger(__name__)


def format_flight_results(flights: List[FlightResult]) -> str:
    if not flights:
        return "Sorry, no flights found for your search criteria."

    lines = [f"Found {len(flights)} flights:", ""]
    for i, f in enumerate(flights, 1):
        lines += [
            f"{i}. {f.airline} {f.flight_number}",
            f"   {f.from_} → {f.to}",
            f"   Departure: {f.departure_time} | Arrival: {f.arrival_time}",
            f"   Duration: {f.duration} | Price: ${f.price:.0f}",
            "",
        ]
    return "\n".join(lines)


def format_hotel_results(hotels: List[HotelResult]) -> str:
    if not hotels:
        return "Sorry, no hotels found for your search criteria."

    lines = [f"Found {len(hotels)} hotels in {hotels[0].location}:", ""]
    for i, h in enumerate(hotels, 1):
        lines += [
            f"{i}. {h.name}",
            f"   Rating: {'⭐' * h.rating} ({h.rating}/5)",
            f"   Price: ${h.price_per_night:.0f}/night",
            f"   Amenities: {', '.join(h.amenities)}",
            "",
        ]
    return "\n".join(lines)


def _dump(results) -> list:
    return [r.model_dump(by_alias=True) for r in results]


async def _gather_or_cancel(*aws):
    """Run concurrently; on the first failure cancel the rest and re-raise."""
    tasks = [asyncio.ensure_future(a) for a in aws]
    try:
        return await asyncio.gather(*tasks)
    except BaseException:
        for t in tasks:
            t.cancel()
        # collect the siblings so none is left running or unretrieved
        await asyncio.gather(*tasks, return_exceptions=True)
        raise


async def _run_search(deps, intent: Intent, slots):
    if intent == Intent.FLIGHT:
        flights = await deps.call(deps.search_flights(slots))
        return format_flight_results(flights), _dump(flights)

    if intent == Intent.HOTEL:
        hotels = await deps.call(deps.search_hotels(slots))
        return format_hotel_results(hotels), _dump(hotels)

    if intent == Intent.BOTH:
        flights, hotels = await _gather_or_cancel(
            deps.call(deps.search_flights(slots)),
            deps.call(deps.search_hotels(slots)),
        )
        text = f"{format_flight_results(flights)}\n---\n\n{format_hotel_results(hotels)}"
        return text, {"flights": _dump(flights), "hotels": _dump(hotels)}

    raise ValueError(f"no search for intent {intent!r}")


async def search_node(state: TurnState, config: RunnableConfig) -> dict:
    deps = config["configurable"]["deps"]
    sess = deps.store.update(state.user_id, stage=Stage.SEARCH)
    slots = sess.current_slots()

    if sess.intent is None or slots is None:
        logger.error("user=%s reached search without slots", state.user_id)
        return {"response": ErrorResponse(content=SEARCH_ERROR)}

    try:
        text, data = await _run_search(deps, sess.intent, slots)
    except Exception:
        # stage stays at search so the next utterance can retry
        logger.exception("user=%s search failed", state.user_id)
        return {"response": ErrorResponse(content=SEARCH_ERROR)}

    deps.store.append_message(state.user_id, "assistant", text)
    return {"response": SearchResultsResponse(content=text, data=data)}
