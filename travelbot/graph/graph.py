# travelbot/graph/graph.py
from __future__ import annotations

import logging
from typing import Optional

from langgraph.graph import StateGraph, END

from ..models import Session
from ..nlu.entity_extractor import EntityExtractor
from ..nlu.intent_classifier import IntentClassifier
from ..repositories.search_repo import MockSearchRepo
from ..utils.memory import SessionStore
from .deps import DialogDeps
from .nodes_fallback import fallback_node, handle_out_of_domain
from .nodes_intent import detect_intent_node, search_stage_node
from .nodes_search import search_node
from .nodes_slots import extract_slots_node, follow_up_node
from .responses import GENERIC_ERROR, AgentResponse, ErrorResponse, as_response
from .router import (
    load_session_node,
    route_intent,
    route_search_stage,
    route_slots,
    route_stage,
)
from .state import TurnState

logger = logging.getLogger(__name__)

_GRAPH = None


# --- build graph ---
def build_graph():
    sg = StateGraph(TurnState)

    # nodes
    sg.add_node("load_session", load_session_node)
    sg.add_node("detect_intent", detect_intent_node)
    sg.add_node("extract_slots", extract_slots_node)
    sg.add_node("follow_up", follow_up_node)
    sg.add_node("search", search_node)
    sg.add_node("search_stage", search_stage_node)
    sg.add_node("fallback", fallback_node)

    # entry
    sg.set_entry_point("load_session")

    # one branch per session stage
    sg.add_conditional_edges(
        "load_session",
        route_stage,
        {
            "detect_intent": "detect_intent",
            "extract_slots": "extract_slots",
            "search_stage": "search_stage",
        },
    )
    sg.add_conditional_edges(
        "detect_intent",
        route_intent,
        {"fallback": "fallback", "extract_slots": "extract_slots"},
    )
    sg.add_conditional_edges(
        "extract_slots",
        route_slots,
        {
            "detect_intent": "detect_intent",
            "follow_up": "follow_up",
            "search": "search",
        },
    )
    sg.add_conditional_edges(
        "search_stage",
        route_search_stage,
        {"end": END, "detect_intent": "detect_intent"},
    )

    # terminal wiring
    sg.add_edge("follow_up", END)
    sg.add_edge("search", END)
    sg.add_edge("fallback", END)

    return sg.compile()


def _get_graph():
    global _GRAPH
    if _GRAPH is None:
        _GRAPH = build_graph()
    return _GRAPH


class DialogManager:
    """
    Runs one user turn at a time through the dialog graph.

    Turns for the same user id are serialized; any failure inside a turn is
    logged and turned into a generic error response.
    """

    def __init__(self, deps: DialogDeps):
        self.deps = deps
        self.graph = _get_graph()

    @classmethod
    def from_env(cls, store: Optional[SessionStore] = None) -> "DialogManager":
        classifier = IntentClassifier()
        extractor = EntityExtractor()
        repo = MockSearchRepo()
        deps = DialogDeps(
            store=store or SessionStore(),
            classify_intent=classifier.classify_intent,
            extract_slots=extractor.extract_slots,
            search_flights=repo.search_flights,
            search_hotels=repo.search_hotels,
            fallback=handle_out_of_domain,
        )
        return cls(deps)

    @property
    def store(self) -> SessionStore:
        return self.deps.store

    def get_session(self, user_id: str) -> Session:
        return self.store.get_or_create(user_id)

    async def process_message(self, user_id: str, message: str) -> AgentResponse:
        async with self.store.lock(user_id):
            try:
                self.store.append_message(user_id, "user", message)
                out = await self.graph.ainvoke(
                    TurnState(user_id=user_id, message=message),
                    config={"configurable": {"deps": self.deps}},
                )
                raw = out.get("response") if isinstance(out, dict) else out.response
                if raw is None:
                    raise RuntimeError("dialog graph finished without a response")
                return as_response(raw)
            except Exception:
                logger.exception("user=%s turn failed", user_id)
                return ErrorResponse(content=GENERIC_ERROR)
