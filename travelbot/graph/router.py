import re

from langchain_core.runnables import RunnableConfig

from ..models import Intent, Stage
from .state import TurnState

# --- new-search triggers (only checked in the search stage) ---
NEW_SEARCH_KW = re.compile(r"new search|different|change", re.I)

RESET_MESSAGE = "Sure! Let's start a new search. What would you like to book?"


def is_new_search(text: str) -> bool:
    return bool(NEW_SEARCH_KW.search(text or ""))


def load_session_node(state: TurnState, config: RunnableConfig) -> dict:
    deps = config["configurable"]["deps"]
    sess = deps.store.get_or_create(state.user_id)
    return {"stage": sess.stage, "intent": sess.intent}


# --- edge functions ---


def route_stage(s: TurnState) -> str:
    if s.stage == Stage.SLOT_EXTRACTION:
        return "extract_slots"
    if s.stage == Stage.SEARCH:
        return "search_stage"
    # intent_detection, and the reserved complete stage
    return "detect_intent"


def route_intent(s: TurnState) -> str:
    if s.intent is None or s.intent == Intent.OTHER:
        return "fallback"
    return "extract_slots"


def route_slots(s: TurnState) -> str:
    if s.intent is None:
        # slot_extraction without an intent: classify again
        return "detect_intent"
    if s.missing:
        return "follow_up"
    return "search"


def route_search_stage(s: TurnState) -> str:
    return "end" if s.new_search else "detect_intent"
