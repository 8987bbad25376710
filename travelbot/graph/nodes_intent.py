import logging

from langchain_core.runnables import RunnableConfig

from ..models import SLOT_ATTRS, Intent, Stage
from .responses import MessageResponse
from .router import RESET_MESSAGE, is_new_search
from .state import TurnState

logger = logging.getLogger(__name__)


async def detect_intent_node(state: TurnState, config: RunnableConfig) -> dict:
    deps = config["configurable"]["deps"]
    intent = await deps.call(deps.classify_intent(state.message))
    logger.info("user=%s intent=%s", state.user_id, intent.value)

    if intent == Intent.OTHER:
        return {"intent": intent}

    # a new classification starts from empty slots, whatever was held before
    deps.store.update(
        state.user_id,
        intent=intent,
        stage=Stage.SLOT_EXTRACTION,
        **{attr: None for attr in SLOT_ATTRS},
    )
    return {"intent": intent}


def search_stage_node(state: TurnState, config: RunnableConfig) -> dict:
    deps = config["configurable"]["deps"]
    if not is_new_search(state.message):
        return {"new_search": False}

    deps.store.update(
        state.user_id,
        intent=None,
        stage=Stage.INTENT_DETECTION,
        **{attr: None for attr in SLOT_ATTRS},
    )
    deps.store.append_message(state.user_id, "assistant", RESET_MESSAGE)
    logger.info("user=%s reset for new search", state.user_id)
    return {"new_search": True, "response": MessageResponse(content=RESET_MESSAGE)}
