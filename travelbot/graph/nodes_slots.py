import logging

from langchain_core.runnables import RunnableConfig

from ..models import Stage, slot_attr
from .followup import follow_up_question
from .responses import FollowUpResponse
from .slots import evaluate_session, merge_slots
from .state import TurnState

logger = logging.getLogger(__name__)


async def extract_slots_node(state: TurnState, config: RunnableConfig) -> dict:
    deps = config["configurable"]["deps"]
    sess = deps.store.get_or_create(state.user_id)
    if sess.intent is None:
        logger.warning("user=%s in %s without intent", state.user_id, sess.stage.value)
        return {"intent": None}

    intent = sess.intent
    existing = sess.current_slots()
    update = await deps.call(deps.extract_slots(state.message, intent, existing))

    # validated before it is stored; a bad update never reaches the session
    merged = merge_slots(intent, existing, update)
    sess = deps.store.update(state.user_id, **{slot_attr(intent): merged})

    result = evaluate_session(sess)
    logger.info(
        "user=%s intent=%s missing=%s", state.user_id, intent.value, result.labels
    )
    return {"intent": intent, "missing": result.missing}


def follow_up_node(state: TurnState, config: RunnableConfig) -> dict:
    deps = config["configurable"]["deps"]
    question = follow_up_question(state.missing, state.intent)

    deps.store.update(state.user_id, stage=Stage.SLOT_EXTRACTION)
    deps.store.append_message(state.user_id, "assistant", question)
    return {
        "response": FollowUpResponse(content=question, follow_up_question=question)
    }
