from pydantic import BaseModel, Field
from typing import List, Optional

from ..models import Intent, Stage
from .responses import AgentResponse
from .slots import SlotField


class TurnState(BaseModel):
    """Per-turn scratch state passed between dialog graph nodes.

    The session itself lives in the SessionStore; this only carries what the
    routing functions need to pick the next node.
    """

    user_id: str
    # utterance exactly as received (may be empty)
    message: str = ""

    # stage the session was in when the turn started
    stage: Stage = Stage.INTENT_DETECTION

    intent: Optional[Intent] = None
    missing: List[SlotField] = Field(default_factory=list)
    new_search: bool = False

    # Output
    response: Optional[AgentResponse] = None
