# travelbot/nlu/intent_classifier.py
from __future__ import annotations

import asyncio
import logging
import re
from functools import partial
from typing import Callable, Dict, List, Optional

from ..llm.ollama_client import chat
from ..models import Intent

logger = logging.getLogger(__name__)

ChatFn = Callable[[List[Dict[str, str]]], str]

SYSTEM = (
    "You are an intent classifier for a travel booking system. "
    "Answer with exactly one word."
)

PROMPT = """Classify the user's message into one of these categories:
- "Flight" - User wants to book flights only
- "Hotel" - User wants to book hotels only
- "Both" - User wants to book both flights and hotels
- "Other" - User's message is not related to travel booking

User message: "{message}"

Respond with only one word: Flight, Hotel, Both, or Other."""

# one label word plus a little slack
INTENT_MAX_TOKENS = 8

_LABELS = {i.value.lower(): i for i in Intent}
_WORD = re.compile(r"[A-Za-z]+")


def parse_intent(raw: Optional[str]) -> Intent:
    """
    Map a model reply onto an Intent.

    Accepts the label with surrounding quotes, punctuation or case noise
    ("flight.", '"Hotel"'). Anything else is Other.
    """
    if not raw:
        return Intent.OTHER
    words = _WORD.findall(raw)
    if len(words) != 1:
        return Intent.OTHER
    return _LABELS.get(words[0].lower(), Intent.OTHER)


class IntentClassifier:
    def __init__(
        self, chat_fn: ChatFn = partial(chat, max_tokens=INTENT_MAX_TOKENS)
    ) -> None:
        self._chat = chat_fn

    async def classify_intent(self, message: str) -> Intent:
        msgs = [
            {"role": "system", "content": SYSTEM},
            {"role": "user", "content": PROMPT.format(message=message)},
        ]
        try:
            raw = await asyncio.to_thread(self._chat, msgs)
        except Exception as e:
            logger.warning("intent classification failed, defaulting to Other: %r", e)
            return Intent.OTHER

        intent = parse_intent(raw)
        if intent is Intent.OTHER and raw and raw.strip().lower() != "other":
            logger.warning("unrecognised intent label %r, defaulting to Other", raw)
        return intent
