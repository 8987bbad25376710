from __future__ import annotations

import asyncio
import os
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Dict, List, Optional

from pydantic import BaseModel

from ..models import Intent
from ..utils.memory import SessionStore
from .responses import MessageResponse

COLLABORATOR_TIMEOUT = float(os.getenv("COLLABORATOR_TIMEOUT_SECONDS", "45"))

ClassifyFn = Callable[[str], Awaitable[Intent]]
ExtractFn = Callable[[str, Intent, Optional[BaseModel]], Awaitable[Dict[str, Any]]]
SearchFn = Callable[[Any], Awaitable[List[Any]]]
FallbackFn = Callable[[str], MessageResponse]


@dataclass
class DialogDeps:
    """Everything the dialog graph nodes talk to, handed over per turn."""

    store: SessionStore
    classify_intent: ClassifyFn
    extract_slots: ExtractFn
    search_flights: SearchFn
    search_hotels: SearchFn
    fallback: FallbackFn
    timeout: Optional[float] = COLLABORATOR_TIMEOUT

    async def call(self, awaitable: Awaitable[Any]) -> Any:
        """Await a collaborator call; asyncio.TimeoutError once ``timeout`` passes."""
        return await asyncio.wait_for(awaitable, self.timeout)
