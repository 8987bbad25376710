from typing import Optional
import os
import time
from datetime import datetime, timezone

from fastapi import FastAPI, Request
from fastapi.responses import ORJSONResponse
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel
from prometheus_client import Counter, Gauge, Histogram, make_asgi_app

from ..graph.graph import DialogManager
from ..utils.logging import configure_logging, get_logger

configure_logging(os.getenv("LOG_LEVEL", "INFO"))
logger = get_logger(__name__)

# --- Feature flags ---
OBS_ON = os.getenv("OBS_ON", "on") == "on"  # turn off if metrics cause issues
HISTORY_LIMIT = 10

# --- Metrics ---
requests_total = Counter("chat_requests_total", "Total chat requests")
latency_seconds = Histogram("chat_request_latency_seconds", "Chat request latency")
responses_total = Counter(
    "chat_responses_total", "Chat responses by type", ["type"]
)
active_sessions = Gauge("chat_active_sessions", "Sessions held in memory")

# --- FastAPI App Setup ---
app = FastAPI(title="Travelbot", default_response_class=ORJSONResponse)

dialog = DialogManager.from_env()


class ChatRequest(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    user_id: Optional[str] = Field(default=None, min_length=1)
    message: str = Field(min_length=1)


def _session_id(body: ChatRequest, req: Request) -> str:
    # Prefer explicit user id; then header; then client host
    return (
        body.user_id
        or req.headers.get("X-Session-Id")
        or (req.client.host if req.client else None)
        or "anon"
    )


@app.get("/health")
async def health() -> dict:
    return {
        "status": "healthy",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "activeSessions": dialog.store.count(),
    }


@app.post("/chat")
async def chat(body: ChatRequest, request: Request) -> dict:
    start = time.perf_counter()
    try:
        if OBS_ON:
            requests_total.inc()

        user_id = _session_id(body, request)
        resp = await dialog.process_message(user_id, body.message)

        if OBS_ON:
            responses_total.labels(type=resp.type).inc()
            active_sessions.set(dialog.store.count())
        return resp.model_dump(by_alias=True, exclude_none=True)
    finally:
        if OBS_ON:
            latency_seconds.observe(time.perf_counter() - start)


@app.get("/session/{user_id}")
async def get_session(user_id: str) -> dict:
    sess = dialog.get_session(user_id)
    history = sess.conversation_history[-HISTORY_LIMIT:]
    return {
        "userId": sess.user_id,
        "intent": sess.intent.value if sess.intent else None,
        "stage": sess.stage.value,
        "conversationHistory": [m.model_dump(by_alias=True, mode="json") for m in history],
    }


@app.delete("/session/{user_id}")
async def clear_session(user_id: str) -> dict:
    # waits for an in-flight turn so it cannot write into the cleared session
    async with dialog.store.lock(user_id):
        dialog.store.clear(user_id)
    logger.info("cleared session %s", user_id)
    return {"message": "Session cleared successfully"}


# Expose /metrics for Prometheus (only if enabled)
if OBS_ON:
    metrics_app = make_asgi_app()
    app.mount("/metrics", metrics_app)


def main() -> None:
    import uvicorn

    uvicorn.run(app, host="0.0.0.0", port=int(os.getenv("PORT", "8000")))


if __name__ == "__main__":
    main()
