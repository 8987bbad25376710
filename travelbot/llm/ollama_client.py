from __future__ import annotations
import logging
import os
import time
import requests
from typing import List, Dict

logger = logging.getLogger(__name__)

BASE = os.getenv("LLM_BASE_URL", "http://ollama:11434/v1")
MODEL = os.getenv("LLM_MODEL", "llama3.1:8b")
MAX_TOK = int(os.getenv("LLM_MAX_TOKENS", "512"))
TEMP = float(os.getenv("LLM_TEMPERATURE", "0.1"))
TIMEOUT = float(os.getenv("LLM_TIMEOUT_SECONDS", "30"))


def build_payload(
    messages: List[Dict[str, str]],
    model: str | None = None,
    max_tokens: int | None = None,
    json_mode: bool = False,
) -> dict:
    payload = {
        "model": model or MODEL,
        "messages": messages,
        "max_tokens": max_tokens or MAX_TOK,
        "temperature": TEMP,
    }
    if json_mode:
        # Ollama's OpenAI-compatible JSON mode
        payload["response_format"] = {"type": "json_object"}
    return payload


def chat(
    messages: List[Dict[str, str]],
    model: str | None = None,
    max_tokens: int | None = None,
    json_mode: bool = False,
) -> str:
    """One chat completion against an OpenAI-compatible endpoint (Ollama by default).

    ``max_tokens`` caps the reply (intent labels need only a few tokens);
    ``json_mode`` asks the server to constrain the reply to a JSON object.
    Raises requests exceptions on transport or HTTP errors; callers decide
    how to degrade.
    """
    payload = build_payload(messages, model, max_tokens, json_mode)
    start = time.perf_counter()
    r = requests.post(f"{BASE}/chat/completions", json=payload, timeout=TIMEOUT)
    r.raise_for_status()
    data = r.json()
    logger.debug(
        "llm model=%s max_tokens=%s json=%s took=%.2fs",
        payload["model"],
        payload["max_tokens"],
        json_mode,
        time.perf_counter() - start,
    )
    return (data["choices"][0]["message"]["content"] or "").strip()
