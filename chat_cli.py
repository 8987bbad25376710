#!/usr/bin/env python3
# chat_cli.py - simple interactive console client for the travelbot /chat endpoint
# Usage:
#   python chat_cli.py [--sid YOUR_USER_ID] [--url http://127.0.0.1:8000]
#
# Notes:
# - Keeps a persistent user id so the server keeps one dialog session.
# - Type /exit or Ctrl+C to quit.
# - Type /sid to print the current user id.
# - Type /session to show the server-side stage and intent.
# - Type /reset to clear the server-side session.

import argparse
import os
import uuid
import requests

DEFAULT_URL = os.environ.get("TRAVELBOT_URL", "http://127.0.0.1:8000")
CHAT_EP = "/chat"
SESSION_EP = "/session/"


def parse_args():
    ap = argparse.ArgumentParser(description="Interactive travelbot CLI")
    ap.add_argument("--sid", help="User id (default random UUID)")
    ap.add_argument("--url", default=DEFAULT_URL, help="Base URL, default %(default)s")
    return ap.parse_args()


def post_chat(base_url: str, sid: str, message: str) -> dict:
    url = base_url.rstrip("/") + CHAT_EP
    payload = {"userId": sid, "message": message}
    try:
        r = requests.post(url, json=payload, timeout=60)
        r.raise_for_status()
        return r.json()
    except requests.exceptions.RequestException as e:
        return {"error": str(e)}


def session_call(base_url: str, sid: str, method: str = "GET") -> dict:
    url = base_url.rstrip("/") + SESSION_EP + sid
    try:
        r = requests.request(method, url, timeout=10)
        r.raise_for_status()
        return r.json()
    except requests.exceptions.RequestException as e:
        return {"error": str(e)}


def format_reply(obj: dict) -> str:
    if not isinstance(obj, dict):
        return str(obj)
    if "error" in obj:
        return f"[error] {obj['error']}"
    content = obj.get("content") or ""
    kind = obj.get("type")
    tag = f" ({kind})" if kind and kind != "message" else ""
    return f"{content}{tag}"


def main():
    args = parse_args()
    sid = args.sid or str(uuid.uuid4())
    base_url = args.url

    print(f"travelbot CLI ready. Base URL: {base_url}  |  user: {sid}")
    print("Type your message and press Enter. Commands: /exit, /sid, /session, /reset")

    while True:
        try:
            msg = input("> ").strip()
        except (EOFError, KeyboardInterrupt):
            print("\nbye")
            break

        if not msg:
            continue
        if msg.lower() in ("/exit", "/quit"):
            print("bye")
            break
        if msg.lower() == "/sid":
            print(f"[user] {sid}")
            continue
        if msg.lower() == "/session":
            s = session_call(base_url, sid)
            if "error" in s:
                print(f"[error] {s['error']}")
            else:
                print(f"[session] stage={s.get('stage')} intent={s.get('intent')}")
            continue
        if msg.lower() == "/reset":
            s = session_call(base_url, sid, "DELETE")
            print(f"[session] {s.get('message') or s.get('error')}")
            continue

        resp = post_chat(base_url, sid, msg)
        print(format_reply(resp))


if __name__ == "__main__":
    main()
