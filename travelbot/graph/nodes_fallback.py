import random
import re
from typing import Optional

from langchain_core.runnables import RunnableConfig

from .responses import MessageResponse
from .state import TurnState

GREETING_KW = re.compile(r"\b(hello|hi|hey)\b", re.I)
THANKS_KW = re.compile(r"\b(thank|thanks|thank you)\b", re.I)
HELP_KW = re.compile(r"\bhelp\b|what can you do", re.I)
BYE_KW = re.compile(r"\b(bye|goodbye|see you)\b", re.I)

GREETING = (
    "Hello! I'm your travel booking assistant. I can help you find flights, hotels, "
    "or plan complete trips. What are you looking to book today?"
)
THANKS = "You're welcome! Is there anything else I can help you with for your travel plans?"
GOODBYE = (
    "Goodbye! Feel free to come back anytime you need help with travel bookings. "
    "Have a great day!"
)
SUGGESTIONS = """Here are some things I can help you with:

Flight bookings
- "Find flights from New York to Los Angeles"
- "I need a round trip to Paris next month"

Hotel reservations
- "Book a hotel in Tokyo for 3 nights"
- "Find accommodation in London for my business trip"

Complete trip planning
- "Plan a vacation to Miami with flights and hotel"
- "I need travel arrangements for a week in Barcelona"

What would you like to book today?"""

FALLBACK_REPLIES = [
    "I'm sorry, but I can only help you with flight and hotel bookings. "
    "Could you please ask me about travel-related queries?",
    "I specialize in helping you find flights and hotels. "
    "Is there anything travel-related I can assist you with?",
    "I'm a travel booking assistant. I can help you search for flights, hotels, "
    "or plan complete trips. What would you like to book?",
    "Sorry, I can't answer that. I'm here to help you with travel planning - flights, "
    "hotels, and vacation packages. How can I help with your travel needs?",
    "I'm designed to help with travel bookings only. "
    "Would you like to search for flights or hotels instead?",
]


def handle_out_of_domain(message: str, rng: Optional[random.Random] = None) -> MessageResponse:
    """Canned reply for anything that is not a flight or hotel request."""
    text = message or ""
    if GREETING_KW.search(text):
        reply = GREETING
    elif THANKS_KW.search(text):
        reply = THANKS
    elif HELP_KW.search(text):
        reply = SUGGESTIONS
    elif BYE_KW.search(text):
        reply = GOODBYE
    else:
        reply = (rng or random).choice(FALLBACK_REPLIES)
    return MessageResponse(content=reply)


def fallback_node(state: TurnState, config: RunnableConfig) -> dict:
    # stage and history are left alone for unrecognised utterances
    deps = config["configurable"]["deps"]
    return {"response": deps.fallback(state.message)}
