from travelbot.graph.followup import follow_up_question
from travelbot.graph.router import is_new_search
from travelbot.graph.slots import evaluate, merge_slots
from travelbot.models import Intent

for intent, update in [
    (Intent.FLIGHT, {"from_city": "New York", "to_city": "Los Angeles"}),
    (Intent.HOTEL, {"location": "Paris"}),
    (Intent.BOTH, {"to_city": "Tokyo"}),
]:
    slots = merge_slots(intent, None, update)
    result = evaluate(intent, slots)
    print(
        intent.value,
        "→",
        dict(missing=result.labels, question=follow_up_question(result.missing, intent)),
    )

for msg in ["start a new search", "something different", "thanks!"]:
    print(msg, "→", dict(new_search=is_new_search(msg)))
