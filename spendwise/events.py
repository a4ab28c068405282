from datetime import datetime
from typing import Callable, Dict, List, NamedTuple

__all__ = [
    'Event', 'EventBus', 'change_message',
    'TRANSACTION_ADDED', 'TRANSACTION_DELETED',
    'CATEGORY_ADDED', 'CATEGORY_DELETED',
    'GOAL_ADDED', 'GOAL_UPDATED', 'GOAL_DELETED', 'GOAL_CONTRIBUTED',
]

TRANSACTION_ADDED = "TRANSACTION_ADDED"
TRANSACTION_DELETED = "TRANSACTION_DELETED"
CATEGORY_ADDED = "CATEGORY_ADDED"
CATEGORY_DELETED = "CATEGORY_DELETED"
GOAL_ADDED = "GOAL_ADDED"
GOAL_UPDATED = "GOAL_UPDATED"
GOAL_DELETED = "GOAL_DELETED"
GOAL_CONTRIBUTED = "GOAL_CONTRIBUTED"


class Event(NamedTuple):
    name: str
    ts: str
    payload: dict


Handler = Callable[[Event], object]


class EventBus:
    """Synchronous publish/subscribe for state-change notifications.

    Subscribing to ``"*"`` receives every event.
    """

    def __init__(self):
        self._subscribers: Dict[str, List[Handler]] = {}

    def subscribe(self, name: str, handler: Handler) -> None:
        self._subscribers.setdefault(name, []).append(handler)

    def unsubscribe(self, name: str, handler: Handler) -> None:
        handlers = self._subscribers.get(name, [])
        if handler in handlers:
            handlers.remove(handler)

    def publish(self, name: str, payload: dict) -> List[object]:
        handlers = self._subscribers.get(name, []) + self._subscribers.get("*", [])
        if not handlers:
            return []

        event = Event(name=name, ts=datetime.now().isoformat(), payload=payload)
        return [handler(event) for handler in handlers]


def change_message(event: Event) -> str:
    """Short confirmation text for a change, shown to the user."""
    p = event.payload
    if event.name == TRANSACTION_ADDED:
        return f"Added transaction: {p.get('description', '')}"
    if event.name == TRANSACTION_DELETED:
        return "Transaction deleted"
    if event.name == CATEGORY_ADDED:
        return f"Category '{p.get('category', '')}' added"
    if event.name == CATEGORY_DELETED:
        moved = p.get("reassigned", 0)
        return f"Category '{p.get('category', '')}' deleted ({moved} transaction(s) moved to Other)"
    if event.name == GOAL_ADDED:
        return "Goal added successfully!"
    if event.name == GOAL_UPDATED:
        return f"Goal '{p.get('name', '')}' updated"
    if event.name == GOAL_DELETED:
        return "Goal deleted"
    if event.name == GOAL_CONTRIBUTED:
        return f"Successfully contributed {p.get('amount', 0):.2f} to {p.get('name', '')}"
    return event.name
