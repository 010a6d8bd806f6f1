import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Callable, Dict, List, NamedTuple, Optional

from fincore.alerts import evaluate_budget
from fincore.classifier import suggest_category
from fincore.domain import Severity
from fincore.lookup import get_category_name

__all__ = [
    'event_bus', 'TRANSACTION_ADDED', 'BUDGET_ALERT', 'Event', 'EventBus',
    'BudgetAlertHandler', 'register_default_handlers',
]

logger = logging.getLogger(__name__)


class Event(NamedTuple):
    name: str
    ts: str
    payload: dict


Handler = Callable[[Event, dict], dict]


class EventBus:
    def __init__(self):
        self._subscribers: Dict[str, List[Handler]] = {}

    def subscribe(self, name: str, handler: Handler) -> None:
        handlers = self._subscribers.setdefault(name, [])
        if handler not in handlers:
            handlers.append(handler)

    def publish(self, name: str, payload: dict) -> List[dict]:
        handlers = self._subscribers.get(name, [])
        if not handlers:
            return []

        event = Event(name=name, ts=datetime.now().isoformat(), payload=payload)
        logger.debug("Publishing %s to %d handler(s)", name, len(handlers))
        return [handler(event, payload) for handler in handlers]

    def unsubscribe(self, name: str, handler: Handler) -> None:
        handlers = self._subscribers.get(name, [])
        if handler in handlers:
            handlers.remove(handler)


TRANSACTION_ADDED = "TRANSACTION_ADDED"
BUDGET_ALERT = "BUDGET_ALERT"

event_bus = EventBus()


def suggest_category_handler(event: Event, payload: dict) -> dict:
    """Fill in a category suggestion for a transaction that arrived without one."""
    if payload.get("category"):
        return {}
    suggested = suggest_category(payload.get("description", ""), payload.get("merchant"))
    return {"suggested_category": suggested} if suggested else {}


def check_budget_handler(event: Event, payload: dict, bus: Optional[EventBus] = None) -> dict:
    """Evaluate the category budget after a new expense.

    Payload keys: ``amount``, ``category``, ``budget_amount``, ``current_spent``.
    Returns an alert when the new total reaches the warning threshold and
    publishes it as ``BUDGET_ALERT`` on ``bus`` (the module bus by default).
    """
    budget_amount = payload.get("budget_amount")
    if budget_amount is None:
        return {}

    category = payload.get("category")
    new_spent = payload.get("current_spent", 0) + payload.get("amount", 0)
    result = evaluate_budget(new_spent, budget_amount)

    if result.severity is Severity.NONE:
        return {"spent": new_spent}
    alert = {
        "alert": f"{get_category_name(category)}: {result.message}",
        "category": category,
        "spent": new_spent,
        "budget": budget_amount,
        "percentage": result.percentage,
        "severity": result.severity.label,
    }
    (bus or event_bus).publish(BUDGET_ALERT, alert)
    return alert


@dataclass(frozen=True)
class BudgetAlertHandler:
    """``check_budget_handler`` bound to the bus its alerts are published on."""

    bus: EventBus

    def __call__(self, event: Event, payload: dict) -> dict:
        return check_budget_handler(event, payload, self.bus)


def register_default_handlers(bus: EventBus = event_bus) -> None:
    bus.subscribe(TRANSACTION_ADDED, suggest_category_handler)
    bus.subscribe(TRANSACTION_ADDED, BudgetAlertHandler(bus))


register_default_handlers()
