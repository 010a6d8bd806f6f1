"""Keyword classifier for free-text transaction descriptions.

Matching is a plain substring search over ``"<text> <merchant>"`` lower-cased.
The first category in registry order that has any matching keyword wins, so
reordering the registry changes results.
"""

import logging
from functools import lru_cache
from typing import Optional

from fincore.domain import Transaction
from fincore.registry import CategoryRegistry, get_registry

logger = logging.getLogger(__name__)


@lru_cache(maxsize=1024)
def _first_match(search_text: str, registry: CategoryRegistry) -> Optional[str]:
    for category in registry:
        for keyword in category.keywords:
            if keyword in search_text:
                return category.id
    return None


def suggest_category(
    text: Optional[str],
    merchant: Optional[str] = None,
    registry: Optional[CategoryRegistry] = None,
) -> Optional[str]:
    """Suggest a category id for an SMS body or note, or None when nothing matches.

    The catch-all id is never returned; choosing a default is up to the caller.
    """
    search_text = f"{text or ''} {merchant or ''}".lower()
    if not search_text.strip():
        return None

    result = _first_match(search_text, registry or get_registry())
    if result is None:
        logger.debug("No category keyword in %r", search_text)
    return result


def classify_transaction(t: Transaction, registry: Optional[CategoryRegistry] = None) -> str:
    """Category id to store for a transaction.

    Keeps a known category, otherwise tries the description and merchant,
    otherwise falls back to the catch-all.
    """
    registry = registry or get_registry()
    if t.category in registry.ids():
        return t.category

    suggested = suggest_category(t.description, t.merchant, registry)
    return suggested if suggested is not None else registry.catch_all.id
