"""Category id to display values.

Ids of unknown provenance (stale rows, manual entries) never raise here: they
render as the catch-all category.
"""

import logging
from typing import Optional

from fincore.domain import Category
from fincore.functional import Maybe, Nothing, Some
from fincore.registry import CategoryRegistry, get_registry

logger = logging.getLogger(__name__)


def get_category_by_id(
    cat_id: Optional[str], registry: Optional[CategoryRegistry] = None
) -> Maybe[Category]:
    for cat in registry or get_registry():
        if cat.id == cat_id:
            return Some(cat)
    return Nothing()


def _resolve(cat_id: Optional[str], registry: Optional[CategoryRegistry]) -> Category:
    registry = registry or get_registry()
    found = get_category_by_id(cat_id, registry)
    if found.is_none():
        logger.debug("Unknown category id %r, using %r", cat_id, registry.catch_all.id)
    return found.get_or_else(registry.catch_all)


def get_category_name(cat_id: Optional[str], registry: Optional[CategoryRegistry] = None) -> str:
    return _resolve(cat_id, registry).name


def get_category_icon(cat_id: Optional[str], registry: Optional[CategoryRegistry] = None) -> str:
    return _resolve(cat_id, registry).icon


def category_label(cat_id: Optional[str], registry: Optional[CategoryRegistry] = None) -> str:
    """Icon and name, e.g. ``"🚗 Transportation"``."""
    cat = _resolve(cat_id, registry)
    return f"{cat.icon} {cat.name}"
