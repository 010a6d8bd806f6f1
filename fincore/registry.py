"""Catalog of spending categories.

The registry is an immutable, ordered tuple of categories. Order is part of
its meaning: the classifier walks it front to back and the first category
with a matching keyword wins. The last entry is always the catch-all
``other`` category, which has no keywords and is the display fallback for
unknown ids.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from typing import Iterable, Iterator, Tuple, Union

from fincore import config
from fincore.domain import Category
from fincore.errors import RegistryError

logger = logging.getLogger(__name__)

CATCH_ALL_ID = "other"


@dataclass(frozen=True)
class CategoryRegistry:
    categories: Tuple[Category, ...]

    def __init__(self, categories: Iterable[Category]):
        object.__setattr__(self, "categories", tuple(categories))
        self._validate()

    def _validate(self) -> None:
        if not self.categories:
            raise RegistryError("Category registry is empty")

        seen = set()
        for cat in self.categories:
            if cat.id in seen:
                raise RegistryError(f"Duplicate category id: {cat.id!r}")
            seen.add(cat.id)

        last = self.categories[-1]
        if last.id != CATCH_ALL_ID or last.keywords:
            raise RegistryError(
                f"Last category must be the catch-all {CATCH_ALL_ID!r} with no keywords"
            )

        for cat in self.categories[:-1]:
            if not cat.keywords:
                raise RegistryError(f"Category {cat.id!r} has no keywords")
            for kw in cat.keywords:
                # "" would match any text; uppercase could never match
                if not kw or kw != kw.lower():
                    raise RegistryError(
                        f"Category {cat.id!r} keyword {kw!r} must be non-empty lowercase"
                    )

    def __iter__(self) -> Iterator[Category]:
        return iter(self.categories)

    def __len__(self) -> int:
        return len(self.categories)

    @property
    def catch_all(self) -> Category:
        return self.categories[-1]

    def ids(self) -> Tuple[str, ...]:
        return tuple(c.id for c in self.categories)


DEFAULT_CATEGORIES: Tuple[Category, ...] = (
    Category("food", "Food & Dining", "🍔",
             ("swiggy", "zomato", "dominos", "pizza", "restaurant", "food", "cafe", "starbucks", "mcdonald")),
    Category("shopping", "Shopping", "🛒",
             ("amazon", "flipkart", "myntra", "ajio", "shopping", "mall", "store", "retail")),
    Category("healthcare", "Healthcare", "💊",
             ("hospital", "doctor", "pharmacy", "medical", "health", "clinic", "apollo", "medicine")),
    Category("transport", "Transportation", "🚗",
             ("uber", "ola", "rapido", "fuel", "petrol", "diesel", "taxi", "auto", "metro", "bus")),
    Category("cash", "Cash/ATM", "💵",
             ("atm", "cash", "withdrawal")),
    Category("bills", "Bills & Utilities", "🏦",
             ("electricity", "water", "gas", "bill", "utility", "broadband", "internet", "wifi")),
    Category("entertainment", "Entertainment", "🎬",
             ("movie", "cinema", "netflix", "prime", "hotstar", "spotify", "game", "entertainment")),
    Category("rent", "Rent/EMI", "🏠",
             ("rent", "emi", "loan", "mortgage", "housing")),
    Category("education", "Education", "📚",
             ("school", "college", "university", "course", "education", "tuition", "fees")),
    Category("travel", "Travel", "✈️",
             ("flight", "hotel", "booking", "travel", "vacation", "trip", "makemytrip", "goibibo")),
    Category("business", "Business", "💼",
             ("business", "office", "work", "professional")),
    Category("gifts", "Gifts", "🎁",
             ("gift", "present", "donation")),
    Category("recharge", "Recharge", "📱",
             ("recharge", "mobile", "prepaid", "postpaid", "dth")),
    Category("investment", "Investment", "💰",
             ("investment", "mutual fund", "stock", "sip", "trading", "zerodha", "groww")),
    Category("transfer", "Transfer", "🔄",
             ("transfer", "sent", "received", "upi")),
    Category("goal", "Goal", "🎯",
             ("goal", "saving", "savings")),
    Category(CATCH_ALL_ID, "Other", "📝", ()),
)


def load_registry(path: Union[str, Path]) -> CategoryRegistry:
    """Build a registry from a JSON catalog.

    Expected shape: ``{"categories": [{"id", "name", "icon", "keywords"}]}``.
    Keywords are lower-cased; their order is kept.
    """
    with open(path, "r", encoding="utf-8") as f:
        data = json.load(f)

    categories = tuple(
        Category(
            id=c["id"],
            name=c["name"],
            icon=c["icon"],
            keywords=tuple(k.lower() for k in c.get("keywords", ())),
        )
        for c in data["categories"]
    )
    return CategoryRegistry(categories)


@lru_cache(maxsize=None)
def get_registry() -> CategoryRegistry:
    """Process-wide registry, built on first use and never mutated."""
    path = config.get_categories_file()
    if path is not None:
        registry = load_registry(path)
        logger.info("Loaded %d categories from %s", len(registry), path)
    else:
        registry = CategoryRegistry(DEFAULT_CATEGORIES)
        logger.info("Using built-in catalog of %d categories", len(registry))
    return registry
