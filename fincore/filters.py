from collections import defaultdict
from datetime import date, datetime
from decimal import Decimal
from typing import Callable, Iterable, Iterator, List, Optional, Union

from fincore.dates import Preset, resolve_date_range
from fincore.domain import DateRange, Transaction, Unbounded

Predicate = Callable[[Transaction], bool]

ALL_CATEGORIES = "all"


def by_category(cat_id: Optional[str]) -> Predicate:
    def _filter(t: Transaction) -> bool:
        if cat_id is None or cat_id == ALL_CATEGORIES:
            return True
        return t.category == cat_id

    return _filter


def by_date_range(date_range: Union[DateRange, Unbounded]) -> Predicate:
    def _filter(t: Transaction) -> bool:
        return date_range.contains(t.date)

    return _filter


def iter_transactions(
    trans: Iterable[Transaction], *preds: Predicate
) -> Iterator[Transaction]:
    for t in trans:
        if all(pred(t) for pred in preds):
            yield t


def filter_transactions(
    trans: Iterable[Transaction],
    preset: Union[Preset, str, None] = None,
    category: Optional[str] = None,
    now: Optional[Union[date, datetime]] = None,
) -> List[Transaction]:
    """Transactions inside ``preset``'s range and of ``category``.

    ``None`` for either argument means no constraint, as do ``"all"``.
    """
    date_range = resolve_date_range(preset or Preset.ALL, now)
    return list(iter_transactions(trans, by_date_range(date_range), by_category(category)))


def category_breakdown(trans: Iterable[Transaction]) -> List[dict]:
    """Total, count and share of the grand total per category id, largest first."""
    totals: dict = defaultdict(Decimal)
    counts: dict = defaultdict(int)

    for t in trans:
        totals[t.category] += t.amount
        counts[t.category] += 1

    grand_total = sum(totals.values(), Decimal(0))

    rows = [
        {
            "category": cat_id,
            "total": total,
            "count": counts[cat_id],
            "percentage": float(100 * total / grand_total) if grand_total > 0 else 0.0,
        }
        for cat_id, total in totals.items()
    ]
    return sorted(rows, key=lambda row: row["total"], reverse=True)
