from datetime import datetime
from decimal import Decimal
from pathlib import Path

from fincore.domain import TransactionSource
from fincore.transforms import budget_from_dict, load_seed, transaction_from_dict

SEED = Path(__file__).resolve().parents[1] / "data" / "seed.json"


def test_load_seed():
    transactions, budgets = load_seed(SEED)

    assert len(transactions) >= 10
    assert len(budgets) >= 3
    assert all(isinstance(t.amount, Decimal) and t.amount > 0 for t in transactions)


def test_load_seed_keeps_missing_category():
    transactions, _ = load_seed(SEED)

    assert any(t.category is None for t in transactions)


def test_transaction_from_dict_defaults():
    t = transaction_from_dict({"id": "t1", "amount": 12.5, "date": "2024-02-29T08:00:00"})

    assert t.amount == Decimal("12.5")
    assert t.date == datetime(2024, 2, 29, 8, 0)
    assert t.category is None
    assert t.source is TransactionSource.MANUAL


def test_budget_from_dict():
    b = budget_from_dict({"id": "b1", "category": "food", "amount": "3000", "month": "10", "year": 2026})

    assert b.amount == Decimal("3000")
    assert b.month == 10
