import json
from datetime import datetime
from decimal import Decimal
from pathlib import Path
from typing import Tuple, Union

from fincore.domain import Budget, Transaction, TransactionSource


def transaction_from_dict(d: dict) -> Transaction:
    return Transaction(
        id=d["id"],
        amount=Decimal(str(d["amount"])),
        category=d.get("category"),
        date=datetime.fromisoformat(d["date"]),
        description=d.get("description", ""),
        merchant=d.get("merchant", ""),
        source=TransactionSource(d.get("source", "manual")),
    )


def budget_from_dict(d: dict) -> Budget:
    return Budget(
        id=d["id"],
        category=d["category"],
        amount=Decimal(str(d["amount"])),
        month=int(d["month"]),
        year=int(d["year"]),
    )


def load_seed(
    path: Union[str, Path],
) -> Tuple[Tuple[Transaction, ...], Tuple[Budget, ...]]:
    with open(path, "r", encoding="utf-8") as f:
        data = json.load(f)

    transactions = tuple(transaction_from_dict(t) for t in data["transactions"])
    budgets = tuple(budget_from_dict(b) for b in data.get("budgets", ()))

    return transactions, budgets
