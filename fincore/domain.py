from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal
from enum import Enum, IntEnum
from typing import Optional, Tuple, Union


@dataclass(frozen=True)
class Category:
    id: str
    name: str
    icon: str
    keywords: Tuple[str, ...] = ()   # lowercase, order matters


class TransactionSource(str, Enum):
    MANUAL = "manual"
    IMPORTED = "imported"


@dataclass(frozen=True)
class Transaction:
    id: str
    amount: Decimal            # always positive
    category: Optional[str]    # may be stale or unknown
    date: datetime
    description: str = ""
    merchant: str = ""
    source: TransactionSource = TransactionSource.MANUAL


# A budget (spending limit for one category in one calendar month)
@dataclass(frozen=True)
class Budget:
    id: str
    category: str
    amount: Decimal
    month: int   # 1..12
    year: int


class Severity(IntEnum):
    NONE = 0
    WARNING = 1
    DANGER = 2
    CRITICAL = 3

    @property
    def label(self) -> str:
        return self.name.lower()


def _as_date(day: Union[date, datetime]) -> date:
    return day.date() if isinstance(day, datetime) else day


@dataclass(frozen=True)
class DateRange:
    start: date   # inclusive
    end: date     # inclusive

    def contains(self, day: Union[date, datetime]) -> bool:
        return self.start <= _as_date(day) <= self.end


class Unbounded(Enum):
    """No date constraint at all; callers must not filter by date."""

    ALL = "all"

    def contains(self, day: Union[date, datetime]) -> bool:
        return True

    def __repr__(self) -> str:
        return "UNBOUNDED"


UNBOUNDED = Unbounded.ALL


@dataclass(frozen=True)
class BudgetEvaluation:
    percentage: Union[float, Decimal]
    severity: Severity
    message: str


@dataclass(frozen=True)
class BudgetProgress:
    budget: Budget
    spent: Decimal
    remaining: Decimal
    percentage: Union[float, Decimal]
    severity: Severity
    message: str
