import math
from abc import ABC, abstractmethod
from dataclasses import dataclass
from decimal import Decimal
from typing import Callable, Generic, Optional, TypeVar

from fincore.domain import Transaction
from fincore.registry import CategoryRegistry, get_registry

T = TypeVar('T')
U = TypeVar('U')
E = TypeVar('E')


class Maybe(Generic[T], ABC):

    @abstractmethod
    def map(self, f: Callable[[T], U]) -> 'Maybe[U]':
        pass

    @abstractmethod
    def bind(self, f: Callable[[T], 'Maybe[U]']) -> 'Maybe[U]':
        pass

    @abstractmethod
    def get_or_else(self, default: T) -> T:
        pass

    def is_some(self) -> bool:
        return not self.is_none()

    @abstractmethod
    def is_none(self) -> bool:
        pass


@dataclass(frozen=True)
class Some(Maybe[T]):
    value: T

    def map(self, f):
        return Some(f(self.value))

    def bind(self, f):
        return f(self.value)

    def get_or_else(self, default):
        return self.value

    def is_none(self) -> bool:
        return False


class Nothing(Maybe[T]):

    def map(self, f):
        return self

    def bind(self, f):
        return self

    def get_or_else(self, default):
        return default

    def is_none(self) -> bool:
        return True

    def __repr__(self) -> str:
        return "Nothing()"

    def __eq__(self, other) -> bool:
        return isinstance(other, Nothing)

    def __hash__(self) -> int:
        return hash(Nothing)


class Either(Generic[E, T], ABC):

    @abstractmethod
    def map(self, f: Callable[[T], U]) -> 'Either[E, U]':
        pass

    @abstractmethod
    def bind(self, f: Callable[[T], 'Either[E, U]']) -> 'Either[E, U]':
        pass

    @abstractmethod
    def get_or_else(self, default: T) -> T:
        pass

    @abstractmethod
    def is_right(self) -> bool:
        pass

    def is_left(self) -> bool:
        return not self.is_right()


@dataclass(frozen=True)
class Right(Either[E, T]):
    value: T

    def map(self, f):
        return Right(f(self.value))

    def bind(self, f):
        return f(self.value)

    def get_or_else(self, default):
        return self.value

    def is_right(self) -> bool:
        return True


@dataclass(frozen=True)
class Left(Either[E, T]):
    error: E

    def map(self, f):
        return self

    def bind(self, f):
        return self

    def get_or_else(self, default):
        return default

    def is_right(self) -> bool:
        return False


def _is_positive_amount(amount) -> bool:
    if isinstance(amount, Decimal):
        return amount.is_finite() and amount > 0
    if isinstance(amount, (int, float)):
        return math.isfinite(amount) and amount > 0
    return False


def validate_transaction(
    t: Transaction,
    registry: Optional[CategoryRegistry] = None,
) -> Either[dict, Transaction]:
    """Check a transaction before it is saved.

    Amounts must be positive and finite, and the category must exist in the registry.
    """
    registry = registry or get_registry()

    if not _is_positive_amount(t.amount):
        return Left({
            "error": "invalid_amount",
            "message": f"Amount must be a positive number, got {t.amount!r}",
            "amount": t.amount,
        })

    if t.category not in registry.ids():
        return Left({
            "error": "category_not_found",
            "message": f"Category with ID {t.category} does not exist",
            "category_id": t.category,
        })

    return Right(t)
