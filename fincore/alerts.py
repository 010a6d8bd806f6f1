"""Budget alert evaluation.

Percent of budget consumed maps to a severity through fixed thresholds with
inclusive lower bounds; the highest tier reached wins. The percentage is not
clamped, so overspending reports values above 100.
"""

import logging
import math
from decimal import Decimal
from typing import Iterable, List, Tuple, Union

from fincore.dates import month_bounds
from fincore.domain import Budget, BudgetEvaluation, BudgetProgress, Severity, Transaction
from fincore.errors import InvalidBudgetError

logger = logging.getLogger(__name__)

Number = Union[int, float, Decimal]

# Highest tier first
ALERT_THRESHOLDS: Tuple[Tuple[int, Severity, str], ...] = (
    (100, Severity.CRITICAL, "Budget exceeded!"),
    (90, Severity.DANGER, "You're close to exceeding your budget!"),
    (75, Severity.WARNING, "You're approaching your budget limit"),
)


def severity_for(percentage: Number) -> Tuple[Severity, str]:
    for threshold, severity, message in ALERT_THRESHOLDS:
        if percentage >= threshold:
            return severity, message
    return Severity.NONE, ""


def _operands(spent: Number, budget: Number) -> Tuple[Number, Number]:
    # Decimal does not mix with float, so a Decimal on either side wins
    if isinstance(spent, Decimal) or isinstance(budget, Decimal):
        spent, budget = Decimal(str(spent)), Decimal(str(budget))
        finite = spent.is_finite() and budget.is_finite()
    else:
        finite = math.isfinite(spent) and math.isfinite(budget)

    if not finite:
        logger.warning("Rejected budget evaluation: spent=%r budget=%r", spent, budget)
        raise InvalidBudgetError(f"Amounts must be finite, got spent={spent!r} budget={budget!r}")
    return spent, budget


def evaluate_budget(spent: Number, budget: Number) -> BudgetEvaluation:
    """Percentage of ``budget`` consumed by ``spent`` and the matching alert.

    Mixed Decimal and float inputs are compared as Decimals.

    Raises:
        InvalidBudgetError: if either amount is NaN or infinite, ``budget`` is
            not positive or ``spent`` is negative.
    """
    spent, budget = _operands(spent, budget)
    if budget <= 0:
        logger.warning("Rejected budget evaluation: budget=%r", budget)
        raise InvalidBudgetError(f"Budget must be positive, got {budget!r}")
    if spent < 0:
        logger.warning("Rejected budget evaluation: spent=%r", spent)
        raise InvalidBudgetError(f"Spent amount cannot be negative, got {spent!r}")

    percentage = 100 * spent / budget
    severity, message = severity_for(percentage)
    return BudgetEvaluation(percentage=percentage, severity=severity, message=message)


def budget_progress(budget: Budget, transactions: Iterable[Transaction]) -> BudgetProgress:
    """Spending against one budget in its calendar month."""
    period = month_bounds(budget.year, budget.month)
    spent = sum(
        (t.amount for t in transactions
         if t.category == budget.category and period.contains(t.date)),
        Decimal(0),
    )
    result = evaluate_budget(spent, budget.amount)
    return BudgetProgress(
        budget=budget,
        spent=spent,
        remaining=budget.amount - spent,
        percentage=result.percentage,
        severity=result.severity,
        message=result.message,
    )


def budget_alerts(
    budgets: Iterable[Budget],
    transactions: Iterable[Transaction],
    dismissed: Iterable[str] = (),
) -> List[BudgetProgress]:
    """Budgets that need a banner, most severe first.

    Budgets below the warning threshold and ids in ``dismissed`` are left out.
    """
    dismissed = set(dismissed)
    transactions = tuple(transactions)

    alerts = [
        progress
        for progress in (budget_progress(b, transactions) for b in budgets if b.id not in dismissed)
        if progress.severity > Severity.NONE
    ]
    return sorted(alerts, key=lambda p: (p.severity, p.percentage), reverse=True)
