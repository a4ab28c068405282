"""Derived figures computed from transactions and goals.

Every function here is pure: it reads the snapshot it is given and returns
new immutable values. Sums use ``math.fsum`` so results do not depend on
the order of the input; categories with equal totals are ordered by name.
"""
import math
from collections import defaultdict
from datetime import date, datetime, timedelta
from typing import Iterable, NamedTuple, Optional

from spendwise.domain import Goal, SAVINGS, Transaction
from spendwise.functional import Either, Left, Right
from spendwise.transforms import next_id
from spendwise.validation import INSUFFICIENT_FUNDS, error, validate_positive_amount

DAY = timedelta(days=1)


class Totals(NamedTuple):
    balance: float
    income: float
    expense: float


class ChartScale(NamedTuple):
    max_amount: float
    tick_values: tuple[float, ...]


class GoalProgress(NamedTuple):
    progress_pct: float
    remaining: float
    days_left: int
    daily_needed: float
    is_completed: bool
    is_overdue: bool


def compute_totals(trans: Iterable[Transaction]) -> Totals:
    amounts = tuple(t.amount for t in trans)
    income = math.fsum(a for a in amounts if a > 0)
    expense = math.fsum(-a for a in amounts if a < 0)
    return Totals(balance=math.fsum(amounts), income=income, expense=expense)


def compute_category_breakdown(trans: Iterable[Transaction]) -> tuple[tuple[str, float], ...]:
    amounts_by_category: dict[str, list[float]] = defaultdict(list)

    for t in trans:
        if t.amount < 0:
            amounts_by_category[t.category].append(-t.amount)

    totals = ((cat, math.fsum(values)) for cat, values in amounts_by_category.items())
    return tuple(sorted(totals, key=lambda item: (-item[1], item[0])))


def compute_chart_scale(breakdown: Iterable[tuple[str, float]], ticks: int = 5) -> ChartScale:
    """Linear y-axis for the breakdown bar chart, top tick first."""
    max_amount = max((total for _, total in breakdown), default=0.0)
    tick_values = tuple(max_amount * i / ticks for i in range(ticks, -1, -1))
    return ChartScale(max_amount=max_amount, tick_values=tick_values)


def category_shares(breakdown: Iterable[tuple[str, float]]) -> tuple[tuple[str, float, int], ...]:
    """Attach each category's rounded percentage of total expense."""
    rows = tuple(breakdown)
    total = math.fsum(amount for _, amount in rows)
    if total <= 0:
        return tuple((name, amount, 0) for name, amount in rows)
    return tuple((name, amount, round(amount / total * 100)) for name, amount in rows)


def recent_transactions(trans: Iterable[Transaction], limit: int = 10) -> tuple[Transaction, ...]:
    # newest date first; among equal dates the later-added one comes first
    ordered = sorted(reversed(tuple(trans)), key=lambda t: t.date, reverse=True)
    return tuple(ordered[: max(0, limit)])


def _as_datetime(now: Optional[datetime]) -> datetime:
    if now is None:
        return datetime.now()
    if not isinstance(now, datetime):
        return datetime.combine(now, datetime.min.time())
    return now


def raw_days_left(target_date: str, now: Optional[datetime] = None) -> int:
    """Signed whole days until ``target_date`` (rounded up); negative once past."""
    target = datetime.combine(date.fromisoformat(target_date), datetime.min.time())
    delta = target - _as_datetime(now).replace(tzinfo=None)
    return math.ceil(delta / DAY)


def compute_goal_progress(goal: Goal, now: Optional[datetime] = None) -> GoalProgress:
    """Progress metrics of a goal. ``goal.target_amount`` must be positive."""
    remaining = max(0.0, goal.target_amount - goal.current_amount)
    raw = raw_days_left(goal.target_date, now)
    days_left = raw if raw > 0 else 0
    is_completed = goal.current_amount >= goal.target_amount

    return GoalProgress(
        progress_pct=min(100.0, goal.current_amount / goal.target_amount * 100),
        remaining=remaining,
        days_left=days_left,
        daily_needed=remaining / days_left if days_left > 0 else 0.0,
        is_completed=is_completed,
        is_overdue=raw < 0 and not is_completed,
    )


def apply_contribution(
    goal: Goal,
    amount: float,
    available_balance: float,
    trans: Iterable[Transaction] = (),
    now: Optional[datetime] = None,
) -> Either[dict, tuple[Goal, Transaction]]:
    """Move ``amount`` from the balance into ``goal``.

    Returns the updated goal together with the linked "Savings" expense.
    Nothing is written; the caller persists both or neither.
    """
    checked = validate_positive_amount(amount, "contribution amount")
    if checked.is_left():
        return checked
    amount = checked.get_or_else(0.0)

    if amount > available_balance:
        return Left(error(
            INSUFFICIENT_FUNDS,
            f"Insufficient funds. Your current balance is {available_balance:.2f}",
            amount=amount,
            balance=available_balance,
        ))

    trans = tuple(trans)
    updated = Goal(
        id=goal.id,
        name=goal.name,
        target_amount=goal.target_amount,
        target_date=goal.target_date,
        current_amount=goal.current_amount + amount,
        created_at=goal.created_at,
    )
    contribution = Transaction(
        id=next_id(trans),
        description=f"Contribution to {goal.name}",
        amount=-amount,
        category=SAVINGS,
        date=_as_datetime(now).date().isoformat(),
    )
    return Right((updated, contribution))
