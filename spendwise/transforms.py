from datetime import date, datetime
from typing import Any, Iterable, Optional, Union

from spendwise.domain import Goal, OTHER, Transaction
from spendwise.functional import Either, Left, Maybe, Right, first_error, maybe_first
from spendwise.validation import (
    INVALID_INPUT,
    LAST_CATEGORY,
    MIN_GOAL_NAME,
    PROTECTED_CATEGORY,
    error,
    validate_category_name,
    validate_future_date,
    validate_goal_input,
    validate_positive_amount,
    validate_transaction_input,
)


def next_id(items: Iterable[Union[Transaction, Goal]]) -> int:
    return max((item.id for item in items), default=0) + 1


def find_transaction(trans: tuple[Transaction, ...], tx_id: int) -> Maybe[Transaction]:
    return maybe_first(trans, lambda t: t.id == tx_id)


def find_goal(goals: tuple[Goal, ...], goal_id: int) -> Maybe[Goal]:
    return maybe_first(goals, lambda g: g.id == goal_id)


def add_transaction(
    trans: tuple[Transaction, ...],
    categories: tuple[str, ...],
    description: Any,
    amount: Any,
    category: Any,
    tx_date: Any,
) -> Either[dict, tuple[Transaction, ...]]:
    def _append(fields: tuple[str, float, str, str]) -> tuple[Transaction, ...]:
        desc, value, cat, iso = fields
        t = Transaction(id=next_id(trans), description=desc, amount=value, category=cat, date=iso)
        return trans + (t,)

    return validate_transaction_input(description, amount, category, tx_date, categories).map(_append)


def delete_transaction(trans: tuple[Transaction, ...], tx_id: int) -> tuple[Transaction, ...]:
    return tuple(t for t in trans if t.id != tx_id)


def add_category(categories: tuple[str, ...], name: Any) -> Either[dict, tuple[str, ...]]:
    return validate_category_name(name, categories).map(lambda n: categories + (n,))


def reassign_category(
    trans: tuple[Transaction, ...], old: str, new: str = OTHER
) -> tuple[Transaction, ...]:
    return tuple(
        Transaction(
            id=t.id,
            description=t.description,
            amount=t.amount,
            category=new if t.category == old else t.category,
            date=t.date,
        )
        for t in trans
    )


def delete_category(
    categories: tuple[str, ...], trans: tuple[Transaction, ...], name: str
) -> Either[dict, tuple[tuple[str, ...], tuple[Transaction, ...]]]:
    """Remove ``name`` and move its transactions to "Other".

    Deleting a category that is not present leaves both collections as they
    are.
    """
    if name not in categories:
        return Right((categories, trans))
    if name == OTHER:
        return Left(error(PROTECTED_CATEGORY, f"You cannot delete the '{OTHER}' category", category=name))
    if len(categories) <= 1:
        return Left(error(LAST_CATEGORY, "You must have at least one category", category=name))
    return Right((
        tuple(c for c in categories if c != name),
        reassign_category(trans, name, OTHER),
    ))


def add_goal(
    goals: tuple[Goal, ...],
    name: Any,
    target_amount: Any,
    target_date: Any,
    initial_amount: Any = 0,
    now: Optional[datetime] = None,
) -> Either[dict, tuple[Goal, ...]]:
    now = now or datetime.now()

    def _append(fields: tuple[str, float, str, float]) -> tuple[Goal, ...]:
        clean_name, target, when, initial = fields
        g = Goal(
            id=next_id(goals),
            name=clean_name,
            target_amount=target,
            target_date=when,
            current_amount=initial,
            created_at=now.isoformat(),
        )
        return goals + (g,)

    return validate_goal_input(name, target_amount, target_date, initial_amount, now.date()).map(_append)


def replace_goal(goals: tuple[Goal, ...], updated: Goal) -> tuple[Goal, ...]:
    return tuple(updated if g.id == updated.id else g for g in goals)


def edit_goal(
    goals: tuple[Goal, ...],
    goal_id: int,
    name: Optional[str] = None,
    target_amount: Any = None,
    target_date: Any = None,
    today: Optional[date] = None,
) -> Either[dict, tuple[Goal, ...]]:
    """Change any of name, target amount and target date of one goal.

    Fields left as ``None`` keep their value. If any provided field is
    invalid nothing changes. An unknown ``goal_id`` is not an error.
    """
    found = find_goal(goals, goal_id)
    if found.is_none():
        return Right(goals)
    goal = found.get_or_else(None)
    today = today or date.today()

    new_name = goal.name if name is None or not str(name).strip() else str(name).strip()
    amount = validate_positive_amount(target_amount, "target amount") if target_amount is not None else Right(goal.target_amount)
    when = validate_future_date(target_date, today) if target_date is not None else Right(goal.target_date)

    checked = first_error(
        None if len(new_name) >= MIN_GOAL_NAME
        else error(INVALID_INPUT, f"Please enter a valid goal name (at least {MIN_GOAL_NAME} characters)", field="goal name"),
        amount.get_error() if amount.is_left() else None,
        when.get_error() if when.is_left() else None,
    )
    return checked.map(lambda _: replace_goal(goals, Goal(
        id=goal.id,
        name=new_name,
        target_amount=amount.get_or_else(goal.target_amount),
        target_date=when.get_or_else(goal.target_date),
        current_amount=goal.current_amount,
        created_at=goal.created_at,
    )))


def delete_goal(goals: tuple[Goal, ...], goal_id: int) -> tuple[Goal, ...]:
    return tuple(g for g in goals if g.id != goal_id)
