"""Input validation for user commands.

Validators never raise for bad input; they return ``Left`` with an error
dict (``{"error": <code>, "message": <text>, ...}``) or ``Right`` with the
cleaned values.
"""
import math
from datetime import date, datetime
from typing import Any, Optional

from spendwise.functional import Either, Left, Right, first_error

INVALID_INPUT = "invalid_input"
DUPLICATE_CATEGORY = "duplicate_category"
PROTECTED_CATEGORY = "protected_category"
LAST_CATEGORY = "last_category"
INSUFFICIENT_FUNDS = "insufficient_funds"

MIN_GOAL_NAME = 3


def error(code: str, message: str, **details: Any) -> dict:
    return {"error": code, "message": message, **details}


def parse_amount(value: Any) -> Optional[float]:
    """Float value of ``value`` or ``None`` when it is not a finite number."""
    if isinstance(value, bool):
        return None
    try:
        amount = float(value)
    except (TypeError, ValueError):
        return None
    if math.isnan(amount) or math.isinf(amount):
        return None
    return amount


def parse_date(value: Any) -> Optional[date]:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not isinstance(value, str) or not value.strip():
        return None
    try:
        return date.fromisoformat(value.strip())
    except ValueError:
        return None


def _check_text(text: Any, label: str, min_length: int = 1) -> Optional[dict]:
    if not isinstance(text, str) or len(text.strip()) < min_length:
        if min_length > 1:
            msg = f"Please enter a valid {label} (at least {min_length} characters)"
        else:
            msg = f"Please enter a {label}"
        return error(INVALID_INPUT, msg, field=label)
    return None


def validate_transaction_input(
    description: Any,
    amount: Any,
    category: Any,
    tx_date: Any,
    categories: tuple[str, ...],
) -> Either[dict, tuple[str, float, str, str]]:
    """Check a new transaction. Zero amounts are accepted."""
    parsed_amount = parse_amount(amount)
    parsed_date = parse_date(tx_date)
    result = first_error(
        None if parsed_amount is not None
        else error(INVALID_INPUT, "Please enter a valid amount", field="amount"),
        _check_text(description, "description"),
        None if category in categories
        else error(INVALID_INPUT, f"Unknown category: {category}", field="category"),
        None if parsed_date is not None
        else error(INVALID_INPUT, "Please select a valid date", field="date"),
    )
    return result.map(
        lambda _: (description.strip(), parsed_amount, category, parsed_date.isoformat())
    )


def validate_positive_amount(amount: Any, label: str = "amount") -> Either[dict, float]:
    parsed = parse_amount(amount)
    if parsed is None or parsed <= 0:
        return Left(error(
            INVALID_INPUT, f"Please enter a valid {label} (greater than 0)", field=label
        ))
    return Right(parsed)


def validate_future_date(value: Any, today: date) -> Either[dict, str]:
    parsed = parse_date(value)
    if parsed is None or parsed <= today:
        return Left(error(INVALID_INPUT, "Please select a valid future date", field="target_date"))
    return Right(parsed.isoformat())


def validate_goal_input(
    name: Any,
    target_amount: Any,
    target_date: Any,
    initial_amount: Any,
    today: date,
) -> Either[dict, tuple[str, float, str, float]]:
    """Check a new goal; ``initial_amount`` of ``None`` or ``""`` means 0."""
    if initial_amount is None or initial_amount == "":
        initial_amount = 0
    initial = parse_amount(initial_amount)
    target = validate_positive_amount(target_amount, "target amount")
    when = validate_future_date(target_date, today)
    result = first_error(
        _check_text(name, "goal name", MIN_GOAL_NAME),
        target.get_error() if target.is_left() else None,
        when.get_error() if when.is_left() else None,
        None if initial is not None and initial >= 0
        else error(INVALID_INPUT, "Initial amount must be 0 or positive", field="initial_amount"),
    )
    return result.map(
        lambda _: (name.strip(), target.get_or_else(0.0), when.get_or_else(""), initial)
    )


def validate_category_name(name: Any, categories: tuple[str, ...]) -> Either[dict, str]:
    if not isinstance(name, str) or not name.strip():
        return Left(error(INVALID_INPUT, "Please enter a category name", field="category"))
    name = name.strip()
    if name in categories:
        return Left(error(DUPLICATE_CATEGORY, "This category already exists", category=name))
    return Right(name)
