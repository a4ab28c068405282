from dataclasses import dataclass

OTHER = "Other"
SAVINGS = "Savings"

DEFAULT_CATEGORIES = (
    "Food",
    "Transportation",
    "Housing",
    "Utilities",
    "Entertainment",
    "Income",
    OTHER,
)


@dataclass(frozen=True)
class Transaction:
    id: int
    description: str
    amount: float    # + for income, - for expense
    category: str
    date: str        # ISO date, e.g. "2025-09-01"


# A savings goal
@dataclass(frozen=True)
class Goal:
    id: int
    name: str
    target_amount: float
    target_date: str      # ISO date
    current_amount: float
    created_at: str       # ISO timestamp, never changes
