from datetime import datetime

from spendwise.domain import Goal, Transaction
from spendwise.report import breakdown_rows, build_report, goal_rows, summary_rows, transaction_rows

NOW = datetime(2025, 3, 1, 12, 0)


def make_sample():
    return (
        Transaction(1, "Salary", 1000.0, "Income", "2025-02-01"),
        Transaction(2, "Groceries", -300.0, "Food", "2025-02-02"),
        Transaction(3, "Rent", -100.0, "Housing", "2025-02-03"),
    )


def test_summary_rows():
    rows = summary_rows(make_sample())
    assert [label for label, _ in rows] == ["Total Income", "Total Expenses", "Balance"]
    assert rows[2][1].endswith("600.00")


def test_breakdown_rows_have_shares():
    rows = breakdown_rows(make_sample())
    assert rows[0][0] == "Food"
    assert rows[0][2] == "75%"
    assert rows[1][2] == "25%"


def test_transaction_rows_newest_first():
    rows = transaction_rows(make_sample(), limit=2)
    assert [r[1] for r in rows] == ["Rent", "Groceries"]
    assert rows[0][2].startswith("-")


def test_goal_rows_status():
    goals = (
        Goal(1, "Vacation", 1000.0, "2025-03-11", 300.0, "2025-01-01T00:00:00"),
        Goal(2, "Phone", 500.0, "2025-02-01", 100.0, "2025-01-01T00:00:00"),
        Goal(3, "Bike", 200.0, "2025-02-01", 200.0, "2025-01-01T00:00:00"),
    )
    rows = goal_rows(goals, NOW)
    assert rows[0][2] == "30.0%"
    assert rows[0][4] == "10 days left"
    assert rows[1][4] == "Overdue"
    assert rows[2][4] == "Completed"


def test_build_report_returns_pdf():
    pdf = build_report(make_sample(), (), NOW)
    assert pdf.startswith(b"%PDF")
    assert len(pdf) > 1000


def test_build_report_with_no_data():
    assert build_report((), (), NOW).startswith(b"%PDF")
