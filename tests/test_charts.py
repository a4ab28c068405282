from spendwise.charts import TX_COLUMNS, category_bar_chart, transactions_frame
from spendwise.domain import Transaction


def test_transactions_frame_newest_first():
    trans = (
        Transaction(1, "Salary", 1000.0, "Income", "2025-01-01"),
        Transaction(2, "Groceries", -40.0, "Food", "2025-01-02"),
        Transaction(3, "Nothing", 0.0, "Other", "2025-01-03"),
    )
    df = transactions_frame(trans)
    assert list(df.columns) == TX_COLUMNS
    assert list(df["id"]) == [3, 2, 1]
    assert list(df["type"]) == ["-", "expense", "income"]


def test_transactions_frame_empty():
    df = transactions_frame(())
    assert df.empty
    assert list(df.columns) == TX_COLUMNS


def test_category_bar_chart_uses_linear_ticks():
    fig = category_bar_chart((("Food", 400.0), ("Transportation", 100.0)))
    assert list(fig.data[0].x) == ["Food", "Transportation"]
    assert list(fig.layout.yaxis.tickvals) == [400, 320, 240, 160, 80, 0]


def test_category_bar_chart_empty_breakdown():
    fig = category_bar_chart(())
    assert len(fig.data[0].x or ()) == 0
    assert fig.layout.yaxis.tickvals is None
