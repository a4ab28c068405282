"""Figures and tables for the Streamlit front end."""

from typing import Iterable

import pandas as pd
import plotly.graph_objects as go

from spendwise import config
from spendwise.aggregation import compute_chart_scale
from spendwise.domain import Transaction

TX_COLUMNS = ["id", "date", "description", "category", "amount", "type"]


def transactions_frame(trans: Iterable[Transaction]) -> pd.DataFrame:
    """Newest-first table of transactions, with an income/expense column."""
    rows = [
        {
            "id": t.id,
            "date": pd.to_datetime(t.date, errors="coerce"),
            "description": t.description,
            "category": t.category,
            "amount": t.amount,
            "type": "income" if t.amount > 0 else ("expense" if t.amount < 0 else "-"),
        }
        for t in trans
    ]
    df = pd.DataFrame(rows, columns=TX_COLUMNS)
    return df.iloc[::-1].reset_index(drop=True)


def category_bar_chart(breakdown: Iterable[tuple[str, float]], ticks: int = config.CHART_TICKS) -> go.Figure:
    rows = tuple(breakdown)
    scale = compute_chart_scale(rows, ticks)
    names = [name for name, _ in rows]
    amounts = [amount for _, amount in rows]

    fig = go.Figure(go.Bar(
        x=names,
        y=amounts,
        text=[config.format_money(a) for a in amounts],
        hovertemplate="%{x}: %{text}<extra></extra>",
        marker_color="#2980B9",
    ))
    fig.update_layout(
        template="plotly_dark",
        margin=dict(t=30, b=10, l=10, r=10),
        xaxis_title="Category",
        yaxis_title=f"Expense ({config.CURRENCY})",
    )
    if scale.max_amount > 0:
        fig.update_yaxes(
            range=[0, scale.max_amount],
            tickmode="array",
            tickvals=list(scale.tick_values),
            ticktext=[f"{config.CURRENCY} {v:,.0f}" for v in scale.tick_values],
        )
    return fig
