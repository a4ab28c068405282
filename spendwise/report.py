"""PDF budget report.

Layout: summary figures, expense breakdown, recent transactions and
savings goals, each as a table.
"""

from __future__ import annotations

import io
import logging
from datetime import datetime
from typing import Iterable, Optional

from reportlab.lib import colors
from reportlab.lib.pagesizes import A4
from reportlab.lib.styles import getSampleStyleSheet
from reportlab.platypus import Paragraph, SimpleDocTemplate, Spacer, Table, TableStyle

from spendwise import config
from spendwise.aggregation import (
    category_shares,
    compute_category_breakdown,
    compute_goal_progress,
    compute_totals,
    recent_transactions,
)
from spendwise.domain import Goal, Transaction

logger = logging.getLogger(__name__)

PRIMARY = colors.HexColor("#2980B9")

HEADER_STYLE = [
    ("BACKGROUND", (0, 0), (-1, 0), PRIMARY),
    ("TEXTCOLOR", (0, 0), (-1, 0), colors.white),
    ("FONTNAME", (0, 0), (-1, 0), "Helvetica-Bold"),
    ("FONTSIZE", (0, 0), (-1, -1), 9),
    ("VALIGN", (0, 0), (-1, -1), "MIDDLE"),
]
STRIPED = TableStyle(HEADER_STYLE + [
    ("ROWBACKGROUNDS", (0, 1), (-1, -1), [colors.white, colors.HexColor("#F2F2F2")]),
])
GRID = TableStyle(HEADER_STYLE + [
    ("GRID", (0, 0), (-1, -1), 0.5, colors.grey),
])


def summary_rows(trans: Iterable[Transaction]) -> list[list[str]]:
    totals = compute_totals(trans)
    return [
        ["Total Income", config.format_money(totals.income)],
        ["Total Expenses", config.format_money(totals.expense)],
        ["Balance", config.format_money(totals.balance)],
    ]


def breakdown_rows(trans: Iterable[Transaction]) -> list[list[str]]:
    return [
        [name, config.format_money(amount), f"{pct}%"]
        for name, amount, pct in category_shares(compute_category_breakdown(trans))
    ]


def transaction_rows(trans: Iterable[Transaction], limit: int = config.RECENT_LIMIT) -> list[list[str]]:
    return [
        [t.date, t.description, config.format_money(t.amount, signed=True), t.category or "-"]
        for t in recent_transactions(trans, limit)
    ]


def goal_rows(goals: Iterable[Goal], now: Optional[datetime] = None) -> list[list[str]]:
    rows = []
    for g in goals:
        p = compute_goal_progress(g, now)
        status = "Completed" if p.is_completed else ("Overdue" if p.is_overdue else f"{p.days_left} days left")
        rows.append([
            g.name,
            f"{config.format_money(g.current_amount)} / {config.format_money(g.target_amount)}",
            f"{p.progress_pct:.1f}%",
            config.format_money(p.remaining),
            status,
        ])
    return rows


def _section(story: list, styles, title: str, head: list[str], rows: list[list[str]],
             style: TableStyle, empty: str) -> None:
    story.append(Paragraph(title, styles["Heading2"]))
    if rows:
        table = Table([head] + rows, repeatRows=1, hAlign="LEFT")
        table.setStyle(style)
        story.append(table)
    else:
        story.append(Paragraph(empty, styles["Normal"]))
    story.append(Spacer(1, 12))


def build_report(
    trans: Iterable[Transaction],
    goals: Iterable[Goal],
    now: Optional[datetime] = None,
) -> bytes:
    """Render the budget report and return the PDF file contents."""
    now = now or datetime.now()
    trans = tuple(trans)
    goals = tuple(goals)

    buffer = io.BytesIO()
    doc = SimpleDocTemplate(
        buffer,
        pagesize=A4,
        title="Budget Report",
        subject="Financial Summary",
        author="SpendWise",
        creator="SpendWise",
    )
    styles = getSampleStyleSheet()
    story: list = [
        Paragraph("SpendWise Budget Report", styles["Title"]),
        Paragraph(f"Generated on {now:%B %d, %Y}", styles["Normal"]),
        Spacer(1, 12),
    ]

    summary = Table(summary_rows(trans), hAlign="LEFT")
    summary.setStyle(TableStyle([
        ("FONTNAME", (0, 0), (0, -1), "Helvetica-Bold"),
        ("GRID", (0, 0), (-1, -1), 0.5, colors.grey),
    ]))
    story += [Paragraph("Financial Summary", styles["Heading2"]), summary, Spacer(1, 12)]

    _section(story, styles, "Expense Breakdown by Category",
             ["Category", "Amount", "Share"], breakdown_rows(trans),
             STRIPED, "No expense data available.")
    _section(story, styles, "Recent Transactions",
             ["Date", "Description", "Amount", "Category"], transaction_rows(trans),
             STRIPED, "No transactions available.")
    _section(story, styles, "Savings Goals Summary",
             ["Goal Name", "Progress", "Completion %", "Remaining", "Status"], goal_rows(goals, now),
             GRID, "No savings goals available.")

    doc.build(story)
    logger.info("Built report with %d transactions and %d goals", len(trans), len(goals))
    return buffer.getvalue()
