import sys
import os
sys.path.append(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

import logging
from datetime import date, timedelta

import streamlit as st

from spendwise import config
from spendwise.charts import category_bar_chart, transactions_frame
from spendwise.events import change_message
from spendwise.services import BudgetTracker

logging.basicConfig(
    level=getattr(logging, config.LOG_LEVEL, logging.INFO),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

st.set_page_config(page_title="SpendWise", layout="wide")


def get_tracker() -> BudgetTracker:
    if "tracker" not in st.session_state:
        tracker = BudgetTracker()
        st.session_state.messages = []
        tracker.bus.subscribe("*", lambda event: st.session_state.messages.append(change_message(event)))
        st.session_state.tracker = tracker
    return st.session_state.tracker


def show(result, rerun: bool = True) -> None:
    """Surface the outcome of a command as a transient message."""
    if result.is_left():
        st.error(result.get_error()["message"])
    elif rerun:
        st.rerun()


tracker = get_tracker()

for msg in st.session_state.messages:
    st.toast(msg)
st.session_state.messages = []

st.sidebar.markdown("### 📄 Report")
st.sidebar.download_button(
    "⬇ Download PDF report",
    data=tracker.report_pdf(),
    file_name=config.REPORT_FILENAME,
    mime="application/pdf",
)

st.title("💰 SpendWise")

totals = tracker.totals()
k1, k2, k3 = st.columns(3)
with k1:
    st.metric("Balance", config.format_money(totals.balance))
with k2:
    st.metric("Income", config.format_money(totals.income, signed=True))
with k3:
    st.metric("Expense", f"-{config.format_money(totals.expense)}")

tab_tx, tab_chart, tab_goals, tab_cats = st.tabs(
    ["🧾 Transactions", "📊 Chart", "🎯 Goals", "🗂 Categories"]
)

with tab_tx:
    st.subheader("➕ Add New Transaction")
    with st.form("transaction_form", clear_on_submit=True):
        col1, col2 = st.columns(2)
        with col1:
            description = st.text_input("Description")
            amount = st.number_input(
                "Amount (negative for expense)", step=100.0, format="%.2f"
            )
        with col2:
            category = st.selectbox("Category", list(tracker.categories))
            tx_date = st.date_input("Date", value=date.today())
        if st.form_submit_button("Add Transaction"):
            show(tracker.add_transaction(description, amount, category, tx_date))

    st.subheader("History")
    if not tracker.transactions:
        st.info("No transactions yet.")
    for t in reversed(tracker.transactions):
        c1, c2, c3 = st.columns([6, 2, 1])
        c1.markdown(f"**{t.description}**  \n{t.category} · {t.date}")
        c2.markdown(config.format_money(t.amount, signed=True))
        if c3.button("×", key=f"del_tx_{t.id}"):
            show(tracker.delete_transaction(t.id))

    if tracker.transactions:
        csv = transactions_frame(tracker.transactions).to_csv(index=False)
        st.download_button("⬇ Download CSV", csv, file_name="transactions.csv", mime="text/csv")

with tab_chart:
    breakdown = tracker.breakdown()
    if not tracker.transactions:
        st.info("No data to display")
    elif not breakdown:
        st.info("No expense data to display")
    else:
        st.plotly_chart(category_bar_chart(breakdown), use_container_width=True)

with tab_goals:
    st.subheader("➕ New Savings Goal")
    with st.form("goal_form", clear_on_submit=True):
        col1, col2 = st.columns(2)
        with col1:
            goal_name = st.text_input("Goal name")
            goal_amount = st.number_input("Target amount", min_value=0.0, step=100.0)
        with col2:
            goal_date = st.date_input("Target date", value=date.today() + timedelta(days=30))
            initial = st.number_input("Initial amount", min_value=0.0, step=100.0)
        if st.form_submit_button("Add Goal"):
            show(tracker.add_goal(goal_name, goal_amount, goal_date, initial))

    if not tracker.goals:
        st.info("No savings goals yet.")
    for g in tracker.goals:
        p = tracker.goal_progress(g)
        with st.container(border=True):
            st.markdown(f"### {g.name}")
            st.progress(p.progress_pct / 100, text=f"{p.progress_pct:.1f}%")
            st.caption(
                f"{config.format_money(g.current_amount)} of {config.format_money(g.target_amount)}"
                f" · target {g.target_date}"
            )
            if p.is_completed:
                st.success("Goal completed! 🎉")
            elif p.is_overdue:
                st.warning(f"Overdue · {config.format_money(p.remaining)} remaining")
            else:
                st.caption(
                    f"{p.days_left} days left · {config.format_money(p.remaining)} remaining"
                    f" · {config.format_money(p.daily_needed)} per day"
                )

            c1, c2, c3 = st.columns([3, 3, 1])
            with c1:
                contrib = st.number_input(
                    "Contribution", min_value=0.0, step=50.0, key=f"contrib_{g.id}"
                )
                if st.button("Contribute", key=f"btn_contrib_{g.id}"):
                    show(tracker.contribute_to_goal(g.id, contrib))
            with c2:
                with st.popover("✏️ Edit"):
                    new_name = st.text_input("Name", value=g.name, key=f"name_{g.id}")
                    new_target = st.number_input(
                        "Target amount", value=float(g.target_amount), key=f"target_{g.id}"
                    )
                    new_date = st.date_input(
                        "Target date", value=date.fromisoformat(g.target_date), key=f"date_{g.id}"
                    )
                    if st.button("Save", key=f"save_{g.id}"):
                        changed_date = None if new_date.isoformat() == g.target_date else new_date
                        show(tracker.edit_goal(g.id, new_name, new_target, changed_date))
            with c3:
                if st.button("🗑", key=f"del_goal_{g.id}"):
                    show(tracker.delete_goal(g.id))

with tab_cats:
    st.subheader("Categories")
    for name in tracker.categories:
        c1, c2 = st.columns([6, 1])
        c1.write(name)
        if c2.button("×", key=f"del_cat_{name}"):
            show(tracker.delete_category(name))

    with st.form("category_form", clear_on_submit=True):
        new_category = st.text_input("New category")
        if st.form_submit_button("Save Category"):
            show(tracker.add_category(new_category))
