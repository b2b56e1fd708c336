"""
Streamlit Frontend for Expense Tracker

This is the user interface. It owns no domain logic: every number on
screen comes from BudgetSession, and every button calls exactly one
session method.

DESIGN PRINCIPLES:
1. Numbers are recomputed from the data on every rerun
2. Clearing data always asks for confirmation
3. Storage problems are shown as warnings, never as crashes
"""

import plotly.express as px
import streamlit as st

from src.catalog import EXPENSE_MODES, OTHER_CATEGORY, list_currencies
from src.models.expense import ChartType
from src.orchestrator import BudgetSession, create_app_components


# Page configuration
st.set_page_config(
    page_title="Expense Tracker",
    page_icon="💰",
    layout="wide",
)

DARK_CSS = """
<style>
    .stApp { background-color: #111827; color: #f3f4f6; }
</style>
"""


def get_session() -> BudgetSession:
    """Get or create this browser session's BudgetSession."""
    if "budget_session" not in st.session_state:
        session, _ = create_app_components(use_storage=True)
        st.session_state.budget_session = session
    return st.session_state.budget_session


def main():
    """Main application entry point."""
    session = get_session()

    if session.dark_mode:
        st.markdown(DARK_CSS, unsafe_allow_html=True)

    render_header(session)
    render_dashboard(session)

    col1, col2 = st.columns(2)
    with col1:
        render_entry_form(session)
    with col2:
        render_expense_list(session)

    render_analytics(session)
    render_clear_data(session)

    for warning in session.pop_warnings():
        st.warning(warning)


def render_header(session: BudgetSession):
    title_col, theme_col = st.columns([5, 1])
    with title_col:
        st.title("💰 Expense Tracker")
    with theme_col:
        label = "☀️ Light" if session.dark_mode else "🌙 Dark"
        if st.button(label, use_container_width=True):
            session.toggle_dark_mode()
            st.rerun()


def render_dashboard(session: BudgetSession):
    """Budget input and headline metrics."""
    metrics = session.metrics()
    currency = session.currency

    with st.form("budget_form"):
        budget_text = st.text_input(
            f"Monthly Budget ({currency.symbol})",
            value="" if not session.data.monthly_budget else str(session.data.monthly_budget),
            placeholder="Enter monthly budget",
        )
        if st.form_submit_button("Set Budget"):
            session.set_budget(budget_text)
            st.rerun()

    c1, c2, c3, c4 = st.columns(4)
    c1.metric("Total Spent", session.format(metrics.total_expenses))
    c2.metric(
        "Over Budget" if metrics.is_over_budget else "Remaining",
        session.format(abs(metrics.remaining)),
    )
    c3.metric("Budget Used", f"{metrics.percentage_used:.1f}%")
    c4.metric(
        "Top Category",
        metrics.top_category.name if metrics.top_category else "None",
        session.format(metrics.top_category.value) if metrics.top_category else None,
        delta_color="off",
    )

    if session.data.monthly_budget > 0:
        st.progress(min(metrics.percentage_used, 100.0) / 100)
    if metrics.is_over_budget:
        st.error(
            "You've exceeded your monthly budget by "
            f"{session.format(abs(metrics.remaining))}"
        )


def render_entry_form(session: BudgetSession):
    """Mode, currency and the staged expense rows."""
    st.subheader("Add Expenses")

    modes = [mode.value for mode in EXPENSE_MODES]
    mode = st.radio(
        "Expense Mode",
        modes,
        index=modes.index(session.data.mode.value),
        horizontal=True,
    )
    if mode != session.data.mode.value:
        session.set_mode(mode)
        st.rerun()

    currencies = list_currencies()
    codes = [c.code for c in currencies]
    current = session.currency.code
    code = st.selectbox(
        "Currency",
        codes,
        index=codes.index(current),
        format_func=lambda c: next(f"{x.symbol} {x.code} - {x.name}" for x in currencies if x.code == c),
    )
    if code != current:
        session.set_currency(code)
        st.rerun()

    categories = [""] + list(session.categories())
    for row in session.draft.rows:
        with st.container(border=True):
            category = st.selectbox(
                "Category",
                categories,
                index=categories.index(row.category) if row.category in categories else 0,
                format_func=lambda c: c or "Select a category",
                key=f"cat_{row.row_id}",
            )
            custom = ""
            if category == OTHER_CATEGORY:
                custom = st.text_input(
                    "Custom Category",
                    value=row.custom_category,
                    placeholder="Enter custom category name",
                    key=f"custom_{row.row_id}",
                )
            amount = st.text_input(
                f"Amount ({session.currency.symbol})",
                value=str(row.amount or ""),
                placeholder="0.00",
                key=f"amount_{row.row_id}",
            )
            session.draft.update_row(
                row.row_id, category=category, custom_category=custom, amount=amount
            )
            if len(session.draft.rows) > 1 and st.button("Remove", key=f"rm_{row.row_id}"):
                session.draft.remove_row(row.row_id)
                st.rerun()

    add_col, submit_col = st.columns(2)
    if add_col.button("➕ Add Category", use_container_width=True):
        session.draft.add_row()
        st.rerun()
    if submit_col.button("Submit Expenses", type="primary", use_container_width=True):
        st.toast(session.submit_draft())
        st.rerun()


def render_expense_list(session: BudgetSession):
    """Recorded expenses, newest first."""
    st.subheader("Recent Expenses")
    expenses = session.expenses_by_recency()
    if not expenses:
        st.info("No expenses recorded yet.")
        return

    for expense in expenses:
        name_col, amount_col, action_col = st.columns([4, 2, 1])
        name_col.markdown(f"**{expense.category}**")
        amount_col.markdown(session.format(expense.amount))
        if action_col.button("🗑️", key=f"del_{expense.id}"):
            session.remove(expense.id)
            st.rerun()


def render_analytics(session: BudgetSession):
    """Toggleable category analytics with pie/bar charts."""
    label = "Hide Analytics" if session.view.visible else "Show Analytics"
    if st.button(f"📊 {label}"):
        session.view.toggle()
        st.rerun()
    if not session.view.visible:
        return

    breakdown = session.breakdown()
    if not breakdown:
        st.info("Add some expenses to see analytics.")
        return

    chart_types = [ChartType.PIE.value, ChartType.BAR.value]
    chart = st.radio(
        "Chart",
        chart_types,
        index=chart_types.index(session.view.chart_type.value),
        format_func=str.title,
        horizontal=True,
    )
    session.view.select_chart(chart)

    rows = {
        "Category": [s.name for s in breakdown],
        "Amount": [float(s.value) for s in breakdown],
        "Percentage": [s.percentage for s in breakdown],
    }
    if session.view.chart_type == ChartType.PIE:
        fig = px.pie(rows, names="Category", values="Amount", hole=0.3)
    else:
        fig = px.bar(rows, x="Category", y="Amount", text="Percentage")
    st.plotly_chart(fig, use_container_width=True)

    for item in breakdown:
        st.markdown(
            f"- **{item.name}**: {session.format(item.value)} ({item.percentage:.1f}%)"
        )


def render_clear_data(session: BudgetSession):
    """Wholesale reset behind an explicit confirmation."""
    st.markdown("---")
    if not st.session_state.get("confirm_clear"):
        if st.button("🗑️ Clear All Data"):
            st.session_state.confirm_clear = True
            st.rerun()
        return

    st.warning("This permanently deletes your budget and all expenses.")
    yes_col, no_col = st.columns(2)
    if yes_col.button("Yes, clear everything", type="primary"):
        session.reset_all()
        st.session_state.confirm_clear = False
        st.rerun()
    if no_col.button("Cancel"):
        st.session_state.confirm_clear = False
        st.rerun()


if __name__ == "__main__":
    main()
