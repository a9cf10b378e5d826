"""
Streamlit Frontend for FinanceTracker

A thin layer over fintrack.orchestrator. All figures come from
DashboardFlow.snapshot(); this module only draws them and forwards
user actions.

DESIGN PRINCIPLES:
1. Login screen when nobody is logged in
2. One month on screen at a time, prev/next to move
3. Every change is saved immediately
"""

from datetime import date
from decimal import Decimal

import streamlit as st

from fintrack.config import get_settings
from fintrack.ledger import (
    DEFAULT_INSTALLMENTS,
    INSTALLMENT_COUNTS,
    per_installment_amount,
)
from fintrack.models import (
    InstallmentInfo,
    TransactionDraft,
    TransactionType,
    suggested_categories,
)
from fintrack.orchestrator import DashboardFlow, create_app_components
from fintrack.session import SessionError


# Page configuration
st.set_page_config(
    page_title="FinanceTracker",
    page_icon="💰",
    layout="wide",
    initial_sidebar_state="expanded",
)


@st.cache_resource
def get_components():
    """Get or create application components (cached)."""
    return create_app_components(get_settings())


def get_flow(storage, user: str) -> DashboardFlow:
    """One DashboardFlow per browser session and user."""
    flow = st.session_state.get("flow")
    if flow is None or flow.user_id != user:
        flow = DashboardFlow(storage, user, settings=get_settings())
        st.session_state.flow = flow
    return flow


def main():
    """Main application entry point."""
    storage, sessions = get_components()

    user = sessions.current_user()
    if not user:
        render_login_page(sessions)
        return

    flow = get_flow(storage, user)

    st.sidebar.title("💰 FinanceTracker")
    st.sidebar.markdown(f"Welcome, **{user}**")
    render_budget_form(flow)
    st.sidebar.markdown("---")
    if st.sidebar.button("Log out"):
        sessions.logout()
        st.session_state.pop("flow", None)
        st.rerun()

    render_dashboard(flow)


def render_login_page(sessions):
    """Render the login page."""
    st.title("💰 FinanceTracker")

    with st.form("login"):
        username = st.text_input("Username")
        password = st.text_input("Password", type="password")
        submitted = st.form_submit_button("Log in", type="primary")

    if submitted:
        try:
            sessions.login(username, password)
        except SessionError as e:
            st.error(str(e))
        else:
            st.rerun()


def render_budget_form(flow: DashboardFlow):
    """Render the budget editor in the sidebar."""
    budget = st.sidebar.number_input(
        "Monthly budget",
        min_value=0.0,
        value=float(flow.budget_store.budget),
        step=100.0,
    )
    if st.sidebar.button("Save budget"):
        try:
            saved = flow.set_budget(Decimal(str(budget)))
        except ValueError as e:
            st.sidebar.error(str(e))
        else:
            if not saved:
                st.sidebar.warning("Budget updated for this session but could not be saved.")
            st.rerun()


def render_dashboard(flow: DashboardFlow):
    """Render the month view."""
    col_prev, col_title, col_next = st.columns([1, 6, 1])
    with col_prev:
        if st.button("◀", key="prev_month"):
            flow.previous_month()
            st.rerun()
    with col_next:
        if st.button("▶", key="next_month"):
            flow.next_month()
            st.rerun()

    snapshot = flow.snapshot()

    with col_title:
        badge = " (current)" if snapshot.is_current_month else ""
        st.subheader(f"📅 {snapshot.month.first_day.strftime('%B %Y')}{badge}")

    totals = snapshot.totals
    col1, col2, col3 = st.columns(3)
    col1.metric("Total income", f"{totals.income:,.2f}")
    col2.metric("Total expenses", f"{totals.expense:,.2f}")
    col3.metric("Remaining", f"{totals.remaining:,.2f}")

    st.progress(
        min(float(totals.budget_used_pct) / 100, 1.0),
        text=f"{totals.budget_used_pct:.1f}% of {snapshot.budget:,.2f} budget used",
    )

    chart_col, list_col = st.columns(2)

    with chart_col:
        st.markdown("### Last months")
        st.bar_chart(
            [
                {
                    "month": point.label,
                    "income": float(point.income),
                    "expense": float(point.expense),
                }
                for point in snapshot.series
            ],
            x="month",
            y=["income", "expense"],
        )

        st.markdown("### Expenses by category")
        if snapshot.categories:
            for entry in snapshot.categories:
                st.markdown(f"- **{entry.category}**: {entry.total:,.2f}")
        else:
            st.info("No expenses this month.")

    with list_col:
        st.markdown(f"### Transactions ({len(snapshot.transactions)})")
        if not snapshot.transactions:
            st.info("No transactions this month. Add your first transaction to get started.")
        for transaction in snapshot.transactions:
            sign = "+" if transaction.type == TransactionType.INCOME else "-"
            label = f"{transaction.date.strftime('%b %d')} · {transaction.description} · {transaction.category}"
            if transaction.installment_info:
                info = transaction.installment_info
                label += f" · {info.current}/{info.total}"
            row_text, row_action = st.columns([5, 1])
            row_text.markdown(f"{label}: **{sign}{transaction.amount:,.2f}**")
            if row_action.button("🗑", key=f"delete_{transaction.id}"):
                flow.remove_transaction(transaction.id)
                st.rerun()

    st.markdown("---")
    render_transaction_form(flow, snapshot.month.first_day)

    if not flow.store.last_save_ok:
        st.warning("Your latest change could not be saved to disk. It is kept for this session.")


def render_transaction_form(flow: DashboardFlow, default_date: date):
    """Render the add-transaction form."""
    st.markdown("### ➕ Add transaction")

    transaction_type = st.radio(
        "Type",
        options=list(TransactionType),
        format_func=lambda t: t.value.title(),
        horizontal=True,
        index=1,
    )

    # Outside the form so the installment preview follows every edit
    amount = st.number_input("Amount", min_value=0.0, step=0.01, format="%.2f")

    is_installment = False
    installments = DEFAULT_INSTALLMENTS
    if transaction_type == TransactionType.EXPENSE:
        is_installment = st.checkbox("Installment purchase")
        if is_installment:
            installments = st.selectbox(
                "Number of installments",
                options=INSTALLMENT_COUNTS,
                index=INSTALLMENT_COUNTS.index(DEFAULT_INSTALLMENTS),
            )
            if amount:
                each = per_installment_amount(Decimal(str(amount)), installments)
                st.caption(f"Each installment: {each:,.2f}")

    with st.form("add_transaction", clear_on_submit=True):
        description = st.text_input("Description", placeholder="What was it for?")
        category = st.selectbox("Category", options=suggested_categories(transaction_type))
        when = st.date_input("Date", value=default_date)
        submitted = st.form_submit_button("Add", type="primary")

    if not submitted:
        return

    if not amount or not description.strip() or not category:
        st.error("Please fill in amount, description and category.")
        return

    try:
        draft = TransactionDraft(
            type=transaction_type,
            amount=Decimal(str(amount)),
            description=description,
            category=category,
            date=when,
            is_installment=is_installment,
            installment_info=InstallmentInfo(
                current=1,
                total=installments,
                original_amount=Decimal(str(amount)),
                original_date=when,
            ) if is_installment else None,
        )
    except ValueError as e:
        st.error(f"Invalid transaction: {e}")
        return

    flow.add_transaction(draft)
    st.rerun()


if __name__ == "__main__":
    main()
