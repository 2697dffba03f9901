"""
Streamlit Frontend for Expense Tracker

DESIGN PRINCIPLES:
1. Simple, clear interface
2. Every change confirmed with a toast
3. Clear error messages next to the field that caused them
4. Numbers always shown in rupees with Indian grouping

All figures come from ExpenseTracker; this module only lays them out.
"""

from datetime import date

import streamlit as st

from expense_tracker.formatting import (
    category_hex_color,
    category_icon,
    current_month,
    format_date,
    format_inr,
    format_percentage,
)
from expense_tracker.models.expense import ExpenseForm
from expense_tracker.orchestrator import ExpenseTracker, create_app_components


st.set_page_config(
    page_title="Expense Tracker",
    page_icon="💰",
    layout="wide",
    initial_sidebar_state="expanded",
)

st.markdown("""
<style>
    .stButton>button {
        width: 100%;
    }
    .bar {
        height: 10px;
        border-radius: 5px;
        background-color: #e5e7eb;
    }
    .bar > div {
        height: 10px;
        border-radius: 5px;
    }
</style>
""", unsafe_allow_html=True)


@st.cache_resource
def get_tracker() -> ExpenseTracker:
    """One tracker (and store) per server process."""
    try:
        return create_app_components(use_storage=True)
    except Exception as e:
        st.error(f"Failed to open saved expenses: {e}")
        return create_app_components(use_storage=False)


def progress_bar(percentage: float, color: str) -> None:
    width = max(0.0, min(percentage, 100.0))
    st.markdown(
        f'<div class="bar"><div style="width:{width:.1f}%;background-color:{color}"></div></div>',
        unsafe_allow_html=True,
    )


def show_pending_toast() -> None:
    message = st.session_state.pop("toast", None)
    if message:
        st.toast(message)


def main():
    """Main application entry point."""
    tracker = get_tracker()

    st.sidebar.title("💰 Expense Tracker")
    st.sidebar.markdown("---")

    page = st.sidebar.radio(
        "Navigate to:",
        ["🏠 Dashboard", "➕ Add Expense", "📋 View Expenses", "📊 Analytics"],
        index=0,
    )

    show_pending_toast()

    if page == "🏠 Dashboard":
        render_dashboard_page(tracker)
    elif page == "➕ Add Expense":
        render_add_page(tracker)
    elif page == "📋 View Expenses":
        render_expenses_page(tracker)
    elif page == "📊 Analytics":
        render_analytics_page(tracker)


def render_dashboard_page(tracker: ExpenseTracker):
    st.title("Welcome to your Dashboard 🏠")
    st.markdown("Track your expenses and manage your finances")

    stats = tracker.dashboard()

    col1, col2, col3, col4 = st.columns(4)
    col1.metric(f"This Month ({current_month()})", format_inr(stats.total_this_month))
    col2.metric("Total Expenses", format_inr(stats.total_all_time))
    col3.metric("Transactions", stats.transaction_count)
    col4.metric(
        "vs Last Month",
        format_percentage(stats.monthly_change, signed=True),
        delta=format_inr(stats.total_this_month - stats.total_last_month),
        delta_color="inverse",
    )

    left, right = st.columns(2)

    with left:
        st.subheader("🏆 Top Categories")
        if not stats.top_categories:
            st.info("No expenses yet. Add your first one!")
        for category, amount in stats.top_categories:
            share = float(amount / stats.total_all_time * 100) if stats.total_all_time else 0.0
            st.markdown(f"{category_icon(category)} **{category}** · {format_inr(amount)}")
            progress_bar(share, category_hex_color(category))

    with right:
        st.subheader("🕒 Recent Expenses")
        if not stats.recent_expenses:
            st.info("Your recent expenses will show up here.")
        for expense in stats.recent_expenses:
            st.markdown(
                f"{category_icon(expense.category)} **{expense.description}** · "
                f"{expense.category.value} · {format_date(expense.date)} · "
                f"**{format_inr(expense.amount)}**"
            )


def render_add_page(tracker: ExpenseTracker):
    st.title("➕ Add New Expense")
    st.markdown("Record your expenses easily")

    if "amount_text" not in st.session_state:
        st.session_state.amount_text = ""

    amount_col, calc_col = st.columns([4, 1])
    with calc_col:
        st.write("")
        if st.button("🧮 ="):
            result = tracker.evaluate_amount(st.session_state.amount_text)
            st.session_state.amount_text = result or ""
            st.rerun()
    with amount_col:
        st.text_input(
            "Amount (₹) *",
            key="amount_text",
            placeholder="e.g. 250 or 120+80",
            help="You can type a sum like 120+45*2 and press = to calculate it",
        )

    with st.form("add_expense", clear_on_submit=False):
        description = st.text_input("Description *", placeholder="What did you spend on?")
        category = st.selectbox(
            "Category *",
            options=[""] + list(tracker.categories),
            format_func=lambda c: "Select a category" if not c else f"{category_icon(c)} {c}",
        )
        spent_on = st.date_input("Date *", value=date.today())
        submitted = st.form_submit_button("Add Expense", type="primary")

    if submitted:
        form = ExpenseForm(
            amount=st.session_state.amount_text,
            description=description,
            category=category,
            date=spent_on.isoformat() if spent_on else "",
        )
        expense, result = tracker.submit_expense(form)
        for field, message in result.errors_by_field().items():
            st.error(f"{field.title()}: {message}")
        for warning in result.warnings:
            st.warning(warning)
        if expense:
            st.session_state.toast = f"Expense added: {format_inr(expense.amount)} ✅"
            st.session_state.pop("amount_text", None)
            st.rerun()


def render_expenses_page(tracker: ExpenseTracker):
    st.title("📋 Manage Expenses")
    st.markdown("View, edit, and organize your expenses")

    col1, col2, col3 = st.columns(3)
    with col1:
        search = st.text_input("🔍 Search", placeholder="Description or category")
    with col2:
        category = st.selectbox(
            "Category",
            options=[""] + list(tracker.categories),
            format_func=lambda c: "All Categories" if not c else c,
        )
    with col3:
        date_filter = st.text_input("Date", placeholder="YYYY-MM or YYYY-MM-DD")

    expenses, total = tracker.search(search=search, category=category, date_filter=date_filter)
    plural = "" if len(expenses) == 1 else "s"
    st.markdown(f"Showing {len(expenses)} expense{plural} · Total **{format_inr(total)}**")
    st.markdown("---")

    if not expenses:
        if search or category or date_filter:
            st.info("No expenses match. Try adjusting your filters to see more results.")
        else:
            st.info("No expenses yet. Add your first expense to get started.")
        return

    editing_id = st.session_state.get("editing_id")

    for expense in expenses:
        if expense.id == editing_id:
            render_edit_form(tracker, expense)
            continue

        row = st.columns([6, 2, 1, 1])
        row[0].markdown(
            f"{category_icon(expense.category)} **{expense.description}**  \n"
            f"{expense.category.value} · {format_date(expense.date)}"
        )
        row[1].markdown(f"**{format_inr(expense.amount)}**")
        if row[2].button("✏️", key=f"edit-{expense.id}"):
            st.session_state.editing_id = expense.id
            st.rerun()
        if row[3].button("🗑️", key=f"delete-{expense.id}"):
            if tracker.remove_expense(expense.id):
                st.session_state.toast = "Expense deleted successfully! 🗑️"
            st.rerun()


def render_edit_form(tracker: ExpenseTracker, expense):
    current = tracker.form_for(expense)
    with st.form(f"edit-{expense.id}"):
        amount = st.text_input("Amount (₹)", value=current.amount)
        description = st.text_input("Description", value=current.description)
        categories = list(tracker.categories)
        category = st.selectbox("Category", options=categories, index=categories.index(current.category))
        spent_on = st.date_input("Date", value=expense.date)
        save_col, cancel_col = st.columns(2)
        saved = save_col.form_submit_button("💾 Save", type="primary")
        cancelled = cancel_col.form_submit_button("Cancel")

    if cancelled:
        st.session_state.pop("editing_id", None)
        st.rerun()

    if saved:
        form = ExpenseForm(
            amount=amount,
            description=description,
            category=category,
            date=spent_on.isoformat() if spent_on else "",
        )
        updated, result = tracker.edit_expense(expense.id, form)
        for field, message in result.errors_by_field().items():
            st.error(f"{field.title()}: {message}")
        if updated:
            st.session_state.pop("editing_id", None)
            st.session_state.toast = "Expense updated successfully! ✏️"
            st.rerun()


def render_analytics_page(tracker: ExpenseTracker):
    st.title("📊 Analytics & Insights")
    st.markdown("Understand your spending patterns")

    years = tracker.analytics().available_years
    year = st.selectbox("Year", options=years, index=0)
    analytics = tracker.analytics(year=year)

    col1, col2, col3, col4 = st.columns(4)
    col1.metric(f"Total Spent ({year})", format_inr(analytics.total_amount))
    col2.metric("Monthly Average", format_inr(analytics.avg_monthly))
    col3.metric(
        "Highest Month",
        analytics.max_month.month,
        delta=format_inr(analytics.max_month.amount),
        delta_color="off",
    )
    trend_icon = "📈" if analytics.monthly_trend >= 0 else "📉"
    col4.metric("Monthly Trend", f"{trend_icon} {format_percentage(analytics.monthly_trend, signed=True)}")

    left, right = st.columns(2)

    with left:
        st.subheader("📈 Category Breakdown")
        if not analytics.category_breakdown:
            st.info(f"No data available for {year}")
        for rank, item in enumerate(analytics.category_breakdown, start=1):
            st.markdown(
                f"**{rank}.** {category_icon(item.category)} {item.category} · "
                f"{format_inr(item.amount)} ({format_percentage(item.percentage)})"
            )
            progress_bar(item.percentage, category_hex_color(item.category))

    with right:
        st.subheader("📅 Monthly Spending")
        if analytics.total_amount <= 0:
            st.info(f"No expenses recorded for {year}")
        else:
            this_month = date.today().month - 1
            for entry in analytics.monthly_data:
                label = f"{entry.month} (Current)" if entry.month_index == this_month else entry.month
                st.markdown(f"**{label}** · {format_inr(entry.amount)} · {entry.count} expenses")
                progress_bar(entry.percentage, "#f97316" if entry.month_index == this_month else "#3b82f6")

    if analytics.total_amount > 0:
        st.markdown("---")
        st.subheader("💡 Spending Insights")
        col1, col2, col3 = st.columns(3)
        top = analytics.top_category
        with col1:
            st.markdown("**Top Category**")
            st.markdown(f"{category_icon(top.category if top else '')} {top.category if top else 'N/A'}")
            st.caption(format_inr(top.amount if top else 0))
        with col2:
            st.markdown("**Daily Average**")
            st.markdown(format_inr(analytics.daily_average))
            st.caption("Per day spending")
        with col3:
            st.markdown("**Total Transactions**")
            st.markdown(str(analytics.transaction_count))
            st.caption(f"Avg: {format_inr(analytics.average_per_expense)} per expense")


if __name__ == "__main__":
    main()
