"""
Streamlit Frontend for Money Manager

A single screen:
1. Balance cards (balance, income, expense)
2. Add-transaction form with income / expense / transfer tabs
3. Filterable transaction list
4. Category manager with subcategory editing

The page holds no ledger logic. Everything goes through LedgerSession.
"""

from datetime import date

import streamlit as st

from money_manager.config import get_settings
from money_manager.models import (
    ALL,
    CategoryType,
    TransactionDraft,
    TransactionType,
)
from money_manager.orchestrator import LedgerSession, create_app_components


FEEDBACK_KEY = "transaction_feedback"


st.set_page_config(
    page_title="Money Manager",
    page_icon="💰",
    layout="wide",
)


@st.cache_resource
def get_session() -> LedgerSession:
    """Get or create the ledger session (cached)."""
    return create_app_components()


def money(amount) -> str:
    return f"{get_settings().app.currency_symbol}{amount:,.2f}"


def as_markdown(message: str) -> str:
    """Keep the line breaks of a multi-line message."""
    return "  \n".join(message.splitlines())


def render_balance(session: LedgerSession):
    summary = session.summary
    col1, col2, col3 = st.columns(3)
    col1.metric("Total Balance", money(summary.balance))
    col2.metric("Total Income", money(summary.income))
    col3.metric("Total Expense", money(summary.expense))


def render_transaction_form(session: LedgerSession, transaction_type: TransactionType):
    """One add-transaction form per tab."""
    key = transaction_type.value

    feedback = st.session_state.get(FEEDBACK_KEY)
    if feedback and feedback["tab"] == key:
        del st.session_state[FEEDBACK_KEY]
        show = st.warning if feedback["level"] == "warning" else st.success
        show(as_markdown(feedback["message"]))

    amount = st.text_input("Amount *", key=f"{key}_amount", placeholder="Enter amount")

    category = subcategory = from_account = to_account = ""
    if transaction_type == TransactionType.TRANSFER:
        from_account = st.text_input("From Account *", key=f"{key}_from", placeholder="Source account")
        to_account = st.text_input("To Account *", key=f"{key}_to", placeholder="Destination account")
    else:
        names = [c.name for c in session.categories_for_type(transaction_type)]
        category = st.selectbox(
            "Category *",
            options=[""] + list(dict.fromkeys(names)),
            key=f"{key}_category",
            format_func=lambda x: x or "Select category",
        )
        subcategories = session.subcategories_for(category) if category else []
        if subcategories:
            subcategory = st.selectbox(
                "Subcategory",
                options=[""] + list(dict.fromkeys(subcategories)),
                key=f"{key}_subcategory",
                format_func=lambda x: x or "Select subcategory",
            )

    description = st.text_input("Description *", key=f"{key}_description", placeholder="Enter description")
    when = st.date_input("Date *", value=date.today(), key=f"{key}_date")

    if st.button(f"Add {key.capitalize()}", key=f"{key}_submit", type="primary"):
        draft = TransactionDraft(
            type=transaction_type,
            amount=amount,
            category=category,
            subcategory=subcategory,
            description=description,
            date=when,
            from_account=from_account,
            to_account=to_account,
        )
        result = session.add_transaction(draft)
        message = session.describe_result(result)
        if not result.is_valid:
            st.error(as_markdown(message))
        else:
            # st.rerun discards anything drawn in this run
            st.session_state[FEEDBACK_KEY] = {
                "tab": key,
                "level": "warning" if result.warnings else "success",
                "message": message,
            }
            st.rerun()


def render_transactions(session: LedgerSession):
    st.subheader("Transactions")

    col1, col2 = st.columns(2)
    with col1:
        type_filter = st.selectbox(
            "Type",
            options=[ALL] + [t.value for t in TransactionType],
            format_func=lambda x: "All Types" if x == ALL else x.capitalize(),
        )
    with col2:
        category_filter = st.selectbox(
            "Category",
            options=[ALL] + list(dict.fromkeys(c.name for c in session.categories)),
            format_func=lambda x: "All Categories" if x == ALL else x,
        )

    if type_filter != session.filter.type_filter:
        session.set_type_filter(type_filter)
    if category_filter != session.filter.category_filter:
        session.set_category_filter(category_filter)

    visible = session.visible_transactions
    if not visible:
        st.info("No transactions yet")
        return

    for t in visible:
        if t.type == TransactionType.TRANSFER:
            detail = f"{t.from_account} → {t.to_account}"
            sign = ""
        else:
            detail = t.category + (f" • {t.subcategory}" if t.subcategory else "")
            sign = "+" if t.type == TransactionType.INCOME else "-"
        left, right = st.columns([4, 1])
        left.markdown(f"**{t.description}**  \n{detail} • {t.date.strftime('%d %b %Y')}")
        right.markdown(f"**{sign}{money(t.amount)}**")


def render_categories(session: LedgerSession):
    st.subheader("Categories")

    for category in session.categories:
        icon = "💰" if category.type == CategoryType.INCOME else "💸"
        with st.expander(
            f"{icon} {category.name} ({category.type.value}) · "
            f"{len(category.subcategories)} subcategories"
        ):
            # names may repeat, so buttons are keyed by position
            for i, sub in enumerate(category.subcategories):
                left, right = st.columns([4, 1])
                left.write(sub)
                if right.button("Delete", key=f"sub_del_{category.id}_{i}"):
                    session.delete_subcategory(category.id, sub)
                    st.rerun()

            new_sub = st.text_input("New subcategory", key=f"sub_new_{category.id}")
            if st.button("Add Subcategory", key=f"sub_add_{category.id}"):
                if session.add_subcategory(category.id, new_sub):
                    st.rerun()
                st.error("Please enter a subcategory name")

            if st.button("Delete Category", key=f"cat_del_{category.id}"):
                session.delete_category(category.id)
                st.rerun()

    st.markdown("---")
    name = st.text_input("Category Name", placeholder="Enter category name")
    category_type = st.selectbox(
        "Type",
        options=list(CategoryType),
        index=1,
        format_func=lambda x: x.value.capitalize(),
        key="new_category_type",
    )
    if st.button("Add Category"):
        if session.add_category(name, category_type):
            st.rerun()
        st.error("Please enter a category name")


def main():
    """Main application entry point."""
    session = get_session()

    st.title("💰 Money Manager")
    if session.load_report and session.load_report.reset_keys:
        st.warning(
            "Some saved data could not be read and was reset: "
            + ", ".join(session.load_report.reset_keys)
        )

    render_balance(session)
    st.markdown("---")

    left, right = st.columns(2)
    with left:
        st.subheader("Add Transaction")
        tabs = st.tabs(["Income", "Expense", "Transfer"])
        for tab, transaction_type in zip(tabs, TransactionType):
            with tab:
                render_transaction_form(session, transaction_type)
    with right:
        render_transactions(session)

    st.markdown("---")
    render_categories(session)


if __name__ == "__main__":
    main()
