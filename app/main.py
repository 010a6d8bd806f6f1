import sys
import os
sys.path.append(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from dataclasses import replace
from datetime import datetime
from decimal import Decimal, InvalidOperation
from uuid import uuid4

import numpy as np
import pandas as pd
import plotly.express as px
import plotly.graph_objects as go
import streamlit as st

from fincore import config
from fincore.alerts import budget_alerts
from fincore.classifier import classify_transaction, suggest_category
from fincore.dates import PRESET_LABELS, Preset, resolve_date_range
from fincore.domain import UNBOUNDED, Severity, Transaction, TransactionSource
from fincore.events import TRANSACTION_ADDED, event_bus
from fincore.filters import ALL_CATEGORIES, category_breakdown, filter_transactions
from fincore.functional import validate_transaction
from fincore.lookup import category_label, get_category_icon, get_category_name
from fincore.registry import get_registry
from fincore.transforms import load_seed

config.configure_logging()

st.set_page_config(page_title="Finance Manager", layout="wide")

registry = get_registry()
transactions, budgets = load_seed(config.SEED_PATH)

if "tx_transactions" not in st.session_state:
    st.session_state.tx_transactions = transactions

if "dismissed_alerts" not in st.session_state:
    st.session_state.dismissed_alerts = set()

SEVERITY_STYLE = {
    Severity.WARNING: ("⚠️", st.warning),
    Severity.DANGER: ("🔴", st.error),
    Severity.CRITICAL: ("❌", st.error),
}


def tx_to_df(tx_list):
    rows = [
        {
            "date": pd.to_datetime(t.date),
            "amount": float(t.amount),
            "category": t.category,
            "Category": category_label(t.category, registry),
            "description": t.description,
            "merchant": t.merchant,
            "source": t.source.value,
        }
        for t in tx_list
    ]
    return pd.DataFrame(rows, columns=["date", "amount", "category", "Category", "description", "merchant", "source"])


# Filter bar
st.sidebar.markdown("### 🔎 Filters")
preset = st.sidebar.radio(
    "Period",
    options=list(Preset),
    format_func=lambda p: PRESET_LABELS[p],
)
category_options = [ALL_CATEGORIES] + list(registry.ids())
selected_category = st.sidebar.selectbox(
    "Category",
    options=category_options,
    format_func=lambda c: "📊 All" if c == ALL_CATEGORIES else category_label(c, registry),
)

menu = st.sidebar.radio("Menu", ["🏠 Overview", "🧾 Transactions", "🏷 Classifier"])

now = datetime.now()
visible = filter_transactions(st.session_state.tx_transactions, preset, selected_category, now)
df = tx_to_df(visible)

if menu == "🏠 Overview":
    date_range = resolve_date_range(preset, now)
    if date_range is UNBOUNDED:
        st.caption("Showing all transactions")
    else:
        st.caption(f"{date_range.start:%d %b %Y} – {date_range.end:%d %b %Y}")

    alerts = budget_alerts(budgets, st.session_state.tx_transactions, st.session_state.dismissed_alerts)
    for progress in alerts:
        icon, banner = SEVERITY_STYLE[progress.severity]
        cat = progress.budget.category
        banner(
            f"{icon} {get_category_icon(cat, registry)} {get_category_name(cat, registry)}: "
            f"₹{progress.spent:,.0f} / ₹{progress.budget.amount:,.0f} "
            f"({progress.percentage:.0f}%) · {progress.message}"
        )
        if st.button("Dismiss", key=f"dismiss-{progress.budget.id}"):
            st.session_state.dismissed_alerts.add(progress.budget.id)
            st.rerun()

    k1, k2, k3 = st.columns(3)
    with k1:
        st.metric("Transactions", len(visible))
    with k2:
        st.metric("Total Spent", f"₹{df['amount'].sum():,.0f}")
    with k3:
        st.metric("Budgets", len(budgets))

    breakdown = category_breakdown(visible)
    if breakdown:
        df_cat = pd.DataFrame(
            {
                "Category": [category_label(row["category"], registry) for row in breakdown],
                "Total": [float(row["total"]) for row in breakdown],
            }
        )
        fig_cat = px.pie(df_cat, values="Total", names="Category", title="Spending by Category")
        st.plotly_chart(fig_cat, use_container_width=True)

    end = pd.Timestamp.today().normalize()
    months = pd.date_range(end=end, periods=6, freq="M")
    if not df.empty:
        spend_m = df.set_index("date").resample("M")["amount"].sum().reindex(months, fill_value=0)
    else:
        spend_m = pd.Series(np.zeros(len(months)), index=months)

    fig_ts = go.Figure()
    fig_ts.add_trace(go.Bar(x=[m.strftime("%b %y") for m in months], y=spend_m.values, name="Spent"))
    fig_ts.update_layout(title="Monthly Trend", margin=dict(t=30, b=10, l=10, r=10))
    st.plotly_chart(fig_ts, use_container_width=True)

elif menu == "🧾 Transactions":
    st.title("🧾 Transactions")

    if not df.empty:
        display_df = (
            df[["date", "amount", "Category", "description", "merchant", "source"]]
            .sort_values("date", ascending=False)
            .assign(
                date=lambda x: x["date"].dt.strftime("%Y-%m-%d"),
                amount=lambda x: x["amount"].map(lambda v: f"₹{v:,.2f}"),
            )
        )
        st.dataframe(display_df.reset_index(drop=True), use_container_width=True)
        st.download_button(
            "⬇️ Download Filtered Data",
            df.to_csv(index=False),
            file_name="transactions_filtered.csv",
            mime="text/csv",
        )
    else:
        st.info("No transactions match the selected filters")

    st.header("➕ Add Transaction")
    with st.form("add_tx"):
        description = st.text_input("Description")
        merchant = st.text_input("Merchant")
        amount_text = st.text_input("Amount", value="0")
        manual_category = st.selectbox(
            "Category (leave on Auto to classify)",
            options=["auto"] + list(registry.ids()),
            format_func=lambda c: "🤖 Auto" if c == "auto" else category_label(c, registry),
        )
        submitted = st.form_submit_button("Save")

    if submitted:
        try:
            amount = Decimal(amount_text)
        except InvalidOperation:
            amount = Decimal(0)

        draft = Transaction(
            id=str(uuid4()),
            amount=amount,
            category=None if manual_category == "auto" else manual_category,
            date=datetime.now(),
            description=description,
            merchant=merchant,
            source=TransactionSource.MANUAL,
        )
        draft = replace(draft, category=classify_transaction(draft, registry))

        checked = validate_transaction(draft, registry)
        if checked.is_left():
            st.error(checked.error["message"])
        else:
            budget = next(
                (b for b in budgets
                 if b.category == draft.category and b.month == now.month and b.year == now.year),
                None,
            )
            spent = sum(
                t.amount for t in filter_transactions(
                    st.session_state.tx_transactions, Preset.THIS_MONTH, draft.category, now
                )
            )
            st.session_state.tx_transactions = st.session_state.tx_transactions + (draft,)
            results = event_bus.publish(TRANSACTION_ADDED, {
                "amount": draft.amount,
                "category": draft.category,
                "description": draft.description,
                "merchant": draft.merchant,
                "budget_amount": budget.amount if budget else None,
                "current_spent": spent,
            })
            st.success(f"Saved as {category_label(draft.category, registry)}")
            for res in results:
                if "alert" in res:
                    st.warning(res["alert"])

elif menu == "🏷 Classifier":
    st.title("🏷 Classify Text")
    text = st.text_area("SMS or note", placeholder="Rs.250 debited via UPI to SWIGGY")
    merchant = st.text_input("Merchant (optional)")
    if st.button("Suggest category"):
        suggestion = suggest_category(text, merchant, registry)
        if suggestion is None:
            st.info(f"No match. Defaulting to {category_label(registry.catch_all.id, registry)}")
        else:
            st.success(category_label(suggestion, registry))
