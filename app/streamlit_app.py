"""
Rental Portfolio Projector: Streamlit Dashboard
==============================================

Edit a portfolio of rental properties and view the 30-year projection:
  1. Graphs:           value / equity / debt, income & return, ROI, tax & recapture
  2. Table Data:       yearly portfolio figures
  3. Combined Report:  (rental income + cash flow) - recapture estimate, per year

Portfolio and editing state live in st.session_state; the engine only ever
sees an explicit list of PropertyRecord values.

Run: streamlit run app/streamlit_app.py
"""

from __future__ import annotations

import logging
import os
import sys
from pathlib import Path
from typing import List

import altair as alt
import pandas as pd
import streamlit as st
from pydantic import ValidationError

# ---------------------------------------------------------------------------
# Make project root importable
# ---------------------------------------------------------------------------
PROJECT_ROOT = Path(__file__).resolve().parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from core.config import ProjectionConfig
from core.schema import PropertyRecord
from core.utils import format_currency, format_percentage

from data_prep.inputs import PropertyInput
from data_prep.loader import read_portfolio_frame
from data_prep.portfolio_builder import default_property, records_from_frame, records_to_frame
from data_prep.validators import validate_portfolio

from engine.amortization import amortization_schedule
from engine.simulator import monthly_mortgage_payment

from pm.aggregator import aggregate_portfolio, portfolio_frame
from pm.metrics import combined_income_report, summarize_portfolio, yearly_table

logger = logging.getLogger(__name__)

LOAN_TERM_OPTIONS = (15, 30)


def _configure_logging() -> None:
    """Configure application logging once per process."""
    level = os.environ.get("PORTFOLIO_LOG_LEVEL", "INFO").upper()
    root = logging.getLogger()
    if not root.handlers:
        logging.basicConfig(
            level=level,
            format="%(asctime)s %(levelname)s: %(message)s [in %(name)s]",
        )
    root.setLevel(level)


# ---------------------------------------------------------------------------
# Session state
# ---------------------------------------------------------------------------
def _init_state() -> None:
    if "portfolio" not in st.session_state:
        first = default_property()
        st.session_state["portfolio"] = [first]
        st.session_state["editing"] = {first.identifier}


def _portfolio() -> List[PropertyRecord]:
    return st.session_state["portfolio"]


def _replace(record: PropertyRecord) -> None:
    st.session_state["portfolio"] = [
        record if r.identifier == record.identifier else r for r in _portfolio()
    ]


def _remove(identifier: str) -> None:
    st.session_state["portfolio"] = [r for r in _portfolio() if r.identifier != identifier]
    st.session_state["editing"].discard(identifier)


# ---------------------------------------------------------------------------
# Chart helpers
# ---------------------------------------------------------------------------
def _plot_multi_line(df, *, ys, title, y_title, height=280):
    d = df[["year"] + list(ys)].rename(columns=ys)
    long = d.melt(id_vars=["year"], var_name="series", value_name="value")
    chart = (
        alt.Chart(long).mark_line()
        .encode(
            x=alt.X("year:Q", title="Year"),
            y=alt.Y("value:Q", title=y_title, axis=alt.Axis(format="$,.0f")),
            color=alt.Color("series:N", title="Series"),
            tooltip=["year", "series", alt.Tooltip("value:Q", format="$,.0f")],
        )
        .properties(title=title, height=height)
    )
    st.altair_chart(chart, use_container_width=True)


def _plot_roi_bars(df, *, height=280):
    chart = (
        alt.Chart(df).mark_bar()
        .encode(
            x=alt.X("year:O", title="Year"),
            y=alt.Y("roi:Q", title="ROI %"),
            tooltip=["year", alt.Tooltip("roi:Q", format=".2f")],
        )
        .properties(title="Portfolio Return on Investment (ROI) %", height=height)
    )
    st.altair_chart(chart, use_container_width=True)


def _styled(df: pd.DataFrame, *, currency_cols, pct_cols=()):
    fmt = {c: format_currency for c in currency_cols}
    fmt.update({c: format_percentage for c in pct_cols})
    return df.style.format(fmt)


# ---------------------------------------------------------------------------
# Property form
# ---------------------------------------------------------------------------
def _property_form(record: PropertyRecord) -> None:
    with st.form(key=f"form_{record.identifier}"):
        st.markdown(f"**{record.name or 'New Property'}**")
        c1, c2, c3 = st.columns(3)
        name = c1.text_input("Property Name", value=record.name)
        property_value = c2.number_input("Property Value", value=float(record.property_value), step=1000.0)
        down_payment = c3.number_input("Down Payment", value=float(record.down_payment), step=1000.0)
        annual_appreciation = c1.number_input(
            "Annual Appreciation (%)", value=float(record.annual_appreciation), step=0.1
        )
        property_tax_rate = c2.number_input(
            "Property Tax Rate (%)", value=float(record.property_tax_rate), step=0.01
        )
        monthly_rent = c3.number_input("Monthly Rent", value=float(record.monthly_rent), step=50.0)
        rental_appreciation = c1.number_input(
            "Rental Appreciation (%)", value=float(record.rental_appreciation), step=0.1
        )
        interest_rate = c2.number_input(
            "Mortgage Interest Rate (%)", value=float(record.interest_rate), step=0.1
        )
        term_index = LOAN_TERM_OPTIONS.index(record.loan_term) if record.loan_term in LOAN_TERM_OPTIONS else 1
        loan_term = c3.selectbox(
            "Loan Term (Years)", options=LOAN_TERM_OPTIONS, index=term_index,
            format_func=lambda y: f"{y} Years",
        )

        b1, b2 = st.columns([1, 5])
        submitted = b1.form_submit_button("Submit")
        removed = b2.form_submit_button("Remove")

    if removed:
        _remove(record.identifier)
        st.rerun()

    if submitted:
        try:
            updated = PropertyInput(
                identifier=record.identifier,
                name=name,
                property_value=property_value,
                down_payment=down_payment,
                annual_appreciation=annual_appreciation,
                property_tax_rate=property_tax_rate,
                monthly_rent=monthly_rent,
                rental_appreciation=rental_appreciation,
                interest_rate=interest_rate,
                loan_term=int(loan_term),
            ).to_record()
        except ValidationError as exc:
            st.error("; ".join(err["msg"] for err in exc.errors()))
            return
        _replace(updated)
        st.session_state["editing"].discard(record.identifier)
        logger.info(f"property {record.identifier} submitted")
        st.rerun()


# ═══════════════════════════════════════════════════════════════════════════
# PAGE CONFIG
# ═══════════════════════════════════════════════════════════════════════════
_configure_logging()
st.set_page_config(page_title="Rental Portfolio Projector", layout="wide")
st.title("Real Estate Portfolio Growth Calculator")

_init_state()
cfg = ProjectionConfig.from_env()

# ═══════════════════════════════════════════════════════════════════════════
# SIDEBAR: PROPERTIES
# ═══════════════════════════════════════════════════════════════════════════
with st.sidebar:
    st.header("Properties")

    for rec in [r for r in _portfolio() if r.identifier not in st.session_state["editing"]]:
        s1, s2 = st.columns([3, 1])
        s1.write(rec.display_name)
        if s2.button("Edit", key=f"edit_{rec.identifier}"):
            st.session_state["editing"].add(rec.identifier)
            st.rerun()

    if st.button("Add House", use_container_width=True):
        new = default_property()
        st.session_state["portfolio"] = _portfolio() + [new]
        st.session_state["editing"].add(new.identifier)
        st.rerun()

    st.divider()
    upload = st.file_uploader("Load portfolio", type=["csv", "json", "xlsx"])
    if upload is not None and st.session_state.get("_loaded_upload") != (upload.name, upload.size):
        try:
            loaded = records_from_frame(read_portfolio_frame(upload))
        except ValueError as exc:
            st.error(str(exc))
        else:
            st.session_state["portfolio"] = loaded
            st.session_state["editing"] = set()
            st.session_state["_loaded_upload"] = (upload.name, upload.size)
            st.rerun()

    st.download_button(
        "Download portfolio (CSV)",
        data=records_to_frame(_portfolio()).to_csv(index=False),
        file_name="portfolio.csv",
        mime="text/csv",
        use_container_width=True,
    )

# ═══════════════════════════════════════════════════════════════════════════
# PROPERTY FORMS (editing mode)
# ═══════════════════════════════════════════════════════════════════════════
for rec in [r for r in _portfolio() if r.identifier in st.session_state["editing"]]:
    _property_form(rec)

portfolio = _portfolio()

vr = validate_portfolio(portfolio)
if not vr.is_valid:
    st.error("Portfolio validation failed:\n" + vr.summary())
    st.stop()
elif vr.warnings:
    st.warning(vr.summary())

# ═══════════════════════════════════════════════════════════════════════════
# PROJECTION
# ═══════════════════════════════════════════════════════════════════════════
projection = aggregate_portfolio(portfolio, cfg)
proj_df = portfolio_frame(projection)
summary = summarize_portfolio(portfolio, projection)

k1, k2, k3, k4 = st.columns(4)
k1.metric("Properties", str(summary.property_count))
k2.metric("Total Invested", format_currency(summary.total_invested))
k3.metric(f"Equity (year {summary.horizon_years})", format_currency(summary.final_equity))
k4.metric(f"ROI (year {summary.horizon_years})", format_percentage(summary.final_roi))

tab_graph, tab_table, tab_combined = st.tabs(["Graphs", "Table Data", "Combined Report"])

with tab_graph:
    _plot_multi_line(
        proj_df,
        ys={"property_value": "Property Value", "equity": "Equity", "remaining_loan_balance": "Loan Balance"},
        title="Portfolio Property Value & Equity Growth",
        y_title="USD",
    )
    _plot_multi_line(
        proj_df,
        ys={"annual_rental_income": "Rental Income", "cash_flow": "Cash Flow", "total_return": "Total Return"},
        title="Portfolio Annual Cash Flow & Return",
        y_title="USD",
    )
    _plot_roi_bars(proj_df)
    _plot_multi_line(
        proj_df,
        ys={"property_tax": "Property Tax", "recapture_estimate": "Recapture Estimate"},
        title="Portfolio Tax & Recapture Estimates",
        y_title="USD",
    )

with tab_table:
    table = yearly_table(projection)
    st.dataframe(
        _styled(
            table,
            currency_cols=[c for c in table.columns if c not in ("Year", "ROI %")],
            pct_cols=["ROI %"],
        ),
        use_container_width=True,
        hide_index=True,
    )
    st.dataframe(summary.to_dataframe(), use_container_width=True, hide_index=True)

with tab_combined:
    st.subheader("Combined Income Report")
    report = combined_income_report(projection)
    st.dataframe(
        _styled(report, currency_cols=[c for c in report.columns if c != "Year"]),
        use_container_width=True,
        hide_index=True,
    )

# ═══════════════════════════════════════════════════════════════════════════
# PER-PROPERTY AMORTIZATION
# ═══════════════════════════════════════════════════════════════════════════
for rec in portfolio:
    with st.expander(f"Amortization: {rec.display_name}"):
        st.caption(f"Monthly payment: {format_currency(monthly_mortgage_payment(rec))}")
        sched = amortization_schedule(rec.loan_amount, rec.interest_rate, rec.loan_term)
        if sched.empty:
            st.info("No loan on this property.")
        else:
            st.dataframe(
                _styled(sched, currency_cols=[c for c in sched.columns if c != "month"]),
                use_container_width=True,
                hide_index=True,
            )
