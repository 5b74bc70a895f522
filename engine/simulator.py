"""
Per-property yearly projection.

Year 0 is the purchase snapshot. Each following year:
  1. Twelve amortization steps against the current loan balance
  2. Tax and rent from the current (not yet appreciated) value and rent
  3. Cash flow, running cumulative cash flow, equity
  4. Straight-line depreciation on a basis fixed at purchase -> recapture estimate
  5. Total return and ROI against the down payment
  6. Value and rent appreciate AFTER the year is emitted, so year N's tax and
     rent are based on the value/rent appreciated through year N-1
"""

from __future__ import annotations

import logging
from typing import List

import pandas as pd

from core.config import DEFAULT_CONFIG, ProjectionConfig
from core.schema import SNAPSHOT_COLUMNS, PropertyRecord, YearSnapshot
from core.utils import MONTHS_PER_YEAR, annual_pct_to_monthly_rate, grow, pct_ratio

from .amortization import amortize_months, level_payment

logger = logging.getLogger(__name__)


def monthly_mortgage_payment(record: PropertyRecord) -> float:
    """Level monthly payment for the record's loan (0 when nothing is financed)."""
    if record.loan_amount == 0:
        return 0.0
    r_m = annual_pct_to_monthly_rate(record.interest_rate)
    n_months = int(record.loan_term) * MONTHS_PER_YEAR
    return level_payment(record.loan_amount, r_m, n_months)


def simulate_property(
    record: PropertyRecord,
    config: ProjectionConfig = DEFAULT_CONFIG,
) -> List[YearSnapshot]:
    """
    Project one property for config.projection_years years.

    Returns config.projection_years + 1 snapshots ordered by year (year 0 first).
    Pure function of (record, config): no validation, degenerate input
    produces degenerate (possibly non-finite) numbers rather than errors.
    """
    loan_amount = record.loan_amount
    down_payment = record.down_payment

    r_m = annual_pct_to_monthly_rate(record.interest_rate)
    payment = monthly_mortgage_payment(record)
    months_remaining = int(record.loan_term) * MONTHS_PER_YEAR

    logger.debug(
        f"property {record.identifier}: loan={loan_amount:,.2f} "
        f"rate={record.interest_rate}% term={record.loan_term}y payment={payment:,.2f}"
    )

    snapshots = [
        YearSnapshot(
            year=0,
            property_value=record.property_value,
            equity=down_payment,
            annual_rental_income=record.monthly_rent * MONTHS_PER_YEAR,
            property_tax=record.property_value * (record.property_tax_rate / 100),
            cash_flow=0.0,
            mortgage_payment=0.0,
            remaining_loan_balance=loan_amount,
            principal_paid=0.0,
            interest_paid=0.0,
            recapture_estimate=0.0,
            total_return=0.0,
            roi=0.0,
        )
    ]

    current_value = record.property_value
    current_rent = record.monthly_rent
    balance = loan_amount
    cumulative_cash_flow = 0.0

    # Depreciation basis is the purchase price; it never appreciates.
    depreciable_basis = record.property_value * config.depreciable_fraction
    annual_depreciation = depreciable_basis / config.depreciation_years

    zero_roi = 0.0 if config.zero_down_roi == "zero" else None

    for year in range(1, config.projection_years + 1):
        step = amortize_months(
            balance, r_m, payment, MONTHS_PER_YEAR, months_remaining=months_remaining
        )
        balance = step.end_balance
        months_remaining = step.months_remaining

        property_tax = current_value * (record.property_tax_rate / 100)
        annual_rental_income = current_rent * MONTHS_PER_YEAR
        cash_flow = annual_rental_income - step.payment - property_tax
        cumulative_cash_flow += cash_flow

        equity = current_value - balance

        cumulative_depreciation = min(annual_depreciation * year, depreciable_basis)
        recapture_estimate = cumulative_depreciation * config.recapture_rate

        total_return = (equity - down_payment) + cumulative_cash_flow - recapture_estimate

        snapshots.append(
            YearSnapshot(
                year=year,
                property_value=current_value,
                equity=equity,
                annual_rental_income=annual_rental_income,
                property_tax=property_tax,
                cash_flow=cash_flow,
                mortgage_payment=step.payment,
                remaining_loan_balance=balance,
                principal_paid=step.principal,
                interest_paid=step.interest,
                recapture_estimate=recapture_estimate,
                total_return=total_return,
                roi=pct_ratio(total_return, down_payment, zero_result=zero_roi),
            )
        )

        current_value = grow(current_value, record.annual_appreciation)
        current_rent = grow(current_rent, record.rental_appreciation)

    return snapshots


def projection_frame(snapshots: List[YearSnapshot]) -> pd.DataFrame:
    """One row per year, columns in SNAPSHOT_COLUMNS order."""
    return pd.DataFrame([s.to_dict() for s in snapshots], columns=list(SNAPSHOT_COLUMNS))
