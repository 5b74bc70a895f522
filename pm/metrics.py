"""
Derived views of a portfolio projection.

Everything here is computed from the aggregator output alone:
  - combined income:  (rental income + cash flow) - recapture estimate, per year
  - yearly table:     the headline columns shown in the data table
  - summary:          end-of-horizon totals plus payoff / cash-flow milestones
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Sequence

import pandas as pd

from core.schema import PropertyRecord, YearSnapshot
from core.utils import format_currency, format_percentage, pct_ratio


def combined_income(snapshot: YearSnapshot) -> float:
    """Net combined income for one year."""
    return (snapshot.annual_rental_income + snapshot.cash_flow) - snapshot.recapture_estimate


def combined_income_report(snapshots: Sequence[YearSnapshot]) -> pd.DataFrame:
    return pd.DataFrame(
        [
            {
                "Year": s.year,
                "Rental Income": s.annual_rental_income,
                "Cash Flow": s.cash_flow,
                "Recapture Est.": s.recapture_estimate,
                "Net Combined Income": combined_income(s),
            }
            for s in snapshots
        ],
        columns=["Year", "Rental Income", "Cash Flow", "Recapture Est.", "Net Combined Income"],
    )


def yearly_table(snapshots: Sequence[YearSnapshot]) -> pd.DataFrame:
    return pd.DataFrame(
        [
            {
                "Year": s.year,
                "Property Value": s.property_value,
                "Equity": s.equity,
                "Rental Income": s.annual_rental_income,
                "Cash Flow": s.cash_flow,
                "Property Tax": s.property_tax,
                "Recapture Est.": s.recapture_estimate,
                "ROI %": s.roi,
            }
            for s in snapshots
        ],
        columns=[
            "Year", "Property Value", "Equity", "Rental Income", "Cash Flow",
            "Property Tax", "Recapture Est.", "ROI %",
        ],
    )


@dataclass
class PortfolioSummary:
    """End-of-horizon portfolio figures."""
    property_count: int
    total_invested: float
    horizon_years: int

    final_property_value: float
    final_equity: float
    final_loan_balance: float
    final_total_return: float
    final_roi: float
    cumulative_cash_flow: float

    # milestones (None when never reached within the horizon)
    debt_free_year: Optional[int]
    first_positive_cash_flow_year: Optional[int]

    def to_dataframe(self) -> pd.DataFrame:
        """Convert to a display-friendly table."""
        def _year(v):
            return "never" if v is None else str(v)

        rows = [
            {"Metric": "Properties", "Value": str(self.property_count)},
            {"Metric": "Total Invested", "Value": format_currency(self.total_invested)},
            {"Metric": f"Property Value (year {self.horizon_years})", "Value": format_currency(self.final_property_value)},
            {"Metric": f"Equity (year {self.horizon_years})", "Value": format_currency(self.final_equity)},
            {"Metric": f"Loan Balance (year {self.horizon_years})", "Value": format_currency(self.final_loan_balance)},
            {"Metric": "Cumulative Cash Flow", "Value": format_currency(self.cumulative_cash_flow)},
            {"Metric": "Total Return", "Value": format_currency(self.final_total_return)},
            {"Metric": "ROI", "Value": format_percentage(self.final_roi)},
            {"Metric": "Debt-Free Year", "Value": _year(self.debt_free_year)},
            {"Metric": "First Positive Cash Flow Year", "Value": _year(self.first_positive_cash_flow_year)},
        ]
        return pd.DataFrame(rows)


def summarize_portfolio(
    records: Sequence[PropertyRecord],
    snapshots: Sequence[YearSnapshot],
) -> PortfolioSummary:
    """
    Summarize an aggregated projection.

    Parameters
    ----------
    records : sequence of PropertyRecord
        The portfolio the snapshots were computed from (for the invested total).
    snapshots : sequence of YearSnapshot
        Output of pm.aggregator.aggregate_portfolio().
    """
    if not snapshots:
        raise ValueError("Cannot summarize an empty projection.")

    total_invested = float(sum(r.down_payment for r in records))
    final = snapshots[-1]
    flows = [s for s in snapshots if s.year >= 1]

    debt_free_year = next((s.year for s in snapshots if s.remaining_loan_balance <= 0), None)
    first_positive = next((s.year for s in flows if s.cash_flow > 0), None)

    return PortfolioSummary(
        property_count=len(records),
        total_invested=total_invested,
        horizon_years=final.year,
        final_property_value=final.property_value,
        final_equity=final.equity,
        final_loan_balance=final.remaining_loan_balance,
        final_total_return=final.total_return,
        final_roi=pct_ratio(final.total_return, total_invested, zero_result=0.0),
        cumulative_cash_flow=float(sum(s.cash_flow for s in flows)),
        debt_free_year=debt_free_year,
        first_positive_cash_flow_year=first_positive,
    )
