"""
Tests for the derived portfolio reports in pm.metrics.
"""
import pytest

from pm.aggregator import aggregate_portfolio
from pm.metrics import (
    combined_income,
    combined_income_report,
    summarize_portfolio,
    yearly_table,
)
from tests.conftest import make_record


def test_combined_income_formula(starter_house):
    rows = aggregate_portfolio([starter_house])
    r = rows[3]
    assert combined_income(r) == pytest.approx(
        (r.annual_rental_income + r.cash_flow) - r.recapture_estimate
    )


def test_combined_income_report_matches_projection(starter_house, duplex):
    rows = aggregate_portfolio([starter_house, duplex])
    report = combined_income_report(rows)
    assert list(report.columns) == [
        "Year", "Rental Income", "Cash Flow", "Recapture Est.", "Net Combined Income",
    ]
    assert len(report) == 31
    assert report.loc[0, "Net Combined Income"] == pytest.approx(rows[0].annual_rental_income)
    assert report.loc[12, "Net Combined Income"] == pytest.approx(combined_income(rows[12]))


def test_yearly_table_columns(starter_house):
    table = yearly_table(aggregate_portfolio([starter_house]))
    assert list(table.columns) == [
        "Year", "Property Value", "Equity", "Rental Income", "Cash Flow",
        "Property Tax", "Recapture Est.", "ROI %",
    ]
    assert table.loc[0, "Equity"] == 150_000


def test_summary_milestones(starter_house, duplex):
    records = [starter_house, duplex]
    rows = aggregate_portfolio(records)
    summary = summarize_portfolio(records, rows)

    assert summary.property_count == 2
    assert summary.total_invested == 234_000
    assert summary.horizon_years == 30
    # the 15-year duplex is paid off first, the 30-year loan only at year 30
    assert summary.debt_free_year == 30
    assert summary.final_loan_balance == pytest.approx(0.0, abs=0.01)
    assert summary.final_roi == pytest.approx(rows[-1].roi)
    assert summary.cumulative_cash_flow == pytest.approx(sum(r.cash_flow for r in rows))
    first = summary.first_positive_cash_flow_year
    assert first is not None
    assert rows[first].cash_flow > 0
    assert all(r.cash_flow <= 0 for r in rows[1:first])


def test_summary_cash_purchase_is_debt_free_at_purchase():
    record = make_record(down_payment=600_000.0)
    summary = summarize_portfolio([record], aggregate_portfolio([record]))
    assert summary.debt_free_year == 0
    assert summary.first_positive_cash_flow_year == 1


def test_summary_never_positive_cash_flow():
    record = make_record(monthly_rent=0.0)
    summary = summarize_portfolio([record], aggregate_portfolio([record]))
    assert summary.first_positive_cash_flow_year is None


def test_summary_table_renders(starter_house):
    summary = summarize_portfolio([starter_house], aggregate_portfolio([starter_house]))
    df = summary.to_dataframe()
    assert list(df.columns) == ["Metric", "Value"]
    assert df.loc[df["Metric"] == "Total Invested", "Value"].item() == "$150,000"


def test_summary_requires_rows():
    with pytest.raises(ValueError):
        summarize_portfolio([], [])
