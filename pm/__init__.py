"""
Portfolio outputs: aggregation across properties and derived reports.
"""

from .aggregator import aggregate_portfolio, clear_projection_cache, portfolio_frame
from .metrics import (
    combined_income,
    combined_income_report,
    yearly_table,
    summarize_portfolio,
    PortfolioSummary,
)

__all__ = [
    "aggregate_portfolio",
    "clear_projection_cache",
    "portfolio_frame",
    "combined_income",
    "combined_income_report",
    "yearly_table",
    "summarize_portfolio",
    "PortfolioSummary",
]
