from __future__ import annotations

import math
from typing import Iterable

import pandas as pd


def require_columns(df: pd.DataFrame, cols: Iterable[str]) -> None:
    missing = [c for c in cols if c not in df.columns]
    if missing:
        raise ValueError(f"Missing required columns: {missing}")


MONTHS_PER_YEAR = 12


def annual_pct_to_monthly_rate(annual_rate_pct: float) -> float:
    """Nominal annual percent (4.5) -> simple monthly rate (0.00375)."""
    return annual_rate_pct / 100.0 / MONTHS_PER_YEAR


def grow(value: float, rate_pct: float) -> float:
    """Apply one period of percent growth."""
    return value * (1 + rate_pct / 100.0)


def pct_ratio(numerator: float, denominator: float, *, zero_result: float | None = None) -> float:
    """
    numerator / denominator * 100.

    A zero denominator returns zero_result when given, otherwise the IEEE
    result of the division: +/-inf by sign of the numerator, nan for 0/0.
    """
    if denominator == 0:
        if zero_result is not None:
            return zero_result
        if numerator == 0 or math.isnan(numerator):
            return math.nan
        return math.copysign(math.inf, numerator)
    return numerator / denominator * 100.0


def format_currency(value: float) -> str:
    """Whole-dollar USD, e.g. -1234.5 -> '-$1,235'."""
    if value is None or not math.isfinite(value):
        return "n/a"
    sign = "-" if round(value) < 0 else ""
    return f"{sign}${abs(value):,.0f}"


def format_percentage(value: float) -> str:
    if value is None or not math.isfinite(value):
        return "n/a"
    return f"{value:.2f}%"
