"""
Core package: schema definitions, configuration, and shared utilities.
No business logic lives here.
"""

from .schema import (
    CURRENCY_COLUMNS,
    PROPERTY_COLUMNS,
    SNAPSHOT_COLUMNS,
    PortfolioSnapshot,
    PropertyRecord,
    YearSnapshot,
)
from .config import DEFAULT_CONFIG, ProjectionConfig
from .utils import MONTHS_PER_YEAR, require_columns, annual_pct_to_monthly_rate, pct_ratio

__all__ = [
    "CURRENCY_COLUMNS",
    "PROPERTY_COLUMNS",
    "SNAPSHOT_COLUMNS",
    "PortfolioSnapshot",
    "PropertyRecord",
    "YearSnapshot",
    "DEFAULT_CONFIG",
    "ProjectionConfig",
    "MONTHS_PER_YEAR",
    "require_columns",
    "annual_pct_to_monthly_rate",
    "pct_ratio",
]
