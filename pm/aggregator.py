"""
Aggregate per-property projections into one portfolio projection.

For every year, each currency field is the sum over all properties of that
property's snapshot at the same year. ROI is NOT summed: it is recomputed from
the summed total return and the summed down payment, and is 0 unless that sum
is positive (unlike the per-property ROI, which follows config.zero_down_roi).
"""

from __future__ import annotations

import logging
from functools import lru_cache
from typing import List, Sequence, Tuple

import numpy as np
import pandas as pd

from core.config import DEFAULT_CONFIG, ProjectionConfig
from core.schema import CURRENCY_COLUMNS, PortfolioSnapshot, PropertyRecord, YearSnapshot
from core.utils import pct_ratio
from engine.simulator import projection_frame, simulate_property

logger = logging.getLogger(__name__)


@lru_cache(maxsize=1024)
def _cached_projection(record: PropertyRecord, config: ProjectionConfig) -> Tuple[YearSnapshot, ...]:
    return tuple(simulate_property(record, config))


def clear_projection_cache() -> None:
    """Drop memoized per-property projections."""
    _cached_projection.cache_clear()


def _currency_matrix(snapshots: Sequence[YearSnapshot]) -> np.ndarray:
    """(n_years, n_currency_fields) array for one property."""
    return np.array(
        [[getattr(s, c) for c in CURRENCY_COLUMNS] for s in snapshots],
        dtype=float,
    )


def aggregate_portfolio(
    records: Sequence[PropertyRecord],
    config: ProjectionConfig = DEFAULT_CONFIG,
    *,
    use_cache: bool = True,
) -> List[PortfolioSnapshot]:
    """
    Portfolio projection: config.projection_years + 1 snapshots, year 0 first.

    Parameters
    ----------
    records : sequence of PropertyRecord
        Portfolio in any order; the order does not affect the sums.
    config : ProjectionConfig
        Passed through to simulate_property for every record.
    use_cache : bool
        Reuse memoized per-record projections keyed on (record, config).
        The output is the same either way.

    An empty portfolio yields all-zero snapshots.
    """
    records = list(records)
    n_years = config.n_snapshots
    totals = np.zeros((n_years, len(CURRENCY_COLUMNS)), dtype=float)

    for record in records:
        if use_cache:
            snapshots = _cached_projection(record, config)
        else:
            snapshots = simulate_property(record, config)
        totals += _currency_matrix(snapshots)

    total_down_payment = float(sum(r.down_payment for r in records))

    logger.info(
        f"aggregated {len(records)} properties over {config.projection_years} years "
        f"(total down payment {total_down_payment:,.2f})"
    )

    out = []
    for year in range(n_years):
        row = dict(zip(CURRENCY_COLUMNS, (float(v) for v in totals[year])))
        # portfolio ROI is 0 unless money was actually put down
        row["roi"] = pct_ratio(row["total_return"], total_down_payment) if total_down_payment > 0 else 0.0
        out.append(PortfolioSnapshot(year=year, **row))
    return out


def portfolio_frame(snapshots: Sequence[PortfolioSnapshot]) -> pd.DataFrame:
    """DataFrame view of an aggregated projection."""
    return projection_frame(list(snapshots))
