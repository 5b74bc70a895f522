"""
Portfolio record and projection row definitions.

PropertyRecord is the engine input (one rental property); YearSnapshot is one
row of a projection (year 0 is the purchase snapshot). The column tuples below
are the canonical ordering used by every DataFrame view in the project.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Dict, Tuple

# Canonical property columns, in the order used by loaders and exports.
PROPERTY_COLUMNS: Tuple[str, ...] = (
    "identifier",
    "name",
    "property_value",
    "down_payment",
    "annual_appreciation",
    "property_tax_rate",
    "monthly_rent",
    "rental_appreciation",
    "interest_rate",
    "loan_term",
)

# Currency-valued snapshot fields. These are the fields summed by the aggregator.
CURRENCY_COLUMNS: Tuple[str, ...] = (
    "property_value",
    "equity",
    "annual_rental_income",
    "property_tax",
    "cash_flow",
    "mortgage_payment",
    "remaining_loan_balance",
    "principal_paid",
    "interest_paid",
    "recapture_estimate",
    "total_return",
)

SNAPSHOT_COLUMNS: Tuple[str, ...] = ("year",) + CURRENCY_COLUMNS + ("roi",)


@dataclass(frozen=True)
class PropertyRecord:
    """
    Financial parameters of one rental property.

    Percent fields are expressed in percent (4.5 means 4.5 %), not decimals.
    interest_rate is the nominal annual rate, compounded monthly.
    """

    identifier: str
    name: str
    property_value: float
    down_payment: float
    annual_appreciation: float
    property_tax_rate: float
    monthly_rent: float
    rental_appreciation: float
    interest_rate: float
    loan_term: int

    @property
    def loan_amount(self) -> float:
        return self.property_value - self.down_payment

    @property
    def display_name(self) -> str:
        return self.name or "Unnamed Property"

    def to_dict(self) -> Dict[str, object]:
        return asdict(self)


@dataclass(frozen=True)
class YearSnapshot:
    """One projection year. Currency fields are year totals or end-of-year levels."""

    year: int
    property_value: float
    equity: float
    annual_rental_income: float
    property_tax: float
    cash_flow: float
    mortgage_payment: float
    remaining_loan_balance: float
    principal_paid: float
    interest_paid: float
    recapture_estimate: float
    total_return: float
    roi: float

    def to_dict(self) -> Dict[str, float]:
        return {c: getattr(self, c) for c in SNAPSHOT_COLUMNS}


@dataclass(frozen=True)
class PortfolioSnapshot(YearSnapshot):
    """
    Portfolio-level projection year.

    Currency fields are sums over every property at that year; roi is
    recomputed from the summed total return and the summed down payment.
    """
