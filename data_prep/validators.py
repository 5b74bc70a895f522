"""
Data quality validation for a portfolio before it enters the engine.

Catches problems early:
- Property values or terms that make the projection meaningless
- Down payments above the property value (negative loan)
- Rates that look like decimals instead of percent
- Zero down payment (per-property ROI is undefined)
"""

from __future__ import annotations

import logging
from collections import Counter
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence

from core.schema import PropertyRecord

logger = logging.getLogger(__name__)

STANDARD_LOAN_TERMS = (15, 30)


@dataclass(frozen=True)
class PropertyIssue:
    """One finding; identifier is None for portfolio-wide findings."""
    identifier: Optional[str]
    label: str
    message: str
    blocking: bool

    def __str__(self) -> str:
        return f"{self.label}: {self.message}" if self.label else self.message


@dataclass
class ValidationResult:
    """Findings for a portfolio, in the order the checks ran."""
    property_count: int = 0
    issues: List[PropertyIssue] = field(default_factory=list)

    def flag(self, record: Optional[PropertyRecord], message: str, *, blocking: bool) -> None:
        if record is None:
            self.issues.append(PropertyIssue(None, "", message, blocking))
        else:
            label = f"{record.display_name} ({record.identifier})"
            self.issues.append(PropertyIssue(record.identifier, label, message, blocking))

    @property
    def errors(self) -> List[str]:
        return [str(i) for i in self.issues if i.blocking]

    @property
    def warnings(self) -> List[str]:
        return [str(i) for i in self.issues if not i.blocking]

    @property
    def is_valid(self) -> bool:
        return not any(i.blocking for i in self.issues)

    def for_property(self, identifier: str) -> List[PropertyIssue]:
        return [i for i in self.issues if i.identifier == identifier]

    def summary(self) -> str:
        """Headline count, then the findings grouped by property (blocking first)."""
        n_err, n_warn = len(self.errors), len(self.warnings)
        head = f"Checked {self.property_count} properties"
        if not self.issues:
            return f"{head}: all checks passed."
        lines = [f"{head}: {n_err} errors, {n_warn} warnings."]
        groups: Dict[str, List[PropertyIssue]] = {}
        for issue in sorted(self.issues, key=lambda i: not i.blocking):
            groups.setdefault(issue.label or "Portfolio", []).append(issue)
        for label, found in groups.items():
            lines.append(f"{label}:")
            lines.extend(f"  {'error' if i.blocking else 'warning'}: {i.message}" for i in found)
        return "\n".join(lines)


def validate_portfolio(records: Sequence[PropertyRecord]) -> ValidationResult:
    """
    Run all validation checks on a portfolio.
    Blocking findings keep the portfolio out of the engine; the rest are
    informational. An empty portfolio is valid; it projects to all-zero rows.
    """
    result = ValidationResult(property_count=len(records))

    # --- Identifiers ---
    counts = Counter(r.identifier for r in records)
    dups = sorted(k for k, n in counts.items() if n > 1)
    if dups:
        result.flag(None, f"{len(dups)} duplicate property identifiers found: {dups}", blocking=False)

    for r in records:
        # --- Value / down payment ---
        if not r.property_value > 0:
            result.flag(r, f"property value must be > 0, got {r.property_value}.", blocking=True)
        if r.down_payment < 0:
            result.flag(r, f"negative down payment {r.down_payment}.", blocking=True)
        elif r.down_payment > r.property_value:
            result.flag(
                r,
                f"down payment {r.down_payment:,.2f} exceeds property value "
                f"{r.property_value:,.2f} (negative loan amount).",
                blocking=True,
            )
        elif r.down_payment == 0:
            result.flag(r, "zero down payment, per-property ROI is undefined.", blocking=False)

        # --- Loan ---
        if r.loan_term <= 0:
            result.flag(r, f"loan term must be > 0 years, got {r.loan_term}.", blocking=True)
        elif r.loan_term not in STANDARD_LOAN_TERMS:
            result.flag(r, f"non-standard loan term of {r.loan_term} years.", blocking=False)

        if r.interest_rate < 0:
            result.flag(r, f"negative interest rate {r.interest_rate}.", blocking=True)
        elif 0 < r.interest_rate < 1:
            # Rates should be in percent form (e.g. 4.5 not 0.045)
            result.flag(
                r,
                f"interest rate {r.interest_rate} < 1, check if rates are in percent vs decimal form.",
                blocking=False,
            )

        # --- Income / growth ---
        if r.monthly_rent < 0:
            result.flag(r, f"negative monthly rent {r.monthly_rent}.", blocking=True)
        for name, rate in (
            ("annual appreciation", r.annual_appreciation),
            ("rental appreciation", r.rental_appreciation),
        ):
            if abs(rate) > 25:
                result.flag(r, f"{name} of {rate}% per year, verify units.", blocking=False)

    if not result.is_valid:
        logger.warning(f"portfolio validation failed with {len(result.errors)} errors")
    elif result.warnings:
        logger.warning(f"portfolio validation passed with {len(result.warnings)} warnings")

    return result
