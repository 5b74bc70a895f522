"""
Mortgage amortization helpers.

Fixed-rate, level-payment loans with monthly compounding:
  1. Interest accrues on the balance at the start of each month
  2. Principal = level payment - interest, capped at the outstanding balance
  3. The last scheduled installment retires whatever balance is left
  4. Once the balance reaches 0 nothing more is paid
"""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np
import pandas as pd

from core.utils import MONTHS_PER_YEAR, annual_pct_to_monthly_rate


def level_payment(balance: float, monthly_rate: float, n_months: int) -> float:
    """
    Standard fully-amortizing level payment (PMT) with near-zero rate guard.

    Uses the discount-factor form so very long terms underflow toward the
    interest-only payment instead of overflowing.
    """
    if n_months <= 0:
        return float(balance)
    if abs(monthly_rate) < 1e-12:
        return float(balance) / n_months
    return float(balance) * monthly_rate / (1 - (1 + monthly_rate) ** -n_months)


@dataclass(frozen=True)
class AmortizationResult:
    """Totals for a run of consecutive months."""
    interest: float
    principal: float
    payment: float
    end_balance: float
    months_remaining: int


def amortize_months(
    balance: float,
    monthly_rate: float,
    payment: float,
    n_months: int,
    *,
    months_remaining: int,
) -> AmortizationResult:
    """
    Run n_months amortization steps starting from balance.

    months_remaining is the number of scheduled installments left on the loan;
    the installment that brings it to 0 pays off the residual balance, which
    absorbs floating-point drift so a loan is exactly 0 at the end of its term.
    A balance that is already <= 0 is left untouched.
    """
    total_interest = 0.0
    total_principal = 0.0
    total_payment = 0.0

    for _ in range(n_months):
        if balance <= 0:
            break

        interest = balance * monthly_rate
        principal = payment - interest
        months_remaining -= 1
        if principal > balance or months_remaining <= 0:
            principal = balance

        balance -= principal
        total_interest += interest
        total_principal += principal
        total_payment += interest + principal

    return AmortizationResult(
        interest=total_interest,
        principal=total_principal,
        payment=total_payment,
        end_balance=balance,
        months_remaining=max(months_remaining, 0),
    )


def amortization_schedule(principal: float, annual_rate_pct: float, term_years: int) -> pd.DataFrame:
    """
    Month-by-month schedule for a fixed-rate loan.

    Returns DataFrame with month, begin_balance, payment, interest, principal,
    end_balance. Empty when there is nothing to amortize.
    """
    columns = ["month", "begin_balance", "payment", "interest", "principal", "end_balance"]
    n_months = int(term_years) * MONTHS_PER_YEAR
    if principal <= 0 or n_months <= 0:
        return pd.DataFrame(columns=columns)

    r_m = annual_pct_to_monthly_rate(annual_rate_pct)
    pay = level_payment(principal, r_m, n_months)

    begin = np.zeros(n_months, dtype=float)
    interest = np.zeros(n_months, dtype=float)
    princ = np.zeros(n_months, dtype=float)

    bal = float(principal)
    remaining = n_months
    for t in range(n_months):
        step = amortize_months(bal, r_m, pay, 1, months_remaining=remaining)
        begin[t] = bal
        interest[t] = step.interest
        princ[t] = step.principal
        bal = step.end_balance
        remaining = step.months_remaining

    return pd.DataFrame(
        {
            "month": np.arange(1, n_months + 1),
            "begin_balance": begin,
            "payment": interest + princ,
            "interest": interest,
            "principal": princ,
            "end_balance": begin - princ,
        },
        columns=columns,
    )
