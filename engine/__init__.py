"""
Projection engine: amortization math + per-property yearly simulation.
"""

from .amortization import level_payment, amortization_schedule
from .simulator import simulate_property, monthly_mortgage_payment, projection_frame

__all__ = [
    "level_payment",
    "amortization_schedule",
    "simulate_property",
    "monthly_mortgage_payment",
    "projection_frame",
]
