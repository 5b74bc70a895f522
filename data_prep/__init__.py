"""
Data preparation: property input model, loading portfolio files, validation.
"""

from .inputs import PropertyInput
from .loader import load_portfolio, save_portfolio, read_portfolio_frame
from .portfolio_builder import (
    canonicalize_columns,
    default_property,
    records_from_frame,
    records_to_frame,
)
from .validators import PropertyIssue, ValidationResult, validate_portfolio

__all__ = [
    "PropertyInput",
    "load_portfolio",
    "save_portfolio",
    "read_portfolio_frame",
    "canonicalize_columns",
    "default_property",
    "records_from_frame",
    "records_to_frame",
    "PropertyIssue",
    "ValidationResult",
    "validate_portfolio",
]
