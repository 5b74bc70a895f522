"""
Build PropertyRecord lists from tabular input and back.

Column names are normalized first, so files exported from the web calculator
(camelCase keys) or from the dashboard table (display labels) load the same way.
"""

from __future__ import annotations

import logging
from typing import Dict, List, Sequence

import pandas as pd
from pydantic import ValidationError

from core.schema import PROPERTY_COLUMNS, PropertyRecord
from core.utils import require_columns

from .inputs import PropertyInput

logger = logging.getLogger(__name__)

_COLUMN_ALIASES: Dict[str, str] = {
    # identifiers
    "id": "identifier",
    "ID": "identifier",
    "Property ID": "identifier",
    "propertyName": "name",
    "Property Name": "name",
    "property_name": "name",
    "Name": "name",
    # values
    "propertyValue": "property_value",
    "Property Value": "property_value",
    "downPayment": "down_payment",
    "Down Payment": "down_payment",
    "annualAppreciation": "annual_appreciation",
    "Annual Appreciation (%)": "annual_appreciation",
    "propertyTaxRate": "property_tax_rate",
    "Property Tax Rate (%)": "property_tax_rate",
    "monthlyRent": "monthly_rent",
    "Monthly Rent": "monthly_rent",
    "rentalAppreciation": "rental_appreciation",
    "Rental Appreciation (%)": "rental_appreciation",
    "interestRate": "interest_rate",
    "Mortgage Interest Rate (%)": "interest_rate",
    "Interest Rate (%)": "interest_rate",
    "loanTerm": "loan_term",
    "Loan Term (Years)": "loan_term",
}

# Optional columns; PropertyInput supplies a value when missing
_OPTIONAL_COLUMNS: set = {"identifier", "name"}


def canonicalize_columns(df: pd.DataFrame) -> pd.DataFrame:
    """
    Return a copy with column aliases mapped to PropertyRecord field names.

    When a file carries the same field under several aliases (say both
    "downPayment" and "Down Payment"), the columns are merged cell by cell,
    the leftmost non-null value winning. The merged aliases are logged and
    kept in ``out.attrs["merged_aliases"]`` as {field: [source columns]}.
    """
    renamed = [_COLUMN_ALIASES.get(c, c) for c in df.columns]
    out = df.copy()
    out.columns = renamed

    sources: Dict[str, List[str]] = {}
    for original, field_name in zip(df.columns, renamed):
        sources.setdefault(field_name, []).append(str(original))
    merged = {f: cols for f, cols in sources.items() if len(cols) > 1}
    if not merged:
        return out

    fields: List[pd.Series] = []
    for field_name in sources:
        block = out.iloc[:, [i for i, c in enumerate(renamed) if c == field_name]]
        values = block.iloc[:, 0]
        for k in range(1, block.shape[1]):
            values = values.combine_first(block.iloc[:, k])
        fields.append(values.rename(field_name))
    out = pd.concat(fields, axis=1)
    out.attrs["merged_aliases"] = merged

    for field_name, cols in merged.items():
        logger.warning(f"columns {cols} all map to {field_name!r}; merged, leftmost non-null wins")
    return out


def default_property(**overrides) -> PropertyRecord:
    """Starter property (the calculator defaults) with optional field overrides."""
    return PropertyInput(**overrides).to_record()


def records_from_frame(df: pd.DataFrame) -> List[PropertyRecord]:
    """
    Validate every row through PropertyInput.

    Raises ValueError listing every invalid row; nothing is returned unless the
    whole frame is valid.
    """
    d2 = canonicalize_columns(df)
    require_columns(d2, [c for c in PROPERTY_COLUMNS if c not in _OPTIONAL_COLUMNS])
    present = [c for c in PROPERTY_COLUMNS if c in d2.columns]

    records: List[PropertyRecord] = []
    problems: List[str] = []
    for i, row in enumerate(d2.loc[:, present].to_dict(orient="records")):
        # Missing optional cells come through as NaN; let the model default them.
        values = {k: v for k, v in row.items() if not (k in _OPTIONAL_COLUMNS and pd.isna(v))}
        if "identifier" in values:
            ident = values["identifier"]
            if isinstance(ident, float) and ident.is_integer():
                ident = int(ident)
            values["identifier"] = str(ident)
        try:
            records.append(PropertyInput(**values).to_record())
        except ValidationError as exc:
            msgs = "; ".join(
                f"{'.'.join(str(p) for p in err['loc']) or 'row'}: {err['msg']}"
                for err in exc.errors()
            )
            problems.append(f"row {i}: {msgs}")

    if problems:
        raise ValueError("Invalid property rows:\n" + "\n".join(problems))

    logger.info(f"built {len(records)} property records from {len(df)} rows")
    return records


def records_to_frame(records: Sequence[PropertyRecord]) -> pd.DataFrame:
    return pd.DataFrame([r.to_dict() for r in records], columns=list(PROPERTY_COLUMNS))
