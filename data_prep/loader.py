from __future__ import annotations

import logging
from pathlib import Path
from typing import IO, List, Optional, Sequence, Union

import pandas as pd

from core.schema import PropertyRecord

from .portfolio_builder import records_from_frame, records_to_frame

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]

SUPPORTED_SUFFIXES = (".csv", ".json", ".xlsx")


def read_portfolio_frame(source: Union[PathLike, IO], *, suffix: Optional[str] = None) -> pd.DataFrame:
    """
    Load a portfolio file (.csv, .json records, or .xlsx) as a raw DataFrame.

    source may be a path or an open file object (e.g. an upload); the format
    comes from suffix, else from the path / file name.
    """
    if suffix is None:
        suffix = Path(str(getattr(source, "name", source))).suffix
    suffix = suffix.lower()
    if suffix == ".csv":
        return pd.read_csv(source)
    if suffix == ".json":
        return pd.read_json(source, orient="records")
    if suffix == ".xlsx":
        return pd.read_excel(source, engine="openpyxl")
    raise ValueError(f"Unsupported portfolio file type {suffix!r}; expected one of {SUPPORTED_SUFFIXES}")


def load_portfolio(path: PathLike) -> List[PropertyRecord]:
    records = records_from_frame(read_portfolio_frame(path))
    logger.info(f"loaded {len(records)} properties from {path}")
    return records


def save_portfolio(records: Sequence[PropertyRecord], path: PathLike) -> Path:
    p = Path(path)
    suffix = p.suffix.lower()
    df = records_to_frame(records)
    if suffix == ".csv":
        df.to_csv(p, index=False)
    elif suffix == ".json":
        df.to_json(p, orient="records", indent=2)
    elif suffix == ".xlsx":
        df.to_excel(p, index=False, engine="openpyxl")
    else:
        raise ValueError(f"Unsupported portfolio file type {suffix!r}; expected one of {SUPPORTED_SUFFIXES}")
    logger.info(f"saved {len(records)} properties to {p}")
    return p
