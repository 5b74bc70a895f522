"""
Tests for the input boundary: PropertyInput, column canonicalization,
frame conversion and file loaders.
"""
import pandas as pd
import pytest
from pydantic import ValidationError

from core.schema import PROPERTY_COLUMNS, PropertyRecord
from data_prep.inputs import PropertyInput
from data_prep.loader import load_portfolio, read_portfolio_frame, save_portfolio
from data_prep.portfolio_builder import (
    canonicalize_columns,
    default_property,
    records_from_frame,
    records_to_frame,
)


# ---------------------------------------------------------------------------
# PropertyInput
# ---------------------------------------------------------------------------

def test_defaults_match_starter_house():
    rec = PropertyInput().to_record()
    assert isinstance(rec, PropertyRecord)
    assert rec.property_value == 600_000
    assert rec.down_payment == 150_000
    assert rec.annual_appreciation == 6.0
    assert rec.property_tax_rate == 0.51
    assert rec.monthly_rent == 2_500
    assert rec.rental_appreciation == 5.0
    assert rec.interest_rate == 4.5
    assert rec.loan_term == 30
    assert rec.name == ""
    assert rec.identifier


def test_generated_identifiers_are_unique():
    assert PropertyInput().identifier != PropertyInput().identifier


def test_down_payment_above_value_rejected():
    with pytest.raises(ValidationError, match="exceeds"):
        PropertyInput(property_value=300_000, down_payment=300_001)


def test_down_payment_equal_to_value_allowed():
    rec = PropertyInput(property_value=300_000, down_payment=300_000).to_record()
    assert rec.loan_amount == 0


@pytest.mark.parametrize('field, value', [
    ('property_value', 0),
    ('down_payment', -1),
    ('monthly_rent', -100),
    ('interest_rate', -0.5),
    ('loan_term', 0),
])
def test_out_of_range_fields_rejected(field, value):
    with pytest.raises(ValidationError):
        PropertyInput(**{field: value})


def test_round_trip_through_record():
    rec = default_property(name="  Elm St  ", loan_term=15)
    assert rec.name == "Elm St"
    assert PropertyInput.from_record(rec).to_record() == rec


# ---------------------------------------------------------------------------
# Column canonicalization and frames
# ---------------------------------------------------------------------------

def _calculator_export():
    """Rows as exported by the web calculator (camelCase keys)."""
    return pd.DataFrame([
        {"id": 1, "propertyName": "Elm", "propertyValue": 500_000, "downPayment": 100_000,
         "annualAppreciation": 4, "propertyTaxRate": 1.0, "monthlyRent": 2_800,
         "rentalAppreciation": 3, "interestRate": 6.5, "loanTerm": 30},
        {"id": 2, "propertyName": "Oak", "propertyValue": 350_000, "downPayment": 70_000,
         "annualAppreciation": 3, "propertyTaxRate": 0.8, "monthlyRent": 2_100,
         "rentalAppreciation": 2, "interestRate": 5.75, "loanTerm": 15},
    ])


def test_canonicalize_camel_case():
    out = canonicalize_columns(_calculator_export())
    assert set(out.columns) == set(PROPERTY_COLUMNS)


def test_canonicalize_coalesces_duplicates():
    df = pd.DataFrame({"downPayment": [None, 20.0], "down_payment": [10.0, None]})
    out = canonicalize_columns(df)
    assert list(out.columns) == ["down_payment"]
    assert out["down_payment"].tolist() == [10.0, 20.0]


def test_canonicalize_reports_merged_aliases(caplog):
    df = pd.DataFrame({
        "Down Payment": [None, 20.0],
        "downPayment": [5.0, 30.0],
        "monthlyRent": [1_000.0, 1_200.0],
    })
    with caplog.at_level("WARNING", logger="data_prep.portfolio_builder"):
        out = canonicalize_columns(df)
    assert list(out.columns) == ["down_payment", "monthly_rent"]
    assert out["down_payment"].tolist() == [5.0, 20.0]
    assert out.attrs["merged_aliases"] == {"down_payment": ["Down Payment", "downPayment"]}
    assert "down_payment" in caplog.text
    assert "Down Payment" in caplog.text


def test_canonicalize_without_collisions_is_silent(caplog):
    with caplog.at_level("WARNING", logger="data_prep.portfolio_builder"):
        out = canonicalize_columns(_calculator_export())
    assert "merged_aliases" not in out.attrs
    assert caplog.records == []


def test_records_from_frame():
    records = records_from_frame(_calculator_export())
    assert [r.identifier for r in records] == ["1", "2"]
    assert [r.name for r in records] == ["Elm", "Oak"]
    assert records[1].loan_term == 15
    assert isinstance(records[1].loan_term, int)


def test_records_from_frame_without_optional_columns():
    df = records_to_frame([default_property()]).drop(columns=["identifier", "name"])
    (rec,) = records_from_frame(df)
    assert rec.identifier
    assert rec.name == ""


def test_records_from_frame_reports_every_bad_row():
    df = _calculator_export()
    df.loc[0, "downPayment"] = 900_000
    df.loc[1, "loanTerm"] = 0
    with pytest.raises(ValueError) as exc:
        records_from_frame(df)
    msg = str(exc.value)
    assert "row 0" in msg
    assert "row 1" in msg


def test_records_from_frame_missing_column():
    df = _calculator_export().drop(columns=["monthlyRent"])
    with pytest.raises(ValueError, match="monthly_rent"):
        records_from_frame(df)


def test_records_to_frame_column_order():
    df = records_to_frame([default_property(identifier="a")])
    assert list(df.columns) == list(PROPERTY_COLUMNS)
    assert df.loc[0, "identifier"] == "a"


# ---------------------------------------------------------------------------
# Loaders
# ---------------------------------------------------------------------------

@pytest.mark.parametrize('suffix', ['.csv', '.json', '.xlsx'])
def test_save_and_load_portfolio(tmp_path, suffix):
    records = [
        default_property(identifier="elm", name="Elm"),
        default_property(identifier="oak", name="Oak", property_value=420_000.0,
                         down_payment=84_000.0, loan_term=15),
    ]
    path = save_portfolio(records, tmp_path / f"portfolio{suffix}")
    assert load_portfolio(path) == records


def test_read_from_open_file(tmp_path):
    path = tmp_path / "export.csv"
    _calculator_export().to_csv(path, index=False)
    with open(path, "rb") as fh:
        df = read_portfolio_frame(fh)
    assert len(records_from_frame(df)) == 2


def test_unsupported_suffix(tmp_path):
    with pytest.raises(ValueError, match="Unsupported"):
        load_portfolio(tmp_path / "portfolio.txt")
    with pytest.raises(ValueError, match="Unsupported"):
        save_portfolio([], tmp_path / "portfolio.parquet")
