"""
Property input model: the boundary between raw form/file values and the engine.

The engine accepts any numbers and computes whatever they imply. This model is
where nonsensical input is rejected, in particular a down payment larger than
the property value (which would mean a negative loan).
"""

from __future__ import annotations

import uuid

from pydantic import BaseModel, ConfigDict, Field, model_validator

from core.schema import PropertyRecord


def _new_identifier() -> str:
    return uuid.uuid4().hex[:12]


class PropertyInput(BaseModel):
    """
    Validated property parameters.
    Defaults describe the calculator's starter house.
    """

    model_config = ConfigDict(str_strip_whitespace=True)

    identifier: str = Field(default_factory=_new_identifier)
    name: str = ""

    property_value: float = Field(default=600_000.0, gt=0)
    down_payment: float = Field(default=150_000.0, ge=0)
    annual_appreciation: float = Field(default=6.0, description="Percent per year.")
    property_tax_rate: float = Field(default=0.51, ge=0, description="Percent of value per year.")
    monthly_rent: float = Field(default=2_500.0, ge=0)
    rental_appreciation: float = Field(default=5.0, description="Percent per year.")
    interest_rate: float = Field(default=4.5, ge=0, description="Nominal annual percent.")
    loan_term: int = Field(default=30, gt=0, description="Years.")

    @model_validator(mode="after")
    def _down_payment_within_value(self) -> "PropertyInput":
        if self.down_payment > self.property_value:
            raise ValueError(
                f"down_payment ({self.down_payment:,.2f}) exceeds "
                f"property_value ({self.property_value:,.2f})"
            )
        return self

    def to_record(self) -> PropertyRecord:
        return PropertyRecord(**self.model_dump())

    @classmethod
    def from_record(cls, record: PropertyRecord) -> "PropertyInput":
        return cls(**record.to_dict())
