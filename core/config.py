"""
Projection configuration.
Depreciation and recapture constants live here so the simulator stays a pure
function of (record, config).
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Literal

ZeroDownRoiPolicy = Literal["propagate", "zero"]

_ZERO_DOWN_POLICIES = ("propagate", "zero")


@dataclass(frozen=True)
class ProjectionConfig:
    projection_years: int = 30

    # simplified depreciation recapture estimate
    depreciable_fraction: float = 0.8
    depreciation_years: float = 27.5
    recapture_rate: float = 0.25

    # per-property ROI when down payment is 0:
    #   "propagate" -> +/-inf (nan when total return is 0)
    #   "zero"      -> 0.0, same as the portfolio-level guard
    zero_down_roi: ZeroDownRoiPolicy = "propagate"

    def __post_init__(self) -> None:
        if self.projection_years < 0:
            raise ValueError(f"projection_years must be >= 0, got {self.projection_years}")
        if self.depreciation_years <= 0:
            raise ValueError(f"depreciation_years must be > 0, got {self.depreciation_years}")
        if self.zero_down_roi not in _ZERO_DOWN_POLICIES:
            raise ValueError(
                f"zero_down_roi must be one of {_ZERO_DOWN_POLICIES}, got {self.zero_down_roi!r}"
            )

    @property
    def n_snapshots(self) -> int:
        return self.projection_years + 1

    @classmethod
    def from_env(cls) -> "ProjectionConfig":
        """Build a config from PORTFOLIO_* environment overrides."""
        kwargs = {}
        years = os.environ.get("PORTFOLIO_PROJECTION_YEARS")
        if years:
            kwargs["projection_years"] = int(years)
        policy = os.environ.get("PORTFOLIO_ZERO_DOWN_ROI")
        if policy:
            kwargs["zero_down_roi"] = policy.strip().lower()
        return cls(**kwargs)


DEFAULT_CONFIG = ProjectionConfig()
