# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

from __future__ import annotations

from decimal import Decimal
from typing import Tuple

from pydantic import Field, field_validator

from .enums import AgingBucketEnum, PaymentFrequencyEnum
from .model import Model
from .types import PositiveDecimal, PositiveInt


class BillingSettings(Model):
    """
    Settings controlling schedule derivation.

    The period caps are runaway guards for pathological lease terms; hitting
    them truncates output silently rather than raising.
    """

    max_periods: PositiveInt = Field(
        default=1000,
        ge=1,
        description="Maximum number of billing periods emitted for a single schedule.",
    )
    max_estimated_periods: PositiveInt = Field(
        default=10_000,
        ge=1,
        description="Upper bound on the period count stored in the creation snapshot.",
    )
    month_end_clamp_day: PositiveInt = Field(
        default=28,
        ge=1,
        le=28,
        description=(
            "Day used when a monthly/quarterly advance lands in a month too short "
            "for the anchor day: the due day becomes min(anchor_day, clamp_day)."
        ),
    )
    default_frequency: PaymentFrequencyEnum = PaymentFrequencyEnum.MONTHLY


class AgingSettings(Model):
    """Day bounds separating the four arrears buckets."""

    bucket_bounds: Tuple[PositiveInt, PositiveInt, PositiveInt] = Field(
        default=(30, 60, 90),
        description="Inclusive upper bounds of the 0-30, 31-60 and 61-90 buckets.",
    )

    @field_validator("bucket_bounds")
    @classmethod
    def check_increasing(cls, v: Tuple[int, int, int]) -> Tuple[int, int, int]:
        if not (v[0] < v[1] < v[2]):
            raise ValueError("bucket_bounds must be strictly increasing")
        return v

    def bucket_for(self, days_past_due: int) -> AgingBucketEnum:
        """Map a days-past-due figure to its aging bucket."""
        first, second, third = self.bucket_bounds
        if days_past_due <= first:
            return AgingBucketEnum.CURRENT
        if days_past_due <= second:
            return AgingBucketEnum.DAYS_31_60
        if days_past_due <= third:
            return AgingBucketEnum.DAYS_61_90
        return AgingBucketEnum.OVER_90


class ReportingSettings(Model):
    """Settings related to report generation and display."""

    decimal_precision: PositiveInt = Field(
        default=2, description="Number of decimal places for currency values."
    )
    tax_multiplier: PositiveDecimal = Field(
        default=Decimal("0.4"),
        description="Default multiplier applied by scaled (tax) report views.",
    )


# --- Main Global Settings Class ---


class GlobalSettings(Model):
    """Global engine settings

    Groups the configuration of every calculator. Passed explicitly to the
    engine and calculators; there is no module-level settings singleton.
    """

    billing: BillingSettings = Field(default_factory=BillingSettings)
    aging: AgingSettings = Field(default_factory=AgingSettings)
    reporting: ReportingSettings = Field(default_factory=ReportingSettings)
