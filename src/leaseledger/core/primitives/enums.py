# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

from __future__ import annotations

from enum import Enum


class PaymentFrequencyEnum(str, Enum):
    """
    Frequency at which a lease charge recurs.

    Options:
        WEEKLY: Every 7 days
        BIWEEKLY: Every 14 days
        MONTHLY: Same day each month (clamped on short months)
        QUARTERLY: Same day every third month (clamped on short months)
        YEARLY: Same month and day each year
    """

    WEEKLY = "weekly"
    BIWEEKLY = "biweekly"
    MONTHLY = "monthly"
    QUARTERLY = "quarterly"
    YEARLY = "yearly"

    @property
    def is_calendar_based(self) -> bool:
        """True for frequencies anchored to a day of the month."""
        return self in (
            PaymentFrequencyEnum.MONTHLY,
            PaymentFrequencyEnum.QUARTERLY,
            PaymentFrequencyEnum.YEARLY,
        )


class LeaseStatusEnum(str, Enum):
    """
    Lifecycle status of a lease agreement.

    Options:
        ACTIVE: Signed and currently billed
        PENDING: Created, awaiting signature or start
        TERMINATED: Ended early through termination
        EXPIRED: Reached its end date
        SUSPENDED: Temporarily on hold
    """

    ACTIVE = "active"
    PENDING = "pending"
    TERMINATED = "terminated"
    EXPIRED = "expired"
    SUSPENDED = "suspended"


class LeaseTypeEnum(str, Enum):
    """
    Type of lease structure.

    Options:
        FIXED_TERM: Lease runs between fixed start and end dates
        PERIODIC: Rolling lease renewed each period
    """

    FIXED_TERM = "fixed_term"
    PERIODIC = "periodic"


class ChargeTypeEnum(str, Enum):
    """What the recurring lease amount pays for."""

    RENT = "rent"
    OTHER = "other"


class AgingBucketEnum(str, Enum):
    """
    Arrears age bands, keyed by days past the oldest unpaid due date.

    The labels describe the default bounds (30/60/90); custom bounds in
    AgingSettings keep the same four bands.
    """

    CURRENT = "0-30"
    DAYS_31_60 = "31-60"
    DAYS_61_90 = "61-90"
    OVER_90 = "90+"


def enum_to_string(value) -> str:
    """
    Convert enum values to their string representation for pandas storage.

    Examples:
        >>> enum_to_string(AgingBucketEnum.OVER_90)
        '90+'
        >>> enum_to_string("already_string")
        'already_string'
    """
    if isinstance(value, Enum):
        return value.value
    return str(value)
