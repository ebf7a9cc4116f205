# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

"""
leaseledger Core Primitives

Essential building blocks shared by every calculator: the immutable model
base, enums, constrained types, settings, validation helpers, the error
taxonomy and calendar recurrence.
"""

from .enums import (
    AgingBucketEnum,
    ChargeTypeEnum,
    LeaseStatusEnum,
    LeaseTypeEnum,
    PaymentFrequencyEnum,
    enum_to_string,
)
from .errors import (
    InvalidInputError,
    LeaseLedgerError,
    LeaseNotFoundError,
    PaymentTypeNotFoundError,
)
from .model import Model
from .recurrence import RecurrenceCalculator, advances_strictly
from .settings import (
    AgingSettings,
    BillingSettings,
    GlobalSettings,
    ReportingSettings,
)
from .types import DayOfMonth, NonNegativeDecimal, PositiveDecimal, PositiveInt
from .validation import ValidationMixin, to_date_only, to_decimal

__all__ = [
    # Core models
    "Model",
    # Settings
    "GlobalSettings",
    "BillingSettings",
    "AgingSettings",
    "ReportingSettings",
    # Enums
    "AgingBucketEnum",
    "ChargeTypeEnum",
    "LeaseStatusEnum",
    "LeaseTypeEnum",
    "PaymentFrequencyEnum",
    "enum_to_string",
    # Errors
    "LeaseLedgerError",
    "InvalidInputError",
    "LeaseNotFoundError",
    "PaymentTypeNotFoundError",
    # Recurrence
    "RecurrenceCalculator",
    "advances_strictly",
    # Types
    "DayOfMonth",
    "NonNegativeDecimal",
    "PositiveDecimal",
    "PositiveInt",
    # Validation
    "ValidationMixin",
    "to_date_only",
    "to_decimal",
]
