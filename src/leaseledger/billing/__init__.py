# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

"""
Lease Billing

Lease and payment models, schedule derivation and FIFO payment allocation.
"""

from .allocation import LedgerAllocation, LedgerTotals, PaymentAllocator
from .lease import BillingSnapshot, LeaseAgreement, LeaseTerms, TerminationRecord
from .payment import PaymentRecord, PaymentType
from .schedule import BillingPeriod, BillingScheduleBuilder, PaymentContribution

__all__ = [
    # Models
    "LeaseAgreement",
    "LeaseTerms",
    "BillingSnapshot",
    "TerminationRecord",
    "PaymentRecord",
    "PaymentType",
    # Schedule
    "BillingPeriod",
    "BillingScheduleBuilder",
    "PaymentContribution",
    # Ledger
    "PaymentAllocator",
    "LedgerAllocation",
    "LedgerTotals",
]
