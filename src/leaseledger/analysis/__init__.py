# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

"""
leaseledger Analysis Engine

Facade binding lease, payment, payment-type and property repositories to the
schedule builder, FIFO allocator, aging and rent roll reports, and the lease
lifecycle manager.
"""

from .engine import LeaseBillingEngine
from .results import LeaseLedger

__all__ = [
    "LeaseBillingEngine",
    "LeaseLedger",
]
