# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

"""
leaseledger Reporting Module

Cross-lease reports derived from schedules and payments:
    - ArrearsAgingAnalyzer: outstanding balances bucketed by age
    - RentRollReporter: per-lease due/paid/balance for one month

Both reports offer ``to_dataframe()`` and ``scaled(multiplier)`` views.
"""

from .aging import AgingRow, ArrearsAgingAnalyzer, ArrearsAgingReport
from .base import LeaseAccount, TabularReport
from .rent_roll import RentRollReport, RentRollReporter, RentRollRow, parse_year_month

__all__ = [
    # Base classes
    "LeaseAccount",
    "TabularReport",
    # Arrears aging
    "AgingRow",
    "ArrearsAgingAnalyzer",
    "ArrearsAgingReport",
    # Rent roll
    "RentRollReport",
    "RentRollReporter",
    "RentRollRow",
    "parse_year_month",
]
