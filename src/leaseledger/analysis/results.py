# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

from __future__ import annotations

from typing import List

import pandas as pd

from ..billing import BillingPeriod, LeaseAgreement, LedgerAllocation, LedgerTotals
from ..core.primitives import Model


class LeaseLedger(Model):
    """
    Ledger of one lease: the lease itself, its allocated periods and totals.

    Derived on every request and never persisted.
    """

    lease: LeaseAgreement
    periods: List[BillingPeriod]
    totals: LedgerTotals

    @classmethod
    def from_allocation(cls, lease: LeaseAgreement, allocation: LedgerAllocation) -> "LeaseLedger":
        return cls(lease=lease, periods=allocation.periods, totals=allocation.totals)

    def to_dataframe(self) -> pd.DataFrame:
        return LedgerAllocation(periods=self.periods, totals=self.totals).to_dataframe()
