# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

"""
FIFO payment allocation (the lease ledger).

Payments are applied in chronological order to the oldest period that still
carries a balance, regardless of which period the payer meant to settle.
"""

from __future__ import annotations

import logging
from decimal import Decimal
from typing import Iterable, List, Sequence

import pandas as pd

from ..core.primitives import Model, NonNegativeDecimal
from .payment import PaymentRecord
from .schedule import BillingPeriod, PaymentContribution

logger = logging.getLogger(__name__)

LEDGER_COLUMNS = ["due_date", "amount_due", "amount_paid", "balance", "payment_count"]


class LedgerTotals(Model):
    """Aggregate figures across every period of a ledger."""

    total_due: NonNegativeDecimal
    total_paid: NonNegativeDecimal
    outstanding: NonNegativeDecimal


class LedgerAllocation(Model):
    """Result of allocating payments across a billing schedule."""

    periods: List[BillingPeriod]
    totals: LedgerTotals

    def to_dataframe(self) -> pd.DataFrame:
        """One row per period, in due-date order."""
        rows = [
            {
                "due_date": period.due_date,
                "amount_due": period.amount_due,
                "amount_paid": period.amount_paid,
                "balance": period.balance,
                "payment_count": len(period.payments),
            }
            for period in self.periods
        ]
        return pd.DataFrame(rows, columns=LEDGER_COLUMNS)


class PaymentAllocator:
    """
    Allocates payments to billing periods first-in, first-out.

    Guarantees:
    - no period receives more than its ``amount_due``;
    - the sum of ``amount_paid`` equals the sum of payments, up to the total
      due. Anything beyond the total due is dropped rather than carried as
      credit;
    - payments dated before the first due date are allocated like any other.

    Example:
        ```python
        allocation = PaymentAllocator().allocate(schedule, payments)
        allocation.totals.outstanding
        ```
    """

    def allocate(
        self,
        schedule: Sequence[BillingPeriod],
        payments: Iterable[PaymentRecord],
    ) -> LedgerAllocation:
        ordered = sorted(payments, key=lambda p: p.paid_at)

        balances = [period.amount_due for period in schedule]
        contributions: List[List[PaymentContribution]] = [[] for _ in schedule]

        for payment in ordered:
            remaining = payment.amount
            for idx, balance in enumerate(balances):
                if remaining <= 0:
                    break
                if balance <= 0:
                    continue
                applied = min(balance, remaining)
                balances[idx] = balance - applied
                remaining -= applied
                contributions[idx].append(
                    PaymentContribution(
                        payment_id=payment.id, amount=applied, paid_at=payment.paid_at
                    )
                )
            if remaining > 0:
                logger.debug(
                    f"Payment {payment.id}: {remaining} exceeds total due and was not allocated"
                )

        periods = [
            BillingPeriod(
                due_date=period.due_date,
                amount_due=period.amount_due,
                amount_paid=period.amount_due - balances[idx],
                balance=balances[idx],
                payments=contributions[idx],
            )
            for idx, period in enumerate(schedule)
        ]

        total_due = sum((p.amount_due for p in periods), Decimal("0"))
        total_paid = sum((p.amount_paid for p in periods), Decimal("0"))
        totals = LedgerTotals(
            total_due=total_due,
            total_paid=total_paid,
            outstanding=max(Decimal("0"), total_due - total_paid),
        )
        return LedgerAllocation(periods=periods, totals=totals)
