# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

"""
Billing schedule derivation.

Expands a lease's term into the ordered list of due periods. Schedules are
recomputed from the lease fields on every call and never persisted.
"""

from __future__ import annotations

import logging
from datetime import date, datetime
from decimal import Decimal
from typing import Any, List, Optional

from pydantic import Field, model_validator

from ..core.primitives import (
    BillingSettings,
    Model,
    NonNegativeDecimal,
    PaymentFrequencyEnum,
    PositiveDecimal,
    RecurrenceCalculator,
    advances_strictly,
    to_decimal,
)
from .lease import LeaseAgreement

logger = logging.getLogger(__name__)


class PaymentContribution(Model):
    """The slice of one payment applied to one billing period."""

    payment_id: str
    amount: PositiveDecimal
    paid_at: datetime


class BillingPeriod(Model):
    """
    One recurring due date and its charge.

    Fresh periods carry only ``due_date`` and ``amount_due``; the allocator
    returns copies enriched with ``amount_paid``, ``balance`` and the
    contributing payments.
    """

    due_date: date
    amount_due: PositiveDecimal
    amount_paid: NonNegativeDecimal = Decimal("0")
    balance: NonNegativeDecimal
    payments: List[PaymentContribution] = Field(default_factory=list)

    @model_validator(mode="before")
    @classmethod
    def default_balance(cls, data: Any) -> Any:
        """Fill ``balance`` as amount_due - amount_paid when omitted."""
        if isinstance(data, dict) and data.get("balance") is None:
            amount_due = data.get("amount_due")
            if amount_due is not None:
                paid = data.get("amount_paid") or Decimal("0")
                data = {**data, "balance": to_decimal(amount_due) - to_decimal(paid)}
        return data

    @model_validator(mode="after")
    def check_balance(self) -> "BillingPeriod":
        if self.amount_paid > self.amount_due:
            raise ValueError("amount_paid cannot exceed amount_due")
        if self.balance != self.amount_due - self.amount_paid:
            raise ValueError("balance must equal amount_due - amount_paid")
        return self

    @property
    def is_settled(self) -> bool:
        return self.balance == 0


class BillingScheduleBuilder:
    """
    Builds ordered billing schedules from lease terms.

    The first due date is the anchor (``first_payment_date`` or
    ``start_date``) advanced until it falls inside the term. Periods are
    emitted while the due date is on or before ``end_date``, so a due date
    equal to the end date is billed. Output is capped at
    ``BillingSettings.max_periods``; longer schedules are truncated without
    error.

    Example:
        ```python
        builder = BillingScheduleBuilder()
        lease = LeaseAgreement(
            unit_id="u1", tenant_id="t1", organization_id="o1",
            start_date=date(2024, 1, 1), end_date=date(2024, 4, 1),
            amount=Decimal("1000"),
        )
        [p.due_date for p in builder.build_schedule(lease)]
        # [date(2024, 1, 1), date(2024, 2, 1), date(2024, 3, 1), date(2024, 4, 1)]
        ```
    """

    def __init__(
        self,
        settings: Optional[BillingSettings] = None,
        recurrence: Optional[RecurrenceCalculator] = None,
    ):
        self.settings = settings or BillingSettings()
        self.recurrence = recurrence or RecurrenceCalculator(self.settings)

    def first_due_date(self, lease: LeaseAgreement) -> date:
        return self.recurrence.first_due_on_or_after(
            lease.start_date, lease.billing_anchor, lease.payment_frequency
        )

    def build_schedule(self, lease: LeaseAgreement) -> List[BillingPeriod]:
        """Expand the lease term into due periods, oldest first."""
        periods: List[BillingPeriod] = []
        due = self.first_due_date(lease)

        while due <= lease.end_date:
            if len(periods) >= self.settings.max_periods:
                logger.debug(
                    f"Lease {lease.id}: schedule truncated at {self.settings.max_periods} periods"
                )
                break
            periods.append(BillingPeriod(due_date=due, amount_due=lease.amount))
            nxt = self.recurrence.advance(due, lease.payment_frequency)
            if not advances_strictly(due, nxt):
                break
            due = nxt

        logger.debug(f"Lease {lease.id}: built schedule with {len(periods)} periods")
        return periods

    def compute_next_due_date(
        self, lease: LeaseAgreement, as_of: Optional[date] = None
    ) -> Optional[date]:
        """
        First scheduled due date on or after ``as_of`` (default: today).

        Returns None when that date would fall after the lease end date.
        """
        as_of = as_of or date.today()
        nxt = self.first_due_date(lease)
        while nxt < as_of:
            candidate = self.recurrence.advance(nxt, lease.payment_frequency)
            if not advances_strictly(nxt, candidate):
                break
            nxt = candidate
            if nxt > lease.end_date:
                return None
        if nxt > lease.end_date:
            return None
        return nxt

    def estimate_periods(
        self, anchor: date, end_date: date, frequency: PaymentFrequencyEnum
    ) -> int:
        """
        Count occurrences from ``anchor`` through ``end_date``.

        Counts from the raw anchor rather than the first due date inside the
        term, matching the figure stored in the creation snapshot.
        """
        count = 0
        current = anchor
        while current <= end_date and count < self.settings.max_estimated_periods:
            count += 1
            nxt = self.recurrence.advance(current, frequency)
            if not advances_strictly(current, nxt):
                break
            current = nxt
        return count

    @staticmethod
    def billing_cycle_day(
        anchor: date, frequency: PaymentFrequencyEnum
    ) -> Optional[int]:
        """Anchor day-of-month for calendar frequencies; None for weekly cycles."""
        if PaymentFrequencyEnum(frequency).is_calendar_based:
            return anchor.day
        return None
