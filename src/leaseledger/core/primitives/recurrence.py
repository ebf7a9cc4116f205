# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

"""
Calendar recurrence for lease billing.

Adds one billing period to a date for each supported payment frequency and
reconciles a lease's anchor date with the start of its term.
"""

from __future__ import annotations

import logging
from datetime import date, timedelta
from typing import Optional

from dateutil.relativedelta import relativedelta

from .enums import PaymentFrequencyEnum
from .settings import BillingSettings

logger = logging.getLogger(__name__)


_MONTHS_PER_PERIOD = {
    PaymentFrequencyEnum.MONTHLY: 1,
    PaymentFrequencyEnum.QUARTERLY: 3,
}

_DAYS_PER_PERIOD = {
    PaymentFrequencyEnum.WEEKLY: 7,
    PaymentFrequencyEnum.BIWEEKLY: 14,
}


def advances_strictly(current: date, nxt: date) -> bool:
    """
    Safety fuse for date loops.

    Returns False (and logs) when an advance failed to move the date
    forward; callers stop iterating instead of looping forever.
    """
    if nxt > current:
        return True
    logger.warning(f"Recurrence did not advance past {current} (got {nxt}); stopping")
    return False


class RecurrenceCalculator:
    """
    Computes successive due dates for a payment frequency.

    Monthly and quarterly advances keep the anchor day when the target month
    can hold it. When it cannot (e.g. the 31st into a 30-day month), the day
    becomes ``min(anchor_day, clamp_day)``, so ``2024-01-31`` advances to
    ``2024-02-28``. The clamp deliberately does not restore the original day
    in later months: once clamped, the schedule continues from the 28th.

    Yearly advances keep month and day; 29 February falls back to
    28 February in non-leap years.

    Example:
        ```python
        calc = RecurrenceCalculator()
        calc.advance(date(2024, 1, 31), PaymentFrequencyEnum.MONTHLY)
        # date(2024, 2, 28)
        calc.first_due_on_or_after(
            date(2024, 3, 10), date(2024, 1, 5), PaymentFrequencyEnum.MONTHLY
        )
        # date(2024, 4, 5)
        ```
    """

    def __init__(self, settings: Optional[BillingSettings] = None):
        self.settings = settings or BillingSettings()

    @property
    def clamp_day(self) -> int:
        return self.settings.month_end_clamp_day

    def advance(self, d: date, frequency: PaymentFrequencyEnum) -> date:
        """Add exactly one period of ``frequency`` to ``d``."""
        frequency = PaymentFrequencyEnum(frequency)

        if frequency in _DAYS_PER_PERIOD:
            return d + timedelta(days=_DAYS_PER_PERIOD[frequency])

        if frequency in _MONTHS_PER_PERIOD:
            candidate = d + relativedelta(months=_MONTHS_PER_PERIOD[frequency])
            # relativedelta snaps overflow to the month's last day
            if candidate.day != d.day:
                candidate = candidate.replace(day=min(d.day, self.clamp_day))
            return candidate

        # YEARLY
        return d + relativedelta(years=1)

    def first_due_on_or_after(
        self,
        term_start: date,
        anchor: date,
        frequency: PaymentFrequencyEnum,
    ) -> date:
        """
        Advance from ``anchor`` until the date is on or after ``term_start``.

        An anchor already inside the term is returned unchanged.
        """
        due = anchor
        while due < term_start:
            nxt = self.advance(due, frequency)
            if not advances_strictly(due, nxt):
                break
            due = nxt
        return due
