# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

"""
Monthly rent roll.

Reports, for one calendar month, what each lease was billed and what it paid
in that month. ``paid`` is cash basis: every payment dated inside the month
counts, whichever period the ledger would allocate it to.
"""

from __future__ import annotations

import logging
import re
from decimal import Decimal
from typing import Any, ClassVar, Dict, Iterable, List, Optional, Tuple

import pandas as pd
from pydantic import Field

from ..billing import BillingScheduleBuilder
from ..core.primitives import GlobalSettings, InvalidInputError, Model, NonNegativeDecimal
from .base import AccountInput, TabularReport, as_account

logger = logging.getLogger(__name__)

_YEAR_MONTH = re.compile(r"([0-9]{4})-([0-9]{1,2})")


def parse_year_month(value: str) -> pd.Period:
    """
    Parse ``"YYYY-MM"`` (or ``"YYYY-M"``) into a monthly ``pd.Period``.

    Raises:
        InvalidInputError: If the string is not of the form YYYY-MM or the
            month is outside 1..12
    """
    match = _YEAR_MONTH.fullmatch(value) if isinstance(value, str) else None
    if not match:
        raise InvalidInputError(f"Invalid month format {value!r}. Expected YYYY-MM")
    year, month = int(match.group(1)), int(match.group(2))
    if year < 1 or not 1 <= month <= 12:
        raise InvalidInputError(f"Invalid month format {value!r}. Expected YYYY-MM")
    return pd.Period(year=year, month=month, freq="M")


class RentRollRow(Model):
    """Billing and cash received for one lease in the report month."""

    lease_id: str
    unit_id: str
    tenant_id: str
    due: NonNegativeDecimal
    paid: NonNegativeDecimal
    balance: NonNegativeDecimal


class RentRollReport(TabularReport):
    """Rent roll rows for a single month."""

    COLUMNS: ClassVar[Tuple[str, ...]] = (
        "lease_id",
        "unit_id",
        "tenant_id",
        "due",
        "paid",
        "balance",
    )
    MONEY_COLUMNS: ClassVar[Tuple[str, ...]] = ("due", "paid", "balance")

    month: str
    rows: List[RentRollRow] = Field(default_factory=list)

    @property
    def total_due(self) -> Decimal:
        return sum((row.due for row in self.rows), Decimal("0"))

    @property
    def total_paid(self) -> Decimal:
        return sum((row.paid for row in self.rows), Decimal("0"))

    @property
    def total_balance(self) -> Decimal:
        return sum((row.balance for row in self.rows), Decimal("0"))

    def _records(self) -> List[Dict[str, Any]]:
        return [row.model_dump() for row in self.rows]


class RentRollReporter:
    """
    Builds the rent roll for a target month.

    Leases with no due date inside the month are skipped entirely, even if
    they received payments that month.

    Example:
        ```python
        report = RentRollReporter().rent_roll(accounts, "2024-02")
        report.to_dataframe()
        ```
    """

    def __init__(
        self,
        settings: Optional[GlobalSettings] = None,
        schedule_builder: Optional[BillingScheduleBuilder] = None,
    ):
        self.settings = settings or GlobalSettings()
        self.schedule_builder = schedule_builder or BillingScheduleBuilder(
            self.settings.billing
        )

    def rent_roll(self, accounts: Iterable[AccountInput], year_month: str) -> RentRollReport:
        period = parse_year_month(year_month)
        month_start = period.start_time.date()
        month_end = period.end_time.date()

        rows: List[RentRollRow] = []
        for item in accounts:
            row = self._roll_account(as_account(item), month_start, month_end)
            if row is not None:
                rows.append(row)

        logger.debug(f"Rent roll {period}: {len(rows)} leases billed")
        return RentRollReport(
            month=str(period), rows=rows, settings=self.settings.reporting
        )

    def _roll_account(self, account, month_start, month_end) -> Optional[RentRollRow]:
        lease = account.lease
        month_periods = [
            p
            for p in self.schedule_builder.build_schedule(lease)
            if month_start <= p.due_date <= month_end
        ]
        if not month_periods:
            return None

        due = sum((p.amount_due for p in month_periods), Decimal("0"))
        paid = sum(
            (p.amount for p in account.payments if month_start <= p.paid_on <= month_end),
            Decimal("0"),
        )
        return RentRollRow(
            lease_id=lease.id,
            unit_id=lease.unit_id,
            tenant_id=lease.tenant_id,
            due=due,
            paid=paid,
            balance=max(Decimal("0"), due - paid),
        )
