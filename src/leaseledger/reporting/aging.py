# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

"""
Arrears aging as of a reference date.

Aging works on aggregate figures (everything due by the as-of date against
everything paid by it), not on the FIFO ledger. Partial payments against
specific periods can therefore age differently here than in the ledger; the
two are independent views and are not reconciled.
"""

from __future__ import annotations

import logging
from datetime import date
from decimal import Decimal
from typing import Any, ClassVar, Dict, Iterable, List, Optional, Tuple

from pydantic import Field

from ..billing import BillingPeriod, BillingScheduleBuilder
from ..core.primitives import (
    AgingBucketEnum,
    AgingSettings,
    GlobalSettings,
    Model,
    NonNegativeDecimal,
    PositiveInt,
    enum_to_string,
)
from .base import AccountInput, LeaseAccount, TabularReport, as_account

logger = logging.getLogger(__name__)


def _empty_summary() -> Dict[AgingBucketEnum, Decimal]:
    return {bucket: Decimal("0") for bucket in AgingBucketEnum}


class AgingRow(Model):
    """Outstanding arrears of one lease."""

    lease_id: str
    tenant_id: str
    unit_id: str
    outstanding: NonNegativeDecimal
    max_days_past_due: PositiveInt
    bucket: AgingBucketEnum


class ArrearsAgingReport(TabularReport):
    """Per-bucket totals plus one row per lease in arrears."""

    COLUMNS: ClassVar[Tuple[str, ...]] = (
        "lease_id",
        "tenant_id",
        "unit_id",
        "outstanding",
        "max_days_past_due",
        "bucket",
    )
    MONEY_COLUMNS: ClassVar[Tuple[str, ...]] = ("outstanding",)

    as_of: date
    summary: Dict[AgingBucketEnum, NonNegativeDecimal] = Field(default_factory=_empty_summary)
    rows: List[AgingRow] = Field(default_factory=list)

    @property
    def total_outstanding(self) -> Decimal:
        return sum(self.summary.values(), Decimal("0"))

    def _records(self) -> List[Dict[str, Any]]:
        return [
            {**row.model_dump(), "bucket": enum_to_string(row.bucket)}
            for row in self.rows
        ]


class ArrearsAgingAnalyzer:
    """
    Buckets each lease's outstanding balance by the age of its oldest
    unpaid period.

    For a lease, ``outstanding = max(0, due_until - paid_until)`` where
    ``due_until`` sums the periods due on or before ``as_of`` and
    ``paid_until`` sums payments made on or before that day. Walking the due
    periods oldest-first, the paid total is consumed one ``amount_due`` at a
    time; the first period it cannot fully cover is the oldest unpaid period,
    and ``as_of - due_date`` (in days) selects the bucket. Leases with nothing
    outstanding are left out of both the summary and the rows.

    Example:
        ```python
        report = ArrearsAgingAnalyzer().age_arrears(accounts, date(2024, 3, 15))
        report.summary[AgingBucketEnum.DAYS_31_60]
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

    @property
    def aging_settings(self) -> AgingSettings:
        return self.settings.aging

    def age_arrears(
        self, accounts: Iterable[AccountInput], as_of: date
    ) -> ArrearsAgingReport:
        summary = _empty_summary()
        rows: List[AgingRow] = []

        for item in accounts:
            row = self._age_account(as_account(item), as_of)
            if row is None:
                continue
            summary[row.bucket] += row.outstanding
            rows.append(row)

        logger.debug(f"Arrears aging as of {as_of}: {len(rows)} leases in arrears")
        return ArrearsAgingReport(
            as_of=as_of,
            summary=summary,
            rows=rows,
            settings=self.settings.reporting,
        )

    def _age_account(self, account: LeaseAccount, as_of: date) -> Optional[AgingRow]:
        lease = account.lease
        periods = [
            p for p in self.schedule_builder.build_schedule(lease) if p.due_date <= as_of
        ]
        if not periods:
            return None

        due_until = sum((p.amount_due for p in periods), Decimal("0"))
        paid_until = sum(
            (p.amount for p in account.payments if p.paid_on <= as_of), Decimal("0")
        )
        outstanding = max(Decimal("0"), due_until - paid_until)
        if outstanding <= 0:
            return None

        oldest = self._oldest_unpaid(periods, paid_until)
        days_past_due = max(0, (as_of - oldest.due_date).days)
        return AgingRow(
            lease_id=lease.id,
            tenant_id=lease.tenant_id,
            unit_id=lease.unit_id,
            outstanding=outstanding,
            max_days_past_due=days_past_due,
            bucket=self.aging_settings.bucket_for(days_past_due),
        )

    @staticmethod
    def _oldest_unpaid(periods: List[BillingPeriod], paid: Decimal) -> BillingPeriod:
        unexplained = paid
        for period in periods:
            if unexplained < period.amount_due:
                return period
            unexplained -= period.amount_due
        # only reachable when outstanding is zero, which callers exclude
        return periods[-1]
