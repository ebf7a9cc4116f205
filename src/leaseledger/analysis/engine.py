# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

"""
Lease Billing Engine

Public entry point that wires the injected repositories to the schedule
builder, payment allocator and report analyzers. Every call re-reads lease
and payment data; nothing is cached between calls and no read isolation is
imposed on the repositories.
"""

from __future__ import annotations

import logging
from datetime import date, datetime
from typing import List, Optional, Union

from ..billing import (
    BillingPeriod,
    BillingScheduleBuilder,
    LeaseAgreement,
    PaymentAllocator,
    PaymentType,
)
from ..core.primitives import (
    GlobalSettings,
    InvalidInputError,
    PaymentTypeNotFoundError,
    to_date_only,
)
from ..lifecycle import (
    LeaseLifecycleManager,
    LeaseRepository,
    PaymentRepository,
    PaymentTypeRepository,
    PropertyRepository,
)
from ..reporting import (
    ArrearsAgingAnalyzer,
    ArrearsAgingReport,
    LeaseAccount,
    parse_year_month,
    RentRollReport,
    RentRollReporter,
)
from .results import LeaseLedger

logger = logging.getLogger(__name__)


class LeaseBillingEngine:
    """
    Schedule, ledger and reporting operations over repository data.

    Example:
        ```python
        engine = LeaseBillingEngine(leases=lease_repo, payments=payment_repo)
        ledger = engine.get_lease_ledger(lease_id)
        roll = engine.get_property_rent_roll(property_id, "2024-02")
        aging = engine.get_arrears_aging(property_id, date(2024, 3, 15))
        ```

    Args:
        leases: Lease repository
        payments: Payment repository
        payment_types: Optional payment type lookup for ``check_payment_type``
        properties: Optional property lookup used by lease creation
        settings: Engine configuration (defaults to ``GlobalSettings()``)
    """

    def __init__(
        self,
        leases: LeaseRepository,
        payments: PaymentRepository,
        payment_types: Optional[PaymentTypeRepository] = None,
        properties: Optional[PropertyRepository] = None,
        settings: Optional[GlobalSettings] = None,
    ):
        self.leases = leases
        self.payments = payments
        self.payment_types = payment_types
        self.properties = properties
        self.settings = settings or GlobalSettings()

        self.schedule_builder = BillingScheduleBuilder(self.settings.billing)
        self.allocator = PaymentAllocator()
        self.aging_analyzer = ArrearsAgingAnalyzer(self.settings, self.schedule_builder)
        self.rent_roll_reporter = RentRollReporter(self.settings, self.schedule_builder)
        self._lifecycle = LeaseLifecycleManager(
            leases,
            properties=properties,
            settings=self.settings.billing,
            schedule_builder=self.schedule_builder,
        )

    @property
    def lifecycle(self) -> LeaseLifecycleManager:
        """Create/extend/terminate bound to the same repositories and settings."""
        return self._lifecycle

    # ------------------------------------------------------------------
    # Schedules
    # ------------------------------------------------------------------

    def build_billing_schedule(self, lease: LeaseAgreement) -> List[BillingPeriod]:
        return self.schedule_builder.build_schedule(lease)

    def compute_next_due_date(
        self, lease: LeaseAgreement, as_of: Optional[date] = None
    ) -> Optional[date]:
        return self.schedule_builder.compute_next_due_date(lease, as_of)

    # ------------------------------------------------------------------
    # Ledger and reports
    # ------------------------------------------------------------------

    def get_lease_ledger(self, lease_id: str) -> LeaseLedger:
        """
        FIFO ledger for one lease.

        Raises:
            LeaseNotFoundError: Unknown lease id
        """
        lease = self._lifecycle.get(lease_id)
        schedule = self.schedule_builder.build_schedule(lease)
        payments = self.payments.find_payments_by_lease(lease_id)
        allocation = self.allocator.allocate(schedule, payments)
        logger.debug(
            f"Lease {lease_id}: ledger over {len(schedule)} periods and "
            f"{len(payments)} payments, outstanding {allocation.totals.outstanding}"
        )
        return LeaseLedger.from_allocation(lease, allocation)

    def get_property_rent_roll(self, property_id: str, month: str) -> RentRollReport:
        """
        Rent roll for every lease of the property in ``month`` (``YYYY-MM``).

        Raises:
            InvalidInputError: If ``month`` does not parse to a year and month
        """
        parse_year_month(month)
        return self.rent_roll_reporter.rent_roll(self._accounts(property_id), month)

    def get_arrears_aging(
        self, property_id: str, as_of: Union[date, datetime, str]
    ) -> ArrearsAgingReport:
        """
        Arrears aging for every lease of the property as of a date.

        Raises:
            InvalidInputError: If ``as_of`` is not a valid date
        """
        as_of_date = to_date_only(as_of)
        return self.aging_analyzer.age_arrears(self._accounts(property_id), as_of_date)

    # ------------------------------------------------------------------
    # Payment types
    # ------------------------------------------------------------------

    def check_payment_type(self, code: str, organization_id: Optional[str]) -> PaymentType:
        """
        Resolve a payment type and confirm it may be used by the organization.

        Raises:
            PaymentTypeNotFoundError: Unknown code, or no lookup configured
            InvalidInputError: Type scoped to a different organization
        """
        payment_type = None
        if self.payment_types is not None:
            payment_type = self.payment_types.find_payment_type_by_code(code)
        if payment_type is None:
            raise PaymentTypeNotFoundError(code)
        if not payment_type.is_permitted_for(organization_id):
            raise InvalidInputError(
                f"Payment type '{code}' is not permitted for organization {organization_id}"
            )
        return payment_type

    def _accounts(self, property_id: str) -> List[LeaseAccount]:
        return [
            LeaseAccount(lease=lease, payments=self.payments.find_payments_by_lease(lease.id))
            for lease in self.leases.find_leases_by_property(property_id)
        ]
