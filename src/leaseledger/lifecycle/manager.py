# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

"""
Lease lifecycle orchestration: create, extend and terminate.

These are the only operations through which the engine writes lease data.
Schedules are never stored, so mutations only touch the lease fields; every
later ledger or report call recomputes from the new terms.
"""

from __future__ import annotations

import logging
from datetime import date, datetime
from decimal import Decimal
from typing import Any, Dict, Optional, Union

from pydantic import Field, field_validator

from ..billing import (
    BillingScheduleBuilder,
    BillingSnapshot,
    LeaseAgreement,
    LeaseTerms,
    TerminationRecord,
)
from ..core.primitives import (
    BillingSettings,
    ChargeTypeEnum,
    InvalidInputError,
    LeaseNotFoundError,
    LeaseStatusEnum,
    LeaseTypeEnum,
    Model,
    PaymentFrequencyEnum,
    ValidationMixin,
    to_date_only,
    to_decimal,
)
from .repositories import LeaseRepository, PropertyRepository

logger = logging.getLogger(__name__)


class CreateLeaseRequest(Model):
    """
    Input for ``LeaseLifecycleManager.create``.

    Required values are typed as optional here so that missing input is
    reported by the manager as an InvalidInputError with a single message.
    """

    unit_id: Optional[str] = None
    tenant_id: Optional[str] = None
    organization_id: Optional[str] = None
    landlord_id: Optional[str] = None
    property_id: Optional[str] = None

    start_date: Optional[date] = None
    end_date: Optional[date] = None
    amount: Optional[Decimal] = None

    lease_type: Optional[LeaseTypeEnum] = None
    charge_type: Optional[ChargeTypeEnum] = None
    payment_frequency: Optional[PaymentFrequencyEnum] = None
    first_payment_date: Optional[date] = None
    status: Optional[LeaseStatusEnum] = None

    terms: Dict[str, Any] = Field(default_factory=dict)
    metadata: Dict[str, Any] = Field(default_factory=dict)

    @field_validator("start_date", "end_date", "first_payment_date", mode="before")
    @classmethod
    def normalize_dates(cls, v: Any) -> Any:
        if isinstance(v, (date, datetime)):
            return to_date_only(v)
        return v


class LeaseLifecycleManager:
    """
    Validates and applies lease mutations through the lease repository.

    Args:
        leases: Lease repository used for reads and writes
        properties: Optional property lookup, used to resolve or cross-check
            the owning organization when a request names a property
        settings: Billing settings shared with the schedule builder
        schedule_builder: Optional builder (defaults to one over ``settings``)
    """

    def __init__(
        self,
        leases: LeaseRepository,
        properties: Optional[PropertyRepository] = None,
        settings: Optional[BillingSettings] = None,
        schedule_builder: Optional[BillingScheduleBuilder] = None,
    ):
        self.leases = leases
        self.properties = properties
        self.settings = settings or BillingSettings()
        self.schedule_builder = schedule_builder or BillingScheduleBuilder(self.settings)

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def get(self, lease_id: str) -> LeaseAgreement:
        """Fetch a lease or raise LeaseNotFoundError."""
        lease = self.leases.find_lease(lease_id)
        if lease is None:
            raise LeaseNotFoundError(lease_id)
        return lease

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------

    def create(self, request: Union[CreateLeaseRequest, Dict[str, Any]]) -> LeaseAgreement:
        """
        Validate a new lease, snapshot its billing metadata and persist it.

        Raises:
            InvalidInputError: On missing references or dates, a non-positive
                amount, ``end_date <= start_date``, or an organization that
                does not own the named property
        """
        if not isinstance(request, CreateLeaseRequest):
            request = CreateLeaseRequest(**request)
        logger.info(f"Creating lease for unit {request.unit_id}, tenant {request.tenant_id}")

        values = request.model_dump()
        values["organization_id"] = self._resolve_organization(request)

        ValidationMixin.validate_required(
            values,
            ["unit_id", "tenant_id", "organization_id"],
            "unit_id, tenant_id and organization_id are required",
        )
        ValidationMixin.validate_required(
            values, ["start_date", "end_date"], "start_date and end_date are required"
        )
        ValidationMixin.validate_positive_amount(values, "amount")
        ValidationMixin.validate_date_ordering(values, "start_date", "end_date")

        lease_type = request.lease_type or LeaseTypeEnum.FIXED_TERM
        charge_type = request.charge_type or ChargeTypeEnum.RENT
        frequency = request.payment_frequency or self.settings.default_frequency
        first_payment_date = request.first_payment_date or request.start_date

        snapshot = self.billing_snapshot(
            start_date=request.start_date,
            end_date=request.end_date,
            first_payment_date=first_payment_date,
            frequency=frequency,
            lease_type=lease_type,
            charge_type=charge_type,
        )
        attributes = {k: v for k, v in request.terms.items() if k != "billing"}

        lease_fields: Dict[str, Any] = dict(
            unit_id=request.unit_id,
            tenant_id=request.tenant_id,
            organization_id=values["organization_id"],
            landlord_id=request.landlord_id,
            property_id=request.property_id,
            start_date=request.start_date,
            end_date=request.end_date,
            amount=to_decimal(request.amount),
            lease_type=lease_type,
            charge_type=charge_type,
            payment_frequency=frequency,
            first_payment_date=first_payment_date,
            terms=LeaseTerms(billing=snapshot, attributes=attributes),
            metadata=request.metadata,
        )
        if request.status is not None:
            lease_fields["status"] = request.status

        created = self.leases.create_lease(LeaseAgreement(**lease_fields))
        logger.info(f"Lease {created.id} created; next due {snapshot.next_due_date}")
        return created

    def extend(
        self,
        lease_id: str,
        new_end_date: Union[date, datetime],
        amount: Optional[Union[Decimal, int, float, str]] = None,
    ) -> LeaseAgreement:
        """
        Push the end date out, optionally changing the amount going forward.

        Past periods are unaffected in the sense that nothing is stored: the
        schedule is rebuilt on demand from the updated lease.

        Raises:
            LeaseNotFoundError: Unknown lease id
            InvalidInputError: ``new_end_date`` not strictly after the current
                end date, or a non-positive amount
        """
        lease = self.get(lease_id)
        new_end = to_date_only(new_end_date)
        if new_end <= lease.end_date:
            raise InvalidInputError("New end date must be after current end date")

        patch: Dict[str, Any] = {"end_date": new_end}
        if amount is not None:
            ValidationMixin.validate_positive_amount({"amount": amount}, "amount")
            patch["amount"] = to_decimal(amount)

        self.leases.update_lease(lease_id, patch)
        logger.info(f"Lease {lease_id} extended from {lease.end_date} to {new_end}")
        return self.get(lease_id)

    def terminate(
        self,
        lease_id: str,
        termination_date: Union[date, datetime],
        reason: Optional[str] = None,
    ) -> LeaseAgreement:
        """
        End a lease early.

        The end date becomes ``min(current end, termination_date)``; the
        status becomes TERMINATED and ``terms.termination`` records the
        reason and date. Periods already due are not reversed.

        Raises:
            LeaseNotFoundError: Unknown lease id
            InvalidInputError: Termination on or before the lease start date
        """
        lease = self.get(lease_id)
        term_date = to_date_only(termination_date)
        if term_date <= lease.start_date:
            raise InvalidInputError("Termination date must be after the lease start date")

        new_end = min(term_date, lease.end_date)
        terms = lease.terms.model_copy(
            update={"termination": TerminationRecord(reason=reason, at=term_date)}
        )
        self.leases.update_lease(
            lease_id,
            {"status": LeaseStatusEnum.TERMINATED, "end_date": new_end, "terms": terms},
        )
        logger.info(f"Lease {lease_id} terminated effective {new_end}")
        return self.get(lease_id)

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def billing_snapshot(
        self,
        start_date: date,
        end_date: date,
        first_payment_date: date,
        frequency: PaymentFrequencyEnum,
        lease_type: LeaseTypeEnum = LeaseTypeEnum.FIXED_TERM,
        charge_type: ChargeTypeEnum = ChargeTypeEnum.RENT,
    ) -> BillingSnapshot:
        """Billing metadata stored in ``terms.billing`` at creation."""
        builder = self.schedule_builder
        return BillingSnapshot(
            lease_type=lease_type,
            charge_type=charge_type,
            payment_frequency=frequency,
            first_payment_date=first_payment_date,
            next_due_date=builder.recurrence.first_due_on_or_after(
                start_date, first_payment_date, frequency
            ),
            billing_cycle_day=builder.billing_cycle_day(first_payment_date, frequency),
            estimated_periods=builder.estimate_periods(first_payment_date, end_date, frequency),
        )

    def _resolve_organization(self, request: CreateLeaseRequest) -> Optional[str]:
        if not request.property_id or self.properties is None:
            return request.organization_id

        derived = self.properties.find_property_organization(request.property_id)
        if derived and request.organization_id and derived != request.organization_id:
            raise InvalidInputError("organization_id does not match the property organization")
        return derived or request.organization_id
