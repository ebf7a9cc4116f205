# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

from __future__ import annotations

from datetime import date, datetime
from typing import Any, Dict, Optional
from uuid import uuid4

from pydantic import Field, field_validator, model_validator

from ..core.primitives import (
    ChargeTypeEnum,
    DayOfMonth,
    LeaseStatusEnum,
    LeaseTypeEnum,
    Model,
    PaymentFrequencyEnum,
    PositiveDecimal,
    PositiveInt,
    to_date_only,
)


def _new_id() -> str:
    return str(uuid4())


class BillingSnapshot(Model):
    """
    Billing metadata captured once when a lease is created.

    Downstream dashboards read these values without rebuilding the schedule.
    The snapshot is never refreshed by extend/terminate; consumers needing
    current figures should ask the engine.

    Attributes:
        lease_type: Lease type in force at creation
        charge_type: Charge type in force at creation
        payment_frequency: Recurrence used for the schedule
        first_payment_date: Anchor date for the recurrence
        next_due_date: First due date on or after the lease start
        billing_cycle_day: Anchor day-of-month for calendar frequencies,
            None for weekly/biweekly leases
        estimated_periods: Number of occurrences from the anchor to the end date
    """

    lease_type: LeaseTypeEnum
    charge_type: ChargeTypeEnum
    payment_frequency: PaymentFrequencyEnum
    first_payment_date: date
    next_due_date: date
    billing_cycle_day: Optional[DayOfMonth] = None
    estimated_periods: Optional[PositiveInt] = None


class TerminationRecord(Model):
    """Why and when a lease was terminated early."""

    reason: Optional[str] = None
    at: date


class LeaseTerms(Model):
    """
    Typed attribute bag attached to a lease.

    ``billing`` and ``termination`` have fixed sub-schemas; any other
    caller-provided keys live in ``attributes`` untouched.
    """

    billing: Optional[BillingSnapshot] = None
    termination: Optional[TerminationRecord] = None
    attributes: Dict[str, Any] = Field(default_factory=dict)


class LeaseAgreement(Model):
    """
    A lease as consumed by the billing engine.

    Relations to unit, tenant, landlord and organization are plain id
    references; the surrounding persistence layer owns those entities.
    ``property_id`` is a denormalized reference used to group leases by
    property.
    """

    id: str = Field(default_factory=_new_id)

    unit_id: str
    tenant_id: str
    organization_id: str
    landlord_id: Optional[str] = None
    property_id: Optional[str] = None

    start_date: date
    end_date: date

    amount: PositiveDecimal
    lease_type: LeaseTypeEnum = LeaseTypeEnum.FIXED_TERM
    charge_type: ChargeTypeEnum = ChargeTypeEnum.RENT
    payment_frequency: PaymentFrequencyEnum = PaymentFrequencyEnum.MONTHLY
    first_payment_date: Optional[date] = None

    status: LeaseStatusEnum = LeaseStatusEnum.PENDING
    terms: LeaseTerms = Field(default_factory=LeaseTerms)
    metadata: Dict[str, Any] = Field(default_factory=dict)

    @field_validator("start_date", "end_date", "first_payment_date", mode="before")
    @classmethod
    def normalize_dates(cls, v: Any) -> Any:
        """Strip the time component from datetime input."""
        if isinstance(v, (date, datetime)):
            return to_date_only(v)
        return v

    @model_validator(mode="after")
    def check_term(self) -> "LeaseAgreement":
        if self.end_date <= self.start_date:
            raise ValueError("end_date must be after start_date")
        return self

    @property
    def billing_anchor(self) -> date:
        """Recurrence anchor: first_payment_date, else start_date."""
        return self.first_payment_date or self.start_date

    @property
    def is_terminated(self) -> bool:
        return self.status == LeaseStatusEnum.TERMINATED
