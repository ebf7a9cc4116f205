# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

"""
Test utilities and fixtures for leaseledger testing.

Provides in-memory repositories and small factories so tests can build
leases and payments without a persistence layer.
"""

from __future__ import annotations

from datetime import date, datetime
from decimal import Decimal
from typing import Any, Dict, List, Optional, Union

import pytest

from leaseledger.analysis import LeaseBillingEngine
from leaseledger.billing import LeaseAgreement, PaymentRecord, PaymentType
from leaseledger.core.primitives import PaymentFrequencyEnum
from leaseledger.lifecycle import (
    LeaseRepository,
    PaymentRepository,
    PaymentTypeRepository,
    PropertyRepository,
)


# Factories
def make_lease(
    start: date = date(2024, 1, 1),
    end: date = date(2024, 12, 31),
    amount: Union[Decimal, str, int] = "1000",
    frequency: PaymentFrequencyEnum = PaymentFrequencyEnum.MONTHLY,
    first_payment_date: Optional[date] = None,
    **overrides: Any,
) -> LeaseAgreement:
    """
    Create a lease with sensible defaults.

    Example:
        >>> lease = make_lease(end=date(2024, 4, 1))
        >>> lease.payment_frequency
        <PaymentFrequencyEnum.MONTHLY: 'monthly'>
    """
    fields: Dict[str, Any] = dict(
        unit_id="unit-1",
        tenant_id="tenant-1",
        organization_id="org-1",
        property_id="prop-1",
        start_date=start,
        end_date=end,
        amount=Decimal(str(amount)),
        payment_frequency=frequency,
        first_payment_date=first_payment_date,
    )
    fields.update(overrides)
    return LeaseAgreement(**fields)


def make_payment(
    lease: LeaseAgreement,
    amount: Union[Decimal, str, int],
    paid_at: Union[date, datetime],
    **overrides: Any,
) -> PaymentRecord:
    fields: Dict[str, Any] = dict(
        lease_id=lease.id,
        tenant_id=lease.tenant_id,
        organization_id=lease.organization_id,
        amount=Decimal(str(amount)),
        paid_at=paid_at,
    )
    fields.update(overrides)
    return PaymentRecord(**fields)


# In-memory repositories
class InMemoryLeaseRepository(LeaseRepository):
    def __init__(self, leases: Optional[List[LeaseAgreement]] = None):
        self.leases: Dict[str, LeaseAgreement] = {}
        for lease in leases or []:
            self.leases[lease.id] = lease

    def find_lease(self, lease_id: str) -> Optional[LeaseAgreement]:
        return self.leases.get(lease_id)

    def find_leases_by_property(self, property_id: str) -> List[LeaseAgreement]:
        return [l for l in self.leases.values() if l.property_id == property_id]

    def create_lease(self, lease: LeaseAgreement) -> LeaseAgreement:
        self.leases[lease.id] = lease
        return lease

    def update_lease(self, lease_id: str, patch: Dict[str, Any]) -> LeaseAgreement:
        # model_copy skips validation, so re-validate the patched values
        current = self.leases[lease_id]
        updated = LeaseAgreement.model_validate({**dict(current), **patch})
        self.leases[lease_id] = updated
        return updated


class InMemoryPaymentRepository(PaymentRepository):
    def __init__(self, payments: Optional[List[PaymentRecord]] = None):
        self.payments: List[PaymentRecord] = list(payments or [])

    def add(self, payment: PaymentRecord) -> PaymentRecord:
        self.payments.append(payment)
        return payment

    def find_payments_by_lease(self, lease_id: str) -> List[PaymentRecord]:
        return [p for p in self.payments if p.lease_id == lease_id]


class InMemoryPaymentTypeRepository(PaymentTypeRepository):
    def __init__(self, payment_types: Optional[List[PaymentType]] = None):
        self.payment_types = {pt.code: pt for pt in payment_types or []}

    def find_payment_type_by_code(self, code: str) -> Optional[PaymentType]:
        return self.payment_types.get(code)


class InMemoryPropertyRepository(PropertyRepository):
    def __init__(self, organizations: Optional[Dict[str, str]] = None):
        self.organizations = dict(organizations or {})

    def find_property_organization(self, property_id: str) -> Optional[str]:
        return self.organizations.get(property_id)


# Fixtures
@pytest.fixture
def lease_repo() -> InMemoryLeaseRepository:
    return InMemoryLeaseRepository()


@pytest.fixture
def payment_repo() -> InMemoryPaymentRepository:
    return InMemoryPaymentRepository()


@pytest.fixture
def payment_type_repo() -> InMemoryPaymentTypeRepository:
    return InMemoryPaymentTypeRepository(
        [
            PaymentType(code="RENT", name="Rent"),
            PaymentType(code="LATE_FEE", name="Late fee", organization_id="org-1"),
        ]
    )


@pytest.fixture
def property_repo() -> InMemoryPropertyRepository:
    return InMemoryPropertyRepository({"prop-1": "org-1", "prop-2": "org-2"})


@pytest.fixture
def engine(lease_repo, payment_repo, payment_type_repo, property_repo) -> LeaseBillingEngine:
    return LeaseBillingEngine(
        leases=lease_repo,
        payments=payment_repo,
        payment_types=payment_type_repo,
        properties=property_repo,
    )
