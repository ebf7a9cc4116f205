# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

from __future__ import annotations

from datetime import date, datetime, timedelta, timezone
from decimal import Decimal

import pytest
from pydantic import ValidationError

from leaseledger.billing import (
    BillingPeriod,
    LeaseAgreement,
    LeaseTerms,
    PaymentRecord,
    PaymentType,
)
from leaseledger.core.primitives import LeaseStatusEnum, LeaseTypeEnum
from tests.conftest import make_lease


def test_lease_defaults():
    lease = make_lease()
    assert lease.id
    assert lease.status == LeaseStatusEnum.PENDING
    assert lease.lease_type == LeaseTypeEnum.FIXED_TERM
    assert lease.terms == LeaseTerms()
    assert lease.billing_anchor == lease.start_date
    assert not lease.is_terminated


def test_lease_ids_are_unique():
    assert make_lease().id != make_lease().id


def test_lease_datetimes_are_truncated():
    lease = make_lease(start=datetime(2024, 1, 1, 15, 30), end=datetime(2024, 6, 1, 9))
    assert lease.start_date == date(2024, 1, 1)
    assert lease.end_date == date(2024, 6, 1)


def test_lease_anchor_prefers_first_payment_date():
    lease = make_lease(first_payment_date=date(2024, 1, 5))
    assert lease.billing_anchor == date(2024, 1, 5)


@pytest.mark.parametrize("end", [date(2024, 1, 1), date(2023, 6, 1)])
def test_lease_end_must_follow_start(end):
    with pytest.raises(ValidationError, match="end_date must be after start_date"):
        make_lease(start=date(2024, 1, 1), end=end)


@pytest.mark.parametrize("amount", ["0", "-1"])
def test_lease_amount_must_be_positive(amount):
    with pytest.raises(ValidationError):
        make_lease(amount=amount)


def test_lease_is_frozen():
    lease = make_lease()
    with pytest.raises(ValidationError):
        lease.amount = Decimal("5")


def test_payment_record_promotes_dates():
    payment = PaymentRecord(lease_id="l1", amount=Decimal("10"), paid_at=date(2024, 2, 1))
    assert payment.paid_at == datetime(2024, 2, 1, 0, 0)
    assert payment.paid_on == date(2024, 2, 1)
    assert payment.currency == "KES"


def test_payment_record_rejects_non_positive_amount():
    with pytest.raises(ValidationError):
        PaymentRecord(lease_id="l1", amount=Decimal("0"), paid_at=date(2024, 2, 1))


def test_payment_type_scope():
    global_type = PaymentType(code="RENT", name="Rent")
    scoped = PaymentType(code="FEE", name="Fee", organization_id="org-1")

    assert global_type.is_global
    assert global_type.is_permitted_for("anything")
    assert global_type.is_permitted_for(None)
    assert not scoped.is_global
    assert scoped.is_permitted_for("org-1")
    assert not scoped.is_permitted_for("org-2")


class TestBillingPeriod:
    def test_balance_defaults_to_amount_due(self):
        period = BillingPeriod(due_date=date(2024, 1, 1), amount_due=Decimal("1000"))
        assert period.amount_paid == 0
        assert period.balance == Decimal("1000")
        assert not period.is_settled

    def test_balance_derived_from_paid(self):
        period = BillingPeriod(
            due_date=date(2024, 1, 1), amount_due=Decimal("1000"), amount_paid=Decimal("400")
        )
        assert period.balance == Decimal("600")

    def test_overpayment_rejected(self):
        with pytest.raises(ValidationError, match="cannot exceed"):
            BillingPeriod(
                due_date=date(2024, 1, 1),
                amount_due=Decimal("1000"),
                amount_paid=Decimal("1000.01"),
                balance=Decimal("0"),
            )

    def test_inconsistent_balance_rejected(self):
        with pytest.raises(ValidationError, match="balance must equal"):
            BillingPeriod(
                due_date=date(2024, 1, 1),
                amount_due=Decimal("1000"),
                amount_paid=Decimal("100"),
                balance=Decimal("1000"),
            )


@pytest.mark.parametrize(
    "paid_at",
    [
        datetime(2024, 3, 1, 1, 30, tzinfo=timezone(timedelta(hours=3))),
        "2024-03-01T01:30:00+03:00",
        "2024-02-29T22:30:00Z",
    ],
)
def test_payment_record_aware_timestamps_stored_as_naive_utc(paid_at):
    payment = PaymentRecord(lease_id="l1", amount=Decimal("10"), paid_at=paid_at)
    assert payment.paid_at == datetime(2024, 2, 29, 22, 30)
    assert payment.paid_at.tzinfo is None
    assert payment.paid_on == date(2024, 2, 29)
