# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

"""
Tests for FIFO payment allocation.
"""

from __future__ import annotations

import unittest
from datetime import date, datetime, timedelta, timezone
from decimal import Decimal

from leaseledger.billing import BillingScheduleBuilder, PaymentAllocator
from tests.conftest import make_lease, make_payment


class TestPaymentAllocator(unittest.TestCase):
    def setUp(self):
        self.lease = make_lease(start=date(2024, 1, 1), end=date(2024, 3, 31))
        self.schedule = BillingScheduleBuilder().build_schedule(self.lease)
        self.allocator = PaymentAllocator()

    def test_partial_payment_fills_oldest_first(self):
        payments = [
            make_payment(self.lease, "1000", date(2024, 1, 5)),
            make_payment(self.lease, "100", date(2024, 2, 10)),
        ]
        result = self.allocator.allocate(self.schedule, payments)

        jan, feb, mar = result.periods
        self.assertEqual(jan.amount_paid, Decimal("1000"))
        self.assertEqual(jan.balance, Decimal("0"))
        self.assertEqual(feb.amount_paid, Decimal("100"))
        self.assertEqual(feb.balance, Decimal("900"))
        self.assertEqual(mar.amount_paid, Decimal("0"))
        self.assertEqual(mar.balance, Decimal("1000"))

        self.assertEqual(result.totals.total_due, Decimal("3000"))
        self.assertEqual(result.totals.total_paid, Decimal("1100"))
        self.assertEqual(result.totals.outstanding, Decimal("1900"))

    def test_split_payment_spills_into_next_period(self):
        first = make_payment(self.lease, "400", date(2024, 1, 5))
        second = make_payment(self.lease, "700", date(2024, 2, 10))
        result = self.allocator.allocate(self.schedule, [first, second])

        jan, feb, mar = result.periods
        self.assertEqual(
            [(c.payment_id, c.amount) for c in jan.payments],
            [(first.id, Decimal("400")), (second.id, Decimal("600"))],
        )
        self.assertEqual(jan.balance, Decimal("0"))
        self.assertEqual(
            [(c.payment_id, c.amount) for c in feb.payments],
            [(second.id, Decimal("100"))],
        )
        self.assertEqual(feb.balance, Decimal("900"))
        self.assertEqual(mar.balance, Decimal("1000"))
        self.assertEqual(result.totals.total_paid, Decimal("1100"))
        self.assertEqual(result.totals.outstanding, Decimal("1900"))

    def test_mixed_naive_and_aware_timestamps(self):
        eat = timezone(timedelta(hours=3))
        naive = make_payment(self.lease, "400", date(2024, 1, 5))
        aware = make_payment(self.lease, "700", datetime(2024, 2, 10, 9, tzinfo=timezone.utc))
        # 02:00 at UTC+3 is 23:00 UTC on Jan 4, before the naive payment
        early = make_payment(self.lease, "50", datetime(2024, 1, 5, 2, tzinfo=eat))

        result = self.allocator.allocate(self.schedule, [aware, naive, early])

        self.assertEqual(early.paid_at, datetime(2024, 1, 4, 23, 0))
        self.assertIsNone(aware.paid_at.tzinfo)
        jan = result.periods[0]
        self.assertEqual(
            [c.payment_id for c in jan.payments], [early.id, naive.id, aware.id]
        )
        self.assertEqual(result.totals.total_paid, Decimal("1150"))

    def test_payments_sorted_chronologically(self):
        later = make_payment(self.lease, "500", datetime(2024, 2, 1, 9, 0))
        earlier = make_payment(self.lease, "1200", datetime(2024, 1, 2, 9, 0))
        result = self.allocator.allocate(self.schedule, [later, earlier])

        jan, feb, _ = result.periods
        self.assertEqual([c.payment_id for c in jan.payments], [earlier.id])
        self.assertEqual(
            [(c.payment_id, c.amount) for c in feb.payments],
            [(earlier.id, Decimal("200")), (later.id, Decimal("500"))],
        )

    def test_single_payment_spans_periods(self):
        payment = make_payment(self.lease, "2500", date(2024, 1, 1))
        result = self.allocator.allocate(self.schedule, [payment])

        self.assertEqual(
            [p.amount_paid for p in result.periods],
            [Decimal("1000"), Decimal("1000"), Decimal("500")],
        )
        self.assertTrue(result.periods[0].is_settled)
        self.assertFalse(result.periods[2].is_settled)

    def test_excess_is_dropped(self):
        with self.assertLogs("leaseledger.billing.allocation", level="DEBUG") as logs:
            result = self.allocator.allocate(
                self.schedule, [make_payment(self.lease, "3500", date(2024, 1, 1))]
            )

        self.assertEqual(result.totals.total_paid, Decimal("3000"))
        self.assertEqual(result.totals.outstanding, Decimal("0"))
        self.assertTrue(all(p.amount_paid <= p.amount_due for p in result.periods))
        self.assertIn("exceeds total due", logs.output[0])

    def test_prepayment_before_first_due(self):
        result = self.allocator.allocate(
            self.schedule, [make_payment(self.lease, "1000", date(2023, 12, 1))]
        )
        self.assertEqual(result.periods[0].amount_paid, Decimal("1000"))

    def test_conservation(self):
        payments = [
            make_payment(self.lease, amount, date(2024, 1, day))
            for day, amount in [(1, "333.33"), (2, "0.67"), (3, "1250"), (4, "16")]
        ]
        result = self.allocator.allocate(self.schedule, payments)

        paid = sum((p.amount_paid for p in result.periods), Decimal("0"))
        self.assertEqual(paid, Decimal("1600"))
        for period in result.periods:
            self.assertEqual(period.balance, period.amount_due - period.amount_paid)
            self.assertEqual(
                sum((c.amount for c in period.payments), Decimal("0")), period.amount_paid
            )

    def test_no_payments(self):
        result = self.allocator.allocate(self.schedule, [])
        self.assertEqual(result.totals.total_paid, Decimal("0"))
        self.assertEqual(result.totals.outstanding, Decimal("3000"))

    def test_empty_schedule(self):
        result = self.allocator.allocate([], [make_payment(self.lease, "10", date(2024, 1, 1))])
        self.assertEqual(result.periods, [])
        self.assertEqual(result.totals.total_due, Decimal("0"))
        self.assertEqual(result.totals.total_paid, Decimal("0"))

    def test_input_schedule_untouched(self):
        self.allocator.allocate(
            self.schedule, [make_payment(self.lease, "1000", date(2024, 1, 1))]
        )
        self.assertTrue(all(p.amount_paid == 0 for p in self.schedule))


def test_ledger_dataframe():
    lease = make_lease(start=date(2024, 1, 1), end=date(2024, 2, 1))
    schedule = BillingScheduleBuilder().build_schedule(lease)
    result = PaymentAllocator().allocate(
        schedule, [make_payment(lease, "1500", date(2024, 1, 3))]
    )

    df = result.to_dataframe()
    assert list(df.columns) == [
        "due_date",
        "amount_due",
        "amount_paid",
        "balance",
        "payment_count",
    ]
    assert len(df) == 2
    assert df["amount_paid"].tolist() == [Decimal("1000"), Decimal("500")]
    assert df["payment_count"].tolist() == [1, 1]
