# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

"""
Error taxonomy for the billing engine.

Input problems and unknown identifiers are the only conditions raised to
callers. Safety limits (the schedule period cap, dropped excess payments)
are logged and never raised.
"""


class LeaseLedgerError(Exception):
    """Base class for all errors raised by leaseledger."""


class InvalidInputError(LeaseLedgerError, ValueError):
    """Caller supplied data that cannot be processed (never retried)."""


class LeaseNotFoundError(LeaseLedgerError, LookupError):
    """No lease exists for the requested identifier."""

    def __init__(self, lease_id: str):
        super().__init__(f"Lease {lease_id} not found")
        self.lease_id = lease_id


class PaymentTypeNotFoundError(LeaseLedgerError, LookupError):
    """No payment type exists for the requested code."""

    def __init__(self, code: str):
        super().__init__(f"Payment type '{code}' not found")
        self.code = code
