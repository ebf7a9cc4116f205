# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

"""
leaseledger - Lease Billing Schedule and Payment Ledger Engine

Derives billing schedules from lease terms, allocates payments FIFO into a
per-lease ledger, and produces arrears aging and monthly rent roll reports.
Schedules and reports are always recomputed from the stored lease and
payment data; nothing derived is persisted.

Key Entry Points:
- leaseledger.analysis.LeaseBillingEngine - ledger and report operations
- leaseledger.lifecycle.LeaseLifecycleManager - create/extend/terminate
- leaseledger.billing.* - lease, payment and schedule models
- leaseledger.reporting.* - aging and rent roll reports

Example Usage:
    ```python
    from leaseledger.analysis import LeaseBillingEngine

    engine = LeaseBillingEngine(leases=lease_repo, payments=payment_repo)
    ledger = engine.get_lease_ledger(lease_id)
    print(f"Outstanding: {ledger.totals.outstanding}")
    ```
"""

import importlib
import logging

logging.getLogger(__name__).addHandler(logging.NullHandler())


# Public API surface (lazy-loaded on first attribute access)
__all__ = [  # noqa: F822 - lazy loading
    "analysis",
    "billing",
    "core",
    "lifecycle",
    "reporting",
]


_LAZY_MODULES = {
    "analysis": "leaseledger.analysis",
    "billing": "leaseledger.billing",
    "core": "leaseledger.core",
    "lifecycle": "leaseledger.lifecycle",
    "reporting": "leaseledger.reporting",
}


def __getattr__(name: str):
    module_path = _LAZY_MODULES.get(name)
    if module_path is None:
        raise AttributeError(f"module 'leaseledger' has no attribute '{name}'")
    module = importlib.import_module(module_path)
    globals()[name] = module
    return module
