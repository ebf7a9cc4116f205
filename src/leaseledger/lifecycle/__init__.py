# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

"""
Lease lifecycle: collaborator interfaces and the create/extend/terminate
manager.
"""

from .manager import CreateLeaseRequest, LeaseLifecycleManager
from .repositories import (
    LeaseRepository,
    PaymentRepository,
    PaymentTypeRepository,
    PropertyRepository,
)

__all__ = [
    "CreateLeaseRequest",
    "LeaseLifecycleManager",
    "LeaseRepository",
    "PaymentRepository",
    "PaymentTypeRepository",
    "PropertyRepository",
]
