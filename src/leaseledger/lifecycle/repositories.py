# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

"""
Collaborator interfaces owned by the surrounding persistence layer.

The engine reads leases and payments through these interfaces and writes
only through ``LeaseRepository.create_lease`` / ``update_lease``. Concrete
implementations (ORM, HTTP client, in-memory fake) are injected by the
caller.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional

from ..billing import LeaseAgreement, PaymentRecord, PaymentType


class LeaseRepository(ABC):
    """Lease storage."""

    @abstractmethod
    def find_lease(self, lease_id: str) -> Optional[LeaseAgreement]:
        """Return the lease, or None when the id is unknown."""

    @abstractmethod
    def find_leases_by_property(self, property_id: str) -> List[LeaseAgreement]:
        """Every lease whose unit belongs to the property."""

    @abstractmethod
    def create_lease(self, lease: LeaseAgreement) -> LeaseAgreement:
        """Persist a new lease and return the stored version."""

    @abstractmethod
    def update_lease(self, lease_id: str, patch: Dict[str, Any]) -> LeaseAgreement:
        """Apply a partial update keyed by LeaseAgreement field names."""


class PaymentRepository(ABC):
    """Payment storage."""

    @abstractmethod
    def find_payments_by_lease(self, lease_id: str) -> List[PaymentRecord]:
        """Payments recorded against the lease, in any order."""


class PaymentTypeRepository(ABC):
    """Payment type lookup."""

    @abstractmethod
    def find_payment_type_by_code(self, code: str) -> Optional[PaymentType]:
        """Return the payment type for ``code``, or None."""


class PropertyRepository(ABC):
    """Property ownership lookup."""

    @abstractmethod
    def find_property_organization(self, property_id: str) -> Optional[str]:
        """Organization id owning the property, or None when unknown."""
