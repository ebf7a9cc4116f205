# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

from __future__ import annotations

from datetime import date, datetime, time, timezone
from typing import Any, Dict, Optional
from uuid import uuid4

from pydantic import Field, field_validator

from ..core.primitives import Model, PositiveDecimal


class PaymentRecord(Model):
    """
    An already-confirmed payment against exactly one lease.

    The engine never judges validity; it only consumes ``amount`` and
    ``paid_at``. Provider details stay behind ``transaction_id`` and
    ``metadata``.
    """

    id: str = Field(default_factory=lambda: str(uuid4()))
    lease_id: str
    tenant_id: Optional[str] = None
    organization_id: Optional[str] = None
    type_code: Optional[str] = None
    transaction_id: Optional[str] = None

    amount: PositiveDecimal
    currency: str = Field(default="KES", min_length=3, max_length=3)
    paid_at: datetime
    metadata: Dict[str, Any] = Field(default_factory=dict)

    @field_validator("paid_at", mode="before")
    @classmethod
    def promote_date(cls, v: Any) -> Any:
        """Treat a bare date as midnight of that day."""
        if isinstance(v, date) and not isinstance(v, datetime):
            return datetime.combine(v, time.min)
        return v

    @field_validator("paid_at")
    @classmethod
    def to_naive_utc(cls, v: datetime) -> datetime:
        """
        Store ``paid_at`` naive.

        Timezone-aware values are converted to UTC and their tzinfo dropped,
        so every payment of a lease sorts on the same clock.
        """
        if v.tzinfo is not None:
            return v.astimezone(timezone.utc).replace(tzinfo=None)
        return v

    @property
    def paid_on(self) -> date:
        """Calendar day of the payment, used for as-of and month filters."""
        return self.paid_at.date()


class PaymentType(Model):
    """
    Lookup entry for a payment type code (RENT, DEPOSIT, LATE_FEE, ...).

    A type without ``organization_id`` is global and permitted everywhere.
    """

    code: str = Field(min_length=1, max_length=32)
    name: str = Field(min_length=1, max_length=64)
    description: Optional[str] = None
    organization_id: Optional[str] = None

    @property
    def is_global(self) -> bool:
        return self.organization_id is None

    def is_permitted_for(self, organization_id: Optional[str]) -> bool:
        """True when this type may be used for payments of ``organization_id``."""
        return self.is_global or self.organization_id == organization_id
