# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

"""
Base reporting classes.

Reports are computed results, never persisted. They expose a pandas view for
export and a scaled view whose monetary columns are multiplied by a factor
(used for tax computations by downstream consumers).
"""

from __future__ import annotations

from abc import abstractmethod
from decimal import ROUND_HALF_UP, Decimal
from typing import Any, ClassVar, Dict, List, Optional, Sequence, Tuple, Union

import pandas as pd
from pydantic import Field

from ..billing import LeaseAgreement, PaymentRecord
from ..core.primitives import InvalidInputError, Model, ReportingSettings, to_decimal


class LeaseAccount(Model):
    """A lease together with every payment recorded against it."""

    lease: LeaseAgreement
    payments: List[PaymentRecord] = Field(default_factory=list)


AccountInput = Union[LeaseAccount, Tuple[LeaseAgreement, Sequence[PaymentRecord]]]


def as_account(item: AccountInput) -> LeaseAccount:
    if isinstance(item, LeaseAccount):
        return item
    lease, payments = item
    return LeaseAccount(lease=lease, payments=list(payments))


class TabularReport(Model):
    """
    Abstract base for row-oriented reports.

    Subclasses declare their column order and which columns hold money, and
    implement ``_records``. Reports only format data; all figures are
    computed by the analyzers that build them.
    """

    COLUMNS: ClassVar[Tuple[str, ...]] = ()
    MONEY_COLUMNS: ClassVar[Tuple[str, ...]] = ()

    settings: ReportingSettings = Field(default_factory=ReportingSettings, exclude=True)

    @abstractmethod
    def _records(self) -> List[Dict[str, Any]]:
        """Flat row dictionaries keyed by ``COLUMNS``."""

    def to_dataframe(self) -> pd.DataFrame:
        return pd.DataFrame(self._records(), columns=list(self.COLUMNS))

    def scaled(self, multiplier: Optional[Union[Decimal, float, str]] = None) -> pd.DataFrame:
        """
        DataFrame view with money columns multiplied by ``multiplier``.

        Defaults to ``ReportingSettings.tax_multiplier``. Results are rounded
        half-up to ``ReportingSettings.decimal_precision`` places.

        Raises:
            InvalidInputError: If the multiplier is not a positive number
        """
        factor = self.settings.tax_multiplier if multiplier is None else multiplier
        try:
            factor = to_decimal(factor)
        except (ArithmeticError, TypeError, ValueError) as e:
            raise InvalidInputError(f"Invalid multiplier: {multiplier!r}") from e
        if not factor.is_finite() or factor <= 0:
            raise InvalidInputError("multiplier must be a positive number")

        quantum = Decimal(1).scaleb(-self.settings.decimal_precision)
        records = []
        for record in self._records():
            scaled = dict(record)
            for column in self.MONEY_COLUMNS:
                scaled[column] = (to_decimal(record[column]) * factor).quantize(
                    quantum, rounding=ROUND_HALF_UP
                )
            records.append(scaled)
        return pd.DataFrame(records, columns=list(self.COLUMNS))
