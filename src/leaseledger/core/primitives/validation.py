# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

"""
Reusable validation utilities shared by the models and the lifecycle manager.

This module provides standardized validators for:
- Required references (ids that must be present)
- Date ordering (end strictly after start)
- Positive amounts
- Date-only normalization of datetime input
"""

from __future__ import annotations

from datetime import date, datetime
from decimal import Decimal, InvalidOperation
from typing import Any, Dict, Optional, Sequence, Union

from .errors import InvalidInputError


class ValidationMixin:
    """
    Mixin class providing reusable validation methods.

    Every check raises InvalidInputError, which is also a ValueError so that
    pydantic validators can call these helpers directly.
    """

    @classmethod
    def validate_required(
        cls,
        data: Dict[str, Any],
        fields: Sequence[str],
        error_message: Optional[str] = None,
    ) -> Dict[str, Any]:
        """
        Validate that every named field is present and non-empty.

        Args:
            data: Input data dictionary
            fields: Field names that must be provided
            error_message: Custom error message

        Returns:
            Validated data dictionary

        Raises:
            InvalidInputError: If any field is missing, None or an empty string
        """
        missing = [name for name in fields if data.get(name) in (None, "")]
        if missing:
            msg = error_message or f"{', '.join(missing)} required"
            raise InvalidInputError(msg)
        return data

    @classmethod
    def validate_date_ordering(
        cls,
        data: Dict[str, Any],
        start_field: str,
        end_field: str,
        error_message: Optional[str] = None,
    ) -> Dict[str, Any]:
        """
        Validate that the end date is strictly after the start date.

        Args:
            data: Input data dictionary
            start_field: Name of start date field
            end_field: Name of end date field
            error_message: Custom error message

        Returns:
            Validated data dictionary

        Raises:
            InvalidInputError: If the end date is not after the start date
        """
        start_date = data.get(start_field)
        end_date = data.get(end_field)

        if start_date is not None and end_date is not None:
            if to_date_only(end_date) <= to_date_only(start_date):
                msg = error_message or f"{end_field} must be after {start_field}"
                raise InvalidInputError(msg)

        return data

    @classmethod
    def validate_positive_amount(
        cls,
        data: Dict[str, Any],
        field: str,
        error_message: Optional[str] = None,
    ) -> Dict[str, Any]:
        """
        Validate that a monetary field parses to a number greater than zero.

        Raises:
            InvalidInputError: If the value is missing, unparseable or not positive
        """
        msg = error_message or f"{field} must be a positive number"
        value = data.get(field)
        if value is None or isinstance(value, bool):
            raise InvalidInputError(msg)
        try:
            amount = to_decimal(value)
        except (InvalidOperation, TypeError, ValueError) as e:
            raise InvalidInputError(msg) from e
        if not amount.is_finite() or amount <= 0:
            raise InvalidInputError(msg)
        return data


def to_date_only(value: Union[date, datetime, str]) -> date:
    """
    Normalize a date-like value to a calendar date.

    Datetimes are truncated to their date; ISO strings are parsed. Plain
    dates pass through unchanged.
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        try:
            return datetime.fromisoformat(value).date()
        except ValueError as e:
            raise InvalidInputError(f"Invalid date: {value!r}") from e
    raise InvalidInputError(f"Expected a date, got {type(value).__name__}")


def to_decimal(value: Union[Decimal, int, float, str]) -> Decimal:
    """Convert a monetary value to Decimal, going through str for floats."""
    if isinstance(value, Decimal):
        return value
    if isinstance(value, float):
        return Decimal(str(value))
    return Decimal(value)
