# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

"""
leaseledger Core Framework

Foundational primitives used by the billing, reporting and lifecycle layers.
"""

from . import primitives

__all__ = ["primitives"]
