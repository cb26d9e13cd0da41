################################################################################
#
#  Copyright (C) 2026 Garrett Brown
#  This file is part of OASIS - https://github.com/eigendude/OASIS
#
#  SPDX-License-Identifier: Apache-2.0
#  See DOCS/LICENSING.md for more information.
#
################################################################################

"""Policies for serving query times outside a buffer's sample range."""

from __future__ import annotations

from enum import Enum


class ExtrapolationPolicy(str, Enum):
    """How a history buffer answers queries before or after its samples."""

    # Fail the lookup
    DISALLOW = "disallow"
    # Return the nearest boundary sample
    CLAMP = "clamp"
    # Project from the boundary samples, up to a maximum duration
    LINEAR = "linear"

    @classmethod
    def parse(cls, value: "str | ExtrapolationPolicy") -> "ExtrapolationPolicy":
        """Return the policy matching a name, ignoring case."""
        if isinstance(value, ExtrapolationPolicy):
            return value
        if not isinstance(value, str):
            raise ValueError("extrapolation policy must be a str")
        return cls(value.strip().lower())
