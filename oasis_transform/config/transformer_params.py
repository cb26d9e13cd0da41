################################################################################
#
#  Copyright (C) 2026 Garrett Brown
#  This file is part of OASIS - https://github.com/eigendude/OASIS
#
#  SPDX-License-Identifier: Apache-2.0
#  See DOCS/LICENSING.md for more information.
#
################################################################################

"""Structured configuration schema for the transformer core."""

from __future__ import annotations

import math
from dataclasses import dataclass
from dataclasses import fields
from dataclasses import replace
from typing import Any
from typing import Mapping

from oasis_transform.transform_types.extrapolation_policy import ExtrapolationPolicy


# Retained time span of each frame's history in seconds
CACHE_TIME_SEC: float = 10.0
# Policy for query times outside the buffered range
EXTRAPOLATION_POLICY: str = ExtrapolationPolicy.DISALLOW.value
# Maximum distance beyond the buffered range served by linear extrapolation
MAX_EXTRAPOLATION_SEC: float = 0.5
# Default deadline for asynchronous requests in seconds
REQUEST_TIMEOUT_SEC: float = 5.0
# Maximum number of samples retained per frame
MAX_BUFFER_LENGTH: int = 1000


class TransformerParamsError(Exception):
    """Raised when transformer parameter validation fails."""


def _require_positive(value: float, name: str) -> None:
    """Require a finite, positive value."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise TransformerParamsError(f"{name} must be a number")
    if not math.isfinite(value) or value <= 0.0:
        raise TransformerParamsError(f"{name} must be positive")


def _require_non_negative(value: float, name: str) -> None:
    """Require a finite, non-negative value."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise TransformerParamsError(f"{name} must be a number")
    if not math.isfinite(value) or value < 0.0:
        raise TransformerParamsError(f"{name} must be non-negative")


def _require_positive_int(value: int, name: str) -> None:
    """Require a positive integer value."""
    if isinstance(value, bool) or not isinstance(value, int):
        raise TransformerParamsError(f"{name} must be an int")
    if value <= 0:
        raise TransformerParamsError(f"{name} must be positive")


@dataclass(frozen=True)
class TransformerParams:
    """Complete configuration tree for a transformer core."""

    # Retained time span of each frame's history in seconds
    cache_time_sec: float = CACHE_TIME_SEC
    # Policy identifier: disallow, clamp or linear
    extrapolation_policy: str = EXTRAPOLATION_POLICY
    # Maximum linear extrapolation distance in seconds
    max_extrapolation_sec: float = MAX_EXTRAPOLATION_SEC
    # Default asynchronous request deadline in seconds
    request_timeout_sec: float = REQUEST_TIMEOUT_SEC
    # Maximum number of samples retained per frame
    max_buffer_length: int = MAX_BUFFER_LENGTH

    @classmethod
    def defaults(cls) -> TransformerParams:
        """Return the default parameter tree."""
        return cls()

    @classmethod
    def from_dict(cls, values: Mapping[str, Any]) -> TransformerParams:
        """Build parameters from a flat mapping, rejecting unknown keys."""
        if not isinstance(values, Mapping):
            raise TransformerParamsError("parameters must be a mapping")
        known: set[str] = {field.name for field in fields(cls)}
        unknown: list[str] = sorted(str(key) for key in values if key not in known)
        if unknown:
            raise TransformerParamsError(f"Unknown parameters: {', '.join(unknown)}")
        return cls(**dict(values))

    def validate(self) -> None:
        """Validate parameter invariants and constraints."""
        _require_positive(self.cache_time_sec, "cache_time_sec")
        _require_non_negative(self.max_extrapolation_sec, "max_extrapolation_sec")
        _require_positive(self.request_timeout_sec, "request_timeout_sec")
        _require_positive_int(self.max_buffer_length, "max_buffer_length")
        try:
            ExtrapolationPolicy.parse(self.extrapolation_policy)
        except ValueError as exc:
            raise TransformerParamsError(
                "extrapolation_policy must be disallow, clamp or linear"
            ) from exc

    def replace(self, **overrides: Any) -> TransformerParams:
        """Return a modified copy of the parameters."""
        return replace(self, **overrides)

    def as_nested_dict(self) -> dict[str, Any]:
        """Return a dict representation for debugging and serialization."""
        return {field.name: getattr(self, field.name) for field in fields(self)}
