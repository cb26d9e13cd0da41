################################################################################
#
#  Copyright (C) 2026 Garrett Brown
#  This file is part of OASIS - https://github.com/eigendude/OASIS
#
#  SPDX-License-Identifier: Apache-2.0
#  See DOCS/LICENSING.md for more information.
#
################################################################################

"""Timestamp conventions for transform samples and queries."""

from __future__ import annotations

import math


# Query timestamp that selects the newest available data
TIME_LATEST: int = 0


class TimeBaseError(Exception):
    """Raised when time conversions or validation fail."""


def sec_to_ns(t_sec: float) -> int:
    """Convert seconds to integer nanoseconds with deterministic rounding.

    Rounds to the nearest integer nanosecond using Python's built-in round
    (ties-to-even) to keep conversion stable across runs.
    """
    if not math.isfinite(t_sec):
        raise TimeBaseError("Seconds must be finite")
    if t_sec < 0.0:
        raise TimeBaseError("Seconds must be non-negative")
    return int(round(t_sec * 1e9))


def ns_to_sec(t_ns: int) -> float:
    """Convert integer nanoseconds to seconds."""
    if t_ns < 0:
        raise TimeBaseError("Nanoseconds must be non-negative")
    return float(t_ns) / 1e9


def validate_stamp(t_ns: int, name: str = "t_ns") -> int:
    """Return t_ns if it is a non-negative int, raising TimeBaseError otherwise."""
    if not isinstance(t_ns, int) or isinstance(t_ns, bool):
        raise TimeBaseError(f"{name} must be an int")
    if t_ns < 0:
        raise TimeBaseError(f"{name} must be non-negative")
    return t_ns


def is_latest(t_ns: int) -> bool:
    """Return True if the query timestamp requests the newest data."""
    return t_ns == TIME_LATEST
