################################################################################
#
#  Copyright (C) 2026 Garrett Brown
#  This file is part of OASIS - https://github.com/eigendude/OASIS
#
#  SPDX-License-Identifier: Apache-2.0
#  See DOCS/LICENSING.md for more information.
#
################################################################################
"""Numeric tolerances and validation helpers for transform math."""

from __future__ import annotations

import numpy as np
from numpy.typing import NDArray


class NumericConstants:
    """Tolerances used by the rotation and transform utilities."""

    # Smallest norm accepted for a quaternion before normalization
    EPS: float = 1e-12
    # Below this half-angle sine, slerp returns the start rotation
    SLERP_EPS: float = 1e-9
    # Default absolute tolerance for approximate comparisons
    ATOL: float = 1e-9


def assert_finite(x: NDArray[np.float64], name: str) -> None:
    """Raise ValueError when the array contains non-finite values."""
    if not np.all(np.isfinite(x)):
        raise ValueError(f"{name} must be finite")


def as_vector3(x: NDArray[np.float64] | list[float], name: str) -> NDArray[np.float64]:
    """Coerce a value to a finite float64 array with shape (3,)."""
    vec: NDArray[np.float64] = np.asarray(x, dtype=float)
    if vec.shape != (3,):
        raise ValueError(f"{name} must be shape (3,)")
    assert_finite(vec, name)
    return vec
