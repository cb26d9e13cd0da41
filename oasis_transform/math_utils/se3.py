################################################################################
#
#  Copyright (C) 2026 Garrett Brown
#  This file is part of OASIS - https://github.com/eigendude/OASIS
#
#  SPDX-License-Identifier: Apache-2.0
#  See DOCS/LICENSING.md for more information.
#
################################################################################
"""SE(3) rigid-body transforms stored as a unit quaternion and translation."""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np
from numpy.typing import NDArray

from .quat import Quaternion
from .units import NumericConstants
from .units import as_vector3


@dataclass(frozen=True)
class SE3:
    """Rigid-body transform mapping child coordinates into parent coordinates.

    Attributes:
        q: Unit rotation quaternion, normalized on construction
        p: Translation of the child origin expressed in the parent frame
    """

    q: Quaternion
    p: NDArray[np.float64]

    def __post_init__(self) -> None:
        """Normalize the rotation and validate the translation."""
        if not isinstance(self.q, Quaternion):
            raise ValueError("q must be a Quaternion")
        object.__setattr__(self, "q", self.q.normalized())
        object.__setattr__(self, "p", as_vector3(self.p, "p"))

    @staticmethod
    def identity() -> "SE3":
        """Return the identity transform."""
        return SE3(Quaternion.identity(), np.zeros(3, dtype=float))

    @staticmethod
    def from_matrix4(T: NDArray[np.float64]) -> "SE3":
        """Create a transform from a homogeneous 4x4 matrix."""
        mat: NDArray[np.float64] = np.asarray(T, dtype=float)
        if mat.shape != (4, 4):
            raise ValueError("T must be shape (4, 4)")
        return SE3(Quaternion.from_matrix(mat[:3, :3]), mat[:3, 3])

    @property
    def R(self) -> NDArray[np.float64]:
        """Return the rotation matrix."""
        return self.q.as_matrix()

    def as_matrix4(self) -> NDArray[np.float64]:
        """Return the homogeneous 4x4 transform matrix."""
        mat: NDArray[np.float64] = np.eye(4, dtype=float)
        mat[:3, :3] = self.R
        mat[:3, 3] = self.p
        return mat

    def inverse(self) -> "SE3":
        """Return the inverse transform."""
        q_inv: Quaternion = self.q.inverse()
        p_inv: NDArray[np.float64] = -q_inv.rotate(self.p)
        return SE3(q_inv, p_inv)

    def __mul__(self, other: "SE3") -> "SE3":
        """Compose two transforms, applying other first."""
        q_new: Quaternion = self.q * other.q
        p_new: NDArray[np.float64] = self.q.rotate(other.p) + self.p
        return SE3(q_new, p_new)

    def transform_point(self, x: NDArray[np.float64]) -> NDArray[np.float64]:
        """Transform a point by rotation and translation."""
        return self.q.rotate(as_vector3(x, "x")) + self.p

    def transform_vector(self, v: NDArray[np.float64]) -> NDArray[np.float64]:
        """Transform a vector by rotation only."""
        return self.q.rotate(as_vector3(v, "v"))

    def almost_equal(self, other: "SE3", atol: float = NumericConstants.ATOL) -> bool:
        """Check approximate equality of rotation and translation."""
        if not np.allclose(self.p, other.p, atol=atol):
            return False
        return self.q.almost_equal(other.q, atol=atol)

    @staticmethod
    def interpolate(a: "SE3", b: "SE3", ratio: float) -> "SE3":
        """Blend two transforms, linear in translation and slerp in rotation.

        Ratios outside [0, 1] extrapolate along the same line and arc.
        """
        p: NDArray[np.float64] = a.p + (b.p - a.p) * float(ratio)
        q: Quaternion = Quaternion.slerp(a.q, b.q, float(ratio))
        return SE3(q, p)
