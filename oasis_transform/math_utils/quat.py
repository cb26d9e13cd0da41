################################################################################
#
#  Copyright (C) 2026 Garrett Brown
#  This file is part of OASIS - https://github.com/eigendude/OASIS
#
#  SPDX-License-Identifier: Apache-2.0
#  See DOCS/LICENSING.md for more information.
#
################################################################################
"""Unit quaternions for frame rotations, stored in wxyz order."""

from __future__ import annotations

import math
from dataclasses import dataclass

import numpy as np
from numpy.typing import NDArray

from .units import NumericConstants
from .units import as_vector3
from .units import assert_finite


def _skew(v: NDArray[np.float64]) -> NDArray[np.float64]:
    """Return the cross-product matrix of a 3-vector."""
    return np.array(
        [
            [0.0, -v[2], v[1]],
            [v[2], 0.0, -v[0]],
            [-v[1], v[0], 0.0],
        ],
        dtype=float,
    )


@dataclass(frozen=True)
class Quaternion:
    """Rotation quaternion with scalar part first.

    Attributes:
        wxyz: Components as a float64 array of shape (4,)
    """

    wxyz: NDArray[np.float64]

    def __post_init__(self) -> None:
        components: NDArray[np.float64] = np.asarray(self.wxyz, dtype=float)
        if components.shape != (4,):
            raise ValueError("wxyz must be shape (4,)")
        assert_finite(components, "wxyz")
        object.__setattr__(self, "wxyz", components)

    @property
    def w(self) -> float:
        """Scalar part."""
        return float(self.wxyz[0])

    @property
    def xyz(self) -> NDArray[np.float64]:
        """Vector part."""
        return self.wxyz[1:]

    @staticmethod
    def identity() -> "Quaternion":
        return Quaternion(np.array([1.0, 0.0, 0.0, 0.0], dtype=float))

    @staticmethod
    def from_wxyz(w: float, x: float, y: float, z: float) -> "Quaternion":
        return Quaternion(np.array([w, x, y, z], dtype=float))

    @staticmethod
    def _from_parts(w: float, xyz: NDArray[np.float64]) -> "Quaternion":
        return Quaternion(np.concatenate(([w], xyz)))

    @staticmethod
    def from_axis_angle(axis: NDArray[np.float64], angle_rad: float) -> "Quaternion":
        """Create the rotation of angle_rad about axis (right-hand rule)."""
        direction: NDArray[np.float64] = as_vector3(axis, "axis")
        length: float = float(np.linalg.norm(direction))
        if length < NumericConstants.EPS:
            raise ValueError("axis must be non-zero")
        half_angle: float = 0.5 * float(angle_rad)
        return Quaternion._from_parts(
            math.cos(half_angle), direction * (math.sin(half_angle) / length)
        )

    @staticmethod
    def from_matrix(R: NDArray[np.float64]) -> "Quaternion":
        """
        Create a quaternion from a rotation matrix

        Solves for whichever of w, x, y, z has the largest magnitude first,
        which keeps the division well conditioned for every rotation.
        """
        mat: NDArray[np.float64] = np.asarray(R, dtype=float)
        if mat.shape != (3, 3):
            raise ValueError("R must be shape (3, 3)")
        assert_finite(mat, "R")

        trace: float = float(np.trace(mat))
        pivot: int = int(np.argmax([trace, mat[0, 0], mat[1, 1], mat[2, 2]]))

        if pivot == 0:
            w: float = 0.5 * math.sqrt(max(0.0, 1.0 + trace))
            scale: float = 0.25 / w
            xyz: NDArray[np.float64] = scale * np.array(
                [
                    mat[2, 1] - mat[1, 2],
                    mat[0, 2] - mat[2, 0],
                    mat[1, 0] - mat[0, 1],
                ]
            )
            return Quaternion._from_parts(w, xyz).normalized()

        # Cyclic axis order starting at the dominant vector component
        i: int = pivot - 1
        j: int = (i + 1) % 3
        k: int = (i + 2) % 3

        xyz = np.zeros(3, dtype=float)
        xyz[i] = 0.5 * math.sqrt(max(0.0, 1.0 + 2.0 * mat[i, i] - trace))
        scale = 0.25 / xyz[i]
        xyz[j] = scale * (mat[j, i] + mat[i, j])
        xyz[k] = scale * (mat[k, i] + mat[i, k])
        w = scale * (mat[k, j] - mat[j, k])
        return Quaternion._from_parts(w, xyz).normalized()

    def as_matrix(self) -> NDArray[np.float64]:
        """Return the equivalent 3x3 rotation matrix."""
        unit: Quaternion = self.normalized()
        w: float = unit.w
        v: NDArray[np.float64] = unit.xyz
        return (
            (w * w - float(v @ v)) * np.eye(3)
            + 2.0 * np.outer(v, v)
            + 2.0 * w * _skew(v)
        )

    def normalized(self) -> "Quaternion":
        length: float = float(np.linalg.norm(self.wxyz))
        if length < NumericConstants.EPS:
            raise ValueError("Quaternion norm is too small")
        return Quaternion(self.wxyz / length)

    def inverse(self) -> "Quaternion":
        """Return the conjugate of the normalized quaternion."""
        unit: Quaternion = self.normalized()
        return Quaternion._from_parts(unit.w, -unit.xyz)

    def __mul__(self, other: "Quaternion") -> "Quaternion":
        """Hamilton product; the result applies other first, then self."""
        w1: float = self.w
        w2: float = other.w
        v1: NDArray[np.float64] = self.xyz
        v2: NDArray[np.float64] = other.xyz
        return Quaternion._from_parts(
            w1 * w2 - float(v1 @ v2), w1 * v2 + w2 * v1 + np.cross(v1, v2)
        )

    def rotate(self, v: NDArray[np.float64]) -> NDArray[np.float64]:
        """Rotate a 3-vector by this quaternion."""
        vec: NDArray[np.float64] = as_vector3(v, "v")
        unit: Quaternion = self.normalized()
        u: NDArray[np.float64] = unit.xyz
        twice_cross: NDArray[np.float64] = 2.0 * np.cross(u, vec)
        return vec + unit.w * twice_cross + np.cross(u, twice_cross)

    def angle_rad(self) -> float:
        """Return the rotation angle in [0, pi]."""
        cos_half: float = min(1.0, abs(self.normalized().w))
        return 2.0 * math.acos(cos_half)

    def almost_equal(
        self, other: "Quaternion", atol: float = NumericConstants.ATOL
    ) -> bool:
        """Compare rotations, treating q and -q as the same rotation."""
        return bool(
            np.allclose(self.wxyz, other.wxyz, atol=atol)
            or np.allclose(self.wxyz, -other.wxyz, atol=atol)
        )

    @staticmethod
    def slerp(q0: "Quaternion", q1: "Quaternion", ratio: float) -> "Quaternion":
        """Spherically interpolate along the shortest arc from q0 to q1.

        A ratio of 0 returns q0 and a ratio of 1 returns q1. Ratios outside
        [0, 1] continue the same rotation at constant angular rate, which is
        what linear extrapolation of orientation needs.
        """
        start: Quaternion = q0.normalized()
        delta: Quaternion = start.inverse() * q1.normalized()
        if delta.w < 0.0:
            delta = Quaternion(-delta.wxyz)
        sin_half: float = float(np.linalg.norm(delta.xyz))
        if sin_half < NumericConstants.SLERP_EPS:
            return start
        half_angle: float = math.atan2(sin_half, delta.w)
        step: Quaternion = Quaternion.from_axis_angle(
            delta.xyz / sin_half, 2.0 * half_angle * float(ratio)
        )
        return (start * step).normalized()
