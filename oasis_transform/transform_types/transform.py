################################################################################
#
#  Copyright (C) 2026 Garrett Brown
#  This file is part of OASIS - https://github.com/eigendude/OASIS
#
#  SPDX-License-Identifier: Apache-2.0
#  See DOCS/LICENSING.md for more information.
#
################################################################################

"""Resolved transform between two frames."""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np
from numpy.typing import NDArray

from oasis_transform.math_utils.quat import Quaternion
from oasis_transform.math_utils.se3 import SE3


@dataclass(frozen=True)
class Transform:
    """Transform mapping coordinates from source_frame into target_frame.

    Attributes:
        target_frame: Frame the result is expressed in
        source_frame: Frame the data originates from
        t_ns: Timestamp at which the transform is valid, in nanoseconds
        transform: Rigid transform from source into target coordinates
        authority: Comma-separated publishers of the composed samples
    """

    target_frame: str
    source_frame: str
    t_ns: int
    transform: SE3
    authority: str = ""

    @staticmethod
    def identity(frame: str, t_ns: int) -> "Transform":
        """Return the identity transform of a frame onto itself."""
        return Transform(
            target_frame=frame,
            source_frame=frame,
            t_ns=t_ns,
            transform=SE3.identity(),
        )

    @property
    def translation(self) -> NDArray[np.float64]:
        """Return the translation vector."""
        return self.transform.p

    @property
    def rotation(self) -> Quaternion:
        """Return the unit rotation quaternion."""
        return self.transform.q

    def inverse(self) -> "Transform":
        """Return the transform from target_frame back into source_frame."""
        return Transform(
            target_frame=self.source_frame,
            source_frame=self.target_frame,
            t_ns=self.t_ns,
            transform=self.transform.inverse(),
            authority=self.authority,
        )

    def transform_point(self, x: NDArray[np.float64]) -> NDArray[np.float64]:
        """Map a point from source_frame into target_frame."""
        return self.transform.transform_point(x)

    def __str__(self) -> str:
        p: NDArray[np.float64] = self.transform.p
        q: NDArray[np.float64] = self.transform.q.wxyz
        return (
            f"Transform[{self.source_frame} -> {self.target_frame} @ {self.t_ns} ns, "
            f"p=({p[0]:.4f}, {p[1]:.4f}, {p[2]:.4f}), "
            f"q=({q[0]:.4f}, {q[1]:.4f}, {q[2]:.4f}, {q[3]:.4f})]"
        )


def merge_authorities(authorities: list[str]) -> str:
    """Join non-empty authority names, keeping first-seen order."""
    seen: list[str] = []
    for authority in authorities:
        if authority and authority not in seen:
            seen.append(authority)
    return ",".join(seen)
