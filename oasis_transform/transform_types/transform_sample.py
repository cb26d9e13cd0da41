################################################################################
#
#  Copyright (C) 2026 Garrett Brown
#  This file is part of OASIS - https://github.com/eigendude/OASIS
#
#  SPDX-License-Identifier: Apache-2.0
#  See DOCS/LICENSING.md for more information.
#
################################################################################

"""Timestamped measurement of a frame relative to its parent."""

from __future__ import annotations

from dataclasses import dataclass
from dataclasses import replace

import numpy as np
from numpy.typing import NDArray

from oasis_transform.errors.transformer_errors import TransformSampleError
from oasis_transform.math_utils.quat import Quaternion
from oasis_transform.math_utils.se3 import SE3
from oasis_transform.timing.time_base import TimeBaseError
from oasis_transform.timing.time_base import validate_stamp


@dataclass(frozen=True)
class TransformSample:
    """Pose of a child frame in its parent frame at one instant.

    The parent is recorded per sample because reparenting is a time-varying
    fact: the ancestor chain of a frame is derived from the samples valid at
    the queried time.

    Attributes:
        child_frame: Frame whose pose is measured
        parent_frame: Frame the pose is expressed in
        t_ns: Measurement timestamp in nanoseconds
        transform: Rigid transform mapping child coordinates into the parent
        authority: Name of the publisher that produced the sample
        is_static: True when the sample is valid at all times
    """

    child_frame: str
    parent_frame: str
    t_ns: int
    transform: SE3
    authority: str = ""
    is_static: bool = False

    def __post_init__(self) -> None:
        """Validate frame names, timestamp and transform."""
        _require_frame(self.child_frame, "child_frame")
        _require_frame(self.parent_frame, "parent_frame")
        if self.child_frame == self.parent_frame:
            raise TransformSampleError(
                f'Frame "{self.child_frame}" cannot be its own parent'
            )
        try:
            validate_stamp(self.t_ns)
        except TimeBaseError as exc:
            raise TransformSampleError(str(exc)) from exc
        if not isinstance(self.transform, SE3):
            raise TransformSampleError("transform must be an SE3")
        if not isinstance(self.authority, str):
            raise TransformSampleError("authority must be a str")
        if not isinstance(self.is_static, bool):
            raise TransformSampleError("is_static must be a bool")

    @staticmethod
    def create(
        *,
        child_frame: str,
        parent_frame: str,
        t_ns: int,
        translation: NDArray[np.float64] | list[float],
        quaternion_wxyz: NDArray[np.float64] | list[float],
        authority: str = "",
        is_static: bool = False,
    ) -> "TransformSample":
        """Build a sample from raw translation and wxyz components."""
        try:
            transform: SE3 = SE3(Quaternion(np.asarray(quaternion_wxyz)), translation)
        except ValueError as exc:
            raise TransformSampleError(str(exc)) from exc
        return TransformSample(
            child_frame=child_frame,
            parent_frame=parent_frame,
            t_ns=t_ns,
            transform=transform,
            authority=authority,
            is_static=is_static,
        )

    @property
    def translation(self) -> NDArray[np.float64]:
        """Return the translation vector."""
        return self.transform.p

    @property
    def rotation(self) -> Quaternion:
        """Return the unit rotation quaternion."""
        return self.transform.q

    def with_authority(self, authority: str) -> "TransformSample":
        """Return a copy stamped with a different authority."""
        return replace(self, authority=authority)

    def restamped(self, t_ns: int, transform: SE3 | None = None) -> "TransformSample":
        """Return a copy at another time, optionally with a new transform."""
        return replace(
            self,
            t_ns=t_ns,
            transform=self.transform if transform is None else transform,
        )


def _require_frame(frame: str, name: str) -> None:
    """Ensure a frame string is valid and non-empty."""
    if not isinstance(frame, str):
        raise TransformSampleError(f"{name} must be a str")
    if not frame:
        raise TransformSampleError(f"{name} must be non-empty")
