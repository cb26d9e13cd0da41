################################################################################
#
#  Copyright (C) 2026 Garrett Brown
#  This file is part of OASIS - https://github.com/eigendude/OASIS
#
#  SPDX-License-Identifier: Apache-2.0
#  See DOCS/LICENSING.md for more information.
#
################################################################################

"""
Query surface for transforms between frames
"""

from __future__ import annotations

from concurrent.futures import Future
from typing import Optional

from oasis_transform.config.transformer_config import TransformerConfig
from oasis_transform.transform_types.transform import Transform
from oasis_transform.transformer.transformer_core import TransformerCore


class TransformReceiver:
    """
    Receives transforms from peers and answers lookups

    Create instances with TransformerFactory. A receiver caches the frame
    tree and its history, so it should live as long as lookups are planned
    rather than be recreated per query.
    """

    def __init__(self, core: TransformerCore) -> None:
        self._core: TransformerCore = core

    @property
    def config(self) -> TransformerConfig:
        return self._core.config

    def lookup_transform(
        self, target_frame: str, source_frame: str, t_ns: int
    ) -> Transform:
        """
        Get the transform between two frames

        :param target_frame: The frame into which data should be transformed
        :param source_frame: The frame where the data originated
        :param t_ns: The time of the transform in nanoseconds, 0 for the latest

        :return: The transform mapping source_frame into target_frame

        :raises TransformerError: on unknown frames, disconnected trees, or
            times outside the buffered range
        """
        return self._core.lookup_transform(target_frame, source_frame, t_ns)

    def lookup_transform_full(
        self,
        target_frame: str,
        target_t_ns: int,
        source_frame: str,
        source_t_ns: int,
        fixed_frame: str,
    ) -> Transform:
        """
        Get the transform between two frames at two times

        :param target_frame: The frame into which data should be transformed
        :param target_t_ns: The time at which target_frame is evaluated
        :param source_frame: The frame where the data originated
        :param source_t_ns: The time at which source_frame is evaluated
        :param fixed_frame: The frame assumed constant between the two times

        :return: The transform mapping source_frame into target_frame

        :raises TransformerError: on the same conditions as lookup_transform
        """
        return self._core.lookup_transform_full(
            target_frame, target_t_ns, source_frame, source_t_ns, fixed_frame
        )

    def request_transform(
        self,
        target_frame: str,
        source_frame: str,
        t_ns: int,
        timeout_sec: Optional[float] = None,
    ) -> Future[Transform]:
        """
        Request a transform that may not have arrived yet

        Never raises. The returned future completes with the transform, or
        with RequestTimeoutError, RequestCancelledError or a lookup error.

        :param timeout_sec: Deadline override, defaults to the configured one
        """
        return self._core.request_transform(
            target_frame, source_frame, t_ns, timeout_sec
        )

    def can_transform(self, target_frame: str, source_frame: str, t_ns: int) -> bool:
        """Test if lookup_transform would currently succeed."""
        return self._core.can_transform(target_frame, source_frame, t_ns)

    def can_transform_full(
        self,
        target_frame: str,
        target_t_ns: int,
        source_frame: str,
        source_t_ns: int,
        fixed_frame: str,
    ) -> bool:
        """Test if lookup_transform_full would currently succeed."""
        return self._core.can_transform_full(
            target_frame, target_t_ns, source_frame, source_t_ns, fixed_frame
        )

    def frames_as_string(self) -> str:
        return self._core.graph.all_frames_as_string()

    def shutdown(self) -> None:
        """Cancel pending requests and shut down the communicator."""
        self._core.shutdown()
