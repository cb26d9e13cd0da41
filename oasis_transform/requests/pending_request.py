################################################################################
#
#  Copyright (C) 2026 Garrett Brown
#  This file is part of OASIS - https://github.com/eigendude/OASIS
#
#  SPDX-License-Identifier: Apache-2.0
#  See DOCS/LICENSING.md for more information.
#
################################################################################

"""Asynchronous lookup waiting for data that has not arrived yet."""

from __future__ import annotations

from concurrent.futures import Future
from dataclasses import dataclass

from oasis_transform.transform_types.transform import Transform


@dataclass(frozen=True)
class PendingRequest:
    """Direct lookup registered with the request scheduler.

    Attributes:
        request_id: Scheduler-unique identifier
        target_frame: Frame the result is expressed in
        source_frame: Frame the data originates from
        t_ns: Requested timestamp in nanoseconds, 0 for latest
        created_s: Monotonic creation time in seconds
        deadline_s: Monotonic time in seconds after which the request times out
        future: One-shot result handle returned to the caller
    """

    request_id: int
    target_frame: str
    source_frame: str
    t_ns: int
    created_s: float
    deadline_s: float
    future: Future[Transform]

    def is_overdue(self, now_s: float) -> bool:
        """Return True if the deadline has passed."""
        return now_s >= self.deadline_s

    def describe(self) -> str:
        """Return a short description for log messages."""
        return (
            f"request {self.request_id} ({self.source_frame} -> "
            f"{self.target_frame} @ {self.t_ns} ns)"
        )
