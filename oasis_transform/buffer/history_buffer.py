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
Time-ordered history of one frame's transform to its parent
"""

from __future__ import annotations

import threading
from bisect import bisect_left
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from oasis_transform.errors.transformer_errors import TransformSampleError
from oasis_transform.math_utils.se3 import SE3
from oasis_transform.timing.time_base import is_latest
from oasis_transform.transform_types.extrapolation_policy import ExtrapolationPolicy
from oasis_transform.transform_types.transform_sample import TransformSample


class LookupStatus(Enum):
    """Outcome of resolving a buffer at a query time."""

    AVAILABLE = "available"
    NO_DATA = "no_data"
    # Query is newer than the data, or older but still inside the cache horizon
    NOT_YET_AVAILABLE = "not_yet_available"
    # Query is older than anything the cache can still hold
    EXPIRED = "expired"


@dataclass(frozen=True)
class SampleLookup:
    """Result of HistoryBuffer.sample_at.

    Attributes:
        status: Lookup outcome
        sample: Resolved sample when status is AVAILABLE, else None
        message: Human-readable reason for a failed lookup
    """

    status: LookupStatus
    sample: Optional[TransformSample] = None
    message: str = ""

    @property
    def ok(self) -> bool:
        return self.status is LookupStatus.AVAILABLE


class HistoryBuffer:
    """
    Bounded, time-ordered samples of a frame relative to its parent

    Each buffer carries its own lock so that ingestion into one frame never
    blocks lookups that touch only other frames.
    """

    def __init__(
        self,
        frame: str,
        *,
        cache_time_ns: int,
        max_length: int,
        policy: ExtrapolationPolicy = ExtrapolationPolicy.DISALLOW,
        max_extrapolation_ns: int = 0,
    ) -> None:
        self._frame: str = frame
        self._cache_time_ns: int = cache_time_ns
        self._max_length: int = max_length
        self._policy: ExtrapolationPolicy = policy
        self._max_extrapolation_ns: int = max_extrapolation_ns

        self._lock: threading.Lock = threading.Lock()
        self._stamps: list[int] = []
        self._samples: list[TransformSample] = []
        self._static: Optional[TransformSample] = None

    @property
    def frame(self) -> str:
        return self._frame

    def __len__(self) -> int:
        with self._lock:
            return len(self._samples) + (1 if self._static is not None else 0)

    def is_empty(self) -> bool:
        with self._lock:
            return not self._samples and self._static is None

    def is_static(self) -> bool:
        with self._lock:
            return self._static is not None

    def oldest_stamp(self) -> Optional[int]:
        with self._lock:
            return self._stamps[0] if self._stamps else None

    def latest_stamp(self) -> Optional[int]:
        with self._lock:
            return self._stamps[-1] if self._stamps else None

    def samples(self) -> list[TransformSample]:
        """Return a snapshot of the stored samples in time order."""
        with self._lock:
            if self._static is not None:
                return [self._static]
            return list(self._samples)

    def insert(self, sample: TransformSample) -> bool:
        """
        Insert a sample, returning False if it was not kept

        A sample is not kept when it is older than the cache horizon, or
        older than every stored sample of a buffer at its length cap. A
        sample at an already stored timestamp replaces the stored one.
        """
        if sample.child_frame != self._frame:
            raise TransformSampleError(
                f'Sample for "{sample.child_frame}" inserted into buffer '
                f'of "{self._frame}"'
            )

        with self._lock:
            if sample.is_static:
                self._static = sample
                self._stamps.clear()
                self._samples.clear()
                return True

            if self._stamps:
                newest: int = self._stamps[-1]
                if sample.t_ns < newest - self._cache_time_ns:
                    return False

            self._static = None

            index: int = bisect_left(self._stamps, sample.t_ns)
            if index < len(self._stamps) and self._stamps[index] == sample.t_ns:
                self._samples[index] = sample
            else:
                self._stamps.insert(index, sample.t_ns)
                self._samples.insert(index, sample)

            if self._prune() > index:
                return False

        return True

    def _prune(self) -> int:
        # Caller holds the lock; returns the number of samples removed
        cutoff: int = self._stamps[-1] - self._cache_time_ns
        start: int = bisect_left(self._stamps, cutoff)
        overflow: int = len(self._stamps) - start - self._max_length
        if overflow > 0:
            start += overflow
        if start > 0:
            del self._stamps[:start]
            del self._samples[:start]
        return start

    def sample_at(self, t_ns: int) -> SampleLookup:
        """
        Resolve the transform to the parent at t_ns without raising

        A query time of 0 returns the newest sample unmodified.
        """
        with self._lock:
            static: Optional[TransformSample] = self._static
            if static is not None:
                if is_latest(t_ns):
                    return SampleLookup(LookupStatus.AVAILABLE, static)
                return SampleLookup(LookupStatus.AVAILABLE, static.restamped(t_ns))

            if not self._samples:
                return SampleLookup(
                    LookupStatus.NO_DATA,
                    message=f'Frame "{self._frame}" has no transform data',
                )

            if is_latest(t_ns):
                return SampleLookup(LookupStatus.AVAILABLE, self._samples[-1])

            oldest: TransformSample = self._samples[0]
            newest: TransformSample = self._samples[-1]

            if t_ns > newest.t_ns:
                previous: Optional[TransformSample] = (
                    self._samples[-2] if len(self._samples) > 1 else None
                )
                return self._extrapolate(t_ns, newest, previous, future=True)

            if t_ns < oldest.t_ns:
                following: Optional[TransformSample] = (
                    self._samples[1] if len(self._samples) > 1 else None
                )
                return self._extrapolate(t_ns, oldest, following, future=False)

            index: int = bisect_left(self._stamps, t_ns)
            after: TransformSample = self._samples[index]
            if after.t_ns == t_ns:
                return SampleLookup(LookupStatus.AVAILABLE, after)
            before: TransformSample = self._samples[index - 1]

        if before.parent_frame != after.parent_frame:
            # Reparented between the two samples; the earlier parent holds until
            # the later sample
            return SampleLookup(LookupStatus.AVAILABLE, before.restamped(t_ns))

        ratio: float = float(t_ns - before.t_ns) / float(after.t_ns - before.t_ns)
        blended: SE3 = SE3.interpolate(before.transform, after.transform, ratio)
        return SampleLookup(LookupStatus.AVAILABLE, before.restamped(t_ns, blended))

    def _extrapolate(
        self,
        t_ns: int,
        boundary: TransformSample,
        neighbor: Optional[TransformSample],
        *,
        future: bool,
    ) -> SampleLookup:
        # Caller holds the lock; only reads the arguments and configuration
        distance_ns: int = abs(t_ns - boundary.t_ns)

        if self._policy is ExtrapolationPolicy.CLAMP:
            return SampleLookup(LookupStatus.AVAILABLE, boundary.restamped(t_ns))

        if (
            self._policy is ExtrapolationPolicy.LINEAR
            and distance_ns <= self._max_extrapolation_ns
        ):
            if neighbor is None or neighbor.parent_frame != boundary.parent_frame:
                return SampleLookup(LookupStatus.AVAILABLE, boundary.restamped(t_ns))
            # neighbor precedes boundary in the future case and follows it
            # otherwise; either way the ratio is measured from neighbor
            ratio: float = float(t_ns - neighbor.t_ns) / float(
                boundary.t_ns - neighbor.t_ns
            )
            projected: SE3 = SE3.interpolate(
                neighbor.transform, boundary.transform, ratio
            )
            return SampleLookup(
                LookupStatus.AVAILABLE, boundary.restamped(t_ns, projected)
            )

        if future:
            return SampleLookup(
                LookupStatus.NOT_YET_AVAILABLE,
                message=(
                    "Lookup would require extrapolation into the future. "
                    f"Requested time {t_ns} but the latest data is at time "
                    f"{boundary.t_ns}, when looking up transform from frame "
                    f'"{self._frame}" to frame "{boundary.parent_frame}"'
                ),
            )

        horizon_ns: int = self._stamps[-1] - self._cache_time_ns
        status: LookupStatus = LookupStatus.NOT_YET_AVAILABLE
        if t_ns < horizon_ns:
            status = LookupStatus.EXPIRED
        return SampleLookup(
            status,
            message=(
                "Lookup would require extrapolation into the past. "
                f"Requested time {t_ns} but the earliest data is at time "
                f"{boundary.t_ns}, when looking up transform from frame "
                f'"{self._frame}" to frame "{boundary.parent_frame}"'
            ),
        )
