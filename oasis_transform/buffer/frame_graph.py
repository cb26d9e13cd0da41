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
Per-core map of frame names to their history buffers
"""

from __future__ import annotations

import threading
from typing import Optional

from oasis_transform.buffer.history_buffer import HistoryBuffer
from oasis_transform.buffer.history_buffer import SampleLookup
from oasis_transform.config.transformer_config import TransformerConfig
from oasis_transform.timing.time_base import TIME_LATEST
from oasis_transform.transform_types.transform_sample import TransformSample


class FrameGraph:
    """
    Frames and their time-varying parent edges

    Frames are created on demand when a sample references them, as child or
    as parent, and are never removed. The graph lock guards only the name map;
    each buffer locks itself, so there is no global lock on the sample path.
    """

    def __init__(self, config: TransformerConfig) -> None:
        self._config: TransformerConfig = config
        self._lock: threading.Lock = threading.Lock()
        self._buffers: dict[str, HistoryBuffer] = {}

    def _get_or_create(self, frame: str) -> HistoryBuffer:
        with self._lock:
            buffer: Optional[HistoryBuffer] = self._buffers.get(frame)
            if buffer is None:
                buffer = HistoryBuffer(
                    frame,
                    cache_time_ns=self._config.cache_time_ns(),
                    max_length=self._config.max_buffer_length(),
                    policy=self._config.policy(),
                    max_extrapolation_ns=self._config.max_extrapolation_ns(),
                )
                self._buffers[frame] = buffer
            return buffer

    def insert_sample(self, sample: TransformSample) -> bool:
        """Record a sample, returning False if the child buffer rejected it."""
        self._get_or_create(sample.parent_frame)
        return self._get_or_create(sample.child_frame).insert(sample)

    def has_frame(self, frame: str) -> bool:
        with self._lock:
            return frame in self._buffers

    def buffer(self, frame: str) -> Optional[HistoryBuffer]:
        with self._lock:
            return self._buffers.get(frame)

    def frame_names(self) -> list[str]:
        with self._lock:
            return sorted(self._buffers)

    def sample_at(self, frame: str, t_ns: int) -> Optional[SampleLookup]:
        """Resolve a frame's edge to its parent, or None for an unknown frame."""
        buffer: Optional[HistoryBuffer] = self.buffer(frame)
        if buffer is None:
            return None
        return buffer.sample_at(t_ns)

    def parent_of(self, frame: str, t_ns: int = TIME_LATEST) -> Optional[str]:
        """Return the parent of a frame at t_ns, or None if it has none then."""
        lookup: Optional[SampleLookup] = self.sample_at(frame, t_ns)
        if lookup is None or lookup.sample is None:
            return None
        return lookup.sample.parent_frame

    def all_frames_as_string(self) -> str:
        """Describe every frame and its latest parent, one per line."""
        lines: list[str] = []
        for frame in self.frame_names():
            parent: Optional[str] = self.parent_of(frame)
            if parent is None:
                lines.append(f"Frame {frame} is a root")
            else:
                lines.append(f"Frame {frame} exists with parent {parent}")
        return "\n".join(lines)
