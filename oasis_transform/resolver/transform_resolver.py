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
Path resolution and composition of transforms through the frame graph
"""

from __future__ import annotations

from dataclasses import dataclass
from dataclasses import field
from typing import Optional

from oasis_transform.buffer.frame_graph import FrameGraph
from oasis_transform.buffer.history_buffer import LookupStatus
from oasis_transform.buffer.history_buffer import SampleLookup
from oasis_transform.errors.transformer_errors import ConnectivityError
from oasis_transform.errors.transformer_errors import ExtrapolationError
from oasis_transform.errors.transformer_errors import FrameNotFoundError
from oasis_transform.errors.transformer_errors import TransformerError
from oasis_transform.math_utils.se3 import SE3
from oasis_transform.timing.time_base import TimeBaseError
from oasis_transform.timing.time_base import is_latest
from oasis_transform.timing.time_base import validate_stamp
from oasis_transform.transform_types.transform import Transform
from oasis_transform.transform_types.transform import merge_authorities
from oasis_transform.transform_types.transform_sample import TransformSample


# Maximum number of hops walked before a chain is considered a loop
MAX_GRAPH_DEPTH: int = 1000


@dataclass
class _Chain:
    """
    Ancestor chain of one frame as of a query time

    Fields:
        frames: Visited frames, starting at the walked frame
        to_frame: Transform from the walked frame into frames[k], per k
        edges: Sample used to step from frames[k] to frames[k + 1]
        error: Failure that stopped the walk before the root, if any
    """

    frames: list[str] = field(default_factory=list)
    to_frame: list[SE3] = field(default_factory=list)
    edges: list[TransformSample] = field(default_factory=list)
    error: Optional[ExtrapolationError] = None


class TransformResolver:
    """
    Answers direct and fixed-frame lookups against a frame graph

    Lookups read one buffer at a time and never hold more than one buffer
    lock, so a concurrent reparenting may be observed midway through a walk.
    """

    def __init__(self, graph: FrameGraph) -> None:
        self._graph: FrameGraph = graph

    def resolve(self, target_frame: str, source_frame: str, t_ns: int) -> Transform:
        """
        Return the transform from source_frame into target_frame at t_ns

        :raises FrameNotFoundError: if either frame is unknown
        :raises ConnectivityError: if the frames share no ancestor at t_ns
        :raises ExtrapolationError: if an edge cannot be resolved at t_ns
        """
        _check_stamp(t_ns, "t_ns")
        self._require_frame(target_frame)
        self._require_frame(source_frame)

        if target_frame == source_frame:
            return Transform.identity(target_frame, t_ns)

        source_chain: _Chain = self._walk(source_frame, t_ns, stop_at=target_frame)
        index: dict[str, int] = {
            frame: k for k, frame in enumerate(source_chain.frames)
        }

        frame: str = target_frame
        to_target_ancestor: SE3 = SE3.identity()
        target_edges: list[TransformSample] = []

        while frame not in index:
            if len(target_edges) > MAX_GRAPH_DEPTH:
                raise ConnectivityError(
                    f'Exceeded maximum graph depth walking from "{target_frame}", '
                    "the frame graph contains a loop"
                )
            lookup: SampleLookup = self._lookup(frame, t_ns)
            if lookup.status is LookupStatus.NO_DATA:
                if source_chain.error is not None:
                    raise source_chain.error
                raise ConnectivityError(
                    f'Could not find a connection between "{target_frame}" and '
                    f'"{source_frame}" because they are not part of the same tree'
                )
            sample: TransformSample = _require_sample(frame, t_ns, lookup)
            to_target_ancestor = sample.transform * to_target_ancestor
            target_edges.append(sample)
            frame = sample.parent_frame

        common: int = index[frame]
        to_source_ancestor: SE3 = source_chain.to_frame[common]
        source_edges: list[TransformSample] = source_chain.edges[:common]

        used: list[TransformSample] = source_edges + target_edges
        return Transform(
            target_frame=target_frame,
            source_frame=source_frame,
            t_ns=_result_stamp(t_ns, used),
            transform=to_target_ancestor.inverse() * to_source_ancestor,
            authority=merge_authorities([edge.authority for edge in used]),
        )

    def resolve_full(
        self,
        target_frame: str,
        target_t_ns: int,
        source_frame: str,
        source_t_ns: int,
        fixed_frame: str,
    ) -> Transform:
        """
        Return the transform from source_frame at source_t_ns into target_frame
        at target_t_ns, relating the two times through fixed_frame

        fixed_frame is assumed not to move between the two times; this is not
        checked.
        """
        _check_stamp(target_t_ns, "target_t_ns")
        _check_stamp(source_t_ns, "source_t_ns")
        self._require_frame(fixed_frame)

        source_in_fixed: Transform = self.resolve(
            fixed_frame, source_frame, source_t_ns
        )
        target_in_fixed: Transform = self.resolve(
            fixed_frame, target_frame, target_t_ns
        )

        return Transform(
            target_frame=target_frame,
            source_frame=source_frame,
            t_ns=target_in_fixed.t_ns,
            transform=target_in_fixed.transform.inverse() * source_in_fixed.transform,
            authority=merge_authorities(
                [target_in_fixed.authority, source_in_fixed.authority]
            ),
        )

    def can_resolve(self, target_frame: str, source_frame: str, t_ns: int) -> bool:
        """Return True if resolve() would succeed now, without raising."""
        try:
            self.resolve(target_frame, source_frame, t_ns)
        except TransformerError:
            return False
        return True

    def can_resolve_full(
        self,
        target_frame: str,
        target_t_ns: int,
        source_frame: str,
        source_t_ns: int,
        fixed_frame: str,
    ) -> bool:
        """Return True if resolve_full() would succeed now, without raising."""
        try:
            self.resolve_full(
                target_frame, target_t_ns, source_frame, source_t_ns, fixed_frame
            )
        except TransformerError:
            return False
        return True

    def _require_frame(self, frame: str) -> None:
        if not isinstance(frame, str) or not self._graph.has_frame(frame):
            raise FrameNotFoundError(str(frame))

    def _lookup(self, frame: str, t_ns: int) -> SampleLookup:
        lookup: Optional[SampleLookup] = self._graph.sample_at(frame, t_ns)
        if lookup is None:
            raise FrameNotFoundError(frame)
        return lookup

    def _walk(self, frame: str, t_ns: int, *, stop_at: str) -> _Chain:
        """
        Walk from frame toward the root, stopping at stop_at, the root, or the
        first edge that cannot be resolved
        """
        chain: _Chain = _Chain(frames=[frame], to_frame=[SE3.identity()])
        current: str = frame
        while current != stop_at:
            if len(chain.edges) > MAX_GRAPH_DEPTH:
                raise ConnectivityError(
                    f'Exceeded maximum graph depth walking from "{frame}", '
                    "the frame graph contains a loop"
                )
            lookup: SampleLookup = self._lookup(current, t_ns)
            if lookup.status is LookupStatus.NO_DATA:
                break
            if lookup.sample is None:
                chain.error = _extrapolation_error(current, t_ns, lookup)
                break
            sample: TransformSample = lookup.sample
            chain.edges.append(sample)
            chain.to_frame.append(sample.transform * chain.to_frame[-1])
            chain.frames.append(sample.parent_frame)
            current = sample.parent_frame
        return chain


def _check_stamp(t_ns: int, name: str) -> None:
    try:
        validate_stamp(t_ns, name)
    except TimeBaseError as exc:
        raise TransformerError(str(exc)) from exc


def _require_sample(frame: str, t_ns: int, lookup: SampleLookup) -> TransformSample:
    if lookup.sample is None:
        raise _extrapolation_error(frame, t_ns, lookup)
    return lookup.sample


def _extrapolation_error(
    frame: str, t_ns: int, lookup: SampleLookup
) -> ExtrapolationError:
    return ExtrapolationError(
        lookup.message,
        frame=frame,
        t_ns=t_ns,
        expired=lookup.status is LookupStatus.EXPIRED,
    )


def _result_stamp(t_ns: int, edges: list[TransformSample]) -> int:
    """
    Stamp the result with the query time, or for a latest query with the
    oldest of the newest samples used on dynamic edges
    """
    if not is_latest(t_ns):
        return t_ns
    stamps: list[int] = [edge.t_ns for edge in edges if not edge.is_static]
    return min(stamps) if stamps else t_ns
