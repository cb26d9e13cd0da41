################################################################################
#
#  Copyright (C) 2026 Garrett Brown
#  This file is part of OASIS - https://github.com/eigendude/OASIS
#
#  SPDX-License-Identifier: Apache-2.0
#  See DOCS/LICENSING.md for more information.
#
################################################################################

"""Tests for transform path resolution."""

from __future__ import annotations

import math

import numpy as np
import pytest
from numpy.typing import NDArray

from oasis_transform.buffer.frame_graph import FrameGraph
from oasis_transform.config.transformer_config import TransformerConfig
from oasis_transform.errors.transformer_errors import ConnectivityError
from oasis_transform.errors.transformer_errors import ExtrapolationError
from oasis_transform.errors.transformer_errors import FrameNotFoundError
from oasis_transform.errors.transformer_errors import TransformerError
from oasis_transform.math_utils.quat import Quaternion
from oasis_transform.math_utils.se3 import SE3
from oasis_transform.resolver.transform_resolver import TransformResolver
from oasis_transform.transform_types.transform import Transform
from oasis_transform.transform_types.transform_sample import TransformSample


_Z_AXIS: NDArray[np.float64] = np.array([0.0, 0.0, 1.0])


def _insert(
    graph: FrameGraph,
    child: str,
    parent: str,
    t_ns: int,
    xyz: list[float],
    *,
    yaw_rad: float = 0.0,
    authority: str = "",
    is_static: bool = False,
) -> None:
    sample: TransformSample = TransformSample(
        child_frame=child,
        parent_frame=parent,
        t_ns=t_ns,
        transform=SE3(Quaternion.from_axis_angle(_Z_AXIS, yaw_rad), np.array(xyz)),
        authority=authority,
        is_static=is_static,
    )
    assert graph.insert_sample(sample)


def _robot_graph() -> FrameGraph:
    """Build map -> odom -> base -> {laser, camera} with two stamps each."""
    graph: FrameGraph = FrameGraph(TransformerConfig())
    for t_ns in (100, 200):
        _insert(graph, "odom", "map", t_ns, [1.0, 0.0, 0.0], authority="localizer")
        _insert(
            graph,
            "base",
            "odom",
            t_ns,
            [float(t_ns) / 100.0, 0.0, 0.0],
            yaw_rad=math.pi / 2.0,
            authority="odometry",
        )
    _insert(graph, "laser", "base", 0, [0.0, 0.5, 0.0], is_static=True)
    _insert(graph, "camera", "base", 0, [0.2, 0.0, 0.3], is_static=True)
    return graph


def test_same_frame_is_identity() -> None:
    """Ensure a frame resolved onto itself is the identity."""
    resolver: TransformResolver = TransformResolver(_robot_graph())
    result: Transform = resolver.resolve("base", "base", 150)
    assert result.transform.almost_equal(SE3.identity())
    assert result.t_ns == 150


def test_resolves_child_into_ancestor() -> None:
    """Ensure edges compose from the source up to the target."""
    resolver: TransformResolver = TransformResolver(_robot_graph())
    result: Transform = resolver.resolve("map", "laser", 150)

    # base sits at x=2.5 in map and is yawed a quarter turn, so the laser's
    # +Y offset points along -X in map
    np.testing.assert_allclose(result.translation, [2.0, 0.0, 0.0], atol=1e-9)
    assert result.target_frame == "map"
    assert result.source_frame == "laser"
    assert result.t_ns == 150
    assert result.authority == "odometry,localizer"


def test_resolves_ancestor_into_child() -> None:
    """Ensure looking down the tree inverts the composed edges."""
    resolver: TransformResolver = TransformResolver(_robot_graph())
    down: Transform = resolver.resolve("laser", "map", 150)
    up: Transform = resolver.resolve("map", "laser", 150)
    assert (down.transform * up.transform).almost_equal(SE3.identity())


def test_resolves_between_siblings() -> None:
    """Ensure frames sharing a parent resolve through that parent."""
    graph: FrameGraph = _robot_graph()
    resolver: TransformResolver = TransformResolver(graph)
    result: Transform = resolver.resolve("laser", "camera", 150)
    point: NDArray[np.float64] = np.array([1.0, 2.0, 3.0])
    laser_in_base: SE3 = SE3(Quaternion.identity(), np.array([0.0, 0.5, 0.0]))
    camera_in_base: SE3 = SE3(Quaternion.identity(), np.array([0.2, 0.0, 0.3]))
    expected: NDArray[np.float64] = (
        laser_in_base.inverse() * camera_in_base
    ).transform_point(point)
    np.testing.assert_allclose(result.transform_point(point), expected, atol=1e-9)


def test_inverse_law() -> None:
    """Ensure swapping target and source yields the inverse transform."""
    resolver: TransformResolver = TransformResolver(_robot_graph())
    forward: Transform = resolver.resolve("camera", "odom", 175)
    backward: Transform = resolver.resolve("odom", "camera", 175)
    assert forward.transform.almost_equal(backward.transform.inverse())


def test_latest_query_stamps_oldest_dynamic_edge() -> None:
    """Ensure a latest query is stamped with the oldest newest-sample used."""
    graph: FrameGraph = _robot_graph()
    _insert(graph, "base", "odom", 300, [3.0, 0.0, 0.0])
    resolver: TransformResolver = TransformResolver(graph)
    result: Transform = resolver.resolve("map", "laser", 0)
    assert result.t_ns == 200
    np.testing.assert_allclose(result.translation, [4.0, 0.5, 0.0], atol=1e-9)


def test_unknown_frame_raises() -> None:
    """Ensure unknown frames are reported by name."""
    resolver: TransformResolver = TransformResolver(_robot_graph())
    with pytest.raises(FrameNotFoundError) as excinfo:
        resolver.resolve("map", "gripper", 150)
    assert excinfo.value.frame == "gripper"
    assert not resolver.can_resolve("map", "gripper", 150)


def test_disconnected_trees_raise() -> None:
    """Ensure frames in separate trees are not connected."""
    graph: FrameGraph = _robot_graph()
    _insert(graph, "tool", "world", 150, [0.0, 0.0, 0.0])
    resolver: TransformResolver = TransformResolver(graph)
    with pytest.raises(ConnectivityError):
        resolver.resolve("tool", "base", 150)


def test_future_query_is_not_expired() -> None:
    """Ensure queries past the newest data report a recoverable failure."""
    resolver: TransformResolver = TransformResolver(_robot_graph())
    with pytest.raises(ExtrapolationError) as excinfo:
        resolver.resolve("map", "laser", 250)
    assert not excinfo.value.expired
    assert excinfo.value.t_ns == 250


def test_target_side_extrapolation_raises() -> None:
    """Ensure an unresolvable edge on the target side is reported."""
    resolver: TransformResolver = TransformResolver(_robot_graph())
    with pytest.raises(ExtrapolationError):
        resolver.resolve("laser", "map", 250)


def test_expired_query_is_flagged() -> None:
    """Ensure queries older than the cache horizon are marked expired."""
    graph: FrameGraph = _robot_graph()
    _insert(graph, "odom", "map", 20_000_000_000, [1.0, 0.0, 0.0])
    resolver: TransformResolver = TransformResolver(graph)
    with pytest.raises(ExtrapolationError) as excinfo:
        resolver.resolve("map", "odom", 50)
    assert excinfo.value.expired


def test_can_resolve_agrees_with_resolve() -> None:
    """Ensure can_resolve reports exactly the queries resolve serves."""
    resolver: TransformResolver = TransformResolver(_robot_graph())
    queries: list[tuple[str, str, int]] = [
        ("map", "laser", 150),
        ("map", "laser", 250),
        ("camera", "laser", 0),
        ("map", "gripper", 150),
        ("map", "base", 50),
    ]
    for target, source, t_ns in queries:
        try:
            resolver.resolve(target, source, t_ns)
            expected: bool = True
        except TransformerError:
            expected = False
        assert resolver.can_resolve(target, source, t_ns) == expected


def test_negative_time_rejected() -> None:
    """Ensure negative query times raise a transformer error."""
    resolver: TransformResolver = TransformResolver(_robot_graph())
    with pytest.raises(TransformerError):
        resolver.resolve("map", "base", -1)


def test_reparenting_over_time() -> None:
    """Ensure the ancestor chain follows the parent valid at each time."""
    graph: FrameGraph = FrameGraph(TransformerConfig())
    _insert(graph, "table", "map", 0, [10.0, 0.0, 0.0], is_static=True)
    _insert(graph, "robot", "map", 0, [-5.0, 0.0, 0.0], is_static=True)
    _insert(graph, "cup", "table", 100, [1.0, 0.0, 0.0])
    _insert(graph, "cup", "robot", 200, [0.0, 0.0, 1.0])
    resolver: TransformResolver = TransformResolver(graph)

    on_table: Transform = resolver.resolve("map", "cup", 100)
    np.testing.assert_allclose(on_table.translation, [11.0, 0.0, 0.0])
    held: Transform = resolver.resolve("map", "cup", 200)
    np.testing.assert_allclose(held.translation, [-5.0, 0.0, 1.0])
    between: Transform = resolver.resolve("map", "cup", 150)
    np.testing.assert_allclose(between.translation, [11.0, 0.0, 0.0])


def test_resolve_full_through_fixed_frame() -> None:
    """Ensure a time-travel lookup relates two times through a fixed frame."""
    resolver: TransformResolver = TransformResolver(_robot_graph())
    result: Transform = resolver.resolve_full("base", 200, "base", 100, "odom")

    # base moved one meter along odom +X, which is its own -Y axis, so the
    # old pose lies at +Y in the new base frame
    np.testing.assert_allclose(result.translation, [0.0, 1.0, 0.0], atol=1e-9)
    assert result.rotation.almost_equal(Quaternion.identity())
    assert result.t_ns == 200


def test_resolve_full_matches_direct_lookup_at_equal_times() -> None:
    """Ensure equal times through any fixed frame match the direct lookup."""
    resolver: TransformResolver = TransformResolver(_robot_graph())
    direct: Transform = resolver.resolve("camera", "odom", 150)
    full: Transform = resolver.resolve_full("camera", 150, "odom", 150, "map")
    assert full.transform.almost_equal(direct.transform)
    assert resolver.can_resolve_full("camera", 150, "odom", 150, "map")
    assert not resolver.can_resolve_full("camera", 150, "odom", 150, "nowhere")
