################################################################################
#
#  Copyright (C) 2026 Garrett Brown
#  This file is part of OASIS - https://github.com/eigendude/OASIS
#
#  SPDX-License-Identifier: Apache-2.0
#  See DOCS/LICENSING.md for more information.
#
################################################################################

"""Tests for per-frame transform history."""

from __future__ import annotations

import math

import numpy as np
import pytest
from numpy.typing import NDArray

from oasis_transform.buffer.history_buffer import HistoryBuffer
from oasis_transform.buffer.history_buffer import LookupStatus
from oasis_transform.buffer.history_buffer import SampleLookup
from oasis_transform.errors.transformer_errors import TransformSampleError
from oasis_transform.math_utils.quat import Quaternion
from oasis_transform.math_utils.se3 import SE3
from oasis_transform.transform_types.extrapolation_policy import ExtrapolationPolicy
from oasis_transform.transform_types.transform_sample import TransformSample


CACHE_TIME_NS: int = 100


def _sample(
    t_ns: int,
    x: float,
    *,
    yaw_rad: float = 0.0,
    parent: str = "map",
    is_static: bool = False,
) -> TransformSample:
    z_axis: NDArray[np.float64] = np.array([0.0, 0.0, 1.0])
    rotation: Quaternion = Quaternion.from_axis_angle(z_axis, yaw_rad)
    return TransformSample(
        child_frame="base",
        parent_frame=parent,
        t_ns=t_ns,
        transform=SE3(rotation, np.array([x, 0.0, 0.0])),
        is_static=is_static,
    )


def _make_buffer(
    policy: ExtrapolationPolicy = ExtrapolationPolicy.DISALLOW,
    *,
    max_length: int = 1000,
    max_extrapolation_ns: int = 0,
) -> HistoryBuffer:
    return HistoryBuffer(
        "base",
        cache_time_ns=CACHE_TIME_NS,
        max_length=max_length,
        policy=policy,
        max_extrapolation_ns=max_extrapolation_ns,
    )


def _x_at(buffer: HistoryBuffer, t_ns: int) -> float:
    lookup: SampleLookup = buffer.sample_at(t_ns)
    assert lookup.ok, lookup.message
    assert lookup.sample is not None
    return float(lookup.sample.translation[0])


def test_empty_buffer_has_no_data() -> None:
    """Ensure an empty buffer reports missing data."""
    buffer: HistoryBuffer = _make_buffer()
    assert buffer.is_empty()
    assert buffer.sample_at(0).status is LookupStatus.NO_DATA
    assert buffer.sample_at(5).status is LookupStatus.NO_DATA


def test_interpolates_between_samples() -> None:
    """Ensure translation is lerped and rotation is slerped between samples."""
    buffer: HistoryBuffer = _make_buffer()
    buffer.insert(_sample(10, 0.0))
    buffer.insert(_sample(20, 10.0, yaw_rad=math.pi / 2.0))

    lookup: SampleLookup = buffer.sample_at(15)
    assert lookup.ok
    assert lookup.sample is not None
    assert lookup.sample.t_ns == 15
    np.testing.assert_allclose(lookup.sample.translation, [5.0, 0.0, 0.0])
    assert lookup.sample.rotation.angle_rad() == pytest.approx(math.pi / 4.0)


def test_exact_stamps_return_stored_samples() -> None:
    """Ensure queries at stored stamps return those samples unmodified."""
    buffer: HistoryBuffer = _make_buffer()
    first: TransformSample = _sample(10, 1.0)
    second: TransformSample = _sample(20, 2.0)
    buffer.insert(second)
    buffer.insert(first)
    assert buffer.sample_at(10).sample == first
    assert buffer.sample_at(20).sample == second
    assert [sample.t_ns for sample in buffer.samples()] == [10, 20]


def test_latest_query_returns_newest_sample() -> None:
    """Ensure a zero query time returns the newest sample."""
    buffer: HistoryBuffer = _make_buffer()
    buffer.insert(_sample(10, 1.0))
    buffer.insert(_sample(30, 3.0))
    buffer.insert(_sample(20, 2.0))
    lookup: SampleLookup = buffer.sample_at(0)
    assert lookup.sample is not None
    assert lookup.sample.t_ns == 30
    assert buffer.latest_stamp() == 30
    assert buffer.oldest_stamp() == 10


def test_duplicate_stamp_overwrites() -> None:
    """Ensure the latest write at a timestamp wins."""
    buffer: HistoryBuffer = _make_buffer()
    buffer.insert(_sample(10, 1.0))
    buffer.insert(_sample(10, 7.0))
    assert len(buffer) == 1
    assert _x_at(buffer, 10) == pytest.approx(7.0)


def test_stale_sample_rejected() -> None:
    """Ensure samples older than the cache horizon are rejected."""
    buffer: HistoryBuffer = _make_buffer()
    assert buffer.insert(_sample(500, 0.0))
    assert not buffer.insert(_sample(399, 0.0))
    assert buffer.insert(_sample(400, 0.0))
    assert len(buffer) == 2


def test_prunes_outside_cache_horizon() -> None:
    """Ensure newer samples evict samples older than the cache horizon."""
    buffer: HistoryBuffer = _make_buffer()
    buffer.insert(_sample(10, 0.0))
    buffer.insert(_sample(60, 0.0))
    buffer.insert(_sample(150, 0.0))
    assert [sample.t_ns for sample in buffer.samples()] == [60, 150]


def test_prunes_to_max_length() -> None:
    """Ensure the oldest samples are dropped beyond the length cap."""
    buffer: HistoryBuffer = _make_buffer(max_length=3)
    for t_ns in (10, 20, 30, 40, 50):
        buffer.insert(_sample(t_ns, float(t_ns)))
    assert [sample.t_ns for sample in buffer.samples()] == [30, 40, 50]


def test_full_buffer_refuses_samples_older_than_all_stored() -> None:
    """Ensure a sample that would be pruned on arrival is reported as not kept."""
    buffer: HistoryBuffer = _make_buffer(max_length=3)
    for t_ns in (30, 40, 50):
        assert buffer.insert(_sample(t_ns, float(t_ns)))

    assert not buffer.insert(_sample(20, 20.0))
    assert [sample.t_ns for sample in buffer.samples()] == [30, 40, 50]

    assert buffer.insert(_sample(35, 35.0))
    assert [sample.t_ns for sample in buffer.samples()] == [35, 40, 50]


def test_disallow_future_is_not_yet_available() -> None:
    """Ensure queries after the newest sample wait for data."""
    buffer: HistoryBuffer = _make_buffer()
    buffer.insert(_sample(10, 0.0))
    buffer.insert(_sample(20, 1.0))
    lookup: SampleLookup = buffer.sample_at(21)
    assert lookup.status is LookupStatus.NOT_YET_AVAILABLE
    assert "future" in lookup.message


def test_disallow_past_inside_horizon_is_not_yet_available() -> None:
    """Ensure a gap before the oldest sample but inside the horizon may fill."""
    buffer: HistoryBuffer = _make_buffer()
    buffer.insert(_sample(150, 0.0))
    buffer.insert(_sample(200, 1.0))
    assert buffer.sample_at(120).status is LookupStatus.NOT_YET_AVAILABLE


def test_disallow_past_outside_horizon_is_expired() -> None:
    """Ensure queries older than the cache horizon are expired."""
    buffer: HistoryBuffer = _make_buffer()
    buffer.insert(_sample(150, 0.0))
    buffer.insert(_sample(200, 1.0))
    lookup: SampleLookup = buffer.sample_at(50)
    assert lookup.status is LookupStatus.EXPIRED
    assert "past" in lookup.message


def test_clamp_returns_boundary_samples() -> None:
    """Ensure clamping holds the nearest boundary value."""
    buffer: HistoryBuffer = _make_buffer(ExtrapolationPolicy.CLAMP)
    buffer.insert(_sample(10, 1.0))
    buffer.insert(_sample(20, 2.0))
    assert _x_at(buffer, 5) == pytest.approx(1.0)
    assert _x_at(buffer, 1000) == pytest.approx(2.0)
    assert buffer.sample_at(1000).sample.t_ns == 1000  # type: ignore[union-attr]


def test_linear_projects_within_limit() -> None:
    """Ensure linear extrapolation continues the motion up to the limit."""
    buffer: HistoryBuffer = _make_buffer(
        ExtrapolationPolicy.LINEAR, max_extrapolation_ns=10
    )
    buffer.insert(_sample(10, 1.0))
    buffer.insert(_sample(20, 2.0))
    assert _x_at(buffer, 25) == pytest.approx(2.5)
    assert _x_at(buffer, 5) == pytest.approx(0.5)
    assert buffer.sample_at(31).status is LookupStatus.NOT_YET_AVAILABLE


def test_linear_projects_rotation() -> None:
    """Ensure linear extrapolation continues the yaw rate in both directions."""
    buffer: HistoryBuffer = _make_buffer(
        ExtrapolationPolicy.LINEAR, max_extrapolation_ns=10
    )
    buffer.insert(_sample(10, 1.0))
    buffer.insert(_sample(20, 2.0, yaw_rad=math.pi / 4.0))

    future: SampleLookup = buffer.sample_at(25)
    assert future.sample is not None
    expected_future: Quaternion = Quaternion.from_axis_angle(
        np.array([0.0, 0.0, 1.0]), 3.0 * math.pi / 8.0
    )
    assert future.sample.rotation.almost_equal(expected_future)

    past: SampleLookup = buffer.sample_at(5)
    assert past.sample is not None
    expected_past: Quaternion = Quaternion.from_axis_angle(
        np.array([0.0, 0.0, 1.0]), -math.pi / 8.0
    )
    assert past.sample.rotation.almost_equal(expected_past)


def test_linear_single_sample_holds_constant() -> None:
    """Ensure a lone sample is projected as constant."""
    buffer: HistoryBuffer = _make_buffer(
        ExtrapolationPolicy.LINEAR, max_extrapolation_ns=10
    )
    buffer.insert(_sample(10, 4.0))
    assert _x_at(buffer, 15) == pytest.approx(4.0)


def test_static_sample_valid_at_all_times() -> None:
    """Ensure a static sample answers any query time."""
    buffer: HistoryBuffer = _make_buffer()
    buffer.insert(_sample(10, 1.0))
    buffer.insert(_sample(0, 3.0, is_static=True))
    assert buffer.is_static()
    assert len(buffer) == 1
    assert _x_at(buffer, 1) == pytest.approx(3.0)
    assert _x_at(buffer, 10**12) == pytest.approx(3.0)
    assert buffer.sample_at(0).sample.t_ns == 0  # type: ignore[union-attr]


def test_dynamic_sample_replaces_static() -> None:
    """Ensure a dynamic sample ends static validity."""
    buffer: HistoryBuffer = _make_buffer()
    buffer.insert(_sample(0, 3.0, is_static=True))
    buffer.insert(_sample(10, 1.0))
    assert not buffer.is_static()
    assert buffer.sample_at(20).status is LookupStatus.NOT_YET_AVAILABLE


def test_reparent_holds_earlier_parent_until_next_sample() -> None:
    """Ensure a parent change is not interpolated across."""
    buffer: HistoryBuffer = _make_buffer()
    buffer.insert(_sample(10, 1.0, parent="map"))
    buffer.insert(_sample(20, 9.0, parent="odom"))
    lookup: SampleLookup = buffer.sample_at(15)
    assert lookup.sample is not None
    assert lookup.sample.parent_frame == "map"
    np.testing.assert_allclose(lookup.sample.translation, [1.0, 0.0, 0.0])
    later: SampleLookup = buffer.sample_at(20)
    assert later.sample is not None
    assert later.sample.parent_frame == "odom"


def test_rejects_sample_for_other_frame() -> None:
    """Ensure a buffer only accepts samples for its own frame."""
    buffer: HistoryBuffer = _make_buffer()
    other: TransformSample = TransformSample(
        child_frame="arm", parent_frame="base", t_ns=1, transform=SE3.identity()
    )
    with pytest.raises(TransformSampleError):
        buffer.insert(other)
