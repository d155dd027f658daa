import pytest

from astrocore.services import layout
from astrocore.services.constants import CelestialBody
from astrocore.services.models import LayoutPoint

BODIES = list(CelestialBody)


def _points(lons, owner="A"):
    return [LayoutPoint(body=BODIES[i], longitude=lon, owner=owner) for i, lon in enumerate(lons)]


def test_cluster_gets_stacked_tracks_and_outlier_is_isolated():
    entries = layout.resolve_layout(_points([0.0, 2.0, 4.0, 6.0, 100.0]))
    assert [e.point.longitude for e in entries] == [0.0, 2.0, 4.0, 6.0, 100.0]
    # 6° is exactly the threshold away from 0°, so it may reuse track 0.
    assert [e.track for e in entries] == [0, 1, 2, 0, 0]
    assert [e.isolated for e in entries] == [False, False, False, False, True]


def test_single_point_is_isolated_on_track_zero():
    (entry,) = layout.resolve_layout(_points([123.0]))
    assert entry.track == 0
    assert entry.isolated is True


def test_empty_input():
    assert layout.resolve_layout([]) == []


def test_entries_are_sorted_by_longitude():
    entries = layout.resolve_layout(_points([200.0, 10.0, 90.0]))
    assert [e.point.body for e in entries] == [BODIES[1], BODIES[2], BODIES[0]]
    assert all(e.track == 0 and e.isolated for e in entries)


def test_isolation_looks_across_the_seam():
    entries = layout.resolve_layout(_points([355.0, 5.0, 180.0]))
    by_lon = {e.point.longitude: e for e in entries}
    assert by_lon[355.0].isolated is False
    assert by_lon[5.0].isolated is False
    assert by_lon[180.0].isolated is True


def test_wraparound_patch_moves_first_point():
    entries = layout.resolve_layout(_points([1.0, 60.0, 120.0, 180.0, 240.0, 358.0]))
    assert [e.track for e in entries] == [1, 0, 0, 0, 0, 0]


def test_wraparound_without_shared_track_is_left_alone():
    entries = layout.resolve_layout(_points([1.0, 359.0]))
    assert [e.track for e in entries] == [0, 1]


def test_lookback_is_limited_to_four_neighbours():
    # Six points within 6° of each other: the sixth cannot see the first and
    # reuses track 0, which then triggers the seam patch on the first point.
    entries = layout.resolve_layout(_points([10.0, 10.5, 11.0, 11.5, 12.0, 12.5]))
    assert [e.track for e in entries] == [1, 1, 2, 3, 4, 0]


def test_equal_longitudes_keep_input_order():
    entries = layout.resolve_layout(_points([5.0, 5.0]))
    assert [e.point.body for e in entries] == [BODIES[0], BODIES[1]]
    assert [e.track for e in entries] == [0, 1]


def test_custom_min_separation():
    entries = layout.resolve_layout(_points([0.0, 8.0]), min_separation=10.0)
    assert [e.track for e in entries] == [0, 1]
    entries = layout.resolve_layout(_points([0.0, 8.0]), min_separation=6.0)
    assert [e.track for e in entries] == [0, 0]


def test_out_of_range_longitudes_are_normalized_for_placement():
    entries = layout.resolve_layout(_points([362.0, 1.0]))
    assert [e.point.longitude for e in entries] == [1.0, 2.0]
    assert [e.track for e in entries] == [0, 1]


def test_negative_longitudes_come_back_in_range():
    entries = layout.resolve_layout(_points([362.0, -10.0]))
    assert [e.point.longitude for e in entries] == [2.0, 350.0]
    assert all(0.0 <= e.point.longitude < 360.0 for e in entries)


def test_repeated_calls_reuse_cached_geometry():
    points = _points([30.0, 31.0, 33.0])
    first = layout.resolve_layout(points)
    hits = layout._resolve.cache_info().hits
    second = layout.resolve_layout(points)
    assert first == second
    assert layout._resolve.cache_info().hits == hits + 1


def test_owner_is_carried_through_and_max_track():
    entries = layout.resolve_layout(_points([0.0, 1.0, 2.0], owner="B"))
    assert {e.point.owner for e in entries} == {"B"}
    assert layout.max_track(entries) == 2
    assert layout.max_track([]) == 0
