import math

import pytest

from assassin.arena import MIN_REFLECTION_LENGTH
from assassin.geometry import Ray, Vector


def test_split_reflects_off_right_wall(square):
    split = square.split_ray(Ray(Vector(0, 0), Vector(1, 0), 1000))
    start, end = split.segment
    assert start == Vector(0, 0)
    assert end == Vector(200, 0)
    assert split.ray is not None
    assert split.ray.center == Vector(200, 0)
    assert split.ray.direction == Vector(-1, 0)
    assert split.ray.length == pytest.approx(800)


def test_short_ray_is_a_single_segment(square):
    points = square.ray_to_points(Ray(Vector(0, 0), Vector(0, 1), 50), [])
    assert len(points) == 2
    assert points[0] == Vector(0, 0)
    assert points[1].x == pytest.approx(0)
    assert points[1].y == pytest.approx(50)


def test_too_short_remainder_runs_past_the_wall(square):
    # Wall at 200; only 5 units would be left to reflect.
    split = square.split_ray(Ray(Vector(0, 0), Vector(1, 0), 205))
    assert split.ray is None
    assert split.segment[1].x == pytest.approx(205)


def test_remainder_at_threshold_still_reflects(square):
    split = square.split_ray(Ray(Vector(0, 0), Vector(1, 0), 200 + MIN_REFLECTION_LENGTH))
    assert split.ray is not None
    assert split.ray.length == pytest.approx(MIN_REFLECTION_LENGTH)


def test_back_and_forth_path(square):
    trace = square.trace(Ray(Vector(0, 0), Vector(1, 0), 1000))
    xs = [p.x for p in trace.points]
    assert xs == pytest.approx([0, 200, -200, 200])
    assert trace.bounces == 2
    assert not trace.stopped
    assert trace.length == pytest.approx(1000)


def test_corner_sends_ray_back(square):
    trace = square.trace(Ray(Vector(0, 0), Vector(1, 1), 400))
    last = trace.points[-1]
    assert trace.points[1].x == pytest.approx(200)
    assert trace.points[1].y == pytest.approx(200)
    # 200*sqrt(2) to the corner, the rest straight back.
    assert last.x == pytest.approx(400 - 400 / math.sqrt(2))
    assert last.y == pytest.approx(last.x)


@pytest.mark.parametrize("deg", [3, 17, 33, 61, 100, 151, 222, 299, 344])
@pytest.mark.parametrize("length", [50, 333, 2500, 9000])
def test_trace_properties(wide_rect, deg, length):
    th = math.radians(deg)
    ray = Ray(Vector(100, 0), Vector(math.cos(th), math.sin(th)), length)
    trace = wide_rect.trace(ray)

    assert trace.points[0] == ray.center
    seg_lengths = [a.distance(b) for a, b in trace.segments()]
    assert all(s > 0 for s in seg_lengths)
    total = sum(seg_lengths)
    assert total == pytest.approx(trace.length)
    assert total <= length + MIN_REFLECTION_LENGTH
    assert total >= length - 1e-6
    # Every bounce vertex is on the boundary.
    for p in trace.points[1:-1]:
        assert wide_rect.contains(p)
        wide_rect.is_on_vertical_wall(p)


@pytest.mark.parametrize("deg", [12, 45.5, 80, 135, 260])
def test_reflected_direction_stays_unit(square, deg):
    th = math.radians(deg)
    ray = Ray(Vector(-37, 81), Vector(math.cos(th), math.sin(th)), 5000)
    while ray is not None:
        assert ray.direction.norm() == pytest.approx(1.0)
        ray = square.split_ray(ray).ray


def test_stopping_point_truncates_path(square):
    guard = Vector(100, 0, "guard")
    trace = square.trace(Ray(Vector(0, 0), Vector(1, 0), 1000), [guard], stop_radius=6)
    assert trace.stopped_by is guard
    assert trace.bounces == 0
    assert trace.points[-1].x == pytest.approx(94)
    assert trace.length == pytest.approx(94)


def test_stopping_point_after_a_bounce(square):
    # Up-right to (200, 100), then up-left through the guard.
    guard = Vector(150, 150)
    trace = square.trace(Ray(Vector(0, -100), Vector(1, 1), 1000), [guard], stop_radius=5)
    assert trace.bounces == 1
    assert trace.points[1].x == pytest.approx(200)
    assert trace.points[1].y == pytest.approx(100)
    assert trace.points[-1].x == pytest.approx(150 + 5 / math.sqrt(2))
    assert trace.points[-1].y == pytest.approx(150 - 5 / math.sqrt(2))
    assert trace.length == pytest.approx(250 * math.sqrt(2) - 5)


def test_nearest_stopping_point_wins(square):
    far = Vector(150, 1)
    near = Vector(60, -2)
    trace = square.trace(Ray(Vector(0, 0), Vector(1, 0), 1000), [far, near])
    assert trace.stopped_by is near


def test_stopping_point_at_origin_is_ignored(square):
    me = Vector(0, 0)
    trace = square.trace(Ray(Vector(0, 0), Vector(1, 0), 300), [me])
    assert not trace.stopped
    assert trace.bounces == 1


def test_disc_around_origin_stops_returning_shot(square):
    # Skipped while leaving the shooter, but hit on the way back from x=200.
    beside = Vector(-3, 0)
    trace = square.trace(Ray(Vector(0, 0), Vector(1, 0), 1000), [beside])
    assert trace.stopped_by is beside
    assert trace.bounces == 1
    assert trace.points[1] == Vector(200, 0)
    assert trace.points[-1].x == pytest.approx(3)
    assert trace.points[-1].y == pytest.approx(0)
    assert trace.length == pytest.approx(200 + 197)


def test_stopping_point_beyond_length_is_missed(square):
    trace = square.trace(Ray(Vector(0, 0), Vector(0, 1), 50), [Vector(0, 120)])
    assert not trace.stopped
    assert trace.points[-1].y == pytest.approx(50)


def test_ray_to_points_matches_trace(square):
    ray = Ray(Vector(10, 20), Vector(2, 1), 1500)
    stops = [Vector(-100, 150)]
    assert square.ray_to_points(ray, stops) == square.trace(ray, stops).points
