import pytest

from droppoint.core.circle import inside_interval
from droppoint.core.geo import Circle, Point, Segment
from droppoint.core.landing import earliest_land_point


class RecordingClassifier:
    """Deterministic classifier that records every point it is asked about."""

    def __init__(self, predicate):
        self._predicate = predicate
        self.points: list[Point] = []

    def __call__(self, point: Point) -> bool:
        self.points.append(point)
        return bool(self._predicate(point))


SEGMENT = Segment(Point(0, 0), Point(100, 0))
CIRCLE = Circle(Point(50, 0), 10)


def test_land_everywhere_returns_circle_entry():
    result = earliest_land_point(SEGMENT, CIRCLE, lambda p: True)

    assert result is not None
    assert result.t == pytest.approx(0.4)
    assert (result.x, result.y) == pytest.approx((40, 0))


def test_land_everywhere_returns_interval_start_exactly_with_one_call():
    is_land = RecordingClassifier(lambda p: True)

    result = earliest_land_point(SEGMENT, CIRCLE, is_land)

    assert result.t == inside_interval(SEGMENT, CIRCLE).normalized().t_in
    assert len(is_land.points) == 1


def test_water_to_land_edge_is_refined_by_bisection():
    result = earliest_land_point(SEGMENT, CIRCLE, lambda p: p.x >= 55)

    assert result is not None
    assert result.t == pytest.approx(0.55, abs=1e-4)
    assert result.x == pytest.approx(55, abs=1e-2)
    # The land side of the final bracket is returned.
    assert result.x >= 55


def test_circle_far_from_path_returns_none():
    segment = Segment(Point(0, 0), Point(10, 0))

    assert earliest_land_point(segment, Circle(Point(100, 100), 5), lambda p: True) is None


def test_always_water_returns_none_with_bounded_calls():
    is_land = RecordingClassifier(lambda p: False)

    assert earliest_land_point(SEGMENT, CIRCLE, is_land) is None
    # 20 units inside the circle at a 2-unit step: entry + 10 samples.
    assert len(is_land.points) <= 12
    assert all(38 <= p.x <= 62 for p in is_land.points)


def test_zero_length_segment_tests_the_single_point():
    segment = Segment(Point(0, 0), Point(0, 0))
    circle = Circle(Point(1, 1), 5)

    is_land = RecordingClassifier(lambda p: True)
    result = earliest_land_point(segment, circle, is_land)
    assert result is not None
    assert (result.x, result.y, result.t) == (0, 0, 0)
    assert is_land.points == [Point(0, 0)]

    is_water = RecordingClassifier(lambda p: False)
    assert earliest_land_point(segment, circle, is_water) is None
    assert set(is_water.points) == {Point(0, 0)}


def test_repeated_calls_are_identical():
    first = earliest_land_point(SEGMENT, CIRCLE, lambda p: p.x >= 55)
    second = earliest_land_point(SEGMENT, CIRCLE, lambda p: p.x >= 55)

    assert first == second


def test_direction_of_travel_decides_which_land_is_earliest():
    reverse = Segment(Point(100, 0), Point(0, 0))

    east_land = earliest_land_point(reverse, CIRCLE, lambda p: p.x >= 55)
    assert east_land.t == pytest.approx(0.4)
    assert east_land.x == pytest.approx(60)

    west_land = earliest_land_point(reverse, CIRCLE, lambda p: p.x <= 45)
    assert west_land.t == pytest.approx(0.55, abs=1e-4)
    assert west_land.x == pytest.approx(45, abs=1e-2)


def test_scan_always_samples_the_circle_exit():
    # Inside span is x=40.5..59.5; a 2-unit step from 40.5 would jump past 59.5.
    circle = Circle(Point(50, 0), 9.5)

    result = earliest_land_point(SEGMENT, circle, lambda p: p.x >= 59)

    assert result is not None
    assert result.x == pytest.approx(59, abs=1e-3)


def test_land_narrower_than_the_scan_step_can_be_missed():
    # Samples fall on x=40, 42, 44, 46, ... so a 0.4-unit islet at 45.3..45.7 is not seen.
    result = earliest_land_point(SEGMENT, CIRCLE, lambda p: 45.3 <= p.x <= 45.7)

    assert result is None


def test_custom_step_and_iterations():
    result = earliest_land_point(SEGMENT, CIRCLE, lambda p: p.x >= 55, step_units=4.0, bisect_iterations=0)

    # With no bisection the first land sample is returned: x = 40 + 4 * 4.
    assert result.x == pytest.approx(56)


def test_non_positive_step_is_rejected():
    with pytest.raises(ValueError, match="step_units"):
        earliest_land_point(SEGMENT, CIRCLE, lambda p: False, step_units=0)


def test_zero_radius_on_the_path_returns_the_centre():
    # A zero-radius circle touches the path at one point: a tangent span of +-1e-6 around t=0.5.
    result = earliest_land_point(SEGMENT, Circle(Point(50, 0), 0), lambda p: True)

    assert result is not None
    assert result.t == pytest.approx(0.5, abs=1e-5)
    assert result.x == pytest.approx(50, abs=1e-3)
    assert result.y == pytest.approx(0)


def test_zero_radius_off_the_path_returns_none():
    classifier = RecordingClassifier(lambda p: True)

    assert earliest_land_point(SEGMENT, Circle(Point(50, 1), 0), classifier) is None
    assert classifier.points == []


def test_zero_radius_over_water_returns_none():
    assert earliest_land_point(SEGMENT, Circle(Point(50, 0), 0), lambda p: False) is None
