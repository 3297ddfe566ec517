import numpy as np
import pytest

from droppoint.catalog.maps import get_map, meters_per_unit, radius_to_units
from droppoint.config.settings import Settings, get_settings
from droppoint.core.geo import Point
from droppoint.domain.models import DropRequest
from droppoint.planner.drop import find_drop_point, plan_drop
from droppoint.terrain.store import save_map_mask

# On an 8 km map drawn on a 900-unit canvas, this many meters is exactly 10 world units.
TEN_UNITS_ON_8KM_M = 10 * 8000 / 900


def _request(**kwargs) -> DropRequest:
    payload = {
        "start": {"x": 0, "y": 0},
        "end": {"x": 100, "y": 0},
        "target": {"x": 50, "y": 0},
        "map_id": "erangel",
        "radius_m": TEN_UNITS_ON_8KM_M,
    }
    payload.update(kwargs)
    return DropRequest.model_validate(payload)


def _settings_with_mask_dir(path) -> Settings:
    payload = get_settings().model_dump(mode="python")
    payload["terrain"]["mask_dir"] = str(path)
    return Settings.model_validate(payload)


def test_find_drop_point_delegates_to_the_scan():
    result = find_drop_point(Point(0, 0), Point(100, 0), Point(50, 0), 10, lambda p: True)

    assert result is not None
    assert result.t == pytest.approx(0.4)
    assert (result.x, result.y) == pytest.approx((40, 0))


def test_find_drop_point_returns_none_when_circle_is_missed():
    assert find_drop_point(Point(0, 0), Point(10, 0), Point(100, 100), 5, lambda p: True) is None


def test_map_scale_conversion():
    settings = get_settings()
    erangel = get_map(settings, "erangel")
    karakin = get_map(settings, "Karakin")

    assert meters_per_unit(erangel, canvas_units=900) == pytest.approx(8000 / 900)
    assert meters_per_unit(karakin, canvas_units=900) == pytest.approx(2000 / 900)
    assert radius_to_units(700, erangel, canvas_units=900) == pytest.approx(78.75)
    with pytest.raises(ValueError):
        radius_to_units(-1, erangel, canvas_units=900)


def test_unknown_map_is_rejected():
    with pytest.raises(ValueError, match="Unknown map 'atlantis'"):
        get_map(get_settings(), "atlantis")
    with pytest.raises(ValueError, match="Unknown map"):
        plan_drop(_request(map_id="atlantis"), settings=get_settings(), classifier=lambda p: True)


def test_plan_drop_with_custom_classifier():
    plan = plan_drop(_request(), settings=get_settings(), classifier=lambda p: p.x >= 55)

    assert plan.map.id == "erangel"
    assert plan.radius_units == pytest.approx(10)
    assert plan.interval.t_in == pytest.approx(0.4)
    assert plan.interval.t_out == pytest.approx(0.6)
    assert plan.drop is not None
    assert plan.drop.x == pytest.approx(55, abs=1e-2)
    assert plan.drop.t == pytest.approx(0.55, abs=1e-4)
    assert plan.distance_to_target_m == pytest.approx(5 * 8000 / 900, rel=1e-3)
    assert plan.meta["classifier"] == "custom"
    assert plan.meta["classifier_calls"] > 14


def test_plan_drop_uses_configured_defaults():
    request = DropRequest.model_validate(
        {"start": {"x": 0, "y": 450}, "end": {"x": 900, "y": 450}, "target": {"x": 450, "y": 450}}
    )

    plan = plan_drop(request, settings=get_settings(), classifier=lambda p: True)

    assert plan.map.id == "erangel"
    assert plan.radius_m == 700
    assert plan.radius_units == pytest.approx(78.75)
    assert plan.drop.x == pytest.approx(450 - 78.75)
    assert plan.distance_to_target_m == pytest.approx(700)


def test_plan_drop_without_mask_lands_at_circle_entry(tmp_path):
    settings = _settings_with_mask_dir(tmp_path)
    save_map_mask(settings, "erangel", np.zeros((900, 900), dtype=np.uint8))

    plan = plan_drop(_request(use_mask=False), settings=settings)

    assert plan.meta["classifier"] == "none"
    assert plan.meta["classifier_calls"] == 1
    assert plan.drop.t == plan.interval.t_in


def test_plan_drop_reads_the_stored_map_mask(tmp_path):
    settings = _settings_with_mask_dir(tmp_path)
    alpha = np.zeros((900, 900), dtype=np.uint8)
    alpha[:, 55:] = 255
    save_map_mask(settings, "erangel", alpha)

    plan = plan_drop(_request(), settings=settings)

    assert plan.meta["classifier"] == "mask"
    # Pixel 55 covers x in [54.5, 55.5) once points are rounded to the nearest pixel.
    assert plan.drop.x == pytest.approx(54.5, abs=1e-2)


def test_plan_drop_reports_no_drop_over_water():
    plan = plan_drop(_request(), settings=get_settings(), classifier=lambda p: False)

    assert plan.interval is not None
    assert plan.drop is None
    assert plan.distance_to_target_m is None


def test_plan_drop_reports_missed_circle():
    plan = plan_drop(
        _request(target={"x": 500, "y": 500}), settings=get_settings(), classifier=lambda p: True
    )

    assert plan.interval is None
    assert plan.drop is None
    assert plan.meta["classifier_calls"] == 0


def test_plan_drop_applies_request_overrides():
    plan = plan_drop(
        _request(settings_overrides={"scan": {"bisect_iterations": 0}}),
        settings=get_settings(),
        classifier=lambda p: p.x >= 55,
    )

    # No bisection: the first land sample on the 2-unit grid is returned.
    assert plan.drop.x == pytest.approx(56)
    assert plan.meta["scan"]["bisect_iterations"] == 0


def test_plan_drop_rejects_disallowed_overrides():
    with pytest.raises(ValueError, match=r"terrain\.mask_dir"):
        plan_drop(
            _request(settings_overrides={"terrain": {"mask_dir": "/"}}),
            settings=get_settings(),
            classifier=lambda p: True,
        )


def test_non_finite_coordinates_are_rejected():
    with pytest.raises(ValueError):
        _request(start={"x": float("nan"), "y": 0})


def test_plan_drop_goes_through_find_drop_point(monkeypatch):
    import droppoint.planner.drop as drop_module

    seen = []
    real = drop_module.find_drop_point

    def recording(*args, **kwargs):
        result = real(*args, **kwargs)
        seen.append(result)
        return result

    monkeypatch.setattr(drop_module, "find_drop_point", recording)

    plan = plan_drop(_request(use_mask=False))

    assert len(seen) == 1
    assert plan.drop is not None
    assert (plan.drop.x, plan.drop.t) == pytest.approx((seen[0].x, seen[0].t))


def test_plan_drop_rejects_scan_step_override():
    with pytest.raises(ValueError, match=r"scan\.step_units"):
        plan_drop(_request(use_mask=False, settings_overrides={"scan": {"step_units": 1e-4}}))
