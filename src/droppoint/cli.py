"""
DropPoint CLI entrypoint.

This CLI is intended for quick local checks without the HTTP API.
It delegates all drop logic to `droppoint.planner.drop.plan_drop`.
"""

from __future__ import annotations

import argparse
import json
from typing import Any

import numpy as np

from droppoint.catalog.maps import get_map, list_maps, meters_per_unit
from droppoint.config.settings import get_settings
from droppoint.core.env import resolve_project_path
from droppoint.core.logging import configure_logging
from droppoint.domain.models import DropRequest, WorldPoint
from droppoint.planner.drop import plan_drop
from droppoint.planner.explain import one_line_summary
from droppoint.terrain.auto_mask import water_mask_from_rgb
from droppoint.terrain.mask import MaskClassifier
from droppoint.terrain.store import save_map_mask


def _parse_point(value: str) -> WorldPoint:
    """Parse an `X,Y` CLI argument into a WorldPoint."""
    if "," not in value:
        raise argparse.ArgumentTypeError(f"Invalid point '{value}', expected X,Y")
    x, y = value.split(",", 1)
    try:
        return WorldPoint(x=float(x), y=float(y))
    except ValueError as e:
        raise argparse.ArgumentTypeError(f"Invalid point '{value}': {e}") from e


def _parse_radius(value: str) -> float:
    try:
        radius = float(value)
    except ValueError as e:
        raise argparse.ArgumentTypeError(f"Invalid radius '{value}'") from e
    if not radius >= 0 or radius == float("inf"):
        raise argparse.ArgumentTypeError(f"Radius must be a finite number >= 0; got '{value}'")
    return radius


def _cmd_plan(args: argparse.Namespace) -> int:
    """Handle the `plan` subcommand."""
    settings = get_settings()

    classifier = None
    if args.mask:
        alpha = np.load(resolve_project_path(args.mask), allow_pickle=False)
        classifier = MaskClassifier(alpha, threshold=settings.terrain.alpha_threshold)

    request = DropRequest(
        start=args.start,
        end=args.end,
        target=args.target,
        map_id=args.map,
        radius_m=float(args.radius_m) if args.radius_m is not None else None,
        use_mask=not args.no_mask,
    )
    plan = plan_drop(request, settings=settings, classifier=classifier)

    if args.json:
        print(json.dumps(plan.model_dump(mode="json"), ensure_ascii=False, indent=2))
        return 0

    print(one_line_summary(plan))
    return 0


def _cmd_maps(_: argparse.Namespace) -> int:
    settings = get_settings()
    canvas_units = settings.world.canvas_units
    for m in list_maps(settings):
        mpu = meters_per_unit(m, canvas_units=canvas_units)
        print(f"{m.id:<10} {m.label:<10} {m.size_km:g}km  {mpu:.3f} m/unit")
    options = settings.drop.radius_options_m()
    print(f"radius options: {options[0]}..{options[-1]}m (step {settings.drop.radius_step_m}m)")
    return 0


def _cmd_auto_mask(args: argparse.Namespace) -> int:
    settings = get_settings()
    rgb = np.load(resolve_project_path(args.rgb), allow_pickle=False)
    thresholds = settings.terrain.auto_water
    alpha = water_mask_from_rgb(
        rgb,
        h_min=thresholds.h_min,
        h_max=thresholds.h_max,
        s_min=thresholds.s_min,
        v_min=thresholds.v_min,
    )

    if args.out:
        out_path = resolve_project_path(args.out)
        out_path.parent.mkdir(parents=True, exist_ok=True)
        np.save(out_path, alpha, allow_pickle=False)
    else:
        out_path = save_map_mask(settings, get_map(settings, args.map).id, alpha)

    water_share = float((alpha == 0).mean()) if alpha.size else 0.0
    print(f"mask: {out_path} ({alpha.shape[1]}x{alpha.shape[0]}, water={water_share:.1%})")
    return 0


def build_parser() -> argparse.ArgumentParser:
    """Build the argparse parser for the DropPoint CLI."""
    parser = argparse.ArgumentParser(prog="droppoint")
    sub = parser.add_subparsers(dest="command", required=True)

    plan = sub.add_parser("plan", help="Find the earliest land drop point along a flight path.")
    plan.add_argument("--start", required=True, type=_parse_point, help="Flight path start X,Y (world units)")
    plan.add_argument("--end", required=True, type=_parse_point, help="Flight path end X,Y (world units)")
    plan.add_argument("--target", required=True, type=_parse_point, help="Drop target X,Y (world units)")
    plan.add_argument("--map", type=str, default=None, help="Map id (see `droppoint maps`)")
    plan.add_argument("--radius-m", type=_parse_radius, default=None, help="Drop radius in meters")
    plan.add_argument("--mask", type=str, default=None, help="Alpha mask .npy to use instead of the stored one")
    plan.add_argument("--no-mask", action="store_true", help="Ignore stored masks (treat everything as land)")
    plan.add_argument("--json", action="store_true", help="Output machine-readable JSON")
    plan.set_defaults(func=_cmd_plan)

    maps = sub.add_parser("maps", help="List known maps and their scale.")
    maps.set_defaults(func=_cmd_maps)

    auto = sub.add_parser("auto-mask", help="Derive a land mask from map colors (blue = water).")
    auto.add_argument("--rgb", required=True, help="H x W x 3 RGB array saved as .npy")
    dest = auto.add_mutually_exclusive_group(required=True)
    dest.add_argument("--out", type=str, help="Write the mask to this .npy path")
    dest.add_argument("--map", type=str, help="Store the mask as the land mask of this map")
    auto.set_defaults(func=_cmd_auto_mask)
    return parser


def main(argv: list[str] | None = None) -> int:
    """CLI entrypoint callable used by `python -m droppoint.cli`."""
    configure_logging()
    parser = build_parser()
    args = parser.parse_args(argv)
    func: Any = getattr(args, "func")
    try:
        return int(func(args))
    except (ValueError, OSError) as e:
        # Unknown map, missing or unreadable .npy: report like any other usage error (exit 2).
        parser.error(str(e))


if __name__ == "__main__":
    raise SystemExit(main())
