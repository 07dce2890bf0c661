#!/usr/bin/env python
from __future__ import annotations

import argparse
import logging
import sys
from typing import List, Tuple

from vesselgen.config import DEFAULT_STL_NAME, settings_from_params
from vesselgen.edit import default_control_points, pin_endpoints
from vesselgen.errors import ExportFailure, InsufficientControlPoints
from vesselgen.io import save_stl_bytes, stl_size
from vesselgen.logging_config import setup_logging
from vesselgen.models import BaseParameters, ControlPoint
from vesselgen.pipeline.export import export_vessel_stl
from vesselgen.pipeline.generate import build_vessel


def _point(value: str) -> Tuple[float, float]:
    parts = value.replace(";", ",").split(",")
    if len(parts) != 2:
        raise argparse.ArgumentTypeError(f"Expected 'X,Y' (radius,height), got '{value}'.")
    try:
        return float(parts[0]), float(parts[1])
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"Non-numeric control point '{value}'.") from exc


def _add_design_arguments(sub: argparse.ArgumentParser) -> None:
    sub.add_argument("--point", dest="points", type=_point, action="append", default=None,
                     help="Control point 'radius,height' in mm; repeat in increasing height order.")
    sub.add_argument("--outer-diameter", type=float, default=100.0, help="Base outer diameter (mm).")
    sub.add_argument("--base-height", type=float, default=5.0, help="Base (foot) height (mm).")
    sub.add_argument("--wall-thickness", type=float, default=2.0, help="Vessel wall thickness (mm).")
    sub.add_argument("--max-height", type=float, default=150.0, help="Profile height above the base (mm).")
    sub.add_argument("--samples", type=int, default=100, help="Samples along the profile curve.")
    sub.add_argument("--segments", type=int, default=64, help="Angular segments of the revolved wall.")
    sub.add_argument("--base-segments", type=int, default=64, help="Radial segments of the base cylinder.")
    sub.add_argument("--no-pin", dest="pin", action="store_false",
                     help="Do not snap the first/last points to the base rim and max height.")
    sub.set_defaults(pin=True)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="vesselgen", description="Parametric vessel mesh generator")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging.")
    parser.add_argument("--log-file", default=None, help="Optional log file path.")
    subparsers = parser.add_subparsers(dest="command", required=True)

    gen = subparsers.add_parser("generate", help="Write the vessel as binary STL.")
    _add_design_arguments(gen)
    gen.add_argument("--out", default=DEFAULT_STL_NAME, help="Output STL path.")
    gen.add_argument("--rotation-deg", type=float, default=90.0, help="Rotation about X applied on export.")

    info = subparsers.add_parser("info", help="Print mesh statistics without writing files.")
    _add_design_arguments(info)

    fig = subparsers.add_parser("figure", help="Render the profile half-section.")
    _add_design_arguments(fig)
    fig.add_argument("--out", required=True, help="Output figure path.")
    fig.add_argument("--dpi", type=int, default=200, help="Figure DPI for raster outputs.")

    return parser


def _design(args: argparse.Namespace) -> Tuple[List[ControlPoint], BaseParameters]:
    params = BaseParameters(
        outer_diameter=float(args.outer_diameter),
        height=float(args.base_height),
        wall_thickness=float(args.wall_thickness),
        max_height=float(args.max_height),
    )
    if args.points:
        points = [ControlPoint(x, y) for x, y in args.points]
    else:
        points = list(default_control_points(params))
    if args.pin:
        points = list(pin_endpoints(points, params))
    return points, params


def _settings(args: argparse.Namespace):
    params = {
        "samples": int(args.samples),
        "segments": int(args.segments),
        "base_segments": int(args.base_segments),
    }
    if hasattr(args, "rotation_deg"):
        params["rotation_deg"] = float(args.rotation_deg)
    return settings_from_params(params)


def _run_generate(args: argparse.Namespace) -> None:
    points, params = _design(args)
    data = export_vessel_stl(points, params, settings=_settings(args))
    try:
        save_stl_bytes(data, args.out)
    except OSError as exc:
        raise ExportFailure(f"could not write {args.out}: {exc}") from exc
    print(f"[generate] wrote {args.out} ({len(data)} bytes)")


def _run_info(args: argparse.Namespace) -> None:
    points, params = _design(args)
    geometry = build_vessel(points, params, settings=_settings(args))
    total = geometry.mesh.n_triangles + geometry.base.n_triangles
    print(f"[info] control points: {len(points)}")
    print(f"[info] profile: {len(geometry.outer)} samples, closed loop {len(geometry.profile) if geometry.profile else 0} points")
    print(f"[info] wall mesh: {geometry.mesh.vertices.shape[0]} vertices, {geometry.mesh.n_triangles} triangles")
    print(f"[info] base mesh: {geometry.base.vertices.shape[0]} vertices, {geometry.base.n_triangles} triangles")
    print(f"[info] STL size: {stl_size(total)} bytes")


def _run_figure(args: argparse.Namespace) -> None:
    from vesselgen.figures import make_profile_figure

    points, params = _design(args)
    make_profile_figure(points, params, args.out, settings=_settings(args), dpi=int(args.dpi))
    print(f"[figure] wrote {args.out}")


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    try:
        setup_logging(logging.DEBUG if args.verbose else logging.WARNING, log_file=args.log_file)
        if args.command == "generate":
            _run_generate(args)
        elif args.command == "info":
            _run_info(args)
        elif args.command == "figure":
            _run_figure(args)
        else:
            parser.error(f"Unknown command: {args.command}")
    except (ExportFailure, InsufficientControlPoints, ValueError, OSError) as exc:
        print(f"[{args.command}] error: {exc}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
