"""
Command-line interface for the demister sizing tool.
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from math import isfinite
from pathlib import Path
from typing import Dict, Iterable, Optional

from .core import (
    DemisterInputs,
    DemisterResult,
    DemisterType,
    DemisterValidationError,
    LoadingStatus,
    Orientation,
    VesselGeometry,
    size_demister,
    sweep_margin,
)
from .presets import PRESET_KEYS, load_preset, write_preset
from .report import build_dataframe, result_payload
from .steam import saturated_densities

LOGGER = logging.getLogger("demister.cli")

_DEFAULTS = {
    "demister_type": DemisterType.WIRE_MESH.value,
    "orientation": Orientation.HORIZONTAL.value,
    "margin": 0.8,
    "geometry": VesselGeometry.CIRCULAR.value,
}


def ensure_logger(level: str = "WARNING") -> None:
    root = logging.getLogger("demister")
    root.setLevel(getattr(logging, level.upper(), logging.WARNING))
    if root.handlers:
        return
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)s %(message)s"))
    root.addHandler(handler)


def _fmt(x: Optional[float], wid: int = 10, prec: int = 4) -> str:
    if x is None:
        return " " * (wid - 1) + "-"
    if not isfinite(x):
        return " " * (wid - 3) + "nan"
    return f"{x:>{wid}.{prec}f}"


def print_table(rows: Iterable[DemisterResult]) -> None:
    head = "margin       K     V_max  V_design       Q_v     A_req     D_min    H_rect  loading"
    print(head)
    print("-" * len(head))
    for r in rows:
        print(
            f"{r.loading_fraction:>6.3f}"
            f"{_fmt(r.k_factor, prec=3)}{_fmt(r.max_velocity)}{_fmt(r.design_velocity)}"
            f"{_fmt(r.volumetric_flow)}{_fmt(r.required_area)}"
            f"{_fmt(r.vessel_diameter)}{_fmt(r.rectangle_height)}"
            f"  {r.loading_status.value}"
        )


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(
        description="Demister / mist eliminator sizing (Souders-Brown correlation)"
    )
    ap.add_argument("--preset", help="Built-in preset name or path to a .yml preset")
    ap.add_argument(
        "--save-preset",
        dest="save_preset",
        type=Path,
        help="Write the resolved inputs to a .yml preset",
    )
    ap.add_argument("--mass-flow", dest="mass_flow", type=float, help="Vapor mass flow rate [kg/s]")
    ap.add_argument("--rho-vapor", dest="rho_vapor", type=float, help="Vapor density [kg/m3]")
    ap.add_argument("--rho-liquid", dest="rho_liquid", type=float, help="Liquid density [kg/m3]")
    ap.add_argument(
        "--p-sat",
        dest="p_sat",
        type=float,
        help="Saturation pressure [bar a]; densities from steam tables",
    )
    ap.add_argument(
        "--t-sat",
        dest="t_sat",
        type=float,
        help="Saturation temperature [degC]; densities from steam tables",
    )
    ap.add_argument(
        "--type",
        dest="demister_type",
        choices=[t.value for t in DemisterType],
        help="Demister type (default: wire_mesh)",
    )
    ap.add_argument(
        "--orientation",
        choices=[o.value for o in Orientation],
        help="Vapor flow orientation (default: horizontal)",
    )
    ap.add_argument(
        "--margin",
        type=float,
        help="Design margin, fraction of the flooding velocity (default: 0.8)",
    )
    ap.add_argument(
        "--geometry",
        choices=[g.value for g in VesselGeometry],
        help="Vessel cross-section (default: circular)",
    )
    ap.add_argument("--width", type=float, help="Rectangle width [m] (rectangular only)")
    ap.add_argument("--nsteps", type=int, help="Sweep the margin over this many steps")
    ap.add_argument(
        "--margin-step",
        dest="margin_step",
        type=float,
        default=0.05,
        help="Margin decrement per sweep step",
    )
    ap.add_argument("--csv", type=Path, help="Write the result table to CSV")
    ap.add_argument("--json", type=Path, help="Write the design-point result to JSON")
    ap.add_argument("--log-level", dest="log_level", default="WARNING", help="Logging level")
    return ap


def _merge_preset(args: argparse.Namespace) -> None:
    preset = load_preset(args.preset) if args.preset else {}
    # fluid properties given on the command line replace the preset's fluid block
    if args.rho_vapor is not None or args.rho_liquid is not None:
        preset = {k: v for k, v in preset.items() if k not in ("p_sat", "t_sat")}
    if args.p_sat is not None or args.t_sat is not None:
        preset = {k: v for k, v in preset.items() if k not in ("rho_vapor", "rho_liquid", "p_sat", "t_sat")}
    for key in PRESET_KEYS:
        if getattr(args, key) is None:
            if key in preset:
                setattr(args, key, preset[key])
            elif key in _DEFAULTS:
                setattr(args, key, _DEFAULTS[key])


def _preset_values(args: argparse.Namespace) -> Dict[str, float | str]:
    return {key: getattr(args, key) for key in PRESET_KEYS if getattr(args, key) is not None}


def resolve_inputs(args: argparse.Namespace, parser: argparse.ArgumentParser) -> DemisterInputs:
    _merge_preset(args)
    if args.mass_flow is None:
        parser.error("a vapor mass flow is required (--mass-flow or a preset)")

    manual = args.rho_vapor is not None or args.rho_liquid is not None
    steam = args.p_sat is not None or args.t_sat is not None
    if manual and steam:
        parser.error("give either manual densities or saturation conditions, not both")
    if steam:
        if args.p_sat is not None and args.t_sat is not None:
            parser.error("give only one of --p-sat and --t-sat")
        try:
            sat = saturated_densities(
                pressure_bar=None if args.p_sat is None else float(args.p_sat),
                temp_c=None if args.t_sat is None else float(args.t_sat),
            )
        except ValueError as exc:
            parser.error(str(exc))
        LOGGER.info(
            "Saturation: T=%.2f degC, p=%.4f bar, rhoV=%.4f, rhoL=%.2f",
            sat.temperature_c,
            sat.pressure_bar,
            sat.vapor_density,
            sat.liquid_density,
        )
        rho_v, rho_l = sat.vapor_density, sat.liquid_density
    elif args.rho_vapor is not None and args.rho_liquid is not None:
        rho_v, rho_l = float(args.rho_vapor), float(args.rho_liquid)
    else:
        parser.error("vapor and liquid densities are required (or --p-sat / --t-sat)")

    try:
        return DemisterInputs(
            vapor_mass_flow=float(args.mass_flow),
            vapor_density=rho_v,
            liquid_density=rho_l,
            demister_type=DemisterType(args.demister_type),
            orientation=Orientation(args.orientation),
            design_margin=float(args.margin),
            geometry=VesselGeometry(args.geometry),
            rectangle_width=None if args.width is None else float(args.width),
        )
    except ValueError as exc:
        parser.error(str(exc))


def main(argv: Optional[Iterable[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(list(argv) if argv is not None else None)
    ensure_logger(args.log_level)
    if args.nsteps is not None and args.nsteps < 1:
        parser.error(f"--nsteps must be at least 1, got {args.nsteps}")

    try:
        inputs = resolve_inputs(args, parser)
    except FileNotFoundError as exc:
        parser.error(str(exc))
    LOGGER.info("Sizing inputs: %s", inputs)
    if args.save_preset is not None:
        write_preset(args.save_preset, _preset_values(args))
        LOGGER.info("Saved preset %s", args.save_preset)

    try:
        result = size_demister(inputs)
        if args.nsteps is not None:
            rows = sweep_margin(inputs, inputs.design_margin, args.margin_step, args.nsteps)
        else:
            rows = [result]
    except DemisterValidationError as exc:
        LOGGER.error("Invalid %s: %s", exc.field, exc)
        print(f"error: {exc}", file=sys.stderr)
        return 2

    if result.loading_status is LoadingStatus.HIGH:
        LOGGER.warning("Design margin %.2f is close to flooding", inputs.design_margin)
    elif result.loading_status is LoadingStatus.LOW:
        LOGGER.warning("Design margin %.2f leaves the pad oversized", inputs.design_margin)

    print(
        f"\nDEMISTER: {inputs.demister_type.value}, {inputs.orientation.value}, "
        f"{inputs.geometry.value}"
    )
    print(
        f"Inputs: m_v={inputs.vapor_mass_flow} kg/s, rho_v={inputs.vapor_density:.4f} kg/m3, "
        f"rho_l={inputs.liquid_density:.2f} kg/m3, margin={inputs.design_margin}"
    )
    print(f"Estimated pressure drop: {result.pressure_drop_min:.0f}-{result.pressure_drop_max:.0f} Pa")
    print()
    print_table(rows)

    if args.csv is not None:
        build_dataframe(rows).to_csv(args.csv, index=False)
        LOGGER.info("Wrote %s", args.csv)
    if args.json is not None:
        with args.json.open("w", encoding="utf-8") as fh:
            json.dump(result_payload(inputs, result), fh, indent=2)
        LOGGER.info("Wrote %s", args.json)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
