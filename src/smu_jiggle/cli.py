from __future__ import annotations

import argparse

from astropy.coordinates import Angle
from rich import print
from rich.markup import escape
from rich.table import Table

from smu_jiggle.config import load_config, pattern_from_config
from smu_jiggle.coords import CoordinateSystem
from smu_jiggle.jiggle import JiggleError, JigglePattern
from smu_jiggle.library import list_builtin_patterns, load_builtin_pattern
from smu_jiggle.log import setup_logging
from smu_jiggle.version import __version__, get_version_info


def _build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="smu-jiggle")
    p.add_argument(
        "--log-level",
        default=None,
        help="CRITICAL|ERROR|WARNING|INFO|DEBUG (or env SMU_JIGGLE_LOG_LEVEL)",
    )
    sub = p.add_subparsers(dest="cmd", required=True)

    p_info = sub.add_parser("info", help="Summarize a jiggle pattern")
    src = p_info.add_mutually_exclusive_group(required=True)
    src.add_argument("file", nargs="?", default=None, help="Pattern file")
    src.add_argument("--builtin", default=None, help="Name of a built-in pattern")
    src.add_argument("--config", default=None, help="YAML jiggle config")
    p_info.add_argument("--scale", type=float, default=None)
    p_info.add_argument(
        "--system",
        default=None,
        choices=[s.value for s in CoordinateSystem],
        type=str.upper,
    )
    p_info.add_argument("--posang", type=float, default=None, help="Position angle [deg]")
    p_info.add_argument("--points", action="store_true", help="Also print the scaled positions")

    sub.add_parser("list", help="List built-in patterns")
    sub.add_parser("version", help="Print version and exit")
    return p


def _load(args: argparse.Namespace) -> JigglePattern:
    if args.config:
        jig = pattern_from_config(load_config(args.config))
    elif args.builtin:
        jig = load_builtin_pattern(args.builtin)
    else:
        jig = JigglePattern.from_file(args.file)

    if args.scale is not None:
        jig.scale = args.scale
    if (args.system is not None or args.posang is not None) and not jig.options.with_metadata:
        raise JiggleError("--system/--posang need a pattern with metadata")
    if args.system is not None:
        jig.system = args.system
    if args.posang is not None:
        jig.posang = Angle(args.posang, unit="deg")
    return jig


def _print_summary(jig: JigglePattern, *, show_points: bool) -> None:
    s = jig.summary()
    label = s.get("name") or s["filename"] or "(unnamed)"
    print(f"[bold]Pattern:[/bold] {escape(label)}")
    print(f"[bold]Points:[/bold] {s['npts']}")
    print(f"[bold]Scale:[/bold] {s['scale']}")
    if s["extent"] is None:
        print("[bold]Extent:[/bold] (empty)")
    else:
        xmin, xmax, ymin, ymax = s["extent"]
        print(f"[bold]Extent:[/bold] x={xmin:g}..{xmax:g} y={ymin:g}..{ymax:g}")
    print(f"[bold]Has origin:[/bold] {'yes' if s['has_origin'] else 'no'}")
    if "system" in s:
        print(f"[bold]System:[/bold] {s['system']}")
        print(f"[bold]Posang:[/bold] {s['posang_deg']:g} deg")

    if show_points:
        table = Table("#", "x (arcsec)", "y (arcsec)")
        for i, (x, y) in enumerate(jig.scaled_pattern(), start=1):
            table.add_row(str(i), f"{x:g}", f"{y:g}")
        print(table)


def main(argv: list[str] | None = None) -> int:
    args = _build_parser().parse_args(argv)

    log = setup_logging(args.log_level)

    if args.cmd == "version":
        v = get_version_info()
        print(f"smu-jiggle {__version__} (Python {v.python}, {v.platform})")
        return 0

    if args.cmd == "list":
        for name in list_builtin_patterns():
            print(f" - {escape(name)}")
        return 0

    try:
        jig = _load(args)
    except (JiggleError, OSError) as e:
        print(f"[red]Error:[/red] {escape(str(e))}")
        return 2

    log.debug("Loaded %r", jig)
    _print_summary(jig, show_points=args.points)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
