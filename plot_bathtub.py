from __future__ import annotations

import argparse
import os
import sys
from typing import List, Optional, Sequence

from layout import (
    BathtubLoadError,
    LoadResult,
    build_scene,
    check_scene_fits,
    format_cm,
    load_bathtub,
    load_bathtubs,
)
from plotting.renderer import render_scene, render_scene_grid

COMMANDS = ("single", "multi", "stacked")
DEFAULT_INPUT = os.path.join("input", "kaufland-heless.json")

EXIT_OK = 0
EXIT_NO_INPUT = 1
EXIT_NO_VALID_INPUT = 2
EXIT_FAILURE = 3


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        description="Top-down shower vs. toy bathtub footprint comparison.",
    )
    sub = p.add_subparsers(dest="command")

    single = sub.add_parser("single", help="plot one bathtub model (default command)")
    single.add_argument("file", nargs="?", default=None, help=f"bathtub model JSON (default: {DEFAULT_INPUT})")
    single.add_argument("--with-baby", action="store_true", help="overlay a 40x17 cm baby aligned to the bathtub midlines")

    multi = sub.add_parser("multi", help="plot several models as a grid of tiles")
    multi.add_argument("-f", "--file", dest="files", action="append", default=[], help="input JSON file, repeat for more models")
    multi.add_argument("-o", "--out", type=str, default=None, help="output PNG path (default: output/comparison.png)")
    multi.add_argument("--cols", type=int, default=None, help="columns in the grid (default: auto square-ish)")
    multi.add_argument("--tile-width", type=int, default=1400, help="width in pixels per tile")
    multi.add_argument("--tile-height", type=int, default=1000, help="height in pixels per tile")
    multi.add_argument("--with-baby", action="store_true", help="overlay a baby aligned to each bathtub's midlines")

    stacked = sub.add_parser("stacked", help="overlay several models in one shower plot")
    stacked.add_argument("-f", "--file", dest="files", action="append", default=[], help="input JSON file, repeat for more models")
    stacked.add_argument("-o", "--out", type=str, default=None, help="output PNG path (default: output/stacked.png)")
    stacked.add_argument("--width", type=int, default=1400, help="canvas width in pixels")
    stacked.add_argument("--height", type=int, default=1000, help="canvas height in pixels")
    stacked.add_argument("--with-baby", action="store_true", help="overlay a baby aligned to the smallest (innermost) bathtub")
    return p


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    args = list(sys.argv[1:] if argv is None else argv)
    # "single" is implied when no sub-command is named
    if not args or (args[0] not in COMMANDS and args[0] not in ("-h", "--help")):
        args.insert(0, "single")
    return build_parser().parse_args(args)


def _output_dir() -> str:
    out_dir = os.path.join(os.getcwd(), "output")
    os.makedirs(out_dir, exist_ok=True)
    return out_dir


def _report_orientation(result: LoadResult) -> None:
    for path, spec in result.items:
        if not spec.is_portrait:
            print(f"Note: {path} has width {format_cm(spec.width_cm)} > height {format_cm(spec.height_cm)}; width is expected to be the shorter side.")


def _report_fit(scene) -> None:
    for report in check_scene_fits(scene):
        print(f"  {report.summary()}")


def _load_inputs(files: List[str]) -> Optional[LoadResult]:
    if not files:
        print("No input files provided. Use -f multiple times to add files.")
        return None
    result = load_bathtubs(files)
    for path, reason in result.skipped:
        print(f"Skipping {path}: {reason}")
    return result


def run_single(args: argparse.Namespace) -> int:
    file_path = args.file or DEFAULT_INPUT
    if not os.path.isfile(file_path):
        print(f"Input file not found: {file_path}")
        return EXIT_NO_INPUT
    try:
        spec = load_bathtub(file_path)
    except BathtubLoadError as e:
        print(f"Failed to read or parse: {e}")
        return EXIT_NO_VALID_INPUT
    _report_orientation(LoadResult(items=[(file_path, spec)]))

    base_name = os.path.splitext(os.path.basename(file_path))[0]
    out_path = os.path.join(_output_dir(), base_name + ".png")
    scene = build_scene([spec], with_baby=args.with_baby)
    render_scene(scene, out_path=out_path, width=1200, height=900)
    print(f"Saved plot to {out_path}")
    _report_fit(scene)
    return EXIT_OK


def run_multi(args: argparse.Namespace) -> int:
    result = _load_inputs(args.files)
    if result is None:
        return EXIT_NO_INPUT
    if not result.items:
        print("No valid inputs to process.")
        return EXIT_NO_VALID_INPUT
    _report_orientation(result)

    out_path = args.out or os.path.join(_output_dir(), "comparison.png")
    scenes = [build_scene([spec], with_baby=args.with_baby) for spec in result.specs]
    render_scene_grid(
        scenes,
        out_path=out_path,
        cols=args.cols,
        tile_width=args.tile_width,
        tile_height=args.tile_height,
    )
    print(f"Saved comparison to {out_path}")
    for scene in scenes:
        _report_fit(scene)
    return EXIT_OK


def run_stacked(args: argparse.Namespace) -> int:
    result = _load_inputs(args.files)
    if result is None:
        return EXIT_NO_INPUT
    if not result.items:
        print("No valid inputs to process.")
        return EXIT_NO_VALID_INPUT
    _report_orientation(result)

    out_path = args.out or os.path.join(_output_dir(), "stacked.png")
    scene = build_scene(result.specs, with_baby=args.with_baby, labels=result.labels, stacked=True)
    render_scene(scene, out_path=out_path, width=args.width, height=args.height)
    print(f"Saved stacked plot to {out_path}")
    _report_fit(scene)
    return EXIT_OK


RUNNERS = {
    "single": run_single,
    "multi": run_multi,
    "stacked": run_stacked,
}


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = parse_args(argv)
    try:
        return RUNNERS[args.command](args)
    except (OSError, ValueError) as e:
        print(f"Error: {e}")
        return EXIT_FAILURE


if __name__ == "__main__":
    sys.exit(main())
