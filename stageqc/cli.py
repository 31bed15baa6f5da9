"""CLI runner: check a media file against the stage, or print a projected layout."""
from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import List, Optional, Tuple

from stageqc.media_probe.formatting import format_duration, format_file_size
from stageqc.media_probe.gate import MediaGateError
from stageqc.media_probe.service import MediaProbeService, ProbeError
from stageqc.media_qc.models import QCTier
from stageqc.media_qc.service import MediaQCService
from stageqc.stage_layout.overlay import DEFAULT_SURFACE, render_overlay_preview
from stageqc.stage_layout.service import StageLayoutService, StageSpecError, get_stage_spec

logger = logging.getLogger(__name__)

EXIT_PASS = 0
EXIT_QC_FAILED = 1
EXIT_INPUT_ERROR = 2


def _size(raw: str) -> Tuple[int, int]:
    try:
        w, h = raw.lower().split("x", 1)
        return int(w), int(h)
    except ValueError:
        raise argparse.ArgumentTypeError(f"expected WIDTHxHEIGHT, got {raw!r}")


def _cmd_check(args: argparse.Namespace) -> int:
    spec = get_stage_spec()
    try:
        asset = MediaProbeService().probe(args.file)
    except (MediaGateError, ProbeError) as exc:
        print(json.dumps({"file": str(args.file), "error": str(exc)}, indent=2))
        return EXIT_INPUT_ERROR

    result = MediaQCService(spec).check(asset)
    report = {
        "file": {
            "name": asset.file_name,
            "kind": asset.kind,
            "size": format_file_size(asset.file_size or 0),
            "duration": format_duration(asset.duration_seconds) if asset.duration_seconds is not None else None,
        },
        "qc": result.model_dump(mode="json"),
    }
    if args.overlay:
        if asset.kind != "image":
            logger.warning("Overlay preview only supports images, skipping %s", asset.file_name)
        else:
            render_overlay_preview(args.file, args.overlay, surface=args.surface, spec=spec)
            report["overlay"] = str(args.overlay)
    print(json.dumps(report, indent=2))
    return EXIT_PASS if result.tier == QCTier.PASS else EXIT_QC_FAILED


def _cmd_layout(args: argparse.Namespace) -> int:
    surface_w, surface_h = args.surface
    asset_w, asset_h = args.asset
    if asset_w <= 0 or asset_h <= 0:
        print(json.dumps({"error": "asset dimensions must be positive"}))
        return EXIT_INPUT_ERROR
    layout = StageLayoutService(get_stage_spec()).layout(surface_w, surface_h, asset_w, asset_h)
    print(json.dumps(layout.model_dump(mode="json"), indent=2))
    return EXIT_PASS


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="stageqc", description="Stage media QC")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    sub = parser.add_subparsers(dest="command", required=True)

    check = sub.add_parser("check", help="Gate, probe and QC a media file")
    check.add_argument("file", type=Path)
    check.add_argument("--overlay", type=Path, default=None, help="Write a PNG overlay preview (images only)")
    check.add_argument("--surface", type=_size, default=DEFAULT_SURFACE, help="Preview size, WIDTHxHEIGHT")
    check.set_defaults(func=_cmd_check)

    layout = sub.add_parser("layout", help="Project the stage onto a display surface")
    layout.add_argument("--surface", type=_size, required=True, help="WIDTHxHEIGHT")
    layout.add_argument("--asset", type=_size, required=True, help="WIDTHxHEIGHT")
    layout.set_defaults(func=_cmd_layout)
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    try:
        return args.func(args)
    except StageSpecError as exc:
        logger.error("%s", exc)
        return EXIT_INPUT_ERROR


if __name__ == "__main__":
    sys.exit(main())
