#!/usr/bin/env python3
"""
Export a static snapshot of Figma assets (images + assets.json).

The snapshot can later be registered without API access via
map_store.load_stored_figmassets(store, "<out dir or URL>").

Examples:
  export FIGMA_TOKEN=...
  python scripts/export_figmassets.py --file-key aBcD1234EfGh --frame-name icons --scale 2
  python scripts/export_figmassets.py --config config/params.yaml --out public/icons
"""
from __future__ import annotations

import argparse
import os
import sys

# Add the project root to the path
sys.path.append(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from common.config import load_config
from common.logging_setup import get_logger, setup_logging
from figma_api import FigmaApiError, NoMatchingFramesError, get_figmassets
from figma_api.client import DEFAULT_BASE_URL
from map_store.snapshot import export_snapshot


log = get_logger("export_figmassets")


def parse_args(argv=None) -> argparse.Namespace:
    ap = argparse.ArgumentParser(description=__doc__.split("\n\n")[0])
    ap.add_argument("--config", default="config/params.yaml", help="YAML params file")
    ap.add_argument("--token", help="Figma personal access token (default: env FIGMA_TOKEN)")
    ap.add_argument("--file-key", help="Figma file key (overrides config)")
    ap.add_argument("--frame-id", action="append", default=None, help="Frame node id (repeatable)")
    ap.add_argument("--frame-name", action="append", default=None, help="Frame name (repeatable)")
    ap.add_argument("--scale", action="append", type=float, default=None, help="Scale (repeatable)")
    ap.add_argument("--format", dest="fmt", help="png | jpg | svg | pdf")
    ap.add_argument("--out", help="Output directory (overrides config)")
    ap.add_argument("--log-level", help="DEBUG/INFO/WARNING/ERROR")
    return ap.parse_args(argv)


def main(argv=None) -> int:
    args = parse_args(argv)
    P = load_config(args.config)
    setup_logging(args.log_level or P["logging"].get("level"))

    fig = P["figma"]
    frame_ids = args.frame_id if args.frame_id is not None else fig.get("frame_ids") or []
    frame_names = args.frame_name if args.frame_name is not None else fig.get("frame_names") or []
    fmt = args.fmt or fig.get("format", "png")
    out_dir = args.out or P["snapshot"]["out_dir"]

    try:
        assets = get_figmassets(
            args.file_key or fig.get("file_key"),
            token=args.token,
            frame_ids=frame_ids,
            frame_names=frame_names,
            scales=args.scale or fig.get("scales") or [1],
            fmt=fmt,
            base_url=fig.get("base_url") or DEFAULT_BASE_URL,
            timeout=float(fig.get("timeout_s", 30.0)),
        )
    except (FigmaApiError, NoMatchingFramesError, ValueError) as e:
        log.error("Export failed: %s", e)
        print(f" Error: {e}", file=sys.stderr)
        return 1

    descriptors = export_snapshot(assets, out_dir, fmt=fmt)
    print(f"  Exported {len(descriptors)} image(s) to {out_dir}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
