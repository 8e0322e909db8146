#!/usr/bin/env python3
import argparse
import logging
import sys

from quadsphere.app import App
from quadsphere.config import load_config

DEFAULT_CONFIG = "config.yaml"


def main(argv=None):
    ap = argparse.ArgumentParser(description="Textured quadsphere viewer")
    ap.add_argument("--config", default=None, help=f"Path to viewer config file (default: {DEFAULT_CONFIG} if present)")
    ap.add_argument("--fullscreen", action="store_true", help="Open on the primary monitor in fullscreen")
    ap.add_argument("--resolution", type=int, default=None, help="Override grid points per face-quadrant edge (>= 2)")
    ap.add_argument("--log-level", default="INFO", choices=["DEBUG", "INFO", "WARNING", "ERROR"])
    args = ap.parse_args(argv)

    logging.basicConfig(level=getattr(logging, args.log_level), format="%(asctime)s %(levelname)s %(name)s: %(message)s")

    if args.config:
        config = load_config(args.config, required=True)
    else:
        config = load_config(DEFAULT_CONFIG, required=False)

    if args.resolution is not None:
        if args.resolution < 2:
            ap.error("--resolution must be >= 2")
        config.resolution = args.resolution

    App(config, fullscreen=args.fullscreen).run()
    return 0


if __name__ == "__main__":
    sys.exit(main())
