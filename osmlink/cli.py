"""Command line interface for track links.

Usage:
    osmlink export 'track:(12.04 14.92)(32.12 15.34)FILE.svg' --format html --document-dir docs
    osmlink follow 'track:(12.04 14.92)(32.12 15.34)FILE.svg'
    osmlink publish docs/FILE.svg --publish-dir public/docs --cache-dir public/cache/OSM
"""

import argparse
import sys
from pathlib import Path
from typing import List, Optional

from osmlink.conf.export_config import load_export_config
from osmlink.conf.settings import settings
from osmlink.engine import EngineConfig, TrackLinkEngine
from osmlink.errors import OsmLinkError
from osmlink.schemas.link import ExportFormat
from osmlink.utils.logging_utils import setup_logger


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="osmlink",
        description="Resolve track links into SVG artifacts and export them",
    )
    parser.add_argument("--config", type=Path, help="YAML export config")
    parser.add_argument("--log-level", default=None, help="Logging level (default from settings)")

    subparsers = parser.add_subparsers(dest="command", required=True)

    export = subparsers.add_parser("export", help="Render a link for a document format")
    export.add_argument("link", help="Track link path")
    export.add_argument(
        "--format",
        dest="fmt",
        choices=[fmt.value for fmt in ExportFormat],
        default=ExportFormat.HYPERTEXT.value,
    )
    export.add_argument("--document-dir", type=Path, default=Path.cwd())
    export.add_argument("--description", default=None)

    follow = subparsers.add_parser("follow", help="Open the artifact of a link")
    follow.add_argument("link", help="Track link path")
    follow.add_argument("--base-dir", type=Path, default=None)

    publish = subparsers.add_parser("publish", help="Publish an artifact copy")
    publish.add_argument("artifact", type=Path)
    publish.add_argument("--publish-dir", type=Path, required=True)
    publish.add_argument("--cache-dir", type=Path, default=None)

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    logger = setup_logger("osmlink", log_level=args.log_level or settings.log_level)

    try:
        config = EngineConfig.from_settings(settings, load_export_config(args.config, settings))
        engine = TrackLinkEngine(config)

        if args.command == "export":
            print(engine.export(args.link, ExportFormat(args.fmt), args.document_dir, args.description))
        elif args.command == "follow":
            engine.follow(args.link, args.base_dir)
        elif args.command == "publish":
            print(engine.publish(args.artifact, args.publish_dir, args.cache_dir))

    except (OsmLinkError, OSError, ValueError) as e:
        logger.error(f"{args.command} failed: {e}")
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
