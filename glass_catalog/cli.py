"""
Command line entry point for building and inspecting the glass catalog.

- build:  parse an image directory and write a JSON snapshot
- stats:  print brand/model counts for an image directory
- search: filter an image directory by brand, model, years or description
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional, Tuple

from .core import queries
from .core.catalog import GlassCatalog
from .core.indexer import build_catalog, compute_digest, list_image_files, write_snapshot
from .core.parser import IMAGE_URL_PREFIX
from .core.stats import format_summary

LOGGER = logging.getLogger("glass_catalog")

DEFAULT_SNAPSHOT = Path("catalog.json")


def _parse_args(argv: List[str]) -> argparse.Namespace:
    p = argparse.ArgumentParser(prog="glass-catalog", description="Glass part image catalog tools")
    p.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging.")
    p.add_argument("--prefix", default=IMAGE_URL_PREFIX,
                   help=f"URL prefix for image paths (default: {IMAGE_URL_PREFIX}).")

    sub = p.add_subparsers(dest="command", required=True)

    build = sub.add_parser("build", help="Parse an image directory and write a JSON snapshot.")
    build.add_argument("image_dir", type=Path)
    build.add_argument("-o", "--out", type=Path, default=DEFAULT_SNAPSHOT,
                       help=f"Snapshot path (default: {DEFAULT_SNAPSHOT}).")

    stats = sub.add_parser("stats", help="Print brands and models with image counts.")
    stats.add_argument("image_dir", type=Path)

    search = sub.add_parser("search", help="List filenames matching every given filter.")
    search.add_argument("image_dir", type=Path)
    search.add_argument("--brand")
    search.add_argument("--model")
    search.add_argument("--from-year", type=int)
    search.add_argument("--to-year", type=int)
    search.add_argument("--description")

    return p.parse_args(argv)


def _load(image_dir: Path, prefix: str) -> Tuple[List[str], GlassCatalog]:
    filenames = list_image_files(image_dir)
    LOGGER.info("Found %s image files", len(filenames))
    return filenames, build_catalog(filenames, image_prefix=prefix)


def cmd_build(args: argparse.Namespace) -> int:
    filenames, catalog = _load(args.image_dir, args.prefix)

    out = write_snapshot(catalog, args.out, compute_digest(filenames, args.prefix))
    LOGGER.info("Wrote catalog snapshot to %s", out)
    LOGGER.info("Total images: %s", len(catalog))
    LOGGER.info("Unique brands: %s", len(queries.get_unique_brands(catalog)))
    LOGGER.info("Unique models: %s", len(queries.get_unique_models(catalog)))
    return 0


def cmd_stats(args: argparse.Namespace) -> int:
    _, catalog = _load(args.image_dir, args.prefix)
    sys.stdout.write(format_summary(catalog))
    return 0


def cmd_search(args: argparse.Namespace) -> int:
    _, catalog = _load(args.image_dir, args.prefix)

    if args.brand:
        catalog = GlassCatalog.from_records(queries.get_images_by_brand(catalog, args.brand))
    if args.model:
        catalog = GlassCatalog.from_records(queries.get_images_by_model(catalog, args.model))
    if args.from_year is not None or args.to_year is not None:
        start = args.from_year if args.from_year is not None else args.to_year
        end = args.to_year if args.to_year is not None else args.from_year
        catalog = GlassCatalog.from_records(queries.get_images_by_year_range(catalog, start, end))
    if args.description:
        catalog = GlassCatalog.from_records(queries.search_by_description(catalog, args.description))

    if not len(catalog):
        print("No images found for this selection.")
        return 0

    for record in catalog:
        print(record.filename)
    return 0


COMMANDS = {
    "build": cmd_build,
    "stats": cmd_stats,
    "search": cmd_search,
}


def main(argv: Optional[List[str]] = None) -> int:
    args = _parse_args(sys.argv[1:] if argv is None else argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
    )
    return COMMANDS[args.command](args)


if __name__ == "__main__":
    sys.exit(main())
