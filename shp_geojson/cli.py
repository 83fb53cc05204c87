"""Command-line entry point.

Usage::

    shp-geojson data/Radverkehr/Radverkehr_Fuerth output/Radverkehr_Fuerth \
        --types typesDefinitions.json

Exit status is 0 on success and 1 when the configuration or any pipeline
stage fails.
"""

from __future__ import annotations

import argparse
import logging
import sys
from typing import TYPE_CHECKING

from shp_geojson import __version__
from shp_geojson.core.config import ConversionConfig
from shp_geojson.core.constants import DEFAULT_ENCODING
from shp_geojson.core.exceptions import PipelineError
from shp_geojson.orchestrators.pipeline import run_conversion

if TYPE_CHECKING:
    from collections.abc import Sequence

logger = logging.getLogger("shp_geojson.cli")

LOG_FORMAT = "%(asctime)s %(levelname)-8s %(name)s | %(message)s"


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="shp-geojson",
        description=(
            "Convert a Gauss-Krüger zone 4 shapefile to WGS 84 GeoJSON, "
            "one file per designation plus a combined file."
        ),
    )
    parser.add_argument("input", help="Shapefile base path (without .shp/.dbf)")
    parser.add_argument("output", help="Output prefix (without .geojson)")
    parser.add_argument(
        "--types",
        dest="types_file",
        help="JSON file with [{\"type\": ..., \"designation\": ...}] entries",
    )
    parser.add_argument(
        "--allowed-type",
        dest="allowed_types",
        action="append",
        metavar="CODE",
        help="Restrict accepted type codes (repeatable; default: all defined codes)",
    )
    parser.add_argument(
        "--encoding",
        default=DEFAULT_ENCODING,
        help=f"Attribute table encoding (default: {DEFAULT_ENCODING})",
    )
    parser.add_argument(
        "--standard-bbox",
        action="store_true",
        help="Write the bbox as [min_lon, min_lat, max_lon, max_lat]",
    )
    parser.add_argument(
        "--log-level",
        default="INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level (default: INFO)",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(level=args.log_level, format=LOG_FORMAT)

    try:
        config = ConversionConfig.from_options(
            args.input,
            args.output,
            types_file=args.types_file,
            allowed_types=args.allowed_types,
            encoding=args.encoding,
            standard_bbox=args.standard_bbox,
        )
        result = run_conversion(config)
    except PipelineError as exc:
        logger.error("%s", exc.to_error_dict())
        return 1

    logger.info("Conversion summary | %s", result.to_dict())
    for path in result.written_paths:
        print(path)
    return 0


if __name__ == "__main__":
    sys.exit(main())
