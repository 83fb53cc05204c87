"""Conversion pipeline orchestrator.

Composes the stage functions in a fixed order over immutable collection
snapshots:

1. ``load_shapefile``     — read ``.shp``/``.dbf``, default ``LAGE``/``Typ``
2. ``classify_features``  — attach designations
3. ``reproject_features`` — Gauss-Krüger zone 4 → WGS 84
4. ``write_geojson``      — per-designation files, then the combined file

Any ``PipelineError`` stops the run: the status sink gets
``"<stage>: <message>"`` through ``fail`` and the error is re-raised.
Nothing is retried and files written before a failure stay on disk.
"""

from __future__ import annotations

import logging
import uuid
from typing import TYPE_CHECKING

from shp_geojson.activities.classify_features import classify_with_report
from shp_geojson.activities.load_shapefile import load_shapefile
from shp_geojson.activities.reproject_features import reproject_collection
from shp_geojson.activities.write_geojson import write_partitions
from shp_geojson.core.config import validate
from shp_geojson.core.exceptions import PipelineError
from shp_geojson.core.status import LoggingStatusSink
from shp_geojson.models.result import ConversionResult

if TYPE_CHECKING:
    from shp_geojson.core.config import ConversionConfig
    from shp_geojson.core.status import StatusSink

logger = logging.getLogger("shp_geojson.orchestrators.pipeline")


def run_conversion(
    config: ConversionConfig,
    *,
    sink: StatusSink | None = None,
    run_id: str = "",
) -> ConversionResult:
    """Run the whole conversion for *config*.

    Args:
        config: Validated (or validatable) conversion configuration.
        sink: Status sink; defaults to a ``LoggingStatusSink``.
        run_id: Identifier stamped on errors; a random one by default.

    Returns:
        A ``ConversionResult`` describing the written outputs.

    Raises:
        PipelineError: Any fatal stage error (``LoadError``,
            ``ClassificationError``, ``ReprojectionError``, ``WriteError``)
            or ``ConfigValidationError``.
    """
    if sink is None:
        sink = LoggingStatusSink()
    run_id = run_id or uuid.uuid4().hex

    sink.update("shape_to_geojson")
    logger.info(
        "Conversion started | run=%s | input=%s | output=%s | definitions=%d",
        run_id,
        config.input_path,
        config.output_prefix,
        len(config.type_definitions),
    )

    try:
        validate(config)

        collection = load_shapefile(config.input_path, encoding=config.encoding, sink=sink)

        collection, report = classify_with_report(
            collection,
            config.type_definitions,
            allowed_types=config.allowed_types,
            sink=sink,
        )

        collection = reproject_collection(collection, bbox_order=config.bbox_order, sink=sink)

        written = write_partitions(
            collection,
            config.output_prefix,
            config.designations,
            sink=sink,
        )
    except PipelineError as exc:
        exc.correlation_id = exc.correlation_id or run_id
        sink.fail(f"{exc.stage or 'pipeline'}: {exc.message}")
        logger.error("Conversion failed | run=%s | error=%s", run_id, exc.to_error_dict())
        raise

    paths = list(written)
    result = ConversionResult(
        feature_count=len(collection),
        classified_count=report.classified,
        designation_counts={
            designation: count
            for designation, count in zip(config.designations, written.values(), strict=False)
        },
        written_paths=paths,
    )

    sink.succeed(f'shape_to_geojson: geo-data written to "{config.output_prefix}"')
    logger.info(
        "Conversion complete | run=%s | features=%d | classified=%d | files=%d",
        run_id,
        result.feature_count,
        result.classified_count,
        len(paths),
    )
    return result
