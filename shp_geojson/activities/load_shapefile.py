"""Shapefile loading activity.

Reads a shapefile pair (``.shp`` geometry + ``.dbf`` attributes) with
fiona (OGR ``ESRI Shapefile`` driver) and builds a ``FeatureCollection``.
Geometries are normalised through shapely into plain GeoJSON mappings
so that later stages never touch fiona objects.

Any parse failure is fatal: the caller gets a ``LoadError`` chained to
the underlying cause and nothing is written.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import TYPE_CHECKING, Any

from shp_geojson.core.constants import (
    ATTRIBUTE_SUFFIX,
    DEFAULT_ENCODING,
    GEOMETRY_SUFFIX,
    LOCATION_KEY,
    SHAPEFILE_DRIVER,
    TYPE_KEY,
    UNKNOWN,
)
from shp_geojson.core.exceptions import StageError
from shp_geojson.models.feature import Feature, FeatureCollection, plain_geometry

if TYPE_CHECKING:
    from shp_geojson.core.status import StatusSink

logger = logging.getLogger("shp_geojson.activities.load_shapefile")


class LoadError(StageError):
    """Raised when the shapefile pair cannot be read or parsed."""

    default_stage = "load_shapefile"
    default_code = "SHAPEFILE_LOAD_FAILED"


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def resolve_shapefile_paths(
    base_path: str | Path,
    dbf_path: str | Path | None = None,
) -> tuple[Path, Path]:
    """Return the ``(shp, dbf)`` paths for a shapefile base path.

    A trailing ``.shp`` on *base_path* is stripped before the extensions
    are appended. An explicit *dbf_path* must share the geometry file's
    base name.

    Raises:
        LoadError: If either file is missing or the base names differ.
    """
    base = Path(base_path)
    if base.suffix.lower() == GEOMETRY_SUFFIX:
        base = base.with_suffix("")
    shp = base.with_name(base.name + GEOMETRY_SUFFIX)
    dbf = Path(dbf_path) if dbf_path is not None else base.with_name(base.name + ATTRIBUTE_SUFFIX)

    if dbf.with_suffix("") != shp.with_suffix(""):
        msg = f"Attribute file {dbf} does not share the base name of {shp}"
        raise LoadError(msg)
    for path in (shp, dbf):
        if not path.is_file():
            msg = f"Shapefile component not found: {path}"
            raise LoadError(msg)
    return shp, dbf


def load_shapefile(
    base_path: str | Path,
    dbf_path: str | Path | None = None,
    *,
    encoding: str = DEFAULT_ENCODING,
    sink: StatusSink | None = None,
) -> FeatureCollection:
    """Read a shapefile pair into a ``FeatureCollection``.

    The returned collection already has missing ``LAGE``/``Typ``
    attributes defaulted (see ``fill_defaults``).

    Args:
        base_path: Shapefile path without extension (or the ``.shp`` path).
        dbf_path: Optional explicit attribute file path.
        encoding: Attribute table text encoding.
        sink: Optional status sink for progress text.

    Returns:
        A collection in the source CRS, features in file order.

    Raises:
        LoadError: On missing files, malformed geometry, attribute
            mismatches, or any I/O failure.
    """
    shp, _dbf = resolve_shapefile_paths(base_path, dbf_path)
    if sink is not None:
        sink.update(f'reading geo-json from "{shp.with_suffix("")}"')

    try:
        collection = _read_collection(shp, encoding)
    except LoadError:
        raise
    except Exception as exc:
        msg = f"Error parsing shapefile {shp}: {exc}"
        raise LoadError(msg) from exc

    logger.info(
        "Loaded shapefile | path=%s | features=%d | bbox=%s",
        shp,
        len(collection),
        list(collection.bbox),
    )
    return fill_defaults(collection)


def fill_defaults(collection: FeatureCollection) -> FeatureCollection:
    """Default falsy ``LAGE`` and ``Typ`` attributes to ``"UNKNOWN"``.

    Absent keys, ``None``, empty strings and zero all count as missing.
    """
    features = [
        feature.with_properties(
            **{
                LOCATION_KEY: feature.properties.get(LOCATION_KEY) or UNKNOWN,
                TYPE_KEY: feature.properties.get(TYPE_KEY) or UNKNOWN,
            }
        )
        for feature in collection.features
    ]
    return collection.with_features(features)


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------


def _read_collection(shp: Path, encoding: str) -> FeatureCollection:
    """Open *shp* with fiona and convert every record."""
    import fiona

    with fiona.open(str(shp), driver=SHAPEFILE_DRIVER, encoding=encoding) as source:
        features = [_record_to_feature(record) for record in source]
        bbox = tuple(float(v) for v in source.bounds)

    return FeatureCollection(features=tuple(features), bbox=bbox)  # type: ignore[arg-type]


def _record_to_feature(record: Any) -> Feature:
    """Convert a fiona record into a ``Feature`` with a plain geometry mapping."""
    from shapely.geometry import mapping, shape

    geom = record.geometry
    props = record.properties or {}

    geometry = plain_geometry(mapping(shape(geom))) if geom is not None else None
    return Feature(geometry=geometry, properties=dict(props))

