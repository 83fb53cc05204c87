"""Reprojection activity: DHDN / Gauss-Krüger zone 4 → WGS 84.

The transform is closed form: inverse transverse Mercator on the Bessel
1841 ellipsoid (central meridian 12°E, false easting 4 500 000 m),
followed by a 7-parameter Helmert shift to WGS 84. pyproj performs the
arithmetic; shapely walks every geometry type.

Coordinates outside the projection's domain are a precondition
violation. Results that come back non-finite raise ``ReprojectionError``;
anything else is passed through as computed.
"""

from __future__ import annotations

import logging
import math
from functools import lru_cache
from typing import TYPE_CHECKING, Any

from shp_geojson.core.constants import GK4_CRS, WGS84_CRS, BBoxOrder
from shp_geojson.core.exceptions import StageError
from shp_geojson.models.feature import plain_geometry

if TYPE_CHECKING:
    from pyproj import Transformer

    from shp_geojson.core.status import StatusSink
    from shp_geojson.models.feature import Feature, FeatureCollection

logger = logging.getLogger("shp_geojson.activities.reproject_features")


class ReprojectionError(StageError):
    """Raised when a coordinate cannot be transformed to WGS 84."""

    default_stage = "reproject_features"
    default_code = "REPROJECTION_FAILED"


# ---------------------------------------------------------------------------
# Transformers
# ---------------------------------------------------------------------------


@lru_cache(maxsize=2)
def _transformer(source: str, target: str) -> Transformer:
    from pyproj import Transformer

    return Transformer.from_crs(source, target, always_xy=True)


def gk_to_wgs84(easting: float, northing: float) -> tuple[float, float]:
    """Convert a Gauss-Krüger zone 4 point to ``(lon, lat)`` in degrees.

    Raises:
        ReprojectionError: If the result is not finite.
    """
    lon, lat = _transformer(GK4_CRS, WGS84_CRS).transform(easting, northing)
    _check_finite((lon, lat), easting, northing)
    return lon, lat


def wgs84_to_gk(lon: float, lat: float) -> tuple[float, float]:
    """Convert a WGS 84 ``(lon, lat)`` point to Gauss-Krüger zone 4 ``(easting, northing)``."""
    return _transformer(WGS84_CRS, GK4_CRS).transform(lon, lat)


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def reproject_collection(
    collection: FeatureCollection,
    *,
    bbox_order: BBoxOrder = BBoxOrder.LEGACY,
    sink: StatusSink | None = None,
) -> FeatureCollection:
    """Reproject every geometry and the bounding box to WGS 84.

    Args:
        collection: Collection in Gauss-Krüger zone 4 metres.
        bbox_order: Axis arrangement for the output bounding box.
        sink: Optional status sink for progress text.

    Returns:
        A new collection whose coordinates are ``(lon, lat)`` degrees.

    Raises:
        ReprojectionError: If any coordinate transforms to a non-finite value.
    """
    if sink is not None:
        sink.update(f"reprojecting {len(collection)} feature(s) to WGS 84")

    features = [reproject_feature(feature) for feature in collection.features]
    bbox = reproject_bbox(collection.bbox, order=bbox_order)

    logger.info(
        "Reprojected collection | features=%d | bbox_order=%s | bbox=%s",
        len(features),
        bbox_order.value,
        list(bbox),
    )
    return collection.with_features(features).with_bbox(bbox)


def reproject_feature(feature: Feature) -> Feature:
    """Return *feature* with its geometry in WGS 84 (null geometry passes through)."""
    if feature.geometry is None:
        return feature
    return feature.with_geometry(reproject_geometry(feature.geometry))


def reproject_geometry(geometry: dict[str, Any]) -> dict[str, Any]:
    """Reproject a GeoJSON geometry mapping of any type.

    Only easting and northing are transformed; a height ordinate is
    dropped so every output position is a ``[lon, lat]`` pair.
    """
    import shapely
    from shapely.geometry import mapping, shape

    transformer = _transformer(GK4_CRS, WGS84_CRS)
    flat = shapely.force_2d(shape(geometry))
    projected = shapely.transform(flat, transformer.transform, interleaved=False)
    result = plain_geometry(mapping(projected))
    _check_geometry_finite(result)
    return result


def reproject_bbox(
    bbox: tuple[float, float, float, float],
    *,
    order: BBoxOrder = BBoxOrder.LEGACY,
) -> tuple[float, float, float, float]:
    """Reproject a bounding box.

    Corner 0 is ``(bbox[0], bbox[1])`` and corner 1 is ``(bbox[2], bbox[3])``.
    ``LEGACY`` returns ``(lat0, lon0, lat1, lon1)``; ``STANDARD`` returns
    ``(min_lon, min_lat, max_lon, max_lat)``.
    """
    lon0, lat0 = gk_to_wgs84(bbox[0], bbox[1])
    lon1, lat1 = gk_to_wgs84(bbox[2], bbox[3])
    if order is BBoxOrder.STANDARD:
        return (min(lon0, lon1), min(lat0, lat1), max(lon0, lon1), max(lat0, lat1))
    return (lat0, lon0, lat1, lon1)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _check_finite(values: tuple[float, ...], easting: float, northing: float) -> None:
    if not all(math.isfinite(v) for v in values):
        msg = f"Coordinate ({easting}, {northing}) is outside the Gauss-Krüger zone 4 domain"
        raise ReprojectionError(msg)


def _check_geometry_finite(value: Any) -> None:
    """Walk a plain geometry mapping and reject non-finite numbers."""
    if isinstance(value, dict):
        for item in value.values():
            _check_geometry_finite(item)
    elif isinstance(value, list):
        for item in value:
            _check_geometry_finite(item)
    elif isinstance(value, float) and not math.isfinite(value):
        msg = "Geometry contains coordinates outside the Gauss-Krüger zone 4 domain"
        raise ReprojectionError(msg)
