"""Shared pipeline constants.

Property keys, sentinels, file extensions and the coordinate reference
systems used by the conversion stages.
"""

from __future__ import annotations

from enum import StrEnum

# ---------------------------------------------------------------------------
# Feature properties
# ---------------------------------------------------------------------------

LOCATION_KEY: str = "LAGE"
"""Attribute holding the human-readable location label."""

TYPE_KEY: str = "Typ"
"""Attribute holding the raw type code."""

DESIGNATION_KEY: str = "designation"
"""Derived attribute attached by the classifier."""

UNKNOWN: str = "UNKNOWN"
"""Sentinel written into missing or falsy ``LAGE``/``Typ`` attributes."""

# ---------------------------------------------------------------------------
# Files
# ---------------------------------------------------------------------------

GEOMETRY_SUFFIX: str = ".shp"
ATTRIBUTE_SUFFIX: str = ".dbf"
GEOJSON_SUFFIX: str = ".geojson"
DEFAULT_ENCODING: str = "utf-8"
SHAPEFILE_DRIVER: str = "ESRI Shapefile"

# ---------------------------------------------------------------------------
# Coordinate reference systems
# ---------------------------------------------------------------------------

#: DHDN / 3-degree Gauss-Krüger zone 4 (EPSG:31468) on the Bessel 1841
#: ellipsoid with the 7-parameter Helmert shift to WGS 84.
GK4_CRS: str = (
    "+proj=tmerc +lat_0=0 +lon_0=12 +k=1 +x_0=4500000 +y_0=0 "
    "+ellps=bessel +towgs84=598.1,73.7,418.2,0.202,0.045,-2.455,6.7 "
    "+units=m +no_defs +type=crs"
)

WGS84_CRS: str = "EPSG:4326"


class BBoxOrder(StrEnum):
    """Axis arrangement of the reprojected bounding box.

    ``LEGACY`` keeps the arrangement downstream consumers of the existing
    outputs rely on: ``[lat0, lon0, lat1, lon1]`` where corner 0 is
    ``(bbox[0], bbox[1])`` and corner 1 is ``(bbox[2], bbox[3])``.
    ``STANDARD`` is the GeoJSON ``[min_lon, min_lat, max_lon, max_lat]``.
    """

    LEGACY = "legacy"
    STANDARD = "standard"
