"""Data models used throughout the pipeline.

- Feature / FeatureCollection: immutable GeoJSON snapshots passed
  between stages
- TypeDefinition: type code → designation lookup entry
- ConversionResult: summary of a finished run
"""

from shp_geojson.models.feature import Feature, FeatureCollection, plain_geometry
from shp_geojson.models.result import ConversionResult
from shp_geojson.models.type_definition import TypeDefinition, unique_designations

__all__ = [
    "ConversionResult",
    "Feature",
    "FeatureCollection",
    "plain_geometry",
    "TypeDefinition",
    "unique_designations",
]
