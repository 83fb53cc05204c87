"""GeoJSON feature and feature collection snapshots.

Stages never mutate a collection in place: each one receives a
``FeatureCollection`` and returns a new one built with ``with_features``
/ ``with_bbox`` and ``Feature.with_properties``.
"""

from __future__ import annotations

import copy
from dataclasses import dataclass, field, replace
from typing import Any

FEATURE_TYPE = "Feature"
COLLECTION_TYPE = "FeatureCollection"


@dataclass(frozen=True, slots=True)
class Feature:
    """A single GeoJSON feature.

    Attributes:
        geometry: GeoJSON geometry mapping (``type`` + ``coordinates`` or
            ``geometries``), or ``None`` for a null geometry.
        properties: Attribute values keyed by field name.
    """

    geometry: dict[str, Any] | None = None
    properties: dict[str, Any] = field(default_factory=dict)

    def with_properties(self, **updates: Any) -> Feature:
        """Return a copy with *updates* merged into the properties."""
        return replace(self, properties={**self.properties, **updates})

    def with_geometry(self, geometry: dict[str, Any] | None) -> Feature:
        """Return a copy carrying *geometry*."""
        return replace(self, geometry=geometry)

    def to_dict(self) -> dict[str, Any]:
        """Serialise to a GeoJSON feature dict (deep copy)."""
        return {
            "type": FEATURE_TYPE,
            "properties": copy.deepcopy(self.properties),
            "geometry": copy.deepcopy(self.geometry),
        }


@dataclass(frozen=True, slots=True)
class FeatureCollection:
    """An ordered GeoJSON feature collection with a bounding box.

    Attributes:
        features: Features in source order.
        bbox: ``(x0, y0, x1, y1)`` in whatever axis order the current stage
            produced (see ``reproject_features.BBoxOrder``).
        type: GeoJSON type tag, always ``"FeatureCollection"``.
    """

    features: tuple[Feature, ...] = ()
    bbox: tuple[float, float, float, float] = (0.0, 0.0, 0.0, 0.0)
    type: str = COLLECTION_TYPE

    def __len__(self) -> int:
        return len(self.features)

    def with_features(self, features: list[Feature] | tuple[Feature, ...]) -> FeatureCollection:
        """Return a copy carrying *features* (type tag and bbox unchanged)."""
        return replace(self, features=tuple(features))

    def with_bbox(self, bbox: tuple[float, float, float, float]) -> FeatureCollection:
        """Return a copy carrying *bbox*."""
        return replace(self, bbox=tuple(bbox))  # type: ignore[arg-type]

    def to_dict(self) -> dict[str, Any]:
        """Serialise to a GeoJSON dict with keys ``type``, ``features``, ``bbox``."""
        return {
            "type": self.type,
            "features": [feature.to_dict() for feature in self.features],
            "bbox": list(self.bbox),
        }


def plain_geometry(value: Any) -> Any:
    """Recursively turn a tuple-based geometry mapping into lists and dicts.

    shapely's ``mapping`` yields nested tuples; JSON output and equality
    checks against parsed files both want lists.
    """
    if isinstance(value, dict):
        return {key: plain_geometry(item) for key, item in value.items()}
    if isinstance(value, list | tuple):
        return [plain_geometry(item) for item in value]
    return value
