"""Shared pytest fixtures for the shapefile conversion test suite."""

from collections.abc import Callable
from pathlib import Path
from typing import Any

import pytest

from shp_geojson.models.feature import Feature, FeatureCollection
from shp_geojson.models.type_definition import TypeDefinition

# ---------------------------------------------------------------------------
# Reference coordinates (Gauss-Krüger zone 4, metres, around Fürth)
# ---------------------------------------------------------------------------

FUERTH_LINE_A = [(4427000.0, 5482000.0), (4427150.0, 5482080.0)]
FUERTH_LINE_B = [(4428000.0, 5483000.0), (4428200.0, 5483100.0)]
FUERTH_LINE_C = [(4426500.0, 5481500.0), (4426600.0, 5481650.0)]

LINE_SCHEMA: dict[str, Any] = {
    "geometry": "LineString",
    "properties": {"LAGE": "str", "Typ": "str"},
}

# ---------------------------------------------------------------------------
# Model fixtures
# ---------------------------------------------------------------------------


def make_line_feature(
    coords: list[tuple[float, float]],
    **properties: Any,
) -> Feature:
    """Build a LineString feature with the given properties."""
    return Feature(
        geometry={"type": "LineString", "coordinates": [list(c) for c in coords]},
        properties=dict(properties),
    )


@pytest.fixture()
def three_feature_collection() -> FeatureCollection:
    """Collection with ``Typ`` values ``A``, ``B`` and ``UNKNOWN``."""
    return FeatureCollection(
        features=(
            make_line_feature(FUERTH_LINE_A, LAGE="Hauptstraße", Typ="A"),
            make_line_feature(FUERTH_LINE_B, LAGE="Königstraße", Typ="B"),
            make_line_feature(FUERTH_LINE_C, LAGE="Fürther Freiheit", Typ="UNKNOWN"),
        ),
        bbox=(4426500.0, 5481500.0, 4428200.0, 5483100.0),
    )


@pytest.fixture()
def type_definitions() -> list[TypeDefinition]:
    """``A`` → ``X`` and ``B`` → ``Y``."""
    return [TypeDefinition("A", "X"), TypeDefinition("B", "Y")]


# ---------------------------------------------------------------------------
# Shapefile fixtures
# ---------------------------------------------------------------------------


@pytest.fixture()
def write_shapefile(tmp_path: Path) -> Callable[..., Path]:
    """Factory writing a LineString shapefile; returns its base path (no extension)."""

    def _write(
        records: list[tuple[list[tuple[float, float]], dict[str, Any]]],
        *,
        name: str = "Radverkehr_Fuerth",
        schema: dict[str, Any] | None = None,
    ) -> Path:
        import fiona

        base = tmp_path / "data" / name
        base.parent.mkdir(parents=True, exist_ok=True)
        with fiona.open(
            str(base.with_name(name + ".shp")),
            "w",
            driver="ESRI Shapefile",
            schema=schema or LINE_SCHEMA,
            crs="EPSG:31468",
            encoding="utf-8",
        ) as dst:
            for coords, properties in records:
                dst.write(
                    {
                        "geometry": {"type": "LineString", "coordinates": coords},
                        "properties": properties,
                    }
                )
        return base

    return _write


@pytest.fixture()
def scenario_shapefile(write_shapefile: Callable[..., Path]) -> Path:
    """Three features with ``Typ`` values ``A``, ``B`` and null."""
    return write_shapefile(
        [
            (FUERTH_LINE_A, {"LAGE": "Hauptstraße", "Typ": "A"}),
            (FUERTH_LINE_B, {"LAGE": "Königstraße", "Typ": "B"}),
            (FUERTH_LINE_C, {"LAGE": None, "Typ": None}),
        ]
    )
