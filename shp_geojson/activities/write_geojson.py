"""GeoJSON writer / partitioner activity.

Writes one file per designation (features filtered to that designation,
same type tag and bounding box) and then one combined file holding the
whole collection:

    <prefix>_<designation>.geojson
    <prefix>.geojson

Files are tab-indented UTF-8 JSON. The first failed write raises
``WriteError`` naming the path; later writes are skipped and files
already on disk are left as they are.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import TYPE_CHECKING, Any

from shp_geojson.core.constants import DESIGNATION_KEY, GEOJSON_SUFFIX
from shp_geojson.core.exceptions import StageError

if TYPE_CHECKING:
    from collections.abc import Sequence

    from shp_geojson.core.status import StatusSink
    from shp_geojson.models.feature import FeatureCollection

logger = logging.getLogger("shp_geojson.activities.write_geojson")


class WriteError(StageError):
    """Raised when an output file cannot be written.

    Attributes:
        path: The output path that failed.
    """

    default_stage = "write_geojson"
    default_code = "GEOJSON_WRITE_FAILED"

    def __init__(self, message: str = "", *, path: Path | str = "", **kwargs: object) -> None:
        self.path = Path(path) if path else None
        super().__init__(message, **kwargs)  # type: ignore[arg-type]


# ---------------------------------------------------------------------------
# Paths
# ---------------------------------------------------------------------------


def partition_path(output_prefix: str | Path, designation: str) -> Path:
    """Return ``<prefix>_<designation>.geojson``."""
    prefix = Path(output_prefix)
    return prefix.with_name(f"{prefix.name}_{designation}{GEOJSON_SUFFIX}")


def combined_path(output_prefix: str | Path) -> Path:
    """Return ``<prefix>.geojson``."""
    prefix = Path(output_prefix)
    return prefix.with_name(f"{prefix.name}{GEOJSON_SUFFIX}")


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def filter_designation(collection: FeatureCollection, designation: str) -> dict[str, Any]:
    """Return a GeoJSON dict holding only features with *designation*.

    The result is a deep copy; the collection is not touched.
    """
    data = collection.to_dict()
    data["features"] = [
        feature
        for feature in data["features"]
        if (feature.get("properties") or {}).get(DESIGNATION_KEY) == designation
    ]
    return data


def write_partitions(
    collection: FeatureCollection,
    output_prefix: str | Path,
    designations: Sequence[str],
    *,
    sink: StatusSink | None = None,
) -> dict[Path, int]:
    """Write the per-designation files, then the combined file.

    Args:
        collection: Final, reprojected and classified collection.
        output_prefix: Output base path without extension.
        designations: Designations to write, in order.
        sink: Optional status sink for progress text.

    Returns:
        Mapping of every written path to its feature count, in write order.

    Raises:
        WriteError: On the first failed write.
    """
    written: dict[Path, int] = {}

    for designation in designations:
        if sink is not None:
            sink.update(f'processing designation "{designation}"')
        path = partition_path(output_prefix, designation)
        data = filter_designation(collection, designation)
        save_geojson(path, data)
        written[path] = len(data["features"])
        if sink is not None:
            sink.update(f'successfully wrote geo-json file "{path}"')

    path = combined_path(output_prefix)
    save_geojson(path, collection.to_dict())
    written[path] = len(collection)

    logger.info(
        "Wrote GeoJSON outputs | prefix=%s | partitions=%d | features=%d",
        output_prefix,
        len(designations),
        len(collection),
    )
    return written


def save_geojson(path: str | Path, data: dict[str, Any]) -> Path:
    """Serialise *data* to *path* as tab-indented UTF-8 JSON.

    Missing parent directories are created.

    Raises:
        WriteError: If *data* cannot be serialised, or the directory or
            file cannot be written.
    """
    path = Path(path)
    try:
        text = json.dumps(data, indent="\t", ensure_ascii=False)
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(text, encoding="utf-8")
    except (OSError, TypeError, ValueError) as exc:
        msg = f'ERROR saving geo-json to file "{path}": {exc}'
        raise WriteError(msg, path=path) from exc

    logger.debug("Wrote %s (%d bytes)", path, len(text.encode("utf-8")))
    return path
