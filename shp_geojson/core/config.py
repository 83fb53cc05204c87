"""Conversion configuration.

A run is fully described by one immutable ``ConversionConfig``: where the
shapefile lives, where outputs go, and the type-definition table used to
derive designations. There are no environment variables and no global
defaults object; every optional field has a documented default here.

Fail-fast validation:
    ``validate()`` raises ``ConfigValidationError`` for empty paths, a
    blank encoding, incomplete type definitions, or designations that
    cannot be used as an output filename fragment.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING

from shp_geojson.core.constants import DEFAULT_ENCODING, BBoxOrder
from shp_geojson.core.exceptions import ValidationError
from shp_geojson.models.type_definition import TypeDefinition, unique_designations

if TYPE_CHECKING:
    from collections.abc import Iterable

# Characters that would turn a designation into a different path.
_FORBIDDEN_DESIGNATION_CHARS = frozenset('/\\:*?"<>|\0')


class ConfigValidationError(ValidationError):
    """Raised when configuration values are invalid.

    Attributes:
        key: The configuration key that failed validation.
        value: The invalid value.
    """

    default_stage = "config"
    default_code = "CONFIG_VALIDATION_FAILED"

    def __init__(self, key: str, value: object, message: str) -> None:
        self.key = key
        self.value = value
        super().__init__(f"Invalid configuration {key}={value!r}: {message}")


@dataclass(frozen=True, slots=True)
class ConversionConfig:
    """Immutable conversion configuration.

    Attributes:
        input_path: Shapefile base path without extension; ``.shp`` and
            ``.dbf`` are appended. A path ending in ``.shp`` is accepted too.
        output_prefix: Output base path without extension. Partitions go to
            ``<prefix>_<designation>.geojson``, everything to
            ``<prefix>.geojson``.
        type_definitions: Type code → designation table. Empty disables
            classification and partitioned output.
        allowed_types: Codes accepted by the classifier. ``None`` means
            every code in ``type_definitions``.
        encoding: Attribute table text encoding.
        bbox_order: Axis arrangement of the reprojected bounding box.
    """

    input_path: Path
    output_prefix: Path
    type_definitions: tuple[TypeDefinition, ...] = ()
    allowed_types: frozenset[str] | None = None
    encoding: str = DEFAULT_ENCODING
    bbox_order: BBoxOrder = BBoxOrder.LEGACY

    @property
    def designations(self) -> list[str]:
        """Distinct designations in order of first appearance."""
        return unique_designations(self.type_definitions)

    @classmethod
    def from_options(
        cls,
        input_path: str | Path,
        output_prefix: str | Path,
        *,
        types_file: str | Path | None = None,
        type_definitions: Iterable[TypeDefinition] = (),
        allowed_types: Iterable[str] | None = None,
        encoding: str = DEFAULT_ENCODING,
        standard_bbox: bool = False,
    ) -> ConversionConfig:
        """Build and validate a configuration from loose option values.

        Definitions from *types_file* come first, followed by any given
        in *type_definitions*.

        Raises:
            ConfigValidationError: If any value is invalid or the types
                file cannot be read.
        """
        definitions = list(load_type_definitions(types_file)) if types_file else []
        definitions.extend(type_definitions)
        config = cls(
            input_path=Path(input_path),
            output_prefix=Path(output_prefix),
            type_definitions=tuple(definitions),
            allowed_types=frozenset(allowed_types) if allowed_types is not None else None,
            encoding=encoding,
            bbox_order=BBoxOrder.STANDARD if standard_bbox else BBoxOrder.LEGACY,
        )
        validate(config)
        return config


def validate(config: ConversionConfig) -> None:
    """Validate a configuration.  Raises ``ConfigValidationError``."""
    if not str(config.input_path) or str(config.input_path) == ".":
        raise ConfigValidationError("input_path", str(config.input_path), "must not be empty")

    if not str(config.output_prefix) or str(config.output_prefix) == ".":
        raise ConfigValidationError(
            "output_prefix", str(config.output_prefix), "must not be empty"
        )

    if not config.encoding.strip():
        raise ConfigValidationError("encoding", config.encoding, "must not be blank")

    for index, definition in enumerate(config.type_definitions):
        if not definition.type:
            raise ConfigValidationError(
                f"type_definitions[{index}].type", definition.type, "must not be empty"
            )
        if not definition.designation:
            raise ConfigValidationError(
                f"type_definitions[{index}].designation",
                definition.designation,
                "must not be empty",
            )
        if _FORBIDDEN_DESIGNATION_CHARS & set(definition.designation):
            raise ConfigValidationError(
                f"type_definitions[{index}].designation",
                definition.designation,
                "must be usable in a file name",
            )


def load_type_definitions(path: str | Path) -> list[TypeDefinition]:
    """Load type definitions from a JSON array file.

    Expected shape::

        [{"type": "RW", "designation": "Radweg"}, ...]

    Raises:
        ConfigValidationError: If the file cannot be read, is not valid
            JSON, or an entry lacks ``type``/``designation``.
    """
    path = Path(path)
    try:
        raw = json.loads(path.read_text(encoding="utf-8"))
    except OSError as exc:
        raise ConfigValidationError("types_file", str(path), f"cannot be read: {exc}") from exc
    except json.JSONDecodeError as exc:
        raise ConfigValidationError("types_file", str(path), f"is not valid JSON: {exc}") from exc

    if not isinstance(raw, list):
        raise ConfigValidationError(
            "types_file", str(path), f"must contain a JSON array, got {type(raw).__name__}"
        )

    definitions: list[TypeDefinition] = []
    for index, entry in enumerate(raw):
        if not isinstance(entry, dict):
            raise ConfigValidationError(f"types_file[{index}]", entry, "must be an object")
        try:
            definitions.append(TypeDefinition.from_dict(entry))
        except KeyError as exc:
            raise ConfigValidationError(
                f"types_file[{index}]", entry, f"missing key {exc.args[0]!r}"
            ) from exc
    return definitions
