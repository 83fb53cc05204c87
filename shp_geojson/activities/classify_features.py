"""Feature classification activity.

Looks up each feature's raw ``Typ`` code in the type-definition table and
attaches the matching ``designation``. Unknown and missing codes are
reported to the status sink but never stop the run and never drop a
feature; unclassified features simply stay out of the partitioned files.

The only fatal case is an inconsistency between the allowed codes and the
definitions: a code that is allowed but has no definition.
"""

from __future__ import annotations

import logging
from collections import Counter
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from shp_geojson.core.constants import DESIGNATION_KEY, LOCATION_KEY, TYPE_KEY, UNKNOWN
from shp_geojson.core.exceptions import StageError

if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence

    from shp_geojson.core.status import StatusSink
    from shp_geojson.models.feature import Feature, FeatureCollection
    from shp_geojson.models.type_definition import TypeDefinition

logger = logging.getLogger("shp_geojson.activities.classify_features")


class ClassificationError(StageError):
    """Raised when an allowed type code has no matching definition."""

    default_stage = "classify_features"
    default_code = "TYPE_DEFINITION_MISSING"


@dataclass(frozen=True, slots=True)
class ClassificationReport:
    """Counts gathered while classifying a collection.

    Attributes:
        classified: Features that received a designation.
        unknown: Features whose code is set but not allowed.
        missing: Features without a code.
        seen_types: Allowed codes encountered, with occurrence counts.
    """

    classified: int = 0
    unknown: int = 0
    missing: int = 0
    seen_types: dict[str, int] = field(default_factory=dict)


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def classify_features(
    collection: FeatureCollection,
    definitions: Sequence[TypeDefinition],
    *,
    allowed_types: Iterable[str] | None = None,
    sink: StatusSink | None = None,
) -> FeatureCollection:
    """Attach designations to every feature with a known type code.

    See ``classify_with_report`` for the rules.
    """
    classified, _report = classify_with_report(
        collection, definitions, allowed_types=allowed_types, sink=sink
    )
    return classified


def classify_with_report(
    collection: FeatureCollection,
    definitions: Sequence[TypeDefinition],
    *,
    allowed_types: Iterable[str] | None = None,
    sink: StatusSink | None = None,
) -> tuple[FeatureCollection, ClassificationReport]:
    """Classify *collection* and return it with a ``ClassificationReport``.

    Rules, applied per feature in source order:

    - No definitions: the collection is returned unchanged.
    - Code set and allowed: the first definition for that code supplies
      ``designation``.
    - Code set but not allowed: warning, feature left unclassified.
    - Code missing (``None``, empty, or ``"UNKNOWN"``): error-level
      diagnostic naming the feature's ``LAGE``, feature left unclassified.

    Args:
        collection: Loaded collection.
        definitions: Type code → designation table.
        allowed_types: Accepted codes. Defaults to the definition codes.
        sink: Optional status sink for diagnostics.

    Raises:
        ClassificationError: If an allowed code has no definition.
    """
    if not definitions:
        logger.info("Classification skipped | no type definitions configured")
        return collection, ClassificationReport()

    lookup: dict[str, str] = {}
    for definition in definitions:
        lookup.setdefault(definition.type, definition.designation)
    allowed = frozenset(allowed_types) if allowed_types is not None else frozenset(lookup)

    seen: Counter[str] = Counter()
    unknown = 0
    missing = 0
    features: list[Feature] = []

    for feature in collection.features:
        code = feature.properties.get(TYPE_KEY)

        if _is_set(code) and str(code) in allowed:
            code = str(code)
            if sink is not None:
                sink.update(f'Valid type found: "{code}"')
            designation = lookup.get(code)
            if designation is None:
                msg = f'type definition for type "{code}" not found!'
                raise ClassificationError(msg)
            feature = feature.with_properties(**{DESIGNATION_KEY: designation})
            seen[code] += 1
        elif _is_set(code):
            unknown += 1
            if sink is not None:
                sink.warn(
                    f'Unknown type found: "{code}". Please change/extend the type definitions'
                )
        else:
            missing += 1
            location = feature.properties.get(LOCATION_KEY) or UNKNOWN
            if sink is not None:
                sink.error(f'Invalid type "{code}" found in "{location}".')

        features.append(feature)

    report = ClassificationReport(
        classified=sum(seen.values()),
        unknown=unknown,
        missing=missing,
        seen_types=dict(seen),
    )
    logger.info(
        "Classified features | total=%d | classified=%d | unknown=%d | missing=%d",
        len(features),
        report.classified,
        report.unknown,
        report.missing,
    )
    return collection.with_features(features), report


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _is_set(code: object) -> bool:
    """Whether *code* is a real type code rather than a missing-value marker."""
    return bool(code) and code != UNKNOWN
