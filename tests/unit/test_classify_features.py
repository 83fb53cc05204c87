"""Tests for the classify_features activity.

Covers:
- Designation attached for configured codes
- Unknown codes: warning, feature unclassified
- Missing codes: error-level diagnostic naming LAGE
- Empty definition list: no-op
- Allowed code without a definition: ClassificationError
"""

from __future__ import annotations

import pytest

from conftest import FUERTH_LINE_A, make_line_feature
from shp_geojson.activities.classify_features import (
    ClassificationError,
    classify_features,
    classify_with_report,
)
from shp_geojson.core.status import RecordingStatusSink
from shp_geojson.models.feature import FeatureCollection
from shp_geojson.models.type_definition import TypeDefinition


class TestClassification:
    """Designation lookup."""

    def test_matching_codes_get_designation(self, three_feature_collection, type_definitions) -> None:
        result = classify_features(three_feature_collection, type_definitions)
        designations = [f.properties.get("designation") for f in result.features]
        assert designations == ["X", "Y", None]

    def test_order_and_count_preserved(self, three_feature_collection, type_definitions) -> None:
        result = classify_features(three_feature_collection, type_definitions)
        assert len(result) == 3
        assert [f.properties["LAGE"] for f in result.features] == [
            f.properties["LAGE"] for f in three_feature_collection.features
        ]

    def test_bbox_and_type_unchanged(self, three_feature_collection, type_definitions) -> None:
        result = classify_features(three_feature_collection, type_definitions)
        assert result.bbox == three_feature_collection.bbox
        assert result.type == "FeatureCollection"

    def test_input_not_mutated(self, three_feature_collection, type_definitions) -> None:
        classify_features(three_feature_collection, type_definitions)
        assert all("designation" not in f.properties for f in three_feature_collection.features)

    def test_shared_designation(self) -> None:
        collection = FeatureCollection(
            features=(
                make_line_feature(FUERTH_LINE_A, LAGE="a", Typ="RW1"),
                make_line_feature(FUERTH_LINE_A, LAGE="b", Typ="RW2"),
            )
        )
        definitions = [TypeDefinition("RW1", "Radweg"), TypeDefinition("RW2", "Radweg")]
        result = classify_features(collection, definitions)
        assert [f.properties["designation"] for f in result.features] == ["Radweg", "Radweg"]

    def test_first_definition_wins(self) -> None:
        collection = FeatureCollection(features=(make_line_feature(FUERTH_LINE_A, Typ="A"),))
        definitions = [TypeDefinition("A", "first"), TypeDefinition("A", "second")]
        result = classify_features(collection, definitions)
        assert result.features[0].properties["designation"] == "first"


class TestDiagnostics:
    """Non-fatal diagnostics go to the status sink."""

    def test_unknown_code_warns(self, type_definitions) -> None:
        collection = FeatureCollection(
            features=(make_line_feature(FUERTH_LINE_A, LAGE="Ost", Typ="Z"),)
        )
        sink = RecordingStatusSink()
        result = classify_features(collection, type_definitions, sink=sink)
        assert "designation" not in result.features[0].properties
        warnings = sink.texts("warn")
        assert len(warnings) == 1
        assert '"Z"' in warnings[0]
        assert sink.texts("error") == []

    def test_missing_code_reports_location(self, three_feature_collection, type_definitions) -> None:
        sink = RecordingStatusSink()
        classify_features(three_feature_collection, type_definitions, sink=sink)
        errors = sink.texts("error")
        assert len(errors) == 1
        assert "Fürther Freiheit" in errors[0]
        assert sink.texts("warn") == []

    @pytest.mark.parametrize("code", [None, ""])
    def test_falsy_code_is_missing(self, type_definitions, code: object) -> None:
        collection = FeatureCollection(features=(make_line_feature(FUERTH_LINE_A, Typ=code),))
        sink = RecordingStatusSink()
        _result, report = classify_with_report(collection, type_definitions, sink=sink)
        assert report.missing == 1
        assert len(sink.texts("error")) == 1

    def test_report_counts(self, three_feature_collection, type_definitions) -> None:
        _result, report = classify_with_report(three_feature_collection, type_definitions)
        assert report.classified == 2
        assert report.unknown == 0
        assert report.missing == 1
        assert report.seen_types == {"A": 1, "B": 1}


class TestEmptyDefinitions:
    """No definitions → classification skipped."""

    def test_collection_returned_unchanged(self, three_feature_collection) -> None:
        sink = RecordingStatusSink()
        result = classify_features(three_feature_collection, [], sink=sink)
        assert result is three_feature_collection
        assert sink.events == []


class TestAllowedTypes:
    """Allowed-code set versus definitions."""

    def test_allowed_without_definition_is_fatal(self, three_feature_collection) -> None:
        definitions = [TypeDefinition("B", "Y")]
        with pytest.raises(ClassificationError, match='"A"') as exc_info:
            classify_features(three_feature_collection, definitions, allowed_types={"A", "B"})
        assert exc_info.value.stage == "classify_features"

    def test_defined_but_not_allowed_warns(self, three_feature_collection, type_definitions) -> None:
        sink = RecordingStatusSink()
        result = classify_features(
            three_feature_collection, type_definitions, allowed_types={"A"}, sink=sink
        )
        assert result.features[0].properties["designation"] == "X"
        assert "designation" not in result.features[1].properties
        assert len(sink.texts("warn")) == 1
