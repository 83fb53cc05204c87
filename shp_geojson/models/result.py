"""Result contract of a finished conversion run."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from pathlib import Path


@dataclass(frozen=True, slots=True)
class ConversionResult:
    """Summary of one pipeline run.

    Attributes:
        feature_count: Features in the combined output.
        classified_count: Features that received a designation.
        designation_counts: Feature count per written designation file,
            in write order.
        written_paths: Every output file written, partitions first and
            the combined file last.
    """

    feature_count: int
    classified_count: int = 0
    designation_counts: dict[str, int] = field(default_factory=dict)
    written_paths: list[Path] = field(default_factory=list)

    @property
    def unclassified_count(self) -> int:
        return self.feature_count - self.classified_count

    def to_dict(self) -> dict[str, object]:
        return {
            "feature_count": self.feature_count,
            "classified_count": self.classified_count,
            "designation_counts": dict(self.designation_counts),
            "written_paths": [str(p) for p in self.written_paths],
        }
