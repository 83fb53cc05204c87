"""Type code → designation lookup entries."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterable


@dataclass(frozen=True, slots=True)
class TypeDefinition:
    """Maps a raw ``Typ`` code to a human-facing designation.

    Several codes may share one designation.
    """

    type: str
    designation: str

    @classmethod
    def from_dict(cls, data: dict[str, object]) -> TypeDefinition:
        """Deserialise from ``{"type": ..., "designation": ...}``.

        Raises:
            KeyError: If either key is missing.
        """
        return cls(type=str(data["type"]), designation=str(data["designation"]))


def unique_designations(definitions: Iterable[TypeDefinition]) -> list[str]:
    """Return the distinct designations in order of first appearance."""
    return list(dict.fromkeys(d.designation for d in definitions))
