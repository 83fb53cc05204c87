"""Pipeline exception hierarchy.

Two kinds of failure stop a conversion run:

- ``ValidationError`` — the configuration or its inputs are unusable;
  raised before any stage touches the shapefile.
- ``StageError``      — a pipeline stage (load, classify, reproject,
  write) failed part-way through.

Each error names the ``stage`` it came from and a machine-readable
``code``; the orchestrator prefixes the status-sink failure text with the
stage, and the CLI logs ``to_error_dict()``.
"""

from __future__ import annotations


class PipelineError(Exception):
    """Base exception for all conversion errors.

    Attributes:
        message: Human-readable error description.
        stage: Stage where the error occurred (e.g. ``"load_shapefile"``).
        code: Machine-readable error code (e.g. ``"SHAPEFILE_LOAD_FAILED"``).
        correlation_id: Identifier of the run that raised the error.
    """

    default_stage: str = ""
    default_code: str = ""

    def __init__(
        self,
        message: str = "",
        *,
        stage: str = "",
        code: str = "",
        correlation_id: str = "",
    ) -> None:
        self.message = message
        self.stage = stage or self.default_stage
        self.code = code or self.default_code
        self.correlation_id = correlation_id
        super().__init__(message)

    @property
    def category(self) -> str:
        """``"validation"`` for configuration problems, ``"stage"`` otherwise."""
        return "validation" if isinstance(self, ValidationError) else "stage"

    def to_error_dict(self) -> dict[str, object]:
        """Return the error as a flat dict for logging."""
        return {
            "category": self.category,
            "stage": self.stage,
            "code": self.code,
            "message": self.message,
            "correlation_id": self.correlation_id,
        }


class ValidationError(PipelineError):
    """Configuration or input validation failure."""


class StageError(PipelineError):
    """Failure inside a pipeline stage; the run stops."""
