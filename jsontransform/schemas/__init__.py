"""
Pydantic models for the remapping engine.

These models describe the interpreted map document (groups and field
specs), a single resolved value, and the result of one transform run.
"""

from collections.abc import Iterator
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from jsontransform.core.exceptions import MappingFieldException, TransformationException


# ── Map document ───────────────────────────────────────────────────────


class FieldSpec(BaseModel):
    """One ``destination ← source`` pair inside a destination group."""

    destination: str = Field(..., description="Field name in the output group")
    source: str = Field(..., description="Key looked up in the input document")

    model_config = ConfigDict(frozen=True)


class GroupSpec(BaseModel):
    """
    A destination group (e.g. a target CouchDB database) and its fields,
    in map document order.
    """

    name: str = Field(..., description="Destination group name")
    field_specs: list[FieldSpec] = Field(default_factory=list)

    model_config = ConfigDict(frozen=True)


# ── Resolved values ────────────────────────────────────────────────────


class ValueKind(str, Enum):
    SCALAR = "scalar"
    STRUCTURED = "structured"
    ABSENT = "absent"


class ResolvedValue(BaseModel):
    """
    Tagged value produced by resolving one source field.

      - SCALAR:     ``value`` is the textual form of a scalar.
      - STRUCTURED: ``value`` is a re-validated JSON object or array.
      - ABSENT:     resolution failed, ``value`` is None.
    """

    kind: ValueKind
    value: Any = None

    model_config = ConfigDict(frozen=True)

    @classmethod
    def scalar(cls, text: str) -> "ResolvedValue":
        return cls(kind=ValueKind.SCALAR, value=text)

    @classmethod
    def structured(cls, value: dict[str, Any] | list[Any]) -> "ResolvedValue":
        return cls(kind=ValueKind.STRUCTURED, value=value)

    @classmethod
    def absent(cls) -> "ResolvedValue":
        return cls(kind=ValueKind.ABSENT)


# ── Transform result ───────────────────────────────────────────────────


class FieldError(BaseModel):
    """A non-fatal, per-field diagnostic collected during a transform."""

    group: str = Field(..., description="Destination group name")
    field: str = Field(..., description="Destination field name")
    source_field: str = Field(..., description="Source field named by the map")
    error_code: str = Field(..., description="e.g. MISSING_SOURCE_FIELD")
    message: str = Field(default="")

    @classmethod
    def from_exception(
        cls, group: str, spec: FieldSpec, exc: MappingFieldException
    ) -> "FieldError":
        return cls(
            group=group,
            field=spec.destination,
            source_field=spec.source,
            error_code=exc.error_code,
            message=exc.message,
        )


class TransformResult(BaseModel):
    """Output document plus the diagnostics list for one input document."""

    output: dict[str, dict[str, Any]] = Field(default_factory=dict)
    diagnostics: list[FieldError] = Field(default_factory=list)

    @property
    def has_errors(self) -> bool:
        return bool(self.diagnostics)

    def partitions(self) -> Iterator[tuple[str, dict[str, Any]]]:
        """Yield ``(group_name, group_document)`` pairs in map order."""
        yield from self.output.items()

    def raise_for_diagnostics(self) -> None:
        """
        Escalate collected field errors to a hard failure.

        Raises:
            TransformationException: If any diagnostic was recorded.
        """
        if not self.diagnostics:
            return
        raise TransformationException(
            message=f"Transform produced {len(self.diagnostics)} field error(s).",
            details={"diagnostics": [d.model_dump() for d in self.diagnostics]},
        )
