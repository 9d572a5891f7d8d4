"""
API response envelopes for transformed documents.

The ``output`` member mirrors the map document: one member per
destination group, in map order, each holding its destination fields in
group-spec order.
"""

from typing import Any

from pydantic import BaseModel, Field

from jsontransform.schemas import FieldError, GroupSpec


class TransformResponse(BaseModel):
    """Result of remapping one input document."""

    status: str = Field(default="ok", description="'ok', or 'partial' when fields failed")
    output: dict[str, dict[str, Any]] = Field(default_factory=dict)
    diagnostics: list[FieldError] = Field(default_factory=list)
    metadata: dict[str, Any] = Field(default_factory=dict)


class BatchTransformResponse(BaseModel):
    """Results for a batch, in input order."""

    status: str = Field(default="ok")
    total_count: int = Field(default=0)
    results: list[TransformResponse] = Field(default_factory=list)
    metadata: dict[str, Any] = Field(default_factory=dict)


class MapResponse(BaseModel):
    """Interpreted view of a map document."""

    status: str = Field(default="ok")
    total_count: int = Field(default=0)
    groups: list[GroupSpec] = Field(default_factory=list)
