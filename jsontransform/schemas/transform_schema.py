from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class TransformRequest(BaseModel):
    """Request body for the single-document transform endpoint."""

    document: dict[str, Any] = Field(
        ..., description="Input document: field name → scalar or nested object")
    map_document: dict[str, Any] | None = Field(
        default=None,
        alias="map",
        description="Map document: group → {destination field → source field}. "
                    "Omit to use the configured default map.",
    )
    strict: bool | None = Field(
        default=None,
        description="Fail with 422 when any field cannot be resolved. "
                    "Omit to use the STRICT_FIELD_ERRORS setting.",
    )

    model_config = ConfigDict(populate_by_name=True)


class BatchTransformRequest(BaseModel):
    """Request body for the batch transform endpoint."""

    documents: list[dict[str, Any]] = Field(
        ..., min_length=1, description="Input documents, remapped in order")
    map_document: dict[str, Any] | None = Field(
        default=None,
        alias="map",
        description="Map document applied to every input document.",
    )
    strict: bool | None = Field(default=None)

    model_config = ConfigDict(populate_by_name=True)
