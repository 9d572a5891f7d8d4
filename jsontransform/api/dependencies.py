"""
Shared FastAPI dependencies — injected into route handlers.
"""

import json
from typing import Any, TypeVar

from fastapi import Depends, Request
from fastapi.exceptions import RequestValidationError
from pydantic import BaseModel, ValidationError

from jsontransform.config import Settings, get_settings
from jsontransform.core.exceptions import ValidationException
from jsontransform.mappers.map_interpreter import loads_with_map
from jsontransform.schemas.transform_schema import BatchTransformRequest, TransformRequest
from jsontransform.services.transform_service import TransformService

RequestT = TypeVar("RequestT", bound=BaseModel)


def get_default_map(request: Request) -> dict[str, Any] | None:
    """Provide the default map loaded into app state at start-up."""
    return getattr(request.app.state, "default_map", None)


def get_transform_service(
    default_map: dict[str, Any] | None = Depends(get_default_map),
    settings: Settings = Depends(get_settings),
) -> TransformService:
    """Provide a TransformService configured from settings."""
    return TransformService(
        default_map=default_map,
        missing_value_policy=settings.missing_value_policy,
        strict=settings.strict_field_errors,
        max_batch_size=settings.max_batch_size,
    )


async def get_transform_request(request: Request) -> TransformRequest:
    """Decode a single-document transform body (inline map checked for duplicates)."""
    return await _decode_body(request, TransformRequest)


async def get_batch_transform_request(request: Request) -> BatchTransformRequest:
    """Decode a batch transform body (inline map checked for duplicates)."""
    return await _decode_body(request, BatchTransformRequest)


# ─── Helpers ──────────────────────────────────────────────────────────


async def _decode_body(request: Request, model: type[RequestT]) -> RequestT:
    """
    Parse the raw JSON body and validate it against ``model``.

    FastAPI's own decoder keeps the last of two equal keys, which would let
    a repeated destination field in an inline map pass silently; the body
    is decoded with ``loads_with_map`` instead.

    Raises:
        ValidationException:                Body is not valid JSON.
        MalformedMapException:              Repeated group name in the map.
        DuplicateDestinationFieldException: Repeated destination field in the map.
        RequestValidationError:             Body does not match ``model``.
    """
    body = await request.body()
    try:
        payload = loads_with_map(body or b"null")
    except (json.JSONDecodeError, UnicodeDecodeError) as exc:
        raise ValidationException(
            message="Request body is not valid JSON.",
            details={"reason": str(exc)},
        ) from exc

    try:
        return model.model_validate(payload)
    except ValidationError as exc:
        raise RequestValidationError(
            [{**err, "loc": ("body", *err.get("loc", ()))} for err in exc.errors()],
            body=payload,
        ) from exc
