"""
Transform endpoints — remap input documents into destination groups.

POST /transform/
POST /transform/batch

Bodies are decoded by dependencies rather than FastAPI's body parser, so
the request schema is declared through ``openapi_extra``.
"""

from fastapi import APIRouter, Depends

from jsontransform.api.dependencies import (
    get_batch_transform_request,
    get_transform_request,
    get_transform_service,
)
from jsontransform.schemas.output_schema import BatchTransformResponse, TransformResponse
from jsontransform.schemas.transform_schema import BatchTransformRequest, TransformRequest
from jsontransform.services.transform_service import TransformService

router = APIRouter(prefix="/transform", tags=["Transform"])


def _json_body(model: type) -> dict:
    return {
        "requestBody": {
            "required": True,
            "content": {
                "application/json": {"schema": model.model_json_schema(by_alias=True)}
            },
        }
    }


@router.post(
    "/",
    response_model=TransformResponse,
    summary="Remap one document into destination groups",
    description=(
        "Resolves every field named by the map against the input document "
        "and returns the output grouped by destination.  Fields that cannot "
        "be resolved are reported in 'diagnostics' unless strict mode is on."
    ),
    openapi_extra=_json_body(TransformRequest),
)
def transform_document(
    req: TransformRequest = Depends(get_transform_request),
    service: TransformService = Depends(get_transform_service),
) -> TransformResponse:
    return service.transform(
        document=req.document,
        map_document=req.map_document,
        strict=req.strict,
    )


@router.post(
    "/batch",
    response_model=BatchTransformResponse,
    summary="Remap a batch of documents with one map",
    openapi_extra=_json_body(BatchTransformRequest),
)
async def transform_batch(
    req: BatchTransformRequest = Depends(get_batch_transform_request),
    service: TransformService = Depends(get_transform_service),
) -> BatchTransformResponse:
    return await service.transform_many(
        documents=req.documents,
        map_document=req.map_document,
        strict=req.strict,
    )
