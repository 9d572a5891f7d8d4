"""
Maps endpoint — inspect the configured default map.

GET /maps/default
"""

from fastapi import APIRouter, Depends

from jsontransform.api.dependencies import get_transform_service
from jsontransform.schemas.output_schema import MapResponse
from jsontransform.services.transform_service import TransformService

router = APIRouter(prefix="/maps", tags=["Maps"])


@router.get(
    "/default",
    response_model=MapResponse,
    summary="Show the default map",
    description=(
        "Returns the destination groups and field specs of the map loaded "
        "from MAP_FILE at start-up.  404 when no default map is configured."
    ),
)
async def get_default_map(
    service: TransformService = Depends(get_transform_service),
) -> MapResponse:
    group_specs = service.default_groups()
    return MapResponse(
        status="ok",
        total_count=len(group_specs),
        groups=group_specs,
    )
