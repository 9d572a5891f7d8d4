"""
Route aggregation for API v1.
"""

from fastapi import APIRouter

from jsontransform.api.routes.maps import router as maps_router
from jsontransform.api.routes.transform import router as transform_router

router = APIRouter()
router.include_router(maps_router)
router.include_router(transform_router)
