"""
Main API router that combines all route modules
"""
from fastapi import APIRouter
from .auth import router as auth_router
from .contracts import router as contracts_router
from .subgrants import router as subgrants_router
from .reports import router as reports_router
from .db_utils import router as db_utils_router
from ..core.config import settings

api_router = APIRouter(prefix=settings.API_V1_PREFIX)

# Include all route modules
api_router.include_router(auth_router)
api_router.include_router(contracts_router)
api_router.include_router(subgrants_router)
api_router.include_router(reports_router)
api_router.include_router(db_utils_router)
