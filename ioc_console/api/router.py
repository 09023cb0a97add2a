"""Master API router — includes all sub-routers."""

from fastapi import APIRouter

from .routes.auth import router as auth_router
from .routes.dashboard import router as dashboard_router
from .routes.export import router as export_router
from .routes.ioc import router as ioc_router

api_router = APIRouter(prefix="/api/v1")

api_router.include_router(auth_router)
api_router.include_router(ioc_router)
api_router.include_router(dashboard_router)
api_router.include_router(export_router)
