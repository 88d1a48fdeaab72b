from fastapi import APIRouter

from schemagate.api.routes_health import router as health_router

router = APIRouter()
router.include_router(health_router, tags=["health"])
