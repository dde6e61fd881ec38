"""HTTP routes."""

from fastapi import APIRouter

from emilyloja.api import auth, catalog, health

router = APIRouter()
router.include_router(auth.router, prefix="/api", tags=["auth"])
router.include_router(catalog.router, prefix="/api", tags=["catalog"])
router.include_router(health.router, tags=["health"])
