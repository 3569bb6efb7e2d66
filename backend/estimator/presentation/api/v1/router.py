"""V1 API router — aggregates all v1 endpoint routers."""

from fastapi import APIRouter

from estimator.presentation.api.v1.endpoints.health import router as health_router
from estimator.presentation.api.v1.endpoints.signup import router as signup_router
from estimator.presentation.api.v1.endpoints.suppliers import router as suppliers_router
from estimator.presentation.api.v1.endpoints.clients import router as clients_router
from estimator.presentation.api.v1.endpoints.item_templates import router as item_templates_router
from estimator.presentation.api.v1.endpoints.estimates import router as estimates_router

router = APIRouter(prefix="/v1")
router.include_router(health_router)
router.include_router(signup_router)
router.include_router(suppliers_router)
router.include_router(clients_router)
router.include_router(item_templates_router)
router.include_router(estimates_router)
