from fastapi import APIRouter

from .consulta import consulta_router
from .health import health_router

router = APIRouter()

router.include_router(health_router, tags=["Health"])
router.include_router(consulta_router, tags=["Consultas"])
