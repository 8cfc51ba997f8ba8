"""API v1 router configuration."""

from fastapi import APIRouter

from api.v1.routes.admin import router as admin_router
from api.v1.routes.admin import visits_router
from api.v1.routes.messages import router as messages_router
from api.v1.routes.notifications import router as notifications_router
from api.v1.routes.profiles import router as profiles_router
from api.v1.routes.reviews import router as reviews_router
from api.v1.routes.services import router as services_router

router = APIRouter()
router.include_router(profiles_router)
router.include_router(services_router)
router.include_router(reviews_router)
router.include_router(messages_router)
router.include_router(notifications_router)
router.include_router(admin_router)
router.include_router(visits_router)
