from fastapi import APIRouter

from api.v1.routes.admin import router as admin_router
from api.v1.routes.events import router as events_router

# Main v1 router (includes all endpoints)
router = APIRouter()
router.include_router(events_router)
router.include_router(admin_router)
