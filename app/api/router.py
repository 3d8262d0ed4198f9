"""Central router that includes all sub-routers."""

from fastapi import APIRouter

from app.api.jobs import router as jobs_router
from app.api.social import router as social_router
from app.api.notices import router as notices_router
from app.api.docs import router as docs_router
from app.api.dashboard import router as dashboard_router

api_router = APIRouter()
api_router.include_router(jobs_router)
api_router.include_router(social_router)
api_router.include_router(notices_router)
api_router.include_router(docs_router)
api_router.include_router(dashboard_router)
