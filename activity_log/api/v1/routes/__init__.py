from fastapi import APIRouter

from activity_log.api.v1.routes import activity


router = APIRouter()

router.include_router(activity.router, prefix="/activity", tags=["Activity"])
