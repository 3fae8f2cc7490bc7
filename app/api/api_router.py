from fastapi import APIRouter

from app.api import (
    api_auth, api_healthcheck, api_medication, api_notification, api_reminder, api_upload, api_user
)

router = APIRouter()

router.include_router(api_healthcheck.router, tags=["health-check"], prefix="/healthcheck")
router.include_router(api_auth.router, tags=["authentication"], prefix="/auth")
router.include_router(api_user.router, tags=["user"], prefix="/users")
router.include_router(api_medication.router, tags=["medication"], prefix="/medications")
router.include_router(api_notification.router, tags=["notification"], prefix="/notifications")
router.include_router(api_reminder.router, tags=["reminder"], prefix="/reminders")
router.include_router(api_upload.router, tags=["upload"], prefix="/uploads")
