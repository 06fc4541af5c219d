"""Daily analytics routes."""

import logging

from fastapi import APIRouter, Request

from ...exceptions import RequestValidationError
from ...models.analytics import DailyAnalytics
from ..dependencies import get_analytics_service, get_db_manager, read_json

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/analytics", tags=["analytics"])


@router.post("")
async def save_analytics(request: Request):
    """Upsert the analytics record for a user's day."""
    payload = await read_json(request)

    if not payload.get("userId") or not payload.get("date"):
        raise RequestValidationError("userId and date are required")

    try:
        analytics = DailyAnalytics.from_request(payload)
    except (KeyError, TypeError, ValueError) as e:
        raise RequestValidationError("Invalid analytics data", details=str(e)) from e

    await get_db_manager(request).ensure_connected()
    saved = await get_analytics_service(request).save_day(analytics)
    return {"success": True, "analytics": saved.to_dict()}


@router.get("")
async def get_analytics(
    request: Request,
    userId: str | None = None,
    startDate: str | None = None,
    endDate: str | None = None,
):
    """Query a user's records in an inclusive date range, with metrics."""
    if not userId:
        raise RequestValidationError("userId is required", field="userId")

    await get_db_manager(request).ensure_connected()
    records, metrics = await get_analytics_service(request).query(
        userId, start_date=startDate or None, end_date=endDate or None
    )
    return {
        "success": True,
        "analytics": [r.to_dict() for r in records],
        "metrics": metrics.to_dict(),
    }


@router.put("/task")
async def update_task_completion(request: Request):
    """Mark one task of a day completed or not."""
    payload = await read_json(request)

    user_id = payload.get("userId")
    date = payload.get("date")
    task_id = payload.get("taskId")
    if not user_id or not date or task_id is None:
        raise RequestValidationError("userId, date, and taskId are required")
    completed = payload.get("completed", False)
    if not isinstance(completed, bool):
        raise RequestValidationError("completed must be a boolean", field="completed")

    await get_db_manager(request).ensure_connected()
    analytics = await get_analytics_service(request).update_task_completion(
        str(user_id), str(date), str(task_id), completed
    )
    return {"success": True, "analytics": analytics.to_dict()}


@router.delete("")
async def reset_analytics(request: Request, userId: str | None = None):
    """Delete all of a user's analytics records."""
    if not userId:
        raise RequestValidationError("userId is required", field="userId")

    await get_db_manager(request).ensure_connected()
    deleted = await get_analytics_service(request).reset(userId)
    return {
        "success": True,
        "message": f"Deleted {deleted} analytics records",
        "deletedCount": deleted,
    }
