"""Saved timetable routes."""

import logging

from fastapi import APIRouter, Request

from ...exceptions import (
    DatabaseUnavailableError,
    NotFoundError,
    RequestValidationError,
    StorageError,
)
from ...models.timetable import TimetableData, validate_timetable_data
from ..dependencies import get_db_manager, get_timetable_repository, read_json

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/timetables", tags=["timetables"])


@router.post("")
async def save_timetable(request: Request):
    """Save a generated timetable for a user."""
    payload = await read_json(request)

    user_id = payload.get("userId")
    timetable = payload.get("timetable")
    if not user_id or not timetable:
        raise RequestValidationError("userId and timetable are required")

    problems = validate_timetable_data(timetable)
    if problems:
        raise RequestValidationError(
            "Invalid timetable data", field="timetable", details="; ".join(problems)
        )

    await get_db_manager(request).ensure_connected()
    saved = await get_timetable_repository(request).create(
        str(user_id), TimetableData.from_dict(timetable)
    )
    logger.info("Saved timetable %s for user=%s", saved.id, saved.user_id)
    return {"success": True, "timetable": saved.to_dict()}


@router.get("")
async def list_timetables(request: Request, userId: str | None = None):
    """List a user's saved timetables, newest first."""
    if not userId:
        raise RequestValidationError("userId is required", field="userId")

    manager = get_db_manager(request)
    try:
        await manager.ensure_connected()
    except DatabaseUnavailableError as e:
        raise DatabaseUnavailableError(
            "Database connection error. Please check database configuration.",
            details="Database is not connected",
        ) from e

    try:
        timetables = await get_timetable_repository(request).list_by_user(userId)
    except StorageError as e:
        logger.error("Error fetching timetables for user=%s: %s", userId, e.details)
        if e.category == StorageError.CONNECTION:
            raise StorageError(
                "Database connection failed",
                details="Unable to connect to database",
                category=e.category,
            ) from e
        if e.category == StorageError.VALIDATION:
            raise RequestValidationError("Invalid request data", details=e.details) from e
        raise StorageError("Failed to fetch timetables", details=e.details) from e

    return {"success": True, "timetables": [t.to_dict() for t in timetables]}


@router.get("/{timetable_id}")
async def get_timetable(request: Request, timetable_id: str):
    """Fetch one saved timetable."""
    await get_db_manager(request).ensure_connected()
    saved = await get_timetable_repository(request).get(timetable_id)
    if saved is None:
        raise NotFoundError("Timetable not found")
    return {"success": True, "timetable": saved.to_dict()}


@router.delete("/{timetable_id}")
async def delete_timetable(request: Request, timetable_id: str):
    """Delete a saved timetable; deleting a missing id still succeeds."""
    await get_db_manager(request).ensure_connected()
    deleted = await get_timetable_repository(request).delete(timetable_id)
    logger.info("Deleted timetable %s (%d rows)", timetable_id, deleted)
    return {"success": True}
