"""Reminder API Routes"""

from fastapi import APIRouter, HTTPException

from ..core.exceptions import ValidationError
from ..models import IntervalRequest, IntervalResponse, MessageCountResponse, ReminderCheckRequest
from .dependencies import ConductorServiceDep

router = APIRouter(prefix="/api/v1/reminder", tags=["reminder"])


@router.post("/check")
async def check_reminder(service: ConductorServiceDep, request: ReminderCheckRequest | None = None):
    """Count one message and return the reminder when due"""
    interval = request.interval if request else None
    try:
        check = await service.check_reminder(interval)
    except ValidationError as e:
        raise HTTPException(status_code=422, detail=str(e)) from e
    return check.to_dict()


@router.get("/interval", response_model=IntervalResponse)
async def get_interval(service: ConductorServiceDep):
    return IntervalResponse(interval=await service.get_reminder_interval())


@router.put("/interval", response_model=IntervalResponse)
async def set_interval(request: IntervalRequest, service: ConductorServiceDep):
    try:
        await service.set_reminder_interval(request.interval)
    except ValidationError as e:
        raise HTTPException(status_code=422, detail=str(e)) from e
    return IntervalResponse(interval=await service.get_reminder_interval())


@router.get("/count", response_model=MessageCountResponse)
async def get_count(service: ConductorServiceDep):
    return MessageCountResponse(count=await service.get_message_count())


@router.delete("/count", response_model=MessageCountResponse)
async def reset_count(service: ConductorServiceDep):
    await service.reset_reminder_counter()
    return MessageCountResponse(count=0)
