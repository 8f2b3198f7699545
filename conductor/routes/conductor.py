"""Delegation Tracking API Routes"""

from fastapi import APIRouter, HTTPException, Query
from fastapi.responses import PlainTextResponse

from ..core.exceptions import StoreError, ValidationError
from ..models import DelegationRequest, DirectActionRequest, ThresholdRequest, ThresholdResponse
from .dependencies import ConductorServiceDep

router = APIRouter(prefix="/api/v1/conductor", tags=["conductor"])


def _http_error(e: Exception) -> HTTPException:
    if isinstance(e, ValidationError):
        return HTTPException(status_code=422, detail=str(e))
    return HTTPException(status_code=503, detail=str(e))


@router.post("/delegations")
async def record_delegation(request: DelegationRequest, service: ConductorServiceDep):
    """Record a task delegated to a sub-agent"""
    try:
        stats = await service.record_delegation(
            request.agent_name, request.task_description, request.metadata
        )
    except (ValidationError, StoreError) as e:
        raise _http_error(e) from e
    return stats.to_dict()


@router.post("/direct-actions")
async def record_direct_action(request: DirectActionRequest, service: ConductorServiceDep):
    """Record an action the conductor took itself"""
    try:
        stats = await service.record_direct_action(
            request.action_type, request.description, request.metadata
        )
    except (ValidationError, StoreError) as e:
        raise _http_error(e) from e
    return stats.to_dict()


@router.get("/stats")
async def get_stats(service: ConductorServiceDep):
    """Get aggregate delegation statistics"""
    try:
        stats = await service.compute_stats()
    except StoreError as e:
        raise _http_error(e) from e
    return stats.to_dict()


@router.get("/events")
async def list_events(service: ConductorServiceDep, limit: int = Query(50, ge=1, le=1000)):
    """List recent events, newest first"""
    try:
        events = await service.list_recent_events(limit)
    except (ValidationError, StoreError) as e:
        raise _http_error(e) from e
    return {"events": [e.to_dict() for e in events], "count": len(events)}


@router.get("/report")
async def get_report(service: ConductorServiceDep, event_limit: int = Query(50, ge=1, le=1000)):
    """Get the full delegation report"""
    try:
        report = await service.generate_report(event_limit)
    except (ValidationError, StoreError) as e:
        raise _http_error(e) from e
    return report.to_dict()


@router.get("/status", response_class=PlainTextResponse)
async def get_status(service: ConductorServiceDep):
    """Get the formatted status text"""
    try:
        return await service.get_formatted_status()
    except StoreError as e:
        raise _http_error(e) from e


@router.get("/threshold", response_model=ThresholdResponse)
async def get_threshold(service: ConductorServiceDep):
    """Get the alert threshold"""
    try:
        return ThresholdResponse(threshold=await service.get_alert_threshold())
    except StoreError as e:
        raise _http_error(e) from e


@router.put("/threshold", response_model=ThresholdResponse)
async def set_threshold(request: ThresholdRequest, service: ConductorServiceDep):
    """Set the alert threshold"""
    try:
        threshold = await service.set_alert_threshold(request.threshold)
    except (ValidationError, StoreError) as e:
        raise _http_error(e) from e
    return ThresholdResponse(threshold=threshold)


@router.delete("/tracking")
async def reset_tracking(service: ConductorServiceDep):
    """Reset counters, event log and last-alert marker"""
    try:
        await service.reset_tracking()
    except StoreError as e:
        raise _http_error(e) from e
    return {"status": "reset"}
