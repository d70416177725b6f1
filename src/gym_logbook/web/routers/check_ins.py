"""Gym attendance routes."""

from fastapi import APIRouter, Depends

from ...config import Settings
from ...services.attendance import AttendanceService
from ..dependencies import app_settings, require_user
from ..schemas import UserRef

router = APIRouter(prefix="/check-ins", tags=["check-ins"])


@router.get("")
async def history(user_id: int, settings: Settings = Depends(app_settings)):
    check_ins = await AttendanceService(settings).history(user_id)
    return [ci.to_dict() for ci in check_ins]


@router.get("/open")
async def open_check_in(user_id: int, settings: Settings = Depends(app_settings)):
    """The user's current visit, or null."""
    check_in = await AttendanceService(settings).open_check_in(user_id)
    return check_in.to_dict() if check_in else None


@router.post("")
async def check_in(body: UserRef, settings: Settings = Depends(app_settings)):
    """Start a visit (returns the open one if already checked in)."""
    await require_user(body.user_id, settings)
    visit = await AttendanceService(settings).check_in(body.user_id)
    return visit.to_dict()


@router.post("/check-out")
async def check_out(body: UserRef, settings: Settings = Depends(app_settings)):
    """End the open visit and apply the advancement policy."""
    await require_user(body.user_id, settings)
    result = await AttendanceService(settings).check_out(body.user_id)
    return result.to_dict()
