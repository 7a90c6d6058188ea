"""
Wellness stats router.

GET/PUT /stats/sleep
GET/PUT /stats/meditation
GET/PUT /profile/name
"""
from fastapi import APIRouter, Depends

from habitlab.dependencies import get_stats_service
from habitlab.schemas.stats import (
    MeditationRequest,
    MeditationResponse,
    SleepRequest,
    SleepResponse,
    UserNameRequest,
    UserNameResponse,
)
from habitlab.services.stats import StatsService

router = APIRouter(tags=["stats"])


@router.get("/stats/sleep", response_model=SleepResponse, summary="Last logged sleep")
def get_sleep(service: StatsService = Depends(get_stats_service)):
    return SleepResponse(hours=service.get_sleep())


@router.put(
    "/stats/sleep",
    response_model=SleepResponse,
    summary="Log hours slept",
    responses={422: {"description": "Hours must be positive."}},
)
def put_sleep(payload: SleepRequest, service: StatsService = Depends(get_stats_service)):
    return SleepResponse(hours=service.log_sleep(payload.hours))


@router.get("/stats/meditation", response_model=MeditationResponse, summary="Last logged meditation")
def get_meditation(service: StatsService = Depends(get_stats_service)):
    return MeditationResponse(minutes=service.get_meditation())


@router.put(
    "/stats/meditation",
    response_model=MeditationResponse,
    summary="Log minutes meditated",
    responses={422: {"description": "Minutes must be positive."}},
)
def put_meditation(payload: MeditationRequest, service: StatsService = Depends(get_stats_service)):
    return MeditationResponse(minutes=service.log_meditation(payload.minutes))


@router.get("/profile/name", response_model=UserNameResponse, summary="Display name")
def get_user_name(service: StatsService = Depends(get_stats_service)):
    return UserNameResponse(name=service.get_user_name())


@router.put(
    "/profile/name",
    response_model=UserNameResponse,
    summary="Update display name",
    responses={422: {"description": "Name cannot be empty."}},
)
def put_user_name(payload: UserNameRequest, service: StatsService = Depends(get_stats_service)):
    return UserNameResponse(name=service.set_user_name(payload.name))
