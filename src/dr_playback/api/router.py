"""dr_playback REST endpoints.

GET  /playback          — state + current frame
POST /playback/play     — STOPPED|PAUSED -> PLAYING
POST /playback/pause    — PLAYING -> PAUSED
POST /playback/stop     — any -> STOPPED, tick 0
POST /playback/seek     — absolute tick (clamped)
POST /playback/jump     — relative ticks (clamped)
POST /playback/speed    — speed multiplier (> 0)
GET  /playback/speeds   — UI speed presets
"""

from fastapi import APIRouter, Request

from config.settings import settings
from src.dr_common.response import ApiResponse, success_response
from src.dr_playback.application.schemas import (
    JumpRequest,
    SeekRequest,
    SpeedPresetsOut,
    SpeedRequest,
)
from src.dr_playback.application.service import build_view, get_playback_manager
from src.dr_playback.application.session import PlaybackSession

router = APIRouter(prefix="/playback", tags=["playback"])


def _respond(request: Request, session: PlaybackSession) -> ApiResponse:
    resp = success_response(build_view(session).model_dump())
    resp.request_id = getattr(request.state, "request_id", resp.request_id)
    return resp


@router.get("")
async def get_playback(request: Request) -> ApiResponse:
    session = await get_playback_manager().get_session()
    return _respond(request, session)


@router.get("/speeds")
async def get_speed_presets(request: Request) -> ApiResponse:
    result = SpeedPresetsOut(presets=list(settings.PLAYBACK_SPEED_PRESETS))
    resp = success_response(result.model_dump())
    resp.request_id = getattr(request.state, "request_id", resp.request_id)
    return resp


@router.post("/play")
async def play(request: Request) -> ApiResponse:
    session = await get_playback_manager().get_session()
    await session.play()
    return _respond(request, session)


@router.post("/pause")
async def pause(request: Request) -> ApiResponse:
    session = await get_playback_manager().get_session()
    await session.pause()
    return _respond(request, session)


@router.post("/stop")
async def stop(request: Request) -> ApiResponse:
    session = await get_playback_manager().get_session()
    await session.stop()
    return _respond(request, session)


@router.post("/seek")
async def seek(req: SeekRequest, request: Request) -> ApiResponse:
    session = await get_playback_manager().get_session()
    await session.seek(req.tick)
    return _respond(request, session)


@router.post("/jump")
async def jump(req: JumpRequest, request: Request) -> ApiResponse:
    session = await get_playback_manager().get_session()
    delta = req.delta if req.delta is not None else settings.PLAYBACK_JUMP_STEP
    await session.jump(delta)
    return _respond(request, session)


@router.post("/speed")
async def set_speed(req: SpeedRequest, request: Request) -> ApiResponse:
    session = await get_playback_manager().get_session()
    await session.set_speed(req.multiplier)
    return _respond(request, session)
