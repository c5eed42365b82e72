"""dr_store REST endpoints.

GET /orderbook          — full downsampled series (snapshots + stride)
GET /orderbook/summary  — {total_ticks, sample_count, stride}
"""

from fastapi import APIRouter, Request

from src.dr_common.response import ApiResponse, success_response
from src.dr_store.application.service import SnapshotQueryService

router = APIRouter(prefix="/orderbook", tags=["orderbook"])

_service = SnapshotQueryService()


@router.get("")
async def get_orderbook(request: Request) -> ApiResponse:
    result = _service.get_orderbook()
    resp = success_response(result.model_dump())
    resp.request_id = getattr(request.state, "request_id", resp.request_id)
    return resp


@router.get("/summary")
async def get_summary(request: Request) -> ApiResponse:
    result = _service.get_summary()
    resp = success_response(result.model_dump())
    resp.request_id = getattr(request.state, "request_id", resp.request_id)
    return resp
