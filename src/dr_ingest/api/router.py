"""dr_ingest REST endpoints.

POST /upload  — multipart MBP-10 CSV; returns {total_ticks, sample_count, stride}
"""

from fastapi import APIRouter, File, Request, UploadFile

from src.dr_common.errors import NoFileUploadedError
from src.dr_common.response import ApiResponse, success_response
from src.dr_ingest.application.service import IngestionService

router = APIRouter(tags=["ingest"])

_service = IngestionService()


@router.post("/upload")
async def upload(
    request: Request,
    file: UploadFile | None = File(None),
) -> ApiResponse:
    if file is None:
        raise NoFileUploadedError()
    try:
        result = await _service.ingest_upload(file.file, file.filename)
    finally:
        await file.close()
    resp = success_response(result.model_dump())
    resp.request_id = getattr(request.state, "request_id", resp.request_id)
    return resp
