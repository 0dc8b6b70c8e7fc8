"""Upload handles and blob download."""

from __future__ import annotations

from fastapi import APIRouter, Request, status
from fastapi.responses import FileResponse

from game_night.schemas.file import UploadHandle, UploadResult
from game_night.services import files

from ..dependencies import CurrentUserDep, SessionDep

router = APIRouter(prefix="/files", tags=["files"])


@router.post("/upload-handle", response_model=UploadHandle)
async def request_upload_handle(caller: CurrentUserDep) -> UploadHandle:
    """Issue a short-lived URL that accepts one file upload."""
    upload_url, expires_in = files.issue_upload_handle(caller)
    return UploadHandle(upload_url=upload_url, expires_in=expires_in)


@router.post(
    "/upload/{token}",
    response_model=UploadResult,
    status_code=status.HTTP_201_CREATED,
)
async def upload_file(token: str, request: Request, db: SessionDep) -> UploadResult:
    """Store the raw request body; the returned id can be set on entities.

    The body is streamed and rejected once it passes ``MAX_UPLOAD_BYTES``.
    """
    data = await files.read_upload_body(request.stream(), request.headers.get("content-length"))
    record = files.store_upload(db, token, data, request.headers.get("content-type"))
    return UploadResult(storage_id=record.id)


@router.get("/{storage_id}", response_class=FileResponse)
async def download_file(storage_id: str, db: SessionDep) -> FileResponse:
    record = files.get_stored_file(db, storage_id)
    return FileResponse(files.blob_path(record.id), media_type=record.content_type)
