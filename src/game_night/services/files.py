"""Blob storage: upload handles, stored files and URL resolution."""
from __future__ import annotations

import hashlib
import logging
import uuid
from collections.abc import AsyncIterator, Iterable
from pathlib import Path

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from game_night.core import security
from game_night.core.errors import ConflictError, NotFoundError, ValidationError
from game_night.core.settings import settings
from game_night.models import StoredFile, User

logger = logging.getLogger(__name__)

__all__ = [
    "issue_upload_handle",
    "check_upload_size",
    "read_upload_body",
    "store_upload",
    "get_stored_file",
    "blob_path",
    "require_file",
    "resolve_file_url",
    "resolve_file_urls",
]


def _files_base_url() -> str:
    return f"{settings.public_base_url.rstrip('/')}/api/v1/files"


def blob_path(storage_id: str) -> Path:
    """Return where the bytes for ``storage_id`` live on disk."""
    return Path(settings.storage_dir) / storage_id


def issue_upload_handle(caller: User) -> tuple[str, int]:
    """Reserve a storage id and return ``(upload_url, ttl_seconds)``."""
    storage_id = uuid.uuid4().hex
    token = security.create_upload_token(caller.id, storage_id)
    return f"{_files_base_url()}/upload/{token}", settings.upload_handle_ttl_seconds


def check_upload_size(size: int) -> None:
    """Raise ``ValidationError`` when ``size`` bytes exceeds ``MAX_UPLOAD_BYTES``."""
    if size > settings.max_upload_bytes:
        raise ValidationError(
            f"Upload exceeds the maximum size of {settings.max_upload_bytes} bytes."
        )


async def read_upload_body(chunks: AsyncIterator[bytes], declared_length: str | None) -> bytes:
    """Collect a streamed request body, stopping as soon as it passes the size cap.

    A ``Content-Length`` over the cap is rejected before any bytes are read.
    """
    if declared_length is not None and declared_length.isdigit():
        check_upload_size(int(declared_length))
    body = bytearray()
    async for chunk in chunks:
        body.extend(chunk)
        check_upload_size(len(body))
    return bytes(body)


def store_upload(db: Session, token: str, data: bytes, content_type: str | None) -> StoredFile:
    """Persist the uploaded bytes for a handle and return the file record.

    The blob is written only once the record has flushed, and removed again
    if the commit fails.

    Raises:
        AuthenticationError: If the handle is expired or tampered with.
        ValidationError: If the body is empty or larger than ``MAX_UPLOAD_BYTES``.
        ConflictError: If the handle was already used.
    """
    uploader_id, storage_id = security.decode_upload_token(token)
    if not data:
        raise ValidationError("Upload body cannot be empty.")
    check_upload_size(len(data))
    if db.get(StoredFile, storage_id) is not None:
        raise ConflictError("This upload handle has already been used.")

    record = StoredFile(
        id=storage_id,
        uploader_id=uploader_id,
        content_type=content_type or "application/octet-stream",
        size_bytes=len(data),
        sha256=hashlib.sha256(data).digest(),
    )
    db.add(record)
    db.flush()

    path = blob_path(storage_id)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(data)
    try:
        db.commit()
    except SQLAlchemyError:
        db.rollback()
        path.unlink(missing_ok=True)
        logger.error("Failed to record blob %s; removed it from disk", storage_id)
        raise
    logger.debug("Stored blob %s (%d bytes)", storage_id, len(data))
    return record


def get_stored_file(db: Session, storage_id: str) -> StoredFile:
    """Return a stored file whose bytes are present on disk."""
    record = db.get(StoredFile, storage_id)
    if record is None or not blob_path(storage_id).is_file():
        raise NotFoundError("File not found.")
    return record


def require_file(db: Session, storage_id: str | None) -> None:
    """Ensure a referenced storage id exists before an entity points at it."""
    if storage_id is not None and db.get(StoredFile, storage_id) is None:
        raise NotFoundError("Referenced file not found.")


def resolve_file_urls(db: Session, storage_ids: Iterable[str | None]) -> dict[str, str | None]:
    """Map each storage id to a fetchable URL, or ``None`` when the blob is gone."""
    wanted = {sid for sid in storage_ids if sid}
    if not wanted:
        return {}
    found = set(db.scalars(select(StoredFile.id).where(StoredFile.id.in_(wanted))))
    base = _files_base_url()
    return {sid: (f"{base}/{sid}" if sid in found else None) for sid in wanted}


def resolve_file_url(db: Session, storage_id: str | None) -> str | None:
    """Single-id convenience wrapper around :func:`resolve_file_urls`."""
    if not storage_id:
        return None
    return resolve_file_urls(db, [storage_id]).get(storage_id)
