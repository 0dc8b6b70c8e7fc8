"""File reference schemas."""

from pydantic import BaseModel


class UploadHandle(BaseModel):
    """Short-lived target for a single blob upload."""

    upload_url: str
    expires_in: int


class UploadResult(BaseModel):
    storage_id: str
