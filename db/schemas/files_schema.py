from typing import Optional
from datetime import datetime

from pydantic import BaseModel

from models.enums import UploadKind


class FileInDB(BaseModel):
    """Metadata of a file stored in object storage"""
    file_id: str
    owner_id: str
    kind: UploadKind
    filename: str
    file_type: str
    file_extension: str
    size: int
    object_name: str
    uploaded_at: Optional[datetime] = None

    @property
    def url(self) -> str:
        return f"/storage/files/{self.file_id}"
