"""Local-disk blob store for listing images.

Uploads are written under UPLOAD_DIR with a random name and tracked in the
'stored_files' table. The id of that row is the reference listings keep.
"""

import os
import uuid
from pathlib import Path
from typing import Optional

import structlog
from fastapi import UploadFile
from sqlalchemy.orm import Session

from marketplace.config import get_settings
from marketplace.core.exceptions import BusinessRuleViolationError
from marketplace.domain.models.stored_file import StoredFile

logger = structlog.get_logger(__name__)

ALLOWED_CONTENT_TYPES = {
    "image/jpeg": "jpg",
    "image/png": "png",
    "image/webp": "webp",
    "image/gif": "gif",
}


class LocalBlobStore:
    """Blob store backed by a directory and the stored_files table."""

    def __init__(self, db: Session, root: Optional[str] = None, max_bytes: Optional[int] = None):
        settings = get_settings()
        self.db = db
        self.root = Path(root or settings.UPLOAD_DIR)
        self.max_bytes = max_bytes or settings.MAX_UPLOAD_BYTES

    def path_for(self, stored: StoredFile) -> Path:
        return self.root / stored.filename

    async def save_upload(self, file: UploadFile, uploaded_by: Optional[int] = None) -> StoredFile:
        """Validate and persist one uploaded image."""
        content_type = (file.content_type or "").lower()
        if content_type not in ALLOWED_CONTENT_TYPES:
            raise BusinessRuleViolationError(
                "Only JPEG, PNG, WEBP and GIF images are accepted",
                details={"content_type": content_type},
            )

        content = await file.read()
        if not content:
            raise BusinessRuleViolationError("Uploaded file is empty")
        if len(content) > self.max_bytes:
            raise BusinessRuleViolationError(
                "Uploaded file is too large",
                details={"max_bytes": self.max_bytes, "size": len(content)},
            )

        os.makedirs(self.root, exist_ok=True)
        filename = f"{uuid.uuid4().hex}.{ALLOWED_CONTENT_TYPES[content_type]}"
        with open(self.root / filename, "wb") as f:
            f.write(content)

        stored = StoredFile(
            filename=filename,
            original_name=file.filename or filename,
            content_type=content_type,
            size=len(content),
            uploaded_by=uploaded_by,
        )
        self.db.add(stored)
        self.db.commit()
        self.db.refresh(stored)

        logger.info("Image stored", file_id=stored.id, size=stored.size, uploaded_by=uploaded_by)
        return stored

    def get(self, file_id: int) -> Optional[StoredFile]:
        """Stored file whose blob is still on disk, else None."""
        stored = self.db.get(StoredFile, file_id)
        if stored is None or not self.path_for(stored).is_file():
            return None
        return stored

    def get_url(self, file_id: int) -> Optional[str]:
        """Public URL of a stored file. None when it cannot be served."""
        if self.get(file_id) is None:
            return None
        return f"/api/uploads/{file_id}"

    def existing_ids(self, file_ids: list[int]) -> set[int]:
        """Subset of `file_ids` that refer to stored-file records."""
        if not file_ids:
            return set()
        rows = self.db.query(StoredFile.id).filter(StoredFile.id.in_(file_ids)).all()
        return {row[0] for row in rows}
