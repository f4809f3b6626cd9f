"""Upload API routes — listing images in, image files out."""

from fastapi import APIRouter, Depends, File, UploadFile, status
from fastapi.responses import FileResponse

from marketplace.core.exceptions import EntityNotFoundError
from marketplace.domain.models.user import User
from marketplace.domain.schemas.upload import StoredFileRead
from marketplace.infrastructure.storage import LocalBlobStore
from marketplace.interfaces.api.deps import get_current_user
from marketplace.interfaces.deps import get_blob_store

router = APIRouter(prefix="/api/uploads", tags=["Uploads"])


@router.post("", response_model=StoredFileRead, status_code=status.HTTP_201_CREATED)
async def upload_image(
    file: UploadFile = File(...),
    blob_store: LocalBlobStore = Depends(get_blob_store),
    user: User = Depends(get_current_user),
):
    stored = await blob_store.save_upload(file, uploaded_by=user.id)
    result = StoredFileRead.model_validate(stored)
    result.url = blob_store.get_url(stored.id)
    return result


@router.get("/{file_id}")
def download_image(file_id: int, blob_store: LocalBlobStore = Depends(get_blob_store)):
    stored = blob_store.get(file_id)
    if stored is None:
        raise EntityNotFoundError("Image not found", details={"file_id": file_id})
    return FileResponse(blob_store.path_for(stored), media_type=stored.content_type)
