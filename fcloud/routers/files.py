from fastapi import APIRouter, Depends, UploadFile
from fastapi.responses import FileResponse, PlainTextResponse

from fcloud.dependencies import get_blobs, get_store
from fcloud.schemas.drive import File
from fcloud.services.blobs import BlobStorage
from fcloud.services.store import EntityStore
from fcloud.services.uploads import upload_file

router = APIRouter(prefix="/api", tags=["files"])


@router.post("/upload/{folder_id}", response_model=File)
def post_upload(
    folder_id: str,
    file: UploadFile,
    store: EntityStore = Depends(get_store),
    blobs: BlobStorage = Depends(get_blobs),
):
    """
    Store one uploaded file in a folder
    """
    return upload_file(store, blobs, folder_id, file.file, file.filename, file.content_type)


@router.get("/download/{file_id}")
def get_download(
    file_id: str,
    store: EntityStore = Depends(get_store),
    blobs: BlobStorage = Depends(get_blobs),
):
    """
    Stream a file's content under its original name
    """
    file = store.files.get(file_id)
    if file is None or not blobs.exists(file.path):
        return PlainTextResponse("File not found", status_code=404)

    return FileResponse(
        file.path,
        filename=file.original_name or file.filename,
        media_type=file.mime_type,
    )
