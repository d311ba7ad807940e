import logging
from typing import BinaryIO, Optional

from fcloud.schemas.drive import File, Folder, FolderCreate
from fcloud.services.blobs import BlobStorage
from fcloud.services.store import EntityStore

logger = logging.getLogger(__name__)


def create_folder(store: EntityStore, request: FolderCreate) -> Folder:
    """Create a folder. The parent id is stored as given, without checks."""
    folder = Folder(name=request.name, parent_id=request.parent_id)
    return store.folders.create(folder)


def upload_file(
    store: EntityStore,
    blobs: BlobStorage,
    folder_id: str,
    stream: BinaryIO,
    original_name: Optional[str],
    mime_type: Optional[str],
) -> File:
    """
    Store an uploaded file and record it in a folder.

    The blob is written completely before the document is inserted. If the
    insert fails the blob is removed again and the error re-raised.

    Args:
        store: Entity store
        blobs: Blob storage for the content
        folder_id: Folder the file is placed in
        stream: Upload content
        original_name: Filename sent by the client
        mime_type: Content type sent by the client

    Returns:
        The created File document
    """
    blob = blobs.save(stream, original_name or "")

    file = File(
        original_name=original_name,
        filename=blob.filename,
        path=blob.path,
        size=blob.size,
        mime_type=mime_type,
        folder_id=folder_id,
    )
    try:
        return store.files.create(file)
    except Exception:
        logger.exception(f"Recording upload failed, rolling back blob {blob.filename}")
        blobs.remove(blob.path)
        raise
