from fastapi import APIRouter, Depends

from fcloud.dependencies import get_store
from fcloud.schemas.drive import Folder, FolderCreate
from fcloud.services.store import EntityStore
from fcloud.services.uploads import create_folder

router = APIRouter(prefix="/api/folders", tags=["folders"])


@router.post("", response_model=Folder)
def post_folder(request: FolderCreate, store: EntityStore = Depends(get_store)):
    """
    Create a folder under parentId (root when omitted)
    """
    return create_folder(store, request)
