from fastapi import APIRouter, Depends, HTTPException

from fcloud.dependencies import get_blobs, get_store
from fcloud.errors import ConcurrentUpdateError, NotFoundError
from fcloud.schemas.drive import ActionResponse
from fcloud.services.blobs import BlobStorage
from fcloud.services.lifecycle import Action, EntityType, apply_action, delete_permanently
from fcloud.services.store import EntityStore

router = APIRouter(prefix="/api", tags=["actions"])


@router.put("/action/{entity_type}/{item_id}/{action}", response_model=ActionResponse)
def put_action(
    entity_type: EntityType,
    item_id: str,
    action: Action,
    store: EntityStore = Depends(get_store),
):
    """
    Trash, restore or star a folder or file
    """
    try:
        apply_action(store, entity_type, item_id, action)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except ConcurrentUpdateError as e:
        raise HTTPException(status_code=409, detail=str(e))

    return ActionResponse()


@router.delete("/permanent/{entity_type}/{item_id}", response_model=ActionResponse)
def delete_permanent(
    entity_type: EntityType,
    item_id: str,
    store: EntityStore = Depends(get_store),
    blobs: BlobStorage = Depends(get_blobs),
):
    """
    Remove a folder or file for good, including a file's blob
    """
    delete_permanently(store, blobs, entity_type, item_id)
    return ActionResponse()
