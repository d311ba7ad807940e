"""
Trash, restore, star and permanent delete transitions.

Items move from active to trashed and back by flipping isTrashed. Starring
is independent of the trash state. Permanent delete removes the document
and, for files, the blob behind it.
"""

import logging
from enum import Enum

from fcloud.errors import NotFoundError
from fcloud.services.blobs import BlobStorage
from fcloud.services.store import DocumentCollection, EntityStore

logger = logging.getLogger(__name__)


class EntityType(str, Enum):
    FOLDER = "folder"
    FILE = "file"


class Action(str, Enum):
    TRASH = "trash"
    RESTORE = "restore"
    STAR = "star"


def _collection(store: EntityStore, entity_type: EntityType) -> DocumentCollection:
    if entity_type == EntityType.FOLDER:
        return store.folders
    return store.files


def _set_trashed(store: EntityStore, entity_type: EntityType, item_id: str, trashed: bool):
    try:
        _collection(store, entity_type).update(item_id, {"isTrashed": trashed})
    except NotFoundError:
        # Unknown ids are accepted silently
        logger.debug(f"Ignoring isTrashed={trashed} for unknown {entity_type.value} {item_id}")
        return
    logger.info(f"Set isTrashed={trashed} on {entity_type.value} {item_id}")


def trash_item(store: EntityStore, entity_type: EntityType, item_id: str):
    """Move an item to the trash. Trashing a trashed item changes nothing."""
    _set_trashed(store, entity_type, item_id, True)


def restore_item(store: EntityStore, entity_type: EntityType, item_id: str):
    """Bring an item back from the trash. Its star flag is left as it was."""
    _set_trashed(store, entity_type, item_id, False)


def toggle_star(store: EntityStore, entity_type: EntityType, item_id: str) -> bool:
    """
    Flip the star flag of an item, trashed or not.

    Folders have no star flag: the id is checked and nothing is written.

    Args:
        store: Entity store
        entity_type: Folder or file
        item_id: Id of the item

    Returns:
        The item's star flag after the call

    Raises:
        NotFoundError: If the id does not exist
        ConcurrentUpdateError: If the flip kept racing other writers
    """
    if entity_type == EntityType.FOLDER:
        if store.folders.get(item_id) is None:
            raise NotFoundError(entity_type.value, item_id)
        return False

    starred = store.files.toggle(item_id, "isStarred")
    logger.info(f"Set isStarred={starred} on file {item_id}")
    return starred


def apply_action(store: EntityStore, entity_type: EntityType, item_id: str, action: Action):
    """Dispatch an action request to its transition"""
    if action == Action.TRASH:
        trash_item(store, entity_type, item_id)
    elif action == Action.RESTORE:
        restore_item(store, entity_type, item_id)
    elif action == Action.STAR:
        toggle_star(store, entity_type, item_id)


def delete_permanently(store: EntityStore, blobs: BlobStorage, entity_type: EntityType, item_id: str):
    """
    Irreversibly remove an item.

    For files the blob is removed before the document, so an interruption
    leaves at worst an orphaned blob. Folders are removed alone; their
    children keep pointing at the deleted id.

    Args:
        store: Entity store
        blobs: Blob storage holding file content
        entity_type: Folder or file
        item_id: Id of the item; unknown ids are ignored
    """
    if entity_type == EntityType.FILE:
        file = store.files.get(item_id)
        if file is not None:
            blobs.remove(file.path)

    try:
        _collection(store, entity_type).delete(item_id)
    except NotFoundError:
        logger.debug(f"Permanent delete of unknown {entity_type.value} {item_id}")
        return

    logger.info(f"Permanently deleted {entity_type.value} {item_id}")
