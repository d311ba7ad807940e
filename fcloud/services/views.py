"""
View resolution for the content listing.

A view is a query-time filter over the folder and file collections:
drive lists the children of one folder, recent the newest files, starred
the starred items and trash every trashed item regardless of folder.
"""

from enum import Enum
from typing import Any, Dict

from fcloud.schemas.drive import ContentListing
from fcloud.services.store import EntityStore

# Number of files shown in the recent view
RECENT_LIMIT = 30


class View(str, Enum):
    DRIVE = "drive"
    RECENT = "recent"
    STARRED = "starred"
    TRASH = "trash"


def parse_view(token: str) -> View:
    """
    Map a view token from the URL to a View.

    Any token other than recent, starred or trash selects the drive view.
    """
    try:
        return View(token)
    except ValueError:
        return View.DRIVE


def build_filter(view: View, folder_id: str) -> Dict[str, Any]:
    """
    Build the query filter shared by folders and files for a view.

    Args:
        view: Selected view
        folder_id: Scope of the drive view, ignored by the others

    Returns:
        Filter using stored field names
    """
    if view == View.TRASH:
        return {"isTrashed": True}
    if view == View.STARRED:
        # Folders carry no star flag, so this never matches a folder
        return {"isTrashed": False, "isStarred": True}
    if view == View.RECENT:
        return {"isTrashed": False}
    return {"isTrashed": False, "folderId": folder_id}


def resolve_content(store: EntityStore, view: View, folder_id: str) -> ContentListing:
    """
    Produce the folders and files shown for a view.

    Args:
        store: Entity store to query
        view: Selected view
        folder_id: Scope of the drive view

    Returns:
        ContentListing with folders sorted by name and files newest first
    """
    query = build_filter(view, folder_id)

    if view == View.RECENT:
        files = store.files.list(query, limit=RECENT_LIMIT)
        return ContentListing(folders=[], files=files)

    folder_query = dict(query)
    if "folderId" in folder_query:
        folder_query["parentId"] = folder_query.pop("folderId")

    return ContentListing(
        folders=store.folders.list(folder_query),
        files=store.files.list(query),
    )
