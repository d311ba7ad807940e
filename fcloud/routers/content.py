import logging

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from pymongo.errors import PyMongoError

from fcloud.dependencies import get_store
from fcloud.schemas.drive import ContentListing
from fcloud.services.store import EntityStore
from fcloud.services.views import parse_view, resolve_content

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/content", tags=["content"])


@router.get("/{view}/{folder_id}", response_model=ContentListing)
def get_content(view: str, folder_id: str, store: EntityStore = Depends(get_store)):
    """
    List folders and files for drive, recent, starred or trash
    """
    try:
        return resolve_content(store, parse_view(view), folder_id)
    except PyMongoError as e:
        logger.exception(f"Listing {view}/{folder_id} failed")
        return JSONResponse(status_code=500, content={"error": str(e)})
