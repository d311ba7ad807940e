"""
Document store for fCloud.

Folders and files live in one Mongo collection each. Every collection is
wrapped in a DocumentCollection that converts between stored documents and
the pydantic models in fcloud.schemas.drive.
"""

import logging
from typing import Any, Dict, Generic, List, Optional, Tuple, Type, TypeVar

from bson import ObjectId
from pymongo import ASCENDING, DESCENDING
from pymongo.collection import Collection
from pymongo.database import Database

from fcloud.errors import ConcurrentUpdateError, NotFoundError
from fcloud.schemas.drive import File, Folder, StoredDocument

logger = logging.getLogger(__name__)

DocumentT = TypeVar("DocumentT", bound=StoredDocument)

Sort = List[Tuple[str, int]]

# Attempts made by toggle() before giving up on a contended document
TOGGLE_ATTEMPTS = 5


def parse_object_id(item_id: str) -> Optional[ObjectId]:
    """
    Convert a client supplied id to an ObjectId.

    Args:
        item_id: Hex string id from a request path

    Returns:
        ObjectId, or None when the string cannot name any document
    """
    if not ObjectId.is_valid(item_id):
        return None
    return ObjectId(item_id)


class DocumentCollection(Generic[DocumentT]):
    """
    CRUD and filtered listing over a single Mongo collection.

    Filters and update fields use the stored (camelCase) field names.
    """

    def __init__(self, collection: Collection, model: Type[DocumentT], kind: str, sort: Sort):
        self.collection = collection
        self.model = model
        self.kind = kind
        self.sort = sort

    def _to_model(self, document: Dict[str, Any]) -> DocumentT:
        document = dict(document)
        document["_id"] = str(document["_id"])
        return self.model.model_validate(document)

    def _id_filter(self, item_id: str) -> Dict[str, Any]:
        object_id = parse_object_id(item_id)
        if object_id is None:
            raise NotFoundError(self.kind, item_id)
        return {"_id": object_id}

    def create(self, item: DocumentT) -> DocumentT:
        """
        Persist a new document.

        Args:
            item: Model holding caller supplied and defaulted fields

        Returns:
            Stored model including the generated id
        """
        document = item.model_dump(by_alias=True, exclude={"id"})
        result = self.collection.insert_one(document)
        logger.info(f"Created {self.kind} {result.inserted_id}")
        return item.model_copy(update={"id": str(result.inserted_id)})

    def get(self, item_id: str) -> Optional[DocumentT]:
        """Return the document with this id, or None"""
        object_id = parse_object_id(item_id)
        if object_id is None:
            return None
        document = self.collection.find_one({"_id": object_id})
        if document is None:
            return None
        return self._to_model(document)

    def list(self, query: Dict[str, Any], limit: Optional[int] = None) -> List[DocumentT]:
        """
        List documents matching a filter in the collection's sort order.

        Args:
            query: Field equality filter, e.g. {"isTrashed": False}
            limit: Maximum number of documents, unbounded when None

        Returns:
            Matching documents
        """
        cursor = self.collection.find(query).sort(self.sort)
        if limit is not None:
            cursor = cursor.limit(limit)
        return [self._to_model(document) for document in cursor]

    def update(self, item_id: str, fields: Dict[str, Any]) -> None:
        """
        Set fields on a document.

        Raises:
            NotFoundError: If no document has this id
        """
        result = self.collection.update_one(self._id_filter(item_id), {"$set": fields})
        if result.matched_count == 0:
            raise NotFoundError(self.kind, item_id)

    def delete(self, item_id: str) -> None:
        """
        Remove a document.

        Raises:
            NotFoundError: If no document has this id
        """
        result = self.collection.delete_one(self._id_filter(item_id))
        if result.deleted_count == 0:
            raise NotFoundError(self.kind, item_id)

    def toggle(self, item_id: str, field: str) -> bool:
        """
        Flip a boolean field without losing concurrent updates.

        The write only lands if the field still holds the value that was
        read; otherwise the read is repeated.

        Args:
            item_id: Document id
            field: Stored name of the boolean field

        Returns:
            The new value of the field

        Raises:
            NotFoundError: If no document has this id
            ConcurrentUpdateError: If every attempt lost a race
        """
        id_filter = self._id_filter(item_id)

        for _ in range(TOGGLE_ATTEMPTS):
            document = self.collection.find_one(id_filter, {field: 1})
            if document is None:
                raise NotFoundError(self.kind, item_id)

            current = document.get(field)
            new_value = not current
            result = self.collection.update_one(
                {**id_filter, field: current},
                {"$set": {field: new_value}},
            )
            if result.matched_count == 1:
                return new_value

            logger.debug(f"Lost race toggling {field} on {self.kind} {item_id}, retrying")

        raise ConcurrentUpdateError(self.kind, item_id, field, TOGGLE_ATTEMPTS)


class EntityStore:
    """Folder and file collections of one database"""

    def __init__(self, database: Database):
        self.folders: DocumentCollection[Folder] = DocumentCollection(
            database["folders"], Folder, "folder", [("name", ASCENDING)]
        )
        self.files: DocumentCollection[File] = DocumentCollection(
            database["files"], File, "file", [("uploadDate", DESCENDING)]
        )
