from datetime import datetime, timezone
from typing import Annotated, Optional

from pydantic import AfterValidator, BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

# Sentinel scope id; never stored as a Folder document
ROOT_FOLDER_ID = "root"


def utc_now() -> datetime:
    """Current time at the millisecond precision Mongo stores"""
    now = datetime.now(timezone.utc)
    return now.replace(microsecond=now.microsecond // 1000 * 1000)


def as_utc(value: datetime) -> datetime:
    # Mongo returns naive UTC datetimes unless the client is tz_aware
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


UtcDatetime = Annotated[datetime, AfterValidator(as_utc)]


class DriveModel(BaseModel):
    """Base for models exchanged with the frontend using camelCase names"""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class StoredDocument(DriveModel):
    """Document persisted in a Mongo collection, identified by `_id`"""
    id: Optional[str] = Field(default=None, alias="_id")


class Folder(StoredDocument):
    """Folder in the drive tree"""
    name: Optional[str] = None
    parent_id: Optional[str] = ROOT_FOLDER_ID
    is_trashed: bool = False
    created_at: UtcDatetime = Field(default_factory=utc_now)


class File(StoredDocument):
    """Uploaded file and the location of its blob"""
    original_name: Optional[str] = None
    filename: str
    path: str
    size: int
    mime_type: Optional[str] = None
    folder_id: Optional[str] = ROOT_FOLDER_ID
    is_trashed: bool = False
    is_starred: bool = False
    upload_date: UtcDatetime = Field(default_factory=utc_now)


class FolderCreate(DriveModel):
    """Body of a folder creation request"""
    # Numbers are stored as strings, no other validation
    model_config = ConfigDict(coerce_numbers_to_str=True)

    name: Optional[str] = None
    parent_id: Optional[str] = ROOT_FOLDER_ID


class ContentListing(BaseModel):
    """Folders and files shown for a view"""
    folders: list[Folder]
    files: list[File]


class ActionResponse(BaseModel):
    """Response from action and permanent delete endpoints"""
    success: bool = True
