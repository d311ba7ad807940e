import io
from datetime import timedelta

import pytest

from fcloud.schemas.drive import FolderCreate
from fcloud.services.uploads import create_folder, upload_file


def test_create_folder_defaults_parent(store):
    """Test a folder without parentId is placed at root"""
    folder = create_folder(store, FolderCreate(name="Photos"))

    assert folder.parent_id == "root"
    assert store.folders.get(folder.id).name == "Photos"


def test_create_folder_keeps_unchecked_parent(store):
    """Test parent ids are stored without checking they exist"""
    folder = create_folder(store, FolderCreate.model_validate({"name": "X", "parentId": "nowhere"}))

    assert store.folders.get(folder.id).parent_id == "nowhere"


def test_create_folder_without_name(store):
    """Test creation accepts a body without a name"""
    folder = create_folder(store, FolderCreate())

    assert folder.id is not None
    assert folder.name is None


def test_upload_records_file(store, blobs, upload_dir):
    """Test upload writes the blob and the File document"""
    file = upload_file(store, blobs, "root", io.BytesIO(b"abc"), "notes.txt", "text/plain")

    stored = store.files.get(file.id)
    assert stored.original_name == "notes.txt"
    assert stored.filename.endswith(".txt")
    assert stored.size == 3
    assert stored.mime_type == "text/plain"
    assert stored.folder_id == "root"
    assert stored.is_trashed is False
    assert stored.is_starred is False
    assert (upload_dir / stored.filename).read_bytes() == b"abc"


def test_upload_rolls_back_blob_when_insert_fails(store, blobs, upload_dir, monkeypatch):
    """Test a failed insert leaves no blob behind"""
    def failing_create(item):
        raise RuntimeError("database down")

    monkeypatch.setattr(store.files, "create", failing_create)

    with pytest.raises(RuntimeError):
        upload_file(store, blobs, "root", io.BytesIO(b"abc"), "notes.txt", "text/plain")

    assert list(upload_dir.iterdir()) == []


def test_stored_dates_come_back_as_utc(store):
    """Test dates read from Mongo as naive values are marked as UTC"""
    folder = create_folder(store, FolderCreate(name="Photos"))

    fetched = store.folders.get(folder.id)

    assert fetched.created_at.utcoffset() == timedelta(0)
    assert fetched.created_at == folder.created_at
