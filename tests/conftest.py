import io
from datetime import datetime, timedelta, timezone

import mongomock
import pytest
from fastapi.testclient import TestClient

from fcloud.config import Settings
from fcloud.main import create_app
from fcloud.schemas.drive import File, Folder
from fcloud.services.blobs import BlobStorage
from fcloud.services.store import EntityStore


@pytest.fixture
def upload_dir(tmp_path):
    return tmp_path / "uploads"


@pytest.fixture
def settings(upload_dir):
    return Settings(MONGO_URI="mongodb://localhost:27017", DATABASE_NAME="fcloud_test", UPLOAD_DIR=upload_dir)


@pytest.fixture
def mongo_client():
    return mongomock.MongoClient()


@pytest.fixture
def store(mongo_client):
    """Entity store over an in-memory Mongo database"""
    return EntityStore(mongo_client["fcloud_test"])


@pytest.fixture
def blobs(upload_dir):
    storage = BlobStorage(upload_dir)
    storage.ensure_root()
    return storage


@pytest.fixture
def app(settings, mongo_client):
    return create_app(settings, mongo_client=mongo_client)


@pytest.fixture
def client(app):
    # Entering the client runs the lifespan handler
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def make_folder(store):
    """Insert a folder directly into the store"""
    def _make_folder(name, parent_id="root", is_trashed=False):
        return store.folders.create(Folder(name=name, parent_id=parent_id, is_trashed=is_trashed))
    return _make_folder


@pytest.fixture
def make_file(store, blobs):
    """Insert a file with a real blob; minutes_ago sets its upload date"""
    def _make_file(name, folder_id="root", minutes_ago=0, content=b"data", **flags):
        blob = blobs.save(io.BytesIO(content), name)
        file = File(
            original_name=name,
            filename=blob.filename,
            path=blob.path,
            size=blob.size,
            mime_type="application/octet-stream",
            folder_id=folder_id,
            upload_date=datetime.now(timezone.utc) - timedelta(minutes=minutes_ago),
            **flags,
        )
        return store.files.create(file)
    return _make_file

