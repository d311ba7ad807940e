from fastapi import Request

from fcloud.services.blobs import BlobStorage
from fcloud.services.store import EntityStore


def get_store(request: Request) -> EntityStore:
    """Entity store opened by the application lifespan"""
    return request.app.state.store


def get_blobs(request: Request) -> BlobStorage:
    """Blob storage configured by the application lifespan"""
    return request.app.state.blobs
