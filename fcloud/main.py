"""
FastAPI application for fCloud.

The Mongo client, entity store and blob storage are created once by the
lifespan handler and reached by request handlers through app.state.
"""

import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles
from pymongo import MongoClient
from pymongo.database import Database

from fcloud.config import Settings, get_settings
from fcloud.routers import actions, content, files, folders
from fcloud.services.blobs import BlobStorage
from fcloud.services.store import EntityStore

logger = logging.getLogger(__name__)


def open_database(client: MongoClient, settings: Settings) -> Database:
    """Database named in the client's URI, falling back to DATABASE_NAME"""
    return client.get_default_database(default=settings.DATABASE_NAME)


def create_app(settings: Optional[Settings] = None, mongo_client: Optional[MongoClient] = None) -> FastAPI:
    """
    Build the fCloud application.

    Args:
        settings: Configuration, read from the environment when omitted
        mongo_client: Client to use instead of connecting to MONGO_URI.
            An injected client is left open on shutdown.

    Returns:
        Configured FastAPI app
    """
    settings = settings or get_settings()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        client = mongo_client if mongo_client is not None else MongoClient(settings.MONGO_URI, tz_aware=True)
        database = open_database(client, settings)

        blobs = BlobStorage(settings.UPLOAD_DIR)
        blobs.ensure_root()

        app.state.store = EntityStore(database)
        app.state.blobs = blobs
        logger.info(f"fCloud engine online (database {database.name}, uploads in {blobs.root})")

        try:
            yield
        finally:
            if mongo_client is None:
                client.close()
            logger.info("fCloud engine stopped")

    app = FastAPI(title="fCloud", lifespan=lifespan)

    app.add_middleware(
        CORSMiddleware,
        allow_origin_regex=settings.CORS_ORIGIN_REGEX,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(content.router)
    app.include_router(folders.router)
    app.include_router(files.router)
    app.include_router(actions.router)

    # Raw blob access by generated filename
    app.mount("/uploads", StaticFiles(directory=settings.UPLOAD_DIR, check_dir=False), name="uploads")

    return app
