"""
Blob storage for uploaded file content.

Blobs sit in a single flat directory. Each one is named after the upload
time in epoch milliseconds followed by the original file extension.
"""

import logging
import time
from dataclasses import dataclass
from pathlib import Path
from typing import BinaryIO

logger = logging.getLogger(__name__)

CHUNK_SIZE = 1024 * 1024


@dataclass
class StoredBlob:
    """Where a blob was written and how large it is"""
    filename: str
    path: str
    size: int


class BlobStorage:
    """Reads and writes blobs under a root directory"""

    def __init__(self, root: Path):
        self.root = Path(root)

    def ensure_root(self):
        """Create the upload directory if it does not exist yet"""
        self.root.mkdir(parents=True, exist_ok=True)

    def save(self, stream: BinaryIO, original_name: str) -> StoredBlob:
        """
        Write an incoming stream to a new blob.

        The blob is created exclusively; if another upload already took the
        same millisecond name, the next free millisecond is used.

        Args:
            stream: Readable binary stream with the upload content
            original_name: User facing filename, used for its extension

        Returns:
            StoredBlob describing the written file
        """
        self.ensure_root()
        extension = Path(original_name or "").suffix
        millis = time.time_ns() // 1_000_000

        while True:
            filename = f"{millis}{extension}"
            blob_path = self.root / filename
            try:
                handle = open(blob_path, "xb")
            except FileExistsError:
                millis += 1
                continue
            break

        size = 0
        with handle:
            while True:
                chunk = stream.read(CHUNK_SIZE)
                if not chunk:
                    break
                handle.write(chunk)
                size += len(chunk)

        logger.info(f"Stored blob {filename} ({size} bytes)")
        return StoredBlob(filename=filename, path=str(blob_path), size=size)

    def exists(self, path: str) -> bool:
        return Path(path).is_file()

    def remove(self, path: str) -> bool:
        """
        Delete a blob.

        Args:
            path: Location recorded on the File document

        Returns:
            True if the blob was deleted, False if it was already gone
        """
        try:
            Path(path).unlink()
        except FileNotFoundError:
            logger.warning(f"Blob already missing: {path}")
            return False

        logger.info(f"Removed blob {path}")
        return True
