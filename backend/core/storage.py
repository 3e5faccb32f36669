# core/storage.py
"""
Blob storage used for company logos.

BlobStore is the interface the commands depend on. DjangoBlobStore
backs it with a Django ``Storage`` (``default_storage`` unless told
otherwise), so S3 or local disk is a settings decision.
"""

import logging
import uuid
from datetime import date
from typing import Optional, Protocol
from urllib.parse import urlparse

from django.core.files.storage import Storage, default_storage

logger = logging.getLogger(__name__)


class BlobStore(Protocol):
    def upload(self, file, path: str) -> str:
        """Store ``file`` at ``path`` and return its public URL."""
        ...

    def delete(self, url: str) -> None:
        """Delete the blob previously returned by ``upload``."""
        ...


def blob_path(prefix: str, extension: str, today: Optional[date] = None) -> str:
    """
    Build ``{prefix}/{YYYY}/{MM}/{DD}/{random}.{ext}``.

    The name is random, so collisions are not checked.
    """
    today = today or date.today()
    extension = extension.lower().lstrip(".")
    return f"{prefix}/{today:%Y/%m/%d}/{uuid.uuid4().hex}.{extension}"


class DjangoBlobStore:
    def __init__(self, storage: Optional[Storage] = None):
        self.storage = storage or default_storage

    def upload(self, file, path: str) -> str:
        saved_name = self.storage.save(path, file)
        logger.info("Blob stored", extra={"path": saved_name})
        return self.storage.url(saved_name)

    def delete(self, url: str) -> None:
        name = self.name_from_url(url)
        self.storage.delete(name)
        logger.info("Blob deleted", extra={"path": name})

    def name_from_url(self, url: str) -> str:
        """Strip the storage base URL so only the storage-relative name remains."""
        base_url = getattr(self.storage, "base_url", "") or ""
        if base_url and url.startswith(base_url):
            return url[len(base_url):]
        base_path = urlparse(base_url).path if base_url else ""
        path = urlparse(url).path
        if base_path and path.startswith(base_path):
            return path[len(base_path):]
        return path.lstrip("/")
