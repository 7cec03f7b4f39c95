"""
Media store

Blob storage behind catalog images. Records are deleted inside the
database transaction; the files they pointed to are purged afterwards,
best effort: a file that cannot be removed is reported, not raised.
"""

from abc import ABC, abstractmethod
from concurrent.futures import ThreadPoolExecutor
from typing import Iterable, List, Optional

import structlog
from django.conf import settings
from django.core.files.storage import Storage, default_storage

logger = structlog.get_logger(__name__)


class MediaStore(ABC):
    """Path-addressable blob store."""

    @abstractmethod
    def delete(self, name: str) -> None:
        """Remove one blob. Missing blobs are not an error."""


class StorageMediaStore(MediaStore):
    """MediaStore backed by a Django storage (MEDIA_ROOT by default)."""

    def __init__(self, storage: Optional[Storage] = None):
        self._storage = storage

    @property
    def storage(self) -> Storage:
        return self._storage or default_storage

    def delete(self, name: str) -> None:
        self.storage.delete(name)


def purge_files(store: MediaStore, names: Iterable[str], max_workers: Optional[int] = None) -> List[str]:
    """
    Delete blobs concurrently.

    Args:
        store: MediaStore to delete from
        names: Storage names of the blobs
        max_workers: Thread pool size (defaults to CATALOG_MEDIA_PURGE_WORKERS)

    Returns:
        One warning message per blob that could not be deleted
    """
    names = [name for name in names if name]
    if not names:
        return []

    workers = max_workers or getattr(settings, 'CATALOG_MEDIA_PURGE_WORKERS', 4)
    warnings: List[str] = []

    with ThreadPoolExecutor(max_workers=min(workers, len(names)), thread_name_prefix="media_purge") as executor:
        futures = {name: executor.submit(store.delete, name) for name in names}
        for name, future in futures.items():
            try:
                future.result()
            except Exception as e:
                logger.warning(
                    "Failed to delete image file",
                    file=name,
                    error=str(e),
                    error_type=type(e).__name__,
                )
                warnings.append(f'Failed to delete image file "{name}": {e}')

    if warnings:
        logger.warning("Image cleanup finished with failures", total=len(names), failed=len(warnings))
    return warnings


# Global instance for convenience
media_store = StorageMediaStore()
