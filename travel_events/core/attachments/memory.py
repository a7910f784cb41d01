# travel_events/core/attachments/memory.py

from __future__ import annotations

import logging
from typing import Dict

from travel_events.core.events.errors import AttachmentError

from .base import BaseAttachmentStore, generate_filename

log = logging.getLogger(__name__)


class MemoryAttachmentStore(BaseAttachmentStore):
    """In-memory store (tests and local runs without a writable disk)."""

    name: str = "memory"

    def __init__(self, url_prefix: str) -> None:
        super().__init__(url_prefix)
        self._storage: Dict[str, bytes] = {}

    async def store(self, original_name: str | None, data: bytes) -> str:
        filename = generate_filename(original_name)
        self._storage[filename] = bytes(data)
        log.info("Memory: stored attachment %s (%d bytes)", filename, len(data))
        return self.public_path(filename)

    async def read(self, path: str) -> bytes:
        filename = self.filename_from_path(path)
        try:
            return self._storage[filename]
        except KeyError as exc:
            raise AttachmentError(f"Attachment {filename} not found") from exc

    def clear(self) -> None:
        self._storage.clear()


__all__ = ["MemoryAttachmentStore"]
