# travel_events/core/attachments/local.py

from __future__ import annotations

import asyncio
import logging
from pathlib import Path

from travel_events.core.events.errors import AttachmentError

from .base import BaseAttachmentStore, generate_filename

log = logging.getLogger(__name__)


class LocalAttachmentStore(BaseAttachmentStore):
    """Writes attachments to a directory that is served as static files."""

    name: str = "local"

    def __init__(self, directory: str | Path, url_prefix: str) -> None:
        super().__init__(url_prefix)
        self.directory = Path(directory)

    def _write(self, filename: str, data: bytes) -> Path:
        self.directory.mkdir(parents=True, exist_ok=True)
        target = self.directory / filename
        # "x" mode: never overwrite an existing attachment
        with open(target, "xb") as fh:
            fh.write(data)
        return target

    async def store(self, original_name: str | None, data: bytes) -> str:
        filename = generate_filename(original_name)
        try:
            target = await asyncio.to_thread(self._write, filename, data)
        except OSError as exc:
            log.error("Failed to write attachment %s into %s: %s", filename, self.directory, exc)
            raise AttachmentError(f"Could not store attachment {filename}") from exc
        log.info("Stored attachment %s (%d bytes)", target, len(data))
        return self.public_path(filename)

    async def read(self, path: str) -> bytes:
        filename = self.filename_from_path(path)
        try:
            return await asyncio.to_thread((self.directory / filename).read_bytes)
        except OSError as exc:
            raise AttachmentError(f"Could not read attachment {filename}") from exc


__all__ = ["LocalAttachmentStore"]
