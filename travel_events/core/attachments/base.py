# travel_events/core/attachments/base.py
"""
Abstract base for attachment stores.

A store persists an uploaded binary under a collision-resistant name and
returns the public path it will be served from.
"""

from __future__ import annotations

import time
import uuid
from abc import ABC, abstractmethod
from pathlib import PurePosixPath, PureWindowsPath

DEFAULT_FILENAME = "qr-code"


def generate_filename(original_name: str | None) -> str:
    """
    generate_filename("../codes/ticket.png")  ->  "1735725600123-9f2c4e1a-ticket.png"

    The millisecond timestamp keeps names ordered, the random token keeps two
    uploads in the same millisecond apart. Directory components are dropped.
    """
    name = PureWindowsPath(PurePosixPath(original_name or "").name).name.strip()
    if name in ("", ".", ".."):
        name = DEFAULT_FILENAME
    return f"{int(time.time() * 1000)}-{uuid.uuid4().hex[:8]}-{name}"


class BaseAttachmentStore(ABC):
    """Asynchronous attachment store interface."""

    name: str

    def __init__(self, url_prefix: str) -> None:
        self.url_prefix = "/" + url_prefix.strip("/")

    def public_path(self, filename: str) -> str:
        return f"{self.url_prefix}/{filename}"

    def filename_from_path(self, path: str) -> str:
        prefix = self.url_prefix + "/"
        if not path.startswith(prefix):
            raise ValueError(f"Path {path!r} is not under {self.url_prefix!r}")
        return path[len(prefix):]

    @abstractmethod
    async def store(self, original_name: str | None, data: bytes) -> str:
        """
        Persist ``data`` under a generated name.

        Returns:
            str: Public path, e.g. ``/qr-codes/1735725600123-9f2c4e1a-ticket.png``.

        Raises:
            AttachmentError: The location could not be created or the write failed.
        """
        ...

    @abstractmethod
    async def read(self, path: str) -> bytes:
        """Return the bytes stored under a path previously returned by :meth:`store`."""
        ...


__all__ = ["BaseAttachmentStore", "generate_filename", "DEFAULT_FILENAME"]
