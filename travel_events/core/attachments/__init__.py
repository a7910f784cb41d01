"""
Attachment store subsystem.

* ``BaseAttachmentStore`` – abstract interface (see base.py).
* ``get_attachment_store()`` – factory returning the store named by
  ``settings.ATTACHMENT_STORE`` (or an explicit name); also used as a
  FastAPI dependency.
"""
from __future__ import annotations

import functools
from typing import Callable, Dict

from travel_events.config import settings

from .base import BaseAttachmentStore, generate_filename
from .local import LocalAttachmentStore
from .memory import MemoryAttachmentStore


@functools.lru_cache(maxsize=1)
def _shared_memory_store() -> MemoryAttachmentStore:
    # one instance per process so stored bytes outlive the request
    return MemoryAttachmentStore(settings.QR_CODE_URL_PREFIX)


_STORE_FACTORIES: Dict[str, Callable[[], BaseAttachmentStore]] = {
    "local": lambda: LocalAttachmentStore(settings.QR_CODE_DIR, settings.QR_CODE_URL_PREFIX),
    "memory": _shared_memory_store,
}


def get_attachment_store(name: str | None = None) -> BaseAttachmentStore:
    """
    Return an attachment store instance.

    ``name`` is case-insensitive; defaults to ``settings.ATTACHMENT_STORE``.
    """
    store_key = (name or settings.ATTACHMENT_STORE).lower()
    try:
        factory = _STORE_FACTORIES[store_key]
    except KeyError as exc:
        raise ValueError(f"Unknown attachment store: {store_key}") from exc
    return factory()


__all__: list[str] = [
    "BaseAttachmentStore",
    "LocalAttachmentStore",
    "MemoryAttachmentStore",
    "generate_filename",
    "get_attachment_store",
]
