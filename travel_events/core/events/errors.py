# travel_events/core/events/errors.py
"""
Error taxonomy for the event lifecycle.

``RequestError`` subclasses are raised before any collaborator is touched and
map to 400. ``EventNotFound`` maps to 404. The remaining classes wrap
collaborator failures and map to a generic 500.
"""

from __future__ import annotations


class EventsError(Exception):
    message: str = "Event operation failed"

    def __init__(self, message: str | None = None) -> None:
        if message is not None:
            self.message = message
        super().__init__(self.message)


class RequestError(EventsError):
    """Malformed request; nothing was written."""


class InvalidFilter(RequestError):
    message = "Invalid filter parameter"


class MissingFields(RequestError):
    message = "Missing required fields"


class InvalidFieldFormat(RequestError):
    message = "Invalid date or time format"


class InvalidId(RequestError):
    message = "Invalid event ID"


class InvalidStatus(RequestError):
    message = "Invalid status"


class AttachmentTooLarge(RequestError):
    message = "QR code file is too large"


class EventNotFound(EventsError):
    message = "Event not found"


class AttachmentError(EventsError):
    message = "Failed to store attachment"


class PersistenceError(EventsError):
    message = "Database operation failed"


class UnexpectedFailure(EventsError):
    message = "Unexpected failure"


__all__ = [
    "EventsError",
    "RequestError",
    "InvalidFilter",
    "MissingFields",
    "InvalidFieldFormat",
    "InvalidId",
    "InvalidStatus",
    "AttachmentTooLarge",
    "EventNotFound",
    "AttachmentError",
    "PersistenceError",
    "UnexpectedFailure",
]
