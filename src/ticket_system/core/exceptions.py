"""Error taxonomy shared by every module.

Any of these raised inside a service call aborts the request's unit of
work. The HTTP layer maps them onto problem-details responses in
``api.middleware``.
"""

from typing import Optional


class TicketSystemError(Exception):
    """Base exception for ticket system operations."""

    def __init__(self, message: str, field: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.field = field


class ValidationError(TicketSystemError):
    """Malformed input caught at construction or mutation time."""


class NotFoundError(TicketSystemError):
    """The targeted aggregate does not exist."""

    def __init__(self, entity: str, entity_id):
        super().__init__(f"{entity} with ID '{entity_id}' not found.")
        self.entity = entity
        self.entity_id = entity_id


class InvalidOperationError(TicketSystemError):
    """A business rule forbids the requested operation."""


class ReferentialIntegrityError(InvalidOperationError):
    """A cross-module reference or membership invariant was violated."""
