"""Domain-level exceptions.

All business rule violations are expressed as subclasses of DomainException
so the CLI layer can catch them uniformly and display user-friendly messages.

Every class carries an ``ErrorKind`` tag.  Boundary layers (CLI, an HTTP
shell) map the tag to an outcome and never need to inspect storage-driver
errors themselves.
"""

from __future__ import annotations

from enum import Enum


class ErrorKind(Enum):
    VALIDATION = "VALIDATION"
    INVALID_QUANTITY = "INVALID_QUANTITY"
    NOT_FOUND = "NOT_FOUND"
    INSUFFICIENT_STOCK = "INSUFFICIENT_STOCK"
    CONFLICT = "CONFLICT"
    STORAGE = "STORAGE"


class DomainException(Exception):
    """Base class for all domain errors."""

    kind: ErrorKind = ErrorKind.VALIDATION


class ValidationError(DomainException):
    """A business rule or invariant was violated."""


class InvalidQuantityError(ValidationError):
    """A line-item or stock quantity is not a positive integer."""

    kind = ErrorKind.INVALID_QUANTITY


class DuplicateLineItemError(ValidationError):
    """The same product appears on more than one line of a request."""

    def __init__(self, product_id: str) -> None:
        super().__init__(f"Product '{product_id}' is listed more than once")
        self.product_id = product_id


class EntityNotFoundError(DomainException):
    """A requested entity does not exist."""

    kind = ErrorKind.NOT_FOUND


class UserNotFoundError(EntityNotFoundError):

    def __init__(self, user_id: str) -> None:
        super().__init__(f"User '{user_id}' not found")
        self.user_id = user_id


class ProductNotFoundError(EntityNotFoundError):

    def __init__(self, product_id: str) -> None:
        super().__init__(f"Product '{product_id}' not found")
        self.product_id = product_id


class OrderNotFoundError(EntityNotFoundError):

    def __init__(self, order_id: str) -> None:
        super().__init__(f"Order '{order_id}' not found")
        self.order_id = order_id


class InsufficientStockError(DomainException):
    """Stock for ``product_id`` cannot cover the requested quantity."""

    kind = ErrorKind.INSUFFICIENT_STOCK

    def __init__(
        self,
        product_id: str,
        requested: int | None = None,
        available: int | None = None,
    ) -> None:
        message = f"Insufficient stock for product '{product_id}'"
        if requested is not None and available is not None:
            message += f" (need {requested}, have {available})"
        super().__init__(message)
        self.product_id = product_id
        self.requested = requested
        self.available = available


class ConflictError(DomainException):
    """The write clashes with existing data (unique key, live reference)."""

    kind = ErrorKind.CONFLICT


class StorageError(DomainException):
    """The underlying store failed or aborted the transaction."""

    kind = ErrorKind.STORAGE
