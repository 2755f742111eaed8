"""Error kind -> HTTP status mapping for an HTTP shell in front of the handlers.

A pure function of the exception's ``ErrorKind``; storage-driver details
never reach it.
"""

from __future__ import annotations

from storefront.domain.exceptions import DomainException, ErrorKind

STATUS_BY_KIND: dict[ErrorKind, int] = {
    ErrorKind.VALIDATION: 400,
    ErrorKind.INVALID_QUANTITY: 400,
    ErrorKind.NOT_FOUND: 404,
    ErrorKind.INSUFFICIENT_STOCK: 409,
    ErrorKind.CONFLICT: 409,
    ErrorKind.STORAGE: 500,
}

INTERNAL_ERROR = 500


def status_for(exc: BaseException) -> int:
    if isinstance(exc, DomainException):
        return STATUS_BY_KIND.get(exc.kind, INTERNAL_ERROR)
    return INTERNAL_ERROR
