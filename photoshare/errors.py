from __future__ import annotations


class PhotoshareError(Exception):
    """Base class for errors the services hand back to their callers."""

    status_code = 500
    kind = "error"

    def __init__(self, detail: str = "") -> None:
        super().__init__(detail or self.kind)
        self.detail = detail or self.kind


class NotFound(PhotoshareError):
    status_code = 404
    kind = "not_found"


class Conflict(PhotoshareError):
    status_code = 409
    kind = "conflict"


class InvalidOperation(PhotoshareError):
    status_code = 400
    kind = "invalid_operation"


class Forbidden(PhotoshareError):
    status_code = 403
    kind = "forbidden"


class Unauthorized(PhotoshareError):
    status_code = 401
    kind = "unauthorized"


class TransactionFailure(PhotoshareError):
    status_code = 500
    kind = "transaction_failure"


class AllocationExhausted(PhotoshareError):
    status_code = 503
    kind = "allocation_exhausted"
