"""Application-level exceptions."""

from typing import Sequence


class AppError(Exception):
    """Base exception for application errors."""

    def __init__(self, message: str, code: str = "APP_ERROR"):
        self.message = message
        self.code = code
        super().__init__(message)


class ValidationError(AppError):
    """Raised when input validation fails."""

    def __init__(self, message: str, code: str = "VALIDATION_ERROR"):
        super().__init__(message, code=code)


class InvalidAmountError(ValidationError):
    """Raised when a money amount is negative, not finite or not a number."""

    def __init__(self, amount: object):
        super().__init__(f"Invalid amount: {amount}", code="INVALID_AMOUNT")


class NotFoundError(AppError):
    """Raised when a requested resource is missing or not owned by the caller."""

    def __init__(self, resource: str, identifier: str):
        self.resource = resource
        self.identifier = identifier
        super().__init__(f"{resource} not found: {identifier}", code="NOT_FOUND")


class StoreError(AppError):
    """
    Raised when an atomic unit could not be committed.

    The unit has been rolled back; the whole operation may be retried.
    """

    def __init__(self, message: str = "Ledger store operation failed"):
        super().__init__(message, code="STORE_ERROR")


class MalformedSnapshotError(AppError):
    """Raised when an import snapshot does not match the snapshot schema."""

    def __init__(self, errors: Sequence[str]):
        self.errors = list(errors)
        detail = "; ".join(self.errors) if self.errors else "unknown problem"
        super().__init__(f"Malformed snapshot: {detail}", code="MALFORMED_SNAPSHOT")
