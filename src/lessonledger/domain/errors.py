"""Shared domain error messages and error types."""


class DomainError(ValueError):
    """Base class for domain-level errors.

    Subclasses provide semantic categories while preserving ValueError
    compatibility for existing error handling.
    """


class ValidationError(DomainError):
    """Invalid input or failed validation in domain logic."""


class NotFoundError(DomainError):
    """Requested domain entity does not exist."""


class ConflictError(DomainError):
    """Domain conflict, such as a stale invoice number."""


class StorageError(DomainError):
    """Base class for persistence failures."""


class StorageUnavailable(StorageError):
    """The backing medium could not be read."""


class StorageWriteFailed(StorageError):
    """The backing medium could not be written."""


class MalformedImportRow(ValidationError):
    """A single import row could not be parsed."""

    def __init__(self, row_num: int, reason: str):
        super().__init__(f"Row {row_num}: {reason}")
        self.row_num = row_num
        self.reason = reason


class DocumentRenderingFailed(DomainError):
    """The invoice document could not be rendered."""


def entry_not_found(entry_id: str) -> str:
    """Return message for missing lesson entry."""
    return f"Entry {entry_id} not found"


def negative_count(field: str, value: int) -> str:
    """Return message for a negative lesson count."""
    return f"{field} must be non-negative, got {value}"


def zero_amount_invoice() -> str:
    """Return message when an invoice would bill nothing."""
    return "Invoice amount must be non-zero"


def stale_invoice_number(expected: int, actual: int) -> str:
    """Return message when the invoice counter moved since computation."""
    return (
        f"Invoice number {expected} is stale: "
        f"the next free number is {actual}"
    )
