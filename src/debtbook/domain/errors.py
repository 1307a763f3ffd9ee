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


class StoreUnavailable(Exception):
    """The local store could not be opened, read or written.

    Never retried automatically: the caller decides what to do.
    """


def client_not_found(client_id: str) -> str:
    """Return message for missing client."""
    return f"Client {client_id} not found"


def entry_not_found(entry_id: str) -> str:
    """Return message for missing ledger entry."""
    return f"Entry {entry_id} not found"


def client_name_required() -> str:
    """Return message for a blank client name."""
    return "Client name must not be empty"


def invalid_document(reason: str) -> str:
    """Return message for a rejected import document."""
    return f"Invalid import document: {reason}"
