"""Shared domain error messages and error types."""

from typing import Iterable


class DomainError(ValueError):
    """Base class for domain-level errors.

    Subclasses provide semantic categories while preserving ValueError
    compatibility for existing error handling.
    """


class ValidationError(DomainError):
    """Invalid input or failed validation in domain logic."""


class NotFoundError(DomainError):
    """Requested sheet, file or entry does not exist."""


class ConflictError(DomainError):
    """Domain conflict, such as creating a sheet that already has a header."""


class ConfigError(DomainError):
    """Configuration file could not be read or is invalid."""


class SheetStoreError(DomainError):
    """The sheet store rejected a read, append or create."""


class UnresolvedRoleError(DomainError):
    """An operation needs column roles the sheet headers do not provide."""

    def __init__(self, roles: Iterable, operation: str):
        self.roles = tuple(roles)
        super().__init__(unresolved_roles(self.roles, operation))


class ExtractionError(DomainError):
    """The language-model extractor failed to answer."""


class MalformedResponseError(ExtractionError):
    """The language-model extractor answered with something other than JSON records."""


def unresolved_roles(roles: Iterable, operation: str) -> str:
    """Return message for roles no header could be matched to."""
    names = ", ".join(getattr(role, "value", str(role)) for role in roles)
    return f"Cannot {operation}: no column found for {names}"


def sheet_has_no_header(location: str) -> str:
    """Return message for appending to a sheet without a header row."""
    return f"Sheet '{location}' has no header row. Run 'moneytrack init' first."


def sheet_already_initialized(location: str) -> str:
    """Return message for creating a sheet that already has a header row."""
    return f"Sheet '{location}' already has a header row"


def invalid_range(range_str: str) -> str:
    """Return message for an unparseable A1 range."""
    return f"Invalid sheet range '{range_str}'. Use A1 notation such as 'A1:E' or '2:10'."
