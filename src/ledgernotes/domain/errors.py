"""Shared domain error messages and error types."""


class DomainError(ValueError):
    """Base class for domain-level errors.

    Subclasses provide semantic categories while preserving ValueError
    compatibility for existing error handling.
    """


class ValidationError(DomainError):
    """Invalid input or failed validation in domain logic."""


class ConfigurationError(ValidationError):
    """Ledger configuration that cannot be used to build a journal."""


class NotFoundError(DomainError):
    """Requested domain entity or path does not exist."""


class ConflictError(DomainError):
    """Domain conflict, such as uniqueness violations."""


def alias_not_found(alias: str) -> str:
    """Return message for missing account alias."""
    return f"Account alias '{alias}' not found"


def duplicate_alias(alias: str) -> str:
    """Return message for an alias that is already defined."""
    return f"Account alias '{alias}' already exists"


def invalid_alias_line(line_number: int, line: str) -> str:
    """Return message for an alias definition that is not 'key = value'."""
    return f"Line {line_number}: expected 'alias = Account:Path', got '{line}'"


def vault_not_found(path: str) -> str:
    """Return message for a vault directory that does not exist."""
    return f"Vault directory '{path}' not found"
