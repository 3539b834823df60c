from __future__ import annotations

from typing import Optional


class AttentrackError(Exception):
    """Root of every error raised by this package."""


class DomainError(AttentrackError):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


# Name used by callers that think in terms of the facade's error taxonomy.
ValidationFailed = ValidationError


class ConstraintViolation(DomainError):
    """Raised when the store rejects a write (duplicate roll number, dangling reference)."""


class StorageError(AttentrackError):
    """Base exception for failures of a storage backend."""


class ConnectivityError(StorageError):
    """The relational backend could not be reached or used."""


class AuthenticationFailed(ConnectivityError):
    """Credentials were rejected by the database server."""


class ConnectionRefused(ConnectivityError):
    """Host unreachable, connection refused or dropped."""


class UnknownDatabase(ConnectivityError):
    """The configured database does not exist and could not be created."""


class UnclassifiedConnectivityError(ConnectivityError):
    """Any other failure while acquiring a connection (e.g. pool exhausted)."""


class BackendError(StorageError):
    """A statement failed for a reason unrelated to connectivity or constraints."""


class InitializationFailed(StorageError):
    """The facade could not bring the relational backend up (strict mode only)."""


class OperationFailed(StorageError):
    """An operation failed on every backend it was attempted on."""

    def __init__(self, operation: str, cause: Optional[BaseException] = None):
        message = f"{operation} failed"
        if cause is not None:
            message = f"{message}: {cause}"
        super().__init__(message)
        self.operation = operation
        self.cause = cause
