"""
Service error taxonomy.

Repositories and the codec raise these; the HTTP layer maps each one to a
single status code.
"""

from __future__ import annotations


class ServiceError(RuntimeError):
    pass


class MalformedInput(ServiceError):
    """Request body or path id could not be parsed into the expected types."""


class NotFound(ServiceError):
    """No record exists for the requested id."""


class StorageFailure(ServiceError):
    """The store was unreachable or rejected the operation."""


class StartupFailure(ServiceError):
    """The store could not be reached while the process was starting."""
