from typing import List, Optional


class DomainError(Exception):
    """Base class for errors surfaced to callers of the page builder core."""

    status_code = 400

    def __init__(self, message: str, details: Optional[List[str]] = None):
        super().__init__(message)
        self.message = message
        self.details = list(details or [])


class NotFound(DomainError):
    status_code = 404


class Conflict(DomainError):
    status_code = 409


class ContentValidationError(DomainError):
    """
    Raised when section content (or the form data it was built from)
    violates its variant schema.

    `fields` holds every failed field path (e.g. ``slides[0].imageUrl``),
    `details` the matching human readable violations.
    """

    def __init__(
        self,
        message: str,
        details: Optional[List[str]] = None,
        fields: Optional[List[str]] = None,
    ):
        if details:
            message = f"{message}: {'; '.join(details)}"
        super().__init__(message, details)
        self.fields = list(fields or [])


class MissingRequiredFile(DomainError):
    pass


class InvalidUpload(DomainError):
    pass


class HierarchyError(DomainError):
    """The stored page graph is corrupted (cycle, dangling parent, too deep)."""

    status_code = 500
