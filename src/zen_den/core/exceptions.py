class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class VisitNotFoundError(DomainError):
    """Raised when a checkout matches no stored visit."""


class NothingToExportError(DomainError):
    """Raised when an export is requested for filters matching no visits."""


class StoreError(DomainError):
    """Raised when the visits store rejects or fails a query."""
