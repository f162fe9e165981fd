"""
Domain layer exceptions.

These exceptions are raised when assessment rules are violated. Each
carries a message and a details mapping (attempt id, expected and actual
state, ...) so the API layer can render a precise failure.
"""


class DomainError(Exception):
    """Base exception for all domain errors."""

    def __init__(self, message: str, details: dict[str, object] | None = None) -> None:
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def __str__(self) -> str:
        if self.details:
            return f"{self.message} - {self.details}"
        return self.message


class ValidationError(DomainError):
    """Raised when domain validation fails."""

    def __init__(self, message: str, field: str | None = None, value: object = None) -> None:
        details: dict[str, object] = {}
        if field:
            details["field"] = field
        if value is not None:
            details["value"] = value
        super().__init__(message, details)
        self.field = field
        self.value = value


class InvariantViolationError(DomainError):
    """
    Raised when an aggregate invariant is violated.

    Example: a certificate being issued with a score outside 0..100.
    """

    def __init__(self, aggregate: str, invariant: str) -> None:
        message = f"Invariant violation in {aggregate}: {invariant}"
        super().__init__(message, {"aggregate": aggregate, "invariant": invariant})
        self.aggregate = aggregate
        self.invariant = invariant


class ConcurrentConflictError(DomainError):
    """
    Raised when a uniqueness constraint shows another request won a race.

    The winning request already reached the intended end state, so the
    caller may retry the operation once.
    """

    def __init__(self, resource: str, key: dict[str, object]) -> None:
        super().__init__(f"Concurrent write conflict on {resource}", {"resource": resource, **key})
        self.resource = resource
        self.key = key
