"""
Pagination types for queries.

Example:
    items, total = attempt_repository.list_for_learner(learner_id, None, pagination)
    return PaginatedResult(items=items, total=total, pagination=pagination)
"""

from dataclasses import dataclass
from typing import Generic, TypeVar

T = TypeVar("T")

# Maximum allowed page size
MAX_PAGE_SIZE = 100


@dataclass(frozen=True)
class Pagination:
    """
    Pagination parameters for list queries.

    Attributes:
        page: Current page number (1-indexed)
        page_size: Number of items per page
    """

    page: int = 1
    page_size: int = 20

    def __post_init__(self) -> None:
        if self.page < 1:
            raise ValueError("Page must be at least 1")
        if self.page_size < 1:
            raise ValueError("Page size must be at least 1")
        if self.page_size > MAX_PAGE_SIZE:
            raise ValueError(f"Page size cannot exceed {MAX_PAGE_SIZE}")

    @property
    def offset(self) -> int:
        """Calculate the offset for database queries."""
        return (self.page - 1) * self.page_size

    @property
    def limit(self) -> int:
        """Return the limit for database queries."""
        return self.page_size


@dataclass(frozen=True)
class PaginatedResult(Generic[T]):
    """Paginated result containing items and metadata."""

    items: list[T]
    total: int
    pagination: Pagination

    @property
    def total_pages(self) -> int:
        """Total number of pages."""
        if self.total == 0:
            return 0
        return (self.total + self.pagination.page_size - 1) // self.pagination.page_size

    @property
    def has_next(self) -> bool:
        """Check if there is a next page."""
        return self.pagination.page < self.total_pages
