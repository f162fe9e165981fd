"""
Application common module.

Contains base classes for the application layer:
- UnitOfWork: Transaction boundary with domain event dispatch
- Pagination / PaginatedResult: Standardized list paging
"""

from .pagination import PaginatedResult, Pagination
from .unit_of_work import UnitOfWork

__all__ = [
    "PaginatedResult",
    "Pagination",
    "UnitOfWork",
]
