"""Common infrastructure schemas."""

from lingocert.infrastructure.common.schemas.response_wrappers import PaginatedResponse

__all__ = ["PaginatedResponse"]
