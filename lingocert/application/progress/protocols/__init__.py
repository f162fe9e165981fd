from .course_standing_repository import CourseStandingRepositoryProtocol

__all__ = ["CourseStandingRepositoryProtocol"]
