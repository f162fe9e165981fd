from .get_course_standing_use_case import GetCourseStandingUseCase
from .recompute_course_standing_use_case import RecomputeCourseStandingUseCase

__all__ = ["GetCourseStandingUseCase", "RecomputeCourseStandingUseCase"]
