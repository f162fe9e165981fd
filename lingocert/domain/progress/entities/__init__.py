from .course_standing import CourseStanding, QuizStanding

__all__ = ["CourseStanding", "QuizStanding"]
