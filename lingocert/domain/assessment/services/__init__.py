from .answer_evaluator import AnswerEvaluator
from .quiz_scorer import QuizScorer

__all__ = ["AnswerEvaluator", "QuizScorer"]
