from .attempt_repository import AttemptRepositoryProtocol
from .quiz_catalog import QuizCatalogProtocol

__all__ = ["AttemptRepositoryProtocol", "QuizCatalogProtocol"]
