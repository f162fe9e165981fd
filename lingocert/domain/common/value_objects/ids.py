from dataclasses import dataclass

from ..entity import EntityId


@dataclass(frozen=True)
class LearnerId(EntityId):
    """Strongly-typed learner identifier."""


@dataclass(frozen=True)
class CourseId(EntityId):
    """Strongly-typed course identifier."""


@dataclass(frozen=True)
class LessonId(EntityId):
    """Strongly-typed lesson identifier."""


@dataclass(frozen=True)
class QuizId(EntityId):
    """Strongly-typed quiz identifier."""


@dataclass(frozen=True)
class QuestionId(EntityId):
    """Strongly-typed question identifier."""


@dataclass(frozen=True)
class OptionId(EntityId):
    """Strongly-typed answer option identifier."""


@dataclass(frozen=True)
class AttemptId(EntityId):
    """Strongly-typed quiz attempt identifier."""


@dataclass(frozen=True)
class AnswerId(EntityId):
    """Strongly-typed recorded answer identifier."""


@dataclass(frozen=True)
class CourseStandingId(EntityId):
    """Strongly-typed course standing identifier."""


@dataclass(frozen=True)
class CertificateRecordId(EntityId):
    """
    Database identifier of a certificate row.

    This is internal and sequential; the public, non-guessable identifier
    is the certificate's ``certificate_id`` string.
    """
