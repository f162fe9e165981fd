"""Domain service deciding whether a selection answers a question correctly."""

from collections.abc import Iterable

from lingocert.domain.assessment.exceptions import (
    InvalidQuizDefinitionError,
    UnknownOptionError,
)
from lingocert.domain.assessment.value_objects import (
    Correctness,
    QuestionSnapshot,
    QuizDefinition,
    SelectionMode,
)
from lingocert.domain.common.value_objects import OptionId


class AnswerEvaluator:
    """Strict-match evaluator.

    Single-select: correct iff the selection is exactly the one correct option.
    Multi-select: correct iff the selection equals the set of correct options.
    No partial credit. An empty selection is incorrect, never an error.
    """

    def evaluate(
        self,
        quiz: QuizDefinition,
        question: QuestionSnapshot,
        selected_option_ids: Iterable[OptionId],
    ) -> Correctness:
        selection = frozenset(selected_option_ids)

        unknown = selection - question.option_ids
        if unknown:
            raise UnknownOptionError(question.id.value, (o.value for o in unknown))

        correct = question.correct_option_ids
        self._check_configuration(quiz, question, correct)

        if not selection:
            return Correctness(is_correct=False, correct_option_ids=correct)
        return Correctness(is_correct=selection == correct, correct_option_ids=correct)

    @staticmethod
    def _check_configuration(
        quiz: QuizDefinition, question: QuestionSnapshot, correct: frozenset[OptionId]
    ) -> None:
        if question.selection_mode is SelectionMode.SINGLE and len(correct) != 1:
            raise InvalidQuizDefinitionError(
                quiz.id.value,
                f"single-select question must have exactly one correct option, has {len(correct)}",
                question_id=question.id.value,
            )
        if question.selection_mode is SelectionMode.MULTIPLE and not correct:
            raise InvalidQuizDefinitionError(
                quiz.id.value,
                "multi-select question has no correct option",
                question_id=question.id.value,
            )
