"""Configurable step function from an overall score to a proficiency level."""

from collections.abc import Mapping
from dataclasses import dataclass

from lingocert.domain.common.exceptions import ValidationError
from lingocert.domain.common.value_object import ValueObject


@dataclass(frozen=True)
class ProficiencyScale(ValueObject):
    """
    Ordered proficiency levels, highest threshold first.

    Each entry is ``(level, minimum_score)``. The lowest level must start
    at 0 so every score in 0..100 maps to exactly one level.

    Example:
        scale = ProficiencyScale.from_thresholds(
            {"ADVANCED": 85, "INTERMEDIATE": 60, "BEGINNER": 0}
        )
        scale.level_for(72)  # "INTERMEDIATE"
    """

    levels: tuple[tuple[str, int], ...]

    def __post_init__(self) -> None:
        if not self.levels:
            raise ValidationError("Proficiency scale needs at least one level", field="levels")

        names = [name for name, _ in self.levels]
        if len(set(names)) != len(names):
            raise ValidationError("Proficiency level names must be unique", field="levels")

        thresholds = [minimum for _, minimum in self.levels]
        for minimum in thresholds:
            if not 0 <= minimum <= 100:
                raise ValidationError(
                    "Proficiency thresholds must be between 0 and 100",
                    field="levels",
                    value=minimum,
                )
        if len(set(thresholds)) != len(thresholds):
            raise ValidationError("Proficiency thresholds must be distinct", field="levels")
        if thresholds != sorted(thresholds, reverse=True):
            raise ValidationError("Proficiency levels must be ordered highest first")
        if thresholds[-1] != 0:
            raise ValidationError("Lowest proficiency level must start at 0", field="levels")

    @classmethod
    def from_thresholds(cls, thresholds: Mapping[str, int]) -> "ProficiencyScale":
        ordered = sorted(thresholds.items(), key=lambda item: item[1], reverse=True)
        return cls(levels=tuple(ordered))

    @property
    def level_names(self) -> tuple[str, ...]:
        return tuple(name for name, _ in self.levels)

    def level_for(self, score: int) -> str:
        for name, minimum in self.levels:
            if score >= minimum:
                return name
        return self.levels[-1][0]

    def rank(self, level: str) -> int:
        """
        Position of a level on the scale, 0 being the lowest.

        Unknown levels (e.g. from a retired calibration) rank below all.
        """
        names = self.level_names
        if level not in names:
            return -1
        return len(names) - 1 - names.index(level)

    def is_higher(self, level: str, than: str) -> bool:
        return self.rank(level) > self.rank(than)
