"""Assessment engine data models.

Items, results and resources are frozen dataclasses so that a completed
result can be handed around without being altered.
"""

from dataclasses import dataclass, field
from enum import Enum


class Category(str, Enum):
    """Wellbeing dimensions used to group questions and resources."""

    DEPRESSION = "depression"
    ANXIETY = "anxiety"
    SLEEP = "sleep"
    SOCIAL = "social"
    GRIEF = "grief"
    COGNITIVE = "cognitive"
    CRISIS = "crisis"


class Severity(str, Enum):
    """Three-level classification of a category percentage."""

    LOW = "low"
    MODERATE = "moderate"
    HIGH = "high"


class WellbeingLevel(str, Enum):
    """Band of the overall wellbeing score."""

    GOOD = "good"
    FAIR = "fair"
    NEEDS_ATTENTION = "needs_attention"


class Audience(str, Enum):
    """Recognized audience tags.

    Filters accept any string; an unrecognized tag only matches ``all``.
    """

    ALL = "all"
    SENIOR = "senior"


class CollectorState(str, Enum):
    """States of a response collector."""

    COLLECTING = "collecting"
    COMPLETE = "complete"


def matches_audience(tags: frozenset[str], audience: str) -> bool:
    """Check whether an audience set applies to the requested audience."""
    return Audience.ALL.value in tags or audience in tags


@dataclass(frozen=True)
class AnswerOption:
    """One selectable answer; value is its severity contribution."""

    text: str
    value: int


@dataclass(frozen=True)
class AssessmentItem:
    """A single assessment question."""

    id: str
    text: str
    category: Category
    category_label: str
    audience: frozenset[str]
    options: tuple[AnswerOption, ...]

    @property
    def option_values(self) -> tuple[int, ...]:
        return tuple(option.value for option in self.options)

    @property
    def max_option_value(self) -> int:
        return max(self.option_values)

    def applies_to(self, audience: str) -> bool:
        return matches_audience(self.audience, audience)


@dataclass(frozen=True)
class CategoryResult:
    """Aggregate score for one category."""

    category: Category
    category_label: str
    score: int
    max_score: int
    severity_percentage: float
    severity: Severity
    interpretation: str


@dataclass(frozen=True)
class AssessmentResult:
    """Result of one completed assessment run."""

    category_results: tuple[CategoryResult, ...]
    overall_score: int
    crisis_flagged: bool
    wellbeing_level: WellbeingLevel

    def get(self, category: Category) -> CategoryResult | None:
        """Return the result for a category, if it was answered."""
        for category_result in self.category_results:
            if category_result.category == category:
                return category_result
        return None


@dataclass(frozen=True)
class ResourceEntry:
    """A static support resource."""

    id: str
    title: str
    category: str
    description: str
    link: str
    recommended_for: frozenset[str] = field(default_factory=frozenset)
    audience: frozenset[str] = field(default_factory=lambda: frozenset({"all"}))

    def applies_to(self, audience: str) -> bool:
        return matches_audience(self.audience, audience)
