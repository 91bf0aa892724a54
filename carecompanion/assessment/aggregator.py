"""Result aggregation for wellness assessments.

Answers are grouped by category. For each answered category:

- score = sum of the chosen option values
- max_score = answered items x the highest option value in that category
- severity_percentage = score / max_score * 100 (0 when max_score is 0)

Severity bands on the percentage:
- below 30: low
- 30 to below 60: moderate
- 60 and above: high

The overall wellbeing score inverts the symptom percentage across all
categories: 100 - total_score / total_max_score * 100, floored at 0 and
rounded half up. The crisis category is part of that sum. The score is
banded as good (70 and above), fair (40 and above) or needs attention.

Any answer above 0 on a crisis item raises the crisis flag regardless of
the percentages. The flag, not the wellbeing score, is the safety signal.
"""

import logging
import math
from typing import Mapping, Sequence

from carecompanion.assessment.errors import EmptyResponseSetError, InvalidAnswerError
from carecompanion.assessment.models import (
    AssessmentItem,
    AssessmentResult,
    Category,
    CategoryResult,
    Severity,
    WellbeingLevel,
)

logger = logging.getLogger(__name__)


# Checked from the top down; anything below every threshold is LOW
SEVERITY_THRESHOLDS = [
    (60.0, Severity.HIGH),
    (30.0, Severity.MODERATE),
]

# Same top-down lookup on the overall wellbeing score
WELLBEING_THRESHOLDS = [
    (70, WellbeingLevel.GOOD),
    (40, WellbeingLevel.FAIR),
]

FALLBACK_INTERPRETATION = (
    "Your answers in this area may benefit from further assessment. "
    "Consider talking with your doctor or a counselor."
)

INTERPRETATIONS: dict[tuple[Category, Severity], str] = {
    (Category.DEPRESSION, Severity.LOW): (
        "You are reporting few signs of low mood. Keep up the activities that bring you joy."
    ),
    (Category.DEPRESSION, Severity.MODERATE): (
        "You may be experiencing some symptoms of depression. Staying active and "
        "connected can help, and it is worth mentioning to your doctor."
    ),
    (Category.DEPRESSION, Severity.HIGH): (
        "Your answers suggest significant symptoms of depression. Please talk with "
        "your doctor or a mental health professional soon."
    ),
    (Category.ANXIETY, Severity.LOW): (
        "You are reporting little worry or nervousness at the moment."
    ),
    (Category.ANXIETY, Severity.MODERATE): (
        "You may be experiencing some anxiety. Relaxation and breathing exercises "
        "can help, and your doctor can suggest other options."
    ),
    (Category.ANXIETY, Severity.HIGH): (
        "Your answers suggest significant anxiety. A healthcare provider can help "
        "you find treatment and support."
    ),
    (Category.SLEEP, Severity.LOW): (
        "Your sleep appears to be generally restful."
    ),
    (Category.SLEEP, Severity.MODERATE): (
        "You are having some trouble with sleep. A regular bedtime routine and "
        "limiting daytime naps may help."
    ),
    (Category.SLEEP, Severity.HIGH): (
        "Your sleep is frequently disrupted. Ongoing sleep problems can affect health, "
        "so consider discussing them with your doctor."
    ),
    (Category.SOCIAL, Severity.LOW): (
        "You appear to feel well connected to the people around you."
    ),
    (Category.SOCIAL, Severity.MODERATE): (
        "You may be feeling somewhat isolated. Community groups, classes or regular "
        "calls with family can help you stay connected."
    ),
    (Category.SOCIAL, Severity.HIGH): (
        "You are often feeling lonely or isolated. Local senior services can help "
        "you find company and support."
    ),
    (Category.GRIEF, Severity.LOW): (
        "Loss does not appear to be weighing heavily on your daily life right now."
    ),
    (Category.GRIEF, Severity.MODERATE): (
        "Grief is affecting some of your days. Sharing memories with others or "
        "joining a support group can help."
    ),
    (Category.GRIEF, Severity.HIGH): (
        "Grief is making daily life very hard. A grief counselor or support group "
        "can offer help through this time."
    ),
    (Category.COGNITIVE, Severity.LOW): (
        "You are reporting few concerns with memory or concentration."
    ),
    (Category.COGNITIVE, Severity.MODERATE): (
        "You have noticed some changes in memory or focus. Mental exercises help, "
        "and it is worth mentioning at your next check-up."
    ),
    (Category.COGNITIVE, Severity.HIGH): (
        "You are noticing frequent memory or concentration problems. Please ask "
        "your doctor about a memory assessment."
    ),
    (Category.CRISIS, Severity.LOW): (
        "If thoughts of harming yourself ever come up, help is available any time by "
        "calling or texting 988."
    ),
    (Category.CRISIS, Severity.MODERATE): (
        "You have reported thoughts of harming yourself. Please reach out now by "
        "calling or texting 988, or talk to someone you trust."
    ),
    (Category.CRISIS, Severity.HIGH): (
        "You have reported frequent thoughts of harming yourself. Please call or text "
        "988 now, or call 911 if you are in immediate danger."
    ),
}


def get_severity(percentage: float) -> Severity:
    """Classify a category percentage into a severity band."""
    for threshold, severity in SEVERITY_THRESHOLDS:
        if percentage >= threshold:
            return severity
    return Severity.LOW


def get_wellbeing_level(overall_score: int) -> WellbeingLevel:
    """Classify the overall wellbeing score into a band."""
    for threshold, level in WELLBEING_THRESHOLDS:
        if overall_score >= threshold:
            return level
    return WellbeingLevel.NEEDS_ATTENTION


def severity_percentage(score: int, max_score: int) -> float:
    """Percentage of the category ceiling reached; 0 when the ceiling is 0."""
    if max_score <= 0:
        return 0.0
    return score / max_score * 100


def interpret(
    category: Category,
    severity: Severity,
    table: Mapping[tuple[Category, Severity], str] | None = None,
) -> str:
    """Look up interpretation text, falling back to the generic text."""
    if table is None:
        table = INTERPRETATIONS
    return table.get((category, severity), FALLBACK_INTERPRETATION)


def wellbeing_score(total_score: int, total_max_score: int) -> int:
    """Convert total symptom score into a 0-100 wellbeing score."""
    if total_max_score <= 0:
        return 100
    raw = max(0.0, 100 - total_score / total_max_score * 100)
    # Half up, not Python's banker's rounding
    return math.floor(raw + 0.5)


def compute(
    responses: Mapping[str, int],
    filtered_items: Sequence[AssessmentItem],
) -> AssessmentResult:
    """Aggregate responses into per-category and overall results.

    Pure and idempotent: the same inputs always yield an equal result.

    Args:
        responses: Chosen option value keyed by item id
        filtered_items: The items asked in this run, in order

    Returns:
        AssessmentResult with one CategoryResult per answered category

    Raises:
        EmptyResponseSetError: If no response belongs to filtered_items
        InvalidAnswerError: If a response is not one of its item's option values
    """
    if not responses:
        raise EmptyResponseSetError("Cannot compute a result from zero responses")

    by_category: dict[Category, list[AssessmentItem]] = {}
    for item in filtered_items:
        by_category.setdefault(item.category, []).append(item)

    unknown = set(responses) - {item.id for item in filtered_items}
    if unknown:
        logger.debug(f"Ignoring responses for items outside this run: {sorted(unknown)}")

    category_results: list[CategoryResult] = []
    total_score = 0
    total_max_score = 0
    crisis_flagged = False

    for category, items in by_category.items():
        answered: list[int] = []
        for item in items:
            if item.id not in responses:
                continue
            value = responses[item.id]
            # bool is an int subclass; True must not pass as 1
            if (
                isinstance(value, bool)
                or not isinstance(value, int)
                or value not in item.option_values
            ):
                raise InvalidAnswerError(item.id, value, item.option_values)
            answered.append(value)

        if not answered:
            continue

        # Ceiling is the category-wide max, applied to every answered item
        max_option = max(item.max_option_value for item in items)
        score = sum(answered)
        max_score = max_option * len(answered)
        percentage = severity_percentage(score, max_score)
        severity = get_severity(percentage)

        category_results.append(CategoryResult(
            category=category,
            category_label=items[0].category_label,
            score=score,
            max_score=max_score,
            severity_percentage=percentage,
            severity=severity,
            interpretation=interpret(category, severity),
        ))

        total_score += score
        total_max_score += max_score

        if category == Category.CRISIS and any(value > 0 for value in answered):
            crisis_flagged = True

    if not category_results:
        raise EmptyResponseSetError("None of the responses belong to the assessed items")

    overall_score = wellbeing_score(total_score, total_max_score)
    return AssessmentResult(
        category_results=tuple(category_results),
        overall_score=overall_score,
        crisis_flagged=crisis_flagged,
        wellbeing_level=get_wellbeing_level(overall_score),
    )
