"""Resource recommendation from assessment findings."""

from carecompanion.assessment.bank import ResourceCatalog
from carecompanion.assessment.models import (
    AssessmentResult,
    Category,
    ResourceEntry,
    Severity,
)

# Size of the general list shown when no resource matches a concern
FALLBACK_LIMIT = 4


def concern_categories(result: AssessmentResult) -> frozenset[str]:
    """Categories that warrant resources.

    Every category above LOW, plus crisis whenever the crisis flag is set,
    even if its own percentage came out LOW.
    """
    concerns = {
        category_result.category.value
        for category_result in result.category_results
        if category_result.severity != Severity.LOW
    }
    if result.crisis_flagged:
        concerns.add(Category.CRISIS.value)
    return frozenset(concerns)


def recommend(
    result: AssessmentResult,
    audience: str,
    catalog: ResourceCatalog,
) -> tuple[ResourceEntry, ...]:
    """Select resources for a completed assessment, in catalog order.

    Falls back to the first few audience-matching entries when nothing
    addresses a concern, so the list is never empty unless the catalog has
    nothing for the audience at all.
    """
    concerns = concern_categories(result)
    for_audience = catalog.filter_for_audience(audience)

    matched = tuple(
        entry for entry in for_audience
        if entry.recommended_for & concerns
    )
    if matched:
        return matched

    return for_audience[:FALLBACK_LIMIT]
