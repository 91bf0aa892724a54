"""Tests for resource recommendation."""

import pytest

from carecompanion.assessment import (
    AnswerOption,
    AssessmentResult,
    Category,
    CategoryResult,
    QuestionBank,
    ResourceCatalog,
    Severity,
    WellbeingLevel,
    compute,
    concern_categories,
    recommend,
)
from carecompanion.assessment.recommender import FALLBACK_LIMIT


def category_result(category: Category, severity: Severity) -> CategoryResult:
    return CategoryResult(
        category=category,
        category_label=category.value.title(),
        score=0,
        max_score=3,
        severity_percentage={"low": 0.0, "moderate": 33.3, "high": 66.7}[severity.value],
        severity=severity,
        interpretation="",
    )


def make_result(*pairs: tuple[Category, Severity], crisis_flagged: bool = False) -> AssessmentResult:
    return AssessmentResult(
        category_results=tuple(category_result(c, s) for c, s in pairs),
        overall_score=50,
        crisis_flagged=crisis_flagged,
        wellbeing_level=WellbeingLevel.FAIR,
    )


class TestConcernCategories:
    """Tests for choosing which categories need resources."""

    def test_only_non_low_categories(self) -> None:
        """Low categories are not concerns."""
        result = make_result(
            (Category.DEPRESSION, Severity.LOW),
            (Category.ANXIETY, Severity.MODERATE),
            (Category.SLEEP, Severity.HIGH),
        )
        assert concern_categories(result) == {"anxiety", "sleep"}

    def test_crisis_flag_forces_crisis(self) -> None:
        """Crisis is a concern whenever flagged, even if its own band is low."""
        result = make_result(
            (Category.DEPRESSION, Severity.LOW),
            (Category.CRISIS, Severity.LOW),
            crisis_flagged=True,
        )
        assert concern_categories(result) == {"crisis"}

    def test_low_crisis_score_still_flagged(self, make_item) -> None:
        """A crisis answer of 1 on a 0-4 scale is 25 percent but still a concern."""
        wide = tuple(AnswerOption(str(v), v) for v in range(5))
        items = [
            make_item("mood", Category.DEPRESSION),
            make_item("crisis", Category.CRISIS, options=wide),
        ]
        result = compute({"mood": 0, "crisis": 1}, items)

        assert result.get(Category.CRISIS).severity == Severity.LOW
        assert result.crisis_flagged is True
        assert "crisis" in concern_categories(result)


class TestRecommend:
    """Tests for recommend() against small catalogs."""

    def test_matches_concerns_in_catalog_order(self, make_resource) -> None:
        """Matching entries come back in catalog order."""
        catalog = ResourceCatalog([
            make_resource("sleep-1", ("sleep",)),
            make_resource("mood-1", ("depression",)),
            make_resource("sleep-2", ("sleep", "anxiety")),
        ])
        result = make_result((Category.SLEEP, Severity.HIGH))

        ids = [entry.id for entry in recommend(result, "all", catalog)]
        assert ids == ["sleep-1", "sleep-2"]

    def test_audience_filter_applies(self, make_resource) -> None:
        """Senior-only entries are hidden from other audiences."""
        catalog = ResourceCatalog([
            make_resource("grief-senior", ("grief",), audience=("senior",)),
            make_resource("grief-all", ("grief",)),
        ])
        result = make_result((Category.GRIEF, Severity.MODERATE))

        assert [e.id for e in recommend(result, "senior", catalog)] == ["grief-senior", "grief-all"]
        assert [e.id for e in recommend(result, "all", catalog)] == ["grief-all"]

    def test_fallback_when_nothing_matches(self, make_resource) -> None:
        """With no concerns, the first four audience entries are returned."""
        catalog = ResourceCatalog([
            make_resource(f"r{i}", ("sleep",)) for i in range(6)
        ])
        result = make_result((Category.SLEEP, Severity.LOW))

        recommended = recommend(result, "all", catalog)
        assert len(recommended) == FALLBACK_LIMIT == 4
        assert [e.id for e in recommended] == ["r0", "r1", "r2", "r3"]

    def test_fallback_respects_audience(self, make_resource) -> None:
        """Fallback entries still match the audience."""
        catalog = ResourceCatalog([
            make_resource("senior-only", audience=("senior",)),
            make_resource("general"),
        ])
        result = make_result((Category.ANXIETY, Severity.HIGH))

        assert [e.id for e in recommend(result, "teen", catalog)] == ["general"]

    def test_empty_when_audience_has_nothing(self, make_resource) -> None:
        """Only an audience with no entries at all gets an empty list."""
        catalog = ResourceCatalog([make_resource("senior-only", audience=("senior",))])
        result = make_result((Category.ANXIETY, Severity.HIGH))

        assert recommend(result, "all", catalog) == ()


class TestRecommendBundled:
    """Tests against the bundled bank and catalog."""

    def test_crisis_answer_recommends_crisis_resources(
        self, bank: QuestionBank, catalog: ResourceCatalog
    ) -> None:
        """Crisis answered 1 and all else 0 surfaces crisis resources."""
        items = bank.filter_for_audience("all")
        responses = {item.id: 0 for item in items}
        responses["crisis_self_harm"] = 1

        recommended = recommend(compute(responses, items), "all", catalog)

        assert recommended
        assert any("crisis" in entry.recommended_for for entry in recommended)

    def test_all_low_gets_general_fallback(
        self, bank: QuestionBank, catalog: ResourceCatalog
    ) -> None:
        """A clean result still gets the general resources."""
        items = bank.filter_for_audience("all")
        result = compute({item.id: 0 for item in items}, items)

        recommended = recommend(result, "all", catalog)
        assert [e.id for e in recommended] == [
            "anxiety-later-life",
            "depression-signs-support",
            "sleep-hygiene",
            "mindfulness-guide",
        ]

    @pytest.mark.parametrize("audience", ["all", "senior", "unknown"])
    def test_never_empty_for_bundled_catalog(
        self, bank: QuestionBank, catalog: ResourceCatalog, audience: str
    ) -> None:
        """Recommendations are never empty for any audience."""
        items = bank.filter_for_audience(audience)
        for value in range(4):
            result = compute({item.id: value for item in items}, items)
            assert recommend(result, audience, catalog)

    def test_senior_grief_gets_senior_resources(
        self, bank: QuestionBank, catalog: ResourceCatalog
    ) -> None:
        """Grief concerns for seniors surface senior grief resources."""
        items = bank.filter_for_audience("senior")
        responses = {item.id: 0 for item in items}
        responses["grief_loss"] = 3

        ids = [e.id for e in recommend(compute(responses, items), "senior", catalog)]
        assert "grief-mourning" in ids
        assert "eldercare-locator" in ids
        assert "crisis-lifeline" not in ids
