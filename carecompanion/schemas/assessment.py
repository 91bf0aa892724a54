"""Pydantic schemas for assessment sessions."""

from pydantic import BaseModel, Field, StrictInt

from carecompanion.assessment import (
    AssessmentItem,
    AssessmentResult,
    CategoryResult,
    ResourceEntry,
)


class AnswerOptionRead(BaseModel):
    """One selectable answer."""

    text: str
    value: int


class QuestionRead(BaseModel):
    """A question as shown to the user."""

    id: str
    text: str
    category: str
    category_label: str
    options: list[AnswerOptionRead]

    @classmethod
    def from_item(cls, item: AssessmentItem) -> "QuestionRead":
        return cls(
            id=item.id,
            text=item.text,
            category=item.category.value,
            category_label=item.category_label,
            options=[AnswerOptionRead(text=o.text, value=o.value) for o in item.options],
        )


class StartAssessmentRequest(BaseModel):
    """Request to start an assessment."""

    audience: str | None = Field(
        None,
        max_length=50,
        description="Audience tag such as 'all' or 'senior'",
    )


class StartAssessmentResponse(BaseModel):
    """Newly started session and its first question."""

    session_id: str
    audience: str
    total_questions: int
    first_question: QuestionRead | None


class SubmitAnswerRequest(BaseModel):
    """Answer to the current question."""

    value: StrictInt = Field(..., description="Option value; JSON integers only")


class SubmitAnswerResponse(BaseModel):
    """Progress after an answer; next_question is None once complete."""

    complete: bool
    answered: int
    total: int
    next_question: QuestionRead | None = None


class CategoryResultRead(BaseModel):
    """Per-category outcome."""

    category: str
    category_label: str
    score: int
    max_score: int
    severity_percentage: float
    severity: str
    interpretation: str

    @classmethod
    def from_result(cls, result: CategoryResult) -> "CategoryResultRead":
        return cls(
            category=result.category.value,
            category_label=result.category_label,
            score=result.score,
            max_score=result.max_score,
            severity_percentage=result.severity_percentage,
            severity=result.severity.value,
            interpretation=result.interpretation,
        )


class AssessmentResultRead(BaseModel):
    """Completed assessment result."""

    session_id: str
    category_results: list[CategoryResultRead]
    overall_score: int
    crisis_flagged: bool
    wellbeing_level: str
    crisis_message: str | None = None

    @classmethod
    def from_result(
        cls,
        session_id: str,
        result: AssessmentResult,
        crisis_message: str | None = None,
    ) -> "AssessmentResultRead":
        return cls(
            session_id=session_id,
            category_results=[CategoryResultRead.from_result(c) for c in result.category_results],
            overall_score=result.overall_score,
            crisis_flagged=result.crisis_flagged,
            wellbeing_level=result.wellbeing_level.value,
            crisis_message=crisis_message if result.crisis_flagged else None,
        )


class ResourceRead(BaseModel):
    """A recommended support resource."""

    id: str
    title: str
    category: str
    description: str
    link: str
    recommended_for: list[str]
    audience: list[str]

    @classmethod
    def from_entry(cls, entry: ResourceEntry) -> "ResourceRead":
        return cls(
            id=entry.id,
            title=entry.title,
            category=entry.category,
            description=entry.description,
            link=entry.link,
            recommended_for=sorted(entry.recommended_for),
            audience=sorted(entry.audience),
        )
