"""Mental wellness assessment engine.

Pure scoring pipeline: audience filtering, answer collection, per-category
aggregation with crisis detection, and resource recommendation. Nothing in
this package performs I/O after the catalogs are loaded.
"""

from carecompanion.assessment.aggregator import (
    compute,
    get_severity,
    get_wellbeing_level,
    interpret,
)
from carecompanion.assessment.bank import QuestionBank, ResourceCatalog
from carecompanion.assessment.collector import ResponseCollector
from carecompanion.assessment.errors import (
    AssessmentError,
    AssessmentIncompleteError,
    CatalogError,
    EmptyResponseSetError,
    InvalidAnswerError,
    SequenceCompleteError,
    SessionNotFoundError,
)
from carecompanion.assessment.loader import get_question_bank, get_resource_catalog
from carecompanion.assessment.models import (
    AnswerOption,
    AssessmentItem,
    AssessmentResult,
    Audience,
    Category,
    CategoryResult,
    CollectorState,
    ResourceEntry,
    Severity,
    WellbeingLevel,
)
from carecompanion.assessment.recommender import concern_categories, recommend
from carecompanion.assessment.session import (
    AssessmentSession,
    answer,
    get_current_question,
    get_recommendations,
    get_result,
    reset_session,
    start_session,
)

__all__ = [
    # Models
    "AnswerOption",
    "AssessmentItem",
    "AssessmentResult",
    "Audience",
    "Category",
    "CategoryResult",
    "CollectorState",
    "ResourceEntry",
    "Severity",
    "WellbeingLevel",
    # Components
    "QuestionBank",
    "ResourceCatalog",
    "ResponseCollector",
    "compute",
    "get_severity",
    "get_wellbeing_level",
    "interpret",
    "concern_categories",
    "recommend",
    "get_question_bank",
    "get_resource_catalog",
    # Session API
    "AssessmentSession",
    "start_session",
    "get_current_question",
    "answer",
    "get_result",
    "get_recommendations",
    "reset_session",
    # Errors
    "AssessmentError",
    "AssessmentIncompleteError",
    "CatalogError",
    "EmptyResponseSetError",
    "InvalidAnswerError",
    "SequenceCompleteError",
    "SessionNotFoundError",
]
