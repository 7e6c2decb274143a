"""Fact-check engine."""

from .main import FactChecker, fact_check_article, parse_claims
from .models import (
    ArticleReview,
    ClaimVerification,
    FactCheckReport,
    FactCheckStats,
    FocusArea,
    ReviewOptions,
    ReviewProblem,
    Thoroughness,
)
from .review import (
    extract_precision_score,
    extract_problems,
    parse_review,
    review_article,
)

__all__ = [
    "FactChecker",
    "fact_check_article",
    "parse_claims",
    "extract_precision_score",
    "extract_problems",
    "parse_review",
    "review_article",
    "ArticleReview",
    "ClaimVerification",
    "FactCheckReport",
    "FactCheckStats",
    "FocusArea",
    "ReviewOptions",
    "ReviewProblem",
    "Thoroughness",
]
