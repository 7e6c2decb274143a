"""Pydantic models for fact-check results."""

from datetime import datetime, timezone
from enum import StrEnum

from pydantic import BaseModel, Field, field_validator


class ClaimVerification(BaseModel):
    """Verdict on one extracted claim."""

    claim: str
    verified: bool = False
    result: str = ""
    confidence: float = Field(default=0.0, ge=0, le=1)
    sources: list[str] = Field(default_factory=list)
    explanation: str = ""

    @field_validator("confidence", mode="before")
    @classmethod
    def clamp_confidence(cls, v):
        if v is None:
            return 0.0
        return max(0.0, min(1.0, float(v)))

    @field_validator("sources", mode="before")
    @classmethod
    def coerce_sources(cls, v):
        if v is None:
            return []
        if isinstance(v, str):
            return [v]
        return [str(item) for item in v]


class FactCheckStats(BaseModel):
    verified_count: int = 0
    unverified_count: int = 0
    average_confidence: float = 0.0


class FactCheckReport(BaseModel):
    """Advisory verification report for one article."""

    verified: bool
    summary: str
    claims_checked: int
    verification_results: list[ClaimVerification] = Field(default_factory=list)
    stats: FactCheckStats = Field(default_factory=FactCheckStats)
    checked_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))


# ============================================================================
# Whole-article review
# ============================================================================


class Thoroughness(StrEnum):
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


class FocusArea(StrEnum):
    TECHNICAL_ACCURACY = "technical_accuracy"
    REGULATORY_COMPLIANCE = "regulatory_compliance"
    MARKET_DATA = "market_data"
    METHODOLOGY = "methodology"
    PRODUCT_CLAIMS = "product_claims"


class ReviewOptions(BaseModel):
    thoroughness: Thoroughness = Thoroughness.HIGH
    focus_areas: list[FocusArea] = Field(
        default_factory=lambda: [
            FocusArea.TECHNICAL_ACCURACY,
            FocusArea.REGULATORY_COMPLIANCE,
            FocusArea.MARKET_DATA,
            FocusArea.METHODOLOGY,
        ]
    )
    json_output: bool = True
    max_content_chars: int = 12000


class ReviewProblem(BaseModel):
    """One problematic passage found by the review."""

    statement: str
    issue: str = "Problema não especificado"
    correction: str = "Correção não fornecida"
    severity: str = "Não especificada"


class ArticleReview(BaseModel):
    """Single-pass factual review of a whole article."""

    precision: float = Field(default=0.5, ge=0, le=1)
    problems: list[ReviewProblem] = Field(default_factory=list)
    recommended_sources: list[str] = Field(default_factory=list)
    improvements: list[str] = Field(default_factory=list)
    summary: str = ""
    checked_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    raw_response: str = ""
    error: str | None = None
