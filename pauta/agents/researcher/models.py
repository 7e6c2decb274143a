"""Pydantic models for the research aggregator."""

from datetime import datetime, timezone

from pydantic import BaseModel, ConfigDict, Field

from pauta.llm_providers import RecencyFilter
from pauta.parsing.models import FAQ, Source
from pauta.services.providers import WebSource


class Overview(BaseModel):
    model_config = ConfigDict(frozen=True)

    general: str = ""
    technical: str = ""
    costs: str = ""
    regional: str = ""


class Trends(BaseModel):
    model_config = ConfigDict(frozen=True)

    market: str = ""
    innovations: str = ""
    predictions: str = ""


class DataFreshness(BaseModel):
    """How recent the information in a research text appears to be."""

    model_config = ConfigDict(frozen=True)

    mentioned_years: list[int] = Field(default_factory=list)  # most recent first
    most_recent_year: int | None = None
    has_recent_year_mentions: bool = False
    has_recent_terms: bool = False
    freshness_score: float = Field(default=0.0, ge=0, le=1)
    is_considered_recent: bool = False


class ResearchOptions(BaseModel):
    """Per-call switches for the staged research queries."""

    include_technical_data: bool = True
    include_cost_estimates: bool = True
    include_local_context: bool = True
    max_sources: int = Field(default=5, ge=1)
    recency_filter: RecencyFilter | None = RecencyFilter.MONTH


class ResearchBundle(BaseModel):
    """Everything known about one topic before writing starts."""

    model_config = ConfigDict(frozen=True)

    topic: str
    overview: Overview = Field(default_factory=Overview)
    trends: Trends = Field(default_factory=Trends)
    sources: list[Source] = Field(default_factory=list)
    faqs: list[FAQ] = Field(default_factory=list)
    web_sources: list[WebSource] = Field(default_factory=list)
    primary_text: str = ""  # free-text answer to the primary query, when one was made
    freshness: DataFreshness | None = None
    searched_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    error: str | None = None

    @property
    def is_degraded(self) -> bool:
        return self.error is not None
