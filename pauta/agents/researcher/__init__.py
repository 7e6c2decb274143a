"""Research aggregation: staged research queries parsed into a bundle."""

from .helpers import (
    TRUSTED_DOMAINS,
    analyze_data_freshness,
    extract_important_facts,
    rank_web_sources,
    score_source_relevance,
)
from .main import ResearchAggregator, get_latest_info
from .questions import generate_related_questions, parse_numbered_questions
from .models import DataFreshness, Overview, ResearchBundle, ResearchOptions, Trends

__all__ = [
    "ResearchAggregator",
    "get_latest_info",
    "generate_related_questions",
    "parse_numbered_questions",
    "TRUSTED_DOMAINS",
    "analyze_data_freshness",
    "extract_important_facts",
    "rank_web_sources",
    "score_source_relevance",
    "DataFreshness",
    "Overview",
    "ResearchBundle",
    "ResearchOptions",
    "Trends",
]
