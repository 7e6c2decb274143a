"""Readability and SEO scoring."""

from .categories import ARTICLE_CATEGORIES, categories_by_keywords, suggest_categories
from .markup import build_structured_data, generate_meta_tags, generate_structured_data
from .metrics import (
    analyze_title,
    compute_metrics,
    extract_keywords,
    generate_meta_description,
)
from .models import (
    ArticleCategory,
    ArticlePage,
    CategorySuggestion,
    ContentMetrics,
    ScoringProfile,
    SeoAnalysis,
    TitleAnalysis,
)
from .readability import analyze_readability, count_syllables, flesch_reading_ease
from .scoring import analyze_seo_score, get_seo_improvement_suggestions

__all__ = [
    "ARTICLE_CATEGORIES",
    "analyze_readability",
    "analyze_seo_score",
    "analyze_title",
    "build_structured_data",
    "categories_by_keywords",
    "compute_metrics",
    "count_syllables",
    "extract_keywords",
    "flesch_reading_ease",
    "generate_meta_description",
    "generate_meta_tags",
    "generate_structured_data",
    "get_seo_improvement_suggestions",
    "suggest_categories",
    "ArticleCategory",
    "ArticlePage",
    "CategorySuggestion",
    "ContentMetrics",
    "ScoringProfile",
    "SeoAnalysis",
    "TitleAnalysis",
]
