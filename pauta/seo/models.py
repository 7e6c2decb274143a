"""Pydantic models for SEO and readability analysis."""

from datetime import datetime, timezone
from enum import StrEnum

from pydantic import BaseModel, Field


class ScoringProfile(StrEnum):
    """Weighting schemes over the shared content metrics.

    WEIGHTED: keywords 30%, structure 30%, readability 20%, length 20%.
    BASIC: title 15%, description 15%, keyword in title 10%, keyword in
    description 10%, content 20%, headings 10%, links 10%, images 10%.
    """

    WEIGHTED = "weighted"
    BASIC = "basic"


class KeywordMetrics(BaseModel):
    keyword_density: float = 0.0  # percent of tokens
    keyword_count: int = 0
    primary_keyword_in_first_paragraph: bool = False
    keyword_in_headings: int = 0


class StructureMetrics(BaseModel):
    h1_count: int = 0
    h2_count: int = 0
    h3_count: int = 0
    h4_count: int = 0
    h5_count: int = 0
    h6_count: int = 0
    heading_count: int = 0
    has_h2: bool = False
    heading_ratio: float = 0.0  # headings per word
    paragraph_count: int = 0
    avg_paragraph_length: float = 0.0  # characters
    list_count: int = 0
    image_count: int = 0
    images_with_alt: int = 0
    has_images: bool = False
    has_schema: bool = False


class LinkMetrics(BaseModel):
    internal: int = 0
    external: int = 0


class ReadabilityMetrics(BaseModel):
    sentence_count: int = 0
    word_count: int = 0
    syllable_count: int = 0
    avg_sentence_length: float = 0.0
    syllables_per_word: float = 0.0
    complex_word_count: int = 0
    complex_word_percentage: float = 0.0  # fraction, 0..1
    passive_voice_count: int = 0
    flesch_score: float = Field(default=0.0, ge=0, le=100)


class KeywordCount(BaseModel):
    word: str
    count: int


class KeywordExtraction(BaseModel):
    """Most frequent words and repeated phrases of a text."""

    keywords: list[KeywordCount] = Field(default_factory=list)
    top_keywords: list[str] = Field(default_factory=list)


class TitleAnalysis(BaseModel):
    score: int
    message: str
    suggestions: list[str]
    length: int = 0
    word_count: int = 0


class ContentMetrics(BaseModel):
    """Everything both scoring profiles read from a piece of content."""

    word_count: int
    keywords: KeywordMetrics
    structure: StructureMetrics
    readability: ReadabilityMetrics
    links: LinkMetrics
    top_keywords: list[str] = Field(default_factory=list)


class SeoAnalysis(BaseModel):
    """Composite SEO score with its explanation."""

    score: int = Field(ge=0, le=100)
    profile: ScoringProfile
    sub_scores: dict[str, float] = Field(default_factory=dict)
    strengths: list[str] = Field(default_factory=list)
    weaknesses: list[str] = Field(default_factory=list)
    suggestions: list[str] = Field(default_factory=list)
    metrics: ContentMetrics | None = None


class ArticleCategory(BaseModel):
    id: str
    name: str
    description: str
    slug: str
    keywords: list[str] = Field(default_factory=list)


class CategorySuggestion(BaseModel):
    category: ArticleCategory
    relevance_score: float


class ArticlePage(BaseModel):
    """Published-article facts that meta tags and structured data describe."""

    title: str
    description: str = ""
    slug: str = ""
    author: str = ""
    author_url: str = ""
    category: str = ""
    image: str = ""
    published: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    modified: datetime | None = None
    keywords: list[str] = Field(default_factory=list)
    content: str = ""
    word_count: int = 0
