"""Markdown persistence for generated articles.

Articles are written to ``{articles_dir}/{YYYY-MM-DD}/{slug}.md`` with a
YAML front matter block the blog's static-site build reads.
"""

import logging
from datetime import datetime
from pathlib import Path
from typing import Any, Protocol

import yaml
from slugify import slugify

from pauta.agents.writer.models import GenerationResult

logger = logging.getLogger(__name__)


class ArticleStore(Protocol):
    def save_article(self, article: GenerationResult) -> Path: ...


# ============================================================================
# Helper Functions
# ============================================================================


def _ensure_date_dir(base_dir: Path, date: datetime) -> Path:
    date_dir = base_dir / date.strftime("%Y-%m-%d")
    date_dir.mkdir(parents=True, exist_ok=True)
    return date_dir


def _format_markdown_with_frontmatter(frontmatter_data: dict, body: str) -> str:
    frontmatter = yaml.dump(
        frontmatter_data,
        default_flow_style=False,
        allow_unicode=True,
        sort_keys=False,
    )
    return f"---\n{frontmatter}---\n\n{body}"


def _unique_path(directory: Path, slug: str) -> Path:
    path = directory / f"{slug}.md"
    suffix = 2
    while path.exists():
        path = directory / f"{slug}-{suffix}.md"
        suffix += 1
    return path


def build_frontmatter(article: GenerationResult, slug: str) -> dict[str, Any]:
    """Front matter fields for one article; optional sections only when present."""
    metadata = article.metadata
    frontmatter: dict[str, Any] = {
        "title": article.title,
        "slug": slug,
        "date": article.generated_at.isoformat(),
        "topic": article.topic,
        "word_count": article.word_count,
    }
    if metadata is not None:
        frontmatter["description"] = metadata.description
        frontmatter["keywords"] = metadata.keywords
        frontmatter["categories"] = metadata.suggested_categories
        frontmatter["read_time_minutes"] = metadata.estimated_read_time
    if article.seo_analysis is not None:
        frontmatter["seo_score"] = article.seo_analysis.score
    if article.fact_check is not None:
        frontmatter["fact_check"] = {
            "verified": article.fact_check.verified,
            "claims_checked": article.fact_check.claims_checked,
        }
    if article.research.sources:
        frontmatter["sources"] = [
            {"title": s.title, "url": s.url} for s in article.research.sources
        ]
    return frontmatter


# ============================================================================
# Public API
# ============================================================================


class MarkdownArticleStore:
    """ArticleStore writing one markdown file per article."""

    def __init__(self, articles_dir: Path, slug_max_length: int = 60):
        self.articles_dir = Path(articles_dir)
        self.slug_max_length = slug_max_length

    def save_article(self, article: GenerationResult) -> Path:
        """Write an article and return its path.

        Raises:
            OSError: If the file cannot be written
        """
        slug = slugify(article.slug or article.title, max_length=self.slug_max_length) or "artigo"
        date_dir = _ensure_date_dir(self.articles_dir, article.generated_at)
        file_path = _unique_path(date_dir, slug)

        content = _format_markdown_with_frontmatter(
            build_frontmatter(article, slug), article.content.strip() + "\n"
        )
        file_path.write_text(content, encoding="utf-8")

        logger.info(f"Saved article: {file_path}")
        return file_path
