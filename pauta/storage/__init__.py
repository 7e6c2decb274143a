"""Article persistence."""

from .files import ArticleStore, MarkdownArticleStore, build_frontmatter

__all__ = ["ArticleStore", "MarkdownArticleStore", "build_frontmatter"]
