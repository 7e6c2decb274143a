"""HTML head markup for a published article: meta tags and schema.org data."""

import html
import json
import re
from typing import Any

from pauta.config import SiteConfig
from pauta.seo.metrics import strip_tags
from pauta.seo.models import ArticlePage


def article_url(page: ArticlePage, site: SiteConfig) -> str:
    return f"{site.base_url.rstrip('/')}{site.blog_path}/{page.slug}"


def absolute_url(path: str, site: SiteConfig) -> str:
    if not path or path.startswith(("http://", "https://")):
        return path
    return f"{site.base_url.rstrip('/')}{path}"


def _meta(attribute: str, key: str, value: str) -> str:
    return f'<meta {attribute}="{key}" content="{html.escape(value, quote=True)}">'


def generate_meta_tags(page: ArticlePage, site: SiteConfig | None = None) -> str:
    """Description, keywords, Open Graph, Twitter card and article tags, one per line.

    Returns an empty string for a page without a title.
    """
    if not page.title:
        return ""

    site = site or SiteConfig()
    image = absolute_url(page.image, site)
    modified = page.modified or page.published

    tags = [
        _meta("name", "description", page.description),
        _meta("name", "keywords", ", ".join(page.keywords)),
        _meta("property", "og:title", page.title),
        _meta("property", "og:description", page.description),
        _meta("property", "og:url", article_url(page, site)),
        _meta("property", "og:type", "article"),
        _meta("property", "og:site_name", site.name),
        _meta("property", "og:image", image) if image else "",
        _meta("name", "twitter:card", "summary_large_image"),
        _meta("name", "twitter:title", page.title),
        _meta("name", "twitter:description", page.description),
        _meta("name", "twitter:image", image) if image else "",
        _meta("property", "article:published_time", page.published.isoformat()),
        _meta("property", "article:modified_time", modified.isoformat()),
        _meta("property", "article:section", page.category) if page.category else "",
        *(_meta("property", "article:tag", keyword) for keyword in page.keywords),
    ]
    return "\n".join(tag for tag in tags if tag)


def build_structured_data(page: ArticlePage, site: SiteConfig | None = None) -> dict[str, Any]:
    """schema.org ``BlogPosting`` object; optional properties are left out when empty."""
    site = site or SiteConfig()
    url = article_url(page, site)

    data: dict[str, Any] = {
        "@context": "https://schema.org",
        "@type": "BlogPosting",
        "mainEntityOfPage": {"@type": "WebPage", "@id": url},
        "headline": page.title,
        "description": page.description,
    }
    if page.image:
        data["image"] = absolute_url(page.image, site)
    if page.author:
        author = {"@type": "Person", "name": page.author}
        if page.author_url:
            author["url"] = page.author_url
        data["author"] = author

    data["publisher"] = {
        "@type": "Organization",
        "name": site.name,
        "logo": {"@type": "ImageObject", "url": absolute_url(site.logo_path, site)},
    }
    data["datePublished"] = page.published.isoformat()
    data["dateModified"] = (page.modified or page.published).isoformat()

    if page.content:
        data["articleBody"] = re.sub(r"\s+", " ", strip_tags(page.content)).strip()
    if page.category:
        data["articleSection"] = page.category
    if page.word_count:
        data["wordCount"] = page.word_count
    return data


def generate_structured_data(page: ArticlePage, site: SiteConfig | None = None) -> str:
    """JSON-LD ``<script>`` element for the page, or an empty string without a title."""
    if not page.title:
        return ""
    payload = json.dumps(build_structured_data(page, site), ensure_ascii=False)
    # "</" would close the script element early
    payload = payload.replace("</", "<\\/")
    return f'<script type="application/ld+json">{payload}</script>'
