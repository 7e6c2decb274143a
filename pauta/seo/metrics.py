"""Content metrics shared by every scoring profile.

All functions are pure: the same input always yields the same output.
Content may be HTML, markdown, or a mix of both.
"""

import re
from collections import Counter

from pauta.seo.models import (
    ContentMetrics,
    KeywordCount,
    KeywordExtraction,
    KeywordMetrics,
    LinkMetrics,
    StructureMetrics,
    TitleAnalysis,
)
from pauta.seo.readability import analyze_readability

COMMON_STOPWORDS = frozenset(
    [
        "a", "o", "e", "é", "de", "da", "do", "que", "em", "um", "uma",
        "para", "com", "não", "os", "as", "se", "na", "no", "pelo", "pela",
        "por", "como", "mas", "ou", "ao", "dos", "das", "este", "esta", "isto",
    ]
)

_TAG = re.compile(r"<[^>]*>")
_NORMALIZE_PUNCTUATION = re.compile(r"[,.!?;:'\"()\[\]{}]")
_KEYWORD_PUNCTUATION = re.compile(r"[.,/#!$%^&*;:{}=\-_`~()]")
_WORD_CHAR = re.compile(r"\w")

_HEADING_LINE = re.compile(r"^\s*#{1,6}\s+.+$|<h[1-6][^>]*>.+?</h[1-6]>", re.MULTILINE | re.IGNORECASE)
_SCHEMA = re.compile(
    r'<script type="application/ld\+json">|<[^>]+ itemscope|<[^>]+ itemprop',
    re.IGNORECASE,
)
_HTML_PARAGRAPH = re.compile(r"<p[^>]*>(.*?)</p>", re.DOTALL | re.IGNORECASE)
_BLOCK_START = re.compile(r"^\s*(?:#|<|[-*+>|]|\d+[.)]\s|```|!\[)")
_LIST_ITEM = re.compile(r"^\s*(?:[-*+]|\d+[.)])\s+")
_HTML_LIST = re.compile(r"<[ou]l[\s>]", re.IGNORECASE)
_IMAGE = re.compile(r"<img\b|!\[", re.IGNORECASE)
_IMAGE_WITH_ALT = re.compile(r'<img\b[^>]*\balt="[^"]+"[^>]*>|!\[[^\]]+\]\(', re.IGNORECASE)
_HTML_HREF = re.compile(r'href="([^"]*)"', re.IGNORECASE)
_MD_LINK_TARGET = re.compile(r"(?<!!)\[[^\]]*\]\(([^)\s]+)[^)]*\)")


def strip_tags(content: str) -> str:
    return _TAG.sub(" ", content or "")


def normalize_text(content: str) -> str:
    """Lowercase with sentence punctuation replaced by spaces; line breaks kept."""
    return _NORMALIZE_PUNCTUATION.sub(" ", content or "").lower()


def tokenize(content: str) -> list[str]:
    """Lowercased word tokens of the visible text."""
    return [w for w in normalize_text(strip_tags(content)).split() if _WORD_CHAR.search(w)]


# ============================================================================
# Keywords
# ============================================================================


def _matches_keyword(token: str, keywords: list[str]) -> bool:
    # Containment in either direction: "pintura" matches "pinturas" and "pint"
    return any(kw in token or token in kw for kw in keywords)


def analyze_keywords(content: str, target_keywords: list[str] | None) -> KeywordMetrics:
    """Density and placement of the target keywords.

    The first keyword is the primary one.
    """
    keywords = [kw.strip().lower() for kw in target_keywords or [] if kw and kw.strip()]
    if not keywords:
        return KeywordMetrics()

    tokens = tokenize(content)
    keyword_count = sum(1 for token in tokens if _matches_keyword(token, keywords))
    density = keyword_count / len(tokens) * 100 if tokens else 0.0

    normalized = normalize_text(content)
    body_blocks = [
        block
        for block in re.split(r"\n\s*\n", normalized.strip())
        if not re.match(r"^\s*(?:#|<h[1-6])", block)
    ]
    first_paragraph = strip_tags(body_blocks[0]) if body_blocks else ""
    primary_in_first = keywords[0] in first_paragraph

    headings = _HEADING_LINE.findall(normalized)
    in_headings = sum(
        1 for heading in headings if any(kw in strip_tags(heading) for kw in keywords)
    )

    return KeywordMetrics(
        keyword_density=density,
        keyword_count=keyword_count,
        primary_keyword_in_first_paragraph=primary_in_first,
        keyword_in_headings=in_headings,
    )


def extract_keywords(content: str) -> KeywordExtraction:
    """Most frequent content words, then repeated two- and three-word phrases."""
    if not content:
        return KeywordExtraction()

    words = [
        _KEYWORD_PUNCTUATION.sub("", word)
        for word in strip_tags(content).lower().split()
    ]
    words = [w for w in words if len(w) > 3 and w not in COMMON_STOPWORDS]

    frequency = Counter(words)
    bigrams = Counter(f"{a} {b}" for a, b in zip(words, words[1:]))
    trigrams = Counter(f"{a} {b} {c}" for a, b, c in zip(words, words[1:], words[2:]))

    # Counter.most_common keeps first-seen order among equal counts
    ranked = [KeywordCount(word=w, count=c) for w, c in frequency.most_common(15)]
    ranked += [KeywordCount(word=p, count=c) for p, c in bigrams.most_common() if c > 1][:10]
    ranked += [KeywordCount(word=p, count=c) for p, c in trigrams.most_common() if c > 1][:5]

    return KeywordExtraction(
        keywords=ranked,
        top_keywords=[k.word for k in ranked[:10]],
    )


# ============================================================================
# Structure
# ============================================================================


def _heading_count(content: str, level: int) -> int:
    tags = len(re.findall(rf"<h{level}[\s>]", content, re.IGNORECASE))
    lines = len(re.findall(rf"^\s*#{{{level}}}\s", content, re.MULTILINE))
    return tags + lines


def _paragraphs(content: str) -> list[str]:
    paragraphs = [strip_tags(p).strip() for p in _HTML_PARAGRAPH.findall(content)]
    without_html = _HTML_PARAGRAPH.sub("\n\n", content)
    for block in re.split(r"\n\s*\n", without_html):
        if block.strip() and not _BLOCK_START.match(block):
            paragraphs.append(re.sub(r"\s+", " ", block).strip())
    return [p for p in paragraphs if p]


def _markdown_list_count(content: str) -> int:
    count = 0
    previous_was_item = False
    for line in content.splitlines():
        is_item = bool(_LIST_ITEM.match(line))
        if is_item and not previous_was_item:
            count += 1
        if line.strip():
            previous_was_item = is_item
    return count


def analyze_structure(content: str, word_count: int) -> StructureMetrics:
    counts = [_heading_count(content, level) for level in range(1, 7)]
    heading_count = sum(counts)

    paragraphs = _paragraphs(content)
    avg_paragraph = sum(len(p) for p in paragraphs) / len(paragraphs) if paragraphs else 0.0

    image_count = len(_IMAGE.findall(content))

    return StructureMetrics(
        h1_count=counts[0],
        h2_count=counts[1],
        h3_count=counts[2],
        h4_count=counts[3],
        h5_count=counts[4],
        h6_count=counts[5],
        heading_count=heading_count,
        has_h2=counts[1] > 0,
        heading_ratio=heading_count / word_count if word_count else 0.0,
        paragraph_count=len(paragraphs),
        avg_paragraph_length=avg_paragraph,
        list_count=len(_HTML_LIST.findall(content)) + _markdown_list_count(content),
        image_count=image_count,
        images_with_alt=len(_IMAGE_WITH_ALT.findall(content)),
        has_images=image_count > 0,
        has_schema=bool(_SCHEMA.search(content)),
    )


def analyze_links(content: str) -> LinkMetrics:
    targets = _HTML_HREF.findall(content) + _MD_LINK_TARGET.findall(content)
    internal = external = 0
    for target in targets:
        lowered = target.lower()
        if lowered.startswith(("http://", "https://", "//")):
            external += 1
        elif lowered and not lowered.startswith(("mailto:", "tel:", "javascript:")):
            internal += 1
    return LinkMetrics(internal=internal, external=external)


# ============================================================================
# Titles and descriptions
# ============================================================================


def analyze_title(title: str | None) -> TitleAnalysis:
    """Score a title by length, word count and capitalization."""
    if not title:
        return TitleAnalysis(
            score=0,
            message="Título não fornecido",
            suggestions=["Adicione um título"],
        )

    length = len(title)
    words = title.split()
    score = 100
    suggestions = []

    if length < 30:
        score -= 30
        suggestions.append("O título é muito curto (ideal: 50-60 caracteres)")
    elif length > 70:
        score -= 20
        suggestions.append("O título é muito longo. Considere reduzi-lo para menos de 60 caracteres")
    elif length > 60:
        score -= 10
        suggestions.append("O título está um pouco longo. Considere reduzi-lo para menos de 60 caracteres")

    if len(words) < 4:
        score -= 20
        suggestions.append("Adicione mais palavras relevantes ao título (ideal: 6-10 palavras)")
    elif len(words) > 12:
        score -= 15
        suggestions.append("Reduza o número de palavras no título (ideal: 6-10 palavras)")

    if not all(w.lower() in COMMON_STOPWORDS or w[0] == w[0].upper() for w in words):
        score -= 10
        suggestions.append(
            "Use capitalização apropriada (primeira letra maiúscula para palavras principais)"
        )

    if score >= 90:
        message = "Excelente! O título está bem otimizado para SEO."
    elif score >= 70:
        message = "Bom título. Pequenos ajustes podem melhorar ainda mais."
    elif score >= 50:
        message = "O título precisa de melhorias para otimização de SEO."
    else:
        message = "O título necessita de revisão significativa para SEO."

    return TitleAnalysis(
        score=score,
        message=message,
        suggestions=suggestions,
        length=length,
        word_count=len(words),
    )


def generate_meta_description(content: str, title: str = "", keywords: list[str] | None = None) -> str:
    """Build a description of at most 160 characters from the opening paragraphs.

    If the primary keyword is missing from the opening text, a short
    call-to-action naming it is appended before truncation.
    """
    if not content:
        return ""

    blocks = [
        re.sub(r"\s+", " ", strip_tags(block)).strip()
        for block in re.split(r"\n\s*\n", content)
        if block.strip() and not re.match(r"^\s*(?:#|<h[1-6])", block, re.IGNORECASE)
    ]
    base = " ".join(blocks[:2])[:300] or title

    main_keyword = keywords[0].lower() if keywords else ""
    if main_keyword and main_keyword not in base.lower():
        base = f"{base[:250]} ... Saiba mais sobre {main_keyword} neste artigo."

    description = base[:157]
    if len(description) < len(base):
        description += "..."
    return description


# ============================================================================
# Aggregate
# ============================================================================


def compute_metrics(content: str, target_keywords: list[str] | None = None) -> ContentMetrics:
    """Compute every metric the scoring profiles need, once."""
    tokens = tokenize(content)
    return ContentMetrics(
        word_count=len(tokens),
        keywords=analyze_keywords(content, target_keywords),
        structure=analyze_structure(content, len(tokens)),
        readability=analyze_readability(content),
        links=analyze_links(content),
        top_keywords=extract_keywords(content).top_keywords,
    )
