"""Whole-article factual review.

One research call reads the whole article and answers with a precision score,
the problematic passages, recommended sources, improvements and a summary.
The reply is read as JSON when it carries one. Otherwise the numbered
sections of the text are parsed. A failed call never raises; it yields a
review with ``error`` set and zero precision.
"""

import logging
import math
import re
from typing import Any

import logfire

from pauta.agents.fact_checker.models import ArticleReview, ReviewOptions, ReviewProblem
from pauta.agents.fact_checker.prompts import (
    FOCUS_AREA_INSTRUCTIONS,
    REVIEW_FAILED_CORRECTION,
    REVIEW_FAILED_IMPROVEMENT,
    REVIEW_FAILED_ISSUE,
    REVIEW_FAILED_SEVERITY,
    REVIEW_FAILED_STATEMENT,
    REVIEW_FAILED_SUMMARY,
    REVIEW_JSON_FORMAT,
    REVIEW_PERSONA,
    REVIEW_QUERY,
    REVIEW_TEXT_FORMAT,
    THOROUGHNESS_INSTRUCTIONS,
)
from pauta.agents.researcher.prompts import build_query
from pauta.agents.shared import extract_json_object
from pauta.parsing import normalize_key
from pauta.services.providers import ResearchProvider

logger = logging.getLogger(__name__)

DEFAULT_PRECISION = 0.5

# ============================================================================
# Query
# ============================================================================


def build_review_query(content: str, options: ReviewOptions) -> str:
    focus = "\n".join(FOCUS_AREA_INSTRUCTIONS[area.value] for area in options.focus_areas)
    query = REVIEW_QUERY.format(
        thoroughness=THOROUGHNESS_INSTRUCTIONS[options.thoroughness.value],
        focus_areas=focus,
        content=content[: options.max_content_chars],
        output_format=REVIEW_JSON_FORMAT if options.json_output else REVIEW_TEXT_FORMAT,
    )
    return build_query(REVIEW_PERSONA, query)


def failed_review(error: str, raw_response: str = "") -> ArticleReview:
    return ArticleReview(
        precision=0.0,
        problems=[
            ReviewProblem(
                statement=REVIEW_FAILED_STATEMENT,
                issue=REVIEW_FAILED_ISSUE,
                correction=REVIEW_FAILED_CORRECTION,
                severity=REVIEW_FAILED_SEVERITY,
            )
        ],
        improvements=[REVIEW_FAILED_IMPROVEMENT],
        summary=REVIEW_FAILED_SUMMARY,
        raw_response=raw_response,
        error=error,
    )


# ============================================================================
# Precision
# ============================================================================

_NUMBER = re.compile(r"(\d+(?:[.,]\d+)?)")
_PRECISION_LABELED = re.compile(
    r"(?:pontua[çc][ãa]o|precis[ãa]o|precision)[^:\n]*:[ \t]*(\d+(?:[.,]\d+)?)[ \t]*(%)?",
    re.IGNORECASE,
)
_PRECISION_PERCENT = re.compile(
    r"(\d+(?:[.,]\d+)?)\s*%\s*(?:de\s+)?precis[ãa]o", re.IGNORECASE
)


def _to_float(number: str) -> float:
    return float(number.replace(",", "."))


def _scale_precision(value: float) -> float | None:
    """A 0-1 score as is, a 0-100 score as a fraction; anything else is unusable."""
    if not math.isfinite(value) or value < 0:
        return None
    if value <= 1:
        return value
    if value <= 100:
        return value / 100
    return None


def _precision_value(value: Any) -> float | None:
    if isinstance(value, dict):
        for inner in value.values():
            parsed = _precision_value(inner)
            if parsed is not None:
                return parsed
        return None
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, str):
        match = _NUMBER.search(value)
        if not match:
            return None
        number = _to_float(match.group(1))
        if "%" in value[match.end():match.end() + 2]:
            number /= 100
        return _scale_precision(number)
    if isinstance(value, (int, float)):
        return _scale_precision(float(value))
    return None


def extract_precision_score(text: str) -> float:
    """Precision score stated in a text review, ``DEFAULT_PRECISION`` when absent.

    Accepts "Pontuação: 0.8", "Precisão: 85%", "85% de precisão" and a bare
    number under the precision heading.
    """
    for match in _PRECISION_LABELED.finditer(text or ""):
        value = _to_float(match.group(1))
        if match.group(2):
            value /= 100
        if 0 <= value <= 1:
            return value

    match = _PRECISION_PERCENT.search(text or "")
    if match:
        value = _to_float(match.group(1)) / 100
        if 0 <= value <= 1:
            return value

    body = split_review_sections(text).get("precision", "")
    for match in _NUMBER.finditer(body):
        value = _to_float(match.group(1))
        if "%" in body[match.end():match.end() + 2]:
            value /= 100
        if 0 <= value <= 1:
            return value

    return DEFAULT_PRECISION


# ============================================================================
# Text sections
# ============================================================================

_SECTION_NAMES = {
    "precision": r"PONTUA[ÇC][ÃA]O\s+DE\s+PRECIS[ÃA]O|PRECISION\s+SCORE",
    "problems": r"PROBLEMAS\s+IDENTIFICADOS|PROBLEMAS|PROBLEMS",
    "sources": r"FONTES\s+RECOMENDADAS|RECOMMENDED\s+SOURCES",
    "improvements": r"RECOMENDA[ÇC][ÕO]ES\s+DE\s+MELHORIA|RECOMENDA[ÇC][ÕO]ES|IMPROVEMENTS",
    "summary": r"RESUMO|SUMMARY",
}

# Heading on its own line, optionally "## 2." numbered, bold, or followed by ": text"
_SECTION_HEADINGS = {
    name: re.compile(
        rf"^[ \t]*(?:#+[ \t]*)?(?:\d+[.)][ \t]*)?(?:\*\*)?(?:{names})[ \t]*(?:\*\*)?"
        rf"[ \t]*(?::[ \t]*(?:\*\*)?[ \t]*(.*?))?[ \t]*$",
        re.IGNORECASE | re.MULTILINE,
    )
    for name, names in _SECTION_NAMES.items()
}

_ITEM = re.compile(r"^(?:[-*•]|\d+[.)])\s+(.*)$")
_NONE_FOUND = re.compile(r"^(?:nenhum|n[ãa]o\s+(?:foram|h[áa]))", re.IGNORECASE)


def split_review_sections(text: str) -> dict[str, str]:
    """Map section name to its body; the first heading of each name wins."""
    headings = []
    for name, pattern in _SECTION_HEADINGS.items():
        match = pattern.search(text or "")
        if match:
            headings.append((match.start(), match.end(), name, match.group(1) or ""))
    headings.sort()

    sections = {}
    for i, (_, end, name, inline) in enumerate(headings):
        stop = headings[i + 1][0] if i + 1 < len(headings) else len(text)
        sections[name] = f"{inline}\n{text[end:stop]}".strip()
    return sections


def _items(body: str, continuation: re.Pattern | None = None) -> list[str]:
    """Top-level list items; indented lines and plain lines continue the current item."""
    items: list[str] = []
    for line in body.splitlines():
        if not line.strip():
            continue
        match = _ITEM.match(line)
        if match and not (items and continuation and continuation.match(match.group(1))):
            items.append(match.group(1).strip())
        elif items:
            items[-1] += "\n" + (match.group(1) if match else line).strip()
    return [item for item in items if item and not _NONE_FOUND.match(item)]


def _collapse(text: str) -> str:
    return " ".join(text.split())


def extract_listed_section(text: str, section: str) -> list[str]:
    """Items of a list section ("sources" or "improvements") of a text review."""
    body = split_review_sections(text).get(section, "")
    items = _items(body)
    if not items:
        items = [line.strip() for line in body.splitlines() if line.strip()]
    return [_collapse(item) for item in items if not _NONE_FOUND.match(item)]


def extract_review_summary(text: str) -> str:
    body = split_review_sections(text).get("summary", "")
    return _collapse(re.sub(r"^[ \t]*[-*•][ \t]+", "", body, flags=re.MULTILINE))


# ============================================================================
# Problems
# ============================================================================

_STATEMENT_LABELS = r"trecho|afirma[çc][ãa]o|statement|claim"
_ISSUE_LABELS = r"problema|natureza|issue"
_CORRECTION_LABELS = r"corre[çc][ãa]o|informa[çc][ãa]o\s+correta|correction"
_SEVERITY_LABELS = r"gravidade|severidade|n[íi]vel\s+de\s+gravidade|severity"


def _label_pattern(labels: str) -> re.Pattern:
    return re.compile(
        rf"^[ \t]*(?:[-*•][ \t]*)?(?:\*\*)?(?:o\s+|a\s+)?(?:{labels})\b[^:\n]*:[ \t]*(?:\*\*)?[ \t]*(.+)$",
        re.IGNORECASE | re.MULTILINE,
    )


_STATEMENT_FIELD = _label_pattern(_STATEMENT_LABELS)
_ISSUE_FIELD = _label_pattern(_ISSUE_LABELS)
_CORRECTION_FIELD = _label_pattern(_CORRECTION_LABELS)
_SEVERITY_FIELD = _label_pattern(_SEVERITY_LABELS)
# A flat bullet that names one of these fields belongs to the problem above it
_PROBLEM_CONTINUATION = re.compile(
    rf"(?:\*\*)?(?:a\s+)?(?:{_ISSUE_LABELS}|{_CORRECTION_LABELS}|{_SEVERITY_LABELS})\b[^:\n]*:",
    re.IGNORECASE,
)


def _field(item: str, pattern: re.Pattern) -> str:
    match = pattern.search(item)
    return match.group(1).strip().strip("*").strip() if match else ""


def _problem_from_item(item: str) -> ReviewProblem | None:
    statement = _field(item, _STATEMENT_FIELD)
    if not statement:
        statement = item.splitlines()[0].strip().rstrip(":").strip("*").strip()
    if not statement:
        return None
    problem = ReviewProblem(statement=statement)
    for attribute, pattern in (
        ("issue", _ISSUE_FIELD),
        ("correction", _CORRECTION_FIELD),
        ("severity", _SEVERITY_FIELD),
    ):
        value = _field(item, pattern)
        if value:
            setattr(problem, attribute, value)
    return problem


def extract_problems(text: str) -> list[ReviewProblem]:
    """Problems listed under the problems heading of a text review.

    Each top-level item is one problem; its labeled lines ("Trecho:",
    "Problema:", "Correção:", "Gravidade:") fill the fields. An item without a
    statement label uses its first line as the statement.
    """
    body = split_review_sections(text).get("problems", "")
    problems = [_problem_from_item(item) for item in _items(body, _PROBLEM_CONTINUATION)]
    return [p for p in problems if p is not None]


# ============================================================================
# JSON replies
# ============================================================================

_PAYLOAD_KEYS = {
    "precision": ("PRECISAO", "PONTUACAO_DE_PRECISAO", "PONTUACAO", "PRECISION", "PRECISION_SCORE"),
    "problems": ("PROBLEMAS", "PROBLEMAS_IDENTIFICADOS", "PROBLEMS"),
    "sources": (
        "FONTES_RECOMENDADAS",
        "FONTES",
        "RECOMMENDEDSOURCES",
        "RECOMMENDED_SOURCES",
        "SOURCES",
    ),
    "improvements": (
        "RECOMENDACOES",
        "RECOMENDACOES_DE_MELHORIA",
        "IMPROVEMENTS",
        "RECOMMENDATIONS",
    ),
    "summary": ("RESUMO", "SUMMARY"),
}

_PROBLEM_KEYS = {
    "statement": ("TRECHO", "AFIRMACAO", "AFIRMACAO_PROBLEMATICA", "STATEMENT", "CLAIM"),
    "issue": ("PROBLEMA", "NATUREZA", "NATUREZA_DO_PROBLEMA", "ISSUE"),
    "correction": ("CORRECAO", "INFORMACAO_CORRETA", "CORRECTION"),
    "severity": ("GRAVIDADE", "SEVERIDADE", "NIVEL_DE_GRAVIDADE", "SEVERITY"),
}


def _field_key(key: str) -> str:
    """Normalized payload key; "1. Pontuação de precisão" becomes PONTUACAO_DE_PRECISAO."""
    return normalize_key(re.sub(r"^\s*\d+[.)]?\s*", "", key))


def _normalized(payload: dict[str, Any]) -> dict[str, Any]:
    return {_field_key(k): v for k, v in payload.items() if isinstance(k, str)}


def _pick(fields: dict[str, Any], aliases: tuple[str, ...]) -> Any:
    for alias in aliases:
        if fields.get(alias) not in (None, "", [], {}):
            return fields[alias]
    return None


def _as_text(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, dict):
        return ", ".join(t for t in (_as_text(v) for v in value.values()) if t)
    if isinstance(value, list):
        return ", ".join(t for t in (_as_text(v) for v in value) if t)
    return _collapse(str(value))


def _as_text_list(value: Any) -> list[str]:
    if value is None:
        return []
    if not isinstance(value, list):
        value = [value]
    return [t for t in (_as_text(v) for v in value) if t]


def _problems_from_payload(value: Any) -> list[ReviewProblem]:
    if value is None:
        return []
    if not isinstance(value, list):
        value = [value]

    problems = []
    for entry in value:
        if isinstance(entry, dict):
            fields = _normalized(entry)
            statement = _as_text(_pick(fields, _PROBLEM_KEYS["statement"]))
            if not statement:
                continue
            problem = ReviewProblem(statement=statement)
            for attribute in ("issue", "correction", "severity"):
                text = _as_text(_pick(fields, _PROBLEM_KEYS[attribute]))
                if text:
                    setattr(problem, attribute, text)
            problems.append(problem)
        else:
            statement = _as_text(entry)
            if statement:
                problems.append(ReviewProblem(statement=statement))
    return problems


def review_from_payload(payload: dict[str, Any], raw_response: str = "") -> ArticleReview | None:
    """Review from a JSON reply; None when the object names none of the sections."""
    fields = _normalized(payload)
    found = {name: _pick(fields, aliases) for name, aliases in _PAYLOAD_KEYS.items()}
    if all(value is None for value in found.values()):
        return None

    precision = _precision_value(found["precision"])
    return ArticleReview(
        precision=DEFAULT_PRECISION if precision is None else precision,
        problems=_problems_from_payload(found["problems"]),
        recommended_sources=_as_text_list(found["sources"]),
        improvements=_as_text_list(found["improvements"]),
        summary=_as_text(found["summary"]),
        raw_response=raw_response,
    )


def review_from_text(text: str) -> ArticleReview:
    return ArticleReview(
        precision=extract_precision_score(text),
        problems=extract_problems(text),
        recommended_sources=extract_listed_section(text, "sources"),
        improvements=extract_listed_section(text, "improvements"),
        summary=extract_review_summary(text),
        raw_response=text,
    )


def parse_review(text: str) -> ArticleReview:
    """JSON reply first, then the text sections."""
    payload = extract_json_object(text)
    if payload is not None:
        review = review_from_payload(payload, text)
        if review is not None:
            return review
        logger.debug("Review JSON named no known sections, reading it as text")
    return review_from_text(text)


async def review_article(
    research: ResearchProvider,
    content: str,
    options: ReviewOptions | None = None,
) -> ArticleReview:
    """Review a whole article in one research call.

    Never raises: a provider failure or an empty reply returns
    ``failed_review`` with the error recorded.
    """
    options = options or ReviewOptions()

    with logfire.span(
        "fact_check.review",
        thoroughness=options.thoroughness.value,
        focus_areas=[area.value for area in options.focus_areas],
    ):
        try:
            result = await research.search(build_review_query(content, options))
        except Exception as e:
            logger.error(f"Article review failed: {e}")
            return failed_review(str(e))

        if not result.text.strip():
            logger.warning("Article review returned an empty reply")
            return failed_review("empty review reply")

        review = parse_review(result.text)
        logger.info(
            f"Article review: precision {review.precision:.2f}, {len(review.problems)} problems"
        )
        return review
