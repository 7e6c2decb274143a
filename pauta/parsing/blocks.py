"""Parser for the delimited text protocol the research provider is asked to follow.

Responses carry records between explicit markers::

    [FONTE]
    Título: Guia ABNT de Pintura
    Autor: ABNT
    ...
    [/FONTE]

or sections introduced by ``## HEADING`` lines. Parsing happens in two
steps: :func:`tokenize_blocks` cuts raw block bodies out of the text and
:func:`parse_block` turns one body into a ``ParsedBlock`` or a
``ParseFailure``. The public ``parse_*`` functions run a fixed chain of
strategies (structured markers, then the legacy format, then nothing) and
always return a list; they never raise on malformed input.
"""

import logging
import re
import unicodedata
from collections.abc import Callable, Iterable

from pauta.parsing.models import FAQ, BlockResult, ParsedBlock, ParseFailure, Source

logger = logging.getLogger(__name__)

NOT_AVAILABLE_ONLINE = "Não disponível online"

# Label line: optional bullet, optional bold markers, label, colon, value
_FIELD_LINE = re.compile(r"^\s*(?:[-*•]\s*)?\*{0,2}([^:*\n]{1,40}?)\*{0,2}\s*:\s*\*{0,2}\s*(.*)$")
_SECTION_HEADING = re.compile(r"^\s*##\s+(.+?)\s*$")
_NUMBERED_ITEM = re.compile(r"(?:^|\s)\d{1,2}[.)]\s+")

# Normalized label -> record field
SOURCE_FIELDS = {
    "TITULO": "title",
    "AUTOR": "author",
    "DATA": "date",
    "URL": "url",
    "TIPO": "type",
    "RESUMO": "summary",
    "RELEVANCIA": "relevance",
}
LEGACY_SOURCE_FIELDS = {
    "NOME": "title",
    "DATA": "date",
    "INFO": "summary",
    "URL": "url",
}
FAQ_FIELDS = {
    "QUESTAO": "question",
    "PERGUNTA": "question",
    "RESPOSTA": "answer",
}


def normalize_key(text: str) -> str:
    """Uppercase, strip diacritics and join words with underscores.

    >>> normalize_key("Especificações Técnicas")
    'ESPECIFICACOES_TECNICAS'
    """
    decomposed = unicodedata.normalize("NFD", text.strip().upper())
    stripped = "".join(c for c in decomposed if not unicodedata.combining(c))
    return re.sub(r"\s+", "_", stripped)


# ============================================================================
# Tokenizer / block parser
# ============================================================================


def tokenize_blocks(text: str, open_marker: str, close_marker: str) -> list[str]:
    """Return the bodies found between each ``open_marker``/``close_marker`` pair."""
    if not text:
        return []
    pattern = re.compile(
        re.escape(open_marker) + r"(.*?)" + re.escape(close_marker), re.DOTALL
    )
    return [match.group(1).strip() for match in pattern.finditer(text)]


def split_on_marker(text: str, marker: str) -> list[str]:
    """Return the chunks that follow each occurrence of ``marker``.

    Text before the first marker is not a record and is dropped.
    """
    if not text or marker not in text:
        return []
    return [chunk.strip() for chunk in text.split(marker)[1:] if chunk.strip()]


def parse_block(body: str, fields: dict[str, str]) -> BlockResult:
    """Read ``Label: value`` lines from one block body.

    ``fields`` maps normalized labels to record field names. A line that does
    not start with a known label continues the previous field, so multi-line
    values (answers, summaries) are kept whole.
    """
    values: dict[str, list[str]] = {}
    current: str | None = None

    for line in body.splitlines():
        match = _FIELD_LINE.match(line)
        field = fields.get(normalize_key(match.group(1))) if match else None
        if field is not None:
            current = field
            # First occurrence wins; a repeated label continues that field
            values.setdefault(field, [])
            values[field].append(match.group(2).strip())
        elif current is not None and line.strip():
            values[current].append(line.strip())

    if not values:
        return ParseFailure(reason="no recognizable field", raw=body)

    return ParsedBlock(
        fields={name: "\n".join(parts).strip() for name, parts in values.items()},
        raw=body,
    )


def _parsed(results: Iterable[BlockResult], kind: str) -> list[ParsedBlock]:
    blocks = []
    for result in results:
        if isinstance(result, ParseFailure):
            logger.debug(f"Skipping {kind} block: {result.reason}")
            continue
        blocks.append(result)
    return blocks


def _run_chain(
    text: str,
    strategies: list[tuple[str, Callable[[str], list | None]]],
) -> list:
    """Try each strategy in order; the first one that applies wins.

    A strategy returns ``None`` when its markers are absent from the text, and
    a (possibly empty) list when it applies.
    """
    if not text or not text.strip():
        return []
    for name, strategy in strategies:
        try:
            records = strategy(text)
        except Exception as e:
            logger.warning(f"Parser strategy '{name}' failed: {e}")
            continue
        if records is not None:
            logger.debug(f"Parser strategy '{name}' produced {len(records)} records")
            return records
    return []


# ============================================================================
# Sources
# ============================================================================


def _clean_url(value: str | None) -> str | None:
    if not value:
        return None
    value = value.strip().strip("<>")
    if not value or value.rstrip(".").lower() == NOT_AVAILABLE_ONLINE.lower():
        return None
    return value


def _structured_sources(text: str) -> list[Source] | None:
    bodies = tokenize_blocks(text, "[FONTE]", "[/FONTE]")
    if not bodies:
        return None

    sources = []
    for block in _parsed((parse_block(b, SOURCE_FIELDS) for b in bodies), "source"):
        values = {k: v for k, v in block.fields.items() if v}
        url = _clean_url(values.pop("url", None))
        if "relevance" in values:
            values["relevance"] = values["relevance"].lower()
        sources.append(Source(url=url, **values))
    return sources


def _legacy_sources(text: str) -> list[Source] | None:
    chunks = split_on_marker(text, "[Fonte]")
    if not chunks:
        return None

    sources = []
    for block in _parsed((parse_block(c, LEGACY_SOURCE_FIELDS) for c in chunks), "legacy source"):
        values = block.fields
        sources.append(
            Source(
                title=values.get("title") or "Fonte não especificada",
                author="Não especificado",
                date=values.get("date") or "Data não especificada",
                url=_clean_url(values.get("url")),
                type="Não especificado",
                summary=values.get("summary") or "Informação não disponível",
            )
        )
    return sources


def parse_sources(text: str) -> list[Source]:
    """Parse ``[FONTE]`` blocks, falling back to the legacy ``[Fonte]`` format."""
    return _run_chain(
        text,
        [("structured", _structured_sources), ("legacy", _legacy_sources)],
    )


# ============================================================================
# FAQs
# ============================================================================


def _structured_faqs(text: str) -> list[FAQ] | None:
    bodies = tokenize_blocks(text, "[PERGUNTA]", "[/PERGUNTA]")
    if not bodies:
        return None

    return [
        FAQ(
            question=block.fields.get("question") or "Pergunta não especificada",
            answer=block.fields.get("answer") or "Resposta não disponível",
        )
        for block in _parsed((parse_block(b, FAQ_FIELDS) for b in bodies), "faq")
    ]


def _split_question(entry: str) -> FAQ | None:
    match = re.search(r"[?:]", entry)
    if match is None:
        return None
    question = entry[: match.start()].strip()
    answer = entry[match.end():].strip()
    if not question or not answer:
        return None
    return FAQ(question=f"{question}?", answer=answer)


def _plain_text_faqs(text: str) -> list[FAQ] | None:
    items = _NUMBERED_ITEM.split(text)
    if len(items) < 2:
        return None

    faqs = []
    for entry in items[1:]:
        faq = _split_question(entry.strip())
        if faq is not None:
            faqs.append(faq)
    return faqs


def parse_faqs(text: str) -> list[FAQ]:
    """Parse ``[PERGUNTA]`` blocks, falling back to a numbered free-text list."""
    return _run_chain(
        text,
        [("structured", _structured_faqs), ("numbered", _plain_text_faqs)],
    )


# ============================================================================
# Sections
# ============================================================================


def parse_sections(text: str) -> dict[str, str]:
    """Map each ``## Heading`` to the text below it, keyed by :func:`normalize_key`.

    Text before the first heading is discarded.
    """
    sections: dict[str, list[str]] = {}
    current: str | None = None

    for line in (text or "").splitlines():
        heading = _SECTION_HEADING.match(line)
        if heading:
            current = normalize_key(heading.group(1).strip(" *:#"))
            sections[current] = []
        elif current is not None:
            sections[current].append(line)

    return {key: "\n".join(lines).strip() for key, lines in sections.items()}
