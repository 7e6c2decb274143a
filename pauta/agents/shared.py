"""Helpers shared by the generation, fact-check and enrichment agents."""

import json
import logging
import re
from typing import Any

from pauta.services.providers import ChatMessage

logger = logging.getLogger(__name__)

_FENCED_JSON = re.compile(r"```(?:json)?\s*\n(.*?)\n\s*```", re.DOTALL)
_FIRST_OBJECT = re.compile(r"(\{.*\})", re.DOTALL)
_MD_TITLE = re.compile(r"^\s*#\s+(.+?)\s*$", re.MULTILINE)
_HTML_TITLE = re.compile(r"<h1[^>]*>(.+?)</h1>", re.IGNORECASE | re.DOTALL)
_TAG = re.compile(r"<[^>]*>")


def messages(system: str, user: str) -> list[ChatMessage]:
    return [
        ChatMessage(role="system", content=system),
        ChatMessage(role="user", content=user),
    ]


def extract_json_object(text: str) -> dict[str, Any] | None:
    """Best-effort extraction of the JSON object embedded in a model reply.

    Tries a fenced ```json block first, then the span from the first ``{``
    to the last ``}``. Returns None when neither parses to an object.
    """
    if not text:
        return None

    for pattern in (_FENCED_JSON, _FIRST_OBJECT):
        match = pattern.search(text)
        if not match:
            continue
        try:
            value = json.loads(match.group(1))
        except json.JSONDecodeError as e:
            logger.debug(f"JSON candidate did not parse: {e}")
            continue
        if isinstance(value, dict):
            return value
    return None


def extract_title(article: str) -> str | None:
    """First markdown ``#`` heading or ``<h1>`` of an article, whichever comes first."""
    candidates = []
    for pattern in (_MD_TITLE, _HTML_TITLE):
        match = pattern.search(article or "")
        if match:
            title = _TAG.sub("", match.group(1)).strip()
            if title:
                candidates.append((match.start(), title))
    return min(candidates)[1] if candidates else None


def count_words(text: str) -> int:
    return len((text or "").split())
