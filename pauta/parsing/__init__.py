"""Delimited-block parsing for research provider responses."""

from .blocks import (
    normalize_key,
    parse_block,
    parse_faqs,
    parse_sections,
    parse_sources,
    tokenize_blocks,
)
from .models import FAQ, BlockResult, ParsedBlock, ParseFailure, Source

__all__ = [
    "normalize_key",
    "parse_block",
    "parse_faqs",
    "parse_sections",
    "parse_sources",
    "tokenize_blocks",
    "FAQ",
    "BlockResult",
    "ParsedBlock",
    "ParseFailure",
    "Source",
]
