"""Article enrichment: find gaps, research them, rewrite with the new material."""

import logging
import re

import logfire

from pauta.agents.shared import count_words, messages
from pauta.agents.writer.models import EnrichmentOptions, EnrichmentResult, WordCounts
from pauta.agents.writer.prompts import (
    ENRICH_ANALYSIS_PROMPT,
    ENRICH_ANALYSIS_SYSTEM_PROMPT,
    ENRICH_PROMPT,
    ENRICH_SUMMARY_PROMPT,
    ENRICH_SUMMARY_SYSTEM_PROMPT,
    ENRICH_SYSTEM_PROMPT,
    ENRICH_TOPICS_PROMPT,
    ENRICH_TOPICS_SYSTEM_PROMPT,
    FREE_STRUCTURE_NOTE,
    FREE_STRUCTURE_SHORT,
    PRESERVE_STRUCTURE_NOTE,
    PRESERVE_STRUCTURE_SHORT,
)
from pauta.config import ModelsConfig
from pauta.exceptions import GenerationError
from pauta.llm_providers import MaxTokens, RecencyFilter, Temperature
from pauta.progress import ProgressCallback, ProgressReporter
from pauta.services.providers import ResearchProvider, TextGenerationProvider

logger = logging.getLogger(__name__)

MAX_RESEARCH_QUERIES = 5
MIN_QUERY_LENGTH = 10
_TOPIC_LINE = re.compile(r"(?:Tópico|Consulta)[^:\n]*:\s*([^\n]+)")


def extract_research_queries(text: str) -> list[str]:
    """Values of "Tópico ...:" / "Consulta ...:" lines longer than 10 characters, at most 5."""
    queries = []
    for match in _TOPIC_LINE.finditer(text or ""):
        query = match.group(1).strip().strip("*\"'").strip()
        if len(query) > MIN_QUERY_LENGTH and query not in queries:
            queries.append(query)
    return queries[:MAX_RESEARCH_QUERIES]


async def enrich_article(
    text: TextGenerationProvider,
    research: ResearchProvider,
    content: str,
    options: EnrichmentOptions | None = None,
    on_progress: ProgressCallback | None = None,
    *,
    models: ModelsConfig | None = None,
    reporter: ProgressReporter | None = None,
) -> EnrichmentResult:
    """Improve an article with complementary research.

    Raises:
        GenerationError: If the gap analysis or the rewrite call fails, or
            the rewrite comes back empty
    """
    options = options or EnrichmentOptions()
    models = models or ModelsConfig()
    progress = reporter or ProgressReporter(on_progress)
    structure_note = PRESERVE_STRUCTURE_NOTE if options.preserve_structure else FREE_STRUCTURE_NOTE

    with logfire.span("enrichment.run", focus=options.focus):
        progress.report("analysis", "Analisando conteúdo para oportunidades de melhoria...", 10)
        try:
            analysis = await text.complete(
                models.analysis,
                messages(
                    ENRICH_ANALYSIS_SYSTEM_PROMPT,
                    ENRICH_ANALYSIS_PROMPT.format(
                        focus=options.focus, structure_note=structure_note, article=content
                    ),
                ),
                Temperature.FACTUAL,
                MaxTokens.MEDIUM,
            )
        except Exception as e:
            raise GenerationError(f"Enrichment analysis failed: {e}", stage="analysis") from e

        progress.report("research_planning", "Identificando tópicos para pesquisa complementar...", 25)
        try:
            topics_reply = await text.complete(
                models.analysis,
                messages(
                    ENRICH_TOPICS_SYSTEM_PROMPT,
                    ENRICH_TOPICS_PROMPT.format(analysis=analysis, article=content),
                ),
                Temperature.PRECISE,
                MaxTokens.SMALL,
            )
            queries = extract_research_queries(topics_reply)
        except Exception as e:
            logger.warning(f"Research planning failed, enriching without new research: {e}")
            queries = []

        progress.report("research", "Realizando pesquisas complementares...", 40)
        complementary = ""
        for i, query in enumerate(queries):
            progress.report(
                "research",
                f"Pesquisando tópico {i + 1} de {len(queries)}...",
                40 + 20 * i / len(queries),
            )
            try:
                result = await research.search(query, RecencyFilter.MONTH)
            except Exception as e:
                logger.warning(f"Complementary research failed for '{query}': {e}")
                continue
            if result.text:
                complementary += f"\n\nPesquisa sobre: {query}\n{result.text}"

        progress.report("enrichment", "Enriquecendo o conteúdo do artigo...", 70)
        short_note = PRESERVE_STRUCTURE_SHORT if options.preserve_structure else FREE_STRUCTURE_SHORT
        try:
            enriched = await text.complete(
                models.default,
                messages(
                    ENRICH_SYSTEM_PROMPT,
                    ENRICH_PROMPT.format(
                        structure_note=short_note,
                        focus=options.focus,
                        article=content,
                        analysis=analysis,
                        research=complementary,
                    ),
                ),
                Temperature.BALANCED,
                MaxTokens.LARGE,
            )
        except Exception as e:
            raise GenerationError(f"Enrichment rewrite failed: {e}", stage="enrichment") from e
        if not enriched.strip():
            raise GenerationError("Enrichment rewrite came back empty", stage="enrichment")

        progress.report("summary", "Gerando resumo das melhorias realizadas...", 90)
        try:
            summary = await text.complete(
                models.analysis,
                messages(
                    ENRICH_SUMMARY_SYSTEM_PROMPT,
                    ENRICH_SUMMARY_PROMPT.format(original=content, enriched=enriched),
                ),
                Temperature.PRECISE,
                MaxTokens.SMALL,
            )
        except Exception as e:
            logger.warning(f"Improvements summary failed: {e}")
            summary = ""

        progress.report("complete", "Artigo enriquecido com sucesso!", 100)

    return EnrichmentResult(
        original_content=content,
        enriched_content=enriched,
        improvements_summary=summary,
        word_counts=WordCounts(original=count_words(content), enriched=count_words(enriched)),
        research_queries=queries,
    )
