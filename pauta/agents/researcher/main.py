"""Research aggregator: four staged research queries turned into one bundle."""

import logging

import logfire

from pauta.agents.researcher.helpers import analyze_data_freshness, rank_web_sources
from pauta.agents.researcher.models import (
    Overview,
    ResearchBundle,
    ResearchOptions,
    Trends,
)
from pauta.agents.researcher.prompts import (
    DEGRADED_OVERVIEW,
    build_faq_query,
    build_overview_query,
    build_sources_query,
    build_trends_query,
)
from pauta.config import ResearchConfig
from pauta.parsing import parse_faqs, parse_sections, parse_sources
from pauta.services.providers import ResearchProvider, WebSource

logger = logging.getLogger(__name__)


def options_from_config(config: ResearchConfig) -> ResearchOptions:
    return ResearchOptions.model_validate(config.model_dump(exclude={"backend"}))


class ResearchAggregator:
    """Builds a :class:`ResearchBundle` for a topic.

    The overview, trends, sources and FAQ queries run one after another. If
    any of them fails, the whole bundle degrades: the overview carries a
    "could not fetch" sentence, every other section is empty and ``error``
    holds the failure. The exception never reaches the caller.
    """

    def __init__(self, research: ResearchProvider, config: ResearchConfig | None = None):
        self.research = research
        self.config = config or ResearchConfig()

    async def get_latest_info(
        self,
        topic: str,
        options: ResearchOptions | None = None,
    ) -> ResearchBundle:
        options = options or options_from_config(self.config)

        with logfire.span("research.get_latest_info", topic=topic):
            try:
                return await self._gather(topic, options)
            except Exception as e:
                logger.error(f"Research failed for '{topic}': {e}")
                return ResearchBundle(
                    topic=topic,
                    overview=Overview(general=DEGRADED_OVERVIEW.format(topic=topic)),
                    error=str(e) or type(e).__name__,
                )

    async def _gather(self, topic: str, options: ResearchOptions) -> ResearchBundle:
        recency = options.recency_filter

        overview_result = await self.research.search(
            build_overview_query(
                topic,
                options.include_technical_data,
                options.include_cost_estimates,
                options.include_local_context,
            ),
            recency,
        )
        trends_result = await self.research.search(build_trends_query(topic), recency)
        sources_result = await self.research.search(
            build_sources_query(topic, options.max_sources), recency
        )
        faq_result = await self.research.search(build_faq_query(topic), recency)

        overview = parse_sections(overview_result.text)
        trends = parse_sections(trends_result.text)
        sources = parse_sources(sources_result.text)
        faqs = parse_faqs(faq_result.text)

        web_sources: dict[str, WebSource] = {}
        for result in (overview_result, trends_result, sources_result, faq_result):
            for source in result.sources:
                web_sources.setdefault(source.url, source)

        logger.info(
            f"Research for '{topic}': {len(sources)} sources, {len(faqs)} FAQs, "
            f"{len(web_sources)} cited pages"
        )

        return ResearchBundle(
            topic=topic,
            overview=Overview(
                general=overview.get("VISAO_GERAL", ""),
                technical=overview.get("ESPECIFICACOES_TECNICAS", ""),
                costs=overview.get("ANALISE_DE_CUSTOS", ""),
                regional=overview.get("CONTEXTO_REGIONAL", ""),
            ),
            trends=Trends(
                market=trends.get("TENDENCIAS_DE_MERCADO", ""),
                innovations=trends.get("INOVACOES_TECNICAS", ""),
                predictions=trends.get("PREVISOES", ""),
            ),
            sources=sources,
            faqs=faqs,
            web_sources=rank_web_sources(list(web_sources.values()), topic),
            freshness=analyze_data_freshness(f"{overview_result.text}\n{trends_result.text}"),
        )


async def get_latest_info(
    research: ResearchProvider,
    topic: str,
    options: ResearchOptions | None = None,
) -> ResearchBundle:
    """One-shot research with default configuration."""
    return await ResearchAggregator(research).get_latest_info(topic, options)
