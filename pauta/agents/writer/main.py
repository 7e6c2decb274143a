"""Generation orchestrator: research, analysis, outline, draft and optional extras.

Stages run strictly in order:

    research -> analysis -> secondary_research -> outlining -> writing
        -> [fact_check] -> [enrichment] -> [metadata] -> complete

Failure policy:
- research: the primary query failing or returning no text raises
  ResearchUnavailableError. The structured research bundle degrades instead.
- analysis: a failed insight call falls back to facts mined from the
  primary research; secondary research is then skipped. Insights without
  open questions get follow-up questions derived from those facts.
- secondary_research: each question is non-fatal on its own.
- outlining/writing: failures (and an empty draft) raise GenerationError.
- fact_check/enrichment/metadata: logged and left as None.
"""

import asyncio
import logging
import re

import logfire
from slugify import slugify

from pauta.agents.fact_checker.main import FactChecker
from pauta.agents.fact_checker.models import FactCheckReport
from pauta.agents.researcher.helpers import extract_important_facts, rank_web_sources
from pauta.agents.researcher.main import ResearchAggregator
from pauta.agents.researcher.models import ResearchBundle
from pauta.agents.researcher.questions import generate_related_questions
from pauta.agents.shared import count_words, extract_title, messages
from pauta.agents.writer.enrichment import enrich_article
from pauta.agents.writer.metadata import generate_seo_metadata
from pauta.agents.writer.models import (
    EnrichmentOptions,
    EnrichmentResult,
    GenerationOptions,
    GenerationResult,
)
from pauta.agents.writer.prompts import (
    ARTICLE_PROMPT,
    ARTICLE_SYSTEM_PROMPT,
    FAQ_LINE,
    INSIGHTS_PROMPT,
    INSIGHTS_SYSTEM_PROMPT,
    OUTLINE_PROMPT,
    OUTLINE_SYSTEM_PROMPT,
    PRIMARY_RESEARCH_QUERY,
    SOURCES_LINE,
    research_context,
)
from pauta.config import (
    FactCheckConfig,
    GenerationConfig,
    ModelsConfig,
    ResearchConfig,
    Settings,
)
from pauta.exceptions import GenerationError, ResearchUnavailableError
from pauta.llm_providers import MaxTokens, RecencyFilter, Temperature
from pauta.progress import ProgressCallback, ProgressReporter
from pauta.seo import analyze_seo_score
from pauta.services.providers import ResearchProvider, TextGenerationProvider

logger = logging.getLogger(__name__)

SLUG_MAX_LENGTH = 60

_QUESTIONS_SECTION = re.compile(
    r"(?:Perguntas|Questões)(?:\s+para\s+pesquisa)?\**:\**\s*((?:.+\?\s*)+)",
    re.IGNORECASE,
)
_LIST_PREFIX = re.compile(r"^\s*(?:\d+[.)]|[-*•])\s*")


def extract_questions(insights: str) -> list[str]:
    """Open questions listed under a "Perguntas:" / "Questões:" label, in order."""
    match = _QUESTIONS_SECTION.search(insights or "")
    if not match:
        return []

    questions = []
    for piece in match.group(1).split("?"):
        question = _LIST_PREFIX.sub("", piece.strip()).strip("* ").strip()
        if question:
            questions.append(f"{question}?")
    return questions


def options_from_config(config: GenerationConfig) -> GenerationOptions:
    return GenerationOptions.model_validate(config.model_dump())


class ArticleGenerator:
    """Runs the staged article pipeline against injected providers."""

    def __init__(
        self,
        text: TextGenerationProvider,
        research: ResearchProvider,
        models: ModelsConfig | None = None,
        research_config: ResearchConfig | None = None,
        generation: GenerationConfig | None = None,
        fact_check: FactCheckConfig | None = None,
    ):
        self.text = text
        self.research = research
        self.models = models or ModelsConfig()
        self.research_config = research_config or ResearchConfig()
        self.generation = generation or GenerationConfig()
        self.aggregator = ResearchAggregator(research, self.research_config)
        self.fact_checker = FactChecker(text, research, self.models, fact_check)

    @classmethod
    def from_settings(
        cls,
        settings: Settings,
        text: TextGenerationProvider,
        research: ResearchProvider,
    ) -> "ArticleGenerator":
        return cls(
            text,
            research,
            models=settings.models,
            research_config=settings.research,
            generation=settings.generation,
            fact_check=settings.fact_check,
        )

    async def generate_article(
        self,
        topic: str,
        options: GenerationOptions | None = None,
        on_progress: ProgressCallback | None = None,
    ) -> GenerationResult:
        """Research and write an article about a topic.

        Args:
            topic: Article subject, e.g. "pintura de fachada"
            options: Generation switches (config defaults when omitted)
            on_progress: Optional callback receiving ProgressEvent objects
                with non-decreasing percentages, ending at 100

        Raises:
            ResearchUnavailableError: If the topic could not be researched at all
            GenerationError: If the outline or draft could not be produced
        """
        options = options or options_from_config(self.generation)
        progress = ProgressReporter(on_progress)

        with logfire.span("generation.run", topic=topic):
            progress.report("research", "Realizando pesquisa inicial...", 10)
            bundle = await self._research(topic)

            progress.report("analysis", "Analisando dados e extraindo fatos relevantes...", 25)
            insights, questions = await self._insights(topic, bundle.primary_text)
            questions = questions[: options.max_secondary_questions]

            progress.report("secondary_research", "Realizando pesquisa complementar...", 40)
            secondary = await self._secondary_research(
                questions, parallel=options.parallel_secondary_research
            )

            progress.report("outlining", "Organizando estrutura do artigo...", 55)
            outline = await self._outline(topic, options, bundle.primary_text, insights, secondary)

            progress.report("writing", "Gerando conteúdo principal...", 70)
            content = await self._draft(topic, options, outline, bundle, secondary)

            fact_check = None
            if options.include_fact_check:
                fact_check = await self._fact_check(content, progress.child(72, 80))

            enrichment = None
            if options.enrich:
                enrichment = await self._enrich(content, progress.child(80, 88))
                if enrichment is not None:
                    content = enrichment.enriched_content

            metadata = None
            if options.include_metadata:
                progress.report("metadata", "Gerando metadados para SEO...", 90)
                metadata = await generate_seo_metadata(self.text, content, topic, self.models)

            keywords = metadata.keywords if metadata and metadata.keywords else [topic]
            seo_analysis = analyze_seo_score(content, keywords)

            title = extract_title(content) or f"Artigo sobre {topic}"
            progress.report("complete", "Artigo completo gerado com sucesso!", 100)

        logger.info(
            f"Generated '{title}' ({count_words(content)} words, SEO score {seo_analysis.score})"
        )

        return GenerationResult(
            topic=topic,
            title=title,
            slug=slugify(title, max_length=SLUG_MAX_LENGTH),
            content=content,
            outline=outline,
            word_count=count_words(content),
            metadata=metadata,
            research=bundle,
            insights=insights,
            fact_check=fact_check,
            enrichment=enrichment,
            seo_analysis=seo_analysis,
        )

    async def _research(self, topic: str) -> ResearchBundle:
        try:
            primary = await self.research.search(
                PRIMARY_RESEARCH_QUERY.format(topic=topic), RecencyFilter.MONTH
            )
        except Exception as e:
            raise ResearchUnavailableError(f"Initial research failed for '{topic}': {e}") from e
        if not primary.text.strip():
            raise ResearchUnavailableError(f"Initial research returned nothing for '{topic}'")

        bundle = await self.aggregator.get_latest_info(topic)
        if bundle.is_degraded:
            logger.warning(f"Continuing with degraded research bundle: {bundle.error}")

        cited = {s.url: s for s in [*primary.sources, *bundle.web_sources]}
        return bundle.model_copy(
            update={
                "primary_text": primary.text,
                "web_sources": rank_web_sources(list(cited.values()), topic),
            }
        )

    async def _insights(self, topic: str, research_text: str) -> tuple[str, list[str]]:
        try:
            insights = await self.text.complete(
                self.models.analysis,
                messages(
                    INSIGHTS_SYSTEM_PROMPT,
                    INSIGHTS_PROMPT.format(topic=topic, research=research_text),
                ),
                Temperature.FACTUAL,
                MaxTokens.SMALL,
            )
        except Exception as e:
            logger.warning(f"Insight extraction failed, using mined facts: {e}")
            facts = extract_important_facts(research_text)
            return "\n".join(f"- {fact}" for fact in facts), []

        questions = extract_questions(insights)
        if questions:
            return insights, questions

        facts = extract_important_facts(research_text)
        if not facts:
            return insights, []
        logger.info("Insights listed no open questions, deriving them from research facts")
        return insights, await generate_related_questions(self.text, topic, facts, self.models)

    async def _search_question(self, question: str) -> str:
        try:
            result = await self.research.search(question, RecencyFilter.MONTH)
        except Exception as e:
            logger.warning(f"Secondary research failed for '{question}': {e}")
            return ""
        return f"\n\nPesquisa sobre: {question}\n{result.text}" if result.text else ""

    async def _secondary_research(self, questions: list[str], parallel: bool = False) -> str:
        if parallel:
            # gather keeps the question order in its results
            sections = await asyncio.gather(*(self._search_question(q) for q in questions))
        else:
            sections = [await self._search_question(q) for q in questions]
        return "".join(sections)

    async def _outline(
        self,
        topic: str,
        options: GenerationOptions,
        research_text: str,
        insights: str,
        secondary: str,
    ) -> str:
        try:
            outline = await self.text.complete(
                self.models.default,
                messages(
                    OUTLINE_SYSTEM_PROMPT,
                    OUTLINE_PROMPT.format(
                        topic=topic,
                        tone=options.tone,
                        audience=options.audience,
                        research=research_text,
                        insights=insights,
                        secondary=secondary,
                    ),
                ),
                Temperature.PRECISE,
                MaxTokens.MEDIUM,
            )
        except Exception as e:
            raise GenerationError(f"Outline generation failed: {e}", stage="outlining") from e
        if not outline.strip():
            raise GenerationError("Outline came back empty", stage="outlining")
        return outline

    async def _draft(
        self,
        topic: str,
        options: GenerationOptions,
        outline: str,
        bundle: ResearchBundle,
        secondary: str,
    ) -> str:
        prompt = ARTICLE_PROMPT.format(
            topic=topic,
            outline=outline,
            tone=options.tone,
            audience=options.audience,
            min_words=options.min_words,
            max_words=options.max_words,
            sources_line=SOURCES_LINE if options.include_sources else "",
            faq_line=FAQ_LINE if options.include_faqs else "",
            research=bundle.primary_text,
            secondary=secondary,
            context=research_context(bundle, options.include_sources, options.include_faqs),
        )
        try:
            draft = await self.text.complete(
                self.models.default,
                messages(ARTICLE_SYSTEM_PROMPT, prompt),
                Temperature.BALANCED,
                MaxTokens.LARGE,
            )
        except Exception as e:
            raise GenerationError(f"Draft generation failed: {e}", stage="writing") from e
        if not draft.strip():
            raise GenerationError("Draft came back empty", stage="writing")
        return draft

    async def _fact_check(self, content: str, reporter: ProgressReporter) -> FactCheckReport | None:
        try:
            return await self.fact_checker.fact_check_article(content, reporter=reporter)
        except Exception as e:
            logger.error(f"Fact-check failed, article kept without report: {e}")
            return None

    async def _enrich(self, content: str, reporter: ProgressReporter) -> EnrichmentResult | None:
        try:
            return await enrich_article(
                self.text,
                self.research,
                content,
                EnrichmentOptions(),
                models=self.models,
                reporter=reporter,
            )
        except Exception as e:
            logger.error(f"Enrichment failed, keeping original draft: {e}")
            return None


async def generate_article(
    text: TextGenerationProvider,
    research: ResearchProvider,
    topic: str,
    options: GenerationOptions | None = None,
    on_progress: ProgressCallback | None = None,
) -> GenerationResult:
    """One-shot generation with default configuration."""
    return await ArticleGenerator(text, research).generate_article(topic, options, on_progress)
