"""Pauta CLI entry point."""

import argparse
import asyncio
import logging
import sys
from pathlib import Path

from dotenv import load_dotenv
from pydantic import ValidationError
from slugify import slugify

env_file = Path(__file__).parent.parent / ".env"
load_dotenv(env_file)

from pauta import __version__
from pauta.agents.fact_checker import FactChecker, ReviewOptions, Thoroughness
from pauta.agents.shared import extract_title
from pauta.agents.topics import generate_topic_ideas
from pauta.agents.writer import (
    ArticleGenerator,
    EnrichmentOptions,
    GenerationOptions,
    enrich_article,
)
from pauta.agents.writer.main import options_from_config
from pauta.config import Settings, get_settings
from pauta.pipeline import run_content_cycle
from pauta.progress import ProgressEvent
from pauta.scheduler import start_scheduler
from pauta.seo import (
    ArticlePage,
    ScoringProfile,
    analyze_seo_score,
    generate_meta_description,
    generate_meta_tags,
    generate_structured_data,
    suggest_categories,
)
from pauta.services import build_text_provider, open_research_provider
from pauta.storage import MarkdownArticleStore

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
)

logger = logging.getLogger(__name__)

CONFIG_TEMPLATE = """# Pauta Configuration
# Operational parameters for the content pipeline.
# API keys and secrets should be stored in .env file, not here.

models:
  default: gpt-4o
  analysis: gpt-4o-mini
  fallback: gpt-3.5-turbo

research:
  backend: perplexity  # perplexity or exa
  include_technical_data: true
  include_cost_estimates: true
  include_local_context: true
  max_sources: 5
  recency_filter: month

generation:
  tone: informativo
  audience: intermediário
  min_words: 800
  max_words: 1500
  include_sources: true
  include_faqs: true
  include_metadata: true
  include_fact_check: false
  enrich: false
  max_secondary_questions: 3
  parallel_secondary_research: false

fact_check:
  max_claims: 8

providers:
  text_timeout_seconds: 120
  research_timeout_seconds: 60
  max_concurrent_text_calls: 4
  max_concurrent_research_calls: 2

scheduler:
  timezone: America/Sao_Paulo
  slots:
    morning:
      hour: 10
      minute: 0
      focus: [dicas-reformas, tendencias-design, materiais-construcao]
    afternoon:
      hour: 15
      minute: 0
      focus: [antes-depois, inspiracoes-decoracao, reformas-economicas]
    evening:
      hour: 19
      minute: 49
      focus: [projetos-destaque, dicas-interiores, reformas-modernas]

storage:
  articles_subdir: articles
  slug_max_length: 60

site:
  name: Casabranca Reformas
  base_url: https://casabrancareformas.com.br
  blog_path: /blog
  logo_path: /logo.png
"""


def _init_logfire() -> None:
    """Initialize Logfire if available, without failing commands."""
    try:
        from pauta.observability import initialize_logfire

        initialize_logfire(get_settings())
    except Exception as e:
        logger.warning(f"Failed to initialize Logfire: {e}")


def _print_progress(event: ProgressEvent) -> None:
    print(f"  [{event.percentage:5.1f}%] {event.message}")


def _read_article(path: str) -> str:
    article_path = Path(path)
    if not article_path.exists():
        raise FileNotFoundError(f"Article file not found: {article_path}")
    return article_path.read_text(encoding="utf-8")


def _generation_options(args: argparse.Namespace, settings: Settings) -> GenerationOptions:
    options = options_from_config(settings.generation)
    overrides = {
        "tone": args.tone,
        "audience": args.audience,
        "min_words": args.min_words,
        "max_words": args.max_words,
    }
    updates = {k: v for k, v in overrides.items() if v is not None}
    if args.fact_check:
        updates["include_fact_check"] = True
    if args.enrich:
        updates["enrich"] = True
    if args.no_metadata:
        updates["include_metadata"] = False
    return options.model_copy(update=updates)


def cmd_init(args: argparse.Namespace) -> int:
    """Initialize data directory structure and configuration files."""
    data_dir = Path("data").resolve()

    try:
        data_dir.mkdir(exist_ok=True)
        logger.info(f"Created data directory: {data_dir}")

        (data_dir / "articles").mkdir(parents=True, exist_ok=True)
        logger.info("Created articles directory")

        config_path = data_dir / "config.yaml"
        if not config_path.exists():
            config_path.write_text(CONFIG_TEMPLATE, encoding="utf-8")
            logger.info(f"Created config template: {config_path}")
        else:
            logger.info(f"Config file already exists: {config_path}")

        print(f"\n✓ Data directory initialized at {data_dir}")
        print("\nNext steps:")
        print("1. Copy .env.example to .env and add your API keys")
        print("2. Review and customize data/config.yaml if needed")
        print("3. Run 'python -m pauta config' to verify configuration")
        print("4. Run 'python -m pauta generate \"pintura de fachada\"' to write one article\n")

        return 0

    except Exception as e:
        logger.error(f"Failed to initialize: {e}")
        print(f"\n❌ Initialization failed: {e}\n")
        return 1


def cmd_config(args: argparse.Namespace) -> int:
    """Display merged configuration."""
    try:
        settings = get_settings()

        print("\n=== Pauta Configuration ===\n")
        print(f"Data Directory: {settings.data_dir}")
        print(f"Articles Directory: {settings.articles_dir}\n")

        print("Models:")
        print(f"  Default: {settings.models.default}")
        print(f"  Analysis: {settings.models.analysis}")
        print(f"  Fallback: {settings.models.fallback}\n")

        print("Research:")
        print(f"  Backend: {settings.research.backend}")
        print(f"  Max Sources: {settings.research.max_sources}")
        print(f"  Recency Filter: {settings.research.recency_filter or 'none'}\n")

        generation = settings.generation
        print("Generation:")
        print(f"  Tone: {generation.tone}")
        print(f"  Audience: {generation.audience}")
        print(f"  Words: {generation.min_words}-{generation.max_words}")
        print(f"  Sources / FAQs: {generation.include_sources} / {generation.include_faqs}")
        print(f"  Metadata: {generation.include_metadata}")
        print(f"  Fact-check: {generation.include_fact_check}")
        print(f"  Enrich: {generation.enrich}")
        print(f"  Secondary Questions: {generation.max_secondary_questions}")
        print(f"  Parallel Secondary Research: {generation.parallel_secondary_research}\n")

        print("Fact-check:")
        print(f"  Max Claims: {settings.fact_check.max_claims}\n")

        limits = settings.providers
        print("Providers:")
        print(f"  Text Timeout: {limits.text_timeout_seconds}s")
        print(f"  Research Timeout: {limits.research_timeout_seconds}s")
        print(f"  Max Concurrent Text Calls: {limits.max_concurrent_text_calls}")
        print(f"  Max Concurrent Research Calls: {limits.max_concurrent_research_calls}\n")

        print("Site:")
        print(f"  Name: {settings.site.name}")
        print(f"  Blog URL: {settings.site.base_url}{settings.site.blog_path}\n")

        print(f"Scheduler ({settings.scheduler.timezone}):")
        for name, slot in settings.scheduler.slots.items():
            print(f"  {name}: {slot.hour:02d}:{slot.minute:02d} ({', '.join(slot.focus)})")
        print()

        print("API Keys:")
        print(f"  OpenAI: {'✓ Set' if settings.openai_api_key else '✗ Not set'}")
        print(f"  Anthropic: {'✓ Set' if settings.anthropic_api_key else '✗ Not set'}")
        print(f"  Perplexity: {'✓ Set' if settings.perplexity_api_key else '✗ Not set'}")
        print(f"  Exa AI: {'✓ Set' if settings.exa_api_key else '✗ Not set'}")
        print(f"  Logfire: {'✓ Set' if settings.logfire_token else '✗ Not set'}\n")

        return 0

    except ValidationError as e:
        print("\n❌ Configuration Error:\n")
        for error in e.errors():
            print(f"  • {'.'.join(str(x) for x in error['loc'])}: {error['msg']}")
        print()
        return 1
    except Exception as e:
        logger.error(f"Failed to load config: {e}")
        print(f"\n❌ Failed to load configuration: {e}\n")
        return 1


def cmd_generate(args: argparse.Namespace) -> int:
    """Generate one article about a topic."""
    _init_logfire()

    async def _generate():
        settings = get_settings()
        options = _generation_options(args, settings)
        text = build_text_provider(settings)
        async with open_research_provider(settings) as research:
            generator = ArticleGenerator.from_settings(settings, text, research)
            return await generator.generate_article(args.topic, options, _print_progress)

    try:
        print(f"\n=== Generating article: {args.topic} ===\n")
        article = asyncio.run(_generate())

        print(f"\n✓ {article.title}")
        print(f"  Slug: {article.slug}")
        print(f"  Words: {article.word_count}")
        if article.seo_analysis is not None:
            print(f"  SEO Score: {article.seo_analysis.score}/100")
        if article.fact_check is not None:
            print(
                f"  Fact-check: {article.fact_check.stats.verified_count}"
                f"/{article.fact_check.claims_checked} claims verified"
            )
        if article.research.is_degraded:
            print(f"  Research degraded: {article.research.error}")

        if args.no_save:
            print(f"\n{article.content}\n")
        else:
            settings = get_settings()
            store = MarkdownArticleStore(settings.articles_dir, settings.storage.slug_max_length)
            path = store.save_article(article)
            print(f"  Saved to: {path}\n")

        return 0

    except Exception as e:
        logger.error(f"Generation failed: {e}", exc_info=True)
        print(f"\n❌ Generation failed: {e}\n")
        return 1


def _print_review(review) -> None:
    status = "✗ Review failed" if review.error else f"Precision {review.precision:.0%}"
    print(f"\n=== Article review: {status} ===\n")
    if review.problems:
        print("Problems:")
        for i, problem in enumerate(review.problems, 1):
            print(f"  {i}. [{problem.severity}] {problem.statement}")
            print(f"     {problem.issue}")
            print(f"     → {problem.correction}")
        print()
    if review.recommended_sources:
        print("Recommended sources:")
        for source in review.recommended_sources:
            print(f"  • {source}")
        print()
    if review.improvements:
        print("Improvements:")
        for item in review.improvements:
            print(f"  • {item}")
        print()
    if review.summary:
        print(f"{review.summary}\n")


def cmd_fact_check(args: argparse.Namespace) -> int:
    """Fact-check an article file."""
    _init_logfire()

    async def _check(content: str):
        settings = get_settings()
        text = build_text_provider(settings)
        async with open_research_provider(settings) as research:
            checker = FactChecker(text, research, settings.models, settings.fact_check)
            if args.review:
                options = ReviewOptions(thoroughness=Thoroughness(args.thoroughness))
                return await checker.review_article(content, options)
            return await checker.fact_check_article(content, args.max_claims, _print_progress)

    try:
        content = _read_article(args.file)
        report = asyncio.run(_check(content))

        if args.review:
            _print_review(report)
            return 1 if report.error else 0

        status = "✓ Verified" if report.verified else "✗ Not verified"
        print(f"\n=== Fact-check: {status} ===\n")
        print(f"Claims checked: {report.claims_checked}")
        print(f"Average confidence: {report.stats.average_confidence:.0%}\n")
        for i, result in enumerate(report.verification_results, 1):
            marker = "✓" if result.verified else "✗"
            print(f"  {i}. {marker} {result.claim}")
            print(f"     {result.result} ({result.confidence:.0%})")
        print(f"\n{report.summary}\n")

        return 0

    except Exception as e:
        logger.error(f"Fact-check failed: {e}", exc_info=True)
        print(f"\n❌ Fact-check failed: {e}\n")
        return 1


def _print_markup(
    content: str, keywords: list[str] | None, title: str | None, description: str | None
) -> None:
    settings = get_settings()
    title = title or extract_title(content) or ""
    categories = suggest_categories(title, content)
    page = ArticlePage(
        title=title,
        description=description or generate_meta_description(content, title, keywords),
        slug=slugify(title, max_length=settings.storage.slug_max_length),
        category=categories[0].category.name if categories else "",
        keywords=keywords or [],
        content=content,
    )
    print("Meta tags:")
    print(generate_meta_tags(page, settings.site))
    print("\nStructured data:")
    print(generate_structured_data(page, settings.site))
    print()


def cmd_seo(args: argparse.Namespace) -> int:
    """Score an article file for SEO without calling any provider."""
    try:
        content = _read_article(args.file)
        keywords = [k.strip() for k in args.keywords.split(",")] if args.keywords else None
        analysis = analyze_seo_score(
            content,
            keywords,
            title=args.title,
            description=args.description,
            profile=ScoringProfile(args.profile),
        )

        print(f"\n=== SEO Score: {analysis.score}/100 ({analysis.profile}) ===\n")
        if analysis.sub_scores:
            print("Sub-scores:")
            for name, value in analysis.sub_scores.items():
                print(f"  {name}: {value:.0f}")
            print()

        if analysis.strengths:
            print("Strengths:")
            for item in analysis.strengths:
                print(f"  ✓ {item}")
            print()

        if analysis.weaknesses:
            print("Weaknesses:")
            for item in analysis.weaknesses:
                print(f"  ✗ {item}")
            print()

        if analysis.suggestions:
            print("Suggestions:")
            for item in analysis.suggestions:
                print(f"  • {item}")
            print()

        if args.markup:
            _print_markup(content, keywords, args.title, args.description)

        return 0

    except Exception as e:
        logger.error(f"SEO analysis failed: {e}")
        print(f"\n❌ SEO analysis failed: {e}\n")
        return 1


def cmd_enrich(args: argparse.Namespace) -> int:
    """Enrich an article file with complementary research."""
    _init_logfire()

    async def _enrich(content: str):
        settings = get_settings()
        options = EnrichmentOptions(
            focus=args.focus, preserve_structure=not args.free_structure
        )
        text = build_text_provider(settings)
        async with open_research_provider(settings) as research:
            return await enrich_article(
                text, research, content, options, _print_progress, models=settings.models
            )

    try:
        content = _read_article(args.file)
        result = asyncio.run(_enrich(content))

        print("\n✓ Article enriched")
        print(f"  Words: {result.word_counts.original} -> {result.word_counts.enriched}")
        if result.research_queries:
            print("  Researched:")
            for query in result.research_queries:
                print(f"    • {query}")
        if result.improvements_summary:
            print(f"\n{result.improvements_summary}")

        output = Path(args.output) if args.output else None
        if output is not None:
            output.write_text(result.enriched_content, encoding="utf-8")
            print(f"\n  Saved to: {output}\n")
        else:
            print(f"\n{result.enriched_content}\n")

        return 0

    except Exception as e:
        logger.error(f"Enrichment failed: {e}", exc_info=True)
        print(f"\n❌ Enrichment failed: {e}\n")
        return 1


def cmd_topics(args: argparse.Namespace) -> int:
    """Suggest blog topic titles."""
    _init_logfire()

    try:
        settings = get_settings()
        text = build_text_provider(settings)
        topics = asyncio.run(
            generate_topic_ideas(text, args.focus, args.count, models=settings.models)
        )

        print(f"\n=== Topic ideas ({args.focus or 'no focus'}) ===\n")
        for i, topic in enumerate(topics, 1):
            print(f"  {i}. {topic}")
        print()

        return 0

    except Exception as e:
        logger.error(f"Topic generation failed: {e}")
        print(f"\n❌ Topic generation failed: {e}\n")
        return 1


def cmd_run(args: argparse.Namespace) -> int:
    """Start the content scheduler, or run one slot and exit."""
    if args.debug:
        logging.getLogger().setLevel(logging.DEBUG)

    _init_logfire()

    try:
        settings = get_settings()

        if args.once:
            logger.info(f"Running content slot '{args.slot}' once...")
            path = asyncio.run(run_content_cycle(args.slot, settings))
            print(f"\n✓ Article saved to {path}\n")
            return 0

        start_scheduler(settings)
        return 0

    except KeyError as e:
        print(f"\n❌ {e.args[0]}\n")
        return 1
    except Exception as e:
        logger.error(f"Failed to start system: {e}", exc_info=True)
        print(f"\nFailed to start: {e}\n")
        return 1


def main() -> int:
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        description="Pauta: research-driven article generation for a renovation blog",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"Pauta {__version__}",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    parser_init = subparsers.add_parser(
        "init",
        help="Initialize data directory and configuration files",
    )
    parser_init.set_defaults(func=cmd_init)

    parser_config = subparsers.add_parser(
        "config",
        help="Display merged configuration",
    )
    parser_config.set_defaults(func=cmd_config)

    parser_generate = subparsers.add_parser(
        "generate",
        help="Research and write one article",
    )
    parser_generate.add_argument("topic", help="Article topic, e.g. 'pintura de fachada'")
    parser_generate.add_argument("--tone", help="informativo, persuasivo or conversacional")
    parser_generate.add_argument("--audience", help="iniciante, intermediário or especialista")
    parser_generate.add_argument("--min-words", type=int, help="Minimum article length")
    parser_generate.add_argument("--max-words", type=int, help="Maximum article length")
    parser_generate.add_argument(
        "--fact-check",
        action="store_true",
        help="Fact-check the draft",
    )
    parser_generate.add_argument(
        "--enrich",
        action="store_true",
        help="Enrich the draft with complementary research",
    )
    parser_generate.add_argument(
        "--no-metadata",
        action="store_true",
        help="Skip SEO metadata generation",
    )
    parser_generate.add_argument(
        "--no-save",
        action="store_true",
        help="Print the article instead of saving it",
    )
    parser_generate.set_defaults(func=cmd_generate)

    parser_fact_check = subparsers.add_parser(
        "fact-check",
        help="Verify the claims of an article file",
    )
    parser_fact_check.add_argument("file", help="Markdown or HTML article file")
    parser_fact_check.add_argument(
        "--max-claims",
        type=int,
        default=None,
        help="Maximum number of claims to verify",
    )
    parser_fact_check.add_argument(
        "--review",
        action="store_true",
        help="Review the whole article in one call instead of claim by claim",
    )
    parser_fact_check.add_argument(
        "--thoroughness",
        choices=[t.value for t in Thoroughness],
        default=Thoroughness.HIGH.value,
        help="Review depth (with --review)",
    )
    parser_fact_check.set_defaults(func=cmd_fact_check)

    parser_seo = subparsers.add_parser(
        "seo",
        help="Score an article file for SEO",
    )
    parser_seo.add_argument("file", help="Markdown or HTML article file")
    parser_seo.add_argument("--keywords", help="Comma-separated target keywords")
    parser_seo.add_argument("--title", help="Page title to evaluate")
    parser_seo.add_argument("--description", help="Meta description to evaluate")
    parser_seo.add_argument(
        "--profile",
        choices=[p.value for p in ScoringProfile],
        default=ScoringProfile.WEIGHTED.value,
        help="Scoring profile",
    )
    parser_seo.add_argument(
        "--markup",
        action="store_true",
        help="Also print the meta tags and JSON-LD for the article",
    )
    parser_seo.set_defaults(func=cmd_seo)

    parser_enrich = subparsers.add_parser(
        "enrich",
        help="Enrich an article file with complementary research",
    )
    parser_enrich.add_argument("file", help="Markdown or HTML article file")
    parser_enrich.add_argument(
        "--focus",
        default="todos",
        help="exemplos, dados, contexto or todos",
    )
    parser_enrich.add_argument(
        "--free-structure",
        action="store_true",
        help="Allow the rewrite to reorganize sections",
    )
    parser_enrich.add_argument("--output", help="Write the enriched article to this file")
    parser_enrich.set_defaults(func=cmd_enrich)

    parser_topics = subparsers.add_parser(
        "topics",
        help="Suggest blog topic titles",
    )
    parser_topics.add_argument("--focus", default="", help="Focus keyword, e.g. dicas-reformas")
    parser_topics.add_argument("--count", type=int, default=5, help="Number of titles")
    parser_topics.set_defaults(func=cmd_topics)

    parser_run = subparsers.add_parser(
        "run",
        help="Start the daily content scheduler",
    )
    parser_run.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug logging",
    )
    parser_run.add_argument(
        "--once",
        action="store_true",
        help="Run one content slot then exit",
    )
    parser_run.add_argument(
        "--slot",
        default="morning",
        help="Slot to run with --once (morning, afternoon, evening)",
    )
    parser_run.set_defaults(func=cmd_run)

    args = parser.parse_args()

    if not hasattr(args, "func"):
        parser.print_help()
        return 1

    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())
