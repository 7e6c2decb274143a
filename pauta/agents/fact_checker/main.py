"""Fact-check engine: extract claims, verify each, summarize.

A run moves through extracting -> verifying(1..N) -> summarizing -> done.
Claims are verified one at a time. A failure while verifying one claim
(research error, timeout, malformed classification) marks only that claim
unverified with zero confidence; the loop continues.
"""

import json
import logging
import re

import logfire
from pydantic import ValidationError

from pauta.agents.fact_checker.models import (
    ArticleReview,
    ClaimVerification,
    FactCheckReport,
    FactCheckStats,
    ReviewOptions,
)
from pauta.agents.fact_checker.prompts import (
    CLASSIFICATION_PROMPT,
    CLASSIFICATION_SYSTEM_PROMPT,
    EXTRACTION_PROMPT,
    EXTRACTION_SYSTEM_PROMPT,
    FALLBACK_SUMMARY,
    INVALID_FORMAT_EXPLANATION,
    INVALID_FORMAT_RESULT,
    NO_CLAIMS_SUMMARY,
    PROCESSING_ERROR_EXPLANATION,
    PROCESSING_ERROR_RESULT,
    SUMMARY_PROMPT,
    SUMMARY_SYSTEM_PROMPT,
    UNVERIFIABLE_RESULT,
    VERIFICATION_QUERY,
)
from pauta.agents.fact_checker.review import review_article
from pauta.agents.shared import extract_json_object, messages
from pauta.config import FactCheckConfig, ModelsConfig
from pauta.llm_providers import MaxTokens, RecencyFilter, Temperature
from pauta.progress import ProgressCallback, ProgressReporter
from pauta.services.providers import ResearchProvider, TextGenerationProvider

logger = logging.getLogger(__name__)

MIN_CLAIM_LENGTH = 10
# List markers may follow each other on one line; four-digit years never match
_NUMBERED_MARKER = re.compile(r"(?:^|\s)\d{1,2}[.)]\s+")


def parse_claims(text: str, max_claims: int) -> list[str]:
    """Numbered-list items of a model reply.

    Text before the first marker is dropped, as are items shorter than
    ``MIN_CLAIM_LENGTH`` characters.
    """
    parts = _NUMBERED_MARKER.split(text or "")[1:]
    claims = [" ".join(part.split()) for part in parts]
    return [c for c in claims if len(c) >= MIN_CLAIM_LENGTH][:max_claims]


def _unverified(claim: str, result: str, explanation: str = "") -> ClaimVerification:
    return ClaimVerification(
        claim=claim,
        verified=False,
        result=result,
        confidence=0.0,
        sources=[],
        explanation=explanation,
    )


class FactChecker:
    def __init__(
        self,
        text: TextGenerationProvider,
        research: ResearchProvider,
        models: ModelsConfig | None = None,
        config: FactCheckConfig | None = None,
    ):
        self.text = text
        self.research = research
        self.models = models or ModelsConfig()
        self.config = config or FactCheckConfig()

    async def fact_check_article(
        self,
        content: str,
        max_claims: int | None = None,
        on_progress: ProgressCallback | None = None,
        *,
        reporter: ProgressReporter | None = None,
    ) -> FactCheckReport:
        """Verify the most important claims of an article.

        Args:
            content: Article text
            max_claims: Upper bound on claims to verify (config default: 8)
            on_progress: Optional progress callback
            reporter: Reporter to nest into, used instead of on_progress

        Returns:
            FactCheckReport. ``verified`` is True when verified claims
            outnumber unverified ones; a run with no claims is trivially
            verified.

        Raises:
            ProviderError: If the claim-extraction call fails
        """
        if max_claims is None:
            max_claims = self.config.max_claims
        progress = reporter or ProgressReporter(on_progress)

        with logfire.span("fact_check.run", max_claims=max_claims):
            progress.report("extraction", "Extraindo afirmações verificáveis...", 10)
            extraction = await self.text.complete(
                self.models.analysis,
                messages(
                    EXTRACTION_SYSTEM_PROMPT,
                    EXTRACTION_PROMPT.format(max_claims=max_claims, article=content),
                ),
                Temperature.FACTUAL,
                MaxTokens.SMALL,
            )
            claims = parse_claims(extraction, max_claims)

            if not claims:
                logger.info("No verifiable claims found")
                progress.report("complete", "Nenhuma afirmação verificável encontrada.", 100)
                return FactCheckReport(verified=True, summary=NO_CLAIMS_SUMMARY, claims_checked=0)

            progress.report("verification", "Verificando afirmações...", 30)
            results: list[ClaimVerification] = []
            for i, claim in enumerate(claims, 1):
                progress.report(
                    "verification",
                    f"Verificando afirmação {i} de {len(claims)}...",
                    30 + 60 * i / len(claims),
                )
                results.append(await self._verify_claim(claim))

            verified_count = sum(1 for r in results if r.verified)
            stats = FactCheckStats(
                verified_count=verified_count,
                unverified_count=len(results) - verified_count,
                average_confidence=sum(r.confidence for r in results) / len(results),
            )

            progress.report("summary", "Analisando resultados e gerando resumo...", 90)
            summary = await self._summarize(results, stats)

            progress.report("complete", "Verificação de fatos concluída!", 100)
            logger.info(f"Fact-check: {verified_count}/{len(results)} claims verified")

            return FactCheckReport(
                verified=stats.verified_count > stats.unverified_count,
                summary=summary,
                claims_checked=len(claims),
                verification_results=results,
                stats=stats,
            )

    async def review_article(
        self, content: str, options: ReviewOptions | None = None
    ) -> ArticleReview:
        """Single-call review of the whole article; see ``review.review_article``."""
        return await review_article(self.research, content, options)

    async def _verify_claim(self, claim: str) -> ClaimVerification:
        try:
            research = await self.research.search(
                VERIFICATION_QUERY.format(claim=claim), RecencyFilter.MONTH
            )
        except Exception as e:
            logger.warning(f"Research failed for claim '{claim[:60]}': {e}")
            return _unverified(claim, UNVERIFIABLE_RESULT, str(e))

        if not research.text.strip():
            return _unverified(claim, UNVERIFIABLE_RESULT)

        try:
            analysis = await self.text.complete(
                self.models.analysis,
                messages(
                    CLASSIFICATION_SYSTEM_PROMPT,
                    CLASSIFICATION_PROMPT.format(claim=claim, research=research.text),
                ),
                Temperature.FACTUAL,
                MaxTokens.SMALL,
            )
        except Exception as e:
            logger.warning(f"Classification failed for claim '{claim[:60]}': {e}")
            return _unverified(claim, PROCESSING_ERROR_RESULT, PROCESSING_ERROR_EXPLANATION)

        payload = extract_json_object(analysis)
        if payload is None:
            return _unverified(claim, INVALID_FORMAT_RESULT, INVALID_FORMAT_EXPLANATION)

        payload.pop("claim", None)
        try:
            return ClaimVerification(claim=claim, **payload)
        except (ValidationError, TypeError, ValueError) as e:
            logger.warning(f"Malformed classification for claim '{claim[:60]}': {e}")
            return _unverified(claim, PROCESSING_ERROR_RESULT, PROCESSING_ERROR_EXPLANATION)

    async def _summarize(self, results: list[ClaimVerification], stats: FactCheckStats) -> str:
        fallback = FALLBACK_SUMMARY.format(
            verified=stats.verified_count,
            total=len(results),
            confidence=stats.average_confidence,
        )
        payload = json.dumps(
            [r.model_dump() for r in results], ensure_ascii=False, indent=2
        )
        try:
            summary = await self.text.complete(
                self.models.analysis,
                messages(SUMMARY_SYSTEM_PROMPT, SUMMARY_PROMPT.format(results=payload)),
                Temperature.FACTUAL,
                MaxTokens.SMALL,
            )
        except Exception as e:
            logger.warning(f"Fact-check summary failed, using counts: {e}")
            return fallback
        return summary.strip() or fallback


async def fact_check_article(
    text: TextGenerationProvider,
    research: ResearchProvider,
    content: str,
    max_claims: int = 8,
    on_progress: ProgressCallback | None = None,
) -> FactCheckReport:
    """One-shot fact-check with default configuration."""
    return await FactChecker(text, research).fact_check_article(content, max_claims, on_progress)
