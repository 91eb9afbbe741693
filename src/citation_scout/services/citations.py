"""
Citation service: question → ranked PubMed citations.

Pipeline:
  1. Extract entities (LLM strategy first if requested and configured)
  2. Build the PubMed query (same alternate-first rule)
  3. AND the review / publication-date filters onto it
  4. JSON round trip, falling back to the XML round trip on zero citations,
     over-fetching so ranking and parse losses still leave enough
  5. Rank, truncate, and list the gene symbols seen in the kept titles
"""

from __future__ import annotations

import logging
import time
from datetime import date
from typing import Protocol

from citation_scout.config import Settings, get_settings
from citation_scout.constants import OVER_FETCH_FACTOR
from citation_scout.data_sources.pubmed import PubMedClient
from citation_scout.models.model_citation import (
    Citation,
    CitationOptions,
    CitationQueryResult,
    ExtractedEntities,
    PubmedConfig,
)
from citation_scout.parsers import DEFAULT_PARSERS, CitationParser
from citation_scout.services.entity_extractor import (
    RegexEntityExtractor,
    extract_genes_from_titles,
)
from citation_scout.services.query_builder import (
    RuleBasedQueryBuilder,
    apply_query_filters,
)
from citation_scout.services.ranker import rank_citations

logger = logging.getLogger(__name__)


class AlternateEntityExtractor(Protocol):
    method: str

    async def extract(self, text: str) -> ExtractedEntities | None: ...


class AlternateQueryBuilder(Protocol):
    method: str

    async def build(self, question: str, entities: ExtractedEntities) -> str | None: ...


class CitationService:
    """Composes extraction, query building, fetching and ranking."""

    def __init__(
        self,
        config: PubmedConfig | None = None,
        *,
        client: PubMedClient | None = None,
        parsers: tuple[CitationParser, ...] = DEFAULT_PARSERS,
        alternate_extractor: AlternateEntityExtractor | None = None,
        alternate_query_builder: AlternateQueryBuilder | None = None,
    ) -> None:
        self.config = config or PubmedConfig()
        self.client = client
        self.parsers = parsers
        self.extractor = RegexEntityExtractor()
        self.query_builder = RuleBasedQueryBuilder()
        self.alternate_extractor = alternate_extractor
        self.alternate_query_builder = alternate_query_builder

    @classmethod
    def from_settings(cls, settings: Settings | None = None) -> CitationService:
        """Build a service from environment settings, wiring the LLM strategy
        only when an Anthropic key is present and the matching flag is on."""
        settings = settings or get_settings()
        config = PubmedConfig.from_settings(settings)

        if config.api_key:
            logger.info("NCBI API key found in environment.")
        else:
            logger.warning(
                "NCBI_API_KEY not found. Using unauthenticated requests (rate limits apply)."
            )

        alternate_extractor = None
        alternate_query_builder = None
        if settings.anthropic_api_key:
            from citation_scout.services.llm_strategies import (
                LlmEntityExtractor,
                LlmQueryBuilder,
            )

            if settings.use_llm_extraction:
                alternate_extractor = LlmEntityExtractor(
                    settings.extraction_max_tokens, settings.extraction_temperature
                )
            if settings.use_llm_query_generation:
                alternate_query_builder = LlmQueryBuilder(
                    settings.generation_max_tokens, settings.generation_temperature
                )
        else:
            logger.warning("ANTHROPIC_API_KEY not set. LLM entity extraction disabled.")

        return cls(
            config,
            alternate_extractor=alternate_extractor,
            alternate_query_builder=alternate_query_builder,
        )

    # ------------------------------------------------------------------
    # Public: fetch_citations
    # ------------------------------------------------------------------

    async def fetch_citations(
        self, query: str, options: CitationOptions | None = None
    ) -> CitationQueryResult:
        """Answer `query` with ranked citations. Never raises on transport errors."""
        start = time.monotonic()
        options = options or CitationOptions()
        max_citations = options.max_citations or self.config.max_citations
        prioritize_reviews = (
            options.prioritize_reviews
            if options.prioritize_reviews is not None
            else self.config.prioritize_reviews
        )
        max_age_years = (
            options.max_age_years
            if options.max_age_years is not None
            else self.config.max_age_years
        )
        use_alternate = options.use_alternate_extraction

        logger.info("Searching PubMed for query: '%s'", query)

        entities, extraction_method = await self._extract(query, use_alternate)
        summary = entities.summary()
        if summary:
            logger.info("Extracted entities - %s", summary)
        else:
            logger.info("No specific entities extracted")

        optimized_query, query_method = await self._build(query, entities, use_alternate)
        logger.info("Optimized query: %s", optimized_query)

        final_query = apply_query_filters(
            optimized_query, prioritize_reviews, max_age_years, date.today().year
        )
        logger.info("Final PubMed query: %s", final_query)

        citations = await self._search(final_query, max_citations * OVER_FETCH_FACTOR)

        if citations:
            rank_citations(citations)
            citations = citations[:max_citations]

        genes_in_titles = extract_genes_from_titles(citations)
        if genes_in_titles:
            logger.info(
                "Potential genes identified in top citations: %s",
                ", ".join(genes_in_titles),
            )

        elapsed = time.monotonic() - start
        logger.info("PubMed search completed in %.2f seconds.", elapsed)

        return CitationQueryResult(
            query=query,
            extracted_entities=entities,
            optimized_query=final_query,
            citations=citations,
            genes_in_titles=genes_in_titles,
            extraction_method=extraction_method,
            query_method=query_method,
            elapsed_seconds=elapsed,
        )

    async def optimize_query(
        self, query: str, entities: ExtractedEntities | None = None
    ) -> str:
        """Unfiltered PubMed query for `query`, preferring the LLM strategy."""
        if entities is None:
            entities, _ = await self._extract(query, use_alternate=True)
        optimized, _ = await self._build(query, entities, use_alternate=True)
        return optimized

    # ------------------------------------------------------------------
    # Pipeline steps
    # ------------------------------------------------------------------

    async def _extract(
        self, query: str, use_alternate: bool
    ) -> tuple[ExtractedEntities, str]:
        if use_alternate and self.alternate_extractor is not None:
            entities = await self.alternate_extractor.extract(query)
            if entities is not None:
                return entities, self.alternate_extractor.method
            logger.info("Falling back to regex-based entity extraction")
        return self.extractor.extract(query), self.extractor.method

    async def _build(
        self, query: str, entities: ExtractedEntities, use_alternate: bool
    ) -> tuple[str, str]:
        if use_alternate and self.alternate_query_builder is not None:
            built = await self.alternate_query_builder.build(query, entities)
            if built:
                return built, self.alternate_query_builder.method
        logger.info("Using rule-based query optimization")
        return self.query_builder.build(query, entities), self.query_builder.method

    async def _search(self, final_query: str, fetch_count: int) -> list[Citation]:
        if self.client is not None:
            return await self._search_with(self.client, final_query, fetch_count)
        async with PubMedClient(self.config) as client:
            return await self._search_with(client, final_query, fetch_count)

    async def _search_with(
        self, client: PubMedClient, final_query: str, fetch_count: int
    ) -> list[Citation]:
        """Try each parser in order; the next one runs only on zero citations."""
        for index, parser in enumerate(self.parsers):
            if index:
                logger.warning(
                    "Previous search method yielded no results, trying %s search...",
                    parser.name.upper(),
                )
            citations = await client.search_citations(final_query, fetch_count, parser)
            if citations:
                return citations
        return []
