"""
PubMed E-utilities client.

Two methods:
  1. search_ids:       esearch, query → PMIDs, in the parser's retmode
  2. search_citations: esearch followed by the parser's detail endpoint
                        (esummary for JSON, efetch for XML) → citations
"""

from __future__ import annotations

import logging

from citation_scout.constants import PUBMED_SEARCH_URL
from citation_scout.data_sources.base_client import (
    BaseClient,
    DataSourceError,
    RequestContext,
)
from citation_scout.models.model_citation import Citation
from citation_scout.parsers.base import CitationParser

logger = logging.getLogger(__name__)


class PubMedClient(BaseClient):
    """Client for querying PubMed/NCBI APIs."""

    SEARCH_URL = PUBMED_SEARCH_URL

    @property
    def _source_name(self) -> str:
        return "pubmed"

    async def search_ids(
        self, query: str, max_results: int, parser: CitationParser
    ) -> list[str]:
        """Search PubMed and return PMIDs ordered by relevance."""
        params = {
            "db": "pubmed",
            "term": query,
            "retmax": max_results,
            "retmode": parser.retmode,
            "sort": "relevance",
        }
        response = await self.fetch_with_retry(
            self.SEARCH_URL,
            params,
            self.config.timeout_long,
            context=RequestContext(source=self._source_name, method="esearch"),
        )
        return parser.parse_search_ids(response.data)

    async def search_citations(
        self, query: str, max_results: int, parser: CitationParser
    ) -> list[Citation]:
        """Run one full search-then-detail round trip.

        A transport failure that survives all retries is logged and yields
        an empty list, so the caller can fall back to another parser.
        """
        try:
            pmids = await self.search_ids(query, max_results, parser)
            if not pmids:
                logger.warning("No PMIDs found in %s search results", parser.name)
                return []

            response = await self.fetch_with_retry(
                parser.detail_url,
                parser.detail_params(pmids),
                self.config.timeout_long,
                context=RequestContext(source=self._source_name, method=parser.name),
            )
        except DataSourceError as e:
            logger.error("%s search error: %s", parser.name.upper(), e)
            return []

        citations = parser.parse_response(response.data, pmids)
        logger.debug(
            "%s search parsed %d citations from %d PMIDs",
            parser.name.upper(),
            len(citations),
            len(pmids),
        )
        return citations
