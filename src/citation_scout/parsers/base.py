"""Common contract for the PubMed response parsers."""

from abc import ABC, abstractmethod
from typing import Any

from citation_scout.constants import PUBMED_ARTICLE_URL
from citation_scout.models.model_citation import Citation


class CitationParser(ABC):
    """
    One response encoding of the PubMed search-then-detail round trip.

    A parser knows which `retmode` to ask esearch for, which detail endpoint
    to call with the PMIDs it found, and how to turn both bodies into
    Citation records. Parsers never raise: malformed records are skipped.
    """

    name: str = "base"
    retmode: str = "json"
    detail_url: str = ""

    @abstractmethod
    def detail_params(self, pmids: list[str]) -> dict[str, Any]:
        """Query parameters for the detail (esummary/efetch) request."""
        ...

    @abstractmethod
    def parse_search_ids(self, body: str) -> list[str]:
        """Extract PMIDs from an esearch response body."""
        ...

    @abstractmethod
    def parse_response(
        self, body: str, pmids: list[str] | None = None
    ) -> list[Citation]:
        """Convert a detail response body into citations."""
        ...

    @staticmethod
    def article_url(pmid: str | None) -> str | None:
        return PUBMED_ARTICLE_URL.format(pmid=pmid) if pmid else None
