"""Parser for the esearch/esummary JSON round trip."""

import json
import logging
import re
from typing import Any

from pydantic import ValidationError

from citation_scout.constants import PUBMED_SUMMARY_URL
from citation_scout.models.model_citation import Citation
from citation_scout.parsers.base import CitationParser

logger = logging.getLogger(__name__)

_IDLIST_RE = re.compile(r'"idlist"\s*:\s*\[(.*?)\]', re.DOTALL)
_QUOTED_ID_RE = re.compile(r'"(\d+)"')
_ID_FIELD_RE = re.compile(r'"id"\s*:\s*"(\d+)"')


class JsonSummaryParser(CitationParser):
    """esearch `retmode=json` followed by esummary."""

    name = "json"
    retmode = "json"
    detail_url = PUBMED_SUMMARY_URL

    def detail_params(self, pmids: list[str]) -> dict[str, Any]:
        return {"db": "pubmed", "id": ",".join(pmids), "retmode": "json"}

    def parse_search_ids(self, body: str) -> list[str]:
        try:
            data = json.loads(body)
            return [str(pmid) for pmid in data["esearchresult"]["idlist"]]
        except (json.JSONDecodeError, KeyError, TypeError) as e:
            logger.warning("Failed to parse JSON search results: %s", e)

        # Truncated or otherwise broken JSON: scan the raw text instead.
        match = _IDLIST_RE.search(body)
        if match:
            return _QUOTED_ID_RE.findall(match.group(1))
        return _ID_FIELD_RE.findall(body)

    def parse_response(
        self, body: str, pmids: list[str] | None = None
    ) -> list[Citation]:
        try:
            result = json.loads(body).get("result") or {}
        except (json.JSONDecodeError, AttributeError) as e:
            logger.error("Failed to parse JSON summary results: %s", e)
            return []
        if not isinstance(result, dict):
            return []

        if pmids is None:
            pmids = [str(uid) for uid in result.get("uids", [])]

        citations = []
        for pmid in pmids:
            article = result.get(pmid)
            if not isinstance(article, dict):
                continue
            try:
                citations.append(self._to_citation(pmid, article))
            except (ValidationError, TypeError, AttributeError) as e:
                logger.warning("Skipping summary for PMID %s: %s", pmid, e)
        return citations

    def _to_citation(self, pmid: str, article: dict[str, Any]) -> Citation:
        authors = ", ".join(
            author.get("name") or "Unknown Author"
            for author in article.get("authors") or []
        )
        pubdate = article.get("pubdate") or ""
        year = pubdate[:4] if pubdate[:4].isdigit() else None
        doi = next(
            (
                aid.get("value")
                for aid in article.get("articleids") or []
                if aid.get("idtype") == "doi" and aid.get("value")
            ),
            None,
        )

        return Citation(
            title=(article.get("title") or "").strip() or "Untitled",
            authors=authors or "Unknown",
            journal=article.get("fulljournalname")
            or article.get("source")
            or "Unknown Journal",
            pmid=pmid,
            year=year,
            doi=doi,
            is_review="Review" in (article.get("pubtype") or []),
            url=self.article_url(pmid),
        )
