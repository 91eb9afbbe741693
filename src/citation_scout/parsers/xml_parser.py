"""
Parser for the esearch/efetch XML round trip.

Articles are cut out of the efetch body one <PubmedArticle> block at a time
and each field is pulled with its own pattern, so one malformed article (or
an undeclared entity that would break a full XML parse) only costs that
article.
"""

import logging
import re
from typing import Any

from pydantic import ValidationError

from citation_scout.constants import PUBMED_FETCH_URL
from citation_scout.models.model_citation import Citation
from citation_scout.parsers.base import CitationParser

logger = logging.getLogger(__name__)

_SEARCH_ID_RE = re.compile(r"<Id>(\d+)</Id>")
_ARTICLE_RE = re.compile(r"<PubmedArticle>.*?</PubmedArticle>", re.DOTALL)

_PMID_RE = re.compile(r"<PMID[^>]*>(.*?)</PMID>")
_TITLE_RE = re.compile(r"<ArticleTitle[^>]*>(.*?)</ArticleTitle>", re.DOTALL)
_JOURNAL_RE = re.compile(r"<Journal(?:\s[^>]*)?>.*?<Title[^>]*>(.*?)</Title>", re.DOTALL)
_PUBDATE_RE = re.compile(r"<PubDate[^>]*>(.*?)</PubDate>", re.DOTALL)
_YEAR_RE = re.compile(r"<Year[^>]*>\s*(\d{4})\s*</Year>")
_MEDLINE_DATE_RE = re.compile(r"<MedlineDate[^>]*>\s*(\d{4})")
_REVIEW_RE = re.compile(r"<PublicationType[^>]*>\s*Review\s*</PublicationType>")
_AUTHOR_RE = re.compile(r"<Author(?:\s[^>]*)?>(.*?)</Author>", re.DOTALL)
_LAST_NAME_RE = re.compile(r"<LastName[^>]*>(.*?)</LastName>", re.DOTALL)
_INITIALS_RE = re.compile(r"<Initials[^>]*>(.*?)</Initials>", re.DOTALL)
_DOI_RE = re.compile(r'<ArticleId[^>]*IdType="doi"[^>]*>(.*?)</ArticleId>', re.DOTALL)

_INLINE_TAG_RE = re.compile(r"<[^>]+>")
_WHITESPACE_RE = re.compile(r"\s+")

# &amp; last so "&amp;lt;" becomes "&lt;" rather than "<".
_XML_ENTITIES = (
    ("&lt;", "<"),
    ("&gt;", ">"),
    ("&quot;", '"'),
    ("&apos;", "'"),
    ("&amp;", "&"),
)


def clean_xml_text(text: str) -> str:
    """Strip inline markup, unescape XML entities and collapse whitespace."""
    text = _INLINE_TAG_RE.sub("", text)
    for entity, char in _XML_ENTITIES:
        text = text.replace(entity, char)
    return _WHITESPACE_RE.sub(" ", text).strip()


def _first(pattern: re.Pattern[str], text: str) -> str | None:
    match = pattern.search(text)
    return match.group(1) if match else None


class XmlArticleParser(CitationParser):
    """esearch `retmode=xml` followed by efetch `rettype=abstract`."""

    name = "xml"
    retmode = "xml"
    detail_url = PUBMED_FETCH_URL

    def detail_params(self, pmids: list[str]) -> dict[str, Any]:
        return {
            "db": "pubmed",
            "id": ",".join(pmids),
            "retmode": "xml",
            "rettype": "abstract",
        }

    def parse_search_ids(self, body: str) -> list[str]:
        return _SEARCH_ID_RE.findall(body)

    def parse_response(
        self, body: str, pmids: list[str] | None = None
    ) -> list[Citation]:
        citations = []
        for article_xml in _ARTICLE_RE.findall(body):
            try:
                citation = self._parse_article(article_xml)
            except ValidationError as e:
                logger.warning("Error parsing article XML: %s", e)
                continue
            if citation is not None:
                citations.append(citation)
        return citations

    def _parse_article(self, article_xml: str) -> Citation | None:
        raw_title = _first(_TITLE_RE, article_xml)
        title = clean_xml_text(raw_title) if raw_title else ""
        if not title:
            return None

        pmid = _first(_PMID_RE, article_xml)
        pmid = pmid.strip() if pmid else None
        journal = _first(_JOURNAL_RE, article_xml)
        doi = _first(_DOI_RE, article_xml)

        return Citation(
            title=title,
            authors=", ".join(self._authors(article_xml)) or "Unknown",
            journal=clean_xml_text(journal) if journal else "Unknown Journal",
            pmid=pmid or None,
            year=self._year(article_xml),
            doi=clean_xml_text(doi) if doi else None,
            is_review=_REVIEW_RE.search(article_xml) is not None,
            url=self.article_url(pmid),
        )

    @staticmethod
    def _authors(article_xml: str) -> list[str]:
        authors = []
        for author_xml in _AUTHOR_RE.findall(article_xml):
            last_name = _first(_LAST_NAME_RE, author_xml)
            if not last_name:
                continue
            initials = _first(_INITIALS_RE, author_xml)
            name = clean_xml_text(last_name)
            if initials:
                name = f"{name} {clean_xml_text(initials)}"
            authors.append(name)
        return authors

    @staticmethod
    def _year(article_xml: str) -> str | None:
        """Year from <PubDate>; MedlineDate ("2022 Jan-Feb") when Year is absent."""
        pub_date = _first(_PUBDATE_RE, article_xml)
        if pub_date is None:
            return None
        return _first(_YEAR_RE, pub_date) or _first(_MEDLINE_DATE_RE, pub_date)
