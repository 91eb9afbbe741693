"""Response parsers, in the order the citation service tries them."""

from citation_scout.parsers.base import CitationParser
from citation_scout.parsers.json_parser import JsonSummaryParser
from citation_scout.parsers.xml_parser import XmlArticleParser

DEFAULT_PARSERS: tuple[CitationParser, ...] = (JsonSummaryParser(), XmlArticleParser())

__all__ = [
    "CitationParser",
    "DEFAULT_PARSERS",
    "JsonSummaryParser",
    "XmlArticleParser",
]
