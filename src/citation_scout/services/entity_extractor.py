"""
Pattern-based biomedical entity extraction.

Pulls gene symbols, protein names, disease names and pathway names out of a
question. When none of those are found, falls back to the query-type
indicator words that appear in the text.
"""

import re
from collections.abc import Iterable

from citation_scout.constants import (
    COMMON_NON_GENES,
    DISEASE_PATTERN,
    GENE_PATTERN,
    PATHWAY_PATTERN,
    PROTEIN_PATTERN,
    QUERY_TYPE_INDICATORS,
)
from citation_scout.models.model_citation import Citation, ExtractedEntities


def _unique(values: Iterable[str]) -> list[str]:
    return list(dict.fromkeys(values))


def _is_gene_symbol(token: str) -> bool:
    return (
        len(token) >= 3
        and token.upper() not in COMMON_NON_GENES
        and not token.isdigit()
    )


def find_gene_symbols(text: str) -> list[str]:
    """Gene-symbol-shaped tokens in `text`, minus common acronyms."""
    return _unique(
        match.group(0)
        for match in GENE_PATTERN.finditer(text)
        if _is_gene_symbol(match.group(0))
    )


def _find_all(pattern: re.Pattern[str], text: str) -> list[str]:
    return _unique(match.group(0) for match in pattern.finditer(text))


def find_indicator_keywords(text: str) -> list[str]:
    """Indicator words of every query type that has at least one hit in `text`."""
    text_lower = text.lower()
    keywords: list[str] = []
    for indicators in QUERY_TYPE_INDICATORS.values():
        hits = [indicator for indicator in indicators if indicator in text_lower]
        keywords.extend(hits)
    return _unique(keywords)


class RegexEntityExtractor:
    """Rule-based entity extractor. Deterministic, no I/O, never raises."""

    method = "regex"

    def extract(self, text: str) -> ExtractedEntities:
        entities = ExtractedEntities(
            genes=find_gene_symbols(text),
            proteins=_find_all(PROTEIN_PATTERN, text),
            diseases=_find_all(DISEASE_PATTERN, text),
            pathways=_find_all(PATHWAY_PATTERN, text),
        )
        if entities.is_empty():
            entities.keywords = find_indicator_keywords(text)
        return entities


def extract_entities(text: str) -> ExtractedEntities:
    """Convenience wrapper around RegexEntityExtractor."""
    return RegexEntityExtractor().extract(text)


def extract_genes_from_titles(citations: Iterable[Citation]) -> list[str]:
    """Gene symbols mentioned in citation titles, in first-seen order."""
    return _unique(
        gene for citation in citations for gene in find_gene_symbols(citation.title)
    )
