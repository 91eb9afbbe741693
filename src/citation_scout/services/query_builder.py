"""
Rule-based PubMed query construction.

Turns extracted entities plus the original question into a boolean query in
PubMed field-tag syntax:

  1. Disease context: every disease as both a MeSH term and a
     Title/Abstract phrase. Always first when present.
  2. One focus block, first match of gene → pathway → protein, made of fixed
     MeSH/Title-Abstract synonyms, followed by the matching entities.
  3. Entity groups the focus did not cover, only once a topic exists.

Blocks are joined with AND. With no blocks the (quoted) question is used.
"""

import logging
from dataclasses import dataclass
from datetime import date

from citation_scout.constants import (
    GENE_FOCUS_MESH,
    GENE_FOCUS_TIAB,
    PATHWAY_FOCUS_MESH,
    PATHWAY_FOCUS_TIAB,
    PROTEIN_FOCUS_MESH,
    PROTEIN_FOCUS_TIAB,
    QUERY_TYPE_INDICATORS,
    REVIEW_FILTER,
)
from citation_scout.models.model_citation import ExtractedEntities

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class QueryIntent:
    """Which concept types the question is about."""

    gene: bool = False
    pathway: bool = False
    protein: bool = False
    disease: bool = False


def classify_intent(query: str, entities: ExtractedEntities) -> QueryIntent:
    query_lower = query.lower()

    def mentions(kind: str) -> bool:
        return any(word in query_lower for word in QUERY_TYPE_INDICATORS[kind])

    return QueryIntent(
        gene=mentions("gene"),
        pathway=mentions("pathway"),
        protein=mentions("protein"),
        disease=mentions("disease") or bool(entities.diseases),
    )


def _or_block(terms: list[str]) -> str:
    return f"({' OR '.join(terms)})"


def _tagged(terms: list[str], tag: str) -> list[str]:
    return [f'"{term}"[{tag}]' for term in terms]


def _quote_fallback(query: str) -> str:
    # Quote only if it contains spaces and isn't already quoted
    if any(ch.isspace() for ch in query) and not (
        query.startswith('"') or query.endswith('"')
    ):
        return f'"{query}"'
    return query


class RuleBasedQueryBuilder:
    """Deterministic query builder; the default when no LLM strategy is used."""

    method = "rule"

    def build(self, original_query: str, entities: ExtractedEntities) -> str:
        intent = classify_intent(original_query, entities)
        parts: list[str] = []
        topic_added = False

        if entities.diseases:
            parts.append(
                _or_block(
                    _tagged(entities.diseases, "MeSH Terms")
                    + _tagged(entities.diseases, "Title/Abstract")
                )
            )
            topic_added = True

        if intent.gene:
            parts.append(
                _or_block(GENE_FOCUS_MESH + _tagged(GENE_FOCUS_TIAB, "Title/Abstract"))
            )
            if entities.genes:
                parts.append(_or_block(_tagged(entities.genes, "Gene/Protein Name")))
            topic_added = True
        elif intent.pathway and not topic_added:
            parts.append(
                _or_block(
                    PATHWAY_FOCUS_MESH + _tagged(PATHWAY_FOCUS_TIAB, "Title/Abstract")
                )
            )
            if entities.pathways:
                parts.append(_or_block(_tagged(entities.pathways, "Title/Abstract")))
            topic_added = True
        elif intent.protein and not topic_added:
            parts.append(
                _or_block(
                    PROTEIN_FOCUS_MESH + _tagged(PROTEIN_FOCUS_TIAB, "Title/Abstract")
                )
            )
            if entities.proteins:
                parts.append(_or_block(_tagged(entities.proteins, "Title/Abstract")))
            topic_added = True

        if topic_added:
            if entities.pathways and not intent.pathway:
                parts.append(_or_block(_tagged(entities.pathways, "Title/Abstract")))
            if entities.proteins and not intent.protein:
                parts.append(_or_block(_tagged(entities.proteins, "Title/Abstract")))
            if entities.genes and not intent.gene:
                parts.append(_or_block(_tagged(entities.genes, "Gene/Protein Name")))

        if parts:
            return " AND ".join(parts)

        logger.warning(
            "Could not build structured query for: '%s'. Using original quoted query.",
            original_query,
        )
        return _quote_fallback(original_query)


def build_rule_based_query(original_query: str, entities: ExtractedEntities) -> str:
    return RuleBasedQueryBuilder().build(original_query, entities)


def apply_query_filters(
    base_query: str,
    prioritize_reviews: bool,
    max_age_years: int,
    current_year: int | None = None,
) -> str:
    """AND the review and publication-date filters onto `base_query`.

    The base query is parenthesized first when it already contains boolean
    operators or starts with a parenthesis.
    """
    filters: list[str] = []
    if prioritize_reviews:
        filters.append(REVIEW_FILTER)
    if max_age_years > 0:
        current_year = current_year or date.today().year
        min_year = current_year - max_age_years
        filters.append(f"({min_year}/01/01[PDAT] : {current_year}/12/31[PDAT])")

    if not filters:
        return base_query

    filter_block = " AND ".join(filters)
    if not base_query.strip():
        return f"({filter_block})"
    if " AND " in base_query or " OR " in base_query or base_query.startswith("("):
        return f"({base_query}) AND ({filter_block})"
    return f"{base_query} AND ({filter_block})"
