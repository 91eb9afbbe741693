"""Unit tests for the rule-based query builder and query filters."""

import pytest

from citation_scout.models.model_citation import ExtractedEntities
from citation_scout.services.query_builder import (
    QueryIntent,
    RuleBasedQueryBuilder,
    apply_query_filters,
    build_rule_based_query,
    classify_intent,
)

GENE_FOCUS = (
    "(Genes, Medical[MeSH Terms] OR Genetic Predisposition to Disease[MeSH Terms]"
    ' OR Mutation[MeSH Terms] OR "gene"[Title/Abstract] OR "genetic*"[Title/Abstract]'
    ' OR "mutation*"[Title/Abstract] OR "variant*"[Title/Abstract]'
    ' OR "allele*"[Title/Abstract] OR "polymorphism*"[Title/Abstract])'
)
PATHWAY_FOCUS = (
    "(Signal Transduction[MeSH Terms] OR Metabolic Pathways[MeSH Terms]"
    ' OR "pathway"[Title/Abstract] OR "signaling"[Title/Abstract]'
    ' OR "signalling"[Title/Abstract] OR "cascade"[Title/Abstract]'
    ' OR "metabolic process"[Title/Abstract])'
)
PROTEIN_FOCUS = (
    '(Proteins[MeSH Terms] OR "protein"[Title/Abstract] OR "receptor"[Title/Abstract]'
    ' OR "enzyme"[Title/Abstract] OR "kinase"[Title/Abstract]'
    ' OR "antibody"[Title/Abstract])'
)
LUNG_CANCER = '("Lung cancer"[MeSH Terms] OR "Lung cancer"[Title/Abstract])'


class TestClassifyIntent:
    def test_indicator_words(self):
        intent = classify_intent("Which GENE variant alters receptor signaling?", ExtractedEntities())
        assert intent == QueryIntent(gene=True, pathway=True, protein=True, disease=False)

    def test_disease_from_entities(self):
        intent = classify_intent("TP53 in tumours", ExtractedEntities(diseases=["Lung cancer"]))
        assert intent.disease is True
        assert intent.gene is False


class TestRuleBasedQueryBuilder:
    def test_disease_fragment(self):
        entities = ExtractedEntities(diseases=["Parkinson's disease"])

        query = build_rule_based_query("Treatments for Parkinson's disease", entities)

        assert query == (
            "(\"Parkinson's disease\"[MeSH Terms] OR "
            "\"Parkinson's disease\"[Title/Abstract])"
        )

    def test_gene_focus_with_gene_entities(self):
        entities = ExtractedEntities(genes=["BRCA1"])

        query = build_rule_based_query("What causes BRCA1 mutations?", entities)

        assert query == f'{GENE_FOCUS} AND ("BRCA1"[Gene/Protein Name])'

    def test_only_one_focus_block(self):
        query = build_rule_based_query(
            "gene and protein roles in the signaling pathway", ExtractedEntities()
        )

        assert query == GENE_FOCUS
        assert "Signal Transduction" not in query
        assert "Proteins[MeSH Terms]" not in query

    def test_disease_first_then_residual_genes(self):
        entities = ExtractedEntities(genes=["TP53"], diseases=["Lung cancer"])

        query = build_rule_based_query("TP53 in Lung cancer", entities)

        assert query == f'{LUNG_CANCER} AND ("TP53"[Gene/Protein Name])'

    def test_disease_then_gene_focus(self):
        entities = ExtractedEntities(genes=["EGFR"], diseases=["Lung cancer"])

        query = build_rule_based_query("EGFR mutation in Lung cancer", entities)

        assert query == f'{LUNG_CANCER} AND {GENE_FOCUS} AND ("EGFR"[Gene/Protein Name])'

    def test_pathway_entities_dropped_when_disease_holds_topic(self):
        """Pathway intent with a disease: no pathway focus and no residual pathway group."""
        entities = ExtractedEntities(diseases=["Lung cancer"], pathways=["Wnt pathway"])

        query = build_rule_based_query("Which signaling pathway drives Lung cancer?", entities)

        assert query == LUNG_CANCER

    def test_pathway_focus_with_residual_genes(self):
        entities = ExtractedEntities(pathways=["Wnt pathway"], genes=["APC"])

        query = build_rule_based_query("How does the Wnt pathway affect APC?", entities)

        assert query == (
            f'{PATHWAY_FOCUS} AND ("Wnt pathway"[Title/Abstract])'
            ' AND ("APC"[Gene/Protein Name])'
        )

    def test_protein_focus(self):
        entities = ExtractedEntities(proteins=["Akt kinase"])

        query = build_rule_based_query("Which kinase regulates autophagy?", entities)

        assert query == f'{PROTEIN_FOCUS} AND ("Akt kinase"[Title/Abstract])'

    def test_residual_groups_need_a_topic(self):
        """Entities without any detected focus or disease fall back to the question."""
        entities = ExtractedEntities(genes=["EGFR"], proteins=["Insulin receptor"])

        query = build_rule_based_query("EGFR inhibitors", entities)

        assert query == '"EGFR inhibitors"'

    @pytest.mark.parametrize(
        "question, expected",
        [
            ("EGFR inhibitors", '"EGFR inhibitors"'),
            ("EGFR", "EGFR"),
            ('"EGFR inhibitors"', '"EGFR inhibitors"'),
        ],
    )
    def test_fallback_quoting(self, question, expected):
        assert RuleBasedQueryBuilder().build(question, ExtractedEntities()) == expected

    def test_fallback_logs_warning(self, caplog):
        with caplog.at_level("WARNING", logger="citation_scout.services.query_builder"):
            build_rule_based_query("hello world", ExtractedEntities())

        assert "Could not build structured query" in caplog.text

    def test_deterministic(self):
        entities = ExtractedEntities(genes=["BRCA1"], diseases=["Breast cancer"])
        question = "BRCA1 mutation in Breast cancer"
        assert build_rule_based_query(question, entities) == build_rule_based_query(
            question, entities
        )


class TestApplyQueryFilters:
    def test_review_and_date_filters(self):
        assert apply_query_filters("BRCA1", True, 5, current_year=2024) == (
            "BRCA1 AND (Review[Publication Type] AND "
            "(2019/01/01[PDAT] : 2024/12/31[PDAT]))"
        )

    def test_boolean_base_query_is_parenthesized(self):
        assert apply_query_filters("a AND b", True, 0, current_year=2024) == (
            "(a AND b) AND (Review[Publication Type])"
        )

    def test_leading_parenthesis_is_parenthesized(self):
        assert apply_query_filters("(x)", False, 2, current_year=2024) == (
            "((x)) AND ((2022/01/01[PDAT] : 2024/12/31[PDAT]))"
        )

    def test_empty_question_yields_filters_only(self):
        base = build_rule_based_query("", ExtractedEntities())

        assert apply_query_filters(base, True, 5, current_year=2026) == (
            "(Review[Publication Type] AND (2021/01/01[PDAT] : 2026/12/31[PDAT]))"
        )

    def test_no_filters(self):
        assert apply_query_filters("a OR b", False, 0) == "a OR b"
