"""Unit tests for the regex entity extractor."""

import pytest

from citation_scout.models.model_citation import Citation
from citation_scout.services.entity_extractor import (
    RegexEntityExtractor,
    extract_entities,
    extract_genes_from_titles,
    find_gene_symbols,
    find_indicator_keywords,
)


class TestFindGeneSymbols:
    @pytest.mark.parametrize(
        "text, expected",
        [
            ("What causes BRCA1 mutations?", ["BRCA1"]),
            ("Role of TP53 and EGFR in tumours", ["TP53", "EGFR"]),
            ("IL-6 levels in sepsis", ["IL-6"]),
            ("BRCA1 or BRCA1 again", ["BRCA1"]),
        ],
    )
    def test_finds_symbols(self, text, expected):
        assert find_gene_symbols(text) == expected

    @pytest.mark.parametrize(
        "text",
        [
            "DNA and RNA repair in HIV",
            "A PCR study of THE cohort",
            "Is IL relevant?",  # too short
            "no uppercase tokens here",
        ],
    )
    def test_stoplist_and_short_tokens_rejected(self, text):
        assert find_gene_symbols(text) == []


class TestRegexEntityExtractor:
    def test_gene_question(self):
        entities = extract_entities("What causes BRCA1 mutations?")

        assert entities.genes == ["BRCA1"]
        assert entities.proteins == []
        assert entities.diseases == []
        assert entities.pathways == []
        assert entities.keywords == []

    def test_disease_names(self):
        entities = extract_entities("TP53 in Lung cancer and Alzheimer's disease")

        assert entities.genes == ["TP53"]
        assert entities.diseases == ["Lung cancer", "Alzheimer's disease"]

    def test_protein_names(self):
        entities = extract_entities("How does the Insulin receptor affect glucose?")
        assert entities.proteins == ["Insulin receptor"]

    def test_pathway_names(self):
        entities = extract_entities("Crosstalk with the Wnt pathway")
        assert entities.pathways == ["Wnt pathway"]

    def test_keywords_only_when_nothing_else_found(self):
        entities = extract_entities("what mutation causes this condition")

        assert entities.genes == []
        assert entities.keywords == ["mutation", "condition"]

    def test_keywords_skipped_when_entities_found(self):
        entities = extract_entities("which mutation in BRCA1 matters")

        assert entities.genes == ["BRCA1"]
        assert entities.keywords == []

    def test_empty_text(self):
        entities = RegexEntityExtractor().extract("")
        assert entities.is_empty()

    def test_deterministic(self):
        text = "EGFR signaling in Lung cancer"
        assert extract_entities(text) == extract_entities(text)

    def test_method_name(self):
        assert RegexEntityExtractor.method == "regex"


class TestFindIndicatorKeywords:
    def test_only_present_words(self):
        assert find_indicator_keywords("Which Kinase drives this cascade?") == [
            "kinase",
            "cascade",
        ]

    def test_none(self):
        assert find_indicator_keywords("hello world") == []


class TestExtractGenesFromTitles:
    def test_first_seen_order(self, sample_citations):
        assert extract_genes_from_titles(sample_citations) == [
            "BRCA1",
            "BRCA2",
            "PARP",
            "TP53",
        ]

    def test_deduplicated_across_titles(self):
        citations = [
            Citation(title="KRAS in pancreatic tumours"),
            Citation(title="KRAS and NRAS inhibitors"),
        ]
        assert extract_genes_from_titles(citations) == ["KRAS", "NRAS"]

    def test_empty(self):
        assert extract_genes_from_titles([]) == []
