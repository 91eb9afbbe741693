"""Pytest configuration and fixtures."""

import pytest

from citation_scout.models.model_citation import Citation, PubmedConfig


@pytest.fixture
def pubmed_config() -> PubmedConfig:
    """Config with no API key and the default three attempts."""
    return PubmedConfig(max_retries=3, timeout_short=1.0, timeout_long=2.0)


@pytest.fixture
def sample_citations() -> list[Citation]:
    """Mixed reviews / research articles across several years."""
    return [
        Citation(
            title="BRCA1 mutations in hereditary breast cancer",
            authors="Smith J, Doe A",
            journal="Nature Genetics",
            pmid="10000001",
            year="2019",
            is_review=False,
            url="https://pubmed.ncbi.nlm.nih.gov/10000001/",
        ),
        Citation(
            title="Homologous recombination and BRCA2: a review",
            authors="Lee K",
            journal="Nature Reviews Cancer",
            pmid="10000002",
            year="2022",
            is_review=True,
            url="https://pubmed.ncbi.nlm.nih.gov/10000002/",
        ),
        Citation(
            title="PARP inhibitors after TP53 loss",
            authors="Garcia M",
            journal="Cell",
            pmid="10000003",
            year="2024",
            is_review=False,
            url="https://pubmed.ncbi.nlm.nih.gov/10000003/",
        ),
    ]
