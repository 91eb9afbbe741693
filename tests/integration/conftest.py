"""Shared fixtures for integration tests."""

import pytest

from citation_scout.config import get_settings
from citation_scout.data_sources.pubmed import PubMedClient
from citation_scout.models.model_citation import PubmedConfig


@pytest.fixture
def live_config() -> PubmedConfig:
    """PubmedConfig from the environment (NCBI_API_KEY is optional)."""
    return PubmedConfig.from_settings(get_settings())


@pytest.fixture
async def pubmed_client(live_config):
    """Create and tear down a PubMedClient."""
    c = PubMedClient(live_config)
    yield c
    await c.close()
