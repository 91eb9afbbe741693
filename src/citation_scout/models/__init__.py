"""Data models for citation-scout."""

from citation_scout.models.model_citation import (
    Citation,
    CitationOptions,
    CitationQueryResult,
    ExtractedEntities,
    PubmedConfig,
    RawResponse,
)

__all__ = [
    "Citation",
    "CitationOptions",
    "CitationQueryResult",
    "ExtractedEntities",
    "PubmedConfig",
    "RawResponse",
]
