"""
Pydantic models for citation retrieval.

These are the data contracts between the PubMed client, the parsers and the
citation service. Callers receive these models - they never see raw API
responses.
"""

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from citation_scout.config import Settings
from citation_scout.constants import (
    DEFAULT_MAX_AGE_YEARS,
    DEFAULT_MAX_CITATIONS,
    DEFAULT_MAX_RETRIES,
    DEFAULT_PRIORITIZE_REVIEWS,
    DEFAULT_TIMEOUT_LONG,
    DEFAULT_TIMEOUT_SHORT,
)

_CAMEL = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class Citation(BaseModel):
    """A single bibliographic record, independent of the source encoding."""

    model_config = _CAMEL

    title: str = Field(min_length=1)
    authors: str = "Unknown"  # "Smith J, Doe A"
    journal: str = "Unknown Journal"
    pmid: str | None = None
    year: str | None = None  # four digits, e.g. "2023"
    doi: str | None = None
    is_review: bool = False
    relevance_score: float | None = None  # set by the ranker only
    url: str | None = None


class ExtractedEntities(BaseModel):
    """Biomedical concepts found in a free-text question."""

    genes: list[str] = []
    proteins: list[str] = []
    diseases: list[str] = []
    pathways: list[str] = []
    keywords: list[str] = []

    @field_validator("*", mode="before")
    @classmethod
    def coerce_lists(cls, value):
        if value is None:
            return []
        if isinstance(value, str):
            return [value]
        return value

    @field_validator("*")
    @classmethod
    def dedupe(cls, value: list[str]) -> list[str]:
        return list(dict.fromkeys(value))

    def is_empty(self) -> bool:
        return not any(getattr(self, name) for name in type(self).model_fields)

    def summary(self) -> str:
        """Compact "category: count" listing of the non-empty categories."""
        return ", ".join(
            f"{name}: {len(values)}"
            for name, values in self.model_dump().items()
            if values
        )


class PubmedConfig(BaseModel):
    """Read-only PubMed fetch settings shared by every citation request."""

    model_config = ConfigDict(frozen=True)

    max_retries: int = Field(default=DEFAULT_MAX_RETRIES, ge=1)
    timeout_short: float = DEFAULT_TIMEOUT_SHORT  # seconds
    timeout_long: float = DEFAULT_TIMEOUT_LONG  # seconds
    max_citations: int = Field(default=DEFAULT_MAX_CITATIONS, ge=1)
    prioritize_reviews: bool = DEFAULT_PRIORITIZE_REVIEWS
    max_age_years: int = Field(default=DEFAULT_MAX_AGE_YEARS, ge=0)
    api_key: str | None = Field(default=None, repr=False)
    log_network_requests: bool = False

    @classmethod
    def from_settings(cls, settings: Settings) -> "PubmedConfig":
        return cls(
            max_retries=settings.pubmed_max_retries,
            timeout_short=settings.pubmed_timeout_short,
            timeout_long=settings.pubmed_timeout_long,
            max_citations=settings.pubmed_max_citations,
            prioritize_reviews=settings.pubmed_prioritize_reviews,
            max_age_years=settings.pubmed_max_age_years,
            api_key=settings.ncbi_api_key or None,
            log_network_requests=settings.log_network_requests,
        )


class RawResponse(BaseModel):
    """Transport-level result of one successful HTTP attempt."""

    model_config = ConfigDict(frozen=True)

    status: int
    status_text: str = ""
    headers: dict[str, str] = {}
    data: str = ""


class CitationOptions(BaseModel):
    """Per-request overrides. None falls back to the PubmedConfig default."""

    model_config = _CAMEL

    max_citations: int | None = Field(default=None, ge=1)
    prioritize_reviews: bool | None = None
    max_age_years: int | None = Field(default=None, ge=0)
    use_alternate_extraction: bool = False


class CitationQueryResult(BaseModel):
    """Everything fetch_citations learned about one question."""

    model_config = _CAMEL

    query: str
    extracted_entities: ExtractedEntities
    optimized_query: str
    citations: list[Citation] = []
    genes_in_titles: list[str] = []
    extraction_method: Literal["llm", "regex"] = "regex"
    query_method: Literal["llm", "rule"] = "rule"
    elapsed_seconds: float = 0.0
