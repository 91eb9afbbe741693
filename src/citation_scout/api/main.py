"""FastAPI application."""

from functools import lru_cache

from fastapi import Depends, FastAPI
from pydantic import Field

from citation_scout import __version__
from citation_scout.models.model_citation import CitationOptions, CitationQueryResult
from citation_scout.services.citations import CitationService

app = FastAPI(
    title="citation-scout API",
    description="Ranked PubMed citations for biomedical questions",
    version=__version__,
)


class CitationRequest(CitationOptions):
    """Request body for POST /citations."""

    query: str = Field(min_length=1)


@lru_cache
def get_citation_service() -> CitationService:
    return CitationService.from_settings()


@app.get("/health")
async def health_check() -> dict[str, str]:
    """Health check endpoint."""
    return {"status": "healthy", "version": __version__}


@app.post(
    "/citations",
    response_model=CitationQueryResult,
    response_model_by_alias=True,
)
async def fetch_citations(
    request: CitationRequest,
    service: CitationService = Depends(get_citation_service),
) -> CitationQueryResult:
    """Extract entities, build a PubMed query and return ranked citations."""
    options = CitationOptions.model_validate(request.model_dump(exclude={"query"}))
    return await service.fetch_citations(request.query, options)
