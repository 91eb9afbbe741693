"""Citation ranking by document type and recency."""

from datetime import date

from citation_scout.constants import RECENCY_DECAY, RECENCY_WEIGHT, REVIEW_BONUS
from citation_scout.models.model_citation import Citation


def _year_as_int(year: str | None) -> int | None:
    if not year:
        return None
    try:
        return int(year.strip())
    except ValueError:
        return None


def score_citation(citation: Citation, current_year: int) -> float:
    """Review bonus plus exponential recency decay (max 5, so a review always wins)."""
    score = REVIEW_BONUS if citation.is_review else 0.0
    year = _year_as_int(citation.year)
    if year is not None:
        years_old = max(0, current_year - year)
        score += RECENCY_WEIGHT * RECENCY_DECAY**years_old
    return score


def rank_citations(citations: list[Citation], current_year: int | None = None) -> None:
    """Score and sort `citations` in place, best first. Ties keep input order."""
    current_year = current_year or date.today().year
    for citation in citations:
        citation.relevance_score = score_citation(citation, current_year)
    citations.sort(key=lambda c: c.relevance_score or 0.0, reverse=True)
