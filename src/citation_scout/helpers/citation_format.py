from urllib.parse import quote

from citation_scout.constants import LUCKY_SEARCH_URL, NO_CITATIONS_MESSAGE
from citation_scout.models.model_citation import Citation


def lucky_link(title: str) -> str:
    return LUCKY_SEARCH_URL.format(title=quote(title, safe=""))


def render_citations_markdown(citations: list[Citation]) -> str:
    """Title, authors and journal lines per citation, plus a search link when
    the citation has a URL."""
    if not citations:
        return NO_CITATIONS_MESSAGE

    lines = []
    for citation in citations:
        lines.append(f"{citation.title}  \n")
        lines.append(f"{citation.authors}  \n")
        lines.append(f"{citation.journal}\n")
        if citation.url:
            lines.append(f"[Link]({lucky_link(citation.title)})\n\n")
    return "".join(lines)
