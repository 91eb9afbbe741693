"""Unit tests for citation rendering helpers."""

from citation_scout.helpers.citation_format import lucky_link, render_citations_markdown
from citation_scout.models.model_citation import Citation


def test_lucky_link_encodes_title():
    link = lucky_link("BRCA1 & BRCA2: a review/update")

    assert link.startswith("https://www.google.com/search?q=BRCA1%20%26%20BRCA2%3A%20a%20review%2Fupdate")
    assert link.endswith("&btnI=I%27m%20Feeling%20Lucky")


def test_render_empty():
    assert render_citations_markdown([]) == "No citations found."


def test_render_with_link():
    citation = Citation(
        title="SNCA in Parkinson's disease",
        authors="Smith J",
        journal="Brain",
        url="https://pubmed.ncbi.nlm.nih.gov/1/",
    )

    rendered = render_citations_markdown([citation])

    assert rendered == (
        "SNCA in Parkinson's disease  \n"
        "Smith J  \n"
        "Brain\n"
        f"[Link]({lucky_link(citation.title)})\n\n"
    )


def test_render_without_link():
    rendered = render_citations_markdown([Citation(title="No PMID")])

    assert rendered == "No PMID  \nUnknown  \nUnknown Journal\n"
    assert "[Link]" not in rendered


def test_render_keeps_order(sample_citations):
    rendered = render_citations_markdown(sample_citations)

    positions = [rendered.index(c.title) for c in sample_citations]
    assert positions == sorted(positions)
