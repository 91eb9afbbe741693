"""Command-line interface for citation-scout."""

import asyncio
import logging
from pathlib import Path

import click

from citation_scout.config import get_settings
from citation_scout.helpers.citation_format import render_citations_markdown
from citation_scout.models.model_citation import CitationOptions
from citation_scout.services.citations import CitationService


@click.group()
@click.version_option(package_name="citation-scout")
def main():
    """citation-scout: ranked PubMed citations for biomedical questions."""
    logging.basicConfig(
        level=get_settings().log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


@main.command()
@click.argument("query")
@click.option(
    "-n",
    "--max-citations",
    type=click.IntRange(min=1),
    default=None,
    help="Number of citations to return [default: PUBMED_MAX_CITATIONS]",
)
@click.option(
    "--reviews/--no-reviews",
    default=None,
    help="Restrict the search to review articles",
)
@click.option(
    "--max-age",
    type=click.IntRange(min=0),
    default=None,
    help="Only include articles from the last N years (0 disables)",
)
@click.option("--use-llm", is_flag=True, help="Try LLM extraction/query generation first")
@click.option(
    "-f",
    "--format",
    "output_format",
    type=click.Choice(["markdown", "json"]),
    default="markdown",
    show_default=True,
)
@click.option("-o", "--output", type=click.Path(), help="Output file path")
def search(
    query: str,
    max_citations: int | None,
    reviews: bool | None,
    max_age: int | None,
    use_llm: bool,
    output_format: str,
    output: str | None,
):
    """Find PubMed citations for a biomedical QUERY."""
    options = CitationOptions(
        max_citations=max_citations,
        prioritize_reviews=reviews,
        max_age_years=max_age,
        use_alternate_extraction=use_llm,
    )
    service = CitationService.from_settings()
    result = asyncio.run(service.fetch_citations(query, options))

    if output_format == "json":
        rendered = result.model_dump_json(by_alias=True, indent=2)
    else:
        rendered = render_citations_markdown(result.citations)

    if output:
        Path(output).write_text(rendered)
        click.echo(f"Results saved to: {output}")
    else:
        click.echo(f"PubMed query: {result.optimized_query}\n")
        click.echo(rendered)


if __name__ == "__main__":
    main()
