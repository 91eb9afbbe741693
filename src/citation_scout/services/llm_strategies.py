"""
LLM-backed alternatives to the rule-based extractor and query builder.

Both expose the same capability as their rule-based counterparts but are
async and return None on any failure, in which case the citation service
uses the rule-based result.
"""

import json
import logging
import re
from pathlib import Path

from anthropic import APIError
from pydantic import ValidationError

from citation_scout.config import get_settings
from citation_scout.models.model_citation import ExtractedEntities
from citation_scout.services.llm import parse_llm_json, query_llm, query_small_llm

logger = logging.getLogger(__name__)

_PROMPTS_DIR = Path(__file__).parent.parent / "prompts"

_CODE_FENCE_RE = re.compile(r"^```[^\n]*\n(.*?)\n?```$", re.DOTALL)
_DOUBLE_QUOTED_RE = re.compile(r'^"([^"]*)"$', re.DOTALL)
# Apostrophes inside words ("Parkinson's") do not end a single-quoted query.
_SINGLE_QUOTED_RE = re.compile(r"^'((?:[^']|(?<=\w)'(?=\w))*)'$", re.DOTALL)


def clean_generated_query(text: str) -> str:
    """Strip markdown code fences and surrounding quotes from an LLM query."""
    query = text.strip()
    fenced = _CODE_FENCE_RE.match(query)
    if fenced:
        query = fenced.group(1).strip()
    quoted = _DOUBLE_QUOTED_RE.match(query) or _SINGLE_QUOTED_RE.match(query)
    if quoted:
        query = quoted.group(1).strip()
    return query


class LlmEntityExtractor:
    method = "llm"

    def __init__(
        self, max_tokens: int | None = None, temperature: float | None = None
    ) -> None:
        settings = get_settings()
        self.max_tokens = max_tokens or settings.extraction_max_tokens
        self.temperature = (
            settings.extraction_temperature if temperature is None else temperature
        )
        self.system_prompt = (_PROMPTS_DIR / "entity_extraction.txt").read_text()

    async def extract(self, text: str) -> ExtractedEntities | None:
        try:
            response = await query_small_llm(
                f"Extract biomedical entities from this text: {text}",
                system=self.system_prompt,
                max_tokens=self.max_tokens,
                temperature=self.temperature,
            )
            entities = ExtractedEntities.model_validate(parse_llm_json(response))
        # AttributeError: the first content block is not a text block
        except (
            APIError,
            json.JSONDecodeError,
            ValidationError,
            IndexError,
            AttributeError,
        ) as e:
            logger.error("Error using LLM for entity extraction: %s", e)
            return None

        logger.info("Extracted entities using LLM: %s", entities.summary() or "none")
        return entities


class LlmQueryBuilder:
    method = "llm"

    def __init__(
        self, max_tokens: int | None = None, temperature: float | None = None
    ) -> None:
        settings = get_settings()
        self.max_tokens = max_tokens or settings.generation_max_tokens
        self.temperature = (
            settings.generation_temperature if temperature is None else temperature
        )
        self.system_prompt = (_PROMPTS_DIR / "query_generation.txt").read_text()

    async def build(self, question: str, entities: ExtractedEntities) -> str | None:
        entity_lines = "\n".join(
            f"{category.upper()}: {', '.join(values)}"
            for category, values in entities.model_dump().items()
            if values
        )
        prompt = (
            "Generate an optimized PubMed search query for this question:\n\n"
            f"QUESTION: {question}\n\n"
            f"EXTRACTED ENTITIES:\n{entity_lines or 'none'}\n\n"
            "Return just the search query string using proper PubMed syntax."
        )
        try:
            response = await query_llm(
                prompt,
                system=self.system_prompt,
                max_tokens=self.max_tokens,
                temperature=self.temperature,
            )
        except (APIError, IndexError, AttributeError) as e:
            logger.error("Error generating query with LLM: %s", e)
            return None

        query = clean_generated_query(response)
        if not query:
            return None
        logger.info("Generated LLM-optimized PubMed query: %s", query)
        return query
