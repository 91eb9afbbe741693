"""Generic LLM call helpers."""

import json
import logging
import re
from functools import lru_cache

from anthropic import NOT_GIVEN, AsyncAnthropic

from citation_scout.config import get_settings

logger = logging.getLogger(__name__)


@lru_cache
def get_client() -> AsyncAnthropic:
    return AsyncAnthropic(api_key=get_settings().anthropic_api_key)


def parse_llm_json(response: str) -> dict:
    """Decode the first JSON object in an LLM response.

    Raises json.JSONDecodeError when no object can be decoded.
    """
    match = re.search(r"\{.*\}", response, re.DOTALL)
    data = json.loads(match.group() if match else response)
    if not isinstance(data, dict):
        raise json.JSONDecodeError("Expected a JSON object", response, 0)
    return data


async def query_llm(
    prompt: str,
    system: str = "",
    max_tokens: int = 1024,
    temperature: float | None = None,
) -> str:
    response = await get_client().messages.create(
        model=get_settings().llm_model,
        max_tokens=max_tokens,
        system=system or NOT_GIVEN,
        temperature=NOT_GIVEN if temperature is None else temperature,
        messages=[{"role": "user", "content": prompt}],
    )
    return response.content[0].text


async def query_small_llm(
    prompt: str,
    system: str = "",
    max_tokens: int = 1024,
    temperature: float | None = None,
) -> str:
    response = await get_client().messages.create(
        model=get_settings().small_llm_model,
        max_tokens=max_tokens,
        system=system or NOT_GIVEN,
        temperature=NOT_GIVEN if temperature is None else temperature,
        messages=[{"role": "user", "content": prompt}],
    )
    return response.content[0].text
