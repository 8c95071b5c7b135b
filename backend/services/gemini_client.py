"""Google Gemini API wrapper: timeout, 429 backoff and JSON parsing.

Every failure surfaces as ``UpstreamAIError`` (or the raw transport
exception) so callers can degrade to local scoring.
"""

import asyncio
import json
import logging

from google import genai
from google.genai import errors, types

from config import settings
from services.errors import UpstreamAIError

logger = logging.getLogger(__name__)

_client: genai.Client | None = None

RATE_LIMITED = 429


def get_client() -> genai.Client | None:
    global _client
    if not settings.gemini_api_key:
        logger.warning("No GEMINI_API_KEY set - AI ranking disabled")
        return None
    if _client is None:
        _client = genai.Client(api_key=settings.gemini_api_key)
    return _client


def is_configured() -> bool:
    return bool(settings.gemini_api_key)


def _strip_code_fences(text: str) -> str:
    text = text.strip()
    if text.startswith("```"):
        text = text.split("\n", 1)[1] if "\n" in text else text[3:]
        if text.endswith("```"):
            text = text[:-3]
        text = text.strip()
    return text


async def _generate(client: genai.Client, prompt: str, system_instruction: str | None) -> str:
    """One logical call; retries only rate-limited responses."""
    config = types.GenerateContentConfig(
        system_instruction=system_instruction,
        temperature=0.3,
        max_output_tokens=4096,
        response_mime_type="application/json",
    )
    for attempt, delay in enumerate([*settings.ai_retry_delays, None], start=1):
        try:
            response = await client.aio.models.generate_content(
                model=settings.gemini_model,
                contents=prompt,
                config=config,
            )
            return response.text or ""
        except errors.APIError as e:
            if e.code != RATE_LIMITED or delay is None:
                raise
            logger.warning("Gemini rate limited (attempt %d), retrying in %.1fs", attempt, delay)
            await asyncio.sleep(delay)
    return ""


async def generate_json(
    prompt: str,
    system_instruction: str | None = None,
    timeout: float | None = None,
) -> dict:
    """Send a prompt to Gemini and parse the JSON object it returns."""
    client = get_client()
    if client is None:
        raise UpstreamAIError("Gemini API key not configured")

    timeout = settings.ai_timeout_seconds if timeout is None else timeout
    try:
        text = await asyncio.wait_for(_generate(client, prompt, system_instruction), timeout=timeout)
    except asyncio.TimeoutError as e:
        raise UpstreamAIError(f"Gemini call timed out after {timeout}s") from e
    except errors.APIError as e:
        raise UpstreamAIError(f"Gemini API error {e.code}: {e.message}") from e

    try:
        data = json.loads(_strip_code_fences(text))
    except json.JSONDecodeError as e:
        raise UpstreamAIError(f"Failed to parse Gemini response as JSON: {e}") from e
    if not isinstance(data, dict):
        raise UpstreamAIError("Gemini response is not a JSON object")
    return data
