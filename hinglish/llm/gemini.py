"""Gemini transliteration backend."""

from __future__ import annotations

import json
import logging
import time

from google import genai
from google.genai import types

from hinglish.core.errors import ServiceError
from hinglish.core.state import TransliterationCandidate

LOG = logging.getLogger("hinglish")

DEFAULT_MODEL = "gemini-3-flash-preview"

SYSTEM_INSTRUCTION = (
    "You are a specialized Hinglish-to-Hindi transliterator. Given Romanized Hindi text, "
    "return an array of possible Devanagari translations. Include formal variations, "
    "common spellings, and informal versions if applicable. Keep the context brief."
)

RESPONSE_SCHEMA = types.Schema(
    type=types.Type.ARRAY,
    items=types.Schema(
        type=types.Type.OBJECT,
        properties={
            "hindi": types.Schema(
                type=types.Type.STRING,
                description="The Devanagari Hindi word or phrase.",
            ),
            "context": types.Schema(
                type=types.Type.STRING,
                description=(
                    "Brief context about this specific variation "
                    "(e.g., 'Formal', 'Informal', 'Common Spelling')."
                ),
            ),
        },
        required=["hindi", "context"],
    ),
)


def build_prompt(text):
    return f'Convert this Romanized Hindi (Hinglish) into Devanagari Hindi: "{text}"'


def parse_candidates(raw_text):
    """Decode the model's JSON reply into candidates, raising ServiceError if malformed."""
    try:
        data = json.loads(raw_text or "[]")
    except ValueError as exc:
        raise ServiceError(f"Model returned invalid JSON: {exc}") from exc
    if not isinstance(data, list):
        raise ServiceError(f"Expected a JSON array, got {type(data).__name__}")
    try:
        return [TransliterationCandidate.from_dict(item) for item in data]
    except ValueError as exc:
        raise ServiceError(f"Malformed candidate in model response: {exc}") from exc


class GeminiTransliterator:
    """Asks a Gemini model for Devanagari renderings of Hinglish text."""

    def __init__(self, api_key=None, model=DEFAULT_MODEL, client=None):
        self.model = model
        self.client = client or genai.Client(api_key=api_key)
        self.config = types.GenerateContentConfig(
            system_instruction=SYSTEM_INSTRUCTION,
            response_mime_type="application/json",
            response_schema=RESPONSE_SCHEMA,
        )

    async def transliterate(self, text):
        if not text.strip():
            return []

        start = time.perf_counter()
        try:
            response = await self.client.aio.models.generate_content(
                model=self.model,
                contents=build_prompt(text),
                config=self.config,
            )
        except Exception as exc:
            LOG.error(f"Gemini request failed: {exc}", exc_info=True)
            raise ServiceError(f"Transliteration request failed: {exc}") from exc

        latency_ms = (time.perf_counter() - start) * 1000
        candidates = parse_candidates(response.text)
        LOG.info(f"Gemini returned {len(candidates)} candidates in {latency_ms:.0f} ms")
        return candidates
