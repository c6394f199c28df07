"""Transliteration backend protocol."""

from __future__ import annotations

from typing import Protocol

from hinglish.core.state import TransliterationCandidate


class TransliterationBackend(Protocol):
    """Remote service turning Hinglish text into Devanagari candidates."""

    async def transliterate(self, text: str) -> list[TransliterationCandidate]:
        """Return candidates in service order; raise ServiceError on failure.

        Blank input returns an empty list without contacting the service.
        """
