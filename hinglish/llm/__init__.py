"""Remote transliteration backends."""

from hinglish.llm.base import TransliterationBackend
from hinglish.llm.gemini import GeminiTransliterator

__all__ = ["TransliterationBackend", "GeminiTransliterator"]
