"""Hinglish to Devanagari transliteration client with voice input."""

__version__ = "1.0.0"
