"""Application configuration management."""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path

CONFIG_DIR = Path.home() / ".config" / "hinglish-transliterator"
CONFIG_FILE = CONFIG_DIR / "config.json"

DEFAULT_CONFIG = {
    # Models
    "model": "gemini-3-flash-preview",
    "live_model": "gemini-2.5-flash-native-audio-preview-09-2025",
    "voice_name": "Zephyr",
    # Audio settings (16 kHz mono PCM is what the live session expects)
    "rate": 16000,
    "chunk": 4096,
    "channels": 1,
    "input_device": None,
}

VALID_RATES = {8000, 16000, 24000, 48000}

_LOG = logging.getLogger("hinglish")


def _positive_int(value, default):
    if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
        return default
    return value


def normalize_config(config):
    """Merge saved values over the defaults and reset anything invalid."""
    normalized = DEFAULT_CONFIG.copy()
    if isinstance(config, dict):
        normalized.update(config)

    for key in ("model", "live_model", "voice_name"):
        if not isinstance(normalized.get(key), str) or not normalized[key].strip():
            normalized[key] = DEFAULT_CONFIG[key]

    if normalized.get("rate") not in VALID_RATES:
        normalized["rate"] = DEFAULT_CONFIG["rate"]
    normalized["chunk"] = _positive_int(normalized.get("chunk"), DEFAULT_CONFIG["chunk"])
    normalized["channels"] = _positive_int(normalized.get("channels"), DEFAULT_CONFIG["channels"])

    device = normalized.get("input_device")
    if device is not None and (isinstance(device, bool) or not isinstance(device, int)):
        normalized["input_device"] = None

    return normalized


def load_config():
    """Load config from file or fall back to defaults."""
    try:
        if CONFIG_FILE.exists():
            with open(CONFIG_FILE, encoding="utf-8") as f:
                saved = json.load(f)
                return normalize_config(saved)
    except Exception as exc:
        _LOG.warning(f"Failed to load config from {CONFIG_FILE}: {exc}")
    return normalize_config({})


def save_config(config):
    """Persist the normalized config, e.g. after /device picks a microphone.

    The file is swapped in atomically. Returns False when it could not be written.
    """
    cleaned = normalize_config(config)
    staging = CONFIG_FILE.with_name(CONFIG_FILE.name + ".tmp")
    try:
        CONFIG_DIR.mkdir(parents=True, exist_ok=True)
        staging.write_text(json.dumps(cleaned, indent=2), encoding="utf-8")
        staging.replace(CONFIG_FILE)
    except (OSError, TypeError, ValueError) as exc:
        _LOG.warning(f"Config not saved, keeping previous {CONFIG_FILE.name}: {exc}")
        return False
    _LOG.debug(f"Saved config (input_device={cleaned['input_device']})")
    return True


def get_api_key():
    """Return the Gemini API key from the environment, or None."""
    return os.environ.get("GEMINI_API_KEY") or os.environ.get("API_KEY") or None
