# core/translations.py
"""Helpers for the per-language ``translations`` JSON objects."""
import json
from typing import Any

DEFAULT_LANG = "en"


def localize(translations: Any, lang: str = DEFAULT_LANG) -> dict:
    """Return the block for ``lang``, falling back to English, then to ``{}``."""
    if not isinstance(translations, dict):
        return {}
    return translations.get(lang) or translations.get(DEFAULT_LANG) or {}


def merge_per_language(existing: Any, incoming: dict) -> dict:
    """Shallow-merge each incoming language block into the stored one."""
    merged = dict(existing) if isinstance(existing, dict) else {}
    for lang, block in incoming.items():
        current = merged.get(lang)
        if isinstance(current, dict) and isinstance(block, dict):
            merged[lang] = {**current, **block}
        else:
            merged[lang] = block
    return merged


def merge_top_level(existing: Any, incoming: dict) -> dict:
    base = dict(existing) if isinstance(existing, dict) else {}
    return {**base, **incoming}


def load_stored(value: Any) -> dict:
    """Stored translations may be a JSON string on legacy rows."""
    if not value:
        return {}
    if isinstance(value, str):
        try:
            value = json.loads(value)
        except ValueError:
            return {}
    return value if isinstance(value, dict) else {}
