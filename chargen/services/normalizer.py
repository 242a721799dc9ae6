"""
Character profile normalization.

Turns whatever the LLM produced into the canonical character shape. Never raises:
missing or wrongly typed fields fall back to template defaults, and unusable
knowledge entries are dropped. The input is not mutated; acceptable lists are
reused by reference.
"""

from __future__ import annotations

__all__ = [
    "ensure_list",
    "first_text_field",
    "to_sentence",
    "normalize_knowledge",
    "normalize_character",
]

import logging
from typing import Any, Optional

from chargen.domain import (
    KNOWLEDGE_TEXT_FIELDS,
    LIST_FIELDS,
    STRING_FIELDS,
    STYLE_FIELDS,
)

logger = logging.getLogger(__name__)

_MISSING = object()


def ensure_list(value: Any) -> list:
    """Return value if it is a list, else an empty list."""
    return value if isinstance(value, list) else []


def _ensure_dict(value: Any) -> dict:
    return value if isinstance(value, dict) else {}


def to_sentence(text: str) -> str:
    return text if text.endswith(".") else text + "."


def first_text_field(entry: dict) -> Optional[str]:
    """
    Text of an object-shaped knowledge entry.

    Looks at text, content, value in that order and returns the first string,
    empty or not. When none of those keys is present the whole entry is
    stringified; when one is present but none holds a string, returns None.
    """
    seen_field = False
    for field in KNOWLEDGE_TEXT_FIELDS:
        value = entry.get(field, _MISSING)
        if value is _MISSING or value is None:
            continue
        seen_field = True
        if isinstance(value, str):
            return value
    if seen_field:
        return None
    return str(entry)


def _normalize_knowledge_entry(entry: Any) -> Optional[str]:
    if isinstance(entry, str):
        return to_sentence(entry)
    if isinstance(entry, dict):
        text = first_text_field(entry)
        return to_sentence(text) if text is not None else None
    return None


def normalize_knowledge(raw: Any) -> list[str]:
    """Knowledge entries as period-terminated sentences; unusable entries are dropped."""
    out: list[str] = []
    for i, entry in enumerate(ensure_list(raw)):
        sentence = _normalize_knowledge_entry(entry)
        if sentence is None:
            logger.debug("normalize_knowledge: dropping entry %d of type %s", i, type(entry).__name__)
            continue
        out.append(sentence)
    return out


def _normalize_style(raw: Any) -> dict:
    style = dict(_ensure_dict(raw))
    for field in STYLE_FIELDS:
        style[field] = ensure_list(style.get(field))
    return style


def _normalize_settings(raw: Any) -> dict:
    settings = dict(_ensure_dict(raw))
    settings["secrets"] = _ensure_dict(settings.get("secrets"))
    voice = settings.get("voice")
    # A present voice is kept as-is, even without "model"
    settings["voice"] = voice if isinstance(voice, dict) else {"model": ""}
    return settings


def normalize_character(data: Any) -> dict[str, Any]:
    """Return a new dict in canonical character shape built from data."""
    if not isinstance(data, dict):
        logger.warning("normalize_character: expected an object, got %s", type(data).__name__)
        data = {}

    character = dict(data)
    for field in STRING_FIELDS:
        if not isinstance(character.get(field), str):
            character[field] = ""
    for field in LIST_FIELDS:
        character[field] = ensure_list(character.get(field))

    character["style"] = _normalize_style(character.get("style"))
    character["settings"] = _normalize_settings(character.get("settings"))
    character["knowledge"] = normalize_knowledge(character["knowledge"])
    return character
