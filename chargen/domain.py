"""
Domain constants for character profiles.
Single source of truth for prompts, normalization, and API.
"""

import copy
from typing import Any

# -----------------------------------------------------------------------------
# 1. Canonical template
# -----------------------------------------------------------------------------

CHARACTER_TEMPLATE: dict[str, Any] = {
    "name": "",
    "clients": [],
    "modelProvider": "",
    "settings": {
        "secrets": {},
        "voice": {
            "model": "",
        },
    },
    "plugins": [],
    "bio": [],
    "lore": [],
    "knowledge": [],
    "messageExamples": [],
    "postExamples": [],
    "topics": [],
    "style": {
        "all": [],
        "chat": [],
        "post": [],
    },
    "adjectives": [],
    "people": [],
}

# -----------------------------------------------------------------------------
# 2. Field groups
# -----------------------------------------------------------------------------

# Top-level fields that must always be lists
LIST_FIELDS: tuple[str, ...] = (
    "clients",
    "plugins",
    "bio",
    "lore",
    "topics",
    "knowledge",
    "messageExamples",
    "postExamples",
    "adjectives",
    "people",
)

STRING_FIELDS: tuple[str, ...] = ("name", "modelProvider")

STYLE_FIELDS: tuple[str, ...] = ("all", "chat", "post")

# Checked in order when a knowledge entry is an object instead of a string
KNOWLEDGE_TEXT_FIELDS: tuple[str, ...] = ("text", "content", "value")

# Uploaded files read as plain text for knowledge extraction
TEXT_FILE_EXTENSIONS: frozenset[str] = frozenset({".txt", ".md", ".json", ".yml", ".csv"})

PDF_CONTENT_TYPE = "application/pdf"


def new_template(**overrides: Any) -> dict[str, Any]:
    """Fresh deep copy of the template with top-level keys replaced."""
    template = copy.deepcopy(CHARACTER_TEMPLATE)
    template.update(overrides)
    return template
