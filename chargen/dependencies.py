from typing import Annotated

from fastapi import Header

from chargen.core import get_settings
from chargen.services import CharacterGeneratorService, character_generator_service


def get_character_service() -> CharacterGeneratorService:
    return character_generator_service


async def get_api_key(
    x_api_key: Annotated[str | None, Header(alias="X-API-Key")] = None,
) -> str | None:
    """Per-request OpenRouter key; falls back to OPENROUTER_API_KEY when the header is absent."""
    key = (x_api_key or "").strip()
    return key or get_settings().openrouter_api_key
