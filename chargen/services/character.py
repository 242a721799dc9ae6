"""
Character generation service.

generate / refine -> LLM chat -> recover JSON -> normalize -> {character, rawPrompt, rawResponse}
fix_json          -> recover JSON -> normalize

Public API (for routers):
  - CharacterGeneratorService, character_generator_service
  - fix_json
"""

from __future__ import annotations

__all__ = [
    "CharacterGeneratorService",
    "character_generator_service",
    "fix_json",
]

import logging
from typing import Any, Callable

from chargen.domain import new_template
from chargen.prompts.character import (
    build_generation_messages,
    build_refinement_messages,
    suggest_name,
)
from chargen.providers import ChatProvider, get_chat_provider

from .normalizer import normalize_character
from .recovery import recover

logger = logging.getLogger(__name__)

ProviderFactory = Callable[..., ChatProvider]


def fix_json(content: str) -> dict[str, Any]:
    """
    Recover and normalize a character from raw LLM text.

    Raises:
        RecoveryError: If no JSON object could be recovered (never raised by normalization).
    """
    return normalize_character(recover(content))


class CharacterGeneratorService:
    def __init__(self, provider_factory: ProviderFactory = get_chat_provider):
        self._provider_factory = provider_factory

    def fix_json(self, content: str) -> dict[str, Any]:
        return fix_json(content)

    def _result(self, prompt: str, reply: str) -> dict[str, Any]:
        return {
            "character": fix_json(reply),
            "rawPrompt": prompt,
            "rawResponse": reply,
        }

    async def generate_character(self, prompt: str, model: str, api_key: str) -> dict[str, Any]:
        """
        Generate a new character from a free-form description.

        Raises:
            ValueError: If prompt, model or api_key is missing.
            ChatServiceError: If the LLM call fails.
            RecoveryError: If the reply holds no usable JSON.
        """
        if not prompt:
            raise ValueError("Prompt is required")
        if not model:
            raise ValueError("Model is required")
        if not api_key:
            raise ValueError("API key is required")

        template = new_template(name=suggest_name(prompt))
        messages = build_generation_messages(prompt, template)

        chat = self._provider_factory(model=model, api_key=api_key)
        logger.info("generate_character: model=%s prompt_chars=%d", model, len(prompt))
        reply = await chat.chat(messages)
        return self._result(prompt, reply)

    async def refine_character(
        self,
        prompt: str,
        model: str,
        current_character: dict[str, Any],
        api_key: str,
    ) -> dict[str, Any]:
        """
        Refine an existing character following the given instructions.

        Raises:
            ValueError: If an argument is missing.
            ChatServiceError: If the LLM call fails.
            RecoveryError: If the reply holds no usable JSON.
        """
        if not prompt or not model or not current_character:
            raise ValueError("Missing required arguments")
        if not api_key:
            raise ValueError("API key is required")

        existing_knowledge = current_character.get("knowledge")
        keep_knowledge = isinstance(existing_knowledge, list) and len(existing_knowledge) > 0

        messages = build_refinement_messages(
            prompt,
            current_character,
            new_template(),
            keep_knowledge=keep_knowledge,
        )

        chat = self._provider_factory(model=model, api_key=api_key)
        logger.info(
            "refine_character: model=%s keep_knowledge=%s prompt_chars=%d",
            model,
            keep_knowledge,
            len(prompt),
        )
        reply = await chat.chat(messages)
        return self._result(prompt, reply)


character_generator_service = CharacterGeneratorService()
