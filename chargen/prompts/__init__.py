"""
LLM prompt templates for character generation and refinement.

Placeholders (double-brace, replaced before sending to the LLM):
  - {{TEMPLATE_JSON}}         : canonical character template (generate, refine)
  - {{DESCRIPTION}}           : user's character description (generate)
  - {{CURRENT_CHARACTER_JSON}}: character being refined (refine)
  - {{INSTRUCTIONS}}          : refinement instructions (refine)
  - {{KNOWLEDGE_NOTE}}        : "keep knowledge" note, empty when there is none (refine)
"""

from .character import (
    SYSTEM_PROMPT_GENERATION,
    SYSTEM_PROMPT_REFINEMENT,
    build_generation_messages,
    build_refinement_messages,
    suggest_name,
)

__all__ = [
    "SYSTEM_PROMPT_GENERATION",
    "SYSTEM_PROMPT_REFINEMENT",
    "build_generation_messages",
    "build_refinement_messages",
    "suggest_name",
]
