"""
Character generation prompts.

Two flows, both answered by the LLM with a single character JSON object:
  generate -> description of a new character + template (with suggested name)
  refine   -> current character + template + refinement instructions

The reply goes through services.recovery / services.normalizer, so the prompts
ask for strict JSON but the pipeline does not depend on getting it.
"""

import json
import re
from typing import Any

# -----------------------------------------------------------------------------
# 1. System prompts
# -----------------------------------------------------------------------------

SYSTEM_PROMPT_GENERATION = """You are an expert creative writer and character designer specializing in creating AI personas. Your task is to create a deep, complex, and consistent character profile based on the user's description.

CRITICAL INSTRUCTIONS:
1. Output ONLY a valid JSON object.
2. Follow the provided template structure EXACTLY.
3. Ensure all arrays are populated with high-quality, relevant content.
4. "bio" should contain distinct facts about the character's life and personality.
5. "lore" should contain backstory elements.
6. "style" fields should describe HOW the character speaks (e.g., "uses slang", "speaks formally", "uses emojis").
7. "messageExamples" must be realistic dialogues.
8. DO NOT include any text outside the JSON object (no markdown, no explanations).
9. Ensure valid JSON syntax (close all braces/brackets, escape quotes if needed)."""

SYSTEM_PROMPT_REFINEMENT = """You are an expert character editor. Your task is to refine an existing character profile based on new instructions while maintaining consistency and depth.

CRITICAL INSTRUCTIONS:
1. Output ONLY a valid JSON object.
2. Follow the provided template structure EXACTLY.
3. Apply the user's refinement instructions carefully.
4. Maintain the character's core identity unless instructed otherwise.
5. Ensure valid JSON syntax.
6. DO NOT include any text outside the JSON object."""

# -----------------------------------------------------------------------------
# 2. User messages
# -----------------------------------------------------------------------------

PROMPT_GENERATE = """Template to follow:
{{TEMPLATE_JSON}}

Character description: {{DESCRIPTION}}

Generate a complete character profile as a single JSON object following the exact template structure."""

PROMPT_REFINE = """Current character data:
{{CURRENT_CHARACTER_JSON}}

Template to follow:
{{TEMPLATE_JSON}}

Refinement instructions: {{INSTRUCTIONS}}

Output the refined character data as a single JSON object. {{KNOWLEDGE_NOTE}}"""

KNOWLEDGE_NOTE = "DO NOT modify the existing knowledge array unless instructed."

# "name is Arthur", "name: Arthur", "named Arthur" -> "Arthur"
_NAME_RE = re.compile(r"name(?:d|\s+is)?(?:\s*:)?\s*([A-Z][a-zA-Z\s]+?)(?:\.|\s|$)", re.IGNORECASE)


def suggest_name(description: str) -> str:
    """Best-effort character name from a free-form description; "" when none is found."""
    match = _NAME_RE.search(description or "")
    return match.group(1).strip() if match else ""


def _dump(data: Any) -> str:
    return json.dumps(data, indent=2, ensure_ascii=False)


def build_generation_messages(description: str, template: dict) -> list[dict[str, str]]:
    user_content = (
        PROMPT_GENERATE
        .replace("{{TEMPLATE_JSON}}", _dump(template))
        .replace("{{DESCRIPTION}}", description)
    )
    return [
        {"role": "system", "content": SYSTEM_PROMPT_GENERATION},
        {"role": "user", "content": user_content},
    ]


def build_refinement_messages(
    instructions: str,
    current_character: dict,
    template: dict,
    *,
    keep_knowledge: bool = False,
) -> list[dict[str, str]]:
    user_content = (
        PROMPT_REFINE
        .replace("{{CURRENT_CHARACTER_JSON}}", _dump(current_character))
        .replace("{{TEMPLATE_JSON}}", _dump(template))
        .replace("{{INSTRUCTIONS}}", instructions)
        .replace("{{KNOWLEDGE_NOTE}}", KNOWLEDGE_NOTE if keep_knowledge else "")
        .rstrip()
    )
    return [
        {"role": "system", "content": SYSTEM_PROMPT_REFINEMENT},
        {"role": "user", "content": user_content},
    ]
