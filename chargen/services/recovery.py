"""
JSON recovery for raw LLM output.

Stages (short-circuit on first success):
  1. Direct parse   - the whole reply with json5 (comments, trailing commas, unquoted keys).
  2. Boundaries     - first "{" to last "}" in the text. No brace matching: prose after the
                      object that contains "}" widens the candidate and can make stage 4 fail.
  3. Fence strip    - drop every ```json / ``` marker inside the candidate.
  4. Second parse   - json5 again; failure is final (MalformedJson).

Strict JSON nested too deeply for json5 falls back to the json module in both parses.

try_recover() returns a tagged result; recover() raises RecoveryError instead.
"""

from __future__ import annotations

__all__ = [
    "RecoverySuccess",
    "RecoveryFailure",
    "RecoveryResult",
    "try_recover",
    "recover",
]

import json
import logging
from dataclasses import dataclass
from typing import Any, Optional, Union

import json5

from .errors import ERRORS_BY_KIND, RecoveryError, RecoveryErrorKind

logger = logging.getLogger(__name__)

_FENCE_MARKERS = ("```json", "```")


@dataclass(frozen=True)
class RecoverySuccess:
    value: Any
    ok = True


@dataclass(frozen=True)
class RecoveryFailure:
    kind: RecoveryErrorKind
    message: str
    detail: Optional[str] = None
    ok = False

    def to_error(self) -> RecoveryError:
        return ERRORS_BY_KIND[self.kind](self.message, detail=self.detail)

    def raise_error(self):
        raise self.to_error()


RecoveryResult = Union[RecoverySuccess, RecoveryFailure]


def _parse(text: str) -> Any:
    """
    Permissive parse; raises ValueError on anything it cannot read.

    json5 is recursive descent and runs out of stack on deeply nested input, so
    strict JSON that deep is read with the json module instead.
    """
    try:
        return json5.loads(text)
    except RecursionError as e:
        logger.debug("_parse: json5 hit the recursion limit, retrying as strict JSON")
        try:
            return json.loads(text)
        except (ValueError, RecursionError) as strict_error:
            raise ValueError(f"Input nested too deeply to parse: {strict_error}") from e


def _strip_fences(text: str) -> str:
    for marker in _FENCE_MARKERS:
        text = text.replace(marker, "")
    return text


def _extract_candidate(text: str) -> Optional[str]:
    """Slice from the first "{" through the last "}"; to the end of text if there is no "}"."""
    start_idx = text.find("{")
    if start_idx == -1:
        return None
    end_idx = text.rfind("}")
    # A "{" without a later "}" is still a candidate; it fails to parse as MalformedJson
    if end_idx < start_idx:
        return text[start_idx:]
    return text[start_idx:end_idx + 1]


def try_recover(text: str) -> RecoveryResult:
    """Recover the single JSON object an LLM reply is supposed to contain."""
    text = text or ""
    try:
        return RecoverySuccess(_parse(text))
    except (ValueError, RecursionError):
        logger.debug("try_recover: direct parse failed, extracting object boundaries")

    candidate = _extract_candidate(text)
    if candidate is None:
        logger.warning("try_recover: no JSON object found in %d chars of text", len(text))
        return RecoveryFailure(
            RecoveryErrorKind.NO_JSON_FOUND,
            "No complete JSON object found in response",
        )

    candidate = _strip_fences(candidate)
    try:
        return RecoverySuccess(_parse(candidate))
    except (ValueError, RecursionError) as e:
        logger.warning("try_recover: parse failed after cleanup: %s", e)
        return RecoveryFailure(
            RecoveryErrorKind.MALFORMED_JSON,
            f"Failed to parse JSON content: {str(e)[:200]}",
            detail=str(e),
        )


def recover(text: str) -> Any:
    """
    Same as try_recover() but returns the parsed value directly.

    Raises:
        NoJsonFoundError: No "{" in the text.
        MalformedJsonError: A candidate was found but would not parse.
    """
    result = try_recover(text)
    if isinstance(result, RecoveryFailure):
        result.raise_error()
    return result.value
