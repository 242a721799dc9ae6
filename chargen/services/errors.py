"""Error types for recovering JSON from LLM output."""

from enum import Enum
from typing import Optional


class RecoveryErrorKind(str, Enum):
    """Why no JSON object could be recovered."""
    NO_JSON_FOUND = "no_json_found"
    MALFORMED_JSON = "malformed_json"


class RecoveryError(Exception):
    """
    Recovery error with kind context; `detail` holds the parser message, if any.

    Subclasses fix the kind. Raised directly, it defaults to MALFORMED_JSON unless
    a kind is passed.
    """
    kind: RecoveryErrorKind = RecoveryErrorKind.MALFORMED_JSON

    def __init__(
        self,
        message: str,
        detail: Optional[str] = None,
        cause: Optional[Exception] = None,
        kind: Optional[RecoveryErrorKind] = None,
    ):
        if kind is not None:
            self.kind = kind
        self.message = message
        self.detail = detail
        self.cause = cause
        super().__init__(f"[{self.kind.value}] {message}")


class NoJsonFoundError(RecoveryError):
    """The text has no `{ ... }` boundary to extract."""
    kind = RecoveryErrorKind.NO_JSON_FOUND


class MalformedJsonError(RecoveryError):
    """A `{ ... }` candidate was found but would not parse, even after fence stripping."""
    kind = RecoveryErrorKind.MALFORMED_JSON


ERRORS_BY_KIND: dict[RecoveryErrorKind, type[RecoveryError]] = {
    RecoveryErrorKind.NO_JSON_FOUND: NoJsonFoundError,
    RecoveryErrorKind.MALFORMED_JSON: MalformedJsonError,
}
