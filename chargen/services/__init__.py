"""Character JSON recovery, normalization, generation, and knowledge extraction."""

from .character import CharacterGeneratorService, character_generator_service, fix_json
from .errors import MalformedJsonError, NoJsonFoundError, RecoveryError, RecoveryErrorKind
from .knowledge import UploadedDocument, extract_knowledge, split_sentences
from .normalizer import ensure_list, normalize_character
from .recovery import RecoveryFailure, RecoveryResult, RecoverySuccess, recover, try_recover

__all__ = [
    "CharacterGeneratorService",
    "character_generator_service",
    "fix_json",
    "MalformedJsonError",
    "NoJsonFoundError",
    "RecoveryError",
    "RecoveryErrorKind",
    "UploadedDocument",
    "extract_knowledge",
    "split_sentences",
    "ensure_list",
    "normalize_character",
    "RecoveryFailure",
    "RecoveryResult",
    "RecoverySuccess",
    "recover",
    "try_recover",
]
