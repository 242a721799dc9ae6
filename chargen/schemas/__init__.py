"""Pydantic request/response schemas."""

from chargen.schemas.character import (
    CharacterResultResponse,
    FixJsonRequest,
    FixJsonResponse,
    GenerateCharacterRequest,
    ProcessFilesResponse,
    RefineCharacterRequest,
)

__all__ = [
    "CharacterResultResponse",
    "FixJsonRequest",
    "FixJsonResponse",
    "GenerateCharacterRequest",
    "ProcessFilesResponse",
    "RefineCharacterRequest",
]
