from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class FixJsonRequest(BaseModel):
    """Raw LLM text to recover a character from."""

    content: str = ""


class FixJsonResponse(BaseModel):
    character: dict[str, Any]


class GenerateCharacterRequest(BaseModel):
    prompt: str = ""
    model: str = ""


class RefineCharacterRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    prompt: str = ""
    model: str = ""
    current_character: dict[str, Any] = Field(default_factory=dict, alias="currentCharacter")


class CharacterResultResponse(BaseModel):
    """Result of generate/refine: normalized character plus the prompt and raw LLM reply."""

    model_config = ConfigDict(populate_by_name=True)

    character: dict[str, Any]
    raw_prompt: str = Field(alias="rawPrompt")
    raw_response: str = Field(alias="rawResponse")


class ProcessFilesResponse(BaseModel):
    """Knowledge sentences extracted from the uploaded files, in upload order."""

    knowledge: list[str] = []
