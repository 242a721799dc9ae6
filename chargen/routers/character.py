import logging
from typing import Annotated

from fastapi import APIRouter, Depends, File, HTTPException, Request, UploadFile, status

from chargen.core import get_settings, limiter
from chargen.dependencies import get_api_key, get_character_service
from chargen.providers import ChatRateLimitError, ChatServiceError
from chargen.schemas import (
    CharacterResultResponse,
    FixJsonRequest,
    FixJsonResponse,
    GenerateCharacterRequest,
    ProcessFilesResponse,
    RefineCharacterRequest,
)
from chargen.services import (
    CharacterGeneratorService,
    RecoveryError,
    UploadedDocument,
    extract_knowledge,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["character"])


def _recovery_http_error(e: RecoveryError) -> HTTPException:
    return HTTPException(
        status_code=422,
        detail={"error": e.kind.value, "message": e.message, "details": e.detail},
    )


def _chat_http_error(e: ChatServiceError) -> HTTPException:
    if isinstance(e, ChatRateLimitError):
        return HTTPException(status_code=status.HTTP_429_TOO_MANY_REQUESTS, detail=str(e))
    return HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=str(e))


@router.post("/fix-json", response_model=FixJsonResponse)
async def fix_character_json(
    body: FixJsonRequest,
    service: CharacterGeneratorService = Depends(get_character_service),
):
    """Recover a character from raw LLM text. No LLM call."""
    if not body.content:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Content is required")
    try:
        return FixJsonResponse(character=service.fix_json(body.content))
    except RecoveryError as e:
        logger.warning("fix-json failed: %s", e)
        raise _recovery_http_error(e)


@router.post("/generate-character", response_model=CharacterResultResponse)
@limiter.limit(lambda: get_settings().generate_rate_limit)
async def generate_character(
    request: Request,
    body: GenerateCharacterRequest,
    api_key: Annotated[str | None, Depends(get_api_key)],
    service: CharacterGeneratorService = Depends(get_character_service),
):
    if not body.prompt or not body.model or not api_key:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Missing required fields: prompt, model, or API key",
        )
    try:
        return await service.generate_character(body.prompt, body.model, api_key)
    except RecoveryError as e:
        logger.warning("Character generation returned unusable JSON: %s", e)
        raise _recovery_http_error(e)
    except ChatServiceError as e:
        raise _chat_http_error(e)


@router.post("/refine-character", response_model=CharacterResultResponse)
@limiter.limit(lambda: get_settings().generate_rate_limit)
async def refine_character(
    request: Request,
    body: RefineCharacterRequest,
    api_key: Annotated[str | None, Depends(get_api_key)],
    service: CharacterGeneratorService = Depends(get_character_service),
):
    if not body.prompt or not body.model or not body.current_character or not api_key:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Missing required fields: prompt, model, currentCharacter, or API key",
        )
    try:
        return await service.refine_character(
            body.prompt, body.model, body.current_character, api_key
        )
    except RecoveryError as e:
        logger.warning("Character refinement returned unusable JSON: %s", e)
        raise _recovery_http_error(e)
    except ChatServiceError as e:
        raise _chat_http_error(e)


@router.post("/process-files", response_model=ProcessFilesResponse)
async def process_files(files: Annotated[list[UploadFile] | None, File()] = None):
    """Split uploaded text/PDF files into knowledge sentences."""
    if not files:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="No files uploaded")
    docs = []
    for upload in files:
        docs.append(
            UploadedDocument(
                filename=upload.filename or "",
                content_type=upload.content_type,
                content=await upload.read(),
            )
        )
    return ProcessFilesResponse(knowledge=extract_knowledge(docs))
