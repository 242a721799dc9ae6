import asyncio
import logging
from abc import ABC, abstractmethod

import httpx

from chargen.core import get_settings

logger = logging.getLogger(__name__)


class ChatServiceError(Exception):
    """Raised when the chat/LLM API is unavailable or returns invalid or unexpected output."""


class ChatRateLimitError(ChatServiceError):
    """Raised when the chat/LLM API rate limits the request."""


def _error_message_from_response(response: httpx.Response) -> str | None:
    """OpenAI-style {"error": {"message": ...}} body, if the provider sent one."""
    try:
        data = response.json()
    except ValueError:
        return None
    if not isinstance(data, dict):
        return None
    error = data.get("error")
    if isinstance(error, dict) and isinstance(error.get("message"), str):
        return error["message"]
    if isinstance(error, str):
        return error
    return None


class ChatProvider(ABC):
    @abstractmethod
    async def chat(
        self,
        messages: list[dict[str, str]],
        max_tokens: int | None = None,
        temperature: float | None = None,
    ) -> str:
        """Send chat messages and return the assistant reply text."""
        pass


class OpenRouterChatProvider(ChatProvider):
    """OpenRouter (or any OpenAI-compatible) chat completions endpoint."""

    def __init__(
        self,
        base_url: str,
        api_key: str,
        model: str,
        *,
        referer: str | None = None,
        title: str | None = None,
        default_temperature: float = 0.7,
        default_max_tokens: int = 4000,
        timeout: float = 60.0,
        retries: int = 3,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.api_key = api_key
        self.model = model
        self.referer = referer
        self.title = title
        self.default_temperature = default_temperature
        self.default_max_tokens = default_max_tokens
        self.timeout = timeout
        self.retries = retries
        self.transport = transport

    def _headers(self) -> dict[str, str]:
        headers = {
            "Authorization": f"Bearer {self.api_key}",
            "Content-Type": "application/json",
        }
        if self.referer:
            headers["HTTP-Referer"] = self.referer
        if self.title:
            headers["X-Title"] = self.title
        return headers

    async def chat(
        self,
        messages: list[dict[str, str]],
        max_tokens: int | None = None,
        temperature: float | None = None,
    ) -> str:
        payload = {
            "model": self.model,
            "messages": messages,
            "temperature": temperature if temperature is not None else self.default_temperature,
            "max_tokens": max_tokens if max_tokens is not None else self.default_max_tokens,
        }
        base_delay_s = 1.0

        for attempt in range(self.retries + 1):
            try:
                async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
                    r = await client.post(
                        f"{self.base_url}/chat/completions",
                        json=payload,
                        headers=self._headers(),
                    )
                    r.raise_for_status()
                    data = r.json()
                    choices = data.get("choices") or []
                    if not choices:
                        raise ChatServiceError(
                            "Chat API returned no choices (e.g. content filter)."
                        )
                    msg = choices[0].get("message") or {}
                    content = msg.get("content")
                    if content is None or not isinstance(content, str):
                        raise ChatServiceError(
                            "Chat API returned missing or non-string content."
                        )
                    if not content.strip():
                        raise ChatServiceError(
                            "Chat API returned empty content (LLM may have failed or been rate-limited)."
                        )
                    logger.debug("Chat API reply (%d chars): %s", len(content), content[:2000])
                    return content
            except httpx.HTTPStatusError as e:
                if e.response.status_code == 429:
                    if attempt < self.retries:
                        retry_after = e.response.headers.get("Retry-After")
                        try:
                            delay_s = float(retry_after) if retry_after else base_delay_s
                        except ValueError:
                            delay_s = base_delay_s
                        await asyncio.sleep(delay_s * (attempt + 1))
                        continue
                    raise ChatRateLimitError(
                        "Chat API rate limited the request. Please retry later."
                    ) from e
                message = _error_message_from_response(e.response)
                logger.warning(
                    "Chat API error %s: %s",
                    e.response.status_code,
                    (message or e.response.text or "")[:500],
                )
                raise ChatServiceError(
                    message or f"Chat API returned {e.response.status_code}. Please try again later."
                ) from e
            except httpx.RequestError as e:
                raise ChatServiceError(
                    "Chat service unavailable (timeout or connection error). Please try again later."
                ) from e
            except (KeyError, TypeError, IndexError, AttributeError, ValueError) as e:
                raise ChatServiceError("Chat API returned unexpected response format.") from e


def get_chat_provider(
    model: str,
    api_key: str | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
) -> ChatProvider:
    s = get_settings()
    key = api_key or s.openrouter_api_key
    if not key:
        raise ChatServiceError(
            "Chat LLM not configured. Send an X-API-Key header or set OPENROUTER_API_KEY."
        )
    return OpenRouterChatProvider(
        base_url=s.openrouter_api_base_url,
        api_key=key,
        model=model,
        referer=s.app_url,
        title=s.app_title,
        default_temperature=s.chat_temperature,
        default_max_tokens=s.chat_max_tokens,
        timeout=s.chat_timeout_seconds,
        retries=s.chat_max_retries,
        transport=transport,
    )
