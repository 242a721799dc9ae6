from .chat import (
    ChatProvider,
    ChatRateLimitError,
    ChatServiceError,
    OpenRouterChatProvider,
    get_chat_provider,
)

__all__ = [
    "ChatProvider",
    "ChatRateLimitError",
    "ChatServiceError",
    "OpenRouterChatProvider",
    "get_chat_provider",
]
