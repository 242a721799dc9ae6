import hashlib

from slowapi import Limiter
from slowapi.util import get_remote_address


def get_rate_limit_key(request):
    """Per API key when one is sent (each key pays for its own LLM calls); else per IP."""
    api_key = (request.headers.get("X-API-Key") or "").strip()
    if api_key:
        return "key:" + hashlib.sha256(api_key.encode("utf-8")).hexdigest()[:16]
    return get_remote_address(request)


limiter = Limiter(key_func=get_rate_limit_key)
