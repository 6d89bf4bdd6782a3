# encryptor/auth.py
import hmac
import logging
from fastapi import Header, HTTPException, Request

logger = logging.getLogger(__name__)

def _unauth(detail: str):
    logger.warning("Auth failed: %s", detail)
    raise HTTPException(status_code=401, detail="Unauthorized")

def require_api_key(
    request: Request,
    x_api_key: str | None = Header(default=None, alias="X-API-Key"),
) -> None:
    """Header-based API key auth against the configured API_KEY.

    Callers are trusted internal services sharing one key, so there is no
    principal to hand back; the dependency only gates access.
    """
    api_key = request.app.state.settings.api_key
    if not api_key:
        _unauth("API_KEY not configured")
    if not x_api_key:
        _unauth("Missing X-API-Key header")
    if not hmac.compare_digest(x_api_key.encode(), api_key.encode()):
        _unauth("Invalid API key")

__all__ = ["require_api_key"]
