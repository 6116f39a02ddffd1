"""FastAPI dependencies for injection."""
from core.auth import get_current_user, get_current_user_optional
from core.config import get_settings
from core.content_cache import ContentCache, get_content_cache
from core.http_client import get_http_client
from db.session import get_async_session


def get_cache() -> ContentCache | None:
    """Content cache dependency; None when the app started without Redis."""
    return get_content_cache()


__all__ = [
    "get_async_session",
    "get_cache",
    "get_current_user",
    "get_current_user_optional",
    "get_http_client",
    "get_settings",
]
