"""Shared outbound HTTP client for third-party country data providers."""
import httpx

from core.config import get_settings

USER_AGENT = "WorldTrekker/1.0 (+https://github.com/worldtrekker)"


def create_http_client(timeout: float) -> httpx.AsyncClient:
    """Create the pooled client used for all third-party API calls."""
    return httpx.AsyncClient(
        follow_redirects=True,
        timeout=timeout,
        headers={"User-Agent": USER_AGENT},
    )


class _HttpClientState:
    """Container for the global HTTP client."""

    client: httpx.AsyncClient | None = None


_state = _HttpClientState()


def set_http_client(client: httpx.AsyncClient | None) -> None:
    """Set the global HTTP client instance."""
    _state.client = client


def get_http_client() -> httpx.AsyncClient:
    """
    Dependency returning the shared HTTP client.

    The client is normally created in the application lifespan. It is created
    lazily here when the lifespan did not run (e.g. under an ASGI test transport).
    """
    if _state.client is None or _state.client.is_closed:
        _state.client = create_http_client(get_settings().external_timeout)
    return _state.client
