"""Home Assistant REST API client."""
import functools
import logging
from typing import Any, Awaitable, Callable, Dict, List, Optional, TypeVar, cast

import httpx
from pydantic import ValidationError

from hass_entities import config
from hass_entities.errors import BackendError, ParseError
from hass_entities.models import Entity

# Set up logging
logger = logging.getLogger(__name__)

F = TypeVar('F', bound=Callable[..., Awaitable[Any]])


def handle_api_errors(action: str) -> Callable[[F], F]:
    """
    Decorator that turns httpx failures into BackendError

    Args:
        action: What the wrapped call does, used in the error message
               (e.g. "fetch data from")
    """
    def decorator(func: F) -> F:
        @functools.wraps(func)
        async def wrapper(*args: Any, **kwargs: Any) -> Any:
            try:
                return await func(*args, **kwargs)
            except httpx.HTTPStatusError as e:
                status = e.response.status_code
                raise BackendError(
                    f"Home Assistant API returned error status: {status} {e.response.reason_phrase}".rstrip(),
                    status=status,
                ) from e
            except httpx.ConnectError as e:
                raise BackendError(
                    f"Failed to {action} Home Assistant: cannot connect to {config.HASS_ENDPOINT}"
                ) from e
            except httpx.TimeoutException as e:
                raise BackendError(
                    f"Failed to {action} Home Assistant: request timed out"
                ) from e
            except httpx.RequestError as e:
                raise BackendError(f"Failed to {action} Home Assistant: {e}") from e

        return cast(F, wrapper)
    return decorator


class HassClient:
    """Async client for the Home Assistant REST API.

    The underlying httpx client is created on first use and reused until
    close() is called.
    """

    def __init__(self, client: Optional[httpx.AsyncClient] = None):
        self._client = client

    async def get_client(self) -> httpx.AsyncClient:
        """Get a persistent httpx client for Home Assistant API calls"""
        if self._client is None:
            logger.debug("Creating new HTTP client")
            self._client = httpx.AsyncClient(timeout=config.HASS_TIMEOUT)
        return self._client

    async def close(self) -> None:
        """Close the HTTP client when shutting down"""
        if self._client is not None:
            logger.debug("Closing HTTP client")
            await self._client.aclose()
            self._client = None

    @handle_api_errors("fetch data from")
    async def get_states(self) -> List[Entity]:
        """Fetch all entity states from Home Assistant"""
        headers = config.get_ha_headers()
        url = f"{config.get_hass_url()}/api/states"

        client = await self.get_client()
        response = await client.get(url, headers=headers)
        response.raise_for_status()

        try:
            payload = response.json()
            if not isinstance(payload, list):
                raise ValueError(f"expected a JSON array, got {type(payload).__name__}")
            return [Entity.model_validate(item) for item in payload]
        except (ValueError, ValidationError) as e:
            raise ParseError(f"Failed to parse entities: {e}") from e

    @handle_api_errors("send request to")
    async def call_service(self, domain: str, service: str, data: Optional[Dict[str, Any]] = None) -> None:
        """Call a Home Assistant service"""
        headers = config.get_ha_headers()
        url = f"{config.get_hass_url()}/api/services/{domain}/{service}"

        logger.debug(f"POST {url} with data: {data}")
        client = await self.get_client()
        response = await client.post(url, headers=headers, json=data or {})
        response.raise_for_status()
