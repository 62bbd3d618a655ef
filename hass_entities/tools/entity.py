"""Home Assistant entity-related tools for the MCP server."""
import json
import logging
from typing import Iterable, List

from mcp.types import TextContent

from hass_entities.cache import EntityCache
from hass_entities.hass import HassClient
from hass_entities.models import Entity

logger = logging.getLogger(__name__)

# Only these entity types are exposed to the agent
ENTITY_PREFIXES = ("light.", "switch.", "sensor.")

# Service domain used for the on/off calls
SERVICE_DOMAIN = "light"


def filter_entities(entities: Iterable[Entity]) -> List[Entity]:
    """Keep the lights, switches and sensors, preserving their order"""
    return [entity for entity in entities if entity.entity_id.startswith(ENTITY_PREFIXES)]


async def get_entities(client: HassClient, cache: EntityCache) -> List[TextContent]:
    """Fetch all lights, switches and sensors and store them in the cache.

    Args:
        client: The Home Assistant client
        cache: The cache that receives the filtered entities

    Returns:
        A single text content item holding the filtered entities as JSON
    """
    entities = filter_entities(await client.get_states())
    cache.replace(entities)
    logger.info(f"Fetched {len(entities)} light, switch and sensor entities")

    payload = [entity.model_dump() for entity in entities]
    return [TextContent(type="text", text=json.dumps(payload))]


async def _set_entity_power(client: HassClient, entity_id: str, on: bool) -> List[TextContent]:
    service = "turn_on" if on else "turn_off"

    await client.call_service(SERVICE_DOMAIN, service, {"entity_id": entity_id})
    logger.info(f"Called {SERVICE_DOMAIN}.{service} for {entity_id}")

    return [TextContent(
        type="text",
        text=f"Successfully turned {'on' if on else 'off'} entity: {entity_id}"
    )]


async def turn_on_entity(client: HassClient, entity_id: str) -> List[TextContent]:
    """Turn on a given entity.

    Args:
        client: The Home Assistant client
        entity_id: The entity ID to turn on (e.g., 'light.kitchen')
    """
    return await _set_entity_power(client, entity_id, on=True)


async def turn_off_entity(client: HassClient, entity_id: str) -> List[TextContent]:
    """Turn off a given entity.

    Args:
        client: The Home Assistant client
        entity_id: The entity ID to turn off (e.g., 'light.kitchen')
    """
    return await _set_entity_power(client, entity_id, on=False)
