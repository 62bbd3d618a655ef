"""Home Assistant tools for the MCP server."""

from .entity import (
    ENTITY_PREFIXES,
    filter_entities,
    get_entities,
    turn_on_entity,
    turn_off_entity,
)

__all__ = [
    'ENTITY_PREFIXES',
    'filter_entities',
    'get_entities',
    'turn_on_entity',
    'turn_off_entity',
]
