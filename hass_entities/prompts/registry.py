"""Prompt catalog and prompt resolution."""
import logging
from typing import Any, Dict, Iterable, List, Optional

from mcp.types import (
    GetPromptResult,
    PromptMessage,
    TextContent,
)

from hass_entities.errors import PromptNotFound
from hass_entities.models import PromptDefinition
from hass_entities.templates import render

logger = logging.getLogger(__name__)


class PromptRegistry:
    """Read-only catalog of prompt definitions keyed by name.

    The catalog is filled once at construction and never changes afterwards,
    so concurrent lookups need no locking.
    """

    def __init__(self, definitions: Iterable[PromptDefinition]):
        self._prompts: Dict[str, PromptDefinition] = {}
        for definition in definitions:
            if definition.name in self._prompts:
                raise ValueError(f"Duplicate prompt name: {definition.name}")
            self._prompts[definition.name] = definition

    def list(self) -> List[PromptDefinition]:
        return list(self._prompts.values())

    def get(self, name: str) -> PromptDefinition:
        """Look up a prompt by name, raising PromptNotFound if it is not registered"""
        try:
            return self._prompts[name]
        except KeyError:
            raise PromptNotFound(name) from None

    def __contains__(self, name: object) -> bool:
        return name in self._prompts

    def __len__(self) -> int:
        return len(self._prompts)


def resolve_prompt(
    definition: PromptDefinition,
    arguments: Optional[Dict[str, Any]] = None
) -> GetPromptResult:
    """Render a prompt definition into a single user message.

    Args:
        definition: The prompt to render.
        arguments: Argument values supplied by the caller, may be None.

    Returns:
        A GetPromptResult object containing the rendered prompt.

    Raises:
        MissingArgument: If a required argument is missing.
    """
    text = render(definition.template, arguments, definition.arguments)
    logger.debug(f"Rendered prompt '{definition.name}' ({len(text)} chars)")
    return GetPromptResult(
        description=None,
        messages=[
            PromptMessage(
                role="user",
                content=TextContent(type="text", text=text),
            )
        ],
    )
