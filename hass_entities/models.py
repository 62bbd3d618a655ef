"""Pydantic models for the Home Assistant entities MCP server."""
from typing import Dict, Any, Optional, List

from mcp.types import Prompt, PromptArgument
from pydantic import BaseModel, Field, field_validator


class Entity(BaseModel):
    """A single Home Assistant entity as returned by /api/states."""
    entity_id: str = Field(
        description="The entity ID (e.g., 'light.kitchen', 'sensor.temperature')"
    )
    state: str = Field(description="The current state of the entity")
    last_changed: str = Field(description="Timestamp of the last state change")
    attributes: Dict[str, Any] = Field(
        description="Entity attributes (friendly_name, brightness, ...)",
        default_factory=dict
    )


class EmptyParams(BaseModel):
    """Empty parameters model for tools that don't require input."""
    pass


class EntityActionParams(BaseModel):
    """Parameters for turning a Home Assistant entity on or off."""
    entity_id: str = Field(
        description="The id of the entity"
    )


class ArgumentSpec(BaseModel):
    """A declared argument of a prompt template."""
    name: str
    description: Optional[str] = None
    required: bool = False


class PromptDefinition(BaseModel):
    """A named prompt template with its argument schema."""
    name: str
    description: Optional[str] = None
    arguments: List[ArgumentSpec] = Field(default_factory=list)
    template: str

    @field_validator("arguments")
    @classmethod
    def validate_unique_arguments(cls, v):
        """Argument names are the placeholder keys, so they must be unique."""
        names = [arg.name for arg in v]
        if len(names) != len(set(names)):
            raise ValueError("prompt argument names must be unique")
        return v

    def to_mcp_prompt(self) -> Prompt:
        """Convert the definition to the MCP wire descriptor."""
        return Prompt(
            name=self.name,
            description=self.description,
            arguments=[
                PromptArgument(
                    name=arg.name,
                    description=arg.description,
                    required=arg.required,
                )
                for arg in self.arguments
            ],
        )
