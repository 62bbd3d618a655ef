"""Prompt templates served by the MCP server."""

from .registry import PromptRegistry, resolve_prompt
from .builtin import BUILTIN_PROMPTS, default_registry

__all__ = [
    'PromptRegistry',
    'resolve_prompt',
    'BUILTIN_PROMPTS',
    'default_registry',
]
