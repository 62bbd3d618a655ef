"""Home Assistant entities MCP server.

This package provides an MCP (Model Context Protocol) server that lets an LLM
read the lights, switches and sensors of a Home Assistant instance, turn
entities on and off, and render a small set of prompt templates.
"""

__version__ = "0.1.0"

from hass_entities.server import serve, main

__all__ = ["serve", "main"]
