import asyncio
import functools
import logging
import sys
from enum import Enum
from typing import Any, Awaitable, Callable, Dict, List, Optional, Type, TypeVar, cast

import mcp.types as types
from mcp.server.lowlevel import Server
from mcp.server.models import InitializationOptions
from mcp.server.stdio import stdio_server
from mcp.shared.exceptions import McpError
from pydantic import BaseModel, ValidationError

from hass_entities import __version__, config
from hass_entities.cache import EntityCache
from hass_entities.errors import HassMcpError, InvalidToolArguments, UnknownTool
from hass_entities.hass import HassClient
from hass_entities.models import EmptyParams, EntityActionParams
from hass_entities.prompts import PromptRegistry, default_registry, resolve_prompt
from hass_entities.tools import get_entities, turn_off_entity, turn_on_entity

# Set up logging, stdout is reserved for the protocol
logging.basicConfig(
    level=config.LOG_LEVEL,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    handlers=[
        logging.StreamHandler(sys.stderr)
    ]
)
logger = logging.getLogger(__name__)

# Type variable for generic functions
T = TypeVar('T')

SERVER_NAME = "hass-entities-mcp"
# The MCP session answers initialize with the newest version both sides support
PROTOCOL_VERSION = types.LATEST_PROTOCOL_VERSION

INSTRUCTIONS = (
    "This server is used to retrieve entities from my home assistant. It will get you "
    "lights and other smart home devices. It can also be used to control lights with the "
    "turn_on_entity and turn_off_entity tools. When running get_entities tool you will "
    "get the light, switch, and sensor entities."
)


class ToolName(str, Enum):
    """The fixed set of tools served."""
    GET_ENTITIES = "get_entities"
    TURN_ON_ENTITY = "turn_on_entity"
    TURN_OFF_ENTITY = "turn_off_entity"


TOOL_DESCRIPTIONS: Dict[ToolName, str] = {
    ToolName.GET_ENTITIES: "Get all available Lights, Switches, Sensors and their current states",
    ToolName.TURN_ON_ENTITY: "Turn on a given entity",
    ToolName.TURN_OFF_ENTITY: "Turn off a given entity",
}

TOOL_PARAMS: Dict[ToolName, Type[BaseModel]] = {
    ToolName.GET_ENTITIES: EmptyParams,
    ToolName.TURN_ON_ENTITY: EntityActionParams,
    ToolName.TURN_OFF_ENTITY: EntityActionParams,
}


class ToolServer:
    """
    Protocol surface of the server: capabilities, tools and prompts

    Args:
        cache: Receives the entities fetched by get_entities
        client: Home Assistant API client used by the tools
        registry: Prompt catalog served by list_prompts/get_prompt
    """

    def __init__(self, cache: EntityCache, client: HassClient, registry: PromptRegistry):
        self.cache = cache
        self.client = client
        self.registry = registry

    def initialize(self) -> types.InitializeResult:
        """Describe the server capabilities; safe to call more than once"""
        return types.InitializeResult(
            protocolVersion=PROTOCOL_VERSION,
            capabilities=types.ServerCapabilities(
                prompts=types.PromptsCapability(listChanged=False),
                tools=types.ToolsCapability(listChanged=False),
            ),
            serverInfo=types.Implementation(name=SERVER_NAME, version=__version__),
            instructions=INSTRUCTIONS,
        )

    def initialization_options(self) -> InitializationOptions:
        """Options handed to the MCP session for the initialize handshake"""
        info = self.initialize()
        return InitializationOptions(
            server_name=info.serverInfo.name,
            server_version=info.serverInfo.version,
            capabilities=info.capabilities,
            instructions=info.instructions,
        )

    def list_tools(self) -> List[types.Tool]:
        return [
            types.Tool(
                name=tool.value,
                description=TOOL_DESCRIPTIONS[tool],
                inputSchema=TOOL_PARAMS[tool].model_json_schema(),
            )
            for tool in ToolName
        ]

    async def call_tool(self, name: str, arguments: Optional[Dict[str, Any]] = None) -> List[types.TextContent]:
        """
        Run a tool by name

        Raises:
            UnknownTool: If no tool has this name
            InvalidToolArguments: If the arguments do not match the tool parameters
            ConfigurationError, BackendError, ParseError: From the Home Assistant call
        """
        try:
            tool = ToolName(name)
        except ValueError:
            raise UnknownTool(name) from None

        try:
            params = TOOL_PARAMS[tool].model_validate(arguments or {})
        except ValidationError as e:
            raise InvalidToolArguments(f"Invalid parameters for {tool.value}: {e}") from e

        if tool is ToolName.GET_ENTITIES:
            return await get_entities(self.client, self.cache)
        params = cast(EntityActionParams, params)
        if tool is ToolName.TURN_ON_ENTITY:
            return await turn_on_entity(self.client, params.entity_id)
        return await turn_off_entity(self.client, params.entity_id)

    def list_prompts(self, cursor: Optional[str] = None) -> types.ListPromptsResult:
        """List every prompt; the pagination cursor is accepted but ignored"""
        return types.ListPromptsResult(
            prompts=[definition.to_mcp_prompt() for definition in self.registry.list()],
            nextCursor=None,
        )

    def get_prompt(self, name: str, arguments: Optional[Dict[str, Any]] = None) -> types.GetPromptResult:
        """
        Render a prompt as a single user message

        Raises:
            PromptNotFound: If no prompt has this name
            MissingArgument: If a required argument was not supplied
        """
        definition = self.registry.get(name)
        return resolve_prompt(definition, arguments)


def async_handler(command_type: str):
    """
    Decorator that logs the command and reports errors as MCP errors

    Args:
        command_type: The type of command (for logging)
    """
    def decorator(func: Callable[..., Awaitable[T]]) -> Callable[..., Awaitable[T]]:
        @functools.wraps(func)
        async def wrapper(*args: Any, **kwargs: Any) -> T:
            logger.info(f"Executing command: {command_type}")
            try:
                return await func(*args, **kwargs)
            except HassMcpError as e:
                logger.warning(f"Command {command_type} failed: {e.message}")
                raise McpError(e.to_error_data()) from e
        return cast(Callable[..., Awaitable[T]], wrapper)
    return decorator


def build_server(tool_server: ToolServer) -> Server:
    """Register the tool server handlers on an MCP server"""
    server: Server = Server(SERVER_NAME, version=__version__, instructions=INSTRUCTIONS)

    @server.list_tools()
    @async_handler("list_tools")
    async def handle_list_tools() -> List[types.Tool]:
        return tool_server.list_tools()

    @server.call_tool()
    @async_handler("call_tool")
    async def handle_call_tool(name: str, arguments: Dict[str, Any]) -> List[types.TextContent]:
        return await tool_server.call_tool(name, arguments)

    @server.list_prompts()
    @async_handler("list_prompts")
    async def handle_list_prompts() -> List[types.Prompt]:
        return tool_server.list_prompts().prompts

    @server.get_prompt()
    @async_handler("get_prompt")
    async def handle_get_prompt(name: str, arguments: Optional[Dict[str, str]]) -> types.GetPromptResult:
        return tool_server.get_prompt(name, arguments)

    return server


async def serve() -> None:
    """Run the MCP server over stdio until the client disconnects"""
    client = HassClient()
    tool_server = ToolServer(EntityCache(), client, default_registry())
    server = build_server(tool_server)

    logger.info(f"Starting {SERVER_NAME} {__version__}")
    try:
        async with stdio_server() as (read_stream, write_stream):
            await server.run(read_stream, write_stream, tool_server.initialization_options())
    finally:
        await client.close()


def main():
    """Run the MCP server with stdio communication"""
    asyncio.run(serve())
