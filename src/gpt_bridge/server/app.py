"""server.app

MCP wiring: the tool catalogue, call routing and conversion of
:class:`ResultEnvelope` into the protocol's ``CallToolResult``.

Input validation is done by the dispatcher against the pydantic models, so
the SDK's own JSON-schema check is switched off (``validate_input=False``)
and bad arguments come back as a classified error envelope.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

import mcp.types as types
import structlog
from mcp.server.lowlevel import Server
from mcp.server.stdio import stdio_server

from gpt_bridge.core.formatter import format_result
from gpt_bridge.core.types import ConversationRequest, ErrorKind, Failure, PromptRequest

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable, Mapping

    from gpt_bridge.core.types import ResultEnvelope
    from gpt_bridge.server.dispatcher import Dispatcher

logger = structlog.get_logger(__name__)

SERVER_NAME = 'gpt5-server'
SERVER_VERSION = '0.1.0'

GENERATE_TOOL = 'gpt5_generate'
MESSAGES_TOOL = 'gpt5_messages'


def tool_definitions() -> list[types.Tool]:
    """Catalogue advertised in ``tools/list``."""
    return [
        types.Tool(
            name=GENERATE_TOOL,
            title='GPT-5 Generate',
            description='Generate text using OpenAI GPT-5 API with a simple input prompt',
            inputSchema=PromptRequest.model_json_schema(),
        ),
        types.Tool(
            name=MESSAGES_TOOL,
            title='GPT-5 Messages',
            description='Generate text using GPT-5 with structured conversation messages',
            inputSchema=ConversationRequest.model_json_schema(),
        ),
    ]


def to_call_tool_result(envelope: ResultEnvelope) -> types.CallToolResult:
    return types.CallToolResult(
        content=[types.TextContent(type='text', text=block.text) for block in envelope.content],
        isError=envelope.is_error,
    )


async def call_tool(dispatcher: Dispatcher, name: str, arguments: Mapping[str, Any] | None) -> types.CallToolResult:
    """Route one ``tools/call`` request to the matching dispatcher operation."""
    routes: dict[str, Callable[[Mapping[str, Any] | None], Awaitable[ResultEnvelope]]] = {
        GENERATE_TOOL: dispatcher.generate,
        MESSAGES_TOOL: dispatcher.converse,
    }
    handler = routes.get(name)
    if handler is None:
        logger.warning('Unknown tool requested', tool=name)
        envelope = format_result(Failure(error_kind=ErrorKind.validation, message=f'Unknown tool: {name}'))
    else:
        envelope = await handler(arguments)
    return to_call_tool_result(envelope)


def build_server(dispatcher: Dispatcher) -> Server:
    """Create the low-level MCP server with both tools registered."""
    server: Server = Server(SERVER_NAME, version=SERVER_VERSION)

    @server.list_tools()
    async def _list_tools() -> list[types.Tool]:
        return tool_definitions()

    @server.call_tool(validate_input=False)
    async def _call_tool(name: str, arguments: dict[str, Any] | None) -> types.CallToolResult:
        return await call_tool(dispatcher, name, arguments)

    return server


async def serve_stdio(server: Server) -> None:
    """Run *server* on stdin/stdout until the client disconnects."""
    async with stdio_server() as (read_stream, write_stream):
        logger.info('GPT-5 MCP server running on stdio')
        await server.run(read_stream, write_stream, server.create_initialization_options())
