from __future__ import annotations

from collections.abc import Mapping
from typing import Any

import mcp.types as types
import pytest

from gpt_bridge.core.abc import AbstractInvoker
from gpt_bridge.core.types import Success
from gpt_bridge.server.app import (
    GENERATE_TOOL,
    MESSAGES_TOOL,
    SERVER_NAME,
    build_server,
    call_tool,
    tool_definitions,
)
from gpt_bridge.server.dispatcher import Dispatcher


class DummyInvoker(AbstractInvoker):
    async def _invoke(self, credential: str, payload: Mapping[str, Any]) -> Success:  # noqa: ARG002
        return Success(content='dummy')


@pytest.fixture
def dispatcher() -> Dispatcher:
    return Dispatcher('sk-test', DummyInvoker())


def test_tool_catalogue() -> None:
    tools = {tool.name: tool for tool in tool_definitions()}
    assert set(tools) == {GENERATE_TOOL, MESSAGES_TOOL}

    generate_schema = tools[GENERATE_TOOL].inputSchema
    assert generate_schema['required'] == ['input']
    assert {'model', 'instructions', 'reasoning_effort', 'max_tokens', 'temperature', 'top_p'} <= set(
        generate_schema['properties']
    )
    assert tools[MESSAGES_TOOL].inputSchema['required'] == ['messages']


@pytest.mark.asyncio
async def test_call_generate(dispatcher: Dispatcher) -> None:
    result = await call_tool(dispatcher, GENERATE_TOOL, {'input': 'ping'})
    assert isinstance(result, types.CallToolResult)
    assert result.isError is False
    assert [block.text for block in result.content] == ['dummy']


@pytest.mark.asyncio
async def test_call_messages_validation_error(dispatcher: Dispatcher) -> None:
    result = await call_tool(dispatcher, MESSAGES_TOOL, {'messages': []})
    assert result.isError is True
    assert result.content[0].text.startswith('Invalid arguments: ')


@pytest.mark.asyncio
async def test_unknown_tool(dispatcher: Dispatcher) -> None:
    result = await call_tool(dispatcher, 'gpt4_generate', {'input': 'ping'})
    assert result.isError is True
    assert 'Unknown tool: gpt4_generate' in result.content[0].text


def test_build_server(dispatcher: Dispatcher) -> None:
    server = build_server(dispatcher)
    assert server.name == SERVER_NAME
    assert types.ListToolsRequest in server.request_handlers
    assert types.CallToolRequest in server.request_handlers
