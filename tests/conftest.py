from __future__ import annotations

import io
import json
from collections.abc import Mapping
from typing import Any

import pytest
from stdio_mcp.app.server import McpServer
from stdio_mcp.app.tools.base import FunctionTool
from stdio_mcp.app.tools.registry import ToolRegistry
from stdio_mcp.app.transport import StdioTransport


def _echo(arguments: Mapping[str, Any]) -> str:
    return f"echo: {arguments.get('msg', '')}"


def _explode(arguments: Mapping[str, Any]) -> Any:
    del arguments
    raise RuntimeError("boom")


@pytest.fixture
def echo_tool() -> FunctionTool:
    """`msg` 인자를 그대로 돌려주는 테스트용 도구예요."""
    return FunctionTool(
        "echo",
        "입력을 그대로 돌려줘요.",
        {"type": "object", "properties": {"msg": {"type": "string"}}},
        _echo,
    )


@pytest.fixture
def failing_tool() -> FunctionTool:
    """호출하면 항상 RuntimeError를 던지는 도구예요."""
    return FunctionTool("explode", "항상 실패해요.", {"type": "object"}, _explode)


@pytest.fixture
def registry() -> ToolRegistry:
    return ToolRegistry()


@pytest.fixture
def server(registry: ToolRegistry) -> McpServer:
    return McpServer("test-server", "9.9.9", registry=registry)


def request_line(method: str, params: dict[str, Any] | None = None, request_id: Any = 1) -> str:
    """JSON-RPC 요청 한 줄을 만드는 헬퍼예요."""
    message: dict[str, Any] = {"jsonrpc": "2.0", "id": request_id, "method": method}
    if params is not None:
        message["params"] = params
    return json.dumps(message)


def notification_line(method: str, params: dict[str, Any] | None = None) -> str:
    message: dict[str, Any] = {"jsonrpc": "2.0", "method": method}
    if params is not None:
        message["params"] = params
    return json.dumps(message)


def run_session(server: McpServer, *lines: str) -> list[dict[str, Any]]:
    """메모리 버퍼 위에서 서버를 끝까지 돌리고 출력된 메시지를 순서대로 반환해요."""
    input_stream = io.StringIO("".join(f"{line}\n" for line in lines))
    output_stream = io.StringIO()
    server.run(StdioTransport(input_stream, output_stream))
    return [json.loads(line) for line in output_stream.getvalue().splitlines()]
