from __future__ import annotations

from dataclasses import dataclass
from typing import TextIO

from libs.common.logging import get_logger
from stdio_mcp.app.server import McpServer
from stdio_mcp.app.settings import Settings
from stdio_mcp.app.tools.defaults import build_default_tool_registry
from stdio_mcp.app.tools.registry import ToolRegistry
from stdio_mcp.app.transport import StdioTransport


@dataclass(slots=True)
class RuntimeComponents:
    registry: ToolRegistry
    server: McpServer
    transport: StdioTransport


def build_runtime_components(
    settings: Settings,
    *,
    input_stream: TextIO | None = None,
    output_stream: TextIO | None = None,
) -> RuntimeComponents:
    registry = build_default_tool_registry(logger=get_logger("stdio_mcp.tool_registry"))
    server = McpServer(
        settings.server_name,
        settings.server_version,
        registry=registry,
        default_protocol_version=settings.default_protocol_version,
        logger=get_logger("stdio_mcp.server"),
    )
    transport = StdioTransport(
        input_stream,
        output_stream,
        logger=get_logger("stdio_mcp.transport"),
    )
    return RuntimeComponents(registry=registry, server=server, transport=transport)
