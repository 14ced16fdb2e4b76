"""기본 내장 도구를 등록한 ToolRegistry를 생성하는 팩토리예요."""

from __future__ import annotations

from structlog.typing import FilteringBoundLogger

from stdio_mcp.app.tools.random_number import RandomNumberTool
from stdio_mcp.app.tools.registry import ToolRegistry


def build_default_tool_registry(*, logger: FilteringBoundLogger | None = None) -> ToolRegistry:
    """기본 내장 도구가 모두 등록된 `ToolRegistry`를 생성해요.

    Returns:
        `get-random-number`가 등록된 `ToolRegistry` 인스턴스예요.
    """
    registry = ToolRegistry(logger=logger)
    registry.register(RandomNumberTool())
    return registry
