"""도구를 등록하고 조회하는 레지스트리예요."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from structlog.typing import FilteringBoundLogger

from libs.common.logging import get_logger
from stdio_mcp.app.tools.base import BaseTool, ToolResult


class ToolRegistry:
    """도구를 이름으로 관리하는 중앙 레지스트리예요.

    등록 순서를 보존하므로 `tools/list` 결과 순서가 항상 같아요.
    모든 접근이 단일 스레드에서 일어난다고 가정해서 락을 두지 않아요.

    사용법::

        registry = ToolRegistry()
        registry.register(RandomNumberTool())

        # tools/list 응답용 스펙 목록
        specs = registry.to_mcp_specs()

        # 이름으로 도구 실행
        result = registry.call("get-random-number", {"max": 10})
    """

    def __init__(self, *, logger: FilteringBoundLogger | None = None) -> None:
        self._tools: dict[str, BaseTool] = {}
        self._logger = logger or get_logger("stdio_mcp.tool_registry")

    def register(self, tool: BaseTool) -> None:
        """도구를 레지스트리에 등록해요. 같은 이름이면 덮어씌워요."""
        if tool.name in self._tools:
            self._logger.warning("tool_overwritten", tool_name=tool.name)
        self._tools[tool.name] = tool
        self._logger.info("tool_registered", tool_name=tool.name)

    def get(self, name: str) -> BaseTool | None:
        """이름으로 도구를 조회해요."""
        return self._tools.get(name)

    def list_names(self) -> list[str]:
        """등록된 모든 도구 이름을 등록 순서대로 반환해요."""
        return list(self._tools.keys())

    def list_tools(self) -> list[BaseTool]:
        """등록된 모든 도구 인스턴스를 등록 순서대로 반환해요."""
        return list(self._tools.values())

    def to_mcp_specs(self) -> list[dict[str, Any]]:
        """`tools/list` 응답의 `tools` 배열을 생성해요."""
        return [tool.to_spec() for tool in self._tools.values()]

    def call(self, name: str, arguments: Mapping[str, Any]) -> ToolResult:
        """이름으로 도구를 찾아 실행해요.

        등록되지 않은 도구거나 도구가 예외를 던지면 실패 `ToolResult`를 반환해요.
        """
        tool = self._tools.get(name)
        if tool is None:
            return ToolResult(ok=False, error=f"Tool not found: {name}")
        try:
            return ToolResult(ok=True, value=tool.execute(arguments))
        except Exception as exc:
            self._logger.warning("tool_execution_failed", tool_name=name, error=str(exc))
            return ToolResult(ok=False, error=str(exc))

    def __len__(self) -> int:
        return len(self._tools)

    def __contains__(self, name: object) -> bool:
        return name in self._tools
