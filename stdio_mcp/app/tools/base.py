"""MCP 클라이언트에 노출되는 도구의 기반 타입이에요.

도구를 추가하는 방법은 두 가지예요.

- `BaseTool`을 상속하고 `name`, `description`, `input_schema`, `execute`를 구현해요.
- 함수 하나로 충분하면 `FunctionTool(name, description, input_schema, fn)`으로 감싸요.

어느 쪽이든 `ToolRegistry.register()`로 등록하면 `tools/list`와 `tools/call`에 나타나요.
"""

from __future__ import annotations

import abc
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from typing import Any

ToolFunction = Callable[[Mapping[str, Any]], Any]


@dataclass(slots=True)
class ToolResult:
    """레지스트리가 도구 실행 결과를 돌려줄 때 쓰는 컨테이너예요."""

    ok: bool
    """실행 성공 여부예요."""

    value: Any = None
    """성공 시 도구 함수가 반환한 값이에요. 문자열 변환은 디스패처가 해요."""

    error: str = ""
    """실패 시 예외 메시지예요."""


class BaseTool(abc.ABC):
    """모든 도구가 구현해야 하는 추상 클래스예요.

    도구는 레지스트리에 등록된 뒤 프로세스가 끝날 때까지 바뀌지 않아요.
    같은 도구가 동시에 호출될 수 있다면 `execute`는 재진입 가능해야 해요.
    """

    @property
    @abc.abstractmethod
    def name(self) -> str:
        """도구의 고유 이름이에요. 레지스트리 키로 쓰여요."""

    @property
    @abc.abstractmethod
    def description(self) -> str:
        """클라이언트에 보여줄 설명이에요."""

    @property
    @abc.abstractmethod
    def input_schema(self) -> dict[str, Any]:
        """JSON Schema 형식의 입력 파라미터 정의예요.

        예시::

            {
                "type": "object",
                "properties": {
                    "max": {"type": "integer", "description": "최댓값이에요."},
                },
            }
        """

    @abc.abstractmethod
    def execute(self, arguments: Mapping[str, Any]) -> Any:
        """도구를 실행하고 결과 값을 반환해요.

        예외는 잡지 않아요. 실패 처리는 호출하는 쪽(`ToolRegistry.call`) 책임이에요.
        """

    def to_spec(self) -> dict[str, Any]:
        """`tools/list` 응답에 들어갈 도구 스펙 딕셔너리를 생성해요."""
        return {
            "name": self.name,
            "description": self.description,
            "inputSchema": self.input_schema,
        }


class FunctionTool(BaseTool):
    """일반 함수를 도구로 감싸요. 속성은 읽기 전용이라 생성 후 바뀌지 않아요."""

    def __init__(
        self,
        name: str,
        description: str,
        input_schema: dict[str, Any],
        fn: ToolFunction,
    ) -> None:
        self._name = name
        self._description = description
        self._input_schema = input_schema
        self._fn = fn

    @property
    def name(self) -> str:
        return self._name

    @property
    def description(self) -> str:
        return self._description

    @property
    def input_schema(self) -> dict[str, Any]:
        return self._input_schema

    def execute(self, arguments: Mapping[str, Any]) -> Any:
        return self._fn(arguments)

    def __repr__(self) -> str:
        return f"FunctionTool(name={self._name!r})"
