"""1부터 지정한 최댓값 사이의 난수를 생성하는 도구예요."""

from __future__ import annotations

import random
from collections.abc import Mapping
from typing import Any

from stdio_mcp.app.tools.base import BaseTool

DEFAULT_MAX = 100


class RandomNumberTool(BaseTool):
    """`get-random-number` 도구예요.

    `max`가 없거나, 정수로 바꿀 수 없거나, 0 이하면 기본값 100을 써요.
    """

    def __init__(self, *, rng: random.Random | None = None) -> None:
        self._rng = rng or random.Random()

    @property
    def name(self) -> str:
        return "get-random-number"

    @property
    def description(self) -> str:
        return "Generate a random number between 1 and the specified maximum value"

    @property
    def input_schema(self) -> dict[str, Any]:
        return {
            "type": "object",
            "properties": {
                "max": {
                    "type": "integer",
                    "description": "Maximum value for the random number (defaults to 100 if not specified)",
                },
            },
        }

    def execute(self, arguments: Mapping[str, Any]) -> int:
        return self._rng.randint(1, _resolve_max(arguments.get("max")))


def _resolve_max(value: object) -> int:
    if value is None or isinstance(value, bool):
        return DEFAULT_MAX
    try:
        resolved = int(value)  # type: ignore[call-overload]
    except (TypeError, ValueError, OverflowError):
        return DEFAULT_MAX
    return resolved if resolved > 0 else DEFAULT_MAX
