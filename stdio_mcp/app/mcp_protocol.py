from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from libs.contracts.models import (
    JsonRpcErrorObject,
    JsonRpcErrorResponse,
    JsonRpcNotification,
    JsonRpcSuccessResponse,
)

JSONRPC_VERSION = "2.0"
DEFAULT_PROTOCOL_VERSION = "2024-11-05"

PARSE_ERROR = -32700
INVALID_REQUEST = -32600
METHOD_NOT_FOUND = -32601
INTERNAL_ERROR = -32603


@dataclass(slots=True)
class McpServerInfo:
    name: str
    version: str

    def to_dict(self) -> dict[str, Any]:
        return {"name": self.name, "version": self.version}


def build_success_response(request_id: Any, result: Any) -> str:
    return JsonRpcSuccessResponse(id=request_id, result=result).model_dump_json()


def build_error_response(request_id: Any, code: int, message: str) -> str:
    return JsonRpcErrorResponse(
        id=request_id,
        error=JsonRpcErrorObject(code=code, message=message),
    ).model_dump_json()


def build_notification(method: str, params: dict[str, Any] | None = None) -> str:
    return JsonRpcNotification(method=method, params=params or {}).model_dump_json()
