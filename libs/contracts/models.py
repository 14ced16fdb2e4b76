from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, Field, StrictStr


class JsonRpcRequest(BaseModel):
    jsonrpc: Literal["2.0"]
    # id는 원문 그대로 되돌려줘야 해서 타입 변환 없이 받아요.
    id: Any = None
    method: StrictStr
    params: dict[str, Any] | None = None

    @property
    def is_notification(self) -> bool:
        return "id" not in self.model_fields_set


class JsonRpcErrorObject(BaseModel):
    code: int
    message: str


class JsonRpcSuccessResponse(BaseModel):
    jsonrpc: Literal["2.0"] = "2.0"
    id: Any = None
    result: Any


class JsonRpcErrorResponse(BaseModel):
    jsonrpc: Literal["2.0"] = "2.0"
    id: Any = None
    error: JsonRpcErrorObject


class JsonRpcNotification(BaseModel):
    jsonrpc: Literal["2.0"] = "2.0"
    method: str
    params: dict[str, Any] = Field(default_factory=dict)
