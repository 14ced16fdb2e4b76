from __future__ import annotations

import json
from collections.abc import Callable
from typing import Any

from pydantic import ValidationError
from structlog.typing import FilteringBoundLogger

from libs.common.errors import (
    InternalError,
    InvalidRequestError,
    JsonRpcError,
    MethodNotFoundError,
    ParseError,
)
from libs.common.logging import get_logger
from libs.contracts.models import JsonRpcRequest
from stdio_mcp.app.mcp_protocol import (
    DEFAULT_PROTOCOL_VERSION,
    JSONRPC_VERSION,
    McpServerInfo,
    build_error_response,
    build_notification,
    build_success_response,
)
from stdio_mcp.app.tools.base import BaseTool
from stdio_mcp.app.tools.registry import ToolRegistry
from stdio_mcp.app.transport import StdioTransport, Transport

RequestHandler = Callable[[dict[str, Any]], Any]
NotificationHandler = Callable[[JsonRpcRequest], None]


class McpServer:
    """도구 레지스트리를 들고 JSON-RPC 메시지를 메서드별로 처리하는 디스패처예요.

    한 번에 한 줄씩 동기적으로 처리해요. 잘못된 입력이나 없는 메서드/도구는
    error 응답으로 바꾸고 세션을 이어가요. 전송 계층 오류만 `run()`을 끝내요.

    `initialize` 전에 들어온 `tools/list`, `tools/call`도 거부하지 않아요.
    """

    def __init__(
        self,
        name: str,
        version: str = "1.0.0",
        *,
        registry: ToolRegistry | None = None,
        default_protocol_version: str = DEFAULT_PROTOCOL_VERSION,
        logger: FilteringBoundLogger | None = None,
    ) -> None:
        self._info = McpServerInfo(name=name, version=version)
        self._logger = logger or get_logger("stdio_mcp.server")
        self._registry = registry if registry is not None else ToolRegistry(logger=logger)
        self._default_protocol_version = default_protocol_version
        self._initialized = False
        self._transport: Transport | None = None
        self._request_handlers: dict[str, RequestHandler] = {
            "initialize": self._handle_initialize,
            "ping": self._handle_ping,
            "tools/list": self._handle_list_tools,
            "tools/call": self._handle_call_tool,
        }
        # 응답이 없는 메서드예요. id가 붙어 와도 응답하지 않아요.
        self._notification_handlers: dict[str, NotificationHandler] = {
            "initialized": self._on_client_initialized,
            "notifications/initialized": self._on_client_initialized,
        }

    @property
    def name(self) -> str:
        return self._info.name

    @property
    def version(self) -> str:
        return self._info.version

    @property
    def registry(self) -> ToolRegistry:
        return self._registry

    @property
    def initialized(self) -> bool:
        return self._initialized

    def register_tool(self, tool: BaseTool) -> None:
        """도구를 등록해요. 같은 이름이 이미 있으면 덮어써요."""
        self._registry.register(tool)

    def run(self, transport: Transport | None = None) -> None:
        """전송 계층에 메시지 핸들러를 연결하고 입력이 끝날 때까지 블로킹해요."""
        active = transport if transport is not None else StdioTransport()
        self._logger.info("mcp_server_starting", server_name=self.name, server_version=self.version)
        self._transport = active
        active.on_message(self.handle_message)
        try:
            active.start()
        finally:
            self._transport = None
        self._logger.info("mcp_server_stopped", server_name=self.name)

    def handle_message(self, raw_line: str) -> str | None:
        """한 줄을 처리하고 직렬화된 응답을 반환해요. 알림이면 `None`을 반환해요."""
        self._logger.debug("mcp_message_received", message=raw_line)
        request_id: Any = None
        try:
            payload = _decode(raw_line)
            if isinstance(payload, dict):
                request_id = payload.get("id")
            request = _validate_envelope(payload)

            notification_handler = self._notification_handlers.get(request.method)
            if notification_handler is not None:
                notification_handler(request)
                return None
            if request.is_notification:
                self._run_notification(request)
                return None

            result = self._dispatch(request)
        except JsonRpcError as exc:
            self._logger.warning(
                "mcp_request_failed",
                request_id=request_id,
                code=exc.code,
                error=exc.message,
            )
            return build_error_response(request_id, exc.code, exc.message)

        response = build_success_response(request.id, result)
        if request.method == "initialize":
            self._send_initialized_notification()
        return response

    def _run_notification(self, request: JsonRpcRequest) -> None:
        """id 없는 메시지도 실행하지만 결과와 오류는 응답하지 않고 기록만 해요.

        응답이 없으므로 `initialize` 알림 뒤에는 `initialized` 알림도 보내지 않아요.
        """
        try:
            self._dispatch(request)
        except JsonRpcError as exc:
            self._logger.warning(
                "mcp_notification_failed",
                method=request.method,
                code=exc.code,
                error=exc.message,
            )
            return
        self._logger.debug("mcp_notification_handled", method=request.method)

    def _dispatch(self, request: JsonRpcRequest) -> Any:
        handler = self._request_handlers.get(request.method)
        if handler is None:
            raise MethodNotFoundError(f"Method not found: {request.method}")
        return handler(request.params or {})

    # --- 메서드 핸들러 ---

    def _handle_initialize(self, params: dict[str, Any]) -> dict[str, Any]:
        requested_version = params.get("protocolVersion")
        protocol_version = requested_version if requested_version is not None else self._default_protocol_version
        self._logger.info(
            "mcp_initializing",
            requested_protocol_version=requested_version,
            protocol_version=protocol_version,
            client_info=params.get("clientInfo"),
        )
        self._initialized = True
        return {
            "serverInfo": self._info.to_dict(),
            "capabilities": {"tools": {}},
            "protocolVersion": protocol_version,
        }

    def _handle_ping(self, params: dict[str, Any]) -> dict[str, Any]:
        del params
        return {}

    def _handle_list_tools(self, params: dict[str, Any]) -> dict[str, Any]:
        del params
        return {"tools": self._registry.to_mcp_specs()}

    def _handle_call_tool(self, params: dict[str, Any]) -> dict[str, Any]:
        tool_name = params.get("name")
        arguments = params.get("arguments")
        if arguments is None:
            arguments = {}

        if not isinstance(tool_name, str) or tool_name not in self._registry:
            raise MethodNotFoundError(f"Tool not found: {tool_name}")

        self._logger.info("mcp_tool_call", tool_name=tool_name)
        result = self._registry.call(tool_name, arguments)
        if not result.ok:
            raise InternalError(f"Tool execution error: {result.error}")

        return {"content": [{"type": "text", "text": _stringify(result.value)}]}

    def _on_client_initialized(self, request: JsonRpcRequest) -> None:
        del request
        self._logger.info("mcp_client_initialized")

    def _send_initialized_notification(self) -> None:
        if self._transport is None:
            self._logger.warning("initialized_notification_skipped", reason="no_transport")
            return
        self._logger.info("initialized_notification_sent")
        self._transport.send(build_notification("initialized"))


def _decode(raw_line: str) -> Any:
    try:
        return json.loads(raw_line)
    except json.JSONDecodeError as exc:
        raise ParseError(f"Parse error: {exc}") from exc


def _validate_envelope(payload: Any) -> JsonRpcRequest:
    if not isinstance(payload, dict):
        raise InvalidRequestError("Invalid Request: Expected a JSON object")
    if payload.get("jsonrpc") != JSONRPC_VERSION:
        raise InvalidRequestError("Invalid Request: Expected jsonrpc 2.0")
    try:
        return JsonRpcRequest.model_validate(payload)
    except ValidationError as exc:
        details = "; ".join(
            f"{'.'.join(str(part) for part in error['loc'])}: {error['msg']}" for error in exc.errors()
        )
        raise InvalidRequestError(f"Invalid Request: {details}") from exc


def _stringify(value: Any) -> str:
    if value is None:
        return ""
    return str(value)
