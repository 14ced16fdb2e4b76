from __future__ import annotations


class DomainError(Exception):
    def __init__(self, error_code: str, message: str) -> None:
        super().__init__(message)
        self.error_code = error_code
        self.message = message


class ConfigurationError(DomainError):
    def __init__(self, message: str = "설정이 올바르지 않아요.") -> None:
        super().__init__("CONFIGURATION_ERROR", message)


# --- JSON-RPC 2.0 오류 ---


class JsonRpcError(DomainError):
    """클라이언트에 JSON-RPC error 객체로 전달되는 오류예요.

    디스패처의 메서드 핸들러가 던지고, `handle_message` 경계에서
    error 응답으로 변환돼요. 세션은 계속 유지돼요.
    """

    code: int = -32603


class ParseError(JsonRpcError):
    code = -32700

    def __init__(self, message: str = "Parse error") -> None:
        super().__init__("PARSE_ERROR", message)


class InvalidRequestError(JsonRpcError):
    code = -32600

    def __init__(self, message: str = "Invalid Request") -> None:
        super().__init__("INVALID_REQUEST", message)


class MethodNotFoundError(JsonRpcError):
    code = -32601

    def __init__(self, message: str = "Method not found") -> None:
        super().__init__("METHOD_NOT_FOUND", message)


class InternalError(JsonRpcError):
    code = -32603

    def __init__(self, message: str = "Internal error") -> None:
        super().__init__("INTERNAL_ERROR", message)
