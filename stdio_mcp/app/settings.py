from __future__ import annotations

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from libs.common.logging import resolve_log_level
from stdio_mcp.app.mcp_protocol import DEFAULT_PROTOCOL_VERSION


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="MCP_",
        extra="ignore",
        env_file=".env",
        env_file_encoding="utf-8",
    )

    server_name: str = "random-number-server"
    server_version: str = "1.0.0"
    log_level: str = "INFO"
    # 클라이언트가 protocolVersion을 보내지 않았을 때 응답에 쓰는 값이에요.
    default_protocol_version: str = DEFAULT_PROTOCOL_VERSION

    @field_validator("log_level", mode="before")
    @classmethod
    def _normalize_log_level(cls, value: object) -> str:
        """대소문자를 정규화하고, 모르는 레벨이면 시작 단계에서 실패시켜요."""
        if not isinstance(value, str):
            raise ValueError("log_level은 문자열이어야 해요.")
        normalized = value.strip().upper()
        resolve_log_level(normalized)
        return normalized


settings = Settings()
