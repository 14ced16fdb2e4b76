from __future__ import annotations

import logging
import sys
from typing import TextIO, cast

import structlog
from structlog.typing import FilteringBoundLogger

from libs.common.errors import ConfigurationError

_LEVELS = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARNING": logging.WARNING,
    "ERROR": logging.ERROR,
    "CRITICAL": logging.CRITICAL,
}


def resolve_log_level(level: str) -> int:
    """레벨 이름을 logging 모듈의 숫자 레벨로 바꿔요."""
    resolved = _LEVELS.get(level.strip().upper())
    if resolved is None:
        raise ConfigurationError(f"지원하지 않는 로그 레벨이에요: {level}")
    return resolved


def configure_logging(level: str = "INFO", stream: TextIO | None = None) -> None:
    # stdout은 JSON-RPC 채널이라 로그는 기본적으로 stderr로 보내요.
    target = stream if stream is not None else sys.stderr
    numeric_level = resolve_log_level(level)
    logging.basicConfig(format="%(message)s", stream=target, level=numeric_level)
    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.JSONRenderer(),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(numeric_level),
        logger_factory=structlog.PrintLoggerFactory(file=target),
        cache_logger_on_first_use=True,
    )


def get_logger(name: str) -> FilteringBoundLogger:
    return cast(FilteringBoundLogger, structlog.get_logger(name))
