"""줄 단위 양방향 스트림 위에서 JSON-RPC 메시지를 주고받는 전송 계층이에요."""

from __future__ import annotations

import sys
from collections.abc import Callable
from typing import Protocol, TextIO

from structlog.typing import FilteringBoundLogger

from libs.common.logging import get_logger

MessageHandler = Callable[[str], str | None]


class Transport(Protocol):
    def on_message(self, handler: MessageHandler) -> None: ...
    def start(self) -> None: ...
    def send(self, message: str) -> None: ...


class StdioTransport:
    """입력 스트림에서 한 줄씩 읽어 핸들러에 넘기고, 응답을 출력 스트림에 한 줄로 써요.

    기본값은 표준 입출력이지만 `io.StringIO` 같은 메모리 버퍼도 그대로 쓸 수 있어요.

    핸들러 실행 중에 `send()`로 보낸 메시지는 그 핸들러의 응답이 쓰인 직후에
    나가요. `initialize` 응답 뒤에 `initialized` 알림이 오는 순서가 여기서 보장돼요.
    """

    def __init__(
        self,
        input_stream: TextIO | None = None,
        output_stream: TextIO | None = None,
        *,
        logger: FilteringBoundLogger | None = None,
    ) -> None:
        self._input = input_stream if input_stream is not None else sys.stdin
        self._output = output_stream if output_stream is not None else sys.stdout
        self._logger = logger or get_logger("stdio_mcp.transport")
        self._handler: MessageHandler | None = None
        self._dispatching = False
        self._deferred: list[str] = []

    def on_message(self, handler: MessageHandler) -> None:
        """메시지 핸들러를 등록해요. 마지막에 등록한 핸들러 하나만 유효해요."""
        self._handler = handler

    def send(self, message: str) -> None:
        if self._dispatching:
            self._deferred.append(message)
            return
        self._write_line(message)

    def start(self) -> None:
        """입력이 끝날 때까지 블로킹으로 메시지를 처리해요.

        입력 스트림이 닫히면 정상 종료해요. 읽기, 쓰기, 핸들러에서 난 예외는
        기록한 뒤 그대로 다시 던져요. 전송 계층 오류는 세션을 끝내요.
        """
        self._logger.info("stdio_transport_started")
        try:
            while True:
                raw = self._input.readline()
                if raw == "":
                    self._logger.info("stdio_transport_input_closed")
                    break

                line = raw.strip()
                if not line:
                    continue

                self._logger.debug("stdio_message_received", message=line)
                self._dispatch(line)
        except Exception as exc:
            self._logger.exception("stdio_transport_error", error=str(exc))
            raise

    def _dispatch(self, line: str) -> None:
        if self._handler is None:
            self._logger.warning("stdio_message_dropped_no_handler")
            return

        self._dispatching = True
        try:
            response = self._handler(line)
        except Exception:
            self._deferred.clear()
            raise
        finally:
            self._dispatching = False

        if response:
            self._logger.debug("stdio_response_sent", message=response)
            self._write_line(response)
        else:
            self._logger.debug("stdio_no_response")

        deferred, self._deferred = self._deferred, []
        for message in deferred:
            self._write_line(message)

    def _write_line(self, message: str) -> None:
        self._output.write(message + "\n")
        self._output.flush()
