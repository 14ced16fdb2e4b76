from __future__ import annotations

import io

import pytest
from stdio_mcp.app.transport import StdioTransport


class _FlushCountingStream(io.StringIO):
    def __init__(self) -> None:
        super().__init__()
        self.flush_count = 0

    def flush(self) -> None:
        self.flush_count += 1
        super().flush()


def _transport(text: str) -> tuple[StdioTransport, _FlushCountingStream]:
    output_stream = _FlushCountingStream()
    return StdioTransport(io.StringIO(text), output_stream), output_stream


def test_handler_receives_stripped_lines_and_blank_lines_are_skipped() -> None:
    transport, _ = _transport("  first  \n\n   \n\tsecond\n")
    received: list[str] = []

    def handler(line: str) -> None:
        received.append(line)

    transport.on_message(handler)
    transport.start()

    assert received == ["first", "second"]


def test_responses_are_written_one_per_line_and_flushed() -> None:
    transport, output_stream = _transport("a\nb\n")
    transport.on_message(lambda line: f"reply-{line}")
    transport.start()

    assert output_stream.getvalue() == "reply-a\nreply-b\n"
    assert output_stream.flush_count == 2


def test_empty_or_missing_response_writes_nothing() -> None:
    transport, output_stream = _transport("skip\nempty\nanswer\n")
    replies = {"skip": None, "empty": "", "answer": "ok"}
    transport.on_message(lambda line: replies[line])
    transport.start()

    assert output_stream.getvalue() == "ok\n"


def test_end_of_input_returns_normally() -> None:
    transport, output_stream = _transport("")
    transport.on_message(lambda line: "unreachable")
    transport.start()
    assert output_stream.getvalue() == ""


def test_last_registered_handler_wins() -> None:
    transport, output_stream = _transport("x\n")
    transport.on_message(lambda line: "first")
    transport.on_message(lambda line: "second")
    transport.start()
    assert output_stream.getvalue() == "second\n"


def test_send_during_dispatch_is_written_after_response() -> None:
    transport, output_stream = _transport("ping\nnext\n")

    def handler(line: str) -> str:
        if line == "ping":
            transport.send("pushed")
        return f"reply-{line}"

    transport.on_message(handler)
    transport.start()

    assert output_stream.getvalue().splitlines() == ["reply-ping", "pushed", "reply-next"]


def test_send_outside_dispatch_is_written_immediately() -> None:
    transport, output_stream = _transport("")
    transport.send("hello")
    assert output_stream.getvalue() == "hello\n"
    assert output_stream.flush_count == 1


def test_handler_exception_is_fatal() -> None:
    transport, output_stream = _transport("bad\nnever\n")
    seen: list[str] = []

    def handler(line: str) -> str:
        seen.append(line)
        raise RuntimeError("handler failed")

    transport.on_message(handler)
    with pytest.raises(RuntimeError, match="handler failed"):
        transport.start()

    assert seen == ["bad"]
    assert output_stream.getvalue() == ""


def test_failed_dispatch_discards_pending_sends() -> None:
    output_stream = io.StringIO()
    transport = StdioTransport(io.StringIO("a\n"), output_stream)

    def failing_handler(line: str) -> str:
        transport.send("pushed")
        raise RuntimeError("handler failed")

    transport.on_message(failing_handler)
    with pytest.raises(RuntimeError):
        transport.start()

    transport._input = io.StringIO("b\n")
    transport.on_message(lambda line: f"reply-{line}")
    transport.start()

    assert output_stream.getvalue() == "reply-b\n"


def test_write_failure_propagates() -> None:
    output_stream = io.StringIO()
    output_stream.close()
    transport = StdioTransport(io.StringIO("x\n"), output_stream)
    transport.on_message(lambda line: "reply")
    with pytest.raises(ValueError):
        transport.start()
