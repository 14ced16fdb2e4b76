from __future__ import annotations

from libs.common.logging import configure_logging
from stdio_mcp.app.settings import settings
from stdio_mcp.bootstrap.container import build_runtime_components


def main() -> None:
    # stdout은 프로토콜 전용이에요. 로그는 configure_logging이 stderr로 보내요.
    configure_logging(settings.log_level)
    runtime = build_runtime_components(settings)
    runtime.server.run(runtime.transport)


if __name__ == "__main__":
    main()
