from __future__ import annotations

from stdio_mcp.bootstrap.container import RuntimeComponents, build_runtime_components

__all__ = [
    "RuntimeComponents",
    "build_runtime_components",
]
