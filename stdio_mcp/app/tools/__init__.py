from stdio_mcp.app.tools.base import BaseTool, FunctionTool, ToolResult
from stdio_mcp.app.tools.random_number import RandomNumberTool
from stdio_mcp.app.tools.registry import ToolRegistry

__all__ = [
    "BaseTool",
    "FunctionTool",
    "RandomNumberTool",
    "ToolRegistry",
    "ToolResult",
]
