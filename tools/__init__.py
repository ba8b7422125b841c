"""
MCP tool implementations for the LSI calculator.

Tools return plain dictionaries (JSON-safe: non-finite numbers are reported
as None) so the server can hand them straight to MCP clients.
"""

from tools.chemistry import (
    calculate_langelier_index,
    generate_sensitivity_chart,
    get_parameter_configs,
)

__all__ = [
    "calculate_langelier_index",
    "generate_sensitivity_chart",
    "get_parameter_configs",
]
