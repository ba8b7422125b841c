"""
Chemistry Tools - Langelier Saturation Index calculations.

These tools provide instant (pure function) calculations for:
- Langelier Saturation Index with balance interpretation
- LSI sensitivity charts (LSI vs. one parameter)
- Slider/parameter metadata

All tools use the pure LSI engine in core.lsi_engine.
"""

from .langelier_index import calculate_langelier_index
from .sensitivity_chart import (
    generate_sensitivity_chart,
    get_parameter_config,
    get_parameter_configs,
)

__all__ = [
    "calculate_langelier_index",
    "generate_sensitivity_chart",
    "get_parameter_config",
    "get_parameter_configs",
]
