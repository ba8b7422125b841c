"""
Core LSI engine for the LSI calculator MCP server.

This module provides:
- Value types (water readings, chart samples, tagged LSI results)
- The pure LSI engine (saturation pH, LSI, classification, range sampling)
- Session state ("last input wins" water readings)
"""

from .schemas import (
    WaterParameters,
    ChartSample,
    ChartSeries,
    LSIResult,
    ParameterConfig,
    WaterBalance,
)
from .lsi_engine import (
    saturation_ph,
    calculate_lsi,
    classify_lsi,
    evaluate_lsi,
    sample_range,
)
from .state_container import LSISession

__all__ = [
    "WaterParameters",
    "ChartSample",
    "ChartSeries",
    "LSIResult",
    "ParameterConfig",
    "WaterBalance",
    "saturation_ph",
    "calculate_lsi",
    "classify_lsi",
    "evaluate_lsi",
    "sample_range",
    "LSISession",
]
