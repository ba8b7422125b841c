"""
Tool: LSI Sensitivity Chart

Samples LSI across the full range of one parameter while holding the other
readings fixed, producing the data behind a per-parameter bar chart.

Points where the LSI is not finite (e.g., calcium = 0, or alkalinity below
the cyanurate contribution) are left out of the series and counted in
``excluded_points``.
"""

from typing import Dict
import logging
import math

from core.lsi_engine import calculate_lsi, sample_grid, sample_range
from core.schemas import ParameterConfig, WaterParameters
from utils.lsi_constants import (
    LSI_CONSTANTS,
    PARAMETER_LABELS,
    PARAMETER_NAMES,
    get_parameter_range,
)

logger = logging.getLogger(__name__)


def get_parameter_config(name: str) -> ParameterConfig:
    """
    Slider metadata for one parameter.

    Raises:
        ValueError: If name is not a known parameter
    """
    if name not in PARAMETER_NAMES:
        raise ValueError(f"Unknown parameter '{name}'. Options: {list(PARAMETER_NAMES)}")

    minimum, maximum, step = get_parameter_range(name)
    title, unit = PARAMETER_LABELS[name]
    return ParameterConfig(name=name, title=title, unit=unit, min=minimum, max=maximum, step=step)


def get_parameter_configs() -> Dict:
    """
    Slider metadata for every parameter, in display order.

    Returns:
        Dictionary with:
        - parameters: list of {name, title, unit, min, max, step}
        - base_saturation_pH: calibration constant used in pH_s
    """
    return {
        "parameters": [get_parameter_config(name).model_dump() for name in PARAMETER_NAMES],
        "base_saturation_pH": LSI_CONSTANTS.BASE_SATURATION_PH,
    }


def generate_sensitivity_chart(
    parameter: str,
    pH: float,
    temperature: float,
    calcium: float,
    alkalinity: float,
    cya: float,
    tds: float,
) -> Dict:
    """
    Generate LSI-vs-parameter chart data.

    Args:
        parameter: Parameter to vary (pH, temperature, calcium, alkalinity, cya, tds)
        pH, temperature, calcium, alkalinity, cya, tds: Current readings

    Returns:
        Dictionary containing:
        - parameter: Parameter that was varied
        - config: Slider metadata for that parameter
        - current_value: Current reading of the varied parameter
        - current_lsi: LSI at the current readings (None if invalid)
        - samples: List of {"value", "lsi"} in ascending order of value
        - excluded_points: Grid points dropped because the LSI was not finite

    Raises:
        ValueError: If parameter is unknown
    """
    config = get_parameter_config(parameter)
    params = WaterParameters(
        pH=pH,
        temperature=temperature,
        calcium=calcium,
        alkalinity=alkalinity,
        cya=cya,
        tds=tds,
    )

    series = sample_range(parameter, params)
    n_grid = len(sample_grid(config.min, config.max, config.step))
    excluded = n_grid - len(series)
    if excluded:
        logger.info(f"{excluded} of {n_grid} {parameter} points excluded (non-finite LSI)")

    current_lsi = calculate_lsi(params)
    return {
        "parameter": parameter,
        "config": config.model_dump(),
        "current_value": getattr(params, parameter),
        "current_lsi": round(current_lsi, 3) if math.isfinite(current_lsi) else None,
        "samples": [{"value": s.value, "lsi": round(s.lsi, 4)} for s in series],
        "excluded_points": excluded,
    }

