"""
LSI Engine: saturation pH, Langelier Saturation Index, and range sampling.

    LSI  = pH - pH_s
    pH_s = BASE_SATURATION_PH + A + B - C - D

Contract:
- Pure functions: no I/O, no shared mutable state, no caching.
- No validation or clamping. Out-of-domain input (non-positive calcium or
  TDS, alkalinity overwhelmed by cyanurate) produces NaN or ±inf, never an
  exception.
- The range sampler omits non-finite samples instead of surfacing them.

Sampling policy:
    Grid points are generated from an integer count, value_k = min + k*step,
    instead of repeatedly adding step to a float. This avoids accumulation
    drift (0.1 added 24 times is not exactly 2.4) so the upper bound is
    always included when it lies on the step grid.
"""

import logging
import math
from typing import Mapping, Tuple, Union

import numpy as np

from core.schemas import ChartSample, ChartSeries, LSIResult, WaterBalance, WaterParameters
from utils.lsi_constants import (
    BALANCED_LSI_MAX,
    BALANCED_LSI_MIN,
    LSI_CONSTANTS,
    PARAMETER_RANGES,
)
from utils.lsi_factors import (
    alkalinity_factor,
    calcium_factor,
    tds_factor,
    temperature_factor,
)

logger = logging.getLogger(__name__)

WaterInput = Union[WaterParameters, Mapping[str, float]]


def _as_mapping(params: WaterInput) -> Mapping[str, float]:
    if isinstance(params, WaterParameters):
        return params.model_dump()
    return params


def _read(params: Mapping[str, float], name: str) -> float:
    # Missing or None readings become NaN so the result is NaN, not an exception
    value = params.get(name)
    if value is None:
        return math.nan
    return float(value)


def _factors(values: Mapping[str, float]) -> Tuple[float, float, float, float, float]:
    """(pH, temperature factor, calcium factor, alkalinity factor, TDS factor)"""
    pH = _read(values, "pH")
    return (
        pH,
        temperature_factor(_read(values, "temperature")),
        calcium_factor(_read(values, "calcium")),
        alkalinity_factor(_read(values, "alkalinity"), _read(values, "cya"), pH),
        tds_factor(_read(values, "tds")),
    )


def saturation_ph(tf: float, cf: float, af: float, tds_f: float) -> float:
    """pH_s = BASE + TDS factor + temperature factor - calcium factor - alkalinity factor"""
    return LSI_CONSTANTS.BASE_SATURATION_PH + tds_f + tf - cf - af


def calculate_lsi(params: WaterInput) -> float:
    """
    Calculate the Langelier Saturation Index.

    Args:
        params: WaterParameters, or a mapping with keys pH, temperature,
                calcium, alkalinity, cya, tds

    Returns:
        LSI (pH - pH_s). NaN or ±inf for incomplete or out-of-domain input.

    Example:
        >>> lsi = calculate_lsi({"pH": 7.5, "temperature": 80, "calcium": 250,
        ...                      "alkalinity": 120, "cya": 30, "tds": 300})
        >>> round(lsi, 3)
        -0.039
    """
    pH, tf, cf, af, tds_f = _factors(_as_mapping(params))
    return pH - saturation_ph(tf, cf, af, tds_f)


def classify_lsi(lsi: float) -> WaterBalance:
    """
    Classify an LSI value.

    [-0.3, 0.3] is balanced, above is scale forming, below is corrosive.
    NaN and ±inf are classified as invalid.
    """
    if not math.isfinite(lsi):
        return WaterBalance.INVALID
    if lsi > BALANCED_LSI_MAX:
        return WaterBalance.SCALE_FORMING
    if lsi < BALANCED_LSI_MIN:
        return WaterBalance.CORROSIVE
    return WaterBalance.BALANCED


def evaluate_lsi(params: WaterInput) -> LSIResult:
    """
    Calculate the LSI and return it as a tagged result.

    Same arithmetic as calculate_lsi(), with every intermediate factor and
    the balance classification attached. Never raises for numeric input;
    invalid input is reported through ``status == WaterBalance.INVALID``.
    """
    pH, tf, cf, af, tds_f = _factors(_as_mapping(params))

    pH_s = saturation_ph(tf, cf, af, tds_f)
    lsi = pH - pH_s
    status = classify_lsi(lsi)

    if status == WaterBalance.INVALID:
        logger.warning(
            f"Non-finite LSI (tf={tf}, cf={cf}, af={af}, tds_f={tds_f}); "
            f"check calcium, alkalinity/CYA and TDS inputs"
        )

    return LSIResult(
        lsi=lsi,
        saturation_pH=pH_s,
        temperature_factor=tf,
        calcium_factor=cf,
        alkalinity_factor=af,
        tds_factor=tds_f,
        status=status,
    )


def _step_decimals(step: float) -> int:
    """Decimal places needed to represent grid values for a step (0.1 -> 1)"""
    decimals = 0
    while decimals < 10 and not float(step * 10 ** decimals).is_integer():
        decimals += 1
    return decimals


def sample_grid(minimum: float, maximum: float, step: float) -> np.ndarray:
    """
    Inclusive sampling grid from minimum to maximum.

    Count-based: n = floor((max - min) / step) + 1 points, so the last point
    is max when max lies on the grid and otherwise the last grid point
    below it.
    """
    n_points = int(math.floor((maximum - minimum) / step + 1e-9)) + 1
    if n_points <= 0:
        return np.empty(0)
    grid = minimum + np.arange(n_points) * step
    return np.round(grid, _step_decimals(step))


def sample_range(parameter_name: str, fixed_params: WaterInput) -> ChartSeries:
    """
    Sensitivity curve of LSI against one parameter.

    Varies ``parameter_name`` across its (min, max, step) range from
    PARAMETER_RANGES while holding every other reading in ``fixed_params``
    constant.

    Args:
        parameter_name: One of pH, temperature, calcium, alkalinity, cya, tds
        fixed_params: Current water readings

    Returns:
        Samples in ascending order of value. Points with a NaN or infinite
        LSI are omitted. An unknown parameter name returns an empty list.
    """
    if parameter_name not in PARAMETER_RANGES:
        logger.debug(f"No sampling range for parameter '{parameter_name}'")
        return []

    minimum, maximum, step = PARAMETER_RANGES[parameter_name]
    base = dict(_as_mapping(fixed_params))

    series: ChartSeries = []
    for value in sample_grid(minimum, maximum, step):
        value = float(value)
        lsi = calculate_lsi({**base, parameter_name: value})
        if math.isfinite(lsi):
            series.append(ChartSample(value=value, lsi=lsi))

    logger.debug(
        f"Sampled {parameter_name}: {len(series)} points "
        f"({minimum} to {maximum}, step {step})"
    )
    return series

