"""
LSI Constants and Parameter Ranges

PROVENANCE:
Saturation pH base constant and factor forms follow the Carrier (1965)
formulation of the Langelier Saturation Index as used in pool/spa water
balance calculators:

    pH_s = 9.3 + A + B - C - D

    A = (log10(TDS) - 1) / 10
    B = -13.12 * log10(T_C + 273) + 34.55
    C = log10(Ca as CaCO3) - 0.4
    D = log10(alkalinity as CaCO3)

Parameter bounds are the slider ranges of a residential pool/spa:
pH 6.0-8.4, 80-110 °F, calcium 0-1000 ppm, alkalinity 0-400 ppm,
CYA 0-50 ppm, TDS 300-3000 ppm.

Everything in this module is read-only. Tables are exposed through
MappingProxyType so callers cannot mutate shared state.
"""

from dataclasses import dataclass
from types import MappingProxyType
from typing import Tuple


@dataclass(frozen=True)
class LSIConstants:
    """
    Immutable bounds and calibration constant for the LSI engine.

    Bounds define the valid input domain and the chart sampling range for
    each parameter. They are not enforced by the engine itself.
    """

    # Calibration
    BASE_SATURATION_PH: float = 9.3

    # pH (dimensionless)
    MIN_PH: float = 6.0
    MAX_PH: float = 8.4

    # Temperature (°F)
    MIN_TEMP: float = 80.0
    MAX_TEMP: float = 110.0

    # Calcium hardness (ppm as CaCO3)
    MIN_CALCIUM: float = 0.0
    MAX_CALCIUM: float = 1000.0

    # Total alkalinity (ppm as CaCO3)
    MIN_ALKALINITY: float = 0.0
    MAX_ALKALINITY: float = 400.0

    # Cyanuric acid (ppm)
    MIN_CYA: float = 0.0
    MAX_CYA: float = 50.0

    # Total dissolved solids (ppm)
    MIN_TDS: float = 300.0
    MAX_TDS: float = 3000.0


LSI_CONSTANTS = LSIConstants()

# pKa of cyanuric acid used for the cyanurate alkalinity correction
CYANURIC_ACID_PKA = 6.51

# Interpretation thresholds (fixed, inclusive on the balanced side)
BALANCED_LSI_MIN = -0.3
BALANCED_LSI_MAX = 0.3

# Parameter names, in display order
PARAMETER_NAMES: Tuple[str, ...] = (
    "pH",
    "temperature",
    "calcium",
    "alkalinity",
    "cya",
    "tds",
)

# name -> (min, max, step) used by the range sampler
PARAMETER_RANGES: "MappingProxyType[str, Tuple[float, float, float]]" = MappingProxyType({
    "pH": (LSI_CONSTANTS.MIN_PH, LSI_CONSTANTS.MAX_PH, 0.1),
    "temperature": (LSI_CONSTANTS.MIN_TEMP, LSI_CONSTANTS.MAX_TEMP, 1.0),
    "calcium": (LSI_CONSTANTS.MIN_CALCIUM, LSI_CONSTANTS.MAX_CALCIUM, 10.0),
    "alkalinity": (LSI_CONSTANTS.MIN_ALKALINITY, LSI_CONSTANTS.MAX_ALKALINITY, 10.0),
    "cya": (LSI_CONSTANTS.MIN_CYA, LSI_CONSTANTS.MAX_CYA, 1.0),
    "tds": (LSI_CONSTANTS.MIN_TDS, LSI_CONSTANTS.MAX_TDS, 100.0),
})

# name -> (title, unit) for slider labels
PARAMETER_LABELS: "MappingProxyType[str, Tuple[str, str]]" = MappingProxyType({
    "pH": ("pH Level", ""),
    "temperature": ("Temperature", "°F"),
    "calcium": ("Calcium Hardness", "ppm"),
    "alkalinity": ("Total Alkalinity", "ppm"),
    "cya": ("Cyanuric Acid", "ppm"),
    "tds": ("Total Dissolved Solids", "ppm"),
})

# Starting water record for a new session (typical hot tub)
DEFAULT_WATER_PARAMETERS: "MappingProxyType[str, float]" = MappingProxyType({
    "pH": 7.2,
    "temperature": 104.0,
    "calcium": 250.0,
    "alkalinity": 120.0,
    "cya": 30.0,
    "tds": 1000.0,
})


def get_parameter_range(name: str) -> Tuple[float, float, float]:
    """
    Get (min, max, step) for a parameter.

    Raises:
        KeyError: If the parameter name is unknown
    """
    return PARAMETER_RANGES[name]

