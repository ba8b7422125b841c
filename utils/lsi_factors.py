"""
LSI Factor Functions

Each function converts one raw water parameter into its contribution to the
saturation pH (pH_s). All functions are pure and never raise for numeric
input: out-of-domain values propagate as NaN or ±inf.

Logarithms use numpy.log10 rather than math.log10 because math.log10 raises
ValueError for non-positive arguments, while numpy returns -inf (zero) or
NaN (negative) under IEEE-754 semantics.

References:
    Carrier Air Conditioning Company (1965). Handbook of Air Conditioning
    System Design. Section on Langelier Saturation Index.

    O'Brien, J. E. (1972). Hydrolytic and ionization equilibria of chlorinated
    isocyanurate in water. pKa of cyanuric acid = 6.51 (used for the
    cyanurate alkalinity correction common in pool chemistry).
"""

import math

import numpy as np

from utils.lsi_constants import CYANURIC_ACID_PKA


def _log10(x: float) -> float:
    """log10 that returns -inf/NaN instead of raising"""
    with np.errstate(divide="ignore", invalid="ignore"):
        return float(np.log10(x))


def _pow10(x: float) -> float:
    """10**x that overflows to inf instead of raising OverflowError"""
    with np.errstate(over="ignore"):
        return float(np.power(10.0, x))


def fahrenheit_to_celsius(temp_f: float) -> float:
    return (temp_f - 32.0) * 5.0 / 9.0


def temperature_factor(temp_f: float) -> float:
    """
    Temperature factor (B term).

    Equation:
        B = -13.12 * log10(T_C + 273) + 34.55

    Args:
        temp_f: Water temperature (°F)

    Returns:
        Temperature factor (dimensionless). NaN at or below absolute zero.

    Example:
        >>> round(temperature_factor(80.0), 4)
        2.0565
    """
    celsius = fahrenheit_to_celsius(temp_f)
    return -13.12 * _log10(celsius + 273.0) + 34.55


def calcium_factor(calcium_ppm: float) -> float:
    """
    Calcium factor (C term): log10(Ca) - 0.4

    Returns -inf at 0 ppm and NaN for negative input.
    """
    return _log10(calcium_ppm) - 0.4


def cyanurate_ionization_fraction(cya: float, pH: float) -> float:
    """
    Fraction of cyanuric acid present as cyanurate (H2Cy-).

    Equation:
        f = 1 / (1 + 10^(pKa - pH)),  pKa = 6.51

    Args:
        cya: Cyanuric acid (ppm)
        pH: Water pH

    Returns:
        Ionized fraction in [0, 1]. Returns 0 when cya <= 0 regardless of pH.
    """
    if cya <= 0:
        return 0.0
    return 1.0 / (1.0 + _pow10(CYANURIC_ACID_PKA - pH))


def cyanurate_alkalinity(cya: float, pH: float) -> float:
    """Portion of total alkalinity contributed by cyanurate (ppm); 0 when cya <= 0"""
    if cya <= 0:
        return 0.0
    return cya * cyanurate_ionization_fraction(cya, pH)


def alkalinity_factor(alkalinity: float, cya: float, pH: float) -> float:
    """
    Alkalinity factor (D term), corrected for cyanurate alkalinity.

    Equation:
        D = log10(TA - CYA_alk)

    Args:
        alkalinity: Total alkalinity (ppm)
        cya: Cyanuric acid (ppm)
        pH: Water pH (affects cyanurate ionization)

    Returns:
        Alkalinity factor. NaN when cyanurate alkalinity exceeds total
        alkalinity or equals it (no carbonate alkalinity left).
    """
    effective_alkalinity = alkalinity - cyanurate_alkalinity(cya, pH)
    if effective_alkalinity <= 0:
        return math.nan
    return _log10(effective_alkalinity)


def tds_factor(tds_ppm: float) -> float:
    """TDS factor (A term): (log10(TDS) - 1) / 10"""
    return (_log10(tds_ppm) - 1.0) / 10.0
