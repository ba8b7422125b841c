"""
Tool: Calculate Langelier Saturation Index (LSI)

LSI = pH - pH_s, where pH_s is the pH at calcium carbonate saturation,
estimated from temperature, calcium hardness, carbonate alkalinity
(total alkalinity less cyanurate alkalinity) and TDS.

Interpretation:
- LSI > +0.3: Scale-forming tendency (water can precipitate CaCO₃)
- -0.3 to +0.3: Balanced
- LSI < -0.3: Corrosive tendency (water can dissolve CaCO₃, etch plaster)

Typical use: pool and spa water balance.
"""

from typing import Dict
import logging
import math

from core.lsi_engine import evaluate_lsi
from core.schemas import WaterBalance, WaterParameters

logger = logging.getLogger(__name__)


INTERPRETATIONS = {
    WaterBalance.BALANCED: (
        "Water is properly balanced",
        "No action required. Retest after significant chemical additions.",
    ),
    WaterBalance.SCALE_FORMING: (
        "Water is oversaturated (tendency to scale)",
        "Lower pH or total alkalinity, or dilute to reduce calcium hardness. "
        "Watch for scale on surfaces and heater elements.",
    ),
    WaterBalance.CORROSIVE: (
        "Water is undersaturated (tendency to be corrosive)",
        "Raise pH, total alkalinity or calcium hardness. "
        "Corrosive water can etch plaster and attack metal fittings.",
    ),
    WaterBalance.INVALID: (
        "Invalid input",
        "Check readings: calcium and TDS must be positive and total alkalinity "
        "must exceed the cyanurate alkalinity contributed by CYA.",
    ),
}


def calculate_langelier_index(
    pH: float,
    temperature: float,
    calcium: float,
    alkalinity: float,
    cya: float,
    tds: float,
) -> Dict:
    """
    Calculate Langelier Saturation Index (LSI) for pool/spa water.

    Args:
        pH: Water pH
        temperature: Water temperature (°F)
        calcium: Calcium hardness (ppm as CaCO3)
        alkalinity: Total alkalinity (ppm as CaCO3)
        cya: Cyanuric acid (ppm)
        tds: Total dissolved solids (ppm)

    Returns:
        Dictionary containing:
        - lsi: Langelier Saturation Index (None if input is invalid)
        - pH_saturation: pH at calcite saturation (None if invalid)
        - factors: temperature/calcium/alkalinity/TDS factors
        - status: "balanced", "scale_forming", "corrosive" or "invalid"
        - is_valid: False when the LSI is NaN or infinite
        - interpretation: Text summary
        - action_required: Recommended action

    Example:
        >>> result = calculate_langelier_index(
        ...     pH=7.5, temperature=80, calcium=250, alkalinity=120, cya=30, tds=300
        ... )
        >>> result["lsi"]
        -0.039
        >>> result["status"]
        'balanced'
    """
    params = WaterParameters(
        pH=pH,
        temperature=temperature,
        calcium=calcium,
        alkalinity=alkalinity,
        cya=cya,
        tds=tds,
    )
    result = evaluate_lsi(params)
    logger.debug(f"LSI {result.lsi} ({result.status.value}) for {params}")
    interpretation, action = INTERPRETATIONS[result.status]

    output = {
        "lsi": round(result.lsi, 3) if result.is_valid else None,
        "pH_saturation": round(result.saturation_pH, 3) if result.is_valid else None,
        "factors": {
            "temperature": _round_or_none(result.temperature_factor),
            "calcium": _round_or_none(result.calcium_factor),
            "alkalinity": _round_or_none(result.alkalinity_factor),
            "tds": _round_or_none(result.tds_factor),
        },
        "status": result.status.value,
        "is_valid": result.is_valid,
        "interpretation": interpretation,
        "action_required": action,
        "inputs": params.model_dump(),
    }

    # Hot water shifts the balance toward scaling (heater elements first)
    if result.is_valid and temperature >= 100.0 and result.lsi > 0.0:
        output["note"] = (
            "Spa temperatures raise scaling tendency. "
            "Heater elements scale first; aim for the low end of the balanced range."
        )

    return output


def _round_or_none(value: float, digits: int = 4):
    # JSON has no NaN/Infinity; report non-finite factors as None
    if not math.isfinite(value):
        return None
    return round(value, digits)
