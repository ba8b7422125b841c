"""
Pydantic models for LSI inputs and results.

All models are immutable value types: they are constructed fresh on every
recalculation and never mutated afterwards.

Numeric fields accept NaN and ±inf on purpose. The engine performs no
validation; range checks belong to the server input models.
"""

from typing import List
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


# ============================================================================
# Water Balance Classification
# ============================================================================

class WaterBalance(str, Enum):
    """Interpretation of an LSI value"""
    BALANCED = "balanced"              # -0.3 <= LSI <= 0.3
    SCALE_FORMING = "scale_forming"    # LSI > 0.3
    CORROSIVE = "corrosive"            # LSI < -0.3
    INVALID = "invalid"                # LSI is NaN or infinite


# ============================================================================
# Inputs
# ============================================================================

class WaterParameters(BaseModel):
    """Water test readings used by the LSI engine"""
    model_config = ConfigDict(frozen=True)

    pH: float = Field(..., description="Water pH (typical 6.0-8.4)")
    temperature: float = Field(..., description="Water temperature (°F, typical 80-110)")
    calcium: float = Field(..., description="Calcium hardness (ppm as CaCO3)")
    alkalinity: float = Field(..., description="Total alkalinity (ppm as CaCO3)")
    cya: float = Field(..., description="Cyanuric acid (ppm)")
    tds: float = Field(..., description="Total dissolved solids (ppm)")


# ============================================================================
# Results
# ============================================================================

class ChartSample(BaseModel):
    """One point of a sensitivity curve"""
    model_config = ConfigDict(frozen=True)

    value: float = Field(..., description="Value of the varied parameter")
    lsi: float = Field(..., description="LSI at that value")


ChartSeries = List[ChartSample]


class LSIResult(BaseModel):
    """
    Tagged LSI result.

    Carries the same number calculate_lsi() returns, plus the intermediate
    factors and an explicit valid/invalid tag so consumers do not have to
    test for NaN themselves.
    """
    model_config = ConfigDict(frozen=True)

    lsi: float = Field(..., description="Langelier Saturation Index (pH - pH_s)")
    saturation_pH: float = Field(..., description="pH at calcium carbonate saturation")
    temperature_factor: float
    calcium_factor: float
    alkalinity_factor: float
    tds_factor: float
    status: WaterBalance = Field(..., description="Balance classification")

    @property
    def is_valid(self) -> bool:
        return self.status != WaterBalance.INVALID


class ParameterConfig(BaseModel):
    """Slider metadata for one water parameter"""
    model_config = ConfigDict(frozen=True)

    name: str = Field(..., description="Parameter key (e.g., 'pH', 'calcium')")
    title: str = Field(..., description="Display title")
    unit: str = Field(..., description="Display unit ('' for pH)")
    min: float
    max: float
    step: float
