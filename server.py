"""
LSI Calculator MCP Server

FastMCP server exposing the Langelier Saturation Index engine for pool and
spa water balance.

Tools:
- lsi_calculate: LSI with balance interpretation and factors
- lsi_sensitivity_chart: LSI vs. one parameter (chart data)
- lsi_parameter_config: Slider bounds/steps for every parameter
- lsi_session_update: Change one reading in the shared session
- lsi_session_state: Current session readings, LSI and active chart
- lsi_get_server_info: Server information

Usage:
    python server.py
"""

from fastmcp import FastMCP
from mcp.types import ToolAnnotations
import logging

from tools.chemistry.langelier_index import calculate_langelier_index
from tools.chemistry.sensitivity_chart import (
    generate_sensitivity_chart,
    get_parameter_configs,
)
from core.state_container import get_global_session
from utils.lsi_constants import (
    BALANCED_LSI_MAX,
    BALANCED_LSI_MIN,
    LSI_CONSTANTS,
    PARAMETER_NAMES,
    PARAMETER_RANGES,
)

# Pydantic imports for input validation
from pydantic import BaseModel, Field, ConfigDict, field_validator, model_validator

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)


# ============================================================================
# Constants
# ============================================================================

SERVER_NAME = "LSI Calculator"
SERVER_VERSION = "0.1.0"


# ============================================================================
# Pydantic Input Models
# ============================================================================

class WaterReadingsInput(BaseModel):
    """Water test readings (bounds match the slider ranges)."""
    model_config = ConfigDict(validate_assignment=True)

    pH: float = Field(
        ...,
        description="Water pH",
        ge=LSI_CONSTANTS.MIN_PH,
        le=LSI_CONSTANTS.MAX_PH
    )
    temperature: float = Field(
        ...,
        description="Water temperature in °F",
        ge=LSI_CONSTANTS.MIN_TEMP,
        le=LSI_CONSTANTS.MAX_TEMP
    )
    calcium: float = Field(
        ...,
        description="Calcium hardness in ppm as CaCO3",
        ge=LSI_CONSTANTS.MIN_CALCIUM,
        le=LSI_CONSTANTS.MAX_CALCIUM
    )
    alkalinity: float = Field(
        ...,
        description="Total alkalinity in ppm as CaCO3",
        ge=LSI_CONSTANTS.MIN_ALKALINITY,
        le=LSI_CONSTANTS.MAX_ALKALINITY
    )
    cya: float = Field(
        default=0.0,
        description="Cyanuric acid (stabilizer) in ppm",
        ge=LSI_CONSTANTS.MIN_CYA,
        le=LSI_CONSTANTS.MAX_CYA
    )
    tds: float = Field(
        default=1000.0,
        description="Total dissolved solids in ppm",
        ge=LSI_CONSTANTS.MIN_TDS,
        le=LSI_CONSTANTS.MAX_TDS
    )


class CalculateLSIInput(WaterReadingsInput):
    """Input for Langelier Saturation Index calculation."""


class SensitivityChartInput(WaterReadingsInput):
    """Input for LSI sensitivity chart generation."""

    parameter: str = Field(
        ...,
        description=f"Parameter to vary. Options: {', '.join(PARAMETER_NAMES)}"
    )

    @field_validator('parameter')
    @classmethod
    def validate_parameter(cls, v: str) -> str:
        v = v.strip()
        if v not in PARAMETER_NAMES:
            raise ValueError(f"Parameter '{v}' not supported. Options: {list(PARAMETER_NAMES)}")
        return v


class SessionUpdateInput(BaseModel):
    """Input for changing one reading in the shared session."""
    model_config = ConfigDict(str_strip_whitespace=True)

    parameter: str = Field(
        ...,
        description=f"Parameter to change. Options: {', '.join(PARAMETER_NAMES)}"
    )
    value: float = Field(..., description="New reading")

    @field_validator('parameter')
    @classmethod
    def validate_parameter(cls, v: str) -> str:
        if v not in PARAMETER_NAMES:
            raise ValueError(f"Parameter '{v}' not supported. Options: {list(PARAMETER_NAMES)}")
        return v

    @model_validator(mode='after')
    def validate_value_in_range(self):
        minimum, maximum, _ = PARAMETER_RANGES[self.parameter]
        if not minimum <= self.value <= maximum:
            raise ValueError(
                f"{self.parameter}={self.value} outside range [{minimum}, {maximum}]"
            )
        return self


# ============================================================================
# Initialize FastMCP Server
# ============================================================================

mcp = FastMCP(SERVER_NAME)


# ============================================================================
# LSI Tools
# ============================================================================

@mcp.tool(
    name="lsi_calculate",
    annotations=ToolAnnotations(
        readOnlyHint=True,
        openWorldHint=False,
    )
)
async def lsi_calculate(params: CalculateLSIInput) -> dict:
    """
    Calculate Langelier Saturation Index (LSI) for pool/spa water.

    The LSI predicts CaCO₃ scaling tendency:
    - LSI > +0.3: Scale-forming tendency
    - -0.3 to +0.3: Balanced
    - LSI < -0.3: Corrosive tendency

    Args:
        params (CalculateLSIInput): Validated input parameters containing:
            - pH (float): Water pH (6.0-8.4)
            - temperature (float): Water temperature in °F (80-110)
            - calcium (float): Calcium hardness in ppm (0-1000)
            - alkalinity (float): Total alkalinity in ppm (0-400)
            - cya (float): Cyanuric acid in ppm (0-50)
            - tds (float): Total dissolved solids in ppm (300-3000)

    Returns:
        Dictionary with LSI, saturation pH, factors, status, interpretation
        and recommended action. ``lsi`` is None when the readings are
        chemically invalid (e.g., calcium = 0).

    Example:
        result = await lsi_calculate(CalculateLSIInput(
            pH=7.5, temperature=80, calcium=250, alkalinity=120, cya=30, tds=300
        ))
        print(result["lsi"])  # -0.039
    """
    logger.info(f"Calculating LSI for {params.model_dump()}")
    result = calculate_langelier_index(**params.model_dump())
    logger.info(f"LSI = {result['lsi']} ({result['status']})")
    return result


@mcp.tool(
    name="lsi_sensitivity_chart",
    annotations=ToolAnnotations(
        readOnlyHint=True,
        openWorldHint=False,
    )
)
async def lsi_sensitivity_chart(params: SensitivityChartInput) -> dict:
    """
    Generate LSI sensitivity chart data for one parameter.

    Varies the chosen parameter across its full slider range while holding
    the other readings fixed. Points where the LSI is not finite are
    excluded from the series.

    Args:
        params (SensitivityChartInput): Current readings plus:
            - parameter (str): pH, temperature, calcium, alkalinity, cya or tds

    Returns:
        Dictionary with parameter config, current value/LSI and the ordered
        list of {"value", "lsi"} samples.
    """
    readings = params.model_dump(exclude={"parameter"})
    logger.info(f"Sampling LSI sensitivity to {params.parameter}")
    return generate_sensitivity_chart(params.parameter, **readings)


@mcp.tool(
    name="lsi_parameter_config",
    annotations=ToolAnnotations(
        readOnlyHint=True,
        openWorldHint=False,
    )
)
async def lsi_parameter_config() -> dict:
    """
    Get slider metadata (title, unit, min, max, step) for every parameter.

    Returns:
        Dictionary with ``parameters`` (display order) and the base
        saturation-pH constant.
    """
    return get_parameter_configs()


# ============================================================================
# Session Tools
# ============================================================================

def _session_state() -> dict:
    session = get_global_session()
    snapshot = session.snapshot()
    stats = session.get_stats()
    return {
        "readings": snapshot,
        "active_parameter": session.active_parameter,
        "result": calculate_langelier_index(**snapshot),
        "chart": generate_sensitivity_chart(session.active_parameter, **snapshot),
        "updates": stats["updates"],
        "created_at": stats["created_at"].isoformat(),
    }


@mcp.tool(
    name="lsi_session_update",
    annotations=ToolAnnotations(
        readOnlyHint=False,
        openWorldHint=False,
    )
)
async def lsi_session_update(params: SessionUpdateInput) -> dict:
    """
    Change one reading in the shared session (last input wins).

    The changed parameter becomes the active chart parameter. The LSI and
    chart are recomputed from scratch.

    Args:
        params (SessionUpdateInput): Validated input containing:
            - parameter (str): Reading to change
            - value (float): New value (must lie within the slider range)

    Returns:
        Session state: readings, LSI result, and active chart.
    """
    session = get_global_session()
    session.update_parameter(params.parameter, params.value)
    logger.info(f"Session: {params.parameter} = {params.value}")
    return _session_state()


@mcp.tool(
    name="lsi_session_state",
    annotations=ToolAnnotations(
        readOnlyHint=True,
        openWorldHint=False,
    )
)
async def lsi_session_state() -> dict:
    """
    Get the shared session state: readings, LSI result, and active chart.
    """
    return _session_state()


# ============================================================================
# Server Info
# ============================================================================

@mcp.tool(
    name="lsi_get_server_info",
    annotations=ToolAnnotations(
        readOnlyHint=True,
        openWorldHint=False,
    )
)
async def get_server_info() -> dict:
    """
    Get information about the LSI Calculator MCP server.

    Returns:
        Server name, version, tool list, formula and parameter ranges.
    """
    return {
        "name": f"{SERVER_NAME} MCP Server",
        "version": SERVER_VERSION,
        "formula": f"LSI = pH - pHs; pHs = {LSI_CONSTANTS.BASE_SATURATION_PH} + A(TDS) + B(temp) - C(calcium) - D(carbonate alkalinity)",
        "tools": [
            "lsi_calculate",
            "lsi_sensitivity_chart",
            "lsi_parameter_config",
            "lsi_session_update",
            "lsi_session_state",
            "lsi_get_server_info",
        ],
        "parameter_ranges": {
            name: {"min": lo, "max": hi, "step": step}
            for name, (lo, hi, step) in PARAMETER_RANGES.items()
        },
        "balanced_range": [BALANCED_LSI_MIN, BALANCED_LSI_MAX],
    }


# ============================================================================
# Run Server
# ============================================================================

if __name__ == "__main__":
    logger.info("=" * 70)
    logger.info(f"{SERVER_NAME} MCP Server v{SERVER_VERSION}")
    logger.info("=" * 70)
    logger.info("Tools:")
    logger.info("  lsi_calculate - Langelier Saturation Index")
    logger.info("  lsi_sensitivity_chart - LSI vs. one parameter")
    logger.info("  lsi_parameter_config - Slider bounds and steps")
    logger.info("  lsi_session_update / lsi_session_state - Shared session")
    logger.info("  lsi_get_server_info - Server information")
    logger.info("=" * 70)

    mcp.run()
