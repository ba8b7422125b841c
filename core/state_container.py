"""
Session state for interactive LSI adjustment.

Holds the current water readings and the parameter whose sensitivity chart
is active. Semantics are "last input wins": every update replaces the
record with a new immutable WaterParameters, and every read recomputes the
LSI and chart from scratch. Nothing is cached between calls.

Usage:
    session = LSISession()
    session.update_parameter("pH", 7.6)

    print(session.current_lsi())
    for sample in session.chart("calcium"):
        print(sample.value, sample.lsi)
"""

from typing import Any, Deque, Dict, List, Optional
from collections import deque
from dataclasses import dataclass
from datetime import datetime
import logging

from core.lsi_engine import calculate_lsi, evaluate_lsi, sample_range
from core.schemas import ChartSeries, LSIResult, WaterParameters
from utils.lsi_constants import DEFAULT_WATER_PARAMETERS, PARAMETER_NAMES

logger = logging.getLogger(__name__)

# Most recent changes kept per session; older entries are dropped
HISTORY_LIMIT = 500


@dataclass(frozen=True)
class ParameterChange:
    """One recorded session update"""
    parameter: str
    old_value: Optional[float]
    new_value: float
    timestamp: datetime


class LSISession:
    """
    Current water readings plus the active chart parameter.

    Not thread-safe. Use one session per interactive consumer.
    """

    def __init__(
        self,
        params: Optional[WaterParameters] = None,
        active_parameter: str = "pH",
    ):
        """Start from params, or DEFAULT_WATER_PARAMETERS when omitted"""
        self._params = params or WaterParameters(**DEFAULT_WATER_PARAMETERS)
        self._active_parameter = self._check_name(active_parameter)
        self._history: Deque[ParameterChange] = deque(maxlen=HISTORY_LIMIT)
        self._update_count = 0
        self._created_at = datetime.now()

    # ========================================================================
    # Updates
    # ========================================================================

    def update_parameter(self, name: str, value: float) -> WaterParameters:
        """
        Replace one reading and make it the active chart parameter.

        Args:
            name: Parameter name (pH, temperature, calcium, alkalinity, cya, tds)
            value: New reading

        Returns:
            The new WaterParameters record

        Raises:
            ValueError: If name is not a known parameter
        """
        self._check_name(name)
        old_value = getattr(self._params, name)
        self._params = self._params.model_copy(update={name: float(value)})
        self._active_parameter = name
        self._record(name, old_value, float(value))
        return self._params

    def replace_parameters(self, params: WaterParameters) -> WaterParameters:
        """Replace the whole record (e.g., restoring a saved snapshot)"""
        for name in PARAMETER_NAMES:
            old_value = getattr(self._params, name)
            new_value = getattr(params, name)
            if old_value != new_value:
                self._record(name, old_value, new_value)
        self._params = params
        return self._params

    def set_active_parameter(self, name: str):
        self._active_parameter = self._check_name(name)

    # ========================================================================
    # Derived values (recomputed on every call)
    # ========================================================================

    @property
    def params(self) -> WaterParameters:
        return self._params

    @property
    def active_parameter(self) -> str:
        return self._active_parameter

    def current_lsi(self) -> float:
        return calculate_lsi(self._params)

    def current_result(self) -> LSIResult:
        return evaluate_lsi(self._params)

    def chart(self, name: Optional[str] = None) -> ChartSeries:
        """Sensitivity series for name, or for the active parameter"""
        return sample_range(name or self._active_parameter, self._params)

    def snapshot(self) -> Dict[str, float]:
        """Key-value snapshot of the last record"""
        return self._params.model_dump()

    def history(self) -> List[ParameterChange]:
        """Most recent changes, oldest first (at most HISTORY_LIMIT)"""
        return list(self._history)

    def get_stats(self) -> Dict[str, Any]:
        return {
            "updates": self._update_count,
            "active_parameter": self._active_parameter,
            "created_at": self._created_at,
        }

    # ========================================================================
    # Utilities
    # ========================================================================

    @staticmethod
    def _check_name(name: str) -> str:
        if name not in PARAMETER_NAMES:
            raise ValueError(
                f"Unknown parameter '{name}'. Options: {list(PARAMETER_NAMES)}"
            )
        return name

    def _record(self, name: str, old_value: Optional[float], new_value: float):
        logger.debug(f"Session update: {name} {old_value} -> {new_value}")
        self._update_count += 1
        self._history.append(ParameterChange(
            parameter=name,
            old_value=old_value,
            new_value=new_value,
            timestamp=datetime.now(),
        ))


# ============================================================================
# Global Session Instance
# ============================================================================

# Shared by the MCP server tools
_global_session = None


def get_global_session() -> LSISession:
    """Get or create global session instance"""
    global _global_session
    if _global_session is None:
        _global_session = LSISession()
    return _global_session


def reset_global_session():
    """Reset global session (useful for testing)"""
    global _global_session
    _global_session = None
