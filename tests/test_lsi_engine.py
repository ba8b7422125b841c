"""
Tests for the LSI engine (core/lsi_engine.py)

Validates:
- Saturation pH combination
- Pinned regression value for a reference water
- Finite results for valid water, NaN/inf (never exceptions) for invalid water
- Monotonicity in pH (CYA = 0)
- Idempotence
- Balance classification and tagged results
"""

import math

import pytest
import sys
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from core.lsi_engine import calculate_lsi, classify_lsi, evaluate_lsi, saturation_ph
from core.schemas import WaterBalance, WaterParameters
from utils.lsi_constants import LSI_CONSTANTS


REFERENCE_WATER = {
    "pH": 7.5,
    "temperature": 80.0,
    "calcium": 250.0,
    "alkalinity": 120.0,
    "cya": 30.0,
    "tds": 300.0,
}

# Hand-computed: tf 2.056504, cf 1.997940, af 1.967477, tdsF 0.147712
# pHs = 9.3 + 0.147712 + 2.056504 - 1.997940 - 1.967477 = 7.538798
REFERENCE_LSI = -0.038798


@pytest.fixture
def reference_water():
    return WaterParameters(**REFERENCE_WATER)


class TestSaturationPH:
    """Test pH_s = BASE + tdsF + tf - cf - af"""

    def test_zero_factors_give_base(self):
        assert saturation_ph(0.0, 0.0, 0.0, 0.0) == LSI_CONSTANTS.BASE_SATURATION_PH

    def test_signs(self):
        base = LSI_CONSTANTS.BASE_SATURATION_PH
        assert saturation_ph(1.0, 0.0, 0.0, 0.0) == pytest.approx(base + 1.0)
        assert saturation_ph(0.0, 1.0, 0.0, 0.0) == pytest.approx(base - 1.0)
        assert saturation_ph(0.0, 0.0, 1.0, 0.0) == pytest.approx(base - 1.0)
        assert saturation_ph(0.0, 0.0, 0.0, 1.0) == pytest.approx(base + 1.0)


class TestCalculateLSI:
    """Test calculate_lsi"""

    def test_reference_value(self):
        assert calculate_lsi(REFERENCE_WATER) == pytest.approx(REFERENCE_LSI, abs=1e-4)

    def test_accepts_model_and_mapping(self, reference_water):
        assert calculate_lsi(reference_water) == calculate_lsi(REFERENCE_WATER)

    def test_idempotent(self, reference_water):
        first = calculate_lsi(reference_water)
        second = calculate_lsi(reference_water)
        assert first.hex() == second.hex()

    @pytest.mark.parametrize("pH", [6.0, 7.0, 7.8, 8.4])
    @pytest.mark.parametrize("temperature", [80.0, 95.0, 110.0])
    @pytest.mark.parametrize("calcium", [10.0, 250.0, 1000.0])
    def test_finite_for_valid_water(self, pH, temperature, calcium):
        params = {**REFERENCE_WATER, "pH": pH, "temperature": temperature, "calcium": calcium}
        assert math.isfinite(calculate_lsi(params))

    def test_monotonic_in_pH_without_cya(self):
        water = {**REFERENCE_WATER, "cya": 0.0}
        values = [6.0 + 0.1 * k for k in range(25)]
        lsis = [calculate_lsi({**water, "pH": pH}) for pH in values]
        assert all(b > a for a, b in zip(lsis, lsis[1:]))

    def test_unit_slope_in_pH_without_cya(self):
        """With CYA = 0, pH_s does not depend on pH"""
        water = {**REFERENCE_WATER, "cya": 0.0}
        delta = calculate_lsi({**water, "pH": 7.6}) - calculate_lsi({**water, "pH": 7.4})
        assert delta == pytest.approx(0.2)

    def test_hot_water_scales_more(self):
        cold = calculate_lsi({**REFERENCE_WATER, "temperature": 80.0})
        hot = calculate_lsi({**REFERENCE_WATER, "temperature": 104.0})
        assert hot > cold


class TestInvalidInput:
    """Out-of-domain input propagates NaN/inf instead of raising"""

    def test_zero_calcium_is_negative_infinity(self):
        """log10(0) = -inf in the calcium factor drives pH_s to +inf"""
        assert calculate_lsi({**REFERENCE_WATER, "calcium": 0.0}) == -math.inf

    def test_negative_calcium_is_nan(self):
        assert math.isnan(calculate_lsi({**REFERENCE_WATER, "calcium": -5.0}))

    def test_cyanurate_overwhelms_alkalinity(self):
        params = {**REFERENCE_WATER, "alkalinity": 10.0, "cya": 50.0}
        assert math.isnan(calculate_lsi(params))

    def test_zero_tds_is_positive_infinity(self):
        assert calculate_lsi({**REFERENCE_WATER, "tds": 0.0}) == math.inf

    def test_missing_field_is_nan(self):
        params = dict(REFERENCE_WATER)
        del params["tds"]
        assert math.isnan(calculate_lsi(params))

    def test_nan_input_propagates(self):
        assert math.isnan(calculate_lsi({**REFERENCE_WATER, "pH": math.nan}))

    def test_none_field_is_nan(self):
        """A reading explicitly set to None is treated like a missing one"""
        assert math.isnan(calculate_lsi({**REFERENCE_WATER, "tds": None}))
        assert evaluate_lsi({**REFERENCE_WATER, "pH": None}).status == WaterBalance.INVALID

    def test_zero_alkalinity_without_cya_is_nan(self):
        assert math.isnan(calculate_lsi({**REFERENCE_WATER, "alkalinity": 0.0, "cya": 0.0}))


class TestClassifyLSI:
    """Test balance classification (thresholds inclusive at ±0.3)"""

    @pytest.mark.parametrize("lsi,expected", [
        (0.0, WaterBalance.BALANCED),
        (0.3, WaterBalance.BALANCED),
        (-0.3, WaterBalance.BALANCED),
        (0.31, WaterBalance.SCALE_FORMING),
        (1.5, WaterBalance.SCALE_FORMING),
        (-0.31, WaterBalance.CORROSIVE),
        (-2.0, WaterBalance.CORROSIVE),
        (math.nan, WaterBalance.INVALID),
        (math.inf, WaterBalance.INVALID),
        (-math.inf, WaterBalance.INVALID),
    ])
    def test_thresholds(self, lsi, expected):
        assert classify_lsi(lsi) == expected


class TestEvaluateLSI:
    """Test the tagged-result form"""

    def test_matches_calculate_lsi(self, reference_water):
        result = evaluate_lsi(reference_water)
        assert result.lsi == calculate_lsi(reference_water)
        assert result.saturation_pH == pytest.approx(7.5 - REFERENCE_LSI, abs=1e-4)
        assert result.status == WaterBalance.BALANCED
        assert result.is_valid

    def test_reports_factors(self, reference_water):
        result = evaluate_lsi(reference_water)
        assert result.temperature_factor == pytest.approx(2.05650, abs=1e-4)
        assert result.calcium_factor == pytest.approx(1.99794, abs=1e-4)
        assert result.alkalinity_factor == pytest.approx(1.96748, abs=1e-4)
        assert result.tds_factor == pytest.approx(0.14771, abs=1e-4)

    def test_invalid_is_tagged_not_raised(self):
        result = evaluate_lsi({**REFERENCE_WATER, "calcium": 0.0})
        assert result.status == WaterBalance.INVALID
        assert not result.is_valid

    def test_scale_forming_water(self):
        params = {**REFERENCE_WATER, "pH": 8.2, "temperature": 104.0, "calcium": 600.0}
        assert evaluate_lsi(params).status == WaterBalance.SCALE_FORMING

    def test_corrosive_water(self):
        params = {**REFERENCE_WATER, "pH": 6.8, "calcium": 50.0, "alkalinity": 60.0}
        assert evaluate_lsi(params).status == WaterBalance.CORROSIVE
