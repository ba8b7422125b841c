"""
Utility modules for LSI calculations.

- lsi_constants: immutable bounds, sampling ranges, defaults, thresholds
- lsi_factors: pure factor functions (temperature, calcium, alkalinity, TDS)
"""
