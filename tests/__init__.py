"""
Test suite for the LSI calculator MCP server.

Organization:
- test_lsi_factors.py - Factor functions (NaN/inf propagation)
- test_lsi_engine.py - LSI calculation, classification, tagged results
- test_range_sampler.py - Sensitivity chart sampling
- test_state_container.py - Session state
- test_chemistry_tools.py - Dict-returning tool wrappers
- test_server.py - MCP server integration via FastMCP Client

Run with:
    pytest tests/
    pytest tests/ --cov=core --cov=tools --cov=utils
"""
