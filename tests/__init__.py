"""
Sui RPC Helper Test Suite

Test Structure:
- unit/: Unit tests for individual components, run against stubs and mocks
- integration/: Tests against live Sui fullnodes, skipped unless
  SUI_RPC_INTEGRATION=1 is set

Usage:
    # Run all tests
    pytest

    # Run with coverage
    pytest --cov=sui_rpc_helper --cov-report=html

    # Run specific test file
    pytest tests/unit/test_latency.py
"""
