"""
Unit Tests for Chess Engine

This package contains unit tests for all chess engine components.

Running Tests:
    # Run all tests
    pytest tests/

    # Run specific test file
    pytest tests/test_movegen.py

    # Run with coverage
    pytest tests/ --cov=mailbox_chess --cov-report=html

    # Run specific test
    pytest tests/test_movegen.py::TestPerft::test_start_position_depth_2

Dependencies:
    - pytest: Test framework
    - pytest-cov: Coverage reporting
    - chess (python-chess): Independent reference for move generation
"""
