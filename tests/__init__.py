"""
Test package for the FitnessMedia application.

Test Organization:
    unit/: Unit tests for individual components
    conftest.py: Pytest configuration and shared fixtures
"""
