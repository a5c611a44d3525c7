"""
Unit tests for FitnessMedia components.

Unit tests are fast and deterministic; AWS access is mocked with moto.
"""
