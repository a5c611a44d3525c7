"""
Exception hierarchy for the FitnessMedia application.

Only store initialization failures are meant to propagate to the caller;
everything else is caught, logged and recovered from by the service that
raised it.

Classes:
    FitnessMediaError: Base class for application errors
    StoreError: A key-value store read or write failed
    StoreInitializationError: The configured store could not be opened
    BoxDecodeError: Stored box data could not be decoded
    HealthDataUnavailableError: Health data queried without access
"""


class FitnessMediaError(Exception):
    """Base class for all FitnessMedia errors."""


class StoreError(FitnessMediaError):
    """Raised when a key-value store read or write fails."""


class StoreInitializationError(StoreError):
    """Raised when the local data container cannot be created or opened."""


class BoxDecodeError(FitnessMediaError, ValueError):
    """Raised when a serialized box list cannot be decoded."""


class HealthDataUnavailableError(FitnessMediaError):
    """Raised when health data is queried before authorization."""
