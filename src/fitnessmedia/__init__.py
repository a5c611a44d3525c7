"""
FitnessMedia: color-coded boxes with today's health statistics.

Users create named, colored boxes that persist in a local key-value store,
and open any box to see today's steps, active energy burned and their date
of birth from a health data provider.

Modules:
    models: Data models using Pydantic
    services: Persistence backends, box repository and health services
    views: Presentation projections for the main screen and box details
    utils: Change notification, UI-thread queue and logging setup
"""

__version__ = "0.1.0"

from .app import FitnessMediaApp, build_store
from .models import Box, Color, HealthSnapshot, UserProfile
from .services import BoxRepository, FileStore, HealthDataService, InMemoryStore, ProfileService

__all__ = [
    "Box",
    "Color",
    "HealthSnapshot",
    "UserProfile",
    "BoxRepository",
    "ProfileService",
    "HealthDataService",
    "InMemoryStore",
    "FileStore",
    "FitnessMediaApp",
    "build_store",
]
