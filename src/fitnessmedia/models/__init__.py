"""
Data models for the FitnessMedia application.

This module contains Pydantic models for the boxes, their colors, the user
profile and the health values shown for each box.

Classes:
    Box: A named, colored tile
    Color: RGB color with an opaque persistence blob
    HealthDataType: Health data types read by the application
    HealthSample: A quantity sample from a health source
    HealthSnapshot: Today's health values
    UserProfile: The user's display name
"""

from .box import Box, decode_boxes, encode_boxes
from .color import BLUE, GREEN, RED, WHITE, Color
from .health import HealthDataType, HealthSample, HealthSnapshot, READ_TYPES
from .profile import UserProfile

__all__ = [
    "Box",
    "Color",
    "HealthDataType",
    "HealthSample",
    "HealthSnapshot",
    "UserProfile",
    "READ_TYPES",
    "WHITE",
    "RED",
    "GREEN",
    "BLUE",
    "encode_boxes",
    "decode_boxes",
]
