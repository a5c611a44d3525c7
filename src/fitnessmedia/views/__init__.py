"""
Presentation projections for the FitnessMedia application.

Views hold no state of their own beyond what they last rendered. They
subscribe to service change notifications and re-read the services.

Classes:
    ContentView: Header and box grid
    BoxTile: One cell of the box grid
    BoxDetailView: A single box with today's health values
"""

from .box_detail_view import BoxDetailView, format_long_date
from .content_view import PLACEHOLDER_NAME, BoxTile, ContentView

__all__ = ["ContentView", "BoxTile", "BoxDetailView", "format_long_date", "PLACEHOLDER_NAME"]
