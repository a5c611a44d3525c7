"""
Main screen projection: the user header and the grid of boxes.

Classes:
    BoxTile: Display data for one grid cell
    ContentView: Header, grid and box actions
"""

from typing import List, NamedTuple, Optional, Union
from uuid import UUID

from ..models.box import Box
from ..services.box_repository import BoxRepository
from ..services.health_service import HealthDataService
from ..services.profile_service import ProfileService
from .box_detail_view import BoxDetailView

PLACEHOLDER_NAME = "Tap to Enter Your Name"
GRID_COLUMNS = 2


class BoxTile(NamedTuple):
    id: UUID
    title: str
    color_hex: str


class ContentView:
    """
    Projection of the main screen.

    Re-renders whenever the box list or the user name changes.

    Attributes:
        rendered: Lines from the most recent render
        render_count: Number of renders so far
    """

    def __init__(
        self,
        repository: BoxRepository,
        profile: ProfileService,
        health: HealthDataService,
    ):
        self.repository = repository
        self.profile = profile
        self.health = health
        self.rendered: List[str] = []
        self.render_count = 0
        repository.changed.subscribe(lambda *_: self.render())
        profile.changed.subscribe(lambda *_: self.render())
        self.render()

    def header(self) -> str:
        return self.profile.user_name or PLACEHOLDER_NAME

    def tiles(self) -> List[BoxTile]:
        return [
            BoxTile(id=box.id, title=box.title, color_hex=box.color.to_hex())
            for box in self.repository.list()
        ]

    def rows(self) -> List[List[BoxTile]]:
        """Tiles grouped into grid rows."""
        tiles = self.tiles()
        return [tiles[i:i + GRID_COLUMNS] for i in range(0, len(tiles), GRID_COLUMNS)]

    def render(self) -> List[str]:
        lines = [f"{self.header()}  [+]"]
        for row in self.rows():
            lines.append("  ".join(f"[{tile.title} {tile.color_hex}]" for tile in row))
        self.rendered = lines
        self.render_count += 1
        return lines

    def add_box(self) -> Box:
        """Handle the "+" button."""
        return self.repository.add()

    def open_box(self, box_id: Union[UUID, str]) -> Optional[BoxDetailView]:
        """Open the detail view for a box, or None if it no longer exists."""
        box = self.repository.get(box_id)
        if box is None:
            return None
        return BoxDetailView(
            box,
            self.health,
            self.profile,
            delete_action=lambda: self.repository.delete(box.id),
        )
