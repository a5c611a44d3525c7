"""
Detail view for a single box.

Classes:
    BoxDetailView: Box title, user name and today's health values

Functions:
    format_long_date: Format a date as "May 17, 1990"
"""

from datetime import date
from typing import Callable, List

from ..models.box import Box
from ..services.health_service import HealthDataService
from ..services.profile_service import ProfileService


def format_long_date(value: date) -> str:
    return f"{value:%B} {value.day}, {value.year}"


class BoxDetailView:
    """
    Projection of one box and the current health snapshot.

    The view re-renders whenever the health service or the profile
    publishes a change. Call close() to stop listening.

    Attributes:
        box: Box being shown
        rendered: Lines from the most recent render
    """

    def __init__(
        self,
        box: Box,
        health: HealthDataService,
        profile: ProfileService,
        delete_action: Callable[[], object],
    ):
        self.box = box
        self.health = health
        self.profile = profile
        self._delete_action = delete_action
        self.rendered: List[str] = []
        self._unsubscribers = [
            health.changed.subscribe(lambda *_: self.render()),
            profile.changed.subscribe(lambda *_: self.render()),
        ]
        self.render()

    def render(self) -> List[str]:
        snapshot = self.health.snapshot
        lines = [self.box.title]

        if self.profile.user_name:
            lines.append(f"User: {self.profile.user_name}")

        if snapshot.date_of_birth is not None:
            lines.append(f"DOB: {format_long_date(snapshot.date_of_birth)}")

        lines.append(f"Steps Today: {snapshot.steps}")
        lines.append(f"Active Energy Burned: {snapshot.active_energy_burned:.1f} kcal")

        self.rendered = lines
        return lines

    def delete(self) -> object:
        """Run the delete action for this box and stop listening."""
        self.close()
        return self._delete_action()

    def close(self) -> None:
        for unsubscribe in self._unsubscribers:
            unsubscribe()
        self._unsubscribers = []
