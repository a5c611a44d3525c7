"""
User profile service for the FitnessMedia application.

Classes:
    ProfileService: Loads and saves the user's display name
"""

import logging

from ..exceptions import StoreError
from ..models.profile import UserProfile
from ..utils.events import EventEmitter
from .persistence import KeyValueStore

logger = logging.getLogger(__name__)

USER_NAME_KEY = "UserName"


class ProfileService:
    """
    Service for the user's display name.

    The name is stored as UTF-8 under its own key, independently of the box
    list. It is set once during onboarding and read at every launch.

    Attributes:
        store: Key-value store holding the name
        profile: Current in-memory profile
        changed: Emitter notified with the new name after each change
    """

    def __init__(self, store: KeyValueStore):
        self.store = store
        self.profile = UserProfile()
        self.changed = EventEmitter("user_name")

    @property
    def user_name(self) -> str:
        return self.profile.name

    def load(self) -> str:
        """
        Read the stored name.

        Returns:
            The stored name, or an empty string if none is stored
        """
        try:
            name = self.store.get_string(USER_NAME_KEY)
        except StoreError as e:
            logger.error("Error loading user name: %s", e)
            name = None

        self.profile = UserProfile(name=name or "")
        self.changed.emit(self.profile.name)
        return self.profile.name

    def save(self, name: str) -> bool:
        """
        Persist and publish a new name.

        The in-memory name is updated even if the write fails.

        Returns:
            True if the name was written to the store
        """
        written = True
        try:
            self.store.set_string(USER_NAME_KEY, name)
        except StoreError as e:
            logger.error("Error saving user name: %s", e)
            written = False

        self.profile = UserProfile(name=name)
        self.changed.emit(self.profile.name)
        return written
