"""
Box repository for the FitnessMedia application.

The repository owns the authoritative in-memory box list and keeps the
key-value store in step with it. Every mutation rewrites the full list
under the "boxes" key; lists are small and writes only follow user input.

Classes:
    BoxRepository: In-memory box list with write-through persistence
"""

import logging
import random
from typing import List, Optional, Union
from uuid import UUID

from ..exceptions import BoxDecodeError, StoreError
from ..models.box import Box, decode_boxes, encode_boxes
from ..models.color import Color
from ..utils.events import EventEmitter
from .persistence import KeyValueStore

logger = logging.getLogger(__name__)

BOXES_KEY = "boxes"


class BoxRepository:
    """
    Owner of the box list.

    Boxes are kept in insertion order, which is also display order. After
    each successful mutation the repository emits ``changed`` with a copy of
    the current list.

    Attributes:
        store: Key-value store the list is persisted to
        changed: Emitter notified after each mutation or reload

    Example:
        >>> repository = BoxRepository(InMemoryStore())
        >>> box = repository.add()
        >>> box.title
        'Box 1'
        >>> repository.delete(box.id)
        True
    """

    def __init__(self, store: KeyValueStore, rng: Optional[random.Random] = None):
        """
        Initialize the repository with an empty list.

        Call load_from_store to pick up previously saved boxes.

        Args:
            store: Key-value store for the box list
            rng: Optional random generator for default colors
        """
        self.store = store
        self.changed = EventEmitter("boxes")
        self._rng = rng
        self._boxes: List[Box] = []

    def list(self) -> List[Box]:
        """Return the boxes in insertion order."""
        return list(self._boxes)

    def __len__(self) -> int:
        return len(self._boxes)

    def get(self, box_id: Union[UUID, str]) -> Optional[Box]:
        """Return the box with the given id, or None."""
        key = self._coerce_id(box_id)
        if key is None:
            return None
        for box in self._boxes:
            if box.id == key:
                return box
        return None

    def add(self, title: Optional[str] = None, color: Optional[Color] = None) -> Box:
        """
        Create a box, append it and persist the list.

        Args:
            title: Optional title, "Box N" (N = count + 1) if omitted
            color: Optional color, a random color if omitted

        Returns:
            The new box
        """
        if title is None:
            title = f"Box {len(self._boxes) + 1}"
        if color is None:
            color = Color.random(self._rng)

        box = Box.create(title, color)
        self._boxes.append(box)
        logger.debug("Added box %s (%s)", box.id, box.title)

        self.save()
        self.changed.emit(self.list())
        return box

    def delete(self, box_id: Union[UUID, str]) -> bool:
        """
        Remove the box with the given id and persist the list.

        Args:
            box_id: Box id as a UUID or its string form

        Returns:
            True if a box was removed, False if no box matched
        """
        key = self._coerce_id(box_id)
        if key is None:
            return False

        for index, box in enumerate(self._boxes):
            if box.id == key:
                del self._boxes[index]
                logger.debug("Deleted box %s (%s)", box.id, box.title)
                self.save()
                self.changed.emit(self.list())
                return True

        return False

    def save(self) -> bool:
        """
        Write the full box list to the store.

        Returns:
            True if the write succeeded, False if it failed and was logged
        """
        try:
            self.store.set(BOXES_KEY, encode_boxes(self._boxes))
            return True
        except (StoreError, ValueError, TypeError) as e:
            logger.error("Error saving boxes: %s", e)
            return False

    def load_from_store(self) -> List[Box]:
        """
        Replace the in-memory list with the stored list.

        A missing key, unreadable store or undecodable data all yield an
        empty list.

        Returns:
            The loaded boxes
        """
        self._boxes = self._read_store()
        logger.info("Loaded %d boxes", len(self._boxes))
        self.changed.emit(self.list())
        return self.list()

    def _read_store(self) -> List[Box]:
        try:
            data = self.store.get(BOXES_KEY)
        except StoreError as e:
            logger.error("Error loading boxes: %s", e)
            return []

        if data is None:
            return []

        try:
            return decode_boxes(data)
        except BoxDecodeError as e:
            logger.error("Error loading boxes: %s", e)
            return []

    @staticmethod
    def _coerce_id(box_id: Union[UUID, str]) -> Optional[UUID]:
        if isinstance(box_id, UUID):
            return box_id
        try:
            return UUID(str(box_id))
        except ValueError:
            return None
