"""
Box data model for the FitnessMedia application.

A Box is a named, colored tile. Boxes are persisted as one JSON array under
a single store key; each record carries the color as a base64 string of the
color blob.

Classes:
    Box: Pydantic model for a box

Functions:
    encode_boxes: Serialize a list of boxes to the stored byte form
    decode_boxes: Parse the stored byte form back into boxes
"""

import base64
import binascii
import json
import logging
from typing import Any, Dict, List
from uuid import UUID, uuid4

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from ..exceptions import BoxDecodeError
from .color import WHITE, Color

logger = logging.getLogger(__name__)


class Box(BaseModel):
    """
    Pydantic model representing a user box.

    Boxes are never mutated after creation. The color is kept as the
    encoded blob so that stored data round-trips byte for byte; callers
    read it through the color property.

    Attributes:
        id: Unique identifier (auto-generated)
        title: Display title
        color_data: Encoded color blob, serialized as colorData

    Example:
        >>> box = Box.create("Gym", RED)
        >>> box.color == RED
        True
        >>> Box.from_record(box.to_record()) == box
        True
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: UUID = Field(default_factory=uuid4, description="Unique box identifier")
    title: str = Field(..., description="Box title")
    color_data: bytes = Field(..., alias="colorData", description="Encoded color")

    @field_validator("title", mode="before")
    @classmethod
    def validate_title(cls, v: Any) -> Any:
        if v is None:
            raise ValueError("Box title is required")
        return v

    @classmethod
    def create(cls, title: str, color: Color) -> "Box":
        """Create a new box with a fresh id."""
        return cls(title=title, color_data=color.to_data())

    @property
    def color(self) -> Color:
        """Decoded color, white when the stored blob is unreadable."""
        try:
            return Color.from_data(self.color_data)
        except ValueError as e:
            logger.debug("Falling back to white for box %s: %s", self.id, e)
            return WHITE

    def to_record(self) -> Dict[str, Any]:
        """Convert the box to its stored record format."""
        return {
            "id": str(self.id),
            "title": self.title,
            "colorData": base64.b64encode(self.color_data).decode("ascii"),
        }

    @classmethod
    def from_record(cls, record: Dict[str, Any]) -> "Box":
        """
        Create a Box from a stored record.

        Raises:
            BoxDecodeError: If the record is malformed
        """
        if not isinstance(record, dict):
            raise BoxDecodeError(f"Box record must be an object, got {type(record).__name__}")

        color_text = record.get("colorData")
        if not isinstance(color_text, str):
            raise BoxDecodeError("Box record is missing colorData")

        try:
            color_data = base64.b64decode(color_text, validate=True)
        except (binascii.Error, ValueError) as e:
            raise BoxDecodeError(f"Box colorData is not valid base64: {e}") from e

        try:
            return cls(id=record.get("id"), title=record.get("title"), color_data=color_data)
        except ValidationError as e:
            raise BoxDecodeError(f"Invalid box record: {e}") from e


def encode_boxes(boxes: List[Box]) -> bytes:
    """Serialize boxes as a UTF-8 JSON array of records."""
    return json.dumps([box.to_record() for box in boxes]).encode("utf-8")


def decode_boxes(data: bytes) -> List[Box]:
    """
    Parse a stored box list.

    Args:
        data: Bytes previously produced by encode_boxes

    Returns:
        Boxes in stored order

    Raises:
        BoxDecodeError: If the data is not a valid list of unique boxes
    """
    try:
        records = json.loads(data.decode("utf-8"))
    except (UnicodeDecodeError, json.JSONDecodeError, RecursionError) as e:
        raise BoxDecodeError(f"Stored boxes are not valid JSON: {e}") from e

    if not isinstance(records, list):
        raise BoxDecodeError("Stored boxes must be a JSON array")

    boxes = [Box.from_record(record) for record in records]

    seen = set()
    for box in boxes:
        if box.id in seen:
            raise BoxDecodeError(f"Duplicate box id {box.id}")
        seen.add(box.id)

    return boxes
