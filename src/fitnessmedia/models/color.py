"""
Color model for the FitnessMedia application.

Box colors are persisted as an opaque blob. The blob is a tagged JSON
object of three normalized channels, so the stored format does not depend
on any platform object archive.

Classes:
    Color: Immutable RGB color with channels in [0, 1]

Constants:
    WHITE: Fallback color for undecodable blobs
    RED, GREEN, BLUE: Convenience primaries
"""

import json
import random
from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError

COLOR_TAG = "rgb"


class Color(BaseModel):
    """
    Pydantic model for an RGB color.

    Attributes:
        red: Red channel, 0.0 to 1.0
        green: Green channel, 0.0 to 1.0
        blue: Blue channel, 0.0 to 1.0

    Example:
        >>> color = Color(red=1.0, green=0.5, blue=0.0)
        >>> color.to_hex()
        '#FF8000'
        >>> Color.from_data(color.to_data()) == color
        True
    """

    model_config = ConfigDict(frozen=True)

    red: float = Field(..., ge=0.0, le=1.0, description="Red channel")
    green: float = Field(..., ge=0.0, le=1.0, description="Green channel")
    blue: float = Field(..., ge=0.0, le=1.0, description="Blue channel")

    @classmethod
    def random(cls, rng: Optional[random.Random] = None) -> "Color":
        """
        Generate a color with each channel independently uniform in [0, 1].

        Args:
            rng: Optional random generator, the module generator if omitted
        """
        source = rng or random
        return cls(
            red=source.uniform(0.0, 1.0),
            green=source.uniform(0.0, 1.0),
            blue=source.uniform(0.0, 1.0),
        )

    def to_data(self) -> bytes:
        """Encode the color as its opaque persistence blob."""
        payload: Dict[str, Any] = {
            "type": COLOR_TAG,
            "red": self.red,
            "green": self.green,
            "blue": self.blue,
        }
        return json.dumps(payload, sort_keys=True).encode("utf-8")

    @classmethod
    def from_data(cls, data: bytes) -> "Color":
        """
        Decode a persistence blob produced by to_data.

        Raises:
            ValueError: If the blob is not a tagged RGB object
        """
        try:
            payload = json.loads(data.decode("utf-8"))
        except (UnicodeDecodeError, json.JSONDecodeError, RecursionError) as e:
            raise ValueError(f"Color data is not valid JSON: {e}") from e

        if not isinstance(payload, dict) or payload.get("type") != COLOR_TAG:
            raise ValueError("Color data is not a tagged RGB object")

        try:
            return cls(red=payload.get("red"), green=payload.get("green"), blue=payload.get("blue"))
        except ValidationError as e:
            raise ValueError(f"Color data has invalid channels: {e}") from e

    def to_hex(self) -> str:
        """Return the color as #RRGGBB."""
        return "#{:02X}{:02X}{:02X}".format(
            *(round(channel * 255) for channel in (self.red, self.green, self.blue))
        )


WHITE = Color(red=1.0, green=1.0, blue=1.0)
RED = Color(red=1.0, green=0.0, blue=0.0)
GREEN = Color(red=0.0, green=1.0, blue=0.0)
BLUE = Color(red=0.0, green=0.0, blue=1.0)
