"""
User profile model for the FitnessMedia application.

Classes:
    UserProfile: The user's display name
"""

from pydantic import BaseModel, Field


class UserProfile(BaseModel):
    """
    Minimal user profile.

    Attributes:
        name: Display name, empty until the user enters one
    """

    name: str = Field("", description="Display name")

    @property
    def is_set(self) -> bool:
        return bool(self.name)
