"""
Session cache data models.
"""

from typing import Optional
from pydantic import BaseModel, Field


class SessionCacheEntry(BaseModel):
    """
    Locally cached projection of the signed-in user.

    A hint for fast startup, never an authority: ``is_logged_in`` only says
    a sign-in or sign-up completed on this device and was not logged out.
    """

    user_id: Optional[str] = Field(default=None, description="Identity ID")
    name: Optional[str] = Field(default=None, description="Display name, may be empty")
    email: Optional[str] = Field(default=None, description="Email address")
    is_logged_in: bool = Field(default=False, description="Set by save, cleared by clear")
    is_profile_complete: bool = Field(
        default=False,
        description="Whether a profile document is known to exist",
    )

    model_config = {"frozen": True}
