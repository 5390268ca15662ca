"""
Profiles module data models.

These models define the profile document kept in the remote store and the
outcomes the profile reconciler reports to its callers.
"""

from datetime import datetime, timezone
from enum import Enum
from typing import Annotated, Any, Literal, Union
from pydantic import BaseModel, Field

from modules.validation import FieldViolation


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class ProfileStats(BaseModel):
    """
    Aggregated statistics stored as a nested object inside the profile.

    Written by the reconcilers only at creation; swap and rating logic
    maintains them afterwards.
    """

    avg_rating: float = Field(default=0.0, ge=0.0, le=5.0, description="Average rating (0-5)")
    rating_count: int = Field(default=0, ge=0, description="Number of ratings received")
    unique_skills_taught: int = Field(default=0, ge=0, description="Distinct skills taught")
    unique_skills_learned: int = Field(default=0, ge=0, description="Distinct skills learned")
    completed_swaps: int = Field(default=0, ge=0, description="Swaps completed")
    cancelled_swaps: int = Field(default=0, ge=0, description="Swaps cancelled")
    completion_rate: int = Field(
        default=100,
        ge=0,
        le=100,
        description="Percentage of swaps completed (100 when none were cancelled)",
    )


class Profile(BaseModel):
    """
    A user's profile document.

    ``user_id`` equals the owning Identity's ID and never changes. Every
    other field has a default so partially written documents still load.
    """

    user_id: str = Field(..., description="Primary key, equal to the Identity ID")
    email: str = Field(default="", description="Email address")
    name: str = Field(default="", description="Display name")
    bio: str = Field(default="", description="Free-text bio")
    profile_picture_url: str = Field(default="", description="Retrieval URL of the picture")
    campus: str = Field(default="", description="Campus the user belongs to")
    join_date: datetime = Field(default_factory=_utcnow, description="Account creation time")
    reputation_score: int = Field(default=0, description="Reputation score")
    total_swaps: int = Field(default=0, description="Number of swaps taken part in")
    total_hours: float = Field(default=0.0, description="Hours spent in swaps")
    badges: set[str] = Field(default_factory=set, description="Unlocked badge identifiers")
    is_active: bool = Field(default=True, description="Whether the account is active")
    last_active_at: datetime = Field(default_factory=_utcnow, description="Last activity time")
    stats: ProfileStats = Field(default_factory=ProfileStats)

    @classmethod
    def new(cls, user_id: str, email: str, name: str) -> "Profile":
        """Build the document written once at sign-up."""
        now = _utcnow()
        return cls(
            user_id=user_id,
            email=email,
            name=name,
            join_date=now,
            last_active_at=now,
        )

    def to_document(self) -> dict[str, Any]:
        """Serialize to a JSON-compatible dict for storage."""
        return self.model_dump(mode="json")


# Reconciler outcomes

class ProfileOutcomeType(str, Enum):
    """Kinds of outcome a profile operation can end in."""

    IDLE = "idle"
    LOADED = "loaded"
    UPDATED = "updated"
    PICTURE_UPLOADED = "picture_uploaded"
    FAILED = "failed"
    INVALID_INPUT = "invalid_input"


class ProfileIdle(BaseModel):
    """Nothing has happened yet, or errors were cleared."""

    type: Literal[ProfileOutcomeType.IDLE] = ProfileOutcomeType.IDLE

    model_config = {"frozen": True}


class Loaded(BaseModel):
    """The profile was fetched and is now the current profile."""

    type: Literal[ProfileOutcomeType.LOADED] = ProfileOutcomeType.LOADED
    profile: Profile

    model_config = {"frozen": True}


class Updated(BaseModel):
    """The editable fields were written."""

    type: Literal[ProfileOutcomeType.UPDATED] = ProfileOutcomeType.UPDATED

    model_config = {"frozen": True}


class PictureUploaded(BaseModel):
    """The picture was stored and the profile now references it."""

    type: Literal[ProfileOutcomeType.PICTURE_UPLOADED] = ProfileOutcomeType.PICTURE_UPLOADED
    url: str

    model_config = {"frozen": True}


class ProfileFailed(BaseModel):
    """The operation failed; ``message`` is shown to the user."""

    type: Literal[ProfileOutcomeType.FAILED] = ProfileOutcomeType.FAILED
    message: str

    model_config = {"frozen": True}


class ProfileInvalidInput(BaseModel):
    """Input was rejected locally; no remote call was made."""

    type: Literal[ProfileOutcomeType.INVALID_INPUT] = ProfileOutcomeType.INVALID_INPUT
    violations: list[FieldViolation]

    model_config = {"frozen": True}


ProfileOutcome = Annotated[
    Union[ProfileIdle, Loaded, Updated, PictureUploaded, ProfileFailed, ProfileInvalidInput],
    Field(discriminator="type"),
]


def picture_key(user_id: str) -> str:
    """Asset key of a user's profile picture."""
    return f"{user_id}.jpg"
