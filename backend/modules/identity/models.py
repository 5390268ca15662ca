"""
Identity module data models.
"""

from pydantic import BaseModel, Field


class Identity(BaseModel):
    """
    The authentication provider's record for a user.

    Only ``email_verified`` ever changes, and only an explicit reload from
    the provider makes a fresh value trustworthy.
    """

    id: str = Field(..., description="Opaque, stable, provider-assigned user ID")
    email: str = Field(..., description="Email address the account was created with")
    email_verified: bool = Field(default=False, description="Whether the email is confirmed")

    model_config = {"frozen": True}
