"""
SkillSwap application wiring.

Builds the reconcilers and their collaborators from settings.
"""

from .dependencies import (
    ServiceContainer,
    get_container,
    get_profile_reconciler,
    get_session_reconciler,
    reset_container,
)

__all__ = [
    "ServiceContainer",
    "get_container",
    "reset_container",
    "get_session_reconciler",
    "get_profile_reconciler",
]
