"""
Identity Provider Interface.
Exchanges an external sign-in callback for a profile the app can link to a local User.
"""

from dataclasses import dataclass
from typing import Optional, Protocol


@dataclass(frozen=True)
class ExternalProfile:
    provider: str
    subject: str  # stable id at the provider
    email: Optional[str] = None
    display_name: Optional[str] = None
    avatar: Optional[str] = None


class IdentityProvider(Protocol):
    """Interface for external sign-in providers."""

    name: str

    def authorization_url(self, state: str) -> str:
        """URL the browser is redirected to in order to start sign-in."""
        ...

    async def fetch_profile(self, code: str) -> ExternalProfile:
        """Exchange the callback's authorization code for the user's profile."""
        ...
