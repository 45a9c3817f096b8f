"""Platform identity service."""

from typing import Mapping, Optional

from predictably.config import IdentitySettings
from predictably.domain.value import UserId

from .base import Service


class IdentityService(Service):
    """Resolves the current user from request headers.

    The hosting platform authenticates users and forwards a stable id in
    a trusted header.
    """

    def __init__(self, identity_settings: IdentitySettings) -> None:
        self.header_name = identity_settings.header_name

    def get_user_id(self, headers: Mapping[str, str]) -> Optional[UserId]:
        """Get the current user's id, None for anonymous requests."""
        value = headers.get(self.header_name) or headers.get(self.header_name.lower())
        if value is None or not value.strip():
            return None
        return UserId(value.strip())
