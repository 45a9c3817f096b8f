"""Unit tests for IdentityService."""

from predictably.config import IdentitySettings
from predictably.domain.service import IdentityService


class TestGetUserId:
    """Tests for get_user_id method."""

    def test_reads_configured_header(self):
        identity_service = IdentityService(IdentitySettings(header_name="X-Player"))

        assert identity_service.get_user_id({"X-Player": " alice "}) == "alice"

    def test_missing_or_blank_header_is_anonymous(self):
        identity_service = IdentityService(IdentitySettings())

        assert identity_service.get_user_id({}) is None
        assert identity_service.get_user_id({"X-User-Id": "   "}) is None
