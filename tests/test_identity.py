"""
Tests for user id formatting and the admin check.
"""
import pytest

from seqid_app.config import settings
from seqid_app.exceptions import InvalidUserId
from seqid_app.services.identity import format_user_id, is_admin, verify_admin_password


class TestFormatUserId:
    """Test user id normalisation"""

    @pytest.mark.parametrize("raw, expected", [
        ("7", "MINDA007"),
        ("077", "MINDA077"),
        ("minda7", "MINDA007"),
        (" MINDA 12 ", "MINDA012"),
        ("MINDA123", "MINDA123"),
    ])
    def test_valid(self, raw, expected):
        assert format_user_id(raw) == expected

    @pytest.mark.parametrize("raw", ["", "1234", "MINDA", "MINDA1234", "bob7", "7a"])
    def test_invalid(self, raw):
        with pytest.raises(InvalidUserId):
            format_user_id(raw)

    @pytest.mark.parametrize("raw", ["١", "MINDA١٢", "７", "১"])
    def test_non_ascii_digits_rejected(self, raw):
        """Test Arabic-Indic, fullwidth and Bengali digits are not user numbers"""
        with pytest.raises(InvalidUserId):
            format_user_id(raw)


class TestAdmin:
    """Test the admin role check"""

    def test_is_admin(self):
        assert is_admin(settings.admin_user_id)
        assert not is_admin("MINDA001")

    def test_password(self, admin_password):
        assert verify_admin_password(admin_password)
        assert not verify_admin_password("wrong")
        assert not verify_admin_password(None)
