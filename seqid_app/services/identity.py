"""User id normalisation and the admin shared-secret check."""

import hmac
import re
from typing import Optional

from seqid_app.config import settings
from seqid_app.exceptions import InvalidUserId


def format_user_id(raw: str) -> str:
    """
    Normalise a user id to <prefix><zero-padded digits>.
    
    "7" and "minda 7" both become "MINDA007" with the default settings.
    
    Raises:
        InvalidUserId: If the input is neither bare digits nor prefix + digits
    """
    prefix = settings.user_id_prefix.upper()
    digits = settings.user_id_digits
    value = re.sub(r"\s", "", raw or "").upper()
    
    match = re.fullmatch(rf"(?:{re.escape(prefix)})?([0-9]{{1,{digits}}})", value)
    if not match:
        raise InvalidUserId(f"Invalid user ID '{raw}'")
    return f"{prefix}{match.group(1).zfill(digits)}"


def is_admin(user_id: str) -> bool:
    return user_id == settings.admin_user_id


def verify_admin_password(password: Optional[str]) -> bool:
    """Constant-time comparison; always False while no admin password is configured"""
    if settings.admin_password is None or password is None:
        return False
    expected = settings.admin_password.get_secret_value()
    return hmac.compare_digest(password.encode("utf-8"), expected.encode("utf-8"))
