"""
API key verification for protected endpoints.
"""
import hmac
from typing import Optional

from . import config


def verify_api_key(api_key: Optional[str], expected: Optional[str] = None) -> bool:
    """Check a client supplied key against the configured one. An unset key rejects everything."""
    expected = config.API_KEY if expected is None else expected
    if not api_key or not expected:
        return False
    return hmac.compare_digest(api_key.encode("utf-8"), expected.encode("utf-8"))
