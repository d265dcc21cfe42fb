from datetime import UTC, datetime, timedelta
from typing import Optional
from urllib.parse import urlencode

from jose import JWTError, jwt

from config import ApplicationConfig

VERIFY_EMAIL_PATH = "/auth/verify-email"


def create_verification_url(
    user_id: int,
    identifier: str,
    success_redirect: str,
    failed_redirect: str,
    expires_delta: Optional[timedelta] = None,
) -> str:
    """
    Build a signed email verification link

    Args:
        user_id: User ID
        identifier: SHA-1 hex of the user's email
        success_redirect: Where to send the browser after verification
        failed_redirect: Where to send the browser on failure
        expires_delta: Link lifetime (defaults to VERIFICATION_LINK_TTL_MINUTES)

    Returns:
        Absolute URL whose signature (HS256 JWT) covers every other part of the link
    """
    if expires_delta is None:
        expires_delta = timedelta(minutes=ApplicationConfig.VERIFICATION_LINK_TTL_MINUTES)

    now = datetime.now(UTC)
    payload = {
        "id": user_id,
        "hash": identifier,
        "success": success_redirect,
        "failed": failed_redirect,
        "exp": now + expires_delta,
        "iat": now,
    }
    signature = jwt.encode(payload, ApplicationConfig.SECRET_KEY, algorithm="HS256")
    query = urlencode(
        {
            "successRedirect": success_redirect,
            "failedRedirect": failed_redirect,
            "signature": signature,
        }
    )
    return f"{ApplicationConfig.APP_URL}{VERIFY_EMAIL_PATH}/{user_id}/{identifier}?{query}"


def has_valid_signature(
    signature: Optional[str],
    user_id: int,
    identifier: str,
    success_redirect: str,
    failed_redirect: str,
) -> bool:
    """
    Check that a verification link was issued by us, is unexpired and untampered

    Returns:
        False for a missing, forged, expired or mismatched signature
    """
    if not signature:
        return False
    try:
        payload = jwt.decode(signature, ApplicationConfig.SECRET_KEY, algorithms=["HS256"])
    except JWTError:
        return False

    return (
        payload.get("id") == user_id
        and payload.get("hash") == identifier
        and payload.get("success") == success_redirect
        and payload.get("failed") == failed_redirect
    )
