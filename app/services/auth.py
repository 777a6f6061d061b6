"""
Session/identity resolution.

Bearer tokens are issued by the external identity provider; this module only
decodes them. Any token that cannot be trusted resolves to the anonymous
identity instead of raising, so callers degrade to read-nothing behaviour.
"""
import logging
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Iterable, List, Optional

from jose import ExpiredSignatureError, JWTError, jwt

from app.core.config import settings
from app.schemas.auth import Identity

logger = logging.getLogger(__name__)


def decode_access_token(token: str) -> Optional[Dict[str, Any]]:
    """Verify signature and expiry. Returns the claims, or None if the token is unusable."""
    audience = settings.auth.audience or None
    try:
        return jwt.decode(
            token,
            settings.auth.secret_key,
            algorithms=[settings.auth.algorithm],
            audience=audience,
            options={"verify_aud": audience is not None},
        )
    except ExpiredSignatureError:
        logger.info("Session token expired")
        return None
    except JWTError as e:
        logger.warning(f"Session token rejected: {e}")
        return None


def _groups_from_claim(value: Any) -> List[str]:
    if isinstance(value, str):
        return [value]
    if isinstance(value, (list, tuple)):
        return [group for group in value if isinstance(group, str)]
    return []


def _string_claim(payload: Dict[str, Any], name: str) -> Optional[str]:
    value = payload.get(name)
    return value if isinstance(value, str) and value else None


def resolve_identity(token: Optional[str]) -> Identity:
    """Never raises: anything short of a usable, signed token is the anonymous identity."""
    if not token:
        return Identity.anonymous()

    payload = decode_access_token(token)
    if payload is None:
        return Identity.anonymous()

    subject = payload.get("sub")
    if not subject:
        logger.warning("Session token has no subject")
        return Identity.anonymous()

    return Identity(
        subject=str(subject),
        name=_string_claim(payload, "name") or "User",
        email=_string_claim(payload, "email") or "",
        groups=_groups_from_claim(payload.get(settings.auth.groups_claim)),
        authenticated=True,
    )


def create_access_token(
    subject: str,
    groups: Iterable[str] = (),
    name: Optional[str] = None,
    email: Optional[str] = None,
    expires_minutes: int = 60,
) -> str:
    """Mint a token in the identity provider's claim layout. Development and tests only."""
    now = datetime.now(timezone.utc)
    claims: Dict[str, Any] = {
        "sub": subject,
        settings.auth.groups_claim: list(groups),
        "iat": now,
        "exp": now + timedelta(minutes=expires_minutes),
    }
    if name:
        claims["name"] = name
    if email:
        claims["email"] = email
    if settings.auth.audience:
        claims["aud"] = settings.auth.audience
    return jwt.encode(claims, settings.auth.secret_key, algorithm=settings.auth.algorithm)
