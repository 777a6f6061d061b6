"""
Request-scoped dependencies: the caller's identity and a record service bound to it.
"""
import logging
from typing import Optional

from fastapi import Depends, Header, Request
from sqlalchemy.orm import Session

from app.database import get_db
from app.schemas.auth import Identity
from app.services import auth as auth_service
from app.services.records import RecordService

logger = logging.getLogger(__name__)


def bearer_token(authorization: Optional[str]) -> Optional[str]:
    if not authorization:
        return None
    scheme, _, token = authorization.partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        logger.warning("Ignoring malformed Authorization header")
        return None
    return token.strip()


def get_identity(authorization: Optional[str] = Header(None)) -> Identity:
    """
    Resolve the caller from the bearer token. Missing or bad tokens give the
    anonymous identity; the record service then refuses every operation.
    """
    return auth_service.resolve_identity(bearer_token(authorization))


def get_record_service(
    request: Request,
    db: Session = Depends(get_db),
    identity: Identity = Depends(get_identity),
) -> RecordService:
    client_ip = request.client.host if request.client else None
    return RecordService(db, identity, ip_address=client_ip)
