import logging
from contextlib import contextmanager

from sqlalchemy.exc import IntegrityError, InterfaceError, OperationalError
from sqlalchemy.orm import Session

from app.core.exceptions import ConflictError, ConnectivityError
from app.schemas.auth import Identity


class BaseService:
    """
    Holds the request's database session and the caller's identity.
    The identity is always explicit; services never look up an ambient user.
    """

    def __init__(self, db: Session, identity: Identity):
        self.db = db
        self.identity = identity
        self._logger = logging.getLogger(self.__class__.__module__)

    @contextmanager
    def store_access(self):
        """Translate store failures into the application's error taxonomy."""
        try:
            yield
        except IntegrityError as e:
            self.db.rollback()
            self._logger.warning(f"Integrity violation: {e.orig}")
            raise ConflictError("The change conflicts with existing records") from e
        except (OperationalError, InterfaceError) as e:
            self.db.rollback()
            self._logger.error(f"Record store unavailable: {e}")
            raise ConnectivityError() from e
