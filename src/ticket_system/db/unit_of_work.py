"""Unit of work: one ambient transaction per inbound operation."""

from typing import Callable, Optional

from sqlalchemy.orm import Session

from ..utils.logging_config import get_logger

logger = get_logger("database")


class UnitOfWork:
    """
    Context manager that owns one SQLAlchemy session for one operation.

    Every repository touched during the operation shares ``session``.
    Leaving the block normally commits. Leaving it with an exception rolls
    back and re-raises, so no partial state becomes visible.

    Usage:
        with UnitOfWork(SessionLocal) as uow:
            repo = SQLAlchemyIssueRepository(uow.session)
            ...
    """

    def __init__(self, session_factory: Callable[[], Session]):
        self._session_factory = session_factory
        self._session: Optional[Session] = None

    @property
    def session(self) -> Session:
        if self._session is None:
            raise RuntimeError("UnitOfWork is not active; use it as a context manager")
        return self._session

    def __enter__(self) -> "UnitOfWork":
        self._session = self._session_factory()
        return self

    def __exit__(self, exc_type, exc, tb) -> bool:
        session = self.session
        try:
            if exc_type is None:
                session.commit()
            else:
                logger.info(
                    "Rolling back unit of work after %s: %s", exc_type.__name__, exc
                )
                session.rollback()
        except Exception:
            session.rollback()
            raise
        finally:
            session.close()
            self._session = None
        return False

    def commit(self) -> None:
        """Commit early (mainly for scripts and tests that span several steps)."""
        self.session.commit()

    def rollback(self) -> None:
        """Discard everything done in this unit of work so far."""
        self.session.rollback()
