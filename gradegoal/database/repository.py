"""Key/value storage for the serialized course store"""

from abc import ABC, abstractmethod
from typing import Callable, Dict, Optional

import structlog
from sqlalchemy.orm import Session

from gradegoal.database.database import get_db_session
from gradegoal.database.models import AppState

logger = structlog.get_logger(__name__)


class StateRepository(ABC):
    """Durable storage of text values under string keys"""

    @abstractmethod
    def read(self, key: str) -> Optional[str]:
        """Return the stored value, or None when the key is absent"""

    @abstractmethod
    def write(self, key: str, value: str) -> None:
        """Store value under key, replacing any previous value"""


class InMemoryStateRepository(StateRepository):
    """Dictionary-backed repository for tests and throwaway sessions"""

    def __init__(self, initial: Optional[Dict[str, str]] = None):
        self._values: Dict[str, str] = dict(initial or {})

    def read(self, key: str) -> Optional[str]:
        return self._values.get(key)

    def write(self, key: str, value: str) -> None:
        self._values[key] = value


class SqlStateRepository(StateRepository):
    """Repository storing each key as one row of the app_state table"""

    def __init__(self, session_factory: Callable[[], Session] = get_db_session):
        self._session_factory = session_factory

    def read(self, key: str) -> Optional[str]:
        db = self._session_factory()
        try:
            row = db.query(AppState).filter(AppState.key == key).first()
            return row.value if row else None
        finally:
            db.close()

    def write(self, key: str, value: str) -> None:
        db = self._session_factory()
        try:
            row = db.query(AppState).filter(AppState.key == key).first()
            if row:
                row.value = value
            else:
                db.add(AppState(key=key, value=value))
            db.commit()
            logger.debug("state_written", key=key, size=len(value))
        except Exception:
            db.rollback()
            raise
        finally:
            db.close()
