"""
Module: hr_kernel.selectors.base
Responsibility: Abstract base class for all read-only query selectors.
Architecture position: Kernel > Selectors.  May import from db/, models/,
    domain/ and exceptions.py.  MUST NOT import from outer layers.
    Selectors NEVER create, modify, or delete data.

Invariants enforced:
    - Read-only access: Selectors accept a Session from the caller but MUST NOT
      call session.add(), session.delete(), session.commit(), or session.flush().
    - DTO return convention: Selectors return frozen dataclasses, NOT raw ORM
      model instances.
    - Session ownership: Selectors do NOT create or manage their own sessions;
      the caller owns the session and its transaction scope (see
      hr_kernel.db.engine.read_only_scope).

Failure modes:
    - DataAccessError when the store rejects or cannot answer a query.  The
      original SQLAlchemy exception is chained.
"""

from abc import ABC
from typing import Any

from sqlalchemy import Row
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session
from sqlalchemy.sql.base import Executable

from hr_kernel.exceptions import DataAccessError
from hr_kernel.logging_config import get_logger

logger = get_logger("selectors")


class BaseSelector(ABC):
    """
    Abstract base class for all selectors.

    Contract:
        Selectors accept a Session from the caller, perform read-only queries,
        and return DTOs.  They MUST NOT mutate any data.

    Non-goals:
        - BaseSelector does NOT define any query methods; subclasses implement
          domain-specific queries.
    """

    def __init__(self, session: Session):
        self.session = session

    def _fetch_all(self, operation: str, statement: Executable) -> list[Row[Any]]:
        """
        Execute a statement and return all result rows.

        Any SQLAlchemy failure is surfaced as DataAccessError so callers can
        distinguish "no rows" from "store unavailable".
        """
        try:
            return list(self.session.execute(statement).all())
        except SQLAlchemyError as exc:
            logger.error(
                "aggregation_failed",
                extra={"operation": operation},
                exc_info=True,
            )
            raise DataAccessError(operation, str(exc)) from exc
