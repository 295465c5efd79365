# backend/minibnb/services/base.py
"""
Shared plumbing for MiniBnB services.

Services own the unit of work: repositories flush, `transaction()` commits.
`measure_operation` times public service methods into the
minibnb_service_operation_seconds histogram.
"""

import asyncio
from contextlib import contextmanager
from functools import wraps
import logging
import time
from typing import Any, Callable, Iterator, Optional, TypeVar, cast

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from ..core.exceptions import RepositoryException, ServiceException
from ..core.metrics import SERVICE_OPERATION_SECONDS

logger = logging.getLogger(__name__)

F = TypeVar("F", bound=Callable[..., Any])

SLOW_OPERATION_SECONDS = 1.0


class BaseService:
    """Holds the session and a per-class logger."""

    def __init__(self, db: Optional[Session] = None):
        self.db = db
        self.logger = logging.getLogger(self.__class__.__name__)

    @contextmanager
    def transaction(self) -> Iterator[Optional[Session]]:
        """
        Commit the session when the block exits cleanly, roll back otherwise.

        Persistence failures are re-raised as ServiceException; domain errors
        raised inside the block propagate unchanged. Without a session
        (cache-only services) the block simply runs.

            with self.transaction():
                self.repository.create(...)
        """
        if self.db is None:
            yield None
            return
        try:
            yield self.db
            self.db.commit()
        except (SQLAlchemyError, RepositoryException) as e:
            self.db.rollback()
            self.logger.error(f"Rolled back after persistence failure: {str(e)}")
            raise ServiceException(f"Database operation failed: {str(e)}")
        except Exception:
            self.db.rollback()
            raise

    def _record_operation(self, operation_name: str, elapsed: float, success: bool) -> None:
        SERVICE_OPERATION_SECONDS.labels(
            service=self.__class__.__name__,
            operation=operation_name,
            status="success" if success else "error",
        ).observe(elapsed)
        if elapsed > SLOW_OPERATION_SECONDS:
            self.logger.warning(f"{operation_name} took {elapsed:.2f}s")

    @staticmethod
    def measure_operation(operation_name: str) -> Callable[[F], F]:
        """Record duration and outcome of a sync or async service method."""

        def decorator(func: F) -> F:
            if asyncio.iscoroutinefunction(func):

                @wraps(func)
                async def async_timed(self: "BaseService", *args: Any, **kwargs: Any) -> Any:
                    started = time.perf_counter()
                    succeeded = False
                    try:
                        result = await func(self, *args, **kwargs)
                        succeeded = True
                        return result
                    finally:
                        self._record_operation(
                            operation_name, time.perf_counter() - started, succeeded
                        )

                return cast(F, async_timed)

            @wraps(func)
            def timed(self: "BaseService", *args: Any, **kwargs: Any) -> Any:
                started = time.perf_counter()
                succeeded = False
                try:
                    result = func(self, *args, **kwargs)
                    succeeded = True
                    return result
                finally:
                    self._record_operation(
                        operation_name, time.perf_counter() - started, succeeded
                    )

            return cast(F, timed)

        return decorator
