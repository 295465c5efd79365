"""Request-scoped database session."""

from typing import Generator

from sqlalchemy.orm import Session

from ...database import session_scope


def get_db() -> Generator[Session, None, None]:
    yield from session_scope()
