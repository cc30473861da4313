"""Database engine and sessions (DAMA_DATABASE_URL / DAMA_SQL_ECHO)"""

from contextlib import contextmanager
from typing import Generator

from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker

from src.core.config import DATABASE_URL, SQL_ECHO
from src.db.schema import Base

# sqlite refuses connections used outside the thread that opened them unless told otherwise
CONNECT_ARGS = {"check_same_thread": False} if DATABASE_URL.startswith("sqlite") else {}

engine = create_engine(DATABASE_URL, echo=SQL_ECHO, connect_args=CONNECT_ARGS)
SessionLocal = sessionmaker(autoflush=False, bind=engine)


def init_db() -> None:
    """Create the tables that do not exist yet"""
    Base.metadata.create_all(bind=engine)


@contextmanager
def session_scope() -> Generator[Session, None, None]:
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
