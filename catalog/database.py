# catalog/database.py
from __future__ import annotations

import logging
import os
from contextlib import contextmanager
from typing import Generator

from dotenv import load_dotenv
from sqlalchemy import MetaData, create_engine, event, text
from sqlalchemy.engine import Engine
from sqlalchemy.exc import OperationalError, SQLAlchemyError
from sqlalchemy.orm import Session, declarative_base, sessionmaker
from sqlalchemy.pool import NullPool, StaticPool
from tenacity import (
    before_sleep_log,
    retry,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential_jitter,
)

from catalog.core.settings import settings
from catalog.errors import CatalogError, PersistenceError

# Încarcă variabilele din .env (pe host). În Docker vin din env_file/environment.
load_dotenv()

logger = logging.getLogger(__name__)

# -----------------------------
# Helpers
# -----------------------------
def _env_bool(key: str, default: bool = False) -> bool:
    val = os.getenv(key)
    if val is None:
        return default
    return val.strip().lower() in {"1", "true", "yes", "on"}

def _mask_url(url: str) -> str:
    if "://" not in url:
        return url
    scheme, rest = url.split("://", 1)
    if "@" not in rest or ":" not in rest.split("@", 1)[0]:
        return url
    creds, tail = rest.split("@", 1)
    user = creds.split(":", 1)[0]
    return f"{scheme}://{user}:***@{tail}"

# -----------------------------
# Config din environment
# -----------------------------
DATABASE_URL = settings.database_url

# Logs SQL la nevoie: DB_ECHO=1 / true / yes / on
ECHO_SQL = _env_bool("DB_ECHO", False)

PG_STATEMENT_TIMEOUT_MS = (os.getenv("DB_STATEMENT_TIMEOUT_MS") or "").strip()  # ex: "30000"

# Pooling
POOL_SIZE = int(os.getenv("DB_POOL_SIZE", "5"))
MAX_OVERFLOW = int(os.getenv("DB_MAX_OVERFLOW", "10"))
POOL_RECYCLE = int(os.getenv("DB_POOL_RECYCLE", "1800"))  # sec (30 min)
POOL_TIMEOUT = int(os.getenv("DB_POOL_TIMEOUT", "30"))    # sec

# Startup: câte încercări de conectare până renunțăm (Postgres poate porni după API)
CONNECT_ATTEMPTS = max(1, int(os.getenv("DB_CONNECT_ATTEMPTS", "5")))

# -----------------------------
# Naming convention pentru constrângeri
# -----------------------------
NAMING_CONVENTION = {
    "ix": "ix_%(table_name)s_%(column_0_label)s",
    "uq": "uq_%(table_name)s_%(column_0_name)s",
    "ck": "ck_%(table_name)s_%(constraint_name)s",
    "fk": "fk_%(table_name)s_%(column_0_name)s_%(referred_table_name)s",
    "pk": "pk_%(table_name)s",
}

metadata = MetaData(naming_convention=NAMING_CONVENTION)
Base = declarative_base(metadata=metadata)

# -----------------------------
# Engine factory
# -----------------------------
def _build_engine_kwargs(url: str) -> dict:
    kwargs: dict = {"echo": ECHO_SQL, "pool_pre_ping": True}

    if url.startswith("sqlite"):
        # SQLite: single-thread în driver → dezactivează check_same_thread
        kwargs["connect_args"] = {"check_same_thread": False}
        # In-memory → StaticPool (altfel fiecare conexiune are DB separat)
        if url in {"sqlite://", "sqlite:///:memory:", "sqlite+pysqlite:///:memory:"}:
            kwargs["poolclass"] = StaticPool
        else:
            kwargs["poolclass"] = NullPool
    else:
        kwargs.update(
            {
                "pool_size": POOL_SIZE,
                "max_overflow": MAX_OVERFLOW,
                "pool_recycle": POOL_RECYCLE,
                "pool_timeout": POOL_TIMEOUT,
            }
        )
        # Postgres: statement_timeout prin libpq options (nu ca statement)
        if url.startswith("postgresql") and PG_STATEMENT_TIMEOUT_MS.isdigit():
            kwargs["connect_args"] = {"options": f"-c statement_timeout={PG_STATEMENT_TIMEOUT_MS}"}

    return kwargs

def _enable_sqlite_fks(dbapi_conn, _record) -> None:
    # SQLite nu verifică FK-urile implicit
    cur = dbapi_conn.cursor()
    cur.execute("PRAGMA foreign_keys=ON")
    cur.close()

def build_engine(url: str) -> Engine:
    eng = create_engine(url, **_build_engine_kwargs(url))
    if url.startswith("sqlite"):
        event.listen(eng, "connect", _enable_sqlite_fks)
    return eng

engine: Engine = build_engine(DATABASE_URL)

# -----------------------------
# Session factory
# -----------------------------
# expire_on_commit=False → obiectele rămân utilizabile după commit (evită re-load imediat)
SessionLocal = sessionmaker(bind=engine, autocommit=False, autoflush=False, expire_on_commit=False)

def get_db() -> Generator[Session, None, None]:
    """
    FastAPI dependency: o sesiune (deci o conexiune din pool) per request,
    închisă garantat pe orice cale de ieșire.
    """
    db: Session = SessionLocal()
    try:
        yield db
    except Exception:
        db.rollback()
        raise
    finally:
        db.close()

@contextmanager
def session_scope() -> Generator[Session, None, None]:
    """
    Context manager util în scripturi (non-FastAPI).
    Exemplu:
        with session_scope() as db:
            db.add(obj)
    """
    db: Session = SessionLocal()
    try:
        yield db
        db.commit()
    except Exception:
        db.rollback()
        raise
    finally:
        db.close()

@contextmanager
def write_transaction(db: Session) -> Generator[Session, None, None]:
    """
    Corp de tranzacție comun pentru create/replace/delete:
    commit la succes, rollback la ORICE eroare.

    - erorile de domeniu (CatalogError) trec neschimbate după rollback;
    - orice SQLAlchemyError devine PersistenceError (cu cauza înlănțuită).
    """
    try:
        yield db
        db.commit()
    except CatalogError:
        db.rollback()
        raise
    except SQLAlchemyError as e:
        db.rollback()
        logger.warning("Transaction rolled back: %s", e.__class__.__name__)
        raise PersistenceError() from e
    except Exception:
        db.rollback()
        raise

@retry(
    retry=retry_if_exception_type(OperationalError),
    wait=wait_exponential_jitter(initial=0.5, max=5.0),
    stop=stop_after_attempt(CONNECT_ATTEMPTS),
    reraise=True,
    before_sleep=before_sleep_log(logger, logging.WARNING),
)
def ping() -> None:
    """SELECT 1 pe o conexiune nouă; reîncearcă pe OperationalError, apoi ridică."""
    with engine.connect() as conn:
        conn.execute(text("SELECT 1"))

def init_db() -> None:
    """
    Creează tabelele lipsă (CREATE TABLE IF NOT EXISTS). Idempotent;
    nu este un motor de migrații.
    """
    from catalog import models  # noqa: F401

    Base.metadata.create_all(bind=engine)
    logger.info("Schema ensured on %s", _mask_url(DATABASE_URL))

__all__ = [
    "engine",
    "SessionLocal",
    "Base",
    "build_engine",
    "get_db",
    "session_scope",
    "write_transaction",
    "ping",
    "init_db",
]
