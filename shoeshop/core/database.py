# shoeshop/core/database.py
import logging
import os

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import declarative_base, sessionmaker
from sqlalchemy.pool import StaticPool

from shoeshop.core.config import Settings, StorageBackend

logger = logging.getLogger(__name__)

Base = declarative_base()


def _ensure_sqlite_dir(database_url: str) -> None:
    """Crear el directorio del archivo SQLite si hace falta"""
    path = database_url.replace("sqlite:///", "", 1)
    if path and path != ":memory:":
        directory = os.path.dirname(path)
        if directory:
            os.makedirs(directory, exist_ok=True)


def create_db_engine(settings: Settings) -> Engine:
    """Crear el engine de SQLAlchemy para el backend configurado"""
    url = settings.DATABASE_URL

    if settings.STORAGE_BACKEND == StorageBackend.sqlite:
        _ensure_sqlite_dir(url)
        kwargs = {"connect_args": {"check_same_thread": False}}
        if url in ("sqlite://", "sqlite:///:memory:"):
            kwargs["poolclass"] = StaticPool
        logger.info(f"💾 Usando SQLite: {url}")
        return create_engine(url, **kwargs)

    if settings.STORAGE_BACKEND == StorageBackend.postgresql:
        if url.startswith("postgres://"):
            url = url.replace("postgres://", "postgresql://", 1)
        logger.info(f"💾 Usando PostgreSQL: {url[:30]}...")
        return create_engine(url, pool_pre_ping=True)

    raise ValueError(f"Backend {settings.STORAGE_BACKEND.value} does not use SQLAlchemy")


def create_session_factory(engine: Engine) -> sessionmaker:
    return sessionmaker(bind=engine, autocommit=False, autoflush=False, expire_on_commit=False)


def init_database(engine: Engine) -> None:
    """Crear tablas si no existen"""
    # Importar modelos para registrarlos en Base.metadata
    from shoeshop import models  # noqa: F401

    Base.metadata.create_all(bind=engine)
    logger.info("✅ Tablas creadas correctamente")
