# shoeshop/repositories/factory.py
import logging
from abc import ABC, abstractmethod
from contextlib import contextmanager
from typing import Iterator

from shoeshop.core.config import Settings, StorageBackend
from shoeshop.core.database import create_db_engine, create_session_factory, init_database
from shoeshop.repositories.base import ShoeRepository
from shoeshop.repositories.memory_repository import InMemoryShoeRepository, InMemoryStore
from shoeshop.repositories.sqlalchemy_repository import SqlAlchemyShoeRepository

logger = logging.getLogger(__name__)


class Storage(ABC):
    """Punto de acceso al almacenamiento configurado para el proceso"""

    backend: StorageBackend

    def init(self) -> None:
        """Preparar el almacenamiento (crear tablas, etc.)"""

    @abstractmethod
    @contextmanager
    def session_scope(self) -> Iterator[ShoeRepository]:
        """Repositorio ligado a una sesión; se libera al salir del bloque"""

    def dispose(self) -> None:
        """Liberar recursos al apagar"""


class SqlAlchemyStorage(Storage):

    def __init__(self, settings: Settings):
        self.backend = settings.STORAGE_BACKEND
        self.engine = create_db_engine(settings)
        self.SessionLocal = create_session_factory(self.engine)

    def init(self) -> None:
        init_database(self.engine)

    @contextmanager
    def session_scope(self) -> Iterator[ShoeRepository]:
        """Una sesión por request: rollback si algo falla, cierre siempre"""
        db = self.SessionLocal()
        try:
            yield SqlAlchemyShoeRepository(db)
        except Exception:
            db.rollback()
            raise
        finally:
            db.close()

    def dispose(self) -> None:
        self.engine.dispose()


class InMemoryStorage(Storage):

    def __init__(self):
        self.backend = StorageBackend.memory
        self.store = InMemoryStore()

    @contextmanager
    def session_scope(self) -> Iterator[ShoeRepository]:
        yield InMemoryShoeRepository(self.store)


def build_storage(settings: Settings) -> Storage:
    """Elegir el backend una sola vez al arrancar"""
    logger.info(f"🔧 Storage backend: {settings.STORAGE_BACKEND.value}")
    if settings.STORAGE_BACKEND == StorageBackend.memory:
        return InMemoryStorage()
    return SqlAlchemyStorage(settings)
