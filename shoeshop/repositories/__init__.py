from .base import ShoeRepository
from .factory import InMemoryStorage, SqlAlchemyStorage, Storage, build_storage
from .memory_repository import InMemoryShoeRepository, InMemoryStore
from .sqlalchemy_repository import SqlAlchemyShoeRepository

__all__ = [
    "ShoeRepository",
    "SqlAlchemyShoeRepository",
    "InMemoryShoeRepository",
    "InMemoryStore",
    "Storage",
    "SqlAlchemyStorage",
    "InMemoryStorage",
    "build_storage",
]
