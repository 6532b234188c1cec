# shoeshop/core/config.py
import enum
import os
from typing import List, Optional


class StorageBackend(str, enum.Enum):
    sqlite = "sqlite"
    postgresql = "postgresql"
    memory = "memory"


def _as_bool(value: Optional[str], default: bool = False) -> bool:
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


def detect_backend(database_url: str) -> StorageBackend:
    """Deducir el backend a partir de la URL de conexión"""
    if database_url.startswith("postgresql") or database_url.startswith("postgres://"):
        return StorageBackend.postgresql
    if database_url.startswith("sqlite"):
        return StorageBackend.sqlite
    if database_url.startswith("memory"):
        return StorageBackend.memory
    raise ValueError(f"Unsupported DATABASE_URL: {database_url[:30]}")


class Settings:
    API_V1_STR: str = "/api/v1"
    VERSION: str = "1.0.0"

    def __init__(
        self,
        database_url: str = "sqlite:///./data/shoeshop.db",
        storage_backend: Optional[StorageBackend] = None,
        project_name: str = "ShoeShop Inventory",
        environment: str = "development",
        debug: bool = False,
        secret_key: str = "super-secret-key-change-in-production",
        algorithm: str = "HS256",
        access_token_expire_minutes: int = 10080,
        log_level: str = "INFO",
        seed_data: bool = False,
        cors_origins: Optional[List[str]] = None,
        port: int = 8000,
    ):
        self.DATABASE_URL = database_url
        self.STORAGE_BACKEND = StorageBackend(storage_backend) if storage_backend else detect_backend(database_url)
        self.PROJECT_NAME = project_name
        self.ENVIRONMENT = environment
        self.DEBUG = debug

        # JWT
        self.SECRET_KEY = secret_key
        self.ALGORITHM = algorithm
        self.ACCESS_TOKEN_EXPIRE_MINUTES = access_token_expire_minutes

        self.LOG_LEVEL = log_level
        self.SEED_DATA = seed_data
        self.CORS_ORIGINS = cors_origins or ["*"]
        self.PORT = port

    @classmethod
    def from_env(cls) -> "Settings":
        """Leer la configuración desde variables de entorno (una sola vez al arrancar)"""
        backend = os.getenv("STORAGE_BACKEND")
        origins = os.getenv("CORS_ORIGINS", "*")
        return cls(
            database_url=os.getenv("DATABASE_URL", "sqlite:///./data/shoeshop.db"),
            storage_backend=StorageBackend(backend.lower()) if backend else None,
            project_name=os.getenv("PROJECT_NAME", "ShoeShop Inventory"),
            environment=os.getenv("ENVIRONMENT", "development"),
            debug=_as_bool(os.getenv("DEBUG")),
            secret_key=os.getenv("SECRET_KEY", "super-secret-key-change-in-production"),
            algorithm=os.getenv("ALGORITHM", "HS256"),
            access_token_expire_minutes=int(os.getenv("ACCESS_TOKEN_EXPIRE_MINUTES", "10080")),
            log_level=os.getenv("LOG_LEVEL", "INFO"),
            seed_data=_as_bool(os.getenv("SEED_DATA")),
            cors_origins=[o.strip() for o in origins.split(",") if o.strip()],
            port=int(os.getenv("PORT", "8000")),
        )
