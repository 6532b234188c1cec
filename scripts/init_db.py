import sys
import os
sys.path.append(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from datetime import timedelta

from shoeshop.core.config import Settings
from shoeshop.core.logging_config import setup_logging
from shoeshop.core.security import create_access_token
from shoeshop.repositories.factory import build_storage
from shoeshop.seed import seed_catalog


def create_initial_data(settings: Settings):
    """Crear tablas, sembrar el catálogo y emitir un token de desarrollo"""

    storage = build_storage(settings)
    storage.init()

    with storage.session_scope() as repository:
        created = seed_catalog(repository)
    print(f"✅ Shoes creados: {created}")

    token = create_access_token(
        data={"sub": "dev@shoeshop.local", "email": "dev@shoeshop.local"},
        secret_key=settings.SECRET_KEY,
        algorithm=settings.ALGORITHM,
        expires_delta=timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES),
    )
    print(f"🔑 Token de desarrollo: {token}")

    storage.dispose()


if __name__ == "__main__":
    settings = Settings.from_env()
    setup_logging(settings.LOG_LEVEL)
    create_initial_data(settings)
