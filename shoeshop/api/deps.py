# shoeshop/api/deps.py
from typing import Iterator

from fastapi import Depends, HTTPException, Request, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from shoeshop.core.config import Settings
from shoeshop.core.security import decode_token
from shoeshop.services.shoe_service import ShoeService

security = HTTPBearer()


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_shoe_service(request: Request) -> Iterator[ShoeService]:
    """Servicio ligado a una sesión de almacenamiento que dura lo que dura el request"""
    storage = request.app.state.storage
    with storage.session_scope() as repository:
        yield ShoeService(repository)


async def get_current_user(
    credentials: HTTPAuthorizationCredentials = Depends(security),
    settings: Settings = Depends(get_settings),
) -> dict:
    """Obtener el usuario autenticado desde el token JWT"""

    payload = decode_token(credentials.credentials, settings.SECRET_KEY, settings.ALGORITHM)

    if payload is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid token",
            headers={"WWW-Authenticate": "Bearer"},
        )

    subject = payload.get("sub")
    if not subject:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid token",
            headers={"WWW-Authenticate": "Bearer"},
        )

    return {"sub": str(subject), "email": payload.get("email")}
