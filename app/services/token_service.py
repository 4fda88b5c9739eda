"""
Creación y verificación de JWTs de acceso.
"""
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional
from uuid import uuid4

import jwt as pyjwt

from app.core.config import settings


def _now_utc() -> datetime:
    return datetime.now(timezone.utc)


def create_access_token(*, user_id: str, email: Optional[str] = None, expires_in_minutes: int | None = None) -> str:
    """
    Genera un JWT (HS256 por defecto) válido por ACCESS_TOKEN_EXPIRE_MINUTES.
    Claims: sub(user_id), email, iat, exp, jti.
    """
    if not settings.jwt_secret:
        raise RuntimeError("JWT_SECRET no configurado")
    now = _now_utc()
    mins = expires_in_minutes if expires_in_minutes is not None else settings.access_token_expire_minutes
    exp = now + timedelta(minutes=mins)
    payload = {
        "sub": str(user_id),
        "email": email,
        "iat": int(now.timestamp()),
        "exp": int(exp.timestamp()),
        "jti": str(uuid4()),
    }
    return pyjwt.encode(payload, settings.jwt_secret, algorithm=settings.jwt_algorithm)


def verify_access_token(token: str) -> Dict[str, Any]:
    """
    Decodifica y valida firma/expiración. Devuelve payload.
    Lanza `jwt.InvalidTokenError` si el token no es válido.
    """
    if not settings.jwt_secret:
        raise pyjwt.InvalidTokenError("JWT_SECRET no configurado")
    return pyjwt.decode(token, key=settings.jwt_secret, algorithms=[settings.jwt_algorithm])
