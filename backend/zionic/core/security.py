"""Helpers de autenticación por API key y enmascarado de secretos."""

from hashlib import sha256


class AuthorizationError(Exception):
    """Encabezado Authorization ausente o mal formado."""


def extract_bearer_token(authorization: str | None) -> str:
    """Obtiene el token de un encabezado ``Authorization: Bearer <token>``."""
    if not authorization:
        raise AuthorizationError("Missing Authorization header")
    scheme, _, token = authorization.strip().partition(" ")
    token = token.strip()
    if scheme.lower() != "bearer" or not token:
        raise AuthorizationError("Authorization header must use the Bearer scheme")
    return token


def hash_api_key(token: str) -> str:
    """Huella SHA-256 con la que se almacenan las API keys."""
    return sha256(token.encode()).hexdigest()


def mask_secret(value: str | None) -> str | None:
    """Enmascara secretos para logging seguro."""
    if not value:
        return value
    if len(value) <= 4:
        return "***"
    return f"{value[:2]}***{value[-2:]}"
