"""
Module de securite pour l'authentification JWT.

Implemente le hachage de mots de passe, les tokens de session des tenants,
la session administrateur (cookie) et la generation des OTP,
selon les recommandations FastAPI:
https://fastapi.tiangolo.com/tutorial/security/oauth2-jwt/
"""

import hmac
import secrets
from datetime import datetime, timedelta, timezone
from typing import Optional

import jwt
from fastapi import HTTPException, status
from fastapi.security import OAuth2PasswordBearer
from jwt.exceptions import InvalidTokenError
from passlib.context import CryptContext

from chatforge.config import settings
from backend.domain.models.tenant import Tenant, TokenData

# Configuration du hachage de mots de passe (bcrypt)
pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")

# Schema OAuth2 - le tokenUrl pointe vers l'endpoint de login
oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/api/auth/login")

ADMIN_COOKIE_NAME = "admin_session"


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verifie si un mot de passe correspond au hash."""
    return pwd_context.verify(plain_password, hashed_password)


def get_password_hash(password: str) -> str:
    """Hash un mot de passe avec bcrypt."""
    return pwd_context.hash(password)


def generate_otp() -> str:
    """OTP de 6 caracteres hexadecimaux en majuscules."""
    return secrets.token_hex(3).upper()


def create_access_token(
    data: dict,
    expires_delta: Optional[timedelta] = None,
    secret_key: Optional[str] = None,
) -> str:
    """
    Cree un token JWT avec une date d'expiration.

    Args:
        data: Donnees a encoder dans le token (ex: {"sub": tenant_id})
        expires_delta: Duree de validite du token
        secret_key: Cle de signature (par defaut JWT_SECRET_KEY)

    Returns:
        Token JWT encode
    """
    to_encode = data.copy()
    if expires_delta:
        expire = datetime.now(timezone.utc) + expires_delta
    else:
        expire = datetime.now(timezone.utc) + timedelta(minutes=15)
    to_encode.update({"exp": expire})
    encoded_jwt = jwt.encode(
        to_encode,
        secret_key or settings.JWT_SECRET_KEY,
        algorithm=settings.JWT_ALGORITHM
    )
    return encoded_jwt


def create_session_token(tenant: Tenant) -> str:
    """Token de session d'un tenant (sub = identifiant du tenant)."""
    return create_access_token(
        data={"sub": tenant.tenant_id, "email": tenant.email},
        expires_delta=timedelta(days=settings.JWT_ACCESS_TOKEN_EXPIRE_DAYS),
    )


def decode_token(token: str) -> TokenData:
    """
    Decode et valide un token JWT de session.

    Raises:
        HTTPException 401 si le token est invalide
    """
    credentials_exception = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Could not validate credentials",
        headers={"WWW-Authenticate": "Bearer"},
    )
    try:
        payload = jwt.decode(
            token,
            settings.JWT_SECRET_KEY,
            algorithms=[settings.JWT_ALGORITHM]
        )
        tenant_id: str = payload.get("sub")
        email: str = payload.get("email")
        if tenant_id is None:
            raise credentials_exception
        return TokenData(tenant_id=tenant_id, email=email)
    except InvalidTokenError:
        raise credentials_exception


def admin_access_enabled() -> bool:
    """L'espace admin exige une cle d'acces et un secret de session configures."""
    return bool(settings.ADMIN_ACCESS_KEY) and bool(settings.ADMIN_ACCESS_SECRET)


def verify_admin_key(key: str) -> bool:
    """Compare la cle d'acces admin en temps constant. Espace admin desactive = acces ferme."""
    if not admin_access_enabled():
        return False
    return hmac.compare_digest(key.encode(), settings.ADMIN_ACCESS_KEY.encode())


def create_admin_session_token() -> str:
    return create_access_token(
        data={"admin": True},
        expires_delta=timedelta(minutes=settings.ADMIN_SESSION_MINUTES),
        secret_key=settings.ADMIN_ACCESS_SECRET,
    )


def is_admin_session_valid(token: Optional[str]) -> bool:
    """Un cookie n'est jamais valide si l'espace admin est desactive, quelle que soit sa signature."""
    if not token or not admin_access_enabled():
        return False
    try:
        payload = jwt.decode(
            token,
            settings.ADMIN_ACCESS_SECRET,
            algorithms=[settings.JWT_ALGORITHM]
        )
    except InvalidTokenError:
        return False
    return bool(payload.get("admin"))
