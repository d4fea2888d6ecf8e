"""Identity provider: accounts, password hashing and signed ID tokens.

ID tokens are JWTs carrying `sub`/`uid`, `aud` (the project id) and `iss`.
The seed endpoints only need two things from here: `verify_id_token` and
`get_account`.
"""

from __future__ import annotations

import logging
import uuid
import warnings
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional

# argon2 cffi exposes a deprecated attribute access that creates a lot of noise
warnings.filterwarnings("ignore", category=DeprecationWarning, message=r".*argon2.*")

from fastapi import Depends
from jose import JWTError, jwt
from passlib.context import CryptContext
from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from echomatch import config
from echomatch.database import get_db
from echomatch.errors import AccountNotFound, InvalidCredential, StoreUnavailable
from echomatch.models import IdentityAccountModel

logger = logging.getLogger(__name__)

pwd_context = CryptContext(schemes=["argon2", "bcrypt"], deprecated="auto")


def get_password_hash(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    return pwd_context.verify(plain_password, hashed_password)


def _issuer() -> str:
    return f"https://identity.echomatch.local/{config.IDENTITY_PROJECT_ID}"


class IdentityProvider:
    def __init__(self, db: Session) -> None:
        self.db = db

    # ----------------------------- accounts ---------------------------------
    def get_account(self, uid: str) -> IdentityAccountModel:
        """Return the account for `uid` or raise AccountNotFound."""
        try:
            account = self.db.get(IdentityAccountModel, uid)
        except SQLAlchemyError as exc:
            raise StoreUnavailable(str(exc)) from exc
        if account is None:
            raise AccountNotFound(uid)
        return account

    def create_account(
        self,
        email: str,
        password: Optional[str] = None,
        uid: Optional[str] = None,
        display_name: Optional[str] = None,
    ) -> IdentityAccountModel:
        uid = uid or uuid.uuid4().hex[:28]
        if self.db.get(IdentityAccountModel, uid) is not None:
            raise ValueError(f"Account {uid} already exists")
        existing = self.db.scalar(select(IdentityAccountModel).where(IdentityAccountModel.email == email))
        if existing is not None:
            raise ValueError(f"Email {email} already registered")

        account = IdentityAccountModel(
            uid=uid,
            email=email,
            hashed_password=get_password_hash(password) if password else None,
            display_name=display_name,
            disabled=False,
        )
        self.db.add(account)
        self.db.commit()
        self.db.refresh(account)
        logger.info("Created identity account uid=%s", uid)
        return account

    def authenticate(self, email: str, password: str) -> Optional[IdentityAccountModel]:
        account = self.db.scalar(select(IdentityAccountModel).where(IdentityAccountModel.email == email))
        if account is None or not account.hashed_password:
            return None
        if not verify_password(password, account.hashed_password):
            return None
        return account

    # ----------------------------- tokens ---------------------------------
    def issue_id_token(self, account: IdentityAccountModel, expires_delta: Optional[timedelta] = None) -> str:
        now = datetime.now(timezone.utc)
        expire = now + (expires_delta if expires_delta is not None else timedelta(minutes=config.ID_TOKEN_EXPIRE_MINUTES))
        claims = {
            "sub": account.uid,
            "uid": account.uid,
            "email": account.email,
            "aud": config.IDENTITY_PROJECT_ID,
            "iss": _issuer(),
            "iat": now,
            "exp": expire,
        }
        return jwt.encode(claims, config.IDENTITY_SECRET, algorithm=config.IDENTITY_ALGORITHM)

    def verify_id_token(self, token: str) -> Dict[str, Any]:
        """Decode and check an ID token. Raises InvalidCredential on any failure."""
        try:
            claims = jwt.decode(
                token,
                config.IDENTITY_SECRET,
                algorithms=[config.IDENTITY_ALGORITHM],
                audience=config.IDENTITY_PROJECT_ID,
                issuer=_issuer(),
            )
        except JWTError as exc:
            logger.debug("ID token rejected: %s", exc)
            raise InvalidCredential() from exc

        if not claims.get("sub"):
            raise InvalidCredential()
        claims.setdefault("uid", claims["sub"])
        return claims


def get_identity_provider(db: Session = Depends(get_db)) -> IdentityProvider:
    return IdentityProvider(db)


__all__ = [
    "IdentityProvider",
    "get_identity_provider",
    "get_password_hash",
    "verify_password",
    "pwd_context",
]
