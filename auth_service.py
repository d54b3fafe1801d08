"""
Ember — Auth Service
Account storage, bcrypt password hashing and JWT issuance for the hosted
backend. Anonymous users can still score an assessment; saving results and
planner entries requires an access token.
"""

from datetime import datetime, timedelta, timezone
from typing import Optional

import bcrypt
from jose import JWTError, jwt
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select
import logging

from config import settings
from models import User
from schemas import UserRegisterSchema, TokenResponseSchema

log = logging.getLogger(__name__)

ALGORITHM = "HS256"
ACCESS = "access"
REFRESH = "refresh"


# ══════════════════════════════════════════════════════════════════════════════
# PASSWORDS
# ══════════════════════════════════════════════════════════════════════════════

def hash_password(plain: str) -> str:
    salt = bcrypt.gensalt(rounds=settings.BCRYPT_ROUNDS)
    return bcrypt.hashpw(plain.encode("utf-8"), salt).decode("utf-8")


def verify_password(plain: str, hashed: str) -> bool:
    return bcrypt.checkpw(plain.encode("utf-8"), hashed.encode("utf-8"))


# ══════════════════════════════════════════════════════════════════════════════
# TOKENS
# ══════════════════════════════════════════════════════════════════════════════

def _encode(claims: dict, lifetime: timedelta) -> str:
    payload = {**claims, "exp": datetime.now(timezone.utc) + lifetime}
    return jwt.encode(payload, settings.SECRET_KEY, algorithm=ALGORITHM)


def issue_tokens(user: User) -> TokenResponseSchema:
    access = _encode(
        {"sub": str(user.id), "email": user.email, "type": ACCESS},
        timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES),
    )
    refresh = _encode(
        {"sub": str(user.id), "type": REFRESH},
        timedelta(days=settings.REFRESH_TOKEN_EXPIRE_DAYS),
    )
    return TokenResponseSchema(
        access_token=access,
        refresh_token=refresh,
        expires_in=settings.ACCESS_TOKEN_EXPIRE_MINUTES * 60,
    )


def decode_token(token: str, expected_type: str = ACCESS) -> dict:
    try:
        claims = jwt.decode(token, settings.SECRET_KEY, algorithms=[ALGORITHM])
    except JWTError as e:
        raise ValueError(f"Invalid token: {e}")
    if claims.get("type") != expected_type:
        raise ValueError(f"Expected a {expected_type} token.")
    return claims


# ══════════════════════════════════════════════════════════════════════════════
# ACCOUNTS
# ══════════════════════════════════════════════════════════════════════════════

async def get_user_by_email(db: AsyncSession, email: str) -> Optional[User]:
    result = await db.execute(select(User).where(User.email == email.lower()))
    return result.scalar_one_or_none()


async def create_user(db: AsyncSession, data: UserRegisterSchema) -> User:
    if await get_user_by_email(db, data.email):
        raise ValueError("An account with this email already exists.")

    user = User(
        email=data.email.lower(),
        full_name=data.full_name,
        hashed_password=hash_password(data.password),
    )
    db.add(user)
    await db.flush()
    await db.refresh(user)
    log.info("Registered user %s", user.id)
    return user


async def authenticate_user(db: AsyncSession, email: str, password: str) -> User:
    user = await get_user_by_email(db, email)
    if not user or not verify_password(password, user.hashed_password):
        raise ValueError("Invalid email or password.")
    if not user.is_active:
        raise ValueError("Account is deactivated. Contact support.")
    return user


async def resolve_access_token(db: AsyncSession, token: str) -> User:
    """Map a bearer token to an active user, or raise ValueError."""
    claims = decode_token(token, ACCESS)
    user = await db.get(User, int(claims["sub"]))
    if not user or not user.is_active:
        raise ValueError("User not found or deactivated.")
    return user
