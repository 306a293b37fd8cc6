import logging
from fastapi import HTTPException, Depends
from sqlalchemy.orm import Session
from uuid import UUID, uuid4
from datetime import datetime, timedelta, timezone
from jose import jwt, JWTError
from passlib.context import CryptContext
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from typing import Optional

from moodjournal.core.config import get_settings
from moodjournal.core.database import get_db
from moodjournal.auth.models import User
from moodjournal.auth.schemas import UserCreate, LoginRequest, UserOut, TokenResponse

# Initialize logger and security tools
logger = logging.getLogger(__name__)
pwd = CryptContext(schemes=["bcrypt"], deprecated="auto")
bearer = HTTPBearer()
optional_bearer = HTTPBearer(auto_error=False)


def hash_password(password: str) -> str:
    """
    Hashes a plaintext password using bcrypt.

    Args:
        password (str): Raw password input.

    Returns:
        str: Bcrypt-hashed password.
    """
    return pwd.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    return pwd.verify(plain_password, hashed_password)


def _signing_key() -> str:
    secret_key = get_settings().secret_key
    if not secret_key:
        logger.error("SECRET_KEY is not configured")
        raise HTTPException(status_code=500, detail="Authentication is not configured")
    return secret_key


def create_token(user_id: UUID, expires_delta: Optional[timedelta] = None) -> str:
    settings = get_settings()
    now = datetime.now(timezone.utc)
    if not expires_delta:
        expires_delta = timedelta(minutes=settings.access_token_expire_minutes)
    payload = {
        "sub": str(user_id),
        "iat": now.timestamp(),
        "exp": now + expires_delta,
    }
    return jwt.encode(payload, _signing_key(), algorithm=settings.algorithm)


def decode_token(token: str) -> dict:
    """
    Decodes and validates a JWT token.

    Args:
        token (str): JWT string.

    Returns:
        dict: Decoded payload.

    Raises:
        HTTPException: If token is invalid or expired.
    """
    try:
        return jwt.decode(token, _signing_key(), algorithms=[get_settings().algorithm])
    except JWTError:
        raise HTTPException(status_code=401, detail="Invalid or expired authentication token")


def _user_id_from_token(token: str) -> UUID:
    payload = decode_token(token)
    user_id = payload.get("sub")
    if not user_id:
        raise HTTPException(status_code=401, detail="Token missing subject field")
    try:
        return UUID(user_id)
    except ValueError:
        raise HTTPException(status_code=401, detail="Invalid user ID in token")


def get_current_user_id(
    creds: HTTPAuthorizationCredentials = Depends(bearer),
) -> UUID:
    """
    Extracts the user ID from the JWT token.

    Raises:
        HTTPException: If token is invalid or missing required claims.
    """
    return _user_id_from_token(creds.credentials)


def get_optional_user_id(
    creds: Optional[HTTPAuthorizationCredentials] = Depends(optional_bearer),
) -> Optional[UUID]:
    """Same as `get_current_user_id`, but anonymous callers get None."""
    if creds is None:
        return None
    return _user_id_from_token(creds.credentials)


def get_current_user(
    user_id: UUID = Depends(get_current_user_id),
    db: Session = Depends(get_db),
) -> User:
    """
    Fetches the full user object for the bearer token.

    Raises:
        HTTPException: If user not found.
    """
    user = db.query(User).filter(User.id == user_id).first()
    if not user:
        raise HTTPException(status_code=401, detail="User not found")
    return user


def handle_login(req: LoginRequest, db: Session) -> TokenResponse:
    """
    Handles login via email and password.

    Args:
        req (LoginRequest): Email and password credentials.
        db (Session): DB session.

    Returns:
        TokenResponse: JWT token and user object.
    """
    email = req.email.lower().strip()
    user = db.query(User).filter(User.email == email).first()
    if not user or not verify_password(req.password, user.password):
        raise HTTPException(status_code=401, detail="Invalid credentials")

    logger.info(f"Login for user {user.id}")
    return TokenResponse(access_token=create_token(user.id), user=UserOut.model_validate(user))


def handle_signup(req: UserCreate, db: Session) -> TokenResponse:
    """
    Registers a user with email and password. The row doubles as the
    profile, so the display name is stored right away.

    Returns:
        TokenResponse: JWT token and the created user.
    """
    email = req.email.lower().strip()
    if db.query(User).filter(User.email == email).first():
        raise HTTPException(status_code=400, detail="Email already exists")

    user = User(
        id=uuid4(), email=email, name=(req.name or "").strip() or None,
        password=hash_password(req.password),
    )
    db.add(user); db.commit(); db.refresh(user)

    logger.info(f"Created user {user.id}")
    return TokenResponse(access_token=create_token(user.id), user=UserOut.model_validate(user))
