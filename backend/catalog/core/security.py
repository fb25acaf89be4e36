"""Security utilities - JWT access tokens, password hashing, refresh token values"""

from datetime import datetime, timedelta, timezone
from functools import lru_cache
from typing import Optional, Dict, Any
from jose import ExpiredSignatureError, JWTError, jwt
from pydantic import SecretStr
import bcrypt
from catalog.config import settings
from catalog.core.exceptions import TokenExpiredError, TokenInvalidError
import secrets
import uuid

# bcrypt only looks at the first 72 bytes of its input
BCRYPT_MAX_BYTES = 72

ACCESS_TOKEN_TYPE = "access"


def _password_bytes(password: str) -> bytes:
    return password.encode('utf-8')[:BCRYPT_MAX_BYTES]


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """
    Verify a password against its hash

    Args:
        plain_password: Plain text password
        hashed_password: Hashed password

    Returns:
        bool: True if password matches
    """
    try:
        return bcrypt.checkpw(
            _password_bytes(plain_password),
            hashed_password.encode('utf-8')
        )
    except (ValueError, TypeError):
        return False


def get_password_hash(password: str, rounds: Optional[int] = None) -> str:
    """
    Hash a password using bcrypt

    Args:
        password: Plain text password
        rounds: bcrypt cost, defaults to BCRYPT_ROUNDS

    Returns:
        str: Hashed password
    """
    return bcrypt.hashpw(
        _password_bytes(password),
        bcrypt.gensalt(rounds=rounds or settings.BCRYPT_ROUNDS)
    ).decode('utf-8')


@lru_cache()
def dummy_password_hash() -> str:
    """Hash compared against when the username is unknown, so both failure paths cost the same."""
    return get_password_hash(secrets.token_urlsafe(16))


def generate_refresh_token_value() -> str:
    """Opaque refresh token: a random UUIDv4 (122 random bits)."""
    return str(uuid.uuid4())


class AccessTokenCodec:
    """
    Mint and validate short-lived signed access tokens.

    The codec is configured once with a secret, an HMAC algorithm and a
    default lifetime, and never touches storage: validation is signature
    plus expiry only.
    """

    __slots__ = ("_secret", "_algorithm", "_ttl")

    def __init__(self, secret: SecretStr, algorithm: str = "HS256", ttl: timedelta = timedelta(hours=1)):
        if not secret.get_secret_value():
            raise ValueError("Access token secret must not be empty")
        self._secret = secret
        self._algorithm = algorithm
        self._ttl = ttl

    @classmethod
    def from_settings(cls, config=settings) -> "AccessTokenCodec":
        return cls(config.SECRET_KEY, config.ALGORITHM, config.access_token_ttl)

    def __repr__(self) -> str:
        return f"AccessTokenCodec(algorithm={self._algorithm!r}, ttl={self._ttl!r})"

    @property
    def algorithm(self) -> str:
        return self._algorithm

    @property
    def expires_in(self) -> int:
        """Default lifetime in seconds"""
        return int(self._ttl.total_seconds())

    def mint(self, subject: str, ttl: Optional[timedelta] = None) -> str:
        """
        Create a signed access token

        Args:
            subject: Username the token speaks for
            ttl: Lifetime, defaults to the configured access-token lifetime

        Returns:
            str: Encoded JWT
        """
        now = datetime.now(timezone.utc)
        claims: Dict[str, Any] = {
            "sub": subject,
            "typ": ACCESS_TOKEN_TYPE,
            "iat": now,
            "exp": now + (ttl if ttl is not None else self._ttl),
            "jti": secrets.token_urlsafe(16),
        }
        return jwt.encode(claims, self._secret.get_secret_value(), algorithm=self._algorithm)

    def validate(self, token: str) -> str:
        """
        Verify signature and expiry and return the subject

        Raises:
            TokenExpiredError: signature valid, expiry passed
            TokenInvalidError: malformed, forged, or not an access token
        """
        try:
            payload = jwt.decode(
                token,
                self._secret.get_secret_value(),
                algorithms=[self._algorithm],
            )
        except ExpiredSignatureError:
            raise TokenExpiredError("Access token has expired")
        except JWTError:
            raise TokenInvalidError("Invalid access token")

        if payload.get("typ") != ACCESS_TOKEN_TYPE:
            raise TokenInvalidError("Token is not an access token")

        subject = payload.get("sub")
        if not isinstance(subject, str) or not subject:
            raise TokenInvalidError("Invalid token payload")
        return subject


access_token_codec = AccessTokenCodec.from_settings(settings)
