# ==============================================================================
# SECURITY MODULE - Token Issuance & Password Hashing
# ==============================================================================
# JWT access tokens carrying the account identifier and role
# Argon2id password hashing for account credentials
# ==============================================================================

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional

from argon2 import PasswordHasher
from argon2.exceptions import InvalidHash, VerificationError, VerifyMismatchError
from jose import ExpiredSignatureError, JWTError, jwt

from thinklock.core.settings import settings
from thinklock.core.exceptions import InvalidTokenError, TokenExpiredError


# ==============================================================================
# PASSWORD HASHING
# ==============================================================================

# Argon2id with library defaults (OWASP parameters)
_password_hasher = PasswordHasher()


def hash_password(password: str) -> str:
    """
    Hash a plaintext password using Argon2id.

    Args:
        password: Plaintext password to hash

    Returns:
        Hashed password string safe for storage

    Example:
        >>> hashed = hash_password("my_secure_password")
        >>> verify_password("my_secure_password", hashed)
        True
    """
    return _password_hasher.hash(password)


def verify_password(plain_password: str, hashed_password: Optional[str]) -> bool:
    """
    Verify a plaintext password against its hash.

    Args:
        plain_password: Plaintext password to verify
        hashed_password: Stored password hash (may be missing)

    Returns:
        True if password matches, False otherwise
    """
    if not hashed_password:
        return False
    try:
        return _password_hasher.verify(hashed_password, plain_password)
    except (VerifyMismatchError, VerificationError, InvalidHash):
        return False


# ==============================================================================
# JWT TOKEN MANAGEMENT
# ==============================================================================

class TokenType:
    """Token type constants."""
    ACCESS = "access"


def create_access_token(
    subject: str,
    role: str,
    expires_delta: Optional[timedelta] = None,
) -> str:
    """
    Create a signed JWT access token.

    The token carries the account identifier as ``sub`` and the role
    the account held at issuance. Expiry is the only way a token stops
    being accepted.

    Args:
        subject: Account identifier
        role: Account role at issuance
        expires_delta: Custom lifetime (default from settings)

    Returns:
        Encoded JWT access token string

    Example:
        >>> token = create_access_token("student-1", "student")
        >>> decode_token(token)["sub"]
        'student-1'
    """
    now = datetime.now(timezone.utc)
    if expires_delta is None:
        expires_delta = timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)

    to_encode: Dict[str, Any] = {
        "sub": str(subject),
        "role": role,
        "iat": now,
        "exp": now + expires_delta,
        "type": TokenType.ACCESS,
    }

    return jwt.encode(
        to_encode,
        settings.SECRET_KEY,
        algorithm=settings.ALGORITHM,
    )


def decode_token(token: str) -> Dict[str, Any]:
    """
    Decode and validate a JWT access token.

    Verifies the signature, the expiration time and the token type.

    Args:
        token: JWT token string to decode

    Returns:
        Dictionary containing token payload

    Raises:
        TokenExpiredError: If token has expired
        InvalidTokenError: If token is invalid, malformed or not an access token
    """
    try:
        payload = jwt.decode(
            token,
            settings.SECRET_KEY,
            algorithms=[settings.ALGORITHM],
        )
    except ExpiredSignatureError:
        raise TokenExpiredError()
    except JWTError as e:
        raise InvalidTokenError(message=f"Invalid token: {str(e)}")

    if payload.get("type") != TokenType.ACCESS:
        raise InvalidTokenError(message="Invalid token type: expected access token")
    if not payload.get("sub"):
        raise InvalidTokenError(message="Token has no subject")

    return payload
