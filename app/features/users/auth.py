"""
Bearer token verification.

Tokens are issued by the platform's auth service; this backend only checks the
signature and expiry and reads the caller's user id.
"""
import jwt
from fastapi import HTTPException, status

from app.core import config


USER_ID_CLAIMS = ("userId", "sub")


def verify_jwt_token(token: str) -> dict:
    """
    Verify a JWT and return its payload.

    Args:
        token: JWT token from Authorization header

    Returns:
        Decoded JWT payload

    Raises:
        HTTPException: If token is invalid or expired
    """
    try:
        payload = jwt.decode(
            token,
            config.JWT_SECRET,
            algorithms=[config.JWT_ALGORITHM],
            options={"verify_exp": True, "verify_sub": False},
        )
        return payload

    except jwt.ExpiredSignatureError:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Token has expired",
            headers={"WWW-Authenticate": "Bearer"},
        )
    except jwt.InvalidTokenError as e:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=f"Invalid token: {str(e)}",
            headers={"WWW-Authenticate": "Bearer"},
        )


def user_id_from_payload(payload: dict) -> int:
    """Extract the numeric user id from a decoded token payload."""
    for claim in USER_ID_CLAIMS:
        value = payload.get(claim)
        if value is None:
            continue
        try:
            return int(value)
        except (TypeError, ValueError):
            break

    raise HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Invalid token payload",
        headers={"WWW-Authenticate": "Bearer"},
    )
