# ============================================================================
# FILE: booking/api/dependencies.py
# Tenant resolution from JWT bearer tokens
# Tokens are issued by the identity service; this service only verifies them.
# ============================================================================
from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from jose import JWTError, jwt

from booking.config.settings import get_settings

jwt_security = HTTPBearer(
    scheme_name="JWT Bearer Token",
    description="Enter your JWT access token"
)


def verify_access_token(token: str) -> dict:
    """
    Verify and decode a JWT access token.

    Raises:
        HTTPException 401: If token is invalid or expired
    """
    settings = get_settings()
    try:
        payload = jwt.decode(
            token,
            settings.JWT_SECRET_KEY,
            algorithms=[settings.JWT_ALGORITHM]
        )
    except JWTError:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Could not validate credentials",
            headers={"WWW-Authenticate": "Bearer"},
        )

    token_type = payload.get("type")
    if token_type is not None and token_type != "access":
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid token type",
            headers={"WWW-Authenticate": "Bearer"},
        )

    return payload


async def get_current_business_id(
        credentials: HTTPAuthorizationCredentials = Depends(jwt_security)
) -> int:
    """
    Dependency returning the tenant (business) id carried by the access token.

    Usage in routes:
        @router.get("/summary")
        async def summary(business_id: int = Depends(get_current_business_id)):
            ...

    Raises:
        HTTPException 401: If the token is invalid
        HTTPException 403: If the token is not bound to a business
    """
    payload = verify_access_token(credentials.credentials)

    business_id = payload.get("business_id")
    if business_id is None:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="User not associated with a business"
        )

    try:
        return int(business_id)
    except (TypeError, ValueError):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid business ID in token",
            headers={"WWW-Authenticate": "Bearer"},
        )
