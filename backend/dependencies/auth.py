from typing import Optional

from fastapi import Header, HTTPException, status
from schemas.auth import TokenData
from services.auth_service import auth_service


async def get_current_user(
    authorization: Optional[str] = Header(None),
) -> TokenData:
    """Resolve the caller from an `Authorization: Bearer <token>` header"""
    if not authorization:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED, detail="No token"
        )

    scheme, _, token = authorization.partition(" ")
    if scheme != "Bearer" or not token.strip():
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid token format"
        )

    return auth_service.verify_token(token.strip())
