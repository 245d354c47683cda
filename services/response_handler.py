from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from fastapi import Depends, status, HTTPException

# Project Imports
from .jwt_handler import verify_token


security = HTTPBearer()


def verify_bearer_token(
    token: HTTPAuthorizationCredentials = Depends(security),
):
    actual_token = token.credentials

    payload = verify_token(actual_token)

    if not payload:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN, detail="Invalid token"
        )

    return payload
