# posp_updates/services/auth/guard.py
import logging
from typing import Optional

from fastapi import Depends, HTTPException, Request, status
from fastapi.security import HTTPBasic, HTTPBasicCredentials

from .credentials import CredentialVerifier

logger = logging.getLogger(__name__)

# HTTP Basic Auth for operator endpoints
security = HTTPBasic(auto_error=False)


def get_credential_verifier(request: Request) -> CredentialVerifier:
    """Dependency returning the verifier opened at startup"""
    return request.app.state.credential_verifier


def require_operator(
    request: Request,
    credentials: Optional[HTTPBasicCredentials] = Depends(security),
    verifier: CredentialVerifier = Depends(get_credential_verifier)
) -> str:
    """Operator authentication dependency, returns the username"""
    realm = request.app.state.settings.AUTH_REALM

    if credentials is None or not verifier.verify(credentials.username, credentials.password):
        client = request.client.host if request.client else None
        user = credentials.username if credentials else None
        logger.warning(f"Rejected credentials for {request.url.path}: user={user}, ip={client}")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid operator credentials",
            headers={"WWW-Authenticate": f'Basic realm="{realm}"'},
        )
    return credentials.username
