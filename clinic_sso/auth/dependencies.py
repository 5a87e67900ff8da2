"""
FastAPI dependencies for the credential routes.
"""
from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from ..config import settings
from ..core.security import build_password_hasher, build_token_signer
from ..database import get_db
from .exceptions import InvalidTokenException
from .repository import SqlCredentialStore
from .service import CredentialEngine

# Bearer scheme for the identity endpoint, errors are raised by us
bearer_scheme = HTTPBearer(auto_error=False)

# Signing key and salt are fixed for the process lifetime
password_hasher = build_password_hasher(settings)
token_signer = build_token_signer(settings)


def get_credential_engine(db: Session = Depends(get_db)) -> CredentialEngine:
    """
    Build a credential engine bound to the request's database session.

    Args:
        db: Database session

    Returns:
        CredentialEngine: Engine using the process-wide hasher and signer
    """
    return CredentialEngine(SqlCredentialStore(db), password_hasher, token_signer)


def get_current_account_id(
    credentials: HTTPAuthorizationCredentials = Depends(bearer_scheme),
    engine: CredentialEngine = Depends(get_credential_engine)
) -> int:
    """
    Verify the Bearer token and return the account id it carries.

    Raises:
        InvalidTokenException: If the header is missing or the token is invalid
    """
    if credentials is None or not credentials.credentials:
        raise InvalidTokenException("Authentication required")
    return engine.parse_token(credentials.credentials)
