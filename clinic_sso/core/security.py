"""
Core security utilities for password digests and signed tokens.
"""
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional
import secrets
import logging

from jose import jwt, JWTError, ExpiredSignatureError
from passlib.context import CryptContext

from ..config import Settings

# Set up logging
logger = logging.getLogger(__name__)

# Claim names shared with the services that consume our tokens
USER_ID_CLAIM = "UserId"
FULL_NAME_CLAIM = "FullName"
IS_VET_CLAIM = "IsVet"


class TokenValidationError(Exception):
    """Raised when a token cannot be trusted."""


class TokenSigningError(Exception):
    """Raised when a token cannot be signed."""


class PasswordHasher:
    """
    Deterministic password digests for storage and login lookups.

    The digest is the hex-encoded salt followed by the hex digest of the
    secret, the layout existing stored credentials were written with. The
    same secret always yields the same digest so login can look an account up
    by identity and digest in a single query.

    This is a fast, unsalted-per-record scheme: identical passwords produce
    identical digests across accounts.
    """

    def __init__(self, salt: str, scheme: str = "hex_sha1"):
        if not salt:
            raise ValueError("password salt must not be empty")
        self._prefix = salt.encode("utf-8").hex()
        self._context = CryptContext(schemes=[scheme])
        self.scheme = scheme

    def hash(self, secret: str) -> str:
        """
        Compute the storage digest of a plaintext secret.

        Args:
            secret: Plaintext password

        Returns:
            str: Fixed-length lowercase hex digest
        """
        return self._prefix + self._context.hash(secret)

    def verify(self, secret: str, digest: str) -> bool:
        """
        Re-hash `secret` and compare it with a stored digest in constant time.
        """
        return secrets.compare_digest(self.hash(secret), digest)


@dataclass(frozen=True)
class TokenClaims:
    """
    Claims carried by an issued token.
    """
    user_id: int
    issued_at: datetime
    expires_at: datetime
    full_name: Optional[str] = None
    is_service_provider: bool = False

    def to_payload(self) -> Dict[str, Any]:
        return {
            USER_ID_CLAIM: self.user_id,
            "iat": int(self.issued_at.timestamp()),
            "exp": int(self.expires_at.timestamp()),
            FULL_NAME_CLAIM: self.full_name,
            IS_VET_CLAIM: self.is_service_provider,
        }

    @classmethod
    def from_payload(cls, payload: Dict[str, Any]) -> "TokenClaims":
        """
        Build claims from a verified payload.

        Raises:
            TokenValidationError: If the user id is missing or not an integer
        """
        user_id = payload.get(USER_ID_CLAIM)
        # bool is an int subclass, reject it explicitly
        if isinstance(user_id, bool) or not isinstance(user_id, int):
            raise TokenValidationError("token claims carry no integer user id")

        full_name = payload.get(FULL_NAME_CLAIM)
        return cls(
            user_id=user_id,
            issued_at=datetime.fromtimestamp(payload["iat"], tz=timezone.utc),
            expires_at=datetime.fromtimestamp(payload["exp"], tz=timezone.utc),
            full_name=full_name if isinstance(full_name, str) else None,
            is_service_provider=payload.get(IS_VET_CLAIM) is True,
        )


class TokenSigner:
    """
    Issues and verifies HMAC-signed JWTs.

    Args:
        secret_key: Symmetric signing key
        algorithm: One of HS256, HS384, HS512
        ttl: Lifetime of issued tokens
    """

    def __init__(self, secret_key: str, algorithm: str = "HS256", ttl: timedelta = timedelta(hours=1)):
        if not secret_key:
            raise ValueError("signing key must not be empty")
        if not algorithm.upper().startswith("HS"):
            raise ValueError(f"signing algorithm must be in the HMAC family, got {algorithm}")
        self._secret_key = secret_key
        self.algorithm = algorithm.upper()
        self.ttl = ttl

    def issue(
        self,
        user_id: int,
        full_name: Optional[str] = None,
        is_service_provider: bool = False,
        now: Optional[datetime] = None
    ) -> str:
        """
        Create a signed token for an account.

        Args:
            user_id: Store-assigned account id
            full_name: Display name, informational only
            is_service_provider: Whether the account is a vet
            now: Issuance time, defaults to the current UTC time

        Returns:
            str: Encoded JWT
        """
        issued_at = (now or datetime.now(timezone.utc)).replace(microsecond=0)
        claims = TokenClaims(
            user_id=user_id,
            issued_at=issued_at,
            expires_at=issued_at + self.ttl,
            full_name=full_name,
            is_service_provider=is_service_provider,
        )
        try:
            return jwt.encode(claims.to_payload(), self._secret_key, algorithm=self.algorithm)
        except JWTError as e:
            raise TokenSigningError(f"failed to sign token: {e}") from e

    def decode(self, token: str) -> TokenClaims:
        """
        Verify a token and return its claims.

        Args:
            token: Encoded JWT

        Returns:
            TokenClaims: Verified claims

        Raises:
            TokenValidationError: If the token is malformed, signed with an
                unexpected method or key, expired, or lacks required claims
        """
        try:
            header = jwt.get_unverified_header(token)
        except JWTError as e:
            raise TokenValidationError(f"malformed token: {e}") from e

        algorithm = str(header.get("alg", ""))
        if not algorithm.upper().startswith("HS"):
            raise TokenValidationError(f"invalid signing method: {algorithm}")

        try:
            payload = jwt.decode(
                token,
                self._secret_key,
                algorithms=[self.algorithm],
                options={"require_exp": True, "require_iat": True}
            )
        except ExpiredSignatureError as e:
            raise TokenValidationError("token has expired") from e
        except JWTError as e:
            raise TokenValidationError(f"invalid token: {e}") from e

        return TokenClaims.from_payload(payload)


def build_password_hasher(settings: Settings) -> PasswordHasher:
    return PasswordHasher(settings.password_salt, settings.password_scheme)


def build_token_signer(settings: Settings) -> TokenSigner:
    return TokenSigner(
        settings.secret_key,
        algorithm=settings.algorithm,
        ttl=timedelta(minutes=settings.access_token_expire_minutes)
    )
