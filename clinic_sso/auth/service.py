"""
Credential engine - registration, login and token handling for owners and vets.

Both account kinds go through the same code path; `AccountKind` supplies the
per-kind differences.

Registration checks for an existing account before inserting. The check and
the insert are two separate store calls, so two concurrent registrations of
one identity can both pass the check. The store's unique constraints are the
real guarantee and a rejected insert is reported as a conflict.
"""
import logging
from typing import Optional

from .exceptions import (
    ConflictException,
    DuplicateIdentityError,
    InternalException,
    InvalidTokenException,
    StoreError,
    UnauthorizedException
)
from .models import Account, AccountKind, Identity
from .store import CredentialStore
from ..core.security import PasswordHasher, TokenClaims, TokenSigner, TokenSigningError, TokenValidationError

# Set up logging
logger = logging.getLogger(__name__)


class CredentialEngine:
    """
    Stateless credential workflow over a credential store.

    Args:
        store: Lookup/insert backend for owner and vet records
        hasher: Password digest scheme
        signer: Token signer holding the signing key and TTL
    """

    def __init__(self, store: CredentialStore, hasher: PasswordHasher, signer: TokenSigner):
        self.store = store
        self.hasher = hasher
        self.signer = signer

    def find_existing(self, identity: Identity, kind: AccountKind) -> Optional[Account]:
        """
        Look up an account of `kind` that already uses `identity`.

        Raises:
            StoreError: If the store lookup fails
        """
        return self.store.find_by_identity(identity, kind)

    def register(self, kind: AccountKind, identity: Identity, full_name: str, secret: str) -> int:
        """
        Create a new account after checking the identity is free.

        Args:
            kind: Owner or vet
            identity: Email and/or phone of the new account
            full_name: Display name
            secret: Plaintext password

        Returns:
            int: Store-assigned account id

        Raises:
            ConflictException: If the identity is already in use
            InternalException: If the store fails
            ValueError: If `identity` has none of the fields `kind` is identified
                by (a vet without an email). This is a caller precondition,
                request schemas reject such input before it gets here.
        """
        _require_identity_fields(identity, kind)
        logger.debug(f"Checking for existing {kind.value} before registration")

        try:
            existing = self.find_existing(identity, kind)
        except StoreError as e:
            logger.error(f"Failed to look up existing {kind.value}: {e}")
            raise InternalException(f"Failed to find {kind.value}") from e

        if existing is not None:
            logger.warning(f"Registration rejected: {kind.value} identity already in use")
            raise ConflictException(f"{kind.value.capitalize()} with same identity already exists")

        account = Account(
            kind=kind,
            identity=identity,
            full_name=full_name,
            password_hash=self.hasher.hash(secret)
        )
        try:
            account_id = self.store.insert(account)
        except DuplicateIdentityError as e:
            logger.warning(f"Registration rejected by store constraint: {e}")
            raise ConflictException(f"{kind.value.capitalize()} with same identity already exists") from e
        except StoreError as e:
            logger.error(f"Failed to create {kind.value}: {e}")
            raise InternalException(f"Failed to create {kind.value}") from e

        logger.info(f"Registered {kind.value} {account_id}")
        return account_id

    def authenticate(self, identity: Identity, secret: str, kind: AccountKind = AccountKind.OWNER) -> int:
        """
        Check credentials and return the matching account id.

        Raises:
            UnauthorizedException: If no account matches identity and password
            InternalException: If the store fails
        """
        return self._match_credentials(identity, secret, kind).id

    def sign_up(self, kind: AccountKind, identity: Identity, full_name: str, secret: str) -> str:
        """Register a new account and return a token for it."""
        account_id = self.register(kind, identity, full_name, secret)
        return self.issue_token(account_id, full_name, kind.is_service_provider)

    def sign_in(self, identity: Identity, secret: str, kind: AccountKind = AccountKind.OWNER) -> str:
        """Check credentials and return a token for the matched account."""
        account = self._match_credentials(identity, secret, kind)
        return self.issue_token(account.id, account.full_name, kind.is_service_provider)

    def issue_token(self, account_id: int, full_name: str, is_service_provider: bool) -> str:
        """
        Sign a token for an account.

        Raises:
            InternalException: If signing fails
        """
        try:
            return self.signer.issue(account_id, full_name, is_service_provider)
        except TokenSigningError as e:
            logger.error(f"Failed to create token: {e}")
            raise InternalException("Failed to create token") from e

    def parse_token(self, token: str) -> int:
        """
        Verify a token and return the account id it was issued for.

        Raises:
            InvalidTokenException: If the token cannot be trusted
        """
        return self.parse_claims(token).user_id

    def parse_claims(self, token: str) -> TokenClaims:
        """Verify a token and return all of its claims."""
        try:
            return self.signer.decode(token)
        except TokenValidationError as e:
            logger.debug(f"Token rejected: {e}")
            raise InvalidTokenException() from e

    def _match_credentials(self, identity: Identity, secret: str, kind: AccountKind) -> Account:
        if not identity.fields_for(kind):
            raise UnauthorizedException()

        digest = self.hasher.hash(secret)
        try:
            account = self.store.find_by_identity_and_digest(identity, digest, kind)
        except StoreError as e:
            logger.error(f"Failed to look up {kind.value} credentials: {e}")
            raise InternalException(f"Failed to find {kind.value}") from e

        if account is None:
            logger.info(f"Login rejected for {kind.value}")
            raise UnauthorizedException()
        return account


def _require_identity_fields(identity: Identity, kind: AccountKind):
    if not identity.fields_for(kind):
        raise ValueError(
            f"{kind.value} identity requires one of: {', '.join(kind.identity_fields)}"
        )
