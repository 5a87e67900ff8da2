"""
Credential store abstraction consumed by the credential engine.
"""
from __future__ import annotations

from typing import Optional, Protocol

from .models import Account, AccountKind, Identity


class CredentialStore(Protocol):
    """
    Persistence abstraction for owner and vet credentials.

    Implementations return None when no record matches and raise
    `StoreError` for any other failure. They should enforce identity
    uniqueness themselves and raise `DuplicateIdentityError` when an insert
    violates it.
    """

    def find_by_identity(self, identity: Identity, kind: AccountKind) -> Optional[Account]:
        """Return an account of `kind` sharing any identity field with `identity`."""

        ...

    def find_by_identity_and_digest(
        self,
        identity: Identity,
        digest: str,
        kind: AccountKind,
    ) -> Optional[Account]:
        """Return the account of `kind` matching both `identity` and `digest`."""

        ...

    def insert(self, account: Account) -> int:
        """Persist a new account and return its store-assigned id."""

        ...
