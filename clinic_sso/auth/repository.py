"""
SQLAlchemy implementation of the credential store.
"""
import logging
from typing import Optional

from sqlalchemy import and_, func, or_
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from .exceptions import DuplicateIdentityError, StoreError
from .models import Account, AccountKind, Identity, Owner, Vet

# Set up logging
logger = logging.getLogger(__name__)

TABLES = {
    AccountKind.OWNER: Owner,
    AccountKind.VET: Vet,
}


class SqlCredentialStore:
    """
    Credential store backed by the `owners` and `vets` tables.

    Unique columns on the tables are what finally guarantees one account per
    identity; the engine's pre-check only avoids the common case.
    """

    def __init__(self, db: Session):
        self.db = db

    def find_by_identity(self, identity: Identity, kind: AccountKind) -> Optional[Account]:
        return self._first(kind, identity, match_all=False)

    def find_by_identity_and_digest(
        self,
        identity: Identity,
        digest: str,
        kind: AccountKind
    ) -> Optional[Account]:
        return self._first(kind, identity, digest=digest, match_all=True)

    def insert(self, account: Account) -> int:
        """
        Insert a new owner or vet row.

        Args:
            account: Account to persist, `id` is ignored

        Returns:
            int: Id assigned by the database

        Raises:
            DuplicateIdentityError: If a unique constraint rejected the row
            StoreError: On any other database failure
        """
        table = TABLES[account.kind]
        row = table(
            full_name=account.full_name,
            email=account.identity.email,
            phone=account.identity.phone,
            password_hash=account.password_hash
        )
        try:
            self.db.add(row)
            self.db.flush()
            account_id = row.id
            self.db.commit()
        except IntegrityError as e:
            self.db.rollback()
            raise DuplicateIdentityError(f"{account.kind.value} identity already stored") from e
        except SQLAlchemyError as e:
            self.db.rollback()
            raise StoreError(f"failed to insert {account.kind.value}: {e}") from e

        logger.debug(f"Inserted {account.kind.value} row {account_id}")
        return account_id

    def _first(
        self,
        kind: AccountKind,
        identity: Identity,
        digest: Optional[str] = None,
        match_all: bool = False
    ) -> Optional[Account]:
        """
        Return the first row matching the identity fields of `kind`.

        Duplicate checks match any supplied field. Logins match every supplied
        field, so an identity mixing two accounts' fields matches neither.
        """
        table = TABLES[kind]
        fields = identity.fields_for(kind)
        if not fields:
            return None

        conditions = [_field_equals(table, name, value) for name, value in fields.items()]
        combine = and_ if match_all else or_
        query = self.db.query(table).filter(combine(*conditions))
        if digest is not None:
            query = query.filter(table.password_hash == digest)

        try:
            row = query.first()
        except SQLAlchemyError as e:
            raise StoreError(f"failed to look up {kind.value}: {e}") from e

        if row is None:
            return None
        return _to_account(kind, row)


def _field_equals(table, name: str, value: str):
    column = getattr(table, name)
    # Stored emails may predate lower-casing of new identities
    if name == "email":
        return func.lower(column) == value
    return column == value


def _to_account(kind: AccountKind, row) -> Account:
    return Account(
        kind=kind,
        identity=Identity(email=row.email, phone=row.phone),
        full_name=row.full_name,
        password_hash=row.password_hash,
        id=row.id
    )
