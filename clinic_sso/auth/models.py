"""
Credential models - domain types and database tables for both account kinds.

Owners (account-holders) and vets (service-providers) share one workflow.
The only per-kind differences are the table a record lives in and which
identity fields are checked for duplicates.
"""
import enum
from dataclasses import dataclass
from typing import Optional, Tuple

from sqlalchemy import Column, Integer, String, DateTime, func

from ..database import Base


class AccountKind(str, enum.Enum):
    """
    The two actor variants that can hold credentials.
    """
    OWNER = "owner"
    VET = "vet"

    @property
    def identity_fields(self) -> Tuple[str, ...]:
        """Identity fields used to detect duplicates and look up credentials."""
        if self is AccountKind.OWNER:
            return ("email", "phone")
        return ("email",)

    @property
    def is_service_provider(self) -> bool:
        return self is AccountKind.VET


@dataclass(frozen=True)
class Identity:
    """
    Unique handle of an actor: an email address and/or a phone number.

    Emails are compared case-insensitively and stored lower-cased.
    """
    email: Optional[str] = None
    phone: Optional[str] = None

    def __post_init__(self):
        email = self.email.strip().lower() if self.email else None
        phone = self.phone.strip() if self.phone else None
        if not email and not phone:
            raise ValueError("identity requires an email or a phone number")
        object.__setattr__(self, "email", email or None)
        object.__setattr__(self, "phone", phone or None)

    def fields_for(self, kind: AccountKind) -> dict:
        """
        Project the identity onto the fields a given kind is matched on.

        Args:
            kind: Account kind being looked up

        Returns:
            Dict of field name to value, only for fields that are set
        """
        return {
            name: getattr(self, name)
            for name in kind.identity_fields
            if getattr(self, name) is not None
        }


@dataclass
class Account:
    """
    A registered owner or vet as seen by the credential engine.

    `id` is assigned by the store and is None until the record is inserted.
    """
    kind: AccountKind
    identity: Identity
    full_name: str
    password_hash: str
    id: Optional[int] = None


class Owner(Base):
    """
    Owner table - pet owners who book visits.

    Fields:
    - id: Primary key
    - full_name: Display name
    - email: Unique email address (optional if phone is set)
    - phone: Unique phone number (optional if email is set)
    - password_hash: Password digest, never the plaintext
    - created_at: When the account was registered
    """
    __tablename__ = "owners"

    id = Column(Integer, primary_key=True, index=True)
    full_name = Column(String, nullable=False)
    email = Column(String, unique=True, index=True, nullable=True)
    phone = Column(String, unique=True, index=True, nullable=True)
    password_hash = Column(String, nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    def __repr__(self):
        return f"<Owner(id={self.id}, email='{self.email}')>"


class Vet(Base):
    """
    Vet table - clinic staff who provide services.

    Fields:
    - id: Primary key
    - full_name: Display name
    - email: Unique email address
    - phone: Contact phone number (not used for login)
    - password_hash: Password digest, never the plaintext
    - created_at: When the account was registered
    """
    __tablename__ = "vets"

    id = Column(Integer, primary_key=True, index=True)
    full_name = Column(String, nullable=False)
    email = Column(String, unique=True, index=True, nullable=False)
    phone = Column(String, nullable=True)
    password_hash = Column(String, nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    def __repr__(self):
        return f"<Vet(id={self.id}, email='{self.email}')>"
