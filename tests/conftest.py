"""
Test configuration for the clinic SSO service.
"""
import os

# Required settings must exist before the application is imported
os.environ.setdefault("PASSWORD_SALT", "test-salt")
os.environ.setdefault("SECRET_KEY", "test-signing-key")
os.environ.setdefault("DATABASE_URL", "sqlite://")

from datetime import timedelta

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from clinic_sso.auth.repository import SqlCredentialStore
from clinic_sso.auth.service import CredentialEngine
from clinic_sso.core.security import PasswordHasher, TokenSigner
from clinic_sso.database import Base, get_db
from clinic_sso.main import app

# Test database URL
TEST_DATABASE_URL = "sqlite://"

# Create test database engine
engine = create_engine(
    TEST_DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)

# Create test session factory
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

TEST_SALT = "solyanovo"
TEST_SIGNING_KEY = "entering"


@pytest.fixture(scope="function")
def db():
    """
    Create a fresh database for each test.
    """
    # Create tables
    Base.metadata.create_all(bind=engine)

    # Create session
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()

    # Drop tables after test
    Base.metadata.drop_all(bind=engine)


@pytest.fixture
def hasher():
    return PasswordHasher(TEST_SALT)


@pytest.fixture
def signer():
    return TokenSigner(TEST_SIGNING_KEY, algorithm="HS256", ttl=timedelta(hours=1))


@pytest.fixture
def store(db):
    return SqlCredentialStore(db)


@pytest.fixture
def credential_engine(store, hasher, signer):
    """
    Credential engine over the test database.
    """
    return CredentialEngine(store, hasher, signer)


@pytest.fixture(scope="function")
def client(db):
    """
    Create a test client with a test database session.
    """
    def override_get_db():
        try:
            yield db
        finally:
            pass

    # Override the get_db dependency
    app.dependency_overrides[get_db] = override_get_db

    # Create test client
    with TestClient(app) as client:
        yield client

    # Remove dependency override
    app.dependency_overrides = {}
