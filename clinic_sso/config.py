"""
Application configuration settings loaded from environment variables.
Uses pydantic_settings for validation and type conversion.
"""
from pydantic import field_validator
from pydantic_settings import BaseSettings

# Deterministic passlib schemes usable for re-hash-and-compare lookups
PASSWORD_SCHEMES = ("hex_md5", "hex_sha1", "hex_sha256", "hex_sha512")

# HMAC family accepted for token signing
HMAC_ALGORITHMS = ("HS256", "HS384", "HS512")


class Settings(BaseSettings):
    """
    Application settings class with environment variable validation.

    Attributes:
        database_url: SQLAlchemy connection string for the credential store
        password_salt: Process-wide salt mixed into every password digest
        password_scheme: passlib hex digest scheme used for passwords
        secret_key: Symmetric key used to sign tokens
        algorithm: HMAC algorithm used for signing (HS256, HS384 or HS512)
        access_token_expire_minutes: Token lifetime in minutes
        log_level: Root logging level
    """
    # Database settings
    database_url: str = "sqlite:///./clinic_sso.db"

    # Password settings
    password_salt: str
    password_scheme: str = "hex_sha1"

    # JWT settings
    secret_key: str
    algorithm: str = "HS256"
    access_token_expire_minutes: int = 60

    # Logging
    log_level: str = "INFO"

    class Config:
        """Configuration for environment variables loading"""
        env_file = ".env"
        case_sensitive = False

    @field_validator("algorithm")
    @classmethod
    def check_hmac_algorithm(cls, value: str) -> str:
        value = value.upper()
        if value not in HMAC_ALGORITHMS:
            raise ValueError(f"algorithm must be one of {HMAC_ALGORITHMS}, got {value}")
        return value

    @field_validator("password_scheme")
    @classmethod
    def check_password_scheme(cls, value: str) -> str:
        if value not in PASSWORD_SCHEMES:
            raise ValueError(f"password_scheme must be one of {PASSWORD_SCHEMES}, got {value}")
        return value

    @field_validator("password_salt", "secret_key")
    @classmethod
    def check_not_empty(cls, value: str) -> str:
        if not value:
            raise ValueError("must not be empty")
        return value


# Create settings instance
settings = Settings()
