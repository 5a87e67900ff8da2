"""
Credential routes: owner/vet sign-up, sign-in and token identity.
"""
from fastapi import APIRouter, Depends, status
import logging

from .dependencies import get_credential_engine, get_current_account_id
from .models import AccountKind
from .schemas import (
    OwnerSignUp, VetSignUp, SignIn, TokenResponse, IdentityResponse, ErrorResponse
)
from .service import CredentialEngine

# Set up logging
logger = logging.getLogger(__name__)

# Create API router
router = APIRouter(prefix="/auth/v1", tags=["Authentication"])


@router.post(
    "/sign-up/owner",
    response_model=TokenResponse,
    responses={409: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
    summary="Sign up a new owner"
)
def sign_up_owner(
    payload: OwnerSignUp,
    engine: CredentialEngine = Depends(get_credential_engine)
):
    """
    Sign up a new pet owner.

    Args:
        payload: Owner details, email and/or phone
        engine: Credential engine

    Returns:
        TokenResponse: Signed token for the new owner

    Raises:
        ConflictException: If an owner with the same email or phone exists
    """
    logger.debug("Creating owner")
    token = engine.sign_up(AccountKind.OWNER, payload.to_identity(), payload.full_name, payload.password)
    logger.info("Owner successfully signed up")
    return TokenResponse(token=token)


@router.post(
    "/sign-up/vet",
    response_model=TokenResponse,
    responses={409: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
    summary="Sign up a new vet"
)
def sign_up_vet(
    payload: VetSignUp,
    engine: CredentialEngine = Depends(get_credential_engine)
):
    """
    Sign up a new veterinarian.

    Raises:
        ConflictException: If a vet with the same email exists
    """
    logger.debug("Creating vet")
    token = engine.sign_up(AccountKind.VET, payload.to_identity(), payload.full_name, payload.password)
    logger.info("Vet successfully signed up")
    return TokenResponse(token=token)


@router.post(
    "/sign-in",
    response_model=TokenResponse,
    responses={401: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
    summary="Sign in as an owner or vet"
)
def sign_in(
    payload: SignIn,
    engine: CredentialEngine = Depends(get_credential_engine)
):
    """
    Exchange credentials for a token.

    Unknown identities and wrong passwords get the same 401 response.
    """
    kind = AccountKind.VET if payload.is_vet else AccountKind.OWNER
    token = engine.sign_in(payload.to_identity(), payload.password, kind)
    logger.info(f"{kind.value.capitalize()} successfully signed in")
    return TokenResponse(token=token)


@router.get(
    "/identity",
    response_model=IdentityResponse,
    responses={401: {"model": ErrorResponse}},
    summary="Resolve a Bearer token to an account id"
)
def identity(account_id: int = Depends(get_current_account_id)):
    return IdentityResponse(user_id=account_id)
