"""
Credential module for the clinic SSO service.

This module provides:
- Duplicate-registration checks for owners and vets
- Password digests for storage and login comparison
- Signed JWT issuance and verification
"""
