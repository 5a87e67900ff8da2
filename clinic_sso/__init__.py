"""
Clinic SSO service.

Issues and validates identity tokens for pet owners and veterinarians.
"""
