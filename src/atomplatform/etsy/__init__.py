"""Etsy API v3 integration.

This module handles:
- Typed access to shops, listings, receipts, shipping, taxonomy, reviews and payments
- OAuth 2.0 (PKCE) authorization URL, code exchange and token refresh
- Raw GET/POST/PUT/DELETE for endpoints without a typed method
"""

from .api_client import EtsyAPIClient
from .oauth import (
    build_authorization_url,
    code_challenge_for,
    exchange_code,
    generate_code_verifier,
    refresh_access_token,
)

__all__ = [
    "EtsyAPIClient",
    "build_authorization_url",
    "code_challenge_for",
    "exchange_code",
    "generate_code_verifier",
    "refresh_access_token",
]
