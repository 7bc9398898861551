"""Etsy OAuth 2.0 (PKCE) helpers.

Three stateless operations: build the authorization URL, exchange an
authorization code for tokens, and refresh an access token. Tokens are
returned to the caller; nothing is persisted here.
"""
from __future__ import annotations

import base64
import hashlib
import logging
import secrets
from typing import Dict, Optional, Sequence
from urllib.parse import quote

import requests

from ..config import ETSY_CONNECT_URL, ETSY_OAUTH_BASE
from ..transport import HTTPTransport
from .models import EtsyErrorPayload, OAuthToken

logger = logging.getLogger(__name__)

# Scopes requested by the setup script when none are given
DEFAULT_SCOPES = ["listings_r", "listings_w", "listings_d", "shops_r", "shops_w", "transactions_r"]


def generate_code_verifier() -> str:
    """Return a random PKCE code verifier (43 URL-safe characters)."""
    return secrets.token_urlsafe(32)


def code_challenge_for(verifier: str) -> str:
    """Derive the S256 code challenge for ``verifier``."""
    digest = hashlib.sha256(verifier.encode("ascii")).digest()
    return base64.urlsafe_b64encode(digest).rstrip(b"=").decode("ascii")


def build_authorization_url(
    client_id: str,
    redirect_uri: str,
    scopes: Sequence[str],
    state: str,
    code_challenge: str,
    connect_url: str = ETSY_CONNECT_URL,
) -> str:
    """Build the URL the user opens to authorize the app.

    Args:
        client_id: Etsy API key (keystring)
        redirect_uri: Redirect URI registered for the app
        scopes: Requested scopes, sent space-separated
        state: Anti-CSRF value echoed back on the redirect
        code_challenge: S256 PKCE challenge

    Returns:
        Authorization URL. No network call is made.
    """
    scope = "%20".join(quote(s, safe="") for s in scopes)
    return (
        f"{connect_url}?response_type=code"
        f"&client_id={quote(client_id, safe='')}"
        f"&redirect_uri={quote(redirect_uri, safe='')}"
        f"&scope={scope}"
        f"&state={quote(state, safe='')}"
        f"&code_challenge={quote(code_challenge, safe='')}"
        f"&code_challenge_method=S256"
    )


def _request_token(form: Dict[str, str], oauth_base: str, session: Optional[requests.Session]) -> OAuthToken:
    """POST ``form`` to the token endpoint; a session opened here is closed here."""
    transport = HTTPTransport(oauth_base, session=session, error_parser=EtsyErrorPayload.parse)
    try:
        return transport.request_model(OAuthToken, "POST", "/token", form=form)
    finally:
        if session is None:
            transport.close()


def exchange_code(
    client_id: str,
    redirect_uri: str,
    code: str,
    code_verifier: str,
    oauth_base: str = ETSY_OAUTH_BASE,
    session: Optional[requests.Session] = None,
) -> OAuthToken:
    """Exchange an authorization code for access and refresh tokens.

    Args:
        client_id: Etsy API key (keystring)
        redirect_uri: Same redirect URI used for the authorization URL
        code: Authorization code from the redirect
        code_verifier: PKCE verifier the challenge was derived from

    Raises:
        APIError: Etsy rejected the exchange (e.g. ``invalid_grant``)
    """
    form = {
        "grant_type": "authorization_code",
        "client_id": client_id,
        "redirect_uri": redirect_uri,
        "code": code,
        "code_verifier": code_verifier,
    }
    token = _request_token(form, oauth_base, session)
    logger.info(f"Obtained access token (expires in {token.expires_in}s)")
    return token


def refresh_access_token(
    client_id: str,
    refresh_token: str,
    oauth_base: str = ETSY_OAUTH_BASE,
    session: Optional[requests.Session] = None,
) -> OAuthToken:
    """Get a new access token from a refresh token."""
    form = {
        "grant_type": "refresh_token",
        "client_id": client_id,
        "refresh_token": refresh_token,
    }
    token = _request_token(form, oauth_base, session)
    logger.info(f"Refreshed access token (expires in {token.expires_in}s)")
    return token


__all__ = [
    "DEFAULT_SCOPES",
    "generate_code_verifier",
    "code_challenge_for",
    "build_authorization_url",
    "exchange_code",
    "refresh_access_token",
]
