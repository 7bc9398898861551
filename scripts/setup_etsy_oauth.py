"""Etsy OAuth 2.0 setup script.

This script helps users configure Etsy API access by:
1. Collecting the app's API key (keystring)
2. Walking through the PKCE authorization flow
3. Saving the resulting tokens to the .env file

Run this script once before using the ``atomplatform etsy`` commands that
need an access token.
"""

import secrets
import sys
import webbrowser
from pathlib import Path
from urllib.parse import parse_qs, urlparse

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root / "src"))

from atomplatform.etsy import EtsyAPIClient  # noqa: E402
from atomplatform.etsy.oauth import (  # noqa: E402
    DEFAULT_SCOPES,
    build_authorization_url,
    code_challenge_for,
    exchange_code,
    generate_code_verifier,
)
from atomplatform.transport import PlatformAPIError  # noqa: E402

REDIRECT_URI = "http://localhost:8000/callback"

print("=" * 70)
print("  Etsy OAuth 2.0 Setup")
print("=" * 70)
print()

# Step 1: Get API Key
print("STEP 1: Get your Etsy API Key")
print("-" * 70)
print()
print("1. Go to: https://www.etsy.com/developers/your-apps")
print("2. Create a new app (or use existing)")
print("3. Copy your API Key (keystring)")
print()

api_key = input("Enter your Etsy API Key: ").strip()

if not api_key:
    print("Error: API Key is required")
    sys.exit(1)

print()

# Step 2: Configure redirect URI
print("STEP 2: Configure OAuth Redirect URI")
print("-" * 70)
print()
print("In your Etsy App settings, add this redirect URI:")
print(f"  {REDIRECT_URI}")
print()
input("Press Enter when done...")
print()

# Step 3: Authorization URL
print("STEP 3: Authorize the App")
print("-" * 70)
print()

code_verifier = generate_code_verifier()
state = secrets.token_urlsafe(16)
auth_url = build_authorization_url(
    client_id=api_key,
    redirect_uri=REDIRECT_URI,
    scopes=DEFAULT_SCOPES,
    state=state,
    code_challenge=code_challenge_for(code_verifier),
)

print("Opening browser for authorization...")
webbrowser.open(auth_url)

print("If browser didn't open, go to:")
print(auth_url)
print()
print("After authorizing, you'll be redirected to:")
print(f"  {REDIRECT_URI}?code=...&state=...")
print()
print("The page will show an error (localhost not running), but that's OK!")
print("Copy the FULL URL from your browser address bar.")
print()

callback_url = input("Paste the callback URL here: ").strip()

if not callback_url:
    print("Error: Callback URL is required")
    sys.exit(1)

params = parse_qs(urlparse(callback_url).query)

if "code" not in params:
    print("Error: No authorization code found in URL")
    print("Make sure you copied the full URL including '?code=...'")
    sys.exit(1)

if params.get("state", [""])[0] != state:
    print("Error: State mismatch, the callback does not belong to this authorization request")
    sys.exit(1)

auth_code = params["code"][0]
print()
print(f"Got authorization code: {auth_code[:20]}...")
print()

# Step 4: Exchange code for tokens
print("STEP 4: Getting Access Token")
print("-" * 70)
print()
print("Exchanging authorization code for access token...")

try:
    token = exchange_code(
        client_id=api_key,
        redirect_uri=REDIRECT_URI,
        code=auth_code,
        code_verifier=code_verifier,
    )
except PlatformAPIError as e:
    print(f"Error: Failed to exchange code for token: {e}")
    sys.exit(1)

print(f"Got access token (expires in {token.expires_in}s)")
print("Got refresh token")
print()

shop_id = None
try:
    with EtsyAPIClient(api_key, access_token=token.access_token) as client:
        me = client.get_me()
        shop_id = client.get_shop_by_owner_user_id(me.user_id).shop_id
    print(f"Found shop {shop_id}")
except PlatformAPIError as e:
    print(f"Warning: Could not look up your shop ({e})")
print()

# Step 5: Save to .env
print("STEP 5: Saving to .env file")
print("-" * 70)
print()

env_path = project_root / ".env"

env_lines = []
if env_path.exists():
    with open(env_path, "r", encoding="utf-8") as f:
        env_lines = f.readlines()

# Remove existing Etsy variables
env_lines = [
    line for line in env_lines
    if not any(line.startswith(key) for key in [
        "ETSY_API_KEY=",
        "ETSY_SHOP_ID=",
        "ETSY_ACCESS_TOKEN=",
        "ETSY_REFRESH_TOKEN=",
    ])
]

env_lines.append("\n# Etsy API Configuration\n")
env_lines.append(f"ETSY_API_KEY={api_key}\n")
if shop_id is not None:
    env_lines.append(f"ETSY_SHOP_ID={shop_id}\n")
env_lines.append(f"ETSY_ACCESS_TOKEN={token.access_token}\n")
env_lines.append(f"ETSY_REFRESH_TOKEN={token.refresh_token}\n")

with open(env_path, "w", encoding="utf-8") as f:
    f.writelines(env_lines)

print(f"Saved credentials to {env_path}")
print()

print("=" * 70)
print("  Etsy OAuth Setup Complete!")
print("=" * 70)
print()
print("Try it out:")
print()
print("  atomplatform etsy me")
if shop_id is not None:
    print(f"  atomplatform etsy listings --shop-id {shop_id}")
print()
print("Note: Access tokens expire after 1 hour. Get a new one with:")
print()
print("  atomplatform etsy refresh-token")
print()
print("=" * 70)
