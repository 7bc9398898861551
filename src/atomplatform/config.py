"""Credential and endpoint configuration for the API clients."""
from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

ETSY_API_BASE = "https://api.etsy.com/v3/application"
ETSY_OAUTH_BASE = "https://api.etsy.com/v3/public/oauth"
ETSY_CONNECT_URL = "https://www.etsy.com/oauth/connect"
PRINTFUL_API_BASE = "https://api.printful.com"

# Environment variable pointing at an optional endpoints YAML file
CONFIG_ENV_VAR = "ATOMPLATFORM_CONFIG"


class MissingCredentialError(RuntimeError):
    """A required credential is not present in the environment."""
    pass


@dataclass
class EndpointConfig:
    """Base URLs for every remote service.

    Defaults point at production; tests and staging point them elsewhere.
    """

    etsy_api_base: str = ETSY_API_BASE
    etsy_oauth_base: str = ETSY_OAUTH_BASE
    etsy_connect_url: str = ETSY_CONNECT_URL
    printful_api_base: str = PRINTFUL_API_BASE

    @classmethod
    def load(cls, path: Path) -> "EndpointConfig":
        """Load endpoint overrides from YAML.

        Expected layout::

            etsy:
              api_base: https://...
              oauth_base: https://...
              connect_url: https://...
            printful:
              api_base: https://...

        Args:
            path: Path to the YAML file.

        Raises:
            FileNotFoundError: If the file does not exist.
            ValueError: If a section is not a mapping.
        """

        if not path.exists():
            raise FileNotFoundError(f"Config file not found: {path}")

        with path.open("r", encoding="utf-8") as fh:
            raw = yaml.safe_load(fh) or {}

        etsy = _section(raw, "etsy")
        printful = _section(raw, "printful")
        defaults = cls()

        return cls(
            etsy_api_base=etsy.get("api_base", defaults.etsy_api_base),
            etsy_oauth_base=etsy.get("oauth_base", defaults.etsy_oauth_base),
            etsy_connect_url=etsy.get("connect_url", defaults.etsy_connect_url),
            printful_api_base=printful.get("api_base", defaults.printful_api_base),
        )

    @classmethod
    def resolve(cls, path: Optional[Path] = None) -> "EndpointConfig":
        """Load from ``path``, else from ``$ATOMPLATFORM_CONFIG``, else defaults."""

        if path is None:
            env_path = os.getenv(CONFIG_ENV_VAR)
            if not env_path:
                return cls()
            path = Path(env_path)
        return cls.load(path)


def _section(raw: Dict[str, Any], name: str) -> Dict[str, Any]:
    section = raw.get(name) or {}
    if not isinstance(section, dict):
        raise ValueError(f"Config section '{name}' must be a mapping")
    return section


@dataclass
class EtsySettings:
    """Runtime settings required to call the Etsy API."""

    api_key: str
    access_token: Optional[str] = None
    refresh_token: Optional[str] = None

    @classmethod
    def from_env(cls) -> "EtsySettings":
        """Load settings from environment variables.

        Raises:
            MissingCredentialError: If ``ETSY_API_KEY`` is not set.
        """

        api_key = os.getenv("ETSY_API_KEY")
        if not api_key:
            raise MissingCredentialError(
                "ETSY_API_KEY not found. Please add ETSY_API_KEY=your_key to the .env file"
            )
        return cls(
            api_key=api_key,
            access_token=os.getenv("ETSY_ACCESS_TOKEN") or None,
            refresh_token=os.getenv("ETSY_REFRESH_TOKEN") or None,
        )


@dataclass
class PrintfulSettings:
    """Runtime settings required to call the Printful API."""

    api_key: str

    @classmethod
    def from_env(cls) -> "PrintfulSettings":
        """Load settings from environment variables.

        Raises:
            MissingCredentialError: If ``PRINTFUL_API_KEY`` is not set.
        """

        api_key = os.getenv("PRINTFUL_API_KEY")
        if not api_key:
            raise MissingCredentialError(
                "PRINTFUL_API_KEY not found. Please create a .env file in the project root "
                "with PRINTFUL_API_KEY=your_key"
            )
        return cls(api_key=api_key)


__all__ = [
    "EndpointConfig",
    "EtsySettings",
    "PrintfulSettings",
    "MissingCredentialError",
    "ETSY_API_BASE",
    "ETSY_OAUTH_BASE",
    "ETSY_CONNECT_URL",
    "PRINTFUL_API_BASE",
]
