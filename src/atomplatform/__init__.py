"""Typed Etsy and Printful API clients with a command line front end."""

from .config import EndpointConfig, EtsySettings, MissingCredentialError, PrintfulSettings
from .etsy import EtsyAPIClient
from .models import Money, Page
from .printful import PrintfulAPIClient
from .transport import APIError, DecodeError, PlatformAPIError, TransportError

__version__ = "0.1.0"

__all__ = [
    "EtsyAPIClient",
    "PrintfulAPIClient",
    "EndpointConfig",
    "EtsySettings",
    "PrintfulSettings",
    "MissingCredentialError",
    "Money",
    "Page",
    "PlatformAPIError",
    "TransportError",
    "APIError",
    "DecodeError",
]
