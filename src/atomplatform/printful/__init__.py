"""Printful API integration (products, orders, shipping rates)."""

from .api_client import PrintfulAPIClient

__all__ = ["PrintfulAPIClient"]
