"""Printful API client."""
from __future__ import annotations

import logging
from typing import Any, Dict, Optional

import requests

from ..config import PRINTFUL_API_BASE
from ..transport import HTTPTransport
from .models import (
    CreateOrderRequest,
    OrderListResponse,
    OrderResponse,
    PrintfulErrorPayload,
    ProductListResponse,
    ProductResponse,
    ShippingRateRequest,
    ShippingRateResponse,
)

logger = logging.getLogger(__name__)


class PrintfulAPIClient:
    """Printful API client authenticated with a private token."""

    def __init__(
        self,
        api_key: str,
        api_base: str = PRINTFUL_API_BASE,
        session: Optional[requests.Session] = None,
    ):
        """Initialize Printful API client.

        Args:
            api_key: Printful private token, sent as a bearer token
            api_base: Base URL of the API
            session: HTTP session to reuse (optional)
        """
        self.api_key = api_key
        self._transport = HTTPTransport(
            api_base,
            headers=self._get_headers(),
            session=session,
            error_parser=PrintfulErrorPayload.parse,
        )

    def _get_headers(self) -> Dict[str, str]:
        return {"Authorization": f"Bearer {self.api_key}"}

    def close(self) -> None:
        self._transport.close()

    def __enter__(self) -> "PrintfulAPIClient":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()

    def get_products(
        self,
        limit: Optional[int] = None,
        offset: Optional[int] = None,
    ) -> ProductListResponse:
        """List store products.

        Args:
            limit: Page size
            offset: Page offset

        Returns:
            Envelope whose ``results`` are the products and ``count`` the total
        """
        params = [("limit", limit), ("offset", offset)]
        return self._transport.request_model(
            ProductListResponse, "GET", "/products", params=params
        )

    def get_product(self, product_id: int) -> ProductResponse:
        return self._transport.request_model(ProductResponse, "GET", f"/products/{product_id}")

    def get_orders(
        self,
        limit: Optional[int] = None,
        offset: Optional[int] = None,
    ) -> OrderListResponse:
        params = [("limit", limit), ("offset", offset)]
        return self._transport.request_model(OrderListResponse, "GET", "/orders", params=params)

    def get_order(self, order_id: int) -> OrderResponse:
        return self._transport.request_model(OrderResponse, "GET", f"/orders/{order_id}")

    def create_order(self, request: CreateOrderRequest) -> OrderResponse:
        """Create an order (as a draft unless ``request.confirm`` is set).

        Raises:
            APIError: Printful rejected the order
        """
        result = self._transport.request_model(
            OrderResponse, "POST", "/orders", json_body=request.to_payload()
        )
        logger.info(f"Created order: {result.result.id}")
        return result

    def cancel_order(self, order_id: int) -> OrderResponse:
        """Cancel an order; Printful returns the cancelled order."""
        result = self._transport.request_model(OrderResponse, "DELETE", f"/orders/{order_id}")
        logger.info(f"Cancelled order {order_id}")
        return result

    def get_shipping_rates(self, request: ShippingRateRequest) -> ShippingRateResponse:
        """Calculate shipping rates for a recipient and a set of variants."""
        return self._transport.request_model(
            ShippingRateResponse, "POST", "/shipping/rates", json_body=request.to_payload()
        )


__all__ = ["PrintfulAPIClient"]
