"""Printful API request and response records.

Every Printful response is wrapped in ``{"code", "result", "paging"?}``;
:class:`PrintfulResponse` models that envelope generically.
"""
from __future__ import annotations

from typing import Any, Generic, List, Optional, Tuple, TypeVar

from pydantic import Field, ValidationError

from ..models import APIModel, FlexibleId, OptionalFlexibleId, RequestModel

T = TypeVar("T")


class PrintfulErrorDetail(APIModel):
    message: str
    reason: Optional[str] = None


class PrintfulErrorPayload(APIModel):
    """Error body: ``{"code": 404, "result": "...", "error": {"message", "reason"}}``."""

    code: int
    result: Optional[Any] = None
    error: Optional[PrintfulErrorDetail] = None

    @classmethod
    def parse(cls, text: str) -> Optional[Tuple[str, str]]:
        """Normalize an error body to ``(code, message)``; ``None`` if not this shape."""
        try:
            payload = cls.model_validate_json(text)
        except ValidationError:
            return None
        code = str(payload.code)
        if payload.error is not None:
            if payload.error.reason:
                return code, f"{payload.error.message} ({payload.error.reason})"
            return code, payload.error.message
        if isinstance(payload.result, str) and payload.result:
            return code, payload.result
        return None


class Paging(APIModel):
    total: int
    offset: int
    limit: int


class PrintfulResponse(APIModel, Generic[T]):
    """Response envelope.

    List endpoints expose the same ``count``/``results`` view as Etsy pages;
    ``count`` is the server-side total when paging is present.
    """

    code: int
    result: T
    paging: Optional[Paging] = None

    @property
    def results(self) -> List[Any]:
        if isinstance(self.result, list):
            return self.result
        return [self.result]

    @property
    def count(self) -> int:
        if self.paging is not None:
            return self.paging.total
        return len(self.results)


# ============================================================================
# Products
# ============================================================================


class ProductOption(APIModel):
    id: Optional[str] = None
    value: Optional[str] = None


class File(APIModel):
    id: OptionalFlexibleId = None
    file_type: Optional[str] = Field(default=None, alias="type")
    title: Optional[str] = None
    additional: Optional[List[str]] = None
    options: Optional[List[ProductOption]] = None


class Product(APIModel):
    # Sync products report ids like "default"; those become 0
    id: FlexibleId = 0
    name: Optional[str] = None
    product_type: Optional[str] = Field(default=None, alias="type")
    main_category_id: Optional[int] = None
    description: Optional[str] = None
    brand: Optional[str] = None
    model: Optional[str] = None
    image: Optional[str] = None
    variant_count: Optional[int] = None
    currency: Optional[str] = None
    files: Optional[List[File]] = None


# ============================================================================
# Orders
# ============================================================================


class Recipient(APIModel):
    name: str
    company: Optional[str] = None
    address1: str
    address2: Optional[str] = None
    city: str
    state_code: Optional[str] = None
    state_name: Optional[str] = None
    country_code: str
    country_name: Optional[str] = None
    zip: str
    phone: Optional[str] = None
    email: Optional[str] = None


class OrderItem(APIModel):
    id: int
    external_id: Optional[str] = None
    variant_id: int
    quantity: int
    price: Optional[str] = None
    product: Optional[Product] = None
    files: Optional[List[File]] = None
    options: Optional[List[ProductOption]] = None


class Costs(APIModel):
    """Order costs; Printful sends decimal strings, kept verbatim."""

    subtotal: str
    discount: str
    shipping: str
    tax: str
    total: str


class Order(APIModel):
    id: int
    external_id: Optional[str] = None
    shipping: Optional[str] = None
    status: str
    created: int
    updated: int
    recipient: Optional[Recipient] = None
    items: Optional[List[OrderItem]] = None
    costs: Optional[Costs] = None


class CreateFile(RequestModel):
    file_type: str = Field(alias="type")
    url: Optional[str] = None
    id: Optional[int] = None


class CreateOrderItem(RequestModel):
    variant_id: int
    quantity: int
    external_id: Optional[str] = None
    files: Optional[List[CreateFile]] = None
    options: Optional[List[ProductOption]] = None


class CreateOrderRequest(RequestModel):
    external_id: Optional[str] = None
    recipient: Recipient
    items: List[CreateOrderItem]
    shipping: Optional[str] = None
    confirm: Optional[bool] = None
    update_existing: Optional[bool] = None


# ============================================================================
# Shipping rates
# ============================================================================


class ShippingRate(APIModel):
    id: str
    name: str
    rate: str
    currency: str
    min_days: int
    max_days: int


class ShippingRateItem(RequestModel):
    variant_id: int
    quantity: int


class ShippingRateRequest(RequestModel):
    recipient: Recipient
    items: List[ShippingRateItem]


ProductListResponse = PrintfulResponse[List[Product]]
ProductResponse = PrintfulResponse[Product]
OrderListResponse = PrintfulResponse[List[Order]]
OrderResponse = PrintfulResponse[Order]
ShippingRateResponse = PrintfulResponse[List[ShippingRate]]
