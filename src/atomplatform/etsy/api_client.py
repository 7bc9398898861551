"""Etsy API v3 client."""
from __future__ import annotations

import logging
from typing import Any, Dict, List, Mapping, Optional, Sequence

import requests

from ..config import ETSY_API_BASE
from ..transport import HTTPTransport
from ..utils import join_csv
from .models import (
    CreateDraftListingRequest,
    CreateReceiptShipmentRequest,
    CreateShippingProfileRequest,
    EtsyErrorPayload,
    LedgerEntriesPage,
    Listing,
    ListingImage,
    ListingImagesPage,
    ListingInventory,
    ListingProduct,
    ListingsPage,
    PaymentsPage,
    PingResponse,
    Receipt,
    ReceiptsPage,
    ReturnPoliciesPage,
    ReturnPolicy,
    ReviewsPage,
    ShippingProfile,
    ShippingProfilesPage,
    Shop,
    ShopSectionsPage,
    ShopsPage,
    TaxonomyNodesPage,
    TaxonomyPropertiesPage,
    Transaction,
    TransactionsPage,
    UpdateInventoryRequest,
    UpdateListingRequest,
    User,
)

logger = logging.getLogger(__name__)


class EtsyAPIClient:
    """Etsy API v3 client.

    Holds the API key (keystring), an optional OAuth access token and a
    pooled HTTP session. Each method issues exactly one request.
    """

    def __init__(
        self,
        api_key: str,
        access_token: Optional[str] = None,
        api_base: str = ETSY_API_BASE,
        session: Optional[requests.Session] = None,
    ):
        """Initialize Etsy API client.

        Args:
            api_key: Etsy API key (keystring)
            access_token: OAuth 2.0 access token (optional, required by most shop endpoints)
            api_base: Base URL of the application API
            session: HTTP session to reuse (optional)
        """
        self.api_key = api_key
        self.access_token = access_token
        self._transport = HTTPTransport(
            api_base,
            headers=self._get_headers(),
            session=session,
            error_parser=EtsyErrorPayload.parse,
        )

    def _get_headers(self) -> Dict[str, str]:
        """Get request headers with authentication.

        Returns:
            Headers dict
        """
        headers = {"x-api-key": self.api_key}
        if self.access_token:
            headers["Authorization"] = f"Bearer {self.access_token}"
        return headers

    def close(self) -> None:
        self._transport.close()

    def __enter__(self) -> "EtsyAPIClient":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()

    # ========================================================================
    # Raw escape hatch
    # ========================================================================

    def raw_get(self, path: str, params: Optional[Mapping[str, str]] = None) -> Any:
        """GET any endpoint and return untyped JSON.

        Args:
            path: Path relative to the API base (e.g. ``shops/123/listings``)
            params: Query parameters, each value percent-encoded separately
        """
        return self._transport.request_json(
            "GET", path, params=list((params or {}).items())
        )

    def raw_post(self, path: str, body: Any) -> Any:
        """POST a JSON body to any endpoint and return untyped JSON."""
        return self._transport.request_json("POST", path, json_body=body)

    def raw_put(self, path: str, body: Any) -> Any:
        """PUT a JSON body to any endpoint and return untyped JSON."""
        return self._transport.request_json("PUT", path, json_body=body)

    def raw_delete(self, path: str) -> Any:
        """DELETE any endpoint.

        Returns:
            Parsed JSON body, or ``None`` (JSON null) when the body is empty
        """
        return self._transport.request_json("DELETE", path, allow_empty=True)

    # ========================================================================
    # Application and users
    # ========================================================================

    def ping(self) -> PingResponse:
        """Test API key connectivity (does not require an OAuth token)."""
        return self._transport.request_model(PingResponse, "GET", "/openapi-ping")

    def get_me(self) -> User:
        """Get the authenticated user."""
        return self._transport.request_model(User, "GET", "/users/me")

    def get_user(self, user_id: int) -> User:
        return self._transport.request_model(User, "GET", f"/users/{user_id}")

    # ========================================================================
    # Shops
    # ========================================================================

    def get_shop(self, shop_id: int) -> Shop:
        return self._transport.request_model(Shop, "GET", f"/shops/{shop_id}")

    def get_shop_by_owner_user_id(self, user_id: int) -> Shop:
        return self._transport.request_model(Shop, "GET", f"/users/{user_id}/shops")

    def find_shops(
        self,
        shop_name: str,
        limit: Optional[int] = None,
        offset: Optional[int] = None,
    ) -> ShopsPage:
        """Find shops by name.

        Args:
            shop_name: Shop name to search for
            limit: Page size
            offset: Page offset
        """
        params = [("shop_name", shop_name), ("limit", limit), ("offset", offset)]
        return self._transport.request_model(ShopsPage, "GET", "/shops", params=params)

    def get_shop_sections(self, shop_id: int) -> ShopSectionsPage:
        return self._transport.request_model(
            ShopSectionsPage, "GET", f"/shops/{shop_id}/sections"
        )

    # ========================================================================
    # Listings
    # ========================================================================

    def get_listing(
        self,
        listing_id: int,
        includes: Optional[Sequence[str]] = None,
    ) -> Listing:
        """Get listing details.

        Args:
            listing_id: Listing ID
            includes: Associations to expand (e.g. ``["images", "shop"]``)
        """
        params = [("includes", join_csv(includes))]
        return self._transport.request_model(
            Listing, "GET", f"/listings/{listing_id}", params=params
        )

    def get_listings_by_shop(
        self,
        shop_id: int,
        state: Optional[str] = None,
        limit: Optional[int] = None,
        offset: Optional[int] = None,
        sort_on: Optional[str] = None,
        sort_order: Optional[str] = None,
        includes: Optional[Sequence[str]] = None,
    ) -> ListingsPage:
        """Get listings of a shop.

        Args:
            shop_id: Shop ID
            state: active, inactive, draft, expired or sold_out
            limit: Page size
            offset: Page offset
            sort_on: created, price, updated or score
            sort_order: asc or desc
            includes: Associations to expand
        """
        params = [
            ("state", state),
            ("limit", limit),
            ("offset", offset),
            ("sort_on", sort_on),
            ("sort_order", sort_order),
            ("includes", join_csv(includes)),
        ]
        return self._transport.request_model(
            ListingsPage, "GET", f"/shops/{shop_id}/listings", params=params
        )

    def get_active_listings_by_shop(
        self,
        shop_id: int,
        limit: Optional[int] = None,
        offset: Optional[int] = None,
        keywords: Optional[str] = None,
    ) -> ListingsPage:
        params = [("limit", limit), ("offset", offset), ("keywords", keywords)]
        return self._transport.request_model(
            ListingsPage, "GET", f"/shops/{shop_id}/listings/active", params=params
        )

    def get_featured_listings_by_shop(
        self,
        shop_id: int,
        limit: Optional[int] = None,
        offset: Optional[int] = None,
    ) -> ListingsPage:
        params = [("limit", limit), ("offset", offset)]
        return self._transport.request_model(
            ListingsPage, "GET", f"/shops/{shop_id}/listings/featured", params=params
        )

    def create_draft_listing(
        self,
        shop_id: int,
        request: CreateDraftListingRequest,
    ) -> Listing:
        """Create a draft listing.

        Args:
            shop_id: Shop ID
            request: Listing fields; unset optional fields are not sent

        Returns:
            Created listing

        Raises:
            APIError: Etsy rejected the listing
        """
        result = self._transport.request_model(
            Listing, "POST", f"/shops/{shop_id}/listings", json_body=request.to_payload()
        )
        logger.info(f"Created draft listing: {result.listing_id}")
        return result

    def update_listing(
        self,
        shop_id: int,
        listing_id: int,
        request: UpdateListingRequest,
    ) -> Listing:
        """Update listing fields.

        Only fields set on ``request`` are sent; everything else keeps its
        current value on Etsy.
        """
        result = self._transport.request_model(
            Listing,
            "PATCH",
            f"/shops/{shop_id}/listings/{listing_id}",
            json_body=request.to_payload(),
        )
        logger.info(f"Updated listing {listing_id}")
        return result

    def delete_listing(self, shop_id: int, listing_id: int) -> None:
        self._transport.request_no_content("DELETE", f"/shops/{shop_id}/listings/{listing_id}")
        logger.info(f"Deleted listing {listing_id}")

    def get_listing_url(self, listing_id: int, slug: str = "") -> str:
        """Generate the public Etsy listing URL.

        Args:
            listing_id: Listing ID
            slug: URL slug (optional, for SEO-friendly URLs)
        """
        if slug:
            return f"https://www.etsy.com/listing/{listing_id}/{slug}"
        return f"https://www.etsy.com/listing/{listing_id}"

    # ========================================================================
    # Listing images
    # ========================================================================

    def get_listing_images(self, listing_id: int) -> ListingImagesPage:
        return self._transport.request_model(
            ListingImagesPage, "GET", f"/listings/{listing_id}/images"
        )

    def get_listing_image(self, listing_id: int, image_id: int) -> ListingImage:
        return self._transport.request_model(
            ListingImage, "GET", f"/listings/{listing_id}/images/{image_id}"
        )

    def delete_listing_image(self, shop_id: int, listing_id: int, image_id: int) -> None:
        self._transport.request_no_content(
            "DELETE", f"/shops/{shop_id}/listings/{listing_id}/images/{image_id}"
        )
        logger.info(f"Deleted image {image_id} from listing {listing_id}")

    # ========================================================================
    # Listing inventory
    # ========================================================================

    def get_listing_inventory(self, listing_id: int) -> ListingInventory:
        return self._transport.request_model(
            ListingInventory, "GET", f"/listings/{listing_id}/inventory"
        )

    def update_listing_inventory(
        self,
        listing_id: int,
        request: UpdateInventoryRequest,
    ) -> ListingInventory:
        """Replace the inventory (products and offerings) of a listing."""
        result = self._transport.request_model(
            ListingInventory,
            "PUT",
            f"/listings/{listing_id}/inventory",
            json_body=request.to_payload(),
        )
        logger.info(f"Updated inventory for listing {listing_id}")
        return result

    def get_listing_product(self, listing_id: int, product_id: int) -> ListingProduct:
        return self._transport.request_model(
            ListingProduct, "GET", f"/listings/{listing_id}/inventory/products/{product_id}"
        )

    # ========================================================================
    # Receipts
    # ========================================================================

    def get_shop_receipts(
        self,
        shop_id: int,
        min_created: Optional[int] = None,
        max_created: Optional[int] = None,
        min_last_modified: Optional[int] = None,
        max_last_modified: Optional[int] = None,
        limit: Optional[int] = None,
        offset: Optional[int] = None,
        sort_on: Optional[str] = None,
        sort_order: Optional[str] = None,
        was_paid: Optional[bool] = None,
        was_shipped: Optional[bool] = None,
        was_delivered: Optional[bool] = None,
    ) -> ReceiptsPage:
        """Get shop receipts (orders).

        Timestamps are epoch seconds. Filters left as ``None`` are not sent.
        """
        params = [
            ("min_created", min_created),
            ("max_created", max_created),
            ("min_last_modified", min_last_modified),
            ("max_last_modified", max_last_modified),
            ("limit", limit),
            ("offset", offset),
            ("sort_on", sort_on),
            ("sort_order", sort_order),
            ("was_paid", was_paid),
            ("was_shipped", was_shipped),
            ("was_delivered", was_delivered),
        ]
        return self._transport.request_model(
            ReceiptsPage, "GET", f"/shops/{shop_id}/receipts", params=params
        )

    def get_shop_receipt(self, shop_id: int, receipt_id: int) -> Receipt:
        return self._transport.request_model(
            Receipt, "GET", f"/shops/{shop_id}/receipts/{receipt_id}"
        )

    def create_receipt_shipment(
        self,
        shop_id: int,
        receipt_id: int,
        request: CreateReceiptShipmentRequest,
    ) -> Receipt:
        """Attach shipment tracking to a receipt."""
        result = self._transport.request_model(
            Receipt,
            "POST",
            f"/shops/{shop_id}/receipts/{receipt_id}/tracking",
            json_body=request.to_payload(),
        )
        logger.info(f"Created shipment for receipt {receipt_id}")
        return result

    # ========================================================================
    # Transactions
    # ========================================================================

    def get_shop_receipt_transactions(self, shop_id: int, receipt_id: int) -> TransactionsPage:
        return self._transport.request_model(
            TransactionsPage, "GET", f"/shops/{shop_id}/receipts/{receipt_id}/transactions"
        )

    def get_shop_transactions(
        self,
        shop_id: int,
        limit: Optional[int] = None,
        offset: Optional[int] = None,
    ) -> TransactionsPage:
        params = [("limit", limit), ("offset", offset)]
        return self._transport.request_model(
            TransactionsPage, "GET", f"/shops/{shop_id}/transactions", params=params
        )

    def get_shop_receipt_transaction(self, shop_id: int, transaction_id: int) -> Transaction:
        return self._transport.request_model(
            Transaction, "GET", f"/shops/{shop_id}/transactions/{transaction_id}"
        )

    # ========================================================================
    # Shipping profiles
    # ========================================================================

    def get_shop_shipping_profiles(self, shop_id: int) -> ShippingProfilesPage:
        return self._transport.request_model(
            ShippingProfilesPage, "GET", f"/shops/{shop_id}/shipping-profiles"
        )

    def get_shop_shipping_profile(self, shop_id: int, shipping_profile_id: int) -> ShippingProfile:
        return self._transport.request_model(
            ShippingProfile, "GET", f"/shops/{shop_id}/shipping-profiles/{shipping_profile_id}"
        )

    def create_shop_shipping_profile(
        self,
        shop_id: int,
        request: CreateShippingProfileRequest,
    ) -> ShippingProfile:
        result = self._transport.request_model(
            ShippingProfile,
            "POST",
            f"/shops/{shop_id}/shipping-profiles",
            json_body=request.to_payload(),
        )
        logger.info(f"Created shipping profile: {result.shipping_profile_id}")
        return result

    def delete_shop_shipping_profile(self, shop_id: int, shipping_profile_id: int) -> None:
        self._transport.request_no_content(
            "DELETE", f"/shops/{shop_id}/shipping-profiles/{shipping_profile_id}"
        )
        logger.info(f"Deleted shipping profile {shipping_profile_id}")

    # ========================================================================
    # Return policies
    # ========================================================================

    def get_shop_return_policies(self, shop_id: int) -> ReturnPoliciesPage:
        return self._transport.request_model(
            ReturnPoliciesPage, "GET", f"/shops/{shop_id}/policies/return"
        )

    def get_shop_return_policy(self, shop_id: int, return_policy_id: int) -> ReturnPolicy:
        return self._transport.request_model(
            ReturnPolicy, "GET", f"/shops/{shop_id}/policies/return/{return_policy_id}"
        )

    # ========================================================================
    # Seller taxonomy
    # ========================================================================

    def get_seller_taxonomy_nodes(self) -> TaxonomyNodesPage:
        return self._transport.request_model(TaxonomyNodesPage, "GET", "/seller-taxonomy/nodes")

    def get_properties_by_taxonomy_id(self, taxonomy_id: int) -> TaxonomyPropertiesPage:
        return self._transport.request_model(
            TaxonomyPropertiesPage, "GET", f"/seller-taxonomy/nodes/{taxonomy_id}/properties"
        )

    # ========================================================================
    # Reviews
    # ========================================================================

    def get_reviews_by_shop(
        self,
        shop_id: int,
        limit: Optional[int] = None,
        offset: Optional[int] = None,
        min_created: Optional[int] = None,
        max_created: Optional[int] = None,
    ) -> ReviewsPage:
        params = [
            ("limit", limit),
            ("offset", offset),
            ("min_created", min_created),
            ("max_created", max_created),
        ]
        return self._transport.request_model(
            ReviewsPage, "GET", f"/shops/{shop_id}/reviews", params=params
        )

    def get_reviews_by_listing(
        self,
        listing_id: int,
        limit: Optional[int] = None,
        offset: Optional[int] = None,
    ) -> ReviewsPage:
        params = [("limit", limit), ("offset", offset)]
        return self._transport.request_model(
            ReviewsPage, "GET", f"/listings/{listing_id}/reviews", params=params
        )

    # ========================================================================
    # Payments
    # ========================================================================

    def get_shop_payment_account_ledger_entries(
        self,
        shop_id: int,
        min_created: Optional[int] = None,
        max_created: Optional[int] = None,
        limit: Optional[int] = None,
        offset: Optional[int] = None,
    ) -> LedgerEntriesPage:
        params = [
            ("min_created", min_created),
            ("max_created", max_created),
            ("limit", limit),
            ("offset", offset),
        ]
        return self._transport.request_model(
            LedgerEntriesPage,
            "GET",
            f"/shops/{shop_id}/payment-account/ledger-entries",
            params=params,
        )

    def get_shop_receipt_payments(self, shop_id: int, receipt_id: int) -> PaymentsPage:
        """Get payments made against a receipt."""
        return self._transport.request_model(
            PaymentsPage, "GET", f"/shops/{shop_id}/receipts/{receipt_id}/payments"
        )


__all__ = ["EtsyAPIClient"]
