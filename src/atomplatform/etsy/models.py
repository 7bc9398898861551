"""Etsy API v3 request and response records.

Identifier fields the API always returns are required; everything else is
optional so that an absent field stays distinguishable from zero or empty.
"""
from __future__ import annotations

from typing import Any, List, Optional, Tuple

from pydantic import Field, ValidationError

from ..models import APIModel, Money, Page, RequestModel


# ============================================================================
# Errors and auth
# ============================================================================


class EtsyErrorPayload(APIModel):
    """Error body returned by both the API and the OAuth token endpoint."""

    error: str
    error_description: Optional[str] = None

    @classmethod
    def parse(cls, text: str) -> Optional[Tuple[str, str]]:
        """Normalize an error body to ``(code, message)``; ``None`` if not this shape."""
        try:
            payload = cls.model_validate_json(text)
        except ValidationError:
            return None
        if payload.error_description:
            return payload.error, f"{payload.error} - {payload.error_description}"
        return payload.error, payload.error


class OAuthToken(APIModel):
    """Token pair returned by the OAuth token endpoint. Not persisted here."""

    access_token: str
    token_type: str
    expires_in: int
    refresh_token: str


class PingResponse(APIModel):
    application_id: int


# ============================================================================
# Users and shops
# ============================================================================


class User(APIModel):
    user_id: int
    primary_email: Optional[str] = None
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    image_url_75x75: Optional[str] = None


class Shop(APIModel):
    shop_id: int
    shop_name: Optional[str] = None
    user_id: Optional[int] = None
    title: Optional[str] = None
    announcement: Optional[str] = None
    currency_code: Optional[str] = None
    is_vacation: Optional[bool] = None
    vacation_message: Optional[str] = None
    sale_message: Optional[str] = None
    digital_sale_message: Optional[str] = None
    listing_active_count: Optional[int] = None
    digital_listing_count: Optional[int] = None
    login_name: Optional[str] = None
    url: Optional[str] = None
    image_url_760x100: Optional[str] = None
    num_favorers: Optional[int] = None
    review_count: Optional[int] = None
    review_average: Optional[float] = None
    transaction_sold_count: Optional[int] = None


class ShopSection(APIModel):
    shop_section_id: int
    title: Optional[str] = None
    rank: Optional[int] = None
    user_id: Optional[int] = None
    active_listing_count: Optional[int] = None


# ============================================================================
# Listings
# ============================================================================


class Listing(APIModel):
    listing_id: int
    shop_id: Optional[int] = None
    user_id: Optional[int] = None
    title: Optional[str] = None
    description: Optional[str] = None
    state: Optional[str] = None
    creation_timestamp: Optional[int] = None
    ending_timestamp: Optional[int] = None
    original_creation_timestamp: Optional[int] = None
    last_modified_timestamp: Optional[int] = None
    state_timestamp: Optional[int] = None
    quantity: Optional[int] = None
    shop_section_id: Optional[int] = None
    featured_rank: Optional[int] = None
    url: Optional[str] = None
    num_favorers: Optional[int] = None
    non_taxable: Optional[bool] = None
    is_taxable: Optional[bool] = None
    is_customizable: Optional[bool] = None
    is_personalizable: Optional[bool] = None
    personalization_is_required: Optional[bool] = None
    personalization_char_count_max: Optional[int] = None
    personalization_instructions: Optional[str] = None
    listing_type: Optional[str] = None
    tags: Optional[List[str]] = None
    materials: Optional[List[str]] = None
    shipping_profile_id: Optional[int] = None
    return_policy_id: Optional[int] = None
    processing_min: Optional[int] = None
    processing_max: Optional[int] = None
    who_made: Optional[str] = None
    when_made: Optional[str] = None
    is_supply: Optional[bool] = None
    item_weight: Optional[float] = None
    item_weight_unit: Optional[str] = None
    item_length: Optional[float] = None
    item_width: Optional[float] = None
    item_height: Optional[float] = None
    item_dimensions_unit: Optional[str] = None
    is_private: Optional[bool] = None
    style: Optional[List[str]] = None
    file_data: Optional[str] = None
    has_variations: Optional[bool] = None
    should_auto_renew: Optional[bool] = None
    language: Optional[str] = None
    price: Optional[Money] = None
    taxonomy_id: Optional[int] = None
    views: Optional[int] = None


class ListingImage(APIModel):
    listing_id: int
    listing_image_id: int
    hex_code: Optional[str] = None
    red: Optional[int] = None
    green: Optional[int] = None
    blue: Optional[int] = None
    hue: Optional[int] = None
    saturation: Optional[int] = None
    brightness: Optional[int] = None
    is_black_and_white: Optional[bool] = None
    creation_tsz: Optional[int] = None
    created_timestamp: Optional[int] = None
    rank: Optional[int] = None
    url_75x75: Optional[str] = None
    url_170x135: Optional[str] = None
    url_570xN: Optional[str] = None
    url_fullxfull: Optional[str] = None
    full_height: Optional[int] = None
    full_width: Optional[int] = None
    alt_text: Optional[str] = None


class ProductOffering(APIModel):
    offering_id: int
    quantity: Optional[int] = None
    is_enabled: Optional[bool] = None
    is_deleted: Optional[bool] = None
    price: Optional[Money] = None


class PropertyValue(APIModel):
    property_id: int
    property_name: Optional[str] = None
    scale_id: Optional[int] = None
    scale_name: Optional[str] = None
    value_ids: Optional[List[int]] = None
    values: Optional[List[str]] = None


class ListingProduct(APIModel):
    product_id: int
    sku: Optional[str] = None
    is_deleted: Optional[bool] = None
    offerings: Optional[List[ProductOffering]] = None
    property_values: Optional[List[PropertyValue]] = None


class ListingInventory(APIModel):
    products: List[ListingProduct]
    price_on_property: Optional[List[int]] = None
    quantity_on_property: Optional[List[int]] = None
    sku_on_property: Optional[List[int]] = None


# ============================================================================
# Receipts, transactions, payments
# ============================================================================


class Shipment(APIModel):
    receipt_shipping_id: Optional[int] = None
    shipment_notification_timestamp: Optional[int] = None
    carrier_name: Optional[str] = None
    tracking_code: Optional[str] = None


class TransactionVariation(APIModel):
    property_id: Optional[int] = None
    value_id: Optional[int] = None
    formatted_name: Optional[str] = None
    formatted_value: Optional[str] = None


class Transaction(APIModel):
    transaction_id: int
    title: Optional[str] = None
    description: Optional[str] = None
    seller_user_id: Optional[int] = None
    buyer_user_id: Optional[int] = None
    create_timestamp: Optional[int] = None
    created_timestamp: Optional[int] = None
    paid_timestamp: Optional[int] = None
    shipped_timestamp: Optional[int] = None
    quantity: Optional[int] = None
    listing_image_id: Optional[int] = None
    receipt_id: Optional[int] = None
    is_digital: Optional[bool] = None
    file_data: Optional[str] = None
    listing_id: Optional[int] = None
    sku: Optional[str] = None
    product_id: Optional[int] = None
    transaction_type: Optional[str] = None
    price: Optional[Money] = None
    shipping_cost: Optional[Money] = None
    variations: Optional[List[TransactionVariation]] = None
    product_data: Optional[Any] = None
    shipping_profile_id: Optional[int] = None
    min_processing_days: Optional[int] = None
    max_processing_days: Optional[int] = None
    shipping_method: Optional[str] = None
    shipping_upgrade: Optional[str] = None
    expected_ship_date: Optional[int] = None
    buyer_coupon: Optional[float] = None
    shop_coupon: Optional[float] = None


class Receipt(APIModel):
    receipt_id: int
    receipt_type: Optional[int] = None
    seller_user_id: Optional[int] = None
    seller_email: Optional[str] = None
    buyer_user_id: Optional[int] = None
    buyer_email: Optional[str] = None
    name: Optional[str] = None
    first_line: Optional[str] = None
    second_line: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    zip: Optional[str] = None
    status: Optional[str] = None
    formatted_address: Optional[str] = None
    country_iso: Optional[str] = None
    payment_method: Optional[str] = None
    payment_email: Optional[str] = None
    message_from_seller: Optional[str] = None
    message_from_buyer: Optional[str] = None
    message_from_payment: Optional[str] = None
    is_paid: Optional[bool] = None
    is_shipped: Optional[bool] = None
    create_timestamp: Optional[int] = None
    created_timestamp: Optional[int] = None
    update_timestamp: Optional[int] = None
    updated_timestamp: Optional[int] = None
    is_gift: Optional[bool] = None
    gift_message: Optional[str] = None
    grandtotal: Optional[Money] = None
    subtotal: Optional[Money] = None
    total_price: Optional[Money] = None
    total_shipping_cost: Optional[Money] = None
    total_tax_cost: Optional[Money] = None
    total_vat_cost: Optional[Money] = None
    discount_amt: Optional[Money] = None
    gift_wrap_price: Optional[Money] = None
    shipments: Optional[List[Shipment]] = None
    transactions: Optional[List[Transaction]] = None


class PaymentAdjustment(APIModel):
    payment_adjustment_id: int
    payment_id: Optional[int] = None
    status: Optional[str] = None
    is_success: Optional[bool] = None
    user_id: Optional[int] = None
    reason_code: Optional[str] = None
    total_adjustment_amount: Optional[int] = None
    shop_total_adjustment_amount: Optional[int] = None
    buyer_total_adjustment_amount: Optional[int] = None
    total_fee_adjustment_amount: Optional[int] = None
    create_timestamp: Optional[int] = None
    created_timestamp: Optional[int] = None
    update_timestamp: Optional[int] = None
    updated_timestamp: Optional[int] = None


class Payment(APIModel):
    payment_id: int
    buyer_user_id: Optional[int] = None
    shop_id: Optional[int] = None
    receipt_id: Optional[int] = None
    amount_gross: Optional[Money] = None
    amount_fees: Optional[Money] = None
    amount_net: Optional[Money] = None
    posted_gross: Optional[Money] = None
    posted_fees: Optional[Money] = None
    posted_net: Optional[Money] = None
    adjusted_gross: Optional[Money] = None
    adjusted_fees: Optional[Money] = None
    adjusted_net: Optional[Money] = None
    currency: Optional[str] = None
    shop_currency: Optional[str] = None
    buyer_currency: Optional[str] = None
    shipping_user_id: Optional[int] = None
    shipping_address_id: Optional[int] = None
    billing_address_id: Optional[int] = None
    status: Optional[str] = None
    shipped_timestamp: Optional[int] = None
    create_timestamp: Optional[int] = None
    created_timestamp: Optional[int] = None
    update_timestamp: Optional[int] = None
    updated_timestamp: Optional[int] = None
    payment_adjustments: Optional[List[PaymentAdjustment]] = None


class LedgerEntry(APIModel):
    entry_id: int
    ledger_id: Optional[int] = None
    sequence_number: Optional[int] = None
    amount: Optional[int] = None
    currency: Optional[str] = None
    description: Optional[str] = None
    balance: Optional[int] = None
    create_date: Optional[int] = None
    created_timestamp: Optional[int] = None
    ledger_type: Optional[str] = None
    reference_type: Optional[str] = None
    reference_id: Optional[str] = None
    payment_adjustments: Optional[List[PaymentAdjustment]] = None


# ============================================================================
# Shipping, policies, taxonomy, reviews
# ============================================================================


class ShippingProfileDestination(APIModel):
    shipping_profile_destination_id: Optional[int] = None
    shipping_profile_id: Optional[int] = None
    origin_country_iso: Optional[str] = None
    destination_country_iso: Optional[str] = None
    destination_region: Optional[str] = None
    primary_cost: Optional[Money] = None
    secondary_cost: Optional[Money] = None
    shipping_carrier_id: Optional[int] = None
    mail_class: Optional[str] = None
    min_delivery_days: Optional[int] = None
    max_delivery_days: Optional[int] = None


class ShippingProfileUpgrade(APIModel):
    shipping_profile_id: Optional[int] = None
    upgrade_id: Optional[int] = None
    upgrade_name: Optional[str] = None
    upgrade_type: Optional[str] = Field(default=None, alias="type")
    rank: Optional[int] = None
    language: Optional[str] = None
    price: Optional[Money] = None
    secondary_price: Optional[Money] = None
    shipping_carrier_id: Optional[int] = None
    mail_class: Optional[str] = None
    min_delivery_days: Optional[int] = None
    max_delivery_days: Optional[int] = None


class ShippingProfile(APIModel):
    shipping_profile_id: int
    title: Optional[str] = None
    user_id: Optional[int] = None
    min_processing_days: Optional[int] = None
    max_processing_days: Optional[int] = None
    processing_days_display_label: Optional[str] = None
    origin_country_iso: Optional[str] = None
    origin_postal_code: Optional[str] = None
    profile_type: Optional[str] = None
    domestic_handling_fee: Optional[float] = None
    international_handling_fee: Optional[float] = None
    shipping_profile_destinations: Optional[List[ShippingProfileDestination]] = None
    shipping_profile_upgrades: Optional[List[ShippingProfileUpgrade]] = None


class ReturnPolicy(APIModel):
    return_policy_id: int
    shop_id: Optional[int] = None
    accepts_returns: Optional[bool] = None
    accepts_exchanges: Optional[bool] = None
    return_deadline: Optional[int] = None


class TaxonomyNode(APIModel):
    id: int
    level: Optional[int] = None
    name: Optional[str] = None
    parent_id: Optional[int] = None
    children: Optional[List["TaxonomyNode"]] = None
    full_path_taxonomy_ids: Optional[List[int]] = None


class TaxonomyPropertyScale(APIModel):
    scale_id: int
    display_name: Optional[str] = None
    description: Optional[str] = None


class TaxonomyPropertyValue(APIModel):
    value_id: Optional[int] = None
    name: Optional[str] = None
    scale_id: Optional[int] = None
    equal_to: Optional[List[int]] = None


class TaxonomyProperty(APIModel):
    property_id: int
    name: Optional[str] = None
    display_name: Optional[str] = None
    scales: Optional[List[TaxonomyPropertyScale]] = None
    is_required: Optional[bool] = None
    supports_attributes: Optional[bool] = None
    supports_variations: Optional[bool] = None
    is_multivalued: Optional[bool] = None
    max_values_allowed: Optional[int] = None
    possible_values: Optional[List[TaxonomyPropertyValue]] = None
    selected_values: Optional[List[TaxonomyPropertyValue]] = None


class Review(APIModel):
    shop_id: int
    listing_id: int
    transaction_id: Optional[int] = None
    buyer_user_id: Optional[int] = None
    rating: Optional[int] = None
    review: Optional[str] = None
    language: Optional[str] = None
    image_url_fullxfull: Optional[str] = None
    create_timestamp: Optional[int] = None
    created_timestamp: Optional[int] = None
    update_timestamp: Optional[int] = None
    updated_timestamp: Optional[int] = None


TaxonomyNode.model_rebuild()


# ============================================================================
# Request bodies
# ============================================================================


class CreateDraftListingRequest(RequestModel):
    """Body for creating a draft listing.

    ``price`` is the decimal price the API accepts on input; listings come
    back with a :class:`~atomplatform.models.Money` triple instead.
    """

    quantity: int
    title: str
    description: str
    price: float
    who_made: str
    when_made: str
    taxonomy_id: int
    shipping_profile_id: Optional[int] = None
    return_policy_id: Optional[int] = None
    materials: Optional[List[str]] = None
    shop_section_id: Optional[int] = None
    processing_min: Optional[int] = None
    processing_max: Optional[int] = None
    tags: Optional[List[str]] = None
    styles: Optional[List[str]] = None
    item_weight: Optional[float] = None
    item_length: Optional[float] = None
    item_width: Optional[float] = None
    item_height: Optional[float] = None
    item_weight_unit: Optional[str] = None
    item_dimensions_unit: Optional[str] = None
    is_personalizable: Optional[bool] = None
    personalization_is_required: Optional[bool] = None
    personalization_char_count_max: Optional[int] = None
    personalization_instructions: Optional[str] = None
    is_supply: Optional[bool] = None
    is_customizable: Optional[bool] = None
    should_auto_renew: Optional[bool] = None
    is_taxable: Optional[bool] = None
    listing_type: Optional[str] = Field(default=None, alias="type")


class UpdateListingRequest(RequestModel):
    """Partial listing update; only fields that are set are sent."""

    quantity: Optional[int] = None
    title: Optional[str] = None
    description: Optional[str] = None
    price: Optional[float] = None
    who_made: Optional[str] = None
    when_made: Optional[str] = None
    taxonomy_id: Optional[int] = None
    shipping_profile_id: Optional[int] = None
    return_policy_id: Optional[int] = None
    materials: Optional[List[str]] = None
    shop_section_id: Optional[int] = None
    processing_min: Optional[int] = None
    processing_max: Optional[int] = None
    tags: Optional[List[str]] = None
    styles: Optional[List[str]] = None
    item_weight: Optional[float] = None
    item_length: Optional[float] = None
    item_width: Optional[float] = None
    item_height: Optional[float] = None
    item_weight_unit: Optional[str] = None
    item_dimensions_unit: Optional[str] = None
    is_personalizable: Optional[bool] = None
    personalization_is_required: Optional[bool] = None
    personalization_char_count_max: Optional[int] = None
    personalization_instructions: Optional[str] = None
    state: Optional[str] = None
    is_supply: Optional[bool] = None
    is_customizable: Optional[bool] = None
    should_auto_renew: Optional[bool] = None
    is_taxable: Optional[bool] = None
    listing_type: Optional[str] = Field(default=None, alias="type")


class UpdateInventoryOffering(RequestModel):
    price: float
    quantity: int
    is_enabled: bool


class UpdatePropertyValue(RequestModel):
    property_id: int
    value_ids: List[int]
    scale_id: Optional[int] = None


class UpdateInventoryProduct(RequestModel):
    sku: Optional[str] = None
    offerings: List[UpdateInventoryOffering]
    property_values: Optional[List[UpdatePropertyValue]] = None


class UpdateInventoryRequest(RequestModel):
    products: List[UpdateInventoryProduct]
    price_on_property: Optional[List[int]] = None
    quantity_on_property: Optional[List[int]] = None
    sku_on_property: Optional[List[int]] = None


class CreateReceiptShipmentRequest(RequestModel):
    tracking_code: Optional[str] = None
    carrier_name: Optional[str] = None
    send_bcc: Optional[bool] = None
    note_to_buyer: Optional[str] = None


class CreateShippingProfileRequest(RequestModel):
    title: str
    origin_country_iso: str
    primary_cost: float
    secondary_cost: float
    min_processing_time: int
    max_processing_time: int
    origin_postal_code: Optional[str] = None
    destination_country_iso: Optional[str] = None
    destination_region: Optional[str] = None
    shipping_carrier_id: Optional[int] = None
    mail_class: Optional[str] = None
    min_delivery_days: Optional[int] = None
    max_delivery_days: Optional[int] = None


# Paginated collections
ShopsPage = Page[Shop]
ShopSectionsPage = Page[ShopSection]
ListingsPage = Page[Listing]
ListingImagesPage = Page[ListingImage]
ReceiptsPage = Page[Receipt]
TransactionsPage = Page[Transaction]
ShippingProfilesPage = Page[ShippingProfile]
ReturnPoliciesPage = Page[ReturnPolicy]
TaxonomyNodesPage = Page[TaxonomyNode]
TaxonomyPropertiesPage = Page[TaxonomyProperty]
ReviewsPage = Page[Review]
PaymentsPage = Page[Payment]
LedgerEntriesPage = Page[LedgerEntry]
