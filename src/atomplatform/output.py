"""Human-readable and JSON rendering of API results for the CLI."""
from __future__ import annotations

import json
from typing import Any, Optional

import typer
from pydantic import BaseModel

from .etsy.models import (
    Listing,
    ListingProduct,
    Receipt,
    Shop,
    ShippingProfile,
    ReturnPolicy,
    TaxonomyNode,
    Transaction,
)
from .models import Money
from .printful.models import Order, Product


def emit_json(value: Any) -> None:
    """Print ``value`` as pretty JSON (models by wire name)."""

    if isinstance(value, BaseModel):
        typer.echo(value.model_dump_json(indent=2, by_alias=True))
    else:
        typer.echo(json.dumps(value, indent=2))


def field(label: str, value: Any, indent: int = 2) -> None:
    """Print ``label: value`` unless the value is absent."""

    if value is None:
        return
    if isinstance(value, bool):
        value = "true" if value else "false"
    elif isinstance(value, Money):
        value = value.display()
    typer.echo(f"{' ' * indent}{label}: {value}")


def shorten(text: Optional[str], limit: int) -> Optional[str]:
    if text is None or len(text) <= limit:
        return text
    return f"{text[:limit]}..."


def heading(label: str, identifier: Any, title: Optional[str] = None) -> None:
    """Print a blank line and ``  Label: id - title`` to start a list entry."""

    suffix = f" - {title}" if title else ""
    typer.echo(f"\n  {label}: {identifier}{suffix}")


# ============================================================================
# Etsy
# ============================================================================


def print_shop(shop: Shop) -> None:
    typer.echo(f"Shop {shop.shop_id}:")
    field("Name", shop.shop_name)
    field("Title", shop.title)
    field("URL", shop.url)
    field("Currency", shop.currency_code)
    field("Active Listings", shop.listing_active_count)
    field("Favorers", shop.num_favorers)
    field("Reviews", shop.review_count)
    if shop.review_average is not None:
        field("Review Average", f"{shop.review_average:.2f}")
    field("Sales", shop.transaction_sold_count)
    field("On Vacation", shop.is_vacation)


def print_listing(listing: Listing) -> None:
    typer.echo(f"Listing {listing.listing_id}:")
    field("Title", listing.title)
    field("State", listing.state)
    field("Quantity", listing.quantity)
    field("Price", listing.price)
    field("URL", listing.url)
    field("Description", shorten(listing.description, 200))
    if listing.tags:
        field("Tags", ", ".join(listing.tags))
    field("Views", listing.views)
    field("Favorers", listing.num_favorers)


def print_listing_summary(listing: Listing) -> None:
    heading("ID", listing.listing_id, listing.title)
    field("State", listing.state, indent=4)
    field("Quantity", listing.quantity, indent=4)
    field("Price", listing.price, indent=4)


def print_listing_product(product: ListingProduct, indent: int = 2) -> None:
    field("SKU", product.sku, indent=indent)
    for offering in product.offerings or []:
        typer.echo(f"{' ' * indent}Offering ID: {offering.offering_id}")
        field("Quantity", offering.quantity, indent=indent + 2)
        field("Price", offering.price, indent=indent + 2)
        field("Enabled", offering.is_enabled, indent=indent + 2)


def print_receipt(receipt: Receipt) -> None:
    typer.echo(f"Receipt {receipt.receipt_id}:")
    field("Status", receipt.status)
    field("Buyer", receipt.name)
    field("Paid", receipt.is_paid)
    field("Shipped", receipt.is_shipped)
    field("Total", receipt.grandtotal)
    field("Address", receipt.formatted_address)
    if receipt.message_from_buyer:
        field("Buyer Message", receipt.message_from_buyer)
    for shipment in receipt.shipments or []:
        field("Tracking", f"{shipment.carrier_name or '?'} {shipment.tracking_code or ''}".strip())


def print_receipt_summary(receipt: Receipt) -> None:
    heading("Receipt ID", receipt.receipt_id, receipt.status)
    field("Buyer", receipt.name, indent=4)
    field("Total", receipt.grandtotal, indent=4)


def print_transaction(txn: Transaction) -> None:
    typer.echo(f"Transaction {txn.transaction_id}:")
    field("Title", txn.title)
    field("Quantity", txn.quantity)
    field("Price", txn.price)
    field("SKU", txn.sku)
    field("Listing ID", txn.listing_id)


def print_transaction_summary(txn: Transaction) -> None:
    heading("Transaction ID", txn.transaction_id, txn.title)
    field("Quantity", txn.quantity, indent=4)
    field("Price", txn.price, indent=4)


def print_shipping_profile(profile: ShippingProfile) -> None:
    typer.echo(f"Shipping Profile {profile.shipping_profile_id}:")
    field("Title", profile.title)
    field("Origin Country", profile.origin_country_iso)
    field("Origin Postal Code", profile.origin_postal_code)
    field("Min Processing Days", profile.min_processing_days)
    field("Max Processing Days", profile.max_processing_days)
    for destination in profile.shipping_profile_destinations or []:
        where = destination.destination_country_iso or destination.destination_region or "everywhere"
        field(f"To {where}", destination.primary_cost)


def print_return_policy(policy: ReturnPolicy, indent: int = 2) -> None:
    field("Accepts Returns", policy.accepts_returns, indent=indent)
    field("Accepts Exchanges", policy.accepts_exchanges, indent=indent)
    if policy.return_deadline is not None:
        field("Return Deadline", f"{policy.return_deadline} days", indent=indent)


def print_taxonomy_node(node: TaxonomyNode, depth: int = 0) -> None:
    prefix = "  " * depth
    typer.echo(f"{prefix}ID: {node.id} - {node.name or '(unnamed)'}")
    for child in node.children or []:
        print_taxonomy_node(child, depth + 1)


# ============================================================================
# Printful
# ============================================================================


def print_product_summary(product: Product) -> None:
    typer.echo(f"\nProduct ID: {product.id}")
    field("Name", product.name)
    field("Type", product.product_type)
    field("Description", shorten(product.description, 100))
    field("Brand", product.brand)
    field("Variants", product.variant_count)


def print_product(product: Product) -> None:
    typer.echo("Product Details:")
    field("ID", product.id)
    field("Name", product.name)
    field("Type", product.product_type)
    field("Description", product.description)
    field("Brand", product.brand)
    field("Model", product.model)
    field("Image", product.image)
    field("Variants", product.variant_count)


def print_order_summary(order: Order) -> None:
    typer.echo(f"\nOrder ID: {order.id}")
    field("Status", order.status)
    field("Created", order.created)
    field("External ID", order.external_id)
    if order.costs is not None:
        field("Total", order.costs.total)


def print_order(order: Order) -> None:
    typer.echo("Order Details:")
    field("ID", order.id)
    field("Status", order.status)
    field("Created", order.created)
    field("Updated", order.updated)
    field("External ID", order.external_id)
    recipient = order.recipient
    if recipient is not None:
        field("Recipient", recipient.name)
        field(
            "Address",
            f"{recipient.address1}, {recipient.city}, {recipient.state_code or ''} {recipient.zip}",
        )
        field("Country", recipient.country_code)
    costs = order.costs
    if costs is not None:
        typer.echo("  Costs:")
        field("Subtotal", costs.subtotal, indent=4)
        field("Shipping", costs.shipping, indent=4)
        field("Tax", costs.tax, indent=4)
        field("Total", costs.total, indent=4)
    if order.items is not None:
        field("Items", len(order.items))
        for item in order.items:
            typer.echo(f"    - Variant ID: {item.variant_id}, Quantity: {item.quantity}")
