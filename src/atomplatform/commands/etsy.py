"""``atomplatform etsy ...`` commands."""
from __future__ import annotations

import secrets
from typing import List, Optional

import typer

from .. import output
from ..etsy.models import (
    CreateDraftListingRequest,
    CreateReceiptShipmentRequest,
    CreateShippingProfileRequest,
    UpdateListingRequest,
)
from ..etsy.oauth import (
    build_authorization_url,
    code_challenge_for,
    exchange_code,
    generate_code_verifier,
    refresh_access_token,
)
from ..utils import split_csv
from .common import (
    LIMIT_OPTION,
    OFFSET_OPTION,
    cli_errors,
    endpoints,
    etsy_client,
    etsy_settings,
    json_output,
    parse_json_body,
    parse_query_params,
)

app = typer.Typer(help="Etsy API commands.", no_args_is_help=True)

INCLUDES_OPTION = typer.Option(
    None, "--includes", help="Include additional resources, comma-separated (e.g., images,shop,user)."
)


# ============================================================================
# Auth
# ============================================================================


@app.command()
@cli_errors
def ping(ctx: typer.Context) -> None:
    """Test API connectivity."""

    with etsy_client(ctx) as client:
        response = client.ping()
    if json_output(ctx):
        output.emit_json(response)
        return
    typer.echo("Ping successful!")
    output.field("Application ID", response.application_id)


@app.command()
def pkce() -> None:
    """Generate a PKCE code verifier and its S256 challenge."""

    verifier = generate_code_verifier()
    typer.echo(f"Code verifier:  {verifier}")
    typer.echo(f"Code challenge: {code_challenge_for(verifier)}")


@app.command(name="auth-url")
@cli_errors
def auth_url(
    ctx: typer.Context,
    redirect_uri: str = typer.Option(..., help="Redirect URI for OAuth callback"),
    scopes: List[str] = typer.Option(
        ..., "--scopes", help="OAuth scopes (space-separated or repeated)"
    ),
    state: Optional[str] = typer.Option(None, help="State parameter for CSRF protection (random if omitted)"),
    code_challenge: Optional[str] = typer.Option(
        None, help="PKCE code challenge; a verifier/challenge pair is generated if omitted"
    ),
) -> None:
    """Print the OAuth authorization URL."""

    settings = etsy_settings()
    requested = [scope for chunk in scopes for scope in chunk.split()]
    state = state or secrets.token_urlsafe(16)
    verifier = None
    if code_challenge is None:
        verifier = generate_code_verifier()
        code_challenge = code_challenge_for(verifier)

    url = build_authorization_url(
        client_id=settings.api_key,
        redirect_uri=redirect_uri,
        scopes=requested,
        state=state,
        code_challenge=code_challenge,
        connect_url=endpoints(ctx).etsy_connect_url,
    )
    typer.echo("Visit this URL to authorize your application:")
    typer.echo(f"\n{url}\n")
    typer.echo(f"State: {state}")
    if verifier is not None:
        typer.echo(f"Code verifier (needed for exchange-token): {verifier}")
    typer.echo("After authorizing, you'll be redirected to your callback URL with 'code' and 'state' parameters.")


@app.command(name="exchange-token")
@cli_errors
def exchange_token(
    ctx: typer.Context,
    redirect_uri: str = typer.Option(..., help="Redirect URI used in authorization"),
    code: str = typer.Option(..., help="Authorization code from OAuth callback"),
    code_verifier: str = typer.Option(..., help="Code verifier for PKCE"),
) -> None:
    """Exchange an authorization code for an access token."""

    settings = etsy_settings()
    token = exchange_code(
        client_id=settings.api_key,
        redirect_uri=redirect_uri,
        code=code,
        code_verifier=code_verifier,
        oauth_base=endpoints(ctx).etsy_oauth_base,
    )
    if json_output(ctx):
        output.emit_json(token)
        return
    typer.echo("Token exchange successful!")
    typer.echo(f"\nAccess Token: {token.access_token}")
    typer.echo(f"Refresh Token: {token.refresh_token}")
    typer.echo(f"Expires In: {token.expires_in} seconds")
    typer.echo("\nAdd to your .env file:")
    typer.echo(f"ETSY_ACCESS_TOKEN={token.access_token}")
    typer.echo(f"ETSY_REFRESH_TOKEN={token.refresh_token}")


@app.command(name="refresh-token")
@cli_errors
def refresh_token(
    ctx: typer.Context,
    refresh_token: Optional[str] = typer.Option(
        None, help="Refresh token (defaults to ETSY_REFRESH_TOKEN)"
    ),
) -> None:
    """Refresh the access token."""

    settings = etsy_settings()
    token_value = refresh_token or settings.refresh_token
    if not token_value:
        raise typer.BadParameter(
            "No refresh token given and ETSY_REFRESH_TOKEN is not set", param_hint="--refresh-token"
        )
    token = refresh_access_token(
        client_id=settings.api_key,
        refresh_token=token_value,
        oauth_base=endpoints(ctx).etsy_oauth_base,
    )
    if json_output(ctx):
        output.emit_json(token)
        return
    typer.echo("Token refresh successful!")
    typer.echo(f"\nAccess Token: {token.access_token}")
    typer.echo(f"Refresh Token: {token.refresh_token}")
    typer.echo(f"Expires In: {token.expires_in} seconds")
    typer.echo("\nUpdate your .env file:")
    typer.echo(f"ETSY_ACCESS_TOKEN={token.access_token}")
    typer.echo(f"ETSY_REFRESH_TOKEN={token.refresh_token}")


# ============================================================================
# Users and shops
# ============================================================================


@app.command()
@cli_errors
def me(ctx: typer.Context) -> None:
    """Get the authenticated user."""

    with etsy_client(ctx) as client:
        user_info = client.get_me()
    if json_output(ctx):
        output.emit_json(user_info)
        return
    typer.echo("Authenticated User:")
    output.field("User ID", user_info.user_id)
    output.field("Email", user_info.primary_email)
    output.field("First Name", user_info.first_name)
    output.field("Last Name", user_info.last_name)


@app.command()
@cli_errors
def user(ctx: typer.Context, user_id: int = typer.Argument(..., help="User ID")) -> None:
    """Get a user by ID."""

    with etsy_client(ctx) as client:
        user_info = client.get_user(user_id)
    if json_output(ctx):
        output.emit_json(user_info)
        return
    typer.echo(f"User {user_info.user_id}:")
    output.field("First Name", user_info.first_name)
    output.field("Last Name", user_info.last_name)


@app.command()
@cli_errors
def shop(ctx: typer.Context, shop_id: int = typer.Argument(..., help="Shop ID")) -> None:
    """Get a shop by ID."""

    with etsy_client(ctx) as client:
        result = client.get_shop(shop_id)
    if json_output(ctx):
        output.emit_json(result)
    else:
        output.print_shop(result)


@app.command(name="shop-by-user")
@cli_errors
def shop_by_user(ctx: typer.Context, user_id: int = typer.Argument(..., help="User ID")) -> None:
    """Get the shop owned by a user."""

    with etsy_client(ctx) as client:
        result = client.get_shop_by_owner_user_id(user_id)
    if json_output(ctx):
        output.emit_json(result)
    else:
        output.print_shop(result)


@app.command(name="find-shops")
@cli_errors
def find_shops(
    ctx: typer.Context,
    name: str = typer.Option(..., help="Shop name to search"),
    limit: Optional[int] = LIMIT_OPTION,
    offset: Optional[int] = OFFSET_OPTION,
) -> None:
    """Find shops by name (always prints JSON)."""

    with etsy_client(ctx) as client:
        result = client.find_shops(name, limit=limit, offset=offset)
    output.emit_json(result)


@app.command(name="shop-sections")
@cli_errors
def shop_sections(ctx: typer.Context, shop_id: int = typer.Argument(..., help="Shop ID")) -> None:
    """Get shop sections."""

    with etsy_client(ctx) as client:
        response = client.get_shop_sections(shop_id)
    if json_output(ctx):
        output.emit_json(response)
        return
    typer.echo(f"Found {response.count} sections:")
    for section in response.results:
        typer.echo(f"\n  Section ID: {section.shop_section_id}")
        output.field("Title", section.title)
        output.field("Rank", section.rank)
        output.field("Active Listings", section.active_listing_count)


# ============================================================================
# Listings
# ============================================================================


@app.command()
@cli_errors
def listing(
    ctx: typer.Context,
    listing_id: int = typer.Argument(..., help="Listing ID"),
    includes: Optional[str] = INCLUDES_OPTION,
) -> None:
    """Get a listing by ID."""

    with etsy_client(ctx) as client:
        result = client.get_listing(listing_id, includes=split_csv(includes))
    if json_output(ctx):
        output.emit_json(result)
    else:
        output.print_listing(result)


@app.command()
@cli_errors
def listings(
    ctx: typer.Context,
    shop_id: int = typer.Option(..., help="Shop ID"),
    state: Optional[str] = typer.Option(None, help="Listing state (active, inactive, draft, expired, sold_out)"),
    limit: Optional[int] = LIMIT_OPTION,
    offset: Optional[int] = OFFSET_OPTION,
    sort_on: Optional[str] = typer.Option(None, help="Sort field (created, updated, price, score)"),
    sort_order: Optional[str] = typer.Option(None, help="Sort order (asc, desc)"),
    includes: Optional[str] = INCLUDES_OPTION,
) -> None:
    """Get listings of a shop."""

    with etsy_client(ctx) as client:
        response = client.get_listings_by_shop(
            shop_id,
            state=state,
            limit=limit,
            offset=offset,
            sort_on=sort_on,
            sort_order=sort_order,
            includes=split_csv(includes),
        )
    if json_output(ctx):
        output.emit_json(response)
        return
    typer.echo(f"Found {response.count} listings:")
    for item in response.results:
        output.print_listing_summary(item)


@app.command(name="active-listings")
@cli_errors
def active_listings(
    ctx: typer.Context,
    shop_id: int = typer.Option(..., help="Shop ID"),
    limit: Optional[int] = LIMIT_OPTION,
    offset: Optional[int] = OFFSET_OPTION,
    keywords: Optional[str] = typer.Option(None, help="Search keywords"),
) -> None:
    """Get active listings of a shop."""

    with etsy_client(ctx) as client:
        response = client.get_active_listings_by_shop(
            shop_id, limit=limit, offset=offset, keywords=keywords
        )
    if json_output(ctx):
        output.emit_json(response)
        return
    typer.echo(f"Found {response.count} active listings:")
    for item in response.results:
        output.print_listing_summary(item)


@app.command(name="featured-listings")
@cli_errors
def featured_listings(
    ctx: typer.Context,
    shop_id: int = typer.Option(..., help="Shop ID"),
    limit: Optional[int] = LIMIT_OPTION,
    offset: Optional[int] = OFFSET_OPTION,
) -> None:
    """Get featured listings of a shop."""

    with etsy_client(ctx) as client:
        response = client.get_featured_listings_by_shop(shop_id, limit=limit, offset=offset)
    if json_output(ctx):
        output.emit_json(response)
        return
    typer.echo(f"Found {response.count} featured listings:")
    for item in response.results:
        output.print_listing_summary(item)


@app.command(name="create-listing")
@cli_errors
def create_listing(
    ctx: typer.Context,
    shop_id: int = typer.Option(..., help="Shop ID"),
    title: str = typer.Option(..., help="Listing title"),
    description: str = typer.Option(..., help="Listing description"),
    price: float = typer.Option(..., help="Price in shop currency"),
    quantity: int = typer.Option(..., help="Quantity available"),
    who_made: str = typer.Option(..., help="Who made it (i_did, someone_else, collective)"),
    when_made: str = typer.Option(..., help="When it was made (made_to_order, 2020_2024, ...)"),
    taxonomy_id: int = typer.Option(..., help="Taxonomy ID for categorization"),
    shipping_profile_id: Optional[int] = typer.Option(None, help="Shipping profile ID"),
    return_policy_id: Optional[int] = typer.Option(None, help="Return policy ID"),
    tags: Optional[str] = typer.Option(None, help="Tags (comma-separated)"),
    materials: Optional[str] = typer.Option(None, help="Materials (comma-separated)"),
    listing_type: Optional[str] = typer.Option(None, help="Listing type (physical, download)"),
) -> None:
    """Create a draft listing."""

    request = CreateDraftListingRequest(
        quantity=quantity,
        title=title,
        description=description,
        price=price,
        who_made=who_made,
        when_made=when_made,
        taxonomy_id=taxonomy_id,
        shipping_profile_id=shipping_profile_id,
        return_policy_id=return_policy_id,
        tags=split_csv(tags),
        materials=split_csv(materials),
        listing_type=listing_type,
    )
    with etsy_client(ctx) as client:
        result = client.create_draft_listing(shop_id, request)
    if json_output(ctx):
        output.emit_json(result)
        return
    typer.echo("Listing created successfully!")
    output.print_listing(result)


@app.command(name="update-listing")
@cli_errors
def update_listing(
    ctx: typer.Context,
    shop_id: int = typer.Option(..., help="Shop ID"),
    listing_id: int = typer.Option(..., help="Listing ID"),
    title: Optional[str] = typer.Option(None, help="Listing title"),
    description: Optional[str] = typer.Option(None, help="Listing description"),
    price: Optional[float] = typer.Option(None, help="Price in shop currency"),
    quantity: Optional[int] = typer.Option(None, help="Quantity available"),
    state: Optional[str] = typer.Option(None, help="Listing state (active, inactive, draft)"),
    tags: Optional[str] = typer.Option(None, help="Tags (comma-separated)"),
) -> None:
    """Update a listing; only the given fields change."""

    request = UpdateListingRequest(
        title=title,
        description=description,
        price=price,
        quantity=quantity,
        state=state,
        tags=split_csv(tags),
    )
    with etsy_client(ctx) as client:
        result = client.update_listing(shop_id, listing_id, request)
    if json_output(ctx):
        output.emit_json(result)
        return
    typer.echo("Listing updated successfully!")
    output.print_listing(result)


@app.command(name="delete-listing")
@cli_errors
def delete_listing(
    ctx: typer.Context,
    shop_id: int = typer.Option(..., help="Shop ID"),
    listing_id: int = typer.Option(..., help="Listing ID"),
) -> None:
    """Delete a listing."""

    with etsy_client(ctx) as client:
        client.delete_listing(shop_id, listing_id)
    typer.echo(f"Listing {listing_id} deleted successfully!")


# ============================================================================
# Listing images and inventory
# ============================================================================


@app.command(name="listing-images")
@cli_errors
def listing_images(ctx: typer.Context, listing_id: int = typer.Argument(..., help="Listing ID")) -> None:
    """Get the images of a listing."""

    with etsy_client(ctx) as client:
        response = client.get_listing_images(listing_id)
    if json_output(ctx):
        output.emit_json(response)
        return
    typer.echo(f"Found {response.count} images:")
    for image in response.results:
        typer.echo(f"\n  Image ID: {image.listing_image_id}")
        output.field("Rank", image.rank)
        output.field("URL (570xN)", image.url_570xN)
        output.field("Alt Text", image.alt_text)


@app.command(name="listing-image")
@cli_errors
def listing_image(
    ctx: typer.Context,
    listing_id: int = typer.Option(..., help="Listing ID"),
    image_id: int = typer.Option(..., help="Image ID"),
) -> None:
    """Get a single listing image."""

    with etsy_client(ctx) as client:
        image = client.get_listing_image(listing_id, image_id)
    if json_output(ctx):
        output.emit_json(image)
        return
    typer.echo(f"Image {image.listing_image_id}:")
    output.field("Listing ID", image.listing_id)
    output.field("Full URL", image.url_fullxfull)
    output.field("Width", image.full_width)
    output.field("Height", image.full_height)


@app.command(name="delete-listing-image")
@cli_errors
def delete_listing_image(
    ctx: typer.Context,
    shop_id: int = typer.Option(..., help="Shop ID"),
    listing_id: int = typer.Option(..., help="Listing ID"),
    image_id: int = typer.Option(..., help="Image ID"),
) -> None:
    """Delete a listing image."""

    with etsy_client(ctx) as client:
        client.delete_listing_image(shop_id, listing_id, image_id)
    typer.echo(f"Image {image_id} deleted successfully!")


@app.command(name="listing-inventory")
@cli_errors
def listing_inventory(ctx: typer.Context, listing_id: int = typer.Argument(..., help="Listing ID")) -> None:
    """Get the inventory of a listing."""

    with etsy_client(ctx) as client:
        inventory = client.get_listing_inventory(listing_id)
    if json_output(ctx):
        output.emit_json(inventory)
        return
    typer.echo(f"Inventory for listing {listing_id}:")
    output.field("Products", len(inventory.products))
    for item in inventory.products:
        typer.echo(f"\n  Product ID: {item.product_id}")
        output.print_listing_product(item, indent=4)


@app.command(name="listing-product")
@cli_errors
def listing_product(
    ctx: typer.Context,
    listing_id: int = typer.Option(..., help="Listing ID"),
    product_id: int = typer.Option(..., help="Product ID"),
) -> None:
    """Get one inventory product of a listing."""

    with etsy_client(ctx) as client:
        item = client.get_listing_product(listing_id, product_id)
    if json_output(ctx):
        output.emit_json(item)
        return
    typer.echo(f"Product {item.product_id}:")
    output.print_listing_product(item)


# ============================================================================
# Receipts and transactions
# ============================================================================


@app.command()
@cli_errors
def receipts(
    ctx: typer.Context,
    shop_id: int = typer.Option(..., help="Shop ID"),
    limit: Optional[int] = LIMIT_OPTION,
    offset: Optional[int] = OFFSET_OPTION,
    sort_on: Optional[str] = typer.Option(None, help="Sort field (created, updated)"),
    sort_order: Optional[str] = typer.Option(None, help="Sort order (asc, desc)"),
    was_paid: Optional[bool] = typer.Option(None, "--was-paid/--not-paid", help="Filter by payment"),
    was_shipped: Optional[bool] = typer.Option(None, "--was-shipped/--not-shipped", help="Filter by shipment"),
    was_delivered: Optional[bool] = typer.Option(
        None, "--was-delivered/--not-delivered", help="Filter by delivery"
    ),
    min_created: Optional[int] = typer.Option(None, help="Minimum created timestamp"),
    max_created: Optional[int] = typer.Option(None, help="Maximum created timestamp"),
    min_last_modified: Optional[int] = typer.Option(None, help="Minimum last-modified timestamp"),
    max_last_modified: Optional[int] = typer.Option(None, help="Maximum last-modified timestamp"),
) -> None:
    """Get shop receipts (orders)."""

    with etsy_client(ctx) as client:
        response = client.get_shop_receipts(
            shop_id,
            min_created=min_created,
            max_created=max_created,
            min_last_modified=min_last_modified,
            max_last_modified=max_last_modified,
            limit=limit,
            offset=offset,
            sort_on=sort_on,
            sort_order=sort_order,
            was_paid=was_paid,
            was_shipped=was_shipped,
            was_delivered=was_delivered,
        )
    if json_output(ctx):
        output.emit_json(response)
        return
    typer.echo(f"Found {response.count} receipts:")
    for item in response.results:
        output.print_receipt_summary(item)


@app.command()
@cli_errors
def receipt(
    ctx: typer.Context,
    shop_id: int = typer.Option(..., help="Shop ID"),
    receipt_id: int = typer.Option(..., help="Receipt ID"),
) -> None:
    """Get a single receipt."""

    with etsy_client(ctx) as client:
        result = client.get_shop_receipt(shop_id, receipt_id)
    if json_output(ctx):
        output.emit_json(result)
    else:
        output.print_receipt(result)


@app.command(name="create-shipment")
@cli_errors
def create_shipment(
    ctx: typer.Context,
    shop_id: int = typer.Option(..., help="Shop ID"),
    receipt_id: int = typer.Option(..., help="Receipt ID"),
    tracking_code: Optional[str] = typer.Option(None, help="Tracking code"),
    carrier_name: Optional[str] = typer.Option(None, help="Carrier name"),
    send_bcc: Optional[bool] = typer.Option(None, "--send-bcc/--no-send-bcc", help="Send BCC email to seller"),
    note_to_buyer: Optional[str] = typer.Option(None, help="Note to buyer"),
) -> None:
    """Attach shipment tracking to a receipt."""

    request = CreateReceiptShipmentRequest(
        tracking_code=tracking_code,
        carrier_name=carrier_name,
        send_bcc=send_bcc,
        note_to_buyer=note_to_buyer,
    )
    with etsy_client(ctx) as client:
        result = client.create_receipt_shipment(shop_id, receipt_id, request)
    if json_output(ctx):
        output.emit_json(result)
        return
    typer.echo("Shipment created successfully!")
    output.print_receipt(result)


@app.command()
@cli_errors
def transactions(
    ctx: typer.Context,
    shop_id: int = typer.Option(..., help="Shop ID"),
    limit: Optional[int] = LIMIT_OPTION,
    offset: Optional[int] = OFFSET_OPTION,
) -> None:
    """Get shop transactions."""

    with etsy_client(ctx) as client:
        response = client.get_shop_transactions(shop_id, limit=limit, offset=offset)
    if json_output(ctx):
        output.emit_json(response)
        return
    typer.echo(f"Found {response.count} transactions:")
    for txn in response.results:
        output.print_transaction_summary(txn)


@app.command()
@cli_errors
def transaction(
    ctx: typer.Context,
    shop_id: int = typer.Option(..., help="Shop ID"),
    transaction_id: int = typer.Option(..., help="Transaction ID"),
) -> None:
    """Get a single transaction."""

    with etsy_client(ctx) as client:
        txn = client.get_shop_receipt_transaction(shop_id, transaction_id)
    if json_output(ctx):
        output.emit_json(txn)
    else:
        output.print_transaction(txn)


@app.command(name="receipt-transactions")
@cli_errors
def receipt_transactions(
    ctx: typer.Context,
    shop_id: int = typer.Option(..., help="Shop ID"),
    receipt_id: int = typer.Option(..., help="Receipt ID"),
) -> None:
    """Get the transactions of a receipt."""

    with etsy_client(ctx) as client:
        response = client.get_shop_receipt_transactions(shop_id, receipt_id)
    if json_output(ctx):
        output.emit_json(response)
        return
    typer.echo(f"Found {response.count} transactions for receipt {receipt_id}:")
    for txn in response.results:
        output.print_transaction_summary(txn)


# ============================================================================
# Shipping profiles and return policies
# ============================================================================


@app.command(name="shipping-profiles")
@cli_errors
def shipping_profiles(ctx: typer.Context, shop_id: int = typer.Argument(..., help="Shop ID")) -> None:
    """Get shop shipping profiles."""

    with etsy_client(ctx) as client:
        response = client.get_shop_shipping_profiles(shop_id)
    if json_output(ctx):
        output.emit_json(response)
        return
    typer.echo(f"Found {response.count} shipping profiles:")
    for profile in response.results:
        typer.echo(f"\n  Profile ID: {profile.shipping_profile_id}")
        output.field("Title", profile.title)
        output.field("Origin", profile.origin_country_iso)
        if profile.min_processing_days is not None and profile.max_processing_days is not None:
            output.field(
                "Processing", f"{profile.min_processing_days} - {profile.max_processing_days} days"
            )


@app.command(name="shipping-profile")
@cli_errors
def shipping_profile(
    ctx: typer.Context,
    shop_id: int = typer.Option(..., help="Shop ID"),
    shipping_profile_id: int = typer.Option(..., help="Shipping profile ID"),
) -> None:
    """Get a single shipping profile."""

    with etsy_client(ctx) as client:
        profile = client.get_shop_shipping_profile(shop_id, shipping_profile_id)
    if json_output(ctx):
        output.emit_json(profile)
    else:
        output.print_shipping_profile(profile)


@app.command(name="create-shipping-profile")
@cli_errors
def create_shipping_profile(
    ctx: typer.Context,
    shop_id: int = typer.Option(..., help="Shop ID"),
    title: str = typer.Option(..., help="Profile title"),
    origin_country_iso: str = typer.Option(..., help="Origin country ISO code"),
    primary_cost: float = typer.Option(..., help="Primary cost (first item)"),
    secondary_cost: float = typer.Option(..., help="Secondary cost (additional items)"),
    min_processing_time: int = typer.Option(..., help="Minimum processing time in days"),
    max_processing_time: int = typer.Option(..., help="Maximum processing time in days"),
    origin_postal_code: Optional[str] = typer.Option(None, help="Origin postal code"),
    destination_country_iso: Optional[str] = typer.Option(None, help="Destination country ISO code"),
    destination_region: Optional[str] = typer.Option(None, help="Destination region (eu, non_eu, none)"),
) -> None:
    """Create a shipping profile."""

    request = CreateShippingProfileRequest(
        title=title,
        origin_country_iso=origin_country_iso,
        primary_cost=primary_cost,
        secondary_cost=secondary_cost,
        min_processing_time=min_processing_time,
        max_processing_time=max_processing_time,
        origin_postal_code=origin_postal_code,
        destination_country_iso=destination_country_iso,
        destination_region=destination_region,
    )
    with etsy_client(ctx) as client:
        profile = client.create_shop_shipping_profile(shop_id, request)
    if json_output(ctx):
        output.emit_json(profile)
        return
    typer.echo("Shipping profile created successfully!")
    output.field("Profile ID", profile.shipping_profile_id)


@app.command(name="delete-shipping-profile")
@cli_errors
def delete_shipping_profile(
    ctx: typer.Context,
    shop_id: int = typer.Option(..., help="Shop ID"),
    shipping_profile_id: int = typer.Option(..., help="Shipping profile ID"),
) -> None:
    """Delete a shipping profile."""

    with etsy_client(ctx) as client:
        client.delete_shop_shipping_profile(shop_id, shipping_profile_id)
    typer.echo(f"Shipping profile {shipping_profile_id} deleted successfully!")


@app.command(name="return-policies")
@cli_errors
def return_policies(ctx: typer.Context, shop_id: int = typer.Argument(..., help="Shop ID")) -> None:
    """Get shop return policies."""

    with etsy_client(ctx) as client:
        response = client.get_shop_return_policies(shop_id)
    if json_output(ctx):
        output.emit_json(response)
        return
    typer.echo(f"Found {response.count} return policies:")
    for policy in response.results:
        typer.echo(f"\n  Policy ID: {policy.return_policy_id}")
        output.print_return_policy(policy)


@app.command(name="return-policy")
@cli_errors
def return_policy(
    ctx: typer.Context,
    shop_id: int = typer.Option(..., help="Shop ID"),
    return_policy_id: int = typer.Option(..., help="Return policy ID"),
) -> None:
    """Get a single return policy."""

    with etsy_client(ctx) as client:
        policy = client.get_shop_return_policy(shop_id, return_policy_id)
    if json_output(ctx):
        output.emit_json(policy)
        return
    typer.echo(f"Return Policy {policy.return_policy_id}:")
    output.print_return_policy(policy)


# ============================================================================
# Taxonomy, reviews, payments
# ============================================================================


@app.command(name="taxonomy-nodes")
@cli_errors
def taxonomy_nodes(ctx: typer.Context) -> None:
    """Get the seller taxonomy tree."""

    with etsy_client(ctx) as client:
        response = client.get_seller_taxonomy_nodes()
    if json_output(ctx):
        output.emit_json(response)
        return
    typer.echo(f"Found {response.count} taxonomy nodes:")
    for node in response.results:
        output.print_taxonomy_node(node)


@app.command(name="taxonomy-properties")
@cli_errors
def taxonomy_properties(
    ctx: typer.Context, taxonomy_id: int = typer.Argument(..., help="Taxonomy ID")
) -> None:
    """Get the properties of a taxonomy node."""

    with etsy_client(ctx) as client:
        response = client.get_properties_by_taxonomy_id(taxonomy_id)
    if json_output(ctx):
        output.emit_json(response)
        return
    typer.echo(f"Found {response.count} properties for taxonomy {taxonomy_id}:")
    for prop in response.results:
        typer.echo(f"\n  Property ID: {prop.property_id}")
        output.field("Name", prop.name)
        output.field("Display Name", prop.display_name)
        output.field("Required", prop.is_required)


@app.command(name="shop-reviews")
@cli_errors
def shop_reviews(
    ctx: typer.Context,
    shop_id: int = typer.Option(..., help="Shop ID"),
    limit: Optional[int] = LIMIT_OPTION,
    offset: Optional[int] = OFFSET_OPTION,
    min_created: Optional[int] = typer.Option(None, help="Minimum created timestamp"),
    max_created: Optional[int] = typer.Option(None, help="Maximum created timestamp"),
) -> None:
    """Get shop reviews."""

    with etsy_client(ctx) as client:
        response = client.get_reviews_by_shop(
            shop_id, limit=limit, offset=offset, min_created=min_created, max_created=max_created
        )
    if json_output(ctx):
        output.emit_json(response)
        return
    typer.echo(f"Found {response.count} reviews:")
    for review in response.results:
        typer.echo(f"\n  Listing ID: {review.listing_id}")
        if review.rating is not None:
            output.field("Rating", f"{review.rating}/5")
        output.field("Review", output.shorten(review.review, 100))


@app.command(name="listing-reviews")
@cli_errors
def listing_reviews(
    ctx: typer.Context,
    listing_id: int = typer.Option(..., help="Listing ID"),
    limit: Optional[int] = LIMIT_OPTION,
    offset: Optional[int] = OFFSET_OPTION,
) -> None:
    """Get reviews of a listing."""

    with etsy_client(ctx) as client:
        response = client.get_reviews_by_listing(listing_id, limit=limit, offset=offset)
    if json_output(ctx):
        output.emit_json(response)
        return
    typer.echo(f"Found {response.count} reviews for listing {listing_id}:")
    for review in response.results:
        typer.echo("")
        if review.rating is not None:
            output.field("Rating", f"{review.rating}/5")
        output.field("Review", review.review)


@app.command(name="ledger-entries")
@cli_errors
def ledger_entries(
    ctx: typer.Context,
    shop_id: int = typer.Option(..., help="Shop ID"),
    limit: Optional[int] = LIMIT_OPTION,
    offset: Optional[int] = OFFSET_OPTION,
    min_created: Optional[int] = typer.Option(None, help="Minimum created timestamp"),
    max_created: Optional[int] = typer.Option(None, help="Maximum created timestamp"),
) -> None:
    """Get payment account ledger entries."""

    with etsy_client(ctx) as client:
        response = client.get_shop_payment_account_ledger_entries(
            shop_id, min_created=min_created, max_created=max_created, limit=limit, offset=offset
        )
    if json_output(ctx):
        output.emit_json(response)
        return
    typer.echo(f"Found {response.count} ledger entries:")
    for entry in response.results:
        typer.echo(f"\n  Entry ID: {entry.entry_id}")
        output.field("Description", entry.description)
        if entry.amount is not None and entry.currency:
            output.field("Amount", f"{entry.amount} {entry.currency}")
        output.field("Balance", entry.balance)


@app.command(name="receipt-payments")
@cli_errors
def receipt_payments(
    ctx: typer.Context,
    shop_id: int = typer.Option(..., help="Shop ID"),
    receipt_id: int = typer.Option(..., help="Receipt ID"),
) -> None:
    """Get the payments of a receipt."""

    with etsy_client(ctx) as client:
        response = client.get_shop_receipt_payments(shop_id, receipt_id)
    if json_output(ctx):
        output.emit_json(response)
        return
    typer.echo(f"Found {response.count} payments for receipt {receipt_id}:")
    for payment in response.results:
        typer.echo(f"\n  Payment ID: {payment.payment_id}")
        output.field("Status", payment.status)
        output.field("Gross", payment.amount_gross)


# ============================================================================
# Raw API
# ============================================================================


@app.command(name="get")
@cli_errors
def raw_get(
    ctx: typer.Context,
    path: str = typer.Argument(..., help="API path (e.g., shops/12345/listings)"),
    params: Optional[List[str]] = typer.Option(
        None, "--params", help="Query parameters as key=value (comma-separated or repeated)"
    ),
) -> None:
    """Make a raw GET request to any Etsy API endpoint."""

    query = parse_query_params(params)
    with etsy_client(ctx) as client:
        output.emit_json(client.raw_get(path, query))


@app.command(name="post")
@cli_errors
def raw_post(
    ctx: typer.Context,
    path: str = typer.Argument(..., help="API path (e.g., shops/12345/listings)"),
    body: str = typer.Option(..., help="JSON body"),
) -> None:
    """Make a raw POST request to any Etsy API endpoint."""

    payload = parse_json_body(body)
    with etsy_client(ctx) as client:
        output.emit_json(client.raw_post(path, payload))


@app.command(name="put")
@cli_errors
def raw_put(
    ctx: typer.Context,
    path: str = typer.Argument(..., help="API path (e.g., listings/12345/inventory)"),
    body: str = typer.Option(..., help="JSON body"),
) -> None:
    """Make a raw PUT request to any Etsy API endpoint."""

    payload = parse_json_body(body)
    with etsy_client(ctx) as client:
        output.emit_json(client.raw_put(path, payload))


@app.command(name="delete")
@cli_errors
def raw_delete(
    ctx: typer.Context,
    path: str = typer.Argument(..., help="API path (e.g., shops/12345/listings/67890)"),
) -> None:
    """Make a raw DELETE request to any Etsy API endpoint."""

    with etsy_client(ctx) as client:
        response = client.raw_delete(path)
    if response is None:
        typer.echo("Deleted successfully!")
    else:
        output.emit_json(response)
