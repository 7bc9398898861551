"""``atomplatform printful ...`` commands."""
from __future__ import annotations

from typing import Optional

import typer

from .. import output
from ..printful.models import Recipient, ShippingRateItem, ShippingRateRequest
from .common import LIMIT_OPTION, OFFSET_OPTION, cli_errors, json_output, printful_client

app = typer.Typer(help="Printful API commands.", no_args_is_help=True)


@app.command()
@cli_errors
def products(
    ctx: typer.Context,
    limit: Optional[int] = LIMIT_OPTION,
    offset: Optional[int] = OFFSET_OPTION,
) -> None:
    """List all products."""

    with printful_client(ctx) as client:
        response = client.get_products(limit=limit, offset=offset)
    if json_output(ctx):
        output.emit_json(response)
        return
    typer.echo(f"Found {len(response.results)} products:")
    for product in response.results:
        output.print_product_summary(product)
    if response.paging is not None:
        paging = response.paging
        typer.echo(f"\nTotal: {paging.total}, Offset: {paging.offset}, Limit: {paging.limit}")


@app.command()
@cli_errors
def product(ctx: typer.Context, product_id: int = typer.Argument(..., help="Product ID")) -> None:
    """Get product details by ID."""

    with printful_client(ctx) as client:
        response = client.get_product(product_id)
    if json_output(ctx):
        output.emit_json(response)
    else:
        output.print_product(response.result)


@app.command()
@cli_errors
def orders(
    ctx: typer.Context,
    limit: Optional[int] = LIMIT_OPTION,
    offset: Optional[int] = OFFSET_OPTION,
) -> None:
    """List all orders."""

    with printful_client(ctx) as client:
        response = client.get_orders(limit=limit, offset=offset)
    if json_output(ctx):
        output.emit_json(response)
        return
    typer.echo(f"Found {len(response.results)} orders:")
    for order in response.results:
        output.print_order_summary(order)
    if response.paging is not None:
        paging = response.paging
        typer.echo(f"\nTotal: {paging.total}, Offset: {paging.offset}, Limit: {paging.limit}")


@app.command()
@cli_errors
def order(ctx: typer.Context, order_id: int = typer.Argument(..., help="Order ID")) -> None:
    """Get order details by ID."""

    with printful_client(ctx) as client:
        response = client.get_order(order_id)
    if json_output(ctx):
        output.emit_json(response)
    else:
        output.print_order(response.result)


@app.command(name="shipping-rates")
@cli_errors
def shipping_rates(
    ctx: typer.Context,
    variant_id: int = typer.Option(..., help="Variant ID"),
    quantity: int = typer.Option(..., help="Quantity"),
    name: str = typer.Option(..., help="Recipient name"),
    address1: str = typer.Option(..., help="Address line 1"),
    city: str = typer.Option(..., help="City"),
    country_code: str = typer.Option(..., help="Country code (e.g., US, GB)"),
    zip_code: str = typer.Option(..., "--zip", help="ZIP/Postal code"),
    state_code: Optional[str] = typer.Option(None, help="State code"),
    address2: Optional[str] = typer.Option(None, help="Address line 2"),
    phone: Optional[str] = typer.Option(None, help="Phone number"),
    email: Optional[str] = typer.Option(None, help="Email"),
) -> None:
    """Get shipping rates for a single variant."""

    request = ShippingRateRequest(
        recipient=Recipient(
            name=name,
            address1=address1,
            address2=address2,
            city=city,
            state_code=state_code,
            country_code=country_code,
            zip=zip_code,
            phone=phone,
            email=email,
        ),
        items=[ShippingRateItem(variant_id=variant_id, quantity=quantity)],
    )
    with printful_client(ctx) as client:
        response = client.get_shipping_rates(request)
    if json_output(ctx):
        output.emit_json(response)
        return
    typer.echo("Available Shipping Rates:")
    for rate in response.results:
        typer.echo(f"\n  ID: {rate.id}")
        output.field("Name", rate.name)
        output.field("Rate", f"{rate.rate} {rate.currency}")
        output.field("Delivery", f"{rate.min_days} - {rate.max_days} days")
