"""Helpers shared by the provider command groups."""
from __future__ import annotations

import functools
import json
from typing import Any, Callable, Dict, List, Optional, TypeVar

import typer

from ..config import EndpointConfig, EtsySettings, MissingCredentialError, PrintfulSettings
from ..etsy import EtsyAPIClient
from ..printful import PrintfulAPIClient
from ..transport import PlatformAPIError

F = TypeVar("F", bound=Callable[..., Any])

LIMIT_OPTION = typer.Option(None, "--limit", "-l", help="Limit number of results.")
OFFSET_OPTION = typer.Option(None, "--offset", "-o", help="Offset for pagination.")


def cli_errors(func: F) -> F:
    """Report client errors as ``Error: ...`` on stderr and exit with status 1."""

    @functools.wraps(func)
    def wrapper(*args: Any, **kwargs: Any) -> Any:
        try:
            return func(*args, **kwargs)
        except (PlatformAPIError, MissingCredentialError) as exc:
            typer.echo(f"Error: {exc}", err=True)
            raise typer.Exit(code=1) from exc

    return wrapper  # type: ignore[return-value]


def json_output(ctx: typer.Context) -> bool:
    return bool(ctx.obj and ctx.obj.get("json"))


def endpoints(ctx: typer.Context) -> EndpointConfig:
    if ctx.obj and ctx.obj.get("endpoints") is not None:
        return ctx.obj["endpoints"]
    return EndpointConfig()


def etsy_settings() -> EtsySettings:
    return EtsySettings.from_env()


def etsy_client(ctx: typer.Context) -> EtsyAPIClient:
    """Build an Etsy client from the environment and configured endpoints."""

    settings = etsy_settings()
    return EtsyAPIClient(
        api_key=settings.api_key,
        access_token=settings.access_token,
        api_base=endpoints(ctx).etsy_api_base,
    )


def printful_client(ctx: typer.Context) -> PrintfulAPIClient:
    settings = PrintfulSettings.from_env()
    return PrintfulAPIClient(api_key=settings.api_key, api_base=endpoints(ctx).printful_api_base)


def parse_json_body(raw: str) -> Any:
    try:
        return json.loads(raw)
    except ValueError as exc:
        raise typer.BadParameter(f"Invalid JSON body: {exc}", param_hint="--body") from exc


def parse_query_params(raw: Optional[List[str]]) -> Dict[str, str]:
    """Turn ``key=value`` items (repeated or comma-separated) into a mapping."""

    params: Dict[str, str] = {}
    for chunk in raw or []:
        for item in chunk.split(","):
            if not item:
                continue
            key, sep, value = item.partition("=")
            if not sep or not key:
                raise typer.BadParameter(f"Expected key=value, got '{item}'", param_hint="--params")
            params[key] = value
    return params
