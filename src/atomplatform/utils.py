"""Utility helpers shared by the API clients and the CLI."""
from __future__ import annotations

import logging
from typing import Any, Iterable, Optional, Sequence, Tuple
from urllib.parse import quote

# Longest body excerpt carried on errors
BODY_PREVIEW_CHARS = 500


def setup_logging(level: int = logging.INFO) -> None:
    """Configure global logging style for CLI use.

    Args:
        level: Logging level passed to ``logging.basicConfig``.
    """

    logging.basicConfig(
        level=level,
        format="[%(levelname)s] %(message)s",
    )


def truncate(text: str, limit: int = BODY_PREVIEW_CHARS) -> str:
    """Return at most ``limit`` characters of ``text``."""

    return text[:limit]


def _render(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def build_query(params: Optional[Iterable[Tuple[str, Any]]]) -> str:
    """Encode ordered ``(key, value)`` pairs into a query string.

    Pairs whose value is ``None`` are skipped. Each value is percent-encoded
    on its own; commas stay literal so joined lists remain one value.

    Returns:
        ``""`` when nothing is left, otherwise ``"?k=v&..."``.
    """

    if not params:
        return ""
    parts = [
        f"{key}={quote(_render(value), safe=',')}"
        for key, value in params
        if value is not None
    ]
    if not parts:
        return ""
    return "?" + "&".join(parts)


def join_csv(values: Optional[Sequence[str]]) -> Optional[str]:
    """Join values with commas; an absent or empty list gives ``None``."""

    if not values:
        return None
    return ",".join(values)


def split_csv(raw: Optional[str]) -> Optional[list[str]]:
    """Split a comma-separated CLI value into trimmed, non-empty items."""

    if raw is None:
        return None
    return [item.strip() for item in raw.split(",") if item.strip()]
