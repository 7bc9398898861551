"""HTTP transport shared by the Etsy and Printful clients.

Every request goes through :meth:`HTTPTransport.send`, which performs exactly
one call and classifies the outcome:

1. the request never completed -> :class:`TransportError`
2. non-2xx with a body in the provider's error shape -> :class:`APIError`
3. non-2xx with any other body -> :class:`APIError` built from status and body
4. 2xx whose body does not decode into the expected type -> :class:`DecodeError`

Nothing is retried; retry policy belongs to the caller.
"""
from __future__ import annotations

import json
import logging
from typing import Any, Callable, Dict, Iterable, Mapping, Optional, Tuple, Type, TypeVar

import requests
from pydantic import BaseModel, ValidationError

from .utils import build_query, truncate

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)

# Parses an error body into ``(code, message)``; ``None`` when the shape does not match
ErrorParser = Callable[[str], Optional[Tuple[str, str]]]

# Default for ``json_body``; ``None`` is a real body and is sent as JSON null
NO_BODY: Any = object()


class PlatformAPIError(Exception):
    """Base exception for all API client errors."""
    pass


class TransportError(PlatformAPIError):
    """The request never completed (connection, DNS, TLS, timeout)."""

    def __init__(self, method: str, url: str, cause: BaseException):
        super().__init__(f"{method} {url} failed: {cause}")
        self.method = method
        self.url = url
        self.cause = cause


class APIError(PlatformAPIError):
    """The remote API answered with a non-2xx status."""

    def __init__(
        self,
        status_code: int,
        code: str,
        message: str,
        body: str = "",
    ):
        super().__init__(f"API error {status_code} ({code}): {message}")
        self.status_code = status_code
        self.code = code
        self.message = message
        self.body = body


class DecodeError(PlatformAPIError):
    """A 2xx response whose body did not match the expected shape."""

    def __init__(self, reason: str, body: str):
        self.body_prefix = truncate(body)
        super().__init__(f"Failed to parse response ({reason}). Response text: {self.body_prefix}")
        self.reason = reason


class HTTPTransport:
    """Issues single requests against one base URL with fixed headers.

    The wrapped ``requests.Session`` is the connection pool; nothing else is
    mutated after construction, so one transport can serve concurrent callers.
    """

    def __init__(
        self,
        base_url: str,
        headers: Optional[Mapping[str, str]] = None,
        session: Optional[requests.Session] = None,
        error_parser: Optional[ErrorParser] = None,
    ):
        """Initialize the transport.

        Args:
            base_url: Base URL every path is appended to (no trailing slash needed)
            headers: Headers sent with every request (credentials)
            session: Session to reuse; a fresh one is created when omitted
            error_parser: Provider-specific error body parser
        """
        self.base_url = base_url.rstrip("/")
        self.headers: Dict[str, str] = dict(headers or {})
        self.session = session if session is not None else requests.Session()
        self.error_parser = error_parser

    def url_for(self, path: str, params: Optional[Iterable[Tuple[str, Any]]] = None) -> str:
        """Build the fully-qualified URL for ``path`` plus encoded query."""
        if not path.startswith("/"):
            path = "/" + path
        return f"{self.base_url}{path}{build_query(params)}"

    def send(
        self,
        method: str,
        path: str,
        params: Optional[Iterable[Tuple[str, Any]]] = None,
        json_body: Any = NO_BODY,
        form: Optional[Mapping[str, str]] = None,
    ) -> str:
        """Perform one request and return the body text of a 2xx response.

        Args:
            method: HTTP method
            path: Path relative to the base URL
            params: Ordered query parameters
            json_body: JSON-serializable request body; ``None`` is sent as ``null``
            form: Form fields, sent form-encoded instead of JSON

        Returns:
            Raw response body

        Raises:
            TransportError: Request did not complete
            APIError: Non-2xx status
        """
        url = self.url_for(path, params)
        headers = dict(self.headers)
        data: Any = form
        if json_body is NO_BODY:
            json_body = None
        else:
            headers["Content-Type"] = "application/json"
            if json_body is None:
                data = "null"

        logger.debug(f"{method} {url}")

        try:
            response = self.session.request(
                method=method,
                url=url,
                headers=headers,
                json=json_body,
                data=data,
            )
            text = response.text
        except requests.RequestException as exc:
            raise TransportError(method, url, exc) from exc

        if not 200 <= response.status_code < 300:
            raise self._api_error(response.status_code, text)

        return text

    def _api_error(self, status_code: int, text: str) -> APIError:
        parsed = self.error_parser(text) if self.error_parser else None
        if parsed is not None:
            code, message = parsed
            return APIError(status_code, code, message, body=truncate(text))
        preview = truncate(text)
        return APIError(status_code, str(status_code), preview or "<empty body>", body=preview)

    def request_model(
        self,
        model: Type[ModelT],
        method: str,
        path: str,
        **kwargs: Any,
    ) -> ModelT:
        """Perform a request and validate the body into ``model``.

        Raises:
            DecodeError: Body is not JSON or does not match ``model``
        """
        text = self.send(method, path, **kwargs)
        data = _loads(text)
        try:
            return model.model_validate(data)
        except ValidationError as exc:
            raise DecodeError(f"{exc.error_count()} validation error(s) for {model.__name__}", text) from exc

    def request_json(
        self,
        method: str,
        path: str,
        allow_empty: bool = False,
        **kwargs: Any,
    ) -> Any:
        """Perform a request and return the untyped JSON body.

        Args:
            allow_empty: Map an empty body to ``None`` instead of failing

        Raises:
            DecodeError: Body is not valid JSON
        """
        text = self.send(method, path, **kwargs)
        if allow_empty and not text.strip():
            return None
        return _loads(text)

    def request_no_content(self, method: str, path: str, **kwargs: Any) -> None:
        """Perform a request whose success carries no value; any body is ignored."""
        self.send(method, path, **kwargs)

    def close(self) -> None:
        self.session.close()


def _loads(text: str) -> Any:
    try:
        return json.loads(text)
    except ValueError as exc:
        raise DecodeError(f"invalid JSON: {exc}", text) from exc


__all__ = [
    "PlatformAPIError",
    "TransportError",
    "APIError",
    "DecodeError",
    "HTTPTransport",
    "ErrorParser",
    "NO_BODY",
]
