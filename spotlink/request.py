"""Helpers for metadata requests made over the message channel."""

from __future__ import annotations

from collections.abc import Iterable

from .errors import EmptyResponseError


def build_metrics_uri(uri: str, country: str, product: str | None = None) -> str:
    """Append the user's country, and product where known, to a request uri."""
    separator = "&" if "?" in uri else "?"
    result = f"{uri}{separator}country={country}"
    if product is not None:
        result += f"&product={product}"
    return result


def first_payload(payloads: Iterable[bytes]) -> bytes:
    """Return the first payload of a response, raising if there is none."""
    for payload in payloads:
        return bytes(payload)
    raise EmptyResponseError()