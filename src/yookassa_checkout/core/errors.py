"""
The single error type raised by the checkout client.
"""

from __future__ import annotations

from http import HTTPStatus
from typing import Optional

import requests

__all__ = [
    "DEFAULT_ERROR_MESSAGE",
    "CheckoutError",
    "error_factory",
]

DEFAULT_ERROR_MESSAGE = "Error while performing the request"


class CheckoutError(Exception):
    """
    Raised for every failed request, whatever the transport or API reason.

    ``status`` is always :attr:`HTTPStatus.BAD_REQUEST`; the remote status code
    and error code are not carried over.
    """

    def __init__(self, message: str = DEFAULT_ERROR_MESSAGE) -> None:
        super().__init__(message)
        self.message = message
        self.status = HTTPStatus.BAD_REQUEST


def _api_description(exc: BaseException) -> Optional[str]:
    if not isinstance(exc, requests.RequestException):
        return None
    response = exc.response
    if response is None:
        return None
    try:
        body = response.json()
    except ValueError:
        return None
    if not isinstance(body, dict):
        return None
    description = body.get("description")
    if isinstance(description, str) and description:
        return description
    return None


def error_factory(exc: BaseException) -> CheckoutError:
    """Map any caught failure to :class:`CheckoutError`."""
    return CheckoutError(_api_description(exc) or DEFAULT_ERROR_MESSAGE)
