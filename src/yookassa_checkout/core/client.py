"""
HTTP client for the YooKassa payments, refunds and receipts endpoints.
"""

from __future__ import annotations

import logging
import uuid
from typing import Any, Callable, Dict, Mapping, Optional, TypeVar
from urllib.parse import quote

import requests
from requests.auth import HTTPBasicAuth

from .config import CheckoutConfig
from .constants import IDEMPOTENCE_HEADER
from .errors import error_factory
from .filters import Filters, build_query, normalize_filter
from .models import (
    ListResult,
    Payment,
    Receipt,
    Refund,
    list_factory,
    payment_factory,
    receipt_factory,
    refund_factory,
)

__all__ = [
    "CheckoutClient",
    "new_idempotence_key",
]

T = TypeVar("T")

# Anything a broken response or body can raise on the way to a typed object.
_MAPPED_ERRORS = (requests.RequestException, ValueError, KeyError, TypeError)


def new_idempotence_key() -> str:
    return str(uuid.uuid4())


def _path_id(value: str) -> str:
    return quote(str(value), safe="")


class CheckoutClient:
    """
    One method per YooKassa endpoint.

    Every request carries Basic credentials of the configured shop. Mutating
    calls also send an ``Idempotence-Key``: the caller's key when given,
    otherwise a fresh UUID4 per call. Failures of any kind surface as
    :class:`~yookassa_checkout.core.errors.CheckoutError`; nothing is retried.
    """

    def __init__(
        self,
        config: CheckoutConfig,
        *,
        session: Optional[requests.Session] = None,
    ) -> None:
        self.config = config
        self._owns_session = session is None
        self.session = session or requests.Session()

    def _auth(self) -> HTTPBasicAuth:
        return HTTPBasicAuth(self.config.shop_id, self.config.api_key)

    def _request(
        self,
        method: str,
        path: str,
        factory: Callable[[Mapping[str, Any]], T],
        *,
        body: Optional[Mapping[str, Any]] = None,
        headers: Optional[Dict[str, str]] = None,
        query: str = "",
    ) -> T:
        url = f"{self.config.api_url}{path}{query}"
        logging.debug("YooKassa request %s %s", method, url)
        try:
            response = self.session.request(
                method,
                url,
                json=body,
                headers=headers,
                auth=self._auth(),
                timeout=self.config.timeout_seconds,
            )
            response.raise_for_status()
            return factory(response.json())
        except _MAPPED_ERRORS as exc:
            logging.warning("YooKassa request %s %s failed: %s", method, url, exc)
            raise error_factory(exc) from exc

    def _post(
        self,
        path: str,
        body: Mapping[str, Any],
        idempotence_key: Optional[str],
        factory: Callable[[Mapping[str, Any]], T],
    ) -> T:
        key = idempotence_key if idempotence_key is not None else new_idempotence_key()
        logging.info("YooKassa POST %s", path)
        return self._request(
            "POST",
            path,
            factory,
            body=body,
            headers={IDEMPOTENCE_HEADER: key},
        )

    def _list(
        self,
        path: str,
        filters: Optional[Filters],
        item_factory: Callable[[Mapping[str, Any]], T],
    ) -> ListResult[T]:
        query = build_query(normalize_filter(filters))
        return self._request(
            "GET",
            path,
            lambda data: list_factory(data, item_factory),
            query=query,
        )

    # Payments

    def create_payment(
        self,
        payload: Mapping[str, Any],
        idempotence_key: Optional[str] = None,
    ) -> Payment:
        """
        Create a payment.

        https://yookassa.ru/developers/api#create_payment
        """
        return self._post("/payments", payload, idempotence_key, payment_factory)

    def get_payment(self, payment_id: str) -> Payment:
        """https://yookassa.ru/developers/api#get_payment"""
        return self._request("GET", f"/payments/{_path_id(payment_id)}", payment_factory)

    def capture_payment(
        self,
        payment_id: str,
        payload: Optional[Mapping[str, Any]] = None,
        idempotence_key: Optional[str] = None,
    ) -> Payment:
        """
        Capture a payment in ``waiting_for_capture``.

        Without ``payload`` the full authorized amount is captured.
        https://yookassa.ru/developers/api#capture_payment
        """
        return self._post(
            f"/payments/{_path_id(payment_id)}/capture",
            payload or {},
            idempotence_key,
            payment_factory,
        )

    def cancel_payment(
        self,
        payment_id: str,
        idempotence_key: Optional[str] = None,
    ) -> Payment:
        """https://yookassa.ru/developers/api#cancel_payment"""
        return self._post(
            f"/payments/{_path_id(payment_id)}/cancel",
            {},
            idempotence_key,
            payment_factory,
        )

    def get_payment_list(self, filters: Optional[Filters] = None) -> ListResult[Payment]:
        """https://yookassa.ru/developers/api#get_payments_list"""
        return self._list("/payments", filters, payment_factory)

    # Refunds

    def create_refund(
        self,
        payload: Mapping[str, Any],
        idempotence_key: Optional[str] = None,
    ) -> Refund:
        """https://yookassa.ru/developers/api#create_refund"""
        return self._post("/refunds", payload, idempotence_key, refund_factory)

    def get_refund(self, refund_id: str) -> Refund:
        """https://yookassa.ru/developers/api#get_refund"""
        return self._request("GET", f"/refunds/{_path_id(refund_id)}", refund_factory)

    def get_refund_list(self, filters: Optional[Filters] = None) -> ListResult[Refund]:
        """https://yookassa.ru/developers/api#get_refunds_list"""
        return self._list("/refunds", filters, refund_factory)

    # Receipts

    def create_receipt(
        self,
        payload: Mapping[str, Any],
        idempotence_key: Optional[str] = None,
    ) -> Receipt:
        """https://yookassa.ru/developers/api#create_receipt"""
        return self._post("/receipts", payload, idempotence_key, receipt_factory)

    def get_receipt(self, receipt_id: str) -> Receipt:
        """https://yookassa.ru/developers/api#get_receipt"""
        return self._request("GET", f"/receipts/{_path_id(receipt_id)}", receipt_factory)

    def get_receipt_list(self, filters: Optional[Filters] = None) -> ListResult[Receipt]:
        """https://yookassa.ru/developers/api#get_receipts_list"""
        return self._list("/receipts", filters, receipt_factory)

    def close(self) -> None:
        """Close the session if this client created it."""
        if self._owns_session:
            self.session.close()

    def __enter__(self) -> "CheckoutClient":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()
