"""
Public facade for the YooKassa checkout client.

Integrators can ``from yookassa_checkout import ...`` everything needed to
configure a shop, call the API and handle its results.
"""

from .api import create_checkout_client, create_checkout_client_async
from .core import (
    DEFAULT_ERROR_MESSAGE,
    DEFAULT_URL,
    Amount,
    CheckoutClient,
    CheckoutConfig,
    CheckoutError,
    CheckoutOptions,
    ConfigError,
    ListResult,
    Payment,
    PaymentListFilter,
    PaymentStatus,
    RangeFilter,
    Receipt,
    ReceiptListFilter,
    ReceiptStatus,
    Refund,
    RefundListFilter,
    RefundStatus,
    WebhookEvent,
    build_query,
    load_checkout_config,
)

__all__ = (
    "Amount",
    "CheckoutClient",
    "CheckoutConfig",
    "CheckoutError",
    "CheckoutOptions",
    "ConfigError",
    "DEFAULT_ERROR_MESSAGE",
    "DEFAULT_URL",
    "ListResult",
    "Payment",
    "PaymentListFilter",
    "PaymentStatus",
    "RangeFilter",
    "Receipt",
    "ReceiptListFilter",
    "ReceiptStatus",
    "Refund",
    "RefundListFilter",
    "RefundStatus",
    "WebhookEvent",
    "build_query",
    "create_checkout_client",
    "create_checkout_client_async",
    "load_checkout_config",
)
