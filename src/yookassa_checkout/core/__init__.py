"""
Core primitives of the YooKassa checkout client.
"""

from .client import CheckoutClient, new_idempotence_key
from .config import (
    CheckoutConfig,
    CheckoutOptions,
    ConfigError,
    load_checkout_config,
)
from .constants import (
    DEFAULT_URL,
    IDEMPOTENCE_HEADER,
    PaymentStatus,
    ReceiptStatus,
    RefundStatus,
    WebhookEvent,
)
from .environment import CheckoutEnvironment, build_environment, load_env_file
from .errors import DEFAULT_ERROR_MESSAGE, CheckoutError, error_factory
from .filters import (
    PaymentListFilter,
    RangeFilter,
    ReceiptListFilter,
    RefundListFilter,
    build_query,
    normalize_filter,
)
from .models import (
    Amount,
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
    "Amount",
    "CheckoutClient",
    "CheckoutConfig",
    "CheckoutEnvironment",
    "CheckoutError",
    "CheckoutOptions",
    "ConfigError",
    "DEFAULT_ERROR_MESSAGE",
    "DEFAULT_URL",
    "IDEMPOTENCE_HEADER",
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
    "build_environment",
    "build_query",
    "error_factory",
    "list_factory",
    "load_checkout_config",
    "load_env_file",
    "new_idempotence_key",
    "normalize_filter",
    "payment_factory",
    "receipt_factory",
    "refund_factory",
]
