"""
Reference values published by the YooKassa API: endpoints, statuses, events.
"""

from __future__ import annotations

from enum import Enum

__all__ = [
    "DEFAULT_URL",
    "IDEMPOTENCE_HEADER",
    "PaymentStatus",
    "ReceiptStatus",
    "RefundStatus",
    "WebhookEvent",
]

DEFAULT_URL = "https://api.yookassa.ru/v3"

IDEMPOTENCE_HEADER = "Idempotence-Key"


class PaymentStatus(str, Enum):
    PENDING = "pending"
    WAITING_FOR_CAPTURE = "waiting_for_capture"
    SUCCEEDED = "succeeded"
    CANCELED = "canceled"


class RefundStatus(str, Enum):
    PENDING = "pending"
    SUCCEEDED = "succeeded"
    CANCELED = "canceled"


class ReceiptStatus(str, Enum):
    PENDING = "pending"
    SUCCEEDED = "succeeded"
    CANCELED = "canceled"


class WebhookEvent(str, Enum):
    """Event names YooKassa sends to notification endpoints."""

    PAYMENT_WAITING_FOR_CAPTURE = "payment.waiting_for_capture"
    PAYMENT_SUCCEEDED = "payment.succeeded"
    PAYMENT_CANCELED = "payment.canceled"
    REFUND_SUCCEEDED = "refund.succeeded"
