"""
Typed views of the objects returned by the YooKassa API.

The API already returns the final shape, so normalization keeps every field in
``raw`` and lifts the commonly used ones into attributes, checking ``id`` and
``status`` on the way.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal
from typing import Any, Callable, Dict, Generic, List, Mapping, Optional, TypeVar

from .constants import PaymentStatus, ReceiptStatus, RefundStatus

__all__ = [
    "Amount",
    "ListResult",
    "Payment",
    "Receipt",
    "Refund",
    "list_factory",
    "payment_factory",
    "receipt_factory",
    "refund_factory",
]

T = TypeVar("T")


def _require_id(payload: Mapping[str, Any]) -> str:
    value = payload["id"]
    if not isinstance(value, str) or not value:
        raise ValueError(f"Expected a non-empty string id, got {value!r}")
    return value


@dataclass(frozen=True)
class Amount:
    value: str
    currency: str

    def as_decimal(self) -> Decimal:
        return Decimal(self.value)

    @classmethod
    def from_response(cls, payload: Optional[Mapping[str, Any]]) -> Optional["Amount"]:
        if payload is None:
            return None
        return cls(value=str(payload["value"]), currency=str(payload["currency"]))


@dataclass(frozen=True)
class Payment:
    id: str
    status: PaymentStatus
    amount: Optional[Amount]
    paid: bool
    test: bool
    created_at: Optional[str] = None
    description: Optional[str] = None
    captured_at: Optional[str] = None
    expires_at: Optional[str] = None
    refundable: Optional[bool] = None
    metadata: Dict[str, Any] = field(default_factory=dict)
    raw: Dict[str, Any] = field(default_factory=dict, repr=False)

    @classmethod
    def from_response(cls, payload: Mapping[str, Any]) -> "Payment":
        return cls(
            id=_require_id(payload),
            status=PaymentStatus(payload["status"]),
            amount=Amount.from_response(payload.get("amount")),
            paid=bool(payload.get("paid", False)),
            test=bool(payload.get("test", False)),
            created_at=payload.get("created_at"),
            description=payload.get("description"),
            captured_at=payload.get("captured_at"),
            expires_at=payload.get("expires_at"),
            refundable=payload.get("refundable"),
            metadata=dict(payload.get("metadata") or {}),
            raw=dict(payload),
        )


@dataclass(frozen=True)
class Refund:
    id: str
    status: RefundStatus
    payment_id: str
    amount: Optional[Amount] = None
    created_at: Optional[str] = None
    description: Optional[str] = None
    raw: Dict[str, Any] = field(default_factory=dict, repr=False)

    @classmethod
    def from_response(cls, payload: Mapping[str, Any]) -> "Refund":
        return cls(
            id=_require_id(payload),
            status=RefundStatus(payload["status"]),
            payment_id=payload["payment_id"],
            amount=Amount.from_response(payload.get("amount")),
            created_at=payload.get("created_at"),
            description=payload.get("description"),
            raw=dict(payload),
        )


@dataclass(frozen=True)
class Receipt:
    id: str
    status: ReceiptStatus
    type: Optional[str] = None
    payment_id: Optional[str] = None
    refund_id: Optional[str] = None
    raw: Dict[str, Any] = field(default_factory=dict, repr=False)

    @classmethod
    def from_response(cls, payload: Mapping[str, Any]) -> "Receipt":
        return cls(
            id=_require_id(payload),
            status=ReceiptStatus(payload["status"]),
            type=payload.get("type"),
            payment_id=payload.get("payment_id"),
            refund_id=payload.get("refund_id"),
            raw=dict(payload),
        )


@dataclass(frozen=True)
class ListResult(Generic[T]):
    """One page of a list endpoint; ``next_cursor`` is ``None`` on the last page."""

    items: List[T]
    next_cursor: Optional[str] = None
    type: str = "list"
    raw: Dict[str, Any] = field(default_factory=dict, repr=False)


def payment_factory(payload: Mapping[str, Any]) -> Payment:
    return Payment.from_response(payload)


def refund_factory(payload: Mapping[str, Any]) -> Refund:
    return Refund.from_response(payload)


def receipt_factory(payload: Mapping[str, Any]) -> Receipt:
    return Receipt.from_response(payload)


def list_factory(
    payload: Mapping[str, Any],
    item_factory: Callable[[Mapping[str, Any]], T],
) -> ListResult[T]:
    return ListResult(
        items=[item_factory(item) for item in payload["items"]],
        next_cursor=payload.get("next_cursor"),
        type=payload.get("type", "list"),
        raw=dict(payload),
    )
