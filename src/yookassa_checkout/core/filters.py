"""
List filters and their query-string serialization.

YooKassa list endpoints take plain ``key=value`` pairs plus range conditions
written as ``key.mode=value`` (``created_at.gte=2024-01-01T00:00:00Z``).
"""

from __future__ import annotations

from dataclasses import dataclass, fields
from datetime import date, datetime, timezone
from enum import Enum
from typing import Any, Dict, Mapping, Optional, Union

__all__ = [
    "Filters",
    "PaymentListFilter",
    "RangeFilter",
    "ReceiptListFilter",
    "RefundListFilter",
    "build_query",
    "normalize_filter",
]


@dataclass(frozen=True)
class RangeFilter:
    """A ``{mode, value}`` condition such as ``gte 2024-01-01``."""

    mode: str
    value: Any

    @classmethod
    def gt(cls, value: Any) -> "RangeFilter":
        return cls("gt", value)

    @classmethod
    def gte(cls, value: Any) -> "RangeFilter":
        return cls("gte", value)

    @classmethod
    def lt(cls, value: Any) -> "RangeFilter":
        return cls("lt", value)

    @classmethod
    def lte(cls, value: Any) -> "RangeFilter":
        return cls("lte", value)


FilterValue = Union[RangeFilter, Mapping[str, Any], str, int, bool, datetime, Enum]


class _ListFilter:
    def as_mapping(self) -> Dict[str, Any]:
        return {
            item.name: getattr(self, item.name)
            for item in fields(self)  # type: ignore[arg-type]
            if getattr(self, item.name) is not None
        }


@dataclass(frozen=True)
class PaymentListFilter(_ListFilter):
    created_at: Optional[FilterValue] = None
    captured_at: Optional[FilterValue] = None
    payment_method: Optional[str] = None
    status: Optional[FilterValue] = None
    limit: Optional[int] = None
    cursor: Optional[str] = None


@dataclass(frozen=True)
class RefundListFilter(_ListFilter):
    created_at: Optional[FilterValue] = None
    payment_id: Optional[str] = None
    status: Optional[FilterValue] = None
    limit: Optional[int] = None
    cursor: Optional[str] = None


@dataclass(frozen=True)
class ReceiptListFilter(_ListFilter):
    created_at: Optional[FilterValue] = None
    status: Optional[FilterValue] = None
    payment_id: Optional[str] = None
    refund_id: Optional[str] = None
    limit: Optional[int] = None
    cursor: Optional[str] = None


Filters = Union[PaymentListFilter, RefundListFilter, ReceiptListFilter, Mapping[str, Any]]


def normalize_filter(filters: Optional[Filters]) -> Dict[str, Any]:
    """
    Return a fresh ordered ``dict`` of filter entries; ``None`` values are dropped.
    """
    if not filters:
        return {}
    if isinstance(filters, _ListFilter):
        return filters.as_mapping()
    return {key: value for key, value in filters.items() if value is not None}


def _range_parts(value: Any) -> Optional[tuple[str, Any]]:
    if isinstance(value, RangeFilter):
        mode, inner = value.mode, value.value
    elif isinstance(value, Mapping):
        mode, inner = value.get("mode"), value.get("value")
    else:
        return None
    if mode and inner:
        return str(mode), inner
    return None


def _stringify(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, Enum):
        return str(value.value)
    if isinstance(value, datetime) and value.tzinfo is not None:
        # A literal "+" in the query would reach the API as a space.
        utc = value.astimezone(timezone.utc).isoformat(timespec="milliseconds")
        return utc.replace("+00:00", "Z")
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    return str(value)


def build_query(filters: Mapping[str, Any]) -> str:
    """
    Serialize ``filters`` into ``?a=1&b.gte=2`` form.

    Empty filters give an empty string rather than a bare ``?``. Entries keep
    the mapping's iteration order and values are not percent-encoded.
    """
    pairs = []
    for key, value in filters.items():
        parts = _range_parts(value)
        if parts is not None:
            mode, inner = parts
            pairs.append(f"{key}.{mode}={_stringify(inner)}")
        else:
            pairs.append(f"{key}={_stringify(value)}")
    if not pairs:
        return ""
    return "?" + "&".join(pairs)
