"""
Public helpers that build a :class:`CheckoutClient` from host configuration.
"""

from __future__ import annotations

from typing import Any, Mapping, Optional, Sequence, Union

import requests

from .core.client import CheckoutClient
from .core.config import CheckoutConfig, CheckoutOptions, ConfigError

__all__ = [
    "create_checkout_client",
    "create_checkout_client_async",
]


def _resolve_config(
    config: Union[CheckoutConfig, CheckoutOptions, Mapping[str, Any], None],
    explicit: Mapping[str, Any],
) -> CheckoutConfig:
    if config is not None:
        if any(value is not None for value in explicit.values()):
            raise ValueError(
                "Provide either a pre-built config or individual parameters, not both."
            )
        if isinstance(config, CheckoutOptions):
            return config.resolve()
        return CheckoutOptions.from_value(config).resolve()
    return CheckoutConfig.from_mapping(explicit)


def create_checkout_client(
    config: Union[CheckoutConfig, CheckoutOptions, Mapping[str, Any], None] = None,
    *,
    session: Optional[requests.Session] = None,
    shop_id: Optional[str] = None,
    api_key: Optional[str] = None,
    api_url: Optional[str] = None,
    timeout_seconds: Optional[float] = None,
) -> CheckoutClient:
    """
    Construct a :class:`CheckoutClient`.

    ``config`` may be a :class:`CheckoutConfig`, a mapping with the same keys,
    or a :class:`CheckoutOptions` holder, which is resolved here. Alternatively
    pass ``shop_id`` and ``api_key`` directly. Missing credentials raise
    :class:`ConfigError` before any request is made.

    >>> client = create_checkout_client(shop_id="123456", api_key="test_key")
    """
    resolved = _resolve_config(
        config,
        {
            "shop_id": shop_id,
            "api_key": api_key,
            "api_url": api_url,
            "timeout_seconds": timeout_seconds,
        },
    )
    return CheckoutClient(resolved, session=session)


async def create_checkout_client_async(
    factory: Any,
    *,
    inject: Sequence[Any] = (),
    session: Optional[requests.Session] = None,
) -> CheckoutClient:
    """
    Build a client from a config factory, awaiting it when it is async.

    ``inject`` holds the factory's positional dependencies, for example a
    settings object the host already owns::

        async def load(settings):
            return {"shop_id": settings.shop_id, "api_key": await settings.secret("yookassa")}

        client = await create_checkout_client_async(load, inject=[settings])
    """
    if not callable(factory):
        raise ConfigError("Config factory must be callable")
    options = CheckoutOptions.from_factory(factory, inject=inject)
    return CheckoutClient(await options.aresolve(), session=session)
