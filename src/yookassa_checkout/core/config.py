"""
Shop credentials and the holder that resolves them before a client is built.
"""

from __future__ import annotations

import asyncio
import inspect
import threading
from dataclasses import dataclass, field
from typing import Any, Awaitable, Callable, Mapping, Optional, Sequence, Tuple, Union

from .constants import DEFAULT_URL
from .environment import build_environment

__all__ = [
    "CheckoutConfig",
    "CheckoutOptions",
    "ConfigError",
    "load_checkout_config",
]

_PARAMETER_TO_ENV_KEY = {
    "shop_id": "YOOKASSA_SHOP_ID",
    "api_key": "YOOKASSA_API_KEY",
    "api_url": "YOOKASSA_API_URL",
    "timeout_seconds": "YOOKASSA_TIMEOUT_SECONDS",
}


class ConfigError(Exception):
    """Raised when the supplied configuration is invalid."""


def _require_text(value: Any, field_name: str) -> str:
    if value is None:
        raise ConfigError(f"{field_name} must be provided")
    text = str(value).strip()
    if not text:
        raise ConfigError(f"{field_name} must not be empty")
    return text


def _parse_timeout(raw: Any) -> Optional[float]:
    if raw is None or raw == "":
        return None
    try:
        timeout = float(raw)
    except (TypeError, ValueError) as exc:
        raise ConfigError(
            f"timeout_seconds must be a number, got '{raw}'"
        ) from exc
    if timeout <= 0:
        raise ConfigError("timeout_seconds must be greater than zero")
    return timeout


@dataclass(frozen=True)
class CheckoutConfig:
    """
    Credentials of a single YooKassa shop.

    ``timeout_seconds`` is handed to ``requests`` as is; ``None`` leaves the
    request without a deadline.
    """

    shop_id: str
    api_key: str = field(repr=False)
    api_url: str = DEFAULT_URL
    timeout_seconds: Optional[float] = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "shop_id", _require_text(self.shop_id, "shop_id"))
        object.__setattr__(self, "api_key", _require_text(self.api_key, "api_key"))
        api_url = _require_text(self.api_url or DEFAULT_URL, "api_url").rstrip("/")
        object.__setattr__(self, "api_url", api_url)
        object.__setattr__(
            self, "timeout_seconds", _parse_timeout(self.timeout_seconds)
        )

    @classmethod
    def from_mapping(cls, values: Mapping[str, Any]) -> "CheckoutConfig":
        """
        Build a config from either snake_case option names or the
        ``YOOKASSA_*`` environment keys.
        """

        def pick(name: str) -> Any:
            if name in values:
                return values[name]
            return values.get(_PARAMETER_TO_ENV_KEY[name])

        return cls(
            shop_id=pick("shop_id"),
            api_key=pick("api_key"),
            api_url=pick("api_url") or DEFAULT_URL,
            timeout_seconds=pick("timeout_seconds"),
        )

    @classmethod
    def from_env(
        cls,
        *,
        env_file: Optional[str] = ".env",
        overrides: Optional[Mapping[str, str]] = None,
        base: Optional[Mapping[str, str]] = None,
        shop_id: Optional[str] = None,
        api_key: Optional[str] = None,
        api_url: Optional[str] = None,
        timeout_seconds: Optional[float | str] = None,
    ) -> "CheckoutConfig":
        merged_overrides = dict(overrides or {})
        explicit = {
            "shop_id": shop_id,
            "api_key": api_key,
            "api_url": api_url,
            "timeout_seconds": timeout_seconds,
        }
        for name, value in explicit.items():
            if value is not None:
                merged_overrides[_PARAMETER_TO_ENV_KEY[name]] = str(value)

        environment = build_environment(
            env_file=env_file,
            base=base,
            overrides=merged_overrides,
        )
        return cls.from_mapping(
            {
                env_key: environment.get(env_key)
                for env_key in _PARAMETER_TO_ENV_KEY.values()
            }
        )


def load_checkout_config(
    *,
    env_file: Optional[str] = ".env",
    overrides: Optional[Mapping[str, str]] = None,
    base: Optional[Mapping[str, str]] = None,
    shop_id: Optional[str] = None,
    api_key: Optional[str] = None,
    api_url: Optional[str] = None,
    timeout_seconds: Optional[float | str] = None,
) -> CheckoutConfig:
    """
    Convenience wrapper that mirrors :meth:`CheckoutConfig.from_env`.

    Explicit keyword arguments win over ``overrides``, which win over the
    ``.env`` file and the process environment.
    """
    return CheckoutConfig.from_env(
        env_file=env_file,
        overrides=overrides,
        base=base,
        shop_id=shop_id,
        api_key=api_key,
        api_url=api_url,
        timeout_seconds=timeout_seconds,
    )


ConfigSource = Union[CheckoutConfig, Mapping[str, Any]]
ConfigFactory = Callable[..., Union[ConfigSource, Awaitable[ConfigSource]]]


def _coerce(source: Any) -> CheckoutConfig:
    if isinstance(source, CheckoutConfig):
        return source
    if isinstance(source, Mapping):
        return CheckoutConfig.from_mapping(source)
    raise ConfigError(
        f"Expected CheckoutConfig or mapping, got {type(source).__name__}"
    )


class CheckoutOptions:
    """
    Holds the configuration of a checkout client until it is needed.

    Either wraps a ready value (:meth:`from_value`) or a factory plus the
    dependencies it is called with (:meth:`from_factory`). The factory may be a
    coroutine function. It runs at most once across :meth:`resolve` and
    :meth:`aresolve`, from any thread or task; later calls return the cached
    :class:`CheckoutConfig`. Callers that arrive while the factory is running
    wait for it. If the factory fails, they get :class:`ConfigError` and the
    next call runs the factory again.
    """

    def __init__(
        self,
        *,
        value: Optional[ConfigSource] = None,
        factory: Optional[ConfigFactory] = None,
        inject: Sequence[Any] = (),
    ) -> None:
        if (value is None) == (factory is None):
            raise ConfigError("Provide exactly one of a config value or a factory")
        self._factory = factory
        self._inject = tuple(inject)
        self._lock = threading.Lock()
        # Set while a factory run is in flight or has finished successfully.
        self._done: Optional[threading.Event] = None
        self._resolved: Optional[CheckoutConfig] = None
        if value is not None:
            self._resolved = _coerce(value)

    @classmethod
    def from_value(cls, value: ConfigSource) -> "CheckoutOptions":
        return cls(value=value)

    @classmethod
    def from_factory(
        cls,
        factory: ConfigFactory,
        *,
        inject: Sequence[Any] = (),
    ) -> "CheckoutOptions":
        return cls(factory=factory, inject=inject)

    @property
    def resolved(self) -> bool:
        return self._resolved is not None

    def resolve(self) -> CheckoutConfig:
        """
        Return the configuration, running the factory on first use.

        An async factory is driven with :func:`asyncio.run`; inside a running
        event loop use :meth:`aresolve` instead.
        """
        if self._resolved is not None:
            return self._resolved
        owner, done = self._claim()
        if not owner:
            if _loop_running():
                raise ConfigError(
                    "Config is being resolved elsewhere; use aresolve() inside an event loop"
                )
            done.wait()
            return self._after_wait()

        config: Optional[CheckoutConfig] = None
        try:
            produced = self._call_factory()
            if inspect.isawaitable(produced):
                produced = self._run_awaitable(produced)
            config = _coerce(produced)
        finally:
            self._finish(done, config)
        return config

    async def aresolve(self) -> CheckoutConfig:
        if self._resolved is not None:
            return self._resolved
        owner, done = self._claim()
        if not owner:
            await asyncio.to_thread(done.wait)
            return self._after_wait()

        config: Optional[CheckoutConfig] = None
        try:
            produced = self._call_factory()
            if inspect.isawaitable(produced):
                produced = await produced
            config = _coerce(produced)
        finally:
            self._finish(done, config)
        return config

    def _claim(self) -> Tuple[bool, threading.Event]:
        with self._lock:
            if self._done is None:
                self._done = threading.Event()
                return True, self._done
            return False, self._done

    def _finish(self, done: threading.Event, config: Optional[CheckoutConfig]) -> None:
        with self._lock:
            if config is None:
                self._done = None
            else:
                self._resolved = config
        done.set()

    def _after_wait(self) -> CheckoutConfig:
        if self._resolved is None:
            raise ConfigError("Config factory failed in a concurrent resolution")
        return self._resolved

    def _call_factory(self) -> Any:
        if self._factory is None:
            raise ConfigError("No config factory to run")
        return self._factory(*self._inject)

    @staticmethod
    def _run_awaitable(awaitable: Awaitable[Any]) -> Any:
        if not _loop_running():
            return asyncio.run(_await(awaitable))
        if inspect.iscoroutine(awaitable):
            awaitable.close()
        raise ConfigError(
            "Async config factory cannot be resolved inside a running event loop; "
            "use aresolve()"
        )


def _loop_running() -> bool:
    try:
        asyncio.get_running_loop()
    except RuntimeError:
        return False
    return True


async def _await(awaitable: Awaitable[Any]) -> Any:
    return await awaitable
