"""
Client configuration.

The gateway base address is the only value the ledger client keeps for
its lifetime. It is fixed at construction and never mutated, so several
clients pointed at different gateways can coexist in one process.

Environment:
    BCH_CONSUMER_REST_URL: gateway base address (default: DEFAULT_REST_URL)
    BCH_CONSUMER_TIMEOUT: transport timeout in seconds (default: 30)
"""

from __future__ import annotations

import os
from dataclasses import dataclass, replace
from typing import Any, Mapping

from bch_consumer.errors import ConfigurationError
from bch_consumer.transport import DEFAULT_TIMEOUT_S

# Well-known public gateway, used by BchConsumer when no address is given
DEFAULT_REST_URL = "https://free-bch.fullstack.cash"

ENV_REST_URL = "BCH_CONSUMER_REST_URL"
ENV_TIMEOUT = "BCH_CONSUMER_TIMEOUT"


@dataclass(frozen=True)
class ConsumerConfig:
    """Immutable client configuration.

    Attributes:
        base_url: Gateway base address, e.g. "https://free-bch.fullstack.cash".
            None means "not configured"; BchConsumer substitutes the
            default, BchClient refuses to start.
        timeout_s: Timeout handed to the default HttpxTransport.
    """

    base_url: str | None = None
    timeout_s: float = DEFAULT_TIMEOUT_S

    def with_default_url(self) -> ConsumerConfig:
        """Return a copy whose base_url falls back to DEFAULT_REST_URL."""
        if self.base_url:
            return self
        return replace(self, base_url=DEFAULT_REST_URL)

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> ConsumerConfig:
        """Build from a plain dict such as ``{"base_url": "..."}``.

        Unknown keys raise ConfigurationError.
        """
        unknown = set(data) - {"base_url", "timeout_s"}
        if unknown:
            raise ConfigurationError(f"Unknown configuration keys: {sorted(unknown)}")
        timeout_raw = data.get("timeout_s", DEFAULT_TIMEOUT_S)
        try:
            timeout_s = float(timeout_raw)
        except (TypeError, ValueError) as e:
            raise ConfigurationError(f"timeout_s must be a number, got {timeout_raw!r}") from e
        return cls(base_url=data.get("base_url"), timeout_s=timeout_s)

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> ConsumerConfig:
        """Build from environment variables."""
        env = os.environ if environ is None else environ
        timeout_raw = env.get(ENV_TIMEOUT)
        try:
            timeout_s = float(timeout_raw) if timeout_raw else DEFAULT_TIMEOUT_S
        except ValueError as e:
            raise ConfigurationError(f"{ENV_TIMEOUT} must be a number, got {timeout_raw!r}") from e
        return cls(base_url=env.get(ENV_REST_URL) or None, timeout_s=timeout_s)


def coerce_config(config: ConsumerConfig | Mapping[str, Any] | None) -> ConsumerConfig:
    """Accept a ConsumerConfig, a mapping, or None."""
    if config is None:
        return ConsumerConfig()
    if isinstance(config, ConsumerConfig):
        return config
    if isinstance(config, Mapping):
        return ConsumerConfig.from_mapping(config)
    raise ConfigurationError(
        f"config must be a ConsumerConfig or mapping, got {type(config).__name__}"
    )
