"""
BchConsumer: composition root for the gateway clients.

Fixes the gateway base address once and builds the ledger client with
it. When no address is configured the well-known public gateway is used,
unlike BchClient which refuses to start without one.

The messaging sub-client lives outside this package. Pass a factory and
it is built from the same ConsumerConfig and exposed as ``msg``.
"""

from __future__ import annotations

from dataclasses import replace
from typing import Any, Callable, Mapping

from bch_consumer.bch import BchClient
from bch_consumer.config import ConsumerConfig, coerce_config
from bch_consumer.transport import Transport

MsgFactory = Callable[[ConsumerConfig], Any]


class BchConsumer:
    """Entry point for ledger queries against one gateway.

    Args:
        config: ConsumerConfig, a mapping such as ``{"base_url": ...}``,
            or None for all defaults.
        transport: Injectable transport shared by the clients built here.
        msg_factory: Optional callable building the messaging client.
        base_url: Keyword override for ``config.base_url``.
        timeout_s: Keyword override for ``config.timeout_s``.

    Example:
        >>> consumer = BchConsumer({"base_url": "http://localhost:5005"})
        >>> balance = await consumer.bch.get_balance("bitcoincash:qq...")
    """

    def __init__(
        self,
        config: ConsumerConfig | Mapping[str, Any] | None = None,
        transport: Transport | None = None,
        msg_factory: MsgFactory | None = None,
        *,
        base_url: str | None = None,
        timeout_s: float | None = None,
    ) -> None:
        resolved = coerce_config(config)
        overrides: dict[str, Any] = {}
        if base_url is not None:
            overrides["base_url"] = base_url
        if timeout_s is not None:
            overrides["timeout_s"] = timeout_s
        if overrides:
            resolved = replace(resolved, **overrides)
        # No format check here; a bad address surfaces on the first call.
        self._config = resolved.with_default_url()
        self.bch = BchClient(
            self._config.base_url,
            transport=transport,
            timeout_s=self._config.timeout_s,
        )
        self.msg = msg_factory(self._config) if msg_factory is not None else None

    @property
    def config(self) -> ConsumerConfig:
        return self._config

    @property
    def rest_url(self) -> str:
        """The gateway base address in use."""
        return self.bch.base_url
