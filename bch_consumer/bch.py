"""
BCH ledger client: typed access to the gateway's /bch and /price endpoints.

Each operation makes exactly one transport call:

    get_balance(addr)        POST /bch/balance         {"addresses": [addr]}
    get_utxos(addr)          POST /bch/utxos           {"address": addr}
    get_tx_history(addr)     POST /bch/txHistory       {"address": addr}
    send_tx(hex)             POST /bch/broadcast       {"hex": hex}
    get_tx_data(txids)       POST /bch/txData          {"txids": txids}      -> body["txData"]
    get_usd()                GET  /price/usd                                 -> body["usd"]
    utxo_is_valid(utxo)      POST /bch/utxoIsValid     {"utxo": utxo}
    get_token_data(id, h)    POST /bch/getTokenData    {"tokenId": id, "withTxHistory": h}
    get_token_data2(id)      POST /bch/getTokenData2   {"tokenId": id}

Inputs are type-checked before the call and a failure raises
ValidationError with no request sent. Nothing is checked semantically:
address checksums, hex length and txid format are the gateway's job, and
its error bodies are returned verbatim.

Transport exceptions propagate to the caller unchanged. No retry loops,
no caching. ``send_tx`` is not idempotent: retrying after a timeout may
broadcast the same transaction twice.
"""

from __future__ import annotations

import logging
from typing import Any, Mapping

from bch_consumer.errors import ConfigurationError, ValidationError
from bch_consumer.transport import DEFAULT_TIMEOUT_S, HttpxTransport, Transport
from bch_consumer.utxo import FullnodeUtxo, IndexerUtxo, Utxo, utxo_shape

logger = logging.getLogger(__name__)

ADDRESS_ERROR = "Input must be a string containing bitcoincash address"
HEX_ERROR = "Input must be a string containing hex representation of a transaction"
TXIDS_ERROR = "Input must be a list of strings representing TXIDs"
UTXO_ERROR = "Input must be a dict or Utxo describing an unspent output"
TOKEN_ID_ERROR = "Input must be a string containing a token ID"
TX_HISTORY_FLAG_ERROR = "with_tx_history must be a bool"


def _require_str(value: Any, message: str) -> None:
    if not isinstance(value, str):
        raise ValidationError(message)


class BchClient:
    """Ledger client for a single gateway.

    Args:
        base_url: Gateway base address. Required; a missing or empty value
            raises ConfigurationError here rather than on first call.
        transport: Injectable transport. Defaults to HttpxTransport.
        timeout_s: Timeout for the default transport. Ignored when a
            transport is passed in.
    """

    def __init__(
        self,
        base_url: str | None,
        transport: Transport | None = None,
        timeout_s: float = DEFAULT_TIMEOUT_S,
    ) -> None:
        if not isinstance(base_url, str) or not base_url:
            raise ConfigurationError("base_url required when instantiating BchClient")
        self._base_url = base_url.rstrip("/")
        self._transport = transport or HttpxTransport(timeout_s=timeout_s)

    @property
    def base_url(self) -> str:
        """The gateway base address (trailing slash stripped)."""
        return self._base_url

    @property
    def transport(self) -> Transport:
        return self._transport

    def _url(self, path: str) -> str:
        return f"{self._base_url}{path}"

    async def _post(self, path: str, body: dict[str, Any]) -> Any:
        url = self._url(path)
        logger.debug("bch request POST %s", url)
        return await self._transport.post_json(url, body)

    # -----------------------------------------------------------------
    # Address queries
    # -----------------------------------------------------------------

    async def get_balance(self, addr: str) -> Any:
        """Get the balance for a BCH address.

        Returns the gateway body unchanged, typically
        ``{"success": True, "balances": [{"address": ..., "balance": {...}}]}``.
        """
        _require_str(addr, ADDRESS_ERROR)
        return await self._post("/bch/balance", {"addresses": [addr]})

    async def get_utxos(self, addr: str) -> Any:
        """Get UTXOs controlled by a BCH address.

        Returns the gateway body unchanged. It carries ``bchUtxos`` and
        ``slpUtxos`` (wrapped in a one-element list by current gateways).
        """
        _require_str(addr, ADDRESS_ERROR)
        return await self._post("/bch/utxos", {"address": addr})

    async def get_tx_history(self, addr: str) -> Any:
        """Get the transaction history for a BCH address."""
        _require_str(addr, ADDRESS_ERROR)
        return await self._post("/bch/txHistory", {"address": addr})

    # -----------------------------------------------------------------
    # Transactions
    # -----------------------------------------------------------------

    async def send_tx(self, hex: str) -> Any:
        """Broadcast a signed transaction.

        A rejected broadcast comes back as a normal body such as
        ``{"success": False, "endpoint": "broadcast", ...}``; it is
        returned, not raised.
        """
        _require_str(hex, HEX_ERROR)
        return await self._post("/bch/broadcast", {"hex": hex})

    async def get_tx_data(self, txids: list[str] | tuple[str, ...]) -> Any:
        """Get detailed transaction data for a list of TXIDs.

        Returns the ``txData`` field of the gateway body, not the body.
        A body without ``txData`` raises KeyError, a non-object body
        raises TypeError.
        """
        if not isinstance(txids, (list, tuple)):
            raise ValidationError(TXIDS_ERROR)
        result = await self._post("/bch/txData", {"txids": list(txids)})
        return result["txData"]

    async def utxo_is_valid(self, utxo: Utxo | Mapping[str, Any]) -> Any:
        """Ask the gateway whether a UTXO is still unspent.

        Accepts either UTXO layout. Dicts are forwarded as given,
        FullnodeUtxo/IndexerUtxo are serialized to their own layout.
        """
        if isinstance(utxo, (FullnodeUtxo, IndexerUtxo)):
            body_utxo: Any = utxo.to_dict()
        elif isinstance(utxo, Mapping):
            body_utxo = utxo if isinstance(utxo, dict) else dict(utxo)
        else:
            raise ValidationError(UTXO_ERROR)
        logger.debug("utxo_is_valid shape=%s", utxo_shape(utxo))
        return await self._post("/bch/utxoIsValid", {"utxo": body_utxo})

    # -----------------------------------------------------------------
    # Price
    # -----------------------------------------------------------------

    async def get_usd(self) -> Any:
        """Get the spot price of BCH in USD.

        Returns the ``usd`` field of the gateway body (a number). A body
        without ``usd`` raises KeyError, a non-object body raises TypeError.
        """
        url = self._url("/price/usd")
        logger.debug("bch request GET %s", url)
        result = await self._transport.get_json(url)
        return result["usd"]

    # -----------------------------------------------------------------
    # Tokens
    # -----------------------------------------------------------------

    async def get_token_data(self, token_id: str, with_tx_history: bool = False) -> Any:
        """Get metadata for a token.

        Args:
            token_id: Token id (hex).
            with_tx_history: Ask the gateway to include the token's
                transaction history. Defaults to False and is always sent.
        """
        _require_str(token_id, TOKEN_ID_ERROR)
        if not isinstance(with_tx_history, bool):
            raise ValidationError(TX_HISTORY_FLAG_ERROR)
        return await self._post(
            "/bch/getTokenData",
            {"tokenId": token_id, "withTxHistory": with_tx_history},
        )

    async def get_token_data2(self, token_id: str) -> Any:
        """Get extended token metadata (media, mutable data) for a token."""
        _require_str(token_id, TOKEN_ID_ERROR)
        return await self._post("/bch/getTokenData2", {"tokenId": token_id})
