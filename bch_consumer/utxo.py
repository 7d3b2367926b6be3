"""
UTXO shapes accepted by ``BchClient.utxo_is_valid``.

The gateway understands two UTXO layouts:

    fullnode:  {"txid": ..., "vout": ..., "value": ..., "height": ...}
    indexer:   {"tx_hash": ..., "tx_pos": ..., "value": ..., "height": ...}

The client never converts between them. A plain dict is forwarded as-is;
a FullnodeUtxo or IndexerUtxo is serialized back to its own layout with
``to_dict()`` and any ``extra`` fields merged in unchanged.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, ClassVar, Mapping, Union


@dataclass(frozen=True)
class FullnodeUtxo:
    """UTXO as reported by a full node (keyed by txid/vout).

    Attributes:
        txid: Transaction id holding the output.
        vout: Output index within that transaction.
        value: Output value in satoshis, if known.
        height: Block height, if known.
        extra: Additional fields forwarded untouched (token data, etc.).
    """

    txid: str
    vout: int
    value: int | None = None
    height: int | None = None
    extra: Mapping[str, Any] = field(default_factory=dict)

    kind: ClassVar[str] = "fullnode"

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {"txid": self.txid, "vout": self.vout}
        if self.value is not None:
            out["value"] = self.value
        if self.height is not None:
            out["height"] = self.height
        out.update(self.extra)
        return out


@dataclass(frozen=True)
class IndexerUtxo:
    """UTXO as reported by an indexer (keyed by tx_hash/tx_pos)."""

    tx_hash: str
    tx_pos: int
    value: int | None = None
    height: int | None = None
    extra: Mapping[str, Any] = field(default_factory=dict)

    kind: ClassVar[str] = "indexer"

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {"tx_hash": self.tx_hash, "tx_pos": self.tx_pos}
        if self.value is not None:
            out["value"] = self.value
        if self.height is not None:
            out["height"] = self.height
        out.update(self.extra)
        return out


Utxo = Union[FullnodeUtxo, IndexerUtxo]


def utxo_shape(utxo: Utxo | Mapping[str, Any]) -> str | None:
    """Name the layout of a UTXO: "fullnode", "indexer", or None if neither.

    Informational only; utxo_is_valid does not reject unknown layouts.
    """
    if isinstance(utxo, (FullnodeUtxo, IndexerUtxo)):
        return utxo.kind
    if "txid" in utxo and "vout" in utxo:
        return "fullnode"
    if "tx_hash" in utxo and "tx_pos" in utxo:
        return "indexer"
    return None
