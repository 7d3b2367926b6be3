"""
bch_consumer: client for a BCH wallet REST gateway.

Public API:

    Entry point:
        - ``BchConsumer`` — builds the ledger client from one configuration.

    Ledger client:
        - ``BchClient`` — balance, UTXOs, tx history, broadcast, tx data,
          USD price, UTXO validity, token metadata.

    Configuration:
        - ``ConsumerConfig``, ``DEFAULT_REST_URL``.

    Transport:
        - ``Transport`` — injectable protocol (post_json/get_json).
        - ``HttpxTransport`` — default httpx-based transport.

    UTXO shapes:
        - ``FullnodeUtxo``, ``IndexerUtxo``, ``Utxo``.

    Errors:
        - ``ConsumerError``, ``ConfigurationError``, ``ValidationError``,
          ``TransportError``.
"""

from bch_consumer.bch import BchClient
from bch_consumer.config import DEFAULT_REST_URL, ConsumerConfig
from bch_consumer.consumer import BchConsumer
from bch_consumer.errors import (
    ConfigurationError,
    ConsumerError,
    TransportError,
    ValidationError,
)
from bch_consumer.transport import HttpxTransport, Transport
from bch_consumer.utxo import FullnodeUtxo, IndexerUtxo, Utxo

__version__ = "0.1.0"

__all__ = [
    "BchClient",
    "BchConsumer",
    "ConfigurationError",
    "ConsumerConfig",
    "ConsumerError",
    "DEFAULT_REST_URL",
    "FullnodeUtxo",
    "HttpxTransport",
    "IndexerUtxo",
    "Transport",
    "TransportError",
    "Utxo",
    "ValidationError",
]
