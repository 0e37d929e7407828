"""
Commands the P2P client sends to the network event loop.

Each command carries a future the event loop resolves with the response,
or fails with the error it hit.
"""

import asyncio
from dataclasses import dataclass, field
from enum import StrEnum
from typing import Any


class CommandType(StrEnum):
    PRUNE_EXPIRED_RECORDS = "prune_expired_records"
    SHRINK_ROUTING_MAP = "shrink_routing_map"
    GET_ROUTING_MAP_SIZE = "get_routing_map_size"
    COUNT_DHT_ENTRIES = "count_dht_entries"
    LIST_CONNECTED_PEERS = "list_connected_peers"


@dataclass
class Command:
    command_type: CommandType
    response: asyncio.Future = field(
        default_factory=lambda: asyncio.get_running_loop().create_future()
    )

    def respond(self, result: Any) -> None:
        if not self.response.done():
            self.response.set_result(result)

    def fail(self, error: BaseException) -> None:
        if not self.response.done():
            self.response.set_exception(error)
