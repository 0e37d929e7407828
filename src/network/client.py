import asyncio
from abc import ABC, abstractmethod

from core.errors import NetworkError
from core.log import get_logger

from .commands import Command, CommandType

logger = get_logger(__name__)


class MaintenanceClient(ABC):
    """Network operations the maintenance loop performs on the DHT."""

    @abstractmethod
    async def prune_expired_records(self) -> int:
        """Remove expired records from the local store, returning how many."""

    @abstractmethod
    async def shrink_routing_map(self) -> None: ...

    @abstractmethod
    async def get_routing_map_size(self) -> int: ...

    @abstractmethod
    async def count_dht_entries(self) -> tuple[int, int]:
        """Return (total peers, peers with a public address) in the routing table."""

    @abstractmethod
    async def list_connected_peers(self) -> list[str]: ...


class P2PClient(MaintenanceClient):
    """
    Client handle to the network event loop.

    The event loop owns the swarm and the DHT; this handle only queues
    commands for it and awaits the replies, so it can be shared freely.
    """

    def __init__(self, command_queue: asyncio.Queue[Command]):
        self.command_queue = command_queue

    async def _execute(self, command_type: CommandType):
        command = Command(command_type)
        await self.command_queue.put(command)
        try:
            return await command.response
        except NetworkError:
            raise
        except Exception as e:
            raise NetworkError(f"Command {command_type} failed: {e}") from e

    async def prune_expired_records(self) -> int:
        return await self._execute(CommandType.PRUNE_EXPIRED_RECORDS)

    async def shrink_routing_map(self) -> None:
        await self._execute(CommandType.SHRINK_ROUTING_MAP)

    async def get_routing_map_size(self) -> int:
        return await self._execute(CommandType.GET_ROUTING_MAP_SIZE)

    async def count_dht_entries(self) -> tuple[int, int]:
        total, public = await self._execute(CommandType.COUNT_DHT_ENTRIES)
        return total, public

    async def list_connected_peers(self) -> list[str]:
        return list(await self._execute(CommandType.LIST_CONNECTED_PEERS))
