"""
Maintenance actions run on every verified block.

Soft actions (pruning, metrics flush) log their failures and let the round go
on. Hard actions touch the routing table; their failures are raised as
``MaintenanceError`` and end the round.
"""

from abc import ABC, abstractmethod

from core.errors import MaintenanceError
from core.log import get_logger
from core.schemas import MetricValue, StaticConfigParams
from network.client import MaintenanceClient
from telemetry.metrics import Metrics

logger = get_logger(__name__)

SHRINK_CONTEXT = "unable to perform routing-map shrink"
MAP_SIZE_CONTEXT = "unable to get routing-map size"


class Pruner(ABC):
    enabled: bool = True

    @abstractmethod
    async def prune(self) -> int: ...


class RecordPruner(Pruner):
    def __init__(self, client: MaintenanceClient):
        self.client = client

    async def prune(self) -> int:
        return await self.client.prune_expired_records()


class NoopPruner(Pruner):
    """Used when the record store expires records on its own."""

    enabled = False

    async def prune(self) -> int:
        return 0


def select_pruner(client: MaintenanceClient, store_expires_records: bool) -> Pruner:
    if store_expires_records:
        return NoopPruner()
    return RecordPruner(client)


async def prune_records(pruner: Pruner, block_number: int) -> None:
    if not pruner.enabled:
        return

    logger.info(f"Pruning expired records at block {block_number}...")
    try:
        pruned = await pruner.prune()
        logger.info(f"Pruning finished at block {block_number}, pruned {pruned} records")
    except Exception as e:
        logger.error(f"Pruning failed at block {block_number}: {e}")


async def flush_metrics(metrics: Metrics, block_number: int) -> None:
    logger.info(f"Flushing metrics at block {block_number}...")
    try:
        await metrics.flush()
        logger.info(f"Flushing metrics finished at block {block_number}")
    except Exception as e:
        logger.error(f"Flushing metrics failed at block {block_number}: {e}")


async def shrink_routing_map(client: MaintenanceClient) -> None:
    try:
        await client.shrink_routing_map()
    except Exception as e:
        raise MaintenanceError(SHRINK_CONTEXT, e) from e


async def routing_map_size(client: MaintenanceClient) -> int:
    try:
        return await client.get_routing_map_size()
    except Exception as e:
        raise MaintenanceError(MAP_SIZE_CONTEXT, e) from e


async def count_dht_entries(client: MaintenanceClient) -> tuple[int, int]:
    try:
        peers, public_peers = await client.count_dht_entries()
    except Exception as e:
        raise MaintenanceError(None, e) from e

    logger.info(
        f"Number of peers in the routing table: {peers}. "
        f"Number of peers with public IPs: {public_peers}."
    )
    return peers, public_peers


async def list_connected_peers(client: MaintenanceClient) -> list[str]:
    try:
        connected_peers = await client.list_connected_peers()
    except Exception as e:
        raise MaintenanceError(None, e) from e

    logger.debug(f"Connected peers: {connected_peers}")
    return connected_peers


async def report_health(
    metrics: Metrics, params: StaticConfigParams, peers: int
) -> None:
    """Record the per-block health metrics, including the static config values."""
    await metrics.record(MetricValue.dht_connected_peers(peers))
    await metrics.record(
        MetricValue.block_confidence_threshold(params.block_confidence_threshold)
    )
    await metrics.record(MetricValue.dht_replication_factor(params.replication_factor))
    await metrics.record(MetricValue.dht_query_timeout(params.query_timeout))
    await metrics.record(MetricValue.up())
