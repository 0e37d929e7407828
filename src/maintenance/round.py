from dataclasses import dataclass

from core.errors import MaintenanceError
from core.log import get_logger
from core.schemas import StaticConfigParams
from network.client import MaintenanceClient
from telemetry.metrics import Metrics

from .actions import (
    Pruner,
    count_dht_entries,
    flush_metrics,
    list_connected_peers,
    prune_records,
    report_health,
    routing_map_size,
    shrink_routing_map,
)
from .policy import due_actions

logger = get_logger(__name__)


@dataclass(frozen=True)
class Continue:
    pass


@dataclass(frozen=True)
class Fatal:
    reason: str


RoundOutcome = Continue | Fatal

CONTINUE = Continue()


async def process_block(
    block_number: int,
    client: MaintenanceClient,
    params: StaticConfigParams,
    metrics: Metrics,
    pruner: Pruner,
) -> RoundOutcome:
    """
    Run one maintenance round for a verified block.

    Gated soft actions run first, then the routing table actions; the first
    failing routing table action ends the round as ``Fatal`` and nothing after
    it runs, telemetry included.
    """
    due = due_actions(block_number, params)

    if due.prune:
        await prune_records(pruner, block_number)

    if due.flush_metrics:
        await flush_metrics(metrics, block_number)

    try:
        await shrink_routing_map(client)
        map_size = await routing_map_size(client)
        peers, _ = await count_dht_entries(client)
        await list_connected_peers(client)
    except MaintenanceError as e:
        logger.error(f"Maintenance failed at block {block_number}: {e}")
        return Fatal(str(e))

    await report_health(metrics, params, peers)

    logger.info(f"Maintenance completed at block {block_number}, map size {map_size}")
    return CONTINUE
