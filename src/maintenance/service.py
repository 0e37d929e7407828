from typing import Optional

from core.config import MaintenanceConfig
from core.constants import DEFAULT_EVENT_CAPACITY
from core.errors import ConfigurationError
from core.events import BroadcastChannel, BroadcastReceiver
from core.log import get_logger
from core.schemas import BlockVerified
from core.shutdown import ShutdownController
from network.client import MaintenanceClient
from telemetry.metrics import Metrics, PrometheusMetrics

from .actions import select_pruner
from .loop import MaintenanceLoop

logger = get_logger(__name__)


def build_block_channel(config: MaintenanceConfig) -> BroadcastChannel[BlockVerified]:
    """Create the verified-block channel sized by the configured capacity."""
    capacity = int(config.settings.get("event_capacity", DEFAULT_EVENT_CAPACITY))
    if capacity < 1:
        raise ConfigurationError(f"Event capacity must be at least 1, got {capacity}")
    return BroadcastChannel(capacity=capacity)


def build_maintenance_loop(
    config: MaintenanceConfig,
    client: MaintenanceClient,
    receiver: BroadcastReceiver[BlockVerified],
    shutdown: ShutdownController,
    metrics: Optional[Metrics] = None,
) -> MaintenanceLoop:
    """Assemble the maintenance loop from node configuration.

    Raises:
        ConfigurationError: If the maintenance parameters are invalid
    """
    params = config.static_config_params()
    store_expires_records = bool(config.settings.get("store_expires_records", False))
    pruner = select_pruner(client, store_expires_records)

    if metrics is None:
        metrics = PrometheusMetrics(
            pushgateway=config.settings.get("metrics_pushgateway")
        )

    logger.info(
        f"Maintenance configured: pruning every {params.pruning_interval} blocks"
        f"{' (disabled, store expires records)' if not pruner.enabled else ''}, "
        f"flushing metrics every {params.telemetry_flush_interval} blocks"
    )

    return MaintenanceLoop(client, metrics, receiver, params, shutdown, pruner)
