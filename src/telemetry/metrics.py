"""
Node metrics.

Values are kept as Prometheus gauges in a registry owned by the sink and are
pushed to a Pushgateway on ``flush()``. Recording never raises: a metric that
cannot be recorded is logged and dropped.
"""

import asyncio
from abc import ABC, abstractmethod
from typing import Optional

from prometheus_client import CollectorRegistry, Gauge, push_to_gateway

from core.constants import METRICS_JOB_NAME
from core.log import get_logger
from core.schemas import MetricName, MetricValue

logger = get_logger(__name__)

METRIC_DESCRIPTIONS: dict[MetricName, str] = {
    MetricName.DHT_CONNECTED_PEERS: "Number of peers in the DHT routing table",
    MetricName.BLOCK_CONFIDENCE_THRESHOLD: "Confidence required to mark a block available",
    MetricName.DHT_REPLICATION_FACTOR: "DHT record replication factor",
    MetricName.DHT_QUERY_TIMEOUT: "DHT query timeout in seconds",
    MetricName.UP: "Node liveness",
}


class Metrics(ABC):
    @abstractmethod
    async def record(self, value: MetricValue) -> None:
        """Record a metric value. Must not raise."""

    @abstractmethod
    async def flush(self) -> None:
        """Export recorded values to the metrics backend."""


class PrometheusMetrics(Metrics):
    def __init__(
        self,
        pushgateway: Optional[str] = None,
        job: str = METRICS_JOB_NAME,
        registry: Optional[CollectorRegistry] = None,
    ):
        self.pushgateway = pushgateway
        self.job = job
        self.registry = registry or CollectorRegistry()
        self._gauges = {
            name: Gauge(f"light_node_{name}", description, registry=self.registry)
            for name, description in METRIC_DESCRIPTIONS.items()
        }

    def value_of(self, name: MetricName) -> Optional[float]:
        return self.registry.get_sample_value(f"light_node_{name}")

    async def record(self, value: MetricValue) -> None:
        try:
            self._gauges[value.name].set(value.value)
        except Exception as e:
            logger.warning(f"Failed to record metric {value.name}: {e}")

    async def flush(self) -> None:
        if not self.pushgateway:
            logger.debug("No Pushgateway configured, metrics kept locally")
            return

        await asyncio.to_thread(
            push_to_gateway, self.pushgateway, job=self.job, registry=self.registry
        )
