from dataclasses import dataclass
from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field


class StaticConfigParams(BaseModel):
    """
    Configuration values fixed at process start and reported on every block.
    """

    model_config = ConfigDict(frozen=True)

    block_confidence_threshold: float = Field(
        ..., ge=0.0, le=1.0, description="Confidence required to mark a block available"
    )
    replication_factor: int = Field(..., ge=1, description="DHT record replication")
    query_timeout: int = Field(..., ge=1, description="DHT query timeout in seconds")
    pruning_interval: int = Field(
        ..., ge=1, description="Prune expired records every N blocks"
    )
    telemetry_flush_interval: int = Field(
        ..., ge=1, description="Flush metrics every N blocks"
    )


class BlockVerified(BaseModel):
    """Emitted once a block's data availability has been verified."""

    model_config = ConfigDict(frozen=True)

    block_number: int = Field(..., ge=0)


class MetricName(StrEnum):
    DHT_CONNECTED_PEERS = "dht_connected_peers"
    BLOCK_CONFIDENCE_THRESHOLD = "block_confidence_threshold"
    DHT_REPLICATION_FACTOR = "dht_replication_factor"
    DHT_QUERY_TIMEOUT = "dht_query_timeout"
    UP = "up"


@dataclass(frozen=True)
class MetricValue:
    name: MetricName
    value: float = 1.0

    @classmethod
    def dht_connected_peers(cls, peers: int) -> "MetricValue":
        return cls(MetricName.DHT_CONNECTED_PEERS, float(peers))

    @classmethod
    def block_confidence_threshold(cls, threshold: float) -> "MetricValue":
        return cls(MetricName.BLOCK_CONFIDENCE_THRESHOLD, threshold)

    @classmethod
    def dht_replication_factor(cls, factor: int) -> "MetricValue":
        return cls(MetricName.DHT_REPLICATION_FACTOR, float(factor))

    @classmethod
    def dht_query_timeout(cls, timeout: int) -> "MetricValue":
        return cls(MetricName.DHT_QUERY_TIMEOUT, float(timeout))

    @classmethod
    def up(cls) -> "MetricValue":
        return cls(MetricName.UP, 1.0)
