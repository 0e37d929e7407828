from dataclasses import dataclass

from core.errors import ConfigurationError
from core.schemas import StaticConfigParams


def is_due(block_number: int, interval: int) -> bool:
    """True when an action running every ``interval`` blocks is due at this block."""
    if interval <= 0:
        raise ConfigurationError(f"Maintenance interval must be positive, got {interval}")
    return block_number % interval == 0


@dataclass(frozen=True)
class DueActions:
    prune: bool
    flush_metrics: bool


def due_actions(block_number: int, params: StaticConfigParams) -> DueActions:
    return DueActions(
        prune=is_due(block_number, params.pruning_interval),
        flush_metrics=is_due(block_number, params.telemetry_flush_interval),
    )
