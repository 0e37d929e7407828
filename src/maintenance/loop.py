from enum import StrEnum
from typing import Optional

from core.events import BroadcastReceiver, Closed, Lagged, Received
from core.log import get_logger
from core.schemas import BlockVerified, StaticConfigParams
from core.shutdown import ShutdownController
from network.client import MaintenanceClient
from telemetry.metrics import Metrics

from .actions import Pruner, RecordPruner
from .round import Fatal, RoundOutcome, process_block

logger = get_logger(__name__)


class LoopState(StrEnum):
    RUNNING = "running"
    STOPPED = "stopped"


class MaintenanceLoop:
    """
    Runs a maintenance round for every verified block until something fatal
    happens, then asks the whole process to shut down.
    """

    def __init__(
        self,
        client: MaintenanceClient,
        metrics: Metrics,
        receiver: BroadcastReceiver[BlockVerified],
        params: StaticConfigParams,
        shutdown: ShutdownController,
        pruner: Optional[Pruner] = None,
    ):
        self.client = client
        self.metrics = metrics
        self.receiver = receiver
        self.params = params
        self.shutdown = shutdown
        self.pruner = pruner or RecordPruner(client)
        self.state = LoopState.RUNNING

    async def _next_round(self) -> RoundOutcome:
        match await self.receiver.recv():
            case Received(item=block):
                return await process_block(
                    block.block_number,
                    self.client,
                    self.params,
                    self.metrics,
                    self.pruner,
                )
            case Lagged() | Closed() as failure:
                return Fatal(str(failure.error()))

    async def run(self) -> str:
        """Process blocks until the first fatal outcome. Returns the shutdown reason."""
        logger.info("Starting maintenance...")

        while True:
            try:
                outcome = await self._next_round()
            except Exception as e:
                logger.error(f"Unexpected error in maintenance round: {e!r}")
                outcome = Fatal(str(e) or type(e).__name__)
            if isinstance(outcome, Fatal):
                break

        self.state = LoopState.STOPPED
        self.shutdown.trigger_shutdown(outcome.reason)
        return outcome.reason


async def run(
    client: MaintenanceClient,
    metrics: Metrics,
    receiver: BroadcastReceiver[BlockVerified],
    params: StaticConfigParams,
    shutdown: ShutdownController,
    pruner: Optional[Pruner] = None,
) -> str:
    loop = MaintenanceLoop(client, metrics, receiver, params, shutdown, pruner)
    return await loop.run()
