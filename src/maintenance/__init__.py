from .actions import NoopPruner, Pruner, RecordPruner, select_pruner
from .loop import LoopState, MaintenanceLoop, run
from .policy import DueActions, due_actions, is_due
from .round import CONTINUE, Continue, Fatal, RoundOutcome, process_block

__all__ = [
    "CONTINUE",
    "Continue",
    "DueActions",
    "Fatal",
    "LoopState",
    "MaintenanceLoop",
    "NoopPruner",
    "Pruner",
    "RecordPruner",
    "RoundOutcome",
    "due_actions",
    "is_due",
    "process_block",
    "run",
    "select_pruner",
]
