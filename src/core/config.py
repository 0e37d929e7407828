"""
Configuration options for the light node
"""

from argparse import ArgumentParser, BooleanOptionalAction
from dataclasses import dataclass
from typing import Optional

import dotenv
from dynaconf import Dynaconf, Validator
from pydantic import ValidationError

from .constants import (
    DEFAULT_BLOCK_CONFIDENCE_THRESHOLD,
    DEFAULT_EVENT_CAPACITY,
    DEFAULT_PRUNING_INTERVAL,
    DEFAULT_QUERY_TIMEOUT,
    DEFAULT_REPLICATION_FACTOR,
    DEFAULT_TELEMETRY_FLUSH_INTERVAL,
)
from .errors import ConfigurationError
from .log import configure_logging, get_logger
from .schemas import StaticConfigParams

logger = get_logger(__name__)

dotenv.load_dotenv()


@dataclass
class ConfigOpts:
    node_name: str
    settings_files: Optional[list[str]] = None
    argv: Optional[list[str]] = None


class Config:
    """Configurations

    The CLI arguments correspond to the options in the TOML file.
    """

    def __init__(self, opts: ConfigOpts):
        settings_files = ["settings.toml", ".secrets.toml"]
        if opts.settings_files:
            settings_files.extend(opts.settings_files)

        self.node_name = opts.node_name
        self.settings: Dynaconf = Dynaconf(
            envvar_prefix="LIGHT_NODE",
            settings_files=settings_files,
            validators=[
                Validator("log_level", default="INFO"),
            ],
        )
        self._parser = ArgumentParser(prog=opts.node_name)

        # Add arguments
        self.add_args()

        options = self._parser.parse_args(opts.argv)
        logger.info(f"Current config: {vars(options)}")

        # Update settings with parsed options
        option_vars = vars(options)
        for key, value in option_vars.items():
            self.settings[key] = value

        configure_logging(self.settings.get("log_level"))

    def add_args(self):
        """Add command line arguments"""
        self._parser.add_argument(
            "--log-level",
            type=str,
            help="Logging level (DEBUG, INFO, WARNING, ERROR)",
            default=self.settings.get("log_level", "INFO"),
        )


class MaintenanceConfig(Config):
    def __init__(self, argv: Optional[list[str]] = None):
        opts = ConfigOpts(
            node_name="light-node",
            settings_files=["light_node.toml"],
            argv=argv,
        )
        super().__init__(opts)

    def add_args(self):
        """Add maintenance and telemetry arguments"""
        super().add_args()

        maintenance = self.settings.get("maintenance", {})

        self._parser.add_argument(
            "--block-confidence-threshold",
            type=float,
            help="Confidence (0-1) required to consider a block available",
            default=self.settings.get(
                "block_confidence_threshold", DEFAULT_BLOCK_CONFIDENCE_THRESHOLD
            ),
        )
        self._parser.add_argument(
            "--replication-factor",
            type=int,
            help="Number of peers each DHT record is replicated to",
            default=self.settings.get("replication_factor", DEFAULT_REPLICATION_FACTOR),
        )
        self._parser.add_argument(
            "--query-timeout",
            type=int,
            help="DHT query timeout in seconds",
            default=self.settings.get("query_timeout", DEFAULT_QUERY_TIMEOUT),
        )

        self._parser.add_argument(
            "--pruning-interval",
            type=int,
            help="Prune expired DHT records every N verified blocks",
            default=maintenance.get("pruning_interval", DEFAULT_PRUNING_INTERVAL),
        )
        self._parser.add_argument(
            "--telemetry-flush-interval",
            type=int,
            help="Flush metrics every N verified blocks",
            default=maintenance.get(
                "telemetry_flush_interval", DEFAULT_TELEMETRY_FLUSH_INTERVAL
            ),
        )
        # Stores with native record expiry make pruning redundant
        self._parser.add_argument(
            "--store-expires-records",
            action=BooleanOptionalAction,
            help="The DHT record store expires records itself; disable pruning",
            default=maintenance.get("store_expires_records", False),
        )
        self._parser.add_argument(
            "--event-capacity",
            type=int,
            help="Block event buffer size before slow consumers lag",
            default=maintenance.get("event_capacity", DEFAULT_EVENT_CAPACITY),
        )

        self._parser.add_argument(
            "--metrics-pushgateway",
            type=str,
            help="Prometheus Pushgateway address metrics are flushed to",
            default=self.settings.get("metrics_pushgateway"),
        )

    def static_config_params(self) -> StaticConfigParams:
        """Build the immutable maintenance parameters, rejecting invalid values."""
        try:
            return StaticConfigParams(
                block_confidence_threshold=self.settings.block_confidence_threshold,
                replication_factor=self.settings.replication_factor,
                query_timeout=self.settings.query_timeout,
                pruning_interval=self.settings.pruning_interval,
                telemetry_flush_interval=self.settings.telemetry_flush_interval,
            )
        except ValidationError as e:
            raise ConfigurationError(f"Invalid maintenance configuration: {e}") from e
