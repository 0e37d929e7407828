import pytest

from core.schemas import StaticConfigParams
from core.shutdown import ShutdownController

from .fakes import FakeClient, FakeMetrics


@pytest.fixture
def params():
    return StaticConfigParams(
        block_confidence_threshold=0.92,
        replication_factor=5,
        query_timeout=10,
        pruning_interval=10,
        telemetry_flush_interval=5,
    )


@pytest.fixture
def client():
    return FakeClient()


@pytest.fixture
def metrics():
    return FakeMetrics()


@pytest.fixture
def shutdown():
    return ShutdownController()
