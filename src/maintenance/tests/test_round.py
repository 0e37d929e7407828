import logging

import pytest

from core.schemas import MetricName
from maintenance.actions import NoopPruner, RecordPruner
from maintenance.round import CONTINUE, Fatal, process_block

from .fakes import FakeClient, FakeMetrics

HARD_CALLS = [
    "shrink_routing_map",
    "get_routing_map_size",
    "count_dht_entries",
    "list_connected_peers",
]


class TestProcessBlock:
    @pytest.mark.asyncio
    async def test_successful_round_continues_and_logs_summary(
        self, client, metrics, params, caplog
    ):
        caplog.set_level(logging.INFO)

        outcome = await process_block(
            100, client, params, metrics, RecordPruner(client)
        )

        assert outcome == CONTINUE
        messages = [r.getMessage() for r in caplog.records]
        summary = [m for m in messages if "Maintenance completed" in m]
        assert len(summary) == 1
        assert "100" in summary[0]
        assert "42" in summary[0]

    @pytest.mark.asyncio
    async def test_gated_actions_run_before_routing_table_actions(
        self, client, metrics, params
    ):
        await process_block(20, client, params, metrics, RecordPruner(client))

        assert client.calls == ["prune_expired_records"] + HARD_CALLS
        assert metrics.flushes == 1

    @pytest.mark.asyncio
    async def test_only_flush_on_block_15(self, client, metrics, params):
        await process_block(15, client, params, metrics, RecordPruner(client))

        assert "prune_expired_records" not in client.calls
        assert metrics.flushes == 1

    @pytest.mark.asyncio
    async def test_no_gated_actions_on_block_7(self, client, metrics, params):
        await process_block(7, client, params, metrics, RecordPruner(client))

        assert client.calls == HARD_CALLS
        assert metrics.flushes == 0

    @pytest.mark.asyncio
    async def test_health_metrics_recorded(self, client, metrics, params):
        await process_block(7, client, params, metrics, RecordPruner(client))

        recorded = {m.name: m.value for m in metrics.recorded}
        assert recorded == {
            MetricName.DHT_CONNECTED_PEERS: 12.0,
            MetricName.BLOCK_CONFIDENCE_THRESHOLD: 0.92,
            MetricName.DHT_REPLICATION_FACTOR: 5.0,
            MetricName.DHT_QUERY_TIMEOUT: 10.0,
            MetricName.UP: 1.0,
        }

    @pytest.mark.asyncio
    async def test_static_values_reported_every_round(self, client, metrics, params):
        await process_block(1, client, params, metrics, RecordPruner(client))
        await process_block(2, client, params, metrics, RecordPruner(client))

        ups = [m for m in metrics.recorded if m.name == MetricName.UP]
        assert len(ups) == 2

    @pytest.mark.asyncio
    async def test_noop_pruner_never_prunes(self, client, metrics, params):
        await process_block(20, client, params, metrics, NoopPruner())

        assert "prune_expired_records" not in client.calls


class TestSoftFailures:
    @pytest.mark.asyncio
    async def test_prune_failure_is_logged_and_round_continues(
        self, metrics, params, caplog
    ):
        client = FakeClient(errors={"prune_expired_records": RuntimeError("store busy")})

        outcome = await process_block(20, client, params, metrics, RecordPruner(client))

        assert outcome == CONTINUE
        assert any(
            r.levelno == logging.ERROR and "store busy" in r.getMessage()
            for r in caplog.records
        )
        assert client.calls[1:] == HARD_CALLS
        assert len(metrics.recorded) == 5

    @pytest.mark.asyncio
    async def test_flush_failure_is_logged_and_round_continues(
        self, client, params, caplog
    ):
        metrics = FakeMetrics(flush_error=ConnectionError("gateway down"))

        outcome = await process_block(15, client, params, metrics, RecordPruner(client))

        assert outcome == CONTINUE
        assert any("gateway down" in r.getMessage() for r in caplog.records)
        assert len(metrics.recorded) == 5


class TestHardFailures:
    @pytest.mark.asyncio
    async def test_shrink_failure_is_fatal_with_context(self, metrics, params):
        client = FakeClient(errors={"shrink_routing_map": OSError("disk full")})

        outcome = await process_block(
            100, client, params, metrics, RecordPruner(client)
        )

        assert isinstance(outcome, Fatal)
        assert "unable to perform routing-map shrink" in outcome.reason
        assert "disk full" in outcome.reason
        assert "get_routing_map_size" not in client.calls

    @pytest.mark.asyncio
    async def test_map_size_failure_is_fatal_with_context(self, metrics, params):
        client = FakeClient(errors={"get_routing_map_size": RuntimeError("gone")})

        outcome = await process_block(3, client, params, metrics, RecordPruner(client))

        assert outcome == Fatal("unable to get routing-map size: gone")
        assert client.calls == HARD_CALLS[:2]

    @pytest.mark.parametrize("failing", ["count_dht_entries", "list_connected_peers"])
    @pytest.mark.asyncio
    async def test_peer_query_failure_is_fatal_as_is(self, failing, metrics, params):
        client = FakeClient(errors={failing: RuntimeError("swarm stopped")})

        outcome = await process_block(3, client, params, metrics, RecordPruner(client))

        assert outcome == Fatal("swarm stopped")
        assert client.calls[-1] == failing

    @pytest.mark.parametrize("failing", HARD_CALLS)
    @pytest.mark.asyncio
    async def test_hard_failure_skips_telemetry(self, failing, metrics, params):
        client = FakeClient(errors={failing: RuntimeError("boom")})

        outcome = await process_block(20, client, params, metrics, RecordPruner(client))

        assert isinstance(outcome, Fatal)
        assert metrics.recorded == []
        # gated soft actions were still attempted
        assert client.calls[0] == "prune_expired_records"
        assert metrics.flushes == 1

    @pytest.mark.asyncio
    async def test_error_without_message_names_its_type(self, metrics, params):
        client = FakeClient(errors={"get_routing_map_size": TimeoutError()})

        outcome = await process_block(3, client, params, metrics, RecordPruner(client))

        assert outcome == Fatal("unable to get routing-map size: TimeoutError")
