"""End-to-end tests: sampler thread -> coordinator -> live consumer, and batch diagnostics."""

import threading

import numpy as np
import pytest

from tracelens.core.domain.config import StreamConfig, SummaryConfig, TraceLensConfig
from tracelens.core.shared.events import EventDispatcher, EventType
from tracelens.services.summarize import VariableSummarizer
from tracelens.stream.coordinator import CoordinatorHandle, QueueConsumer, StreamCoordinator
from tracelens.stream.live import LiveSummaryConsumer

TOTAL_DRAWS = 200


def fake_sampler(handle: CoordinatorHandle, total: int, seed: int = 0) -> None:
    """Emit ``total`` correlated draws with energies, then signal completion."""
    rng = np.random.default_rng(seed)
    mu = 0.0
    for i in range(total):
        mu = 0.5 * mu + rng.normal()
        handle.send_draw(
            i,
            {"mu": mu, "log_sigma": rng.normal(-1.0, 0.1)},
            {"energy": 20.0 + rng.normal(), "divergent": i % 50 == 49},
        )
    handle.done(total)


class TestLiveStreaming:
    """Sampler and coordinator on separate threads feeding a live view."""

    def test_live_frames(self):
        config = TraceLensConfig(
            summary=SummaryConfig(max_acf_lag=10),
            stream=StreamConfig(flush_batch_size=25, min_samples_for_display=30),
        )
        frames = []
        consumer = LiveSummaryConsumer.from_config(
            frames.append,
            config.stream,
            summarizer=VariableSummarizer(config.summary),
        )
        handle = StreamCoordinator.from_config(TOTAL_DRAWS, consumer, config.stream).start()

        producer = threading.Thread(target=fake_sampler, args=(handle, TOTAL_DRAWS))
        producer.start()
        producer.join(timeout=10.0)
        assert handle.wait(timeout=10.0)

        # 8 flushes; the first (25 draws) is below the display minimum
        assert [f.running_count for f in frames[:-1]] == list(range(50, TOTAL_DRAWS + 1, 25))
        final = frames[-1]
        assert final.complete
        assert final.title == "MCMC Live Sampling (complete)"
        assert [s.name for s in final.summaries] == ["log_sigma", "mu"]
        assert all(s.sample_count == TOTAL_DRAWS for s in final.summaries)
        assert final.summaries[1].divergent_indices == (49, 99, 149, 199)
        assert final.energy is not None
        assert len(final.energy.transitions) == TOTAL_DRAWS - 1

    def test_running_counts_increase(self):
        consumer = QueueConsumer()
        handle = StreamCoordinator(TOTAL_DRAWS, consumer, flush_batch_size=7).start()
        fake_sampler(handle, TOTAL_DRAWS)
        assert handle.wait(timeout=10.0)

        events = list(consumer.events(timeout=10.0))
        counts = [e.running_count for e in events if e.event_type is EventType.STREAM_UPDATE]
        assert counts == sorted(counts)
        assert counts[-1] == TOTAL_DRAWS
        assert events[-1].event_type is EventType.STREAM_COMPLETED

    def test_fan_out_through_dispatcher(self):
        """A dispatcher lets a live view and a progress listener share one stream."""
        frames = []
        completed = []
        dispatcher = EventDispatcher()
        live = LiveSummaryConsumer(frames.append, VariableSummarizer(SummaryConfig(max_acf_lag=5)))
        dispatcher.subscribe(EventType.STREAM_UPDATE, live)
        dispatcher.subscribe(EventType.STREAM_COMPLETED, live)
        dispatcher.subscribe(EventType.STREAM_COMPLETED, completed.append)

        handle = StreamCoordinator(50, dispatcher, flush_batch_size=10).start()
        fake_sampler(handle, 50)
        assert handle.wait(timeout=10.0)

        assert len(completed) == 1
        assert completed[0].data["running_count"] == 50
        assert frames[-1].complete


class TestBatchDiagnostics:
    """Whole-run diagnostics on finished multi-chain traces."""

    @pytest.fixture
    def traces(self, rng):
        return [
            {"alpha": rng.normal(1.0, 0.3, 400), "beta": rng.normal(-2.0, 1.0, 400)}
            for _ in range(3)
        ]

    def test_consistent_summaries(self, traces):
        summarizer = VariableSummarizer()
        summaries = summarizer.from_chains(traces)
        ranks = summarizer.prepare_ranks(traces)
        forest = summarizer.prepare_forest(traces[0])

        assert [s.name for s in summaries] == [r.name for r in ranks] == [f.name for f in forest]
        for summary, rank_set in zip(summaries, ranks, strict=True):
            assert summary.sample_count == rank_set.total_count == 1200
            assert summary.rhat < 1.1
        for entry in forest:
            assert entry.hdi_94.lo <= entry.mean <= entry.hdi_94.hi

    def test_posterior_predictive(self, rng):
        summarizer = VariableSummarizer()
        observed = {"y": rng.normal(0.0, 1.0, 30)}
        predictive = {"y": rng.normal(0.0, 1.0, (100, 30))}
        (ppc,) = summarizer.prepare_ppc(observed, predictive, num_bins=12)

        assert len(ppc.bin_edges) == 13
        assert ppc.bin_edges[0] < float(np.min(observed["y"]))
        assert ppc.bin_edges[-1] > float(np.max(observed["y"]))
        assert ppc.max_count >= max(ppc.observed)
