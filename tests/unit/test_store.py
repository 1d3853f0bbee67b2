"""Unit tests for stat record edits and edit sessions."""

from __future__ import annotations

import asyncio

import pytest

from clubstats.stats.errors import CommitInProgressError, SaveError
from clubstats.stats.models import StatRecord
from clubstats.stats.store import EditSession, append_performance, increment, set_field
from clubstats.utils import run_async


@pytest.mark.unit
class TestIncrement:
    def test_increments_batting_counter(self) -> None:
        record = increment(StatRecord(centuries=1), "centuries")
        assert record.centuries == 2

    def test_accepts_wire_and_attribute_names(self) -> None:
        record = increment(StatRecord(), "halfCenturies")
        record = increment(record, "half_centuries")
        assert record.half_centuries == 2

    def test_increments_bowling_counter(self) -> None:
        record = StatRecord()
        for name in ("wickets", "threeWickets", "fiveWickets", "maidens"):
            record = increment(record, name, is_batting=False)
        assert (record.wickets, record.three_wickets, record.five_wickets, record.maidens) == (
            1,
            1,
            1,
            1,
        )

    def test_does_not_mutate_input(self) -> None:
        original = StatRecord(runs=10)
        increment(original, "runs")
        assert original.runs == 10

    def test_runs_recomputes_average(self) -> None:
        record = increment(StatRecord(matches=2, runs=99, average=49.5), "runs")
        assert record.runs == 100
        assert record.average == 50.0

    def test_matches_recomputes_average(self) -> None:
        record = increment(StatRecord(matches=2, runs=100, average=50.0), "matches")
        assert record.matches == 3
        assert record.average == 33.33

    def test_runs_without_matches_keeps_zero_average(self) -> None:
        record = increment(StatRecord(), "runs")
        assert record.runs == 1
        assert record.average == 0

    def test_other_counters_leave_stale_average_alone(self) -> None:
        record = increment(StatRecord(matches=2, runs=100, average=7.0), "centuries")
        assert record.average == 7.0

    @pytest.mark.parametrize("first", ["runs", "matches"])
    def test_average_is_order_independent(self, first: str) -> None:
        second = "matches" if first == "runs" else "runs"
        record = increment(increment(StatRecord(matches=4, runs=150), first), second)
        assert (record.matches, record.runs) == (5, 151)
        assert record.average == round(151 / 5, 2)

    def test_unknown_stat_is_noop(self) -> None:
        record = StatRecord(runs=5)
        assert increment(record, "sixes") is record

    def test_stat_from_other_group_is_noop(self) -> None:
        record = StatRecord(wickets=3)
        assert increment(record, "wickets", is_batting=True).wickets == 3
        assert increment(record, "runs", is_batting=False).runs == 0


@pytest.mark.unit
class TestSetField:
    def test_sets_strike_rate(self) -> None:
        assert set_field(StatRecord(), "strikeRate", "142.5").strike_rate == 142.5

    def test_malformed_rate_becomes_zero(self) -> None:
        record = set_field(StatRecord(strike_rate=120.0), "strikeRate", "quick")
        assert record.strike_rate == 0.0

    def test_sets_best_figures_verbatim(self) -> None:
        record = set_field(StatRecord(), "bestBatting", "88* (41)")
        record = set_field(record, "bestBowling", "4/19", is_batting=False)
        assert record.best_batting == "88* (41)"
        assert record.best_bowling == "4/19"

    def test_sets_economy(self) -> None:
        assert set_field(StatRecord(), "economy", "6.25", is_batting=False).economy == 6.25

    def test_counter_overwrite_does_not_recompute_average(self) -> None:
        record = set_field(StatRecord(matches=2, runs=100, average=50.0), "runs", "300")
        assert record.runs == 300
        assert record.average == 50.0

    def test_counter_overwrite_coerces(self) -> None:
        assert set_field(StatRecord(centuries=2), "centuries", "lots").centuries == 0

    def test_wrong_group_is_noop(self) -> None:
        record = StatRecord(economy=5.0)
        assert set_field(record, "economy", "9.0", is_batting=True) is record

    def test_unknown_field_is_noop(self) -> None:
        record = StatRecord()
        assert set_field(record, "nickname", "Hitman") is record


@pytest.mark.unit
def test_append_performance() -> None:
    record = append_performance(
        StatRecord(),
        {"opponent": "Hillside CC", "runs": "42", "balls": 30, "wickets": 1, "result": "Won"},
    )
    record = append_performance(record, {"opponent": "Lakeside CC", "result": "Lost"})
    assert [e.opponent for e in record.recent_performance] == ["Hillside CC", "Lakeside CC"]
    assert record.recent_performance[0].runs == 42


@pytest.mark.unit
class TestEditSession:
    def test_open_defaults_to_zeroed_record(self) -> None:
        session = EditSession.open("rsharma")
        assert session.record == StatRecord.zeroed()
        assert not session.is_dirty

    def test_reset_restores_snapshot(self) -> None:
        session = EditSession.open("rsharma", StatRecord(runs=10, matches=1, average=10.0))
        session.increment("runs")
        session.set_field("strikeRate", "150")
        assert session.is_dirty

        restored = session.reset()
        assert restored.runs == 10
        assert restored.strike_rate == 0.0
        assert not session.is_dirty

    def test_commit_success_updates_snapshot(self) -> None:
        saved: list[tuple[str, StatRecord]] = []

        async def saver(username: str, record: StatRecord) -> None:
            saved.append((username, record))

        session = EditSession.open("rsharma")
        session.increment("matches")
        session.increment("runs")
        result = run_async(session.commit(saver))

        assert saved == [("rsharma", result)]
        assert session.snapshot.runs == 1
        assert not session.is_dirty
        # Reset after a successful commit returns the committed state
        assert session.reset().matches == 1

    def test_commit_failure_keeps_edits(self) -> None:
        async def saver(username: str, record: StatRecord) -> None:
            raise ConnectionError("network down")

        session = EditSession.open("rsharma")
        session.increment("centuries")
        with pytest.raises(SaveError, match="network down"):
            run_async(session.commit(saver))

        assert session.record.centuries == 1
        assert session.snapshot.centuries == 0
        assert session.is_dirty
        assert not session.is_saving

    def test_commit_retry_after_failure(self) -> None:
        attempts = []

        async def flaky_saver(username: str, record: StatRecord) -> None:
            attempts.append(record)
            if len(attempts) == 1:
                raise SaveError(username, "rejected")

        session = EditSession.open("jbumrah")
        session.increment("wickets", is_batting=False)
        with pytest.raises(SaveError):
            run_async(session.commit(flaky_saver))
        run_async(session.commit(flaky_saver))

        assert len(attempts) == 2
        assert session.snapshot.wickets == 1

    def test_concurrent_commit_rejected(self) -> None:
        async def scenario() -> None:
            release = asyncio.Event()

            async def slow_saver(username: str, record: StatRecord) -> None:
                await release.wait()

            session = EditSession.open("rjadeja")
            session.increment("runs")
            first = asyncio.create_task(session.commit(slow_saver))
            await asyncio.sleep(0)
            assert session.is_saving
            with pytest.raises(CommitInProgressError):
                await session.commit(slow_saver)
            release.set()
            await first
            assert not session.is_saving

        run_async(scenario())
