"""Tests for MonitorTopology single/multi-monitor detection."""

import queue

import pytest

from mouseguard.core.monitor_topology import (
    MonitorMode,
    MonitorTopology,
    MonitorTransition,
    guarded_screen_count,
    mode_for_count,
)


class FakeScreenSource:
    """Screen source whose count is set directly by the test."""

    def __init__(self, count):
        self.count = count

    def get_screen_count(self):
        return self.count


def _topology(count, channel=None):
    source = FakeScreenSource(count)
    return source, MonitorTopology(source, channel=channel)


# ---------------------------------------------------------------------------
# Initial state
# ---------------------------------------------------------------------------

class TestInitialMode:
    @pytest.mark.parametrize("count", [0, 1])
    def test_zero_or_one_is_single(self, count):
        _, topology = _topology(count)
        assert topology.current_mode is MonitorMode.SINGLE
        assert topology.is_single_monitor_mode

    @pytest.mark.parametrize("count", [2, 3])
    def test_two_or_more_is_multi(self, count):
        _, topology = _topology(count)
        assert topology.current_mode is MonitorMode.MULTI
        assert not topology.is_single_monitor_mode

    def test_none_source_rejected(self):
        with pytest.raises(ValueError):
            MonitorTopology(None)

    def test_screen_count_delegates(self):
        source, topology = _topology(2)
        assert topology.screen_count() == 2
        source.count = 4
        assert topology.screen_count() == 4

    def test_mode_for_count(self):
        assert mode_for_count(0) is MonitorMode.SINGLE
        assert mode_for_count(1) is MonitorMode.SINGLE
        assert mode_for_count(2) is MonitorMode.MULTI


# ---------------------------------------------------------------------------
# Transitions
# ---------------------------------------------------------------------------

class TestRecheck:
    def test_no_change_multi(self):
        _, topology = _topology(2)
        assert topology.recheck() is False
        assert topology.current_mode is MonitorMode.MULTI

    def test_one_to_one_no_transition(self):
        _, topology = _topology(1)
        assert topology.check_for_change() is None
        assert topology.recheck() is False

    def test_two_to_one_fires_to_single_once(self):
        source, topology = _topology(2)
        source.count = 1
        assert topology.check_for_change() is MonitorTransition.TO_SINGLE
        assert topology.is_single_monitor_mode
        # Already single: nothing more to report
        assert topology.recheck() is False

    def test_one_to_two_fires_to_multi(self):
        source, topology = _topology(1)
        source.count = 2
        assert topology.check_for_change() is MonitorTransition.TO_MULTI
        assert topology.current_mode is MonitorMode.MULTI

    def test_zero_to_two(self):
        source, topology = _topology(0)
        assert topology.current_mode is MonitorMode.SINGLE
        source.count = 2
        assert topology.recheck() is True
        assert topology.current_mode is MonitorMode.MULTI

    @pytest.mark.parametrize("start,end", [(2, 3), (3, 2)])
    def test_count_change_within_multi(self, start, end):
        source, topology = _topology(start)
        source.count = end
        assert topology.check_for_change() is None
        assert topology.recheck() is False
        assert topology.current_mode is MonitorMode.MULTI

    def test_three_to_one(self):
        source, topology = _topology(3)
        source.count = 1
        assert topology.check_for_change() is MonitorTransition.TO_SINGLE

    def test_multiple_transitions(self):
        source, topology = _topology(2)
        seen = []
        for count in [1, 2, 3, 1, 1, 0, 2]:
            source.count = count
            transition = topology.check_for_change()
            if transition is not None:
                seen.append(transition)
        assert seen == [
            MonitorTransition.TO_SINGLE,
            MonitorTransition.TO_MULTI,
            MonitorTransition.TO_SINGLE,
            MonitorTransition.TO_MULTI,
        ]


class TestChannel:
    def test_transitions_emitted(self):
        channel = queue.Queue()
        source, topology = _topology(2, channel=channel)
        source.count = 1
        topology.recheck()
        source.count = 2
        topology.recheck()
        assert channel.get_nowait() is MonitorTransition.TO_SINGLE
        assert channel.get_nowait() is MonitorTransition.TO_MULTI
        assert channel.empty()

    def test_nothing_emitted_without_transition(self):
        channel = queue.Queue()
        source, topology = _topology(2, channel=channel)
        source.count = 3
        topology.recheck()
        assert channel.empty()


# ---------------------------------------------------------------------------
# Periodic recheck
# ---------------------------------------------------------------------------

class TestPeriodicRecheck:
    def test_single_runs(self):
        _, topology = _topology(1)
        assert topology.should_run_periodic_recheck() is True

    def test_multi_does_not_run(self):
        _, topology = _topology(2)
        assert topology.should_run_periodic_recheck() is False

    def test_follows_mode(self):
        source, topology = _topology(2)
        for count in [1, 3, 0, 2]:
            source.count = count
            topology.recheck()
            assert topology.should_run_periodic_recheck() == (
                topology.current_mode is MonitorMode.SINGLE
            )


# ---------------------------------------------------------------------------
# Guarded source
# ---------------------------------------------------------------------------

class TestGuardedSource:
    def test_passes_count_through(self):
        assert guarded_screen_count(lambda: 3).get_screen_count() == 3

    def test_error_reports_zero(self):
        def broken():
            raise RuntimeError("display server gone")

        source = guarded_screen_count(broken)
        assert source.get_screen_count() == 0
        assert MonitorTopology(source).is_single_monitor_mode

    def test_negative_reports_zero(self):
        assert guarded_screen_count(lambda: -1).get_screen_count() == 0
