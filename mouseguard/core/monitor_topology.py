"""
Monitor topology tracking.

Classifies the display configuration as single- or multi-monitor and
reports each change of classification exactly once.
"""

import logging
import queue
from enum import Enum
from typing import Callable, Optional, Protocol

logger = logging.getLogger(__name__)


class MonitorMode(Enum):
    SINGLE = "single"
    MULTI = "multi"


class MonitorTransition(Enum):
    TO_SINGLE = "to_single"
    TO_MULTI = "to_multi"


class ScreenCountSource(Protocol):
    """Anything that can report how many screens are connected."""

    def get_screen_count(self) -> int:
        ...


def mode_for_count(count: int) -> MonitorMode:
    """Zero or one screens is single-monitor mode."""
    return MonitorMode.SINGLE if count <= 1 else MonitorMode.MULTI


class MonitorTopology:
    """
    Single/multi-monitor state machine.

    The mode is derived from the screen count only; it changes when
    ``check_for_change()`` (or ``recheck()``) observes a count on the
    other side of the single/multi boundary. Transitions are returned to
    the caller and, when a channel is given, also put on that queue.

    Not internally synchronized. Callers sharing an instance between
    threads must lock around it.
    """

    def __init__(self, source: ScreenCountSource,
                 channel: Optional["queue.Queue[MonitorTransition]"] = None):
        if source is None:
            raise ValueError("source must not be None")
        self._source = source
        self._channel = channel
        self._mode = mode_for_count(self.screen_count())

    @property
    def current_mode(self) -> MonitorMode:
        return self._mode

    @property
    def is_single_monitor_mode(self) -> bool:
        return self._mode is MonitorMode.SINGLE

    def screen_count(self) -> int:
        """Current number of screens, as reported by the source."""
        return self._source.get_screen_count()

    def check_for_change(self) -> Optional[MonitorTransition]:
        """
        Re-read the screen count and update the mode.

        Returns:
            The transition that occurred, or None if the classification
            did not change (e.g. 2 -> 3 screens)
        """
        count = self.screen_count()
        previous = self._mode
        self._mode = mode_for_count(count)

        if self._mode is previous:
            return None

        if self._mode is MonitorMode.SINGLE:
            transition = MonitorTransition.TO_SINGLE
        else:
            transition = MonitorTransition.TO_MULTI

        logger.info(f"Monitor count is now {count}: {transition.value}")
        if self._channel is not None:
            self._channel.put(transition)
        return transition

    def recheck(self) -> bool:
        """Re-read the screen count; True iff the mode changed."""
        return self.check_for_change() is not None

    def should_run_periodic_recheck(self) -> bool:
        """
        Polling is only needed in single-monitor mode, to notice a
        second monitor being connected.
        """
        return self._mode is MonitorMode.SINGLE


class _GuardedSource:
    def __init__(self, count_fn: Callable[[], int]):
        self._count_fn = count_fn

    def get_screen_count(self) -> int:
        try:
            count = int(self._count_fn())
        except Exception as e:
            logger.warning(f"Screen count unavailable: {e}")
            return 0
        return count if count >= 0 else 0


def guarded_screen_count(count_fn: Callable[[], int]) -> ScreenCountSource:
    """
    Wrap a fallible count function as a ScreenCountSource.

    Errors and negative values are reported as 0 screens, which the
    topology treats as single-monitor mode.
    """
    return _GuardedSource(count_fn)
