"""
Scheduler Module - Next-Cycle Deferral
======================================
Queues state updates computed during a render pass so they are applied
after the pass finishes, never while it is still reading that state.
"""

from collections import deque
from typing import Any, Callable, Deque, Tuple


class FrameScheduler:
    """
    Same-thread queue of callbacks to run after the current render pass.

    Callbacks deferred while ``run_pending`` is running are kept for the
    following cycle.
    """

    def __init__(self):
        self._pending: Deque[Tuple[Callable[..., Any], tuple]] = deque()

    def defer(self, callback: Callable[..., Any], *args):
        """
        Schedule a callback for the end of the current cycle.

        Args:
            callback: Function to call
            *args: Positional arguments for the callback
        """
        self._pending.append((callback, args))

    def run_pending(self) -> int:
        """
        Run the callbacks queued before this call.

        Returns:
            Number of callbacks that ran
        """
        count = len(self._pending)
        for _ in range(count):
            callback, args = self._pending.popleft()
            callback(*args)
        return count

    def has_pending(self) -> bool:
        return len(self._pending) > 0

    def clear(self):
        """Drop all queued callbacks."""
        self._pending.clear()

    def __len__(self) -> int:
        return len(self._pending)
