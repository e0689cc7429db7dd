"""Debounce and last-issued-wins sequencing for asynchronous calls.

A ``Debouncer`` hands out monotonically increasing sequence tokens. Issuing a
new token supersedes every earlier one. A superseded call is never cancelled
mid-flight; its owner simply checks ``token.stale`` before applying a result
and drops it if a newer call has been issued in the meantime.
"""

import asyncio


class SequenceToken:
    """Ticket for one scheduled call."""

    def __init__(self, debouncer: "Debouncer", seq: int) -> None:
        self._debouncer = debouncer
        self.seq = seq

    @property
    def stale(self) -> bool:
        """Whether a newer call has been issued since this one."""
        return self.seq != self._debouncer.latest

    def __repr__(self) -> str:
        return f"SequenceToken(seq={self.seq}, stale={self.stale})"


class Debouncer:
    """Schedules calls after a quiescence delay; the latest issued call wins."""

    def __init__(self, delay_seconds: float) -> None:
        """Initialize debouncer.

        Args:
            delay_seconds: Quiescence period a call must survive before firing.
        """
        self.delay_seconds = delay_seconds
        self.latest = 0

    def issue(self) -> SequenceToken:
        """Schedule a new call, superseding all earlier ones."""
        self.latest += 1
        return SequenceToken(self, self.latest)

    def supersede(self) -> None:
        """Invalidate every outstanding call without scheduling a new one."""
        self.latest += 1

    async def wait(self, token: SequenceToken) -> bool:
        """Sleep out the quiescence period.

        Returns:
            True if the call should fire, False if it was superseded meanwhile.
        """
        if self.delay_seconds > 0:
            await asyncio.sleep(self.delay_seconds)
        return not token.stale
