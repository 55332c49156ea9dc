# spec_extractor/models/session_models.py

import asyncio
import time
from dataclasses import dataclass, field
from typing import Any, List, Optional

from .spec_models import SpecRecord


@dataclass
class ExtractionSession:
    """
    Handle threaded through every step of a run. Wraps the one live page and
    the session budget every action deadline is derived from.
    """
    page: Any
    action_timeout: float  # seconds
    global_timeout: float  # seconds
    debug: bool = False
    deadline: float = field(init=False)
    _cancel_event: asyncio.Event = field(default_factory=asyncio.Event, init=False, repr=False)

    def __post_init__(self):
        self.deadline = time.monotonic() + self.global_timeout

    def remaining(self) -> float:
        return self.deadline - time.monotonic()

    def cancel(self):
        """Stops the run. Actions in flight are interrupted, later ones fail fast."""
        self._cancel_event.set()

    async def wait_cancelled(self):
        await self._cancel_event.wait()

    @property
    def cancelled(self) -> bool:
        return self._cancel_event.is_set() or self.remaining() <= 0

    def child_deadline(self, timeout: Optional[float] = None) -> float:
        """Absolute deadline for one action; never later than the session's."""
        if timeout is None:
            timeout = self.action_timeout
        return min(time.monotonic() + timeout, self.deadline)


@dataclass
class OptionOutcome:
    """What processing one dropdown option produced."""
    option: str
    identifiers: List[str] = field(default_factory=list)
    records: List[SpecRecord] = field(default_factory=list)
    error: Optional[str] = None

    @property
    def failed(self) -> bool:
        return self.error is not None
