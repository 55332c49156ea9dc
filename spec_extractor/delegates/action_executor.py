# spec_extractor/delegates/action_executor.py
import asyncio
import logging
import time
from typing import Any, Awaitable, Callable, Optional

from playwright.async_api import Error as PlaywrightError
from playwright.async_api import TimeoutError as PlaywrightTimeoutError

from ..errors import ActionFailed, ActionTimedOut, SessionCancelled
from ..models import ExtractionSession

logger = logging.getLogger(__name__)

# An action is one atomic interaction with the page. Its return value is only
# kept when it is the last action of a run() call.
Action = Callable[[Any], Awaitable[Any]]


# --- Action factories ---

def navigate(url: str) -> Action:
    async def _navigate(page):
        logger.debug("navigate -> %s", url)
        await page.goto(url, wait_until="domcontentloaded")
    return _navigate


def click(selector: str) -> Action:
    async def _click(page):
        logger.debug("click -> %s", selector)
        await page.click(selector)
    return _click


def wait_visible(selector: str) -> Action:
    async def _wait_visible(page):
        logger.debug("wait visible -> %s", selector)
        await page.wait_for_selector(selector, state="visible")
    return _wait_visible


def wait_ready(selector: str) -> Action:
    async def _wait_ready(page):
        logger.debug("wait ready -> %s", selector)
        await page.wait_for_selector(selector, state="attached")
    return _wait_ready


def evaluate(script: str, arg: Any = None) -> Action:
    async def _evaluate(page):
        return await page.evaluate(script, arg)
    return _evaluate


def sleep(seconds: float) -> Action:
    async def _sleep(page):
        await page.wait_for_timeout(seconds * 1000)
    return _sleep


class ActionExecutor:
    """Runs a sequence of actions as one unit under a deadline derived from the session budget."""
    def __init__(self, session: ExtractionSession):
        self.session = session

    async def _run_sequence(self, actions) -> Any:
        result = None
        for action in actions:
            result = await action(self.session.page)
        return result

    async def _run_until_cancelled(self, actions) -> Any:
        """Runs the sequence, abandoning it as soon as the session is cancelled."""
        sequence = asyncio.ensure_future(self._run_sequence(actions))
        watcher = asyncio.ensure_future(self.session.wait_cancelled())
        try:
            done, _ = await asyncio.wait({sequence, watcher}, return_when=asyncio.FIRST_COMPLETED)
        finally:
            for task in (sequence, watcher):
                task.cancel()
            await asyncio.gather(sequence, watcher, return_exceptions=True)
        if sequence not in done:
            raise SessionCancelled("session cancelled during action")
        return sequence.result()

    async def run(self, *actions: Action, timeout: Optional[float] = None) -> Any:
        """
        Executes `actions` in order and returns the last one's result.

        `timeout` overrides the session's per-action timeout for this call.
        Raises SessionCancelled if the session is cancelled or its budget is gone (before or
        during the call), ActionTimedOut if only this call's deadline fired,
        and ActionFailed for any other browser error.
        """
        if not actions:
            raise ValueError("run() needs at least one action")
        if self.session.cancelled:
            raise SessionCancelled("session cancelled before the action started")

        budget = self.session.action_timeout if timeout is None else timeout
        deadline = self.session.child_deadline(budget)
        # When the session deadline is the tighter one, firing it means the run is out of budget.
        session_bound = deadline >= self.session.deadline
        try:
            # wait_for cancels the sequence when the deadline fires, so nothing outlives this call.
            return await asyncio.wait_for(
                self._run_until_cancelled(actions),
                timeout=max(deadline - time.monotonic(), 0.0),
            )
        except asyncio.TimeoutError:
            if session_bound or self.session.cancelled:
                raise SessionCancelled("session budget exhausted during action") from None
            raise ActionTimedOut(budget) from None
        except PlaywrightTimeoutError as e:
            if self.session.cancelled:
                raise SessionCancelled("session budget exhausted during action") from e
            raise ActionTimedOut(budget) from e
        except PlaywrightError as e:
            raise ActionFailed(e.message) from e
