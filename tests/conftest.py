import asyncio
import json

import pytest
from playwright.async_api import Error as PlaywrightError

from spec_extractor import config
from spec_extractor.models import ExtractionSession
from spec_extractor.pipeline.scripts import (
    DETAIL_SCRIPT, ITEM_NAMES_SCRIPT, OPTIONS_SCRIPT, UNCHECK_SCRIPT,
)
from spec_extractor.pipeline.steps import option_selector


class FakeCatalogPage:
    """
    Stands in for a Playwright page showing the catalog. Mimics what the
    in-page scripts would return for a given dropdown/results/panels layout.

    Every interaction is logged in `events` under a key such as "goto",
    "click:#search_button", "select:A", "evaluate:options" or "detail:X".
    Keys listed in `fail_on` raise a Playwright error, keys in `hang_on`
    never complete, and `payloads` overrides the raw detail payload per name.
    """

    def __init__(self, options=None, results=None, panels=None, checkbox_checked=True):
        self.options = list(options or [])
        self.results = dict(results or {})
        self.panels = dict(panels or {})
        self.checkbox_checked = checkbox_checked
        self.has_checkbox = True
        self.selected = None
        self.searched = None
        self.events = []
        self.fail_on = {}
        self.hang_on = set()
        self.payloads = {}

    async def _hit(self, key):
        self.events.append(key)
        if key in self.hang_on:
            await asyncio.sleep(3600)
        if key in self.fail_on:
            raise PlaywrightError(self.fail_on[key])

    async def goto(self, url, **kwargs):
        await self._hit("goto")

    async def wait_for_timeout(self, ms):
        await self._hit("sleep")

    async def wait_for_selector(self, selector, state="visible"):
        await self._hit(f"wait:{selector}")
        if selector == config.CURRENT_CHECKBOX and not self.has_checkbox:
            raise PlaywrightError(f"waiting for {selector} failed")

    async def click(self, selector):
        for option in self.options:
            if selector == option_selector(option):
                await self._hit(f"select:{option}")
                self.selected = option
                return
        await self._hit(f"click:{selector}")
        if selector == config.SEARCH_BUTTON:
            self.searched = self.selected
        elif selector != config.DROPDOWN_ARROW:
            raise PlaywrightError(f"no element matches {selector}")

    async def evaluate(self, script, arg=None):
        if script == OPTIONS_SCRIPT:
            await self._hit("evaluate:options")
            labels = [o.strip() for o in self.options]
            return [o for o in labels if o and o != arg["placeholder"]]
        if script == ITEM_NAMES_SCRIPT:
            await self._hit("evaluate:items")
            return list(self.results.get(self.searched, []))
        if script == UNCHECK_SCRIPT:
            await self._hit("evaluate:uncheck")
            if self.checkbox_checked:
                self.checkbox_checked = False
                return True
            return False
        if script == DETAIL_SCRIPT:
            name = arg["name"]
            await self._hit(f"detail:{name}")
            if name in self.payloads:
                return self.payloads[name]
            record = {"name": name, "error": ""}
            record.update({field: "" for field in arg["labels"]})
            panel = self.panels.get(name)
            if panel is None:
                record["error"] = "not found"
            else:
                for field, label in arg["labels"].items():
                    record[field] = panel.get(label, "")
            return json.dumps(record)
        raise PlaywrightError("unexpected script")


@pytest.fixture
def page():
    return FakeCatalogPage(
        options=["Select", "A", " ", "B"],
        results={"A": ["X"], "B": []},
        panels={"X": {"Head Size:": "100"}},
    )


@pytest.fixture
def session(page):
    return ExtractionSession(page=page, action_timeout=0.2, global_timeout=30.0)
