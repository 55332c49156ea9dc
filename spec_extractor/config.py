# spec_extractor/config.py

from pathlib import Path
from dataclasses import dataclass
from typing import Optional

# --- Page Selectors ---
# The arrow that opens the dropdown, and the list items it reveals.
DROPDOWN_ARROW = ".drop_arrow"
DROPDOWN_LIST_CLASS = "optionslist"
DROPDOWN_OPTIONS = f".{DROPDOWN_LIST_CLASS} li"
# The "no choice" entry at the top of the dropdown. Never searched for.
PLACEHOLDER_OPTION = "Select"
SEARCH_BUTTON = "#search_button"
# Name elements of the search results. The same elements anchor each item's detail panel.
RESULT_NAMES = ".rac_info .rac_name"
DETAIL_NAMES = ".rac_name"
# When left checked, this toggle hides part of the catalog from the search results.
CURRENT_CHECKBOX = "#currentcheckbox"
READY_ANCHOR = "body"

# --- Timing Settings (seconds) ---
# Pause after navigation so the client-side app can render.
NAVIGATION_SETTLE = 5.0
# Fixed budget for each of the two page-load steps. Independent of --action-timeout.
NAVIGATION_TIMEOUT = 30.0
DROPDOWN_SETTLE = 1.0
OPTION_SETTLE = 1.0
RESULTS_SETTLE = 2.0
CHECKBOX_SETTLE = 1.0

# Defaults for the CLI, in minutes.
DEFAULT_GLOBAL_TIMEOUT_MIN = 30
DEFAULT_ACTION_TIMEOUT_MIN = 1

# --- Browser Settings ---
USER_AGENT = "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 (KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36"
VIEWPORT = {"width": 1920, "height": 1080}
# Chromium flags that keep popups, updates and background throttling out of the way.
BROWSER_ARGS = [
    "--no-first-run",
    "--no-default-browser-check",
    "--disable-popup-blocking",
    "--disable-notifications",
    "--disable-extensions",
    "--disable-component-update",
    "--disable-background-networking",
    "--disable-background-timer-throttling",
    "--disable-backgrounding-occluded-windows",
    "--disable-renderer-backgrounding",
    "--disable-dev-shm-usage",
    "--disable-sync",
    "--disable-default-apps",
    "--start-maximized",
    "--ignore-certificate-errors",
    "--no-sandbox",
]

# --- File Path Settings ---
# Log file written next to wherever the extractor is launched from.
LOG_FILE = Path("extractor.log")


@dataclass
class RunSettings:
    """Everything a single run needs, as parsed from the command line."""
    url: str
    headless: bool = False
    debug: bool = False
    global_timeout: float = DEFAULT_GLOBAL_TIMEOUT_MIN * 60.0  # seconds
    action_timeout: float = DEFAULT_ACTION_TIMEOUT_MIN * 60.0  # seconds
    output_path: Optional[Path] = None
