"""The in-page scripts, evaluated against a real Chromium DOM."""
import pytest
import pytest_asyncio
from playwright.async_api import async_playwright
from playwright.async_api import Error as PlaywrightError

from spec_extractor import config
from spec_extractor.delegates.action_executor import ActionExecutor, click
from spec_extractor.models import ExtractionSession, SpecRecord
from spec_extractor.pipeline import extract_details, list_options
from spec_extractor.pipeline.scripts import ITEM_NAMES_SCRIPT, OPTIONS_SCRIPT, UNCHECK_SCRIPT
from spec_extractor.pipeline.steps import option_selector

DROPDOWN_HTML = """
<li onclick="window.picked = 'outside'">Pro</li>
<span class="drop_arrow">v</span>
<ul class="dropdown optionslist">
  <li>Select</li>
  <li onclick="window.picked = 'Pro Staff'">Pro Staff</li>
  <li onclick="window.picked = 'Pro'">  Pro  </li>
  <li> </li>
  <li></li>
  <li onclick="window.picked = 'quoted'">Tom's 16" frame</li>
</ul>
"""

CATALOG_HTML = """
<div class="rac_name">Stray</div>
<div class="rac_info">
  <div class="rac_name"> Pure Aero </div>
  <table>
    <tr><th>Head Size:</th><td> 100 sq. in. </td></tr>
    <tr><th>Balance: (unstrung)</th><td>32 cm</td></tr>
    <tr><th>String Pattern:</th></tr>
    <tr><th>Length:</th><td>27 in</td></tr>
    <tr><th>Length:</th><td>28 in</td></tr>
  </table>
</div>
<div class="rac_info">
  <div class="rac_name">Dup</div>
  <table><tr><th>Head Size:</th><td>98</td></tr></table>
</div>
<div class="rac_info">
  <div class="rac_name">Dup</div>
  <table><tr><th>Head Size:</th><td>100</td></tr></table>
</div>
<div class="rac_info">
  <div class="rac_name">O'Neil "Pro" `x` ${1}</div>
  <table><tr><th>Stiffness:</th><td>66 RA</td></tr></table>
</div>
"""


@pytest_asyncio.fixture
async def dom_page():
    async with async_playwright() as p:
        try:
            browser = await p.chromium.launch(headless=True)
        except PlaywrightError as e:
            pytest.skip(f"Chromium is not installed: {e}")
        page = await browser.new_page()
        try:
            yield page
        finally:
            await browser.close()


@pytest.fixture
def no_settle(monkeypatch):
    for name in ("DROPDOWN_SETTLE", "OPTION_SETTLE", "RESULTS_SETTLE", "CHECKBOX_SETTLE"):
        monkeypatch.setattr(config, name, 0.0)


def make_session(page):
    return ExtractionSession(page=page, action_timeout=5.0, global_timeout=60.0)


# --- Dropdown ---

@pytest.mark.asyncio
async def test_options_script_trims_and_drops_placeholder_and_blanks(dom_page):
    await dom_page.set_content(DROPDOWN_HTML)

    options = await dom_page.evaluate(OPTIONS_SCRIPT, {
        "selector": config.DROPDOWN_OPTIONS,
        "placeholder": config.PLACEHOLDER_OPTION,
    })

    assert options == ["Pro Staff", "Pro", "Tom's 16\" frame"]


@pytest.mark.asyncio
async def test_list_options_on_a_live_dropdown(dom_page, no_settle):
    await dom_page.set_content(DROPDOWN_HTML)

    assert await list_options(make_session(dom_page)) == ["Pro Staff", "Pro", "Tom's 16\" frame"]


@pytest.mark.asyncio
@pytest.mark.parametrize("option, picked", [
    ("Pro", "Pro"),
    ("Pro Staff", "Pro Staff"),
    ("Tom's 16\" frame", "quoted"),
])
async def test_option_selector_clicks_the_exact_entry_inside_the_dropdown(dom_page, option, picked):
    await dom_page.set_content(DROPDOWN_HTML)

    await ActionExecutor(make_session(dom_page)).run(click(option_selector(option)))

    assert await dom_page.evaluate("() => window.picked") == picked


# --- Checkbox ---

@pytest.mark.asyncio
async def test_uncheck_script_only_clicks_a_checked_box(dom_page):
    await dom_page.set_content('<input type="checkbox" id="currentcheckbox" checked>')

    assert await dom_page.evaluate(UNCHECK_SCRIPT, config.CURRENT_CHECKBOX) is True
    assert await dom_page.is_checked(config.CURRENT_CHECKBOX) is False
    assert await dom_page.evaluate(UNCHECK_SCRIPT, config.CURRENT_CHECKBOX) is False
    assert await dom_page.is_checked(config.CURRENT_CHECKBOX) is False


# --- Results and detail panels ---

@pytest.mark.asyncio
async def test_item_names_script_reads_only_result_names(dom_page):
    await dom_page.set_content(CATALOG_HTML)

    names = await dom_page.evaluate(ITEM_NAMES_SCRIPT, config.RESULT_NAMES)

    assert names == ["Pure Aero", "Dup", "Dup", "O'Neil \"Pro\" `x` ${1}"]


@pytest.mark.asyncio
async def test_detail_script_matches_labels_by_prefix(dom_page):
    await dom_page.set_content(CATALOG_HTML)

    records = await extract_details(make_session(dom_page), ["Pure Aero"])

    assert records == [SpecRecord(
        name="Pure Aero",
        head_size="100 sq. in.",
        balance="32 cm",
        length="27 in",
    )]


@pytest.mark.asyncio
async def test_detail_row_without_value_cell_gives_empty_string(dom_page):
    await dom_page.set_content(CATALOG_HTML)

    [record] = await extract_details(make_session(dom_page), ["Pure Aero"])

    assert record.ok
    assert record.string_pattern == ""


@pytest.mark.asyncio
async def test_detail_script_uses_the_last_panel_with_a_duplicate_name(dom_page):
    await dom_page.set_content(CATALOG_HTML)

    records = await extract_details(make_session(dom_page), ["Dup"])

    assert records == [SpecRecord(name="Dup", head_size="100")]


@pytest.mark.asyncio
async def test_detail_script_reports_not_found_with_blank_fields(dom_page):
    await dom_page.set_content(CATALOG_HTML)

    records = await extract_details(make_session(dom_page), ["Missing"])

    assert records == [SpecRecord.empty("Missing", "not found")]


@pytest.mark.asyncio
async def test_detail_script_handles_quotes_and_template_syntax_in_names(dom_page):
    await dom_page.set_content(CATALOG_HTML)
    name = "O'Neil \"Pro\" `x` ${1}"

    records = await extract_details(make_session(dom_page), [name])

    assert records == [SpecRecord(name=name, stiffness="66 RA")]
