# spec_extractor/pipeline/steps.py
import logging
from typing import List

from .. import config
from ..delegates.action_executor import (
    ActionExecutor, click, evaluate, navigate, sleep, wait_ready, wait_visible,
)
from ..errors import (
    ActionError, CheckboxToggleFailed, EnumerationError, NavigationFailed,
    PageLoadVerificationFailed, RecordParseError, SessionCancelled,
)
from ..models import ExtractionSession, OptionOutcome, SpecRecord, SPEC_FIELD_LABELS
from .scripts import DETAIL_SCRIPT, ITEM_NAMES_SCRIPT, OPTIONS_SCRIPT, UNCHECK_SCRIPT

logger = logging.getLogger(__name__)


def _xpath_literal(text: str) -> str:
    """Quotes `text` for use inside an XPath expression."""
    if '"' not in text:
        return f'"{text}"'
    if "'" not in text:
        return f"'{text}'"
    parts = text.split('"')
    return "concat(" + ", '\"', ".join(f'"{part}"' for part in parts) + ")"


def option_selector(option: str) -> str:
    """The dropdown entry whose whitespace-normalized text equals `option` exactly."""
    return (
        f"xpath=//*[contains(concat(' ', normalize-space(@class), ' '), ' {config.DROPDOWN_LIST_CLASS} ')]"
        f"//li[normalize-space(.)=normalize-space({_xpath_literal(option)})]"
    )


async def setup_page(session: ExtractionSession, url: str):
    """
    Loads the catalog page and clears the toggle that would hide part of the
    results. Every failure here is fatal: searching with the page half set up
    would silently return the wrong population.
    """
    executor = ActionExecutor(session)

    logger.info("Starting navigation to %s", url)
    try:
        await executor.run(
            navigate(url),
            sleep(config.NAVIGATION_SETTLE),
            timeout=config.NAVIGATION_TIMEOUT,
        )
    except ActionError as e:
        raise NavigationFailed(f"navigation failed: {e}") from e

    logger.info("Navigation complete, waiting for page load...")
    try:
        await executor.run(wait_ready(config.READY_ANCHOR), timeout=config.NAVIGATION_TIMEOUT)
    except ActionError as e:
        raise PageLoadVerificationFailed(f"page load verification failed: {e}") from e

    logger.info("Unchecking current checkbox...")
    try:
        await executor.run(
            wait_visible(config.CURRENT_CHECKBOX),
            evaluate(UNCHECK_SCRIPT, config.CURRENT_CHECKBOX),
            sleep(config.CHECKBOX_SETTLE),
        )
    except ActionError as e:
        raise CheckboxToggleFailed(f"failed to uncheck checkbox: {e}") from e


async def list_options(session: ExtractionSession) -> List[str]:
    """Opens the dropdown and returns its option labels in DOM order, placeholder excluded."""
    executor = ActionExecutor(session)
    try:
        options = await executor.run(
            click(config.DROPDOWN_ARROW),
            sleep(config.DROPDOWN_SETTLE),
            evaluate(OPTIONS_SCRIPT, {
                "selector": config.DROPDOWN_OPTIONS,
                "placeholder": config.PLACEHOLDER_OPTION,
            }),
        )
    except ActionError as e:
        raise EnumerationError(f"options error: {e}") from e

    options = list(options or [])
    logger.info("Found %d valid options", len(options))
    for i, opt in enumerate(options, start=1):
        logger.debug("Option %d: %s", i, opt)
    return options


async def extract_details(session: ExtractionSession, identifiers: List[str]) -> List[SpecRecord]:
    """
    Reads the detail panel of each item. An item whose script fails or whose
    payload does not parse is skipped; an item with no panel on the page
    still yields a record, carrying error "not found".
    """
    executor = ActionExecutor(session)
    records: List[SpecRecord] = []

    for name in identifiers:
        try:
            payload = await executor.run(evaluate(DETAIL_SCRIPT, {
                "name": name,
                "nameSelector": config.DETAIL_NAMES,
                "labels": SPEC_FIELD_LABELS,
            }))
        except ActionError as e:
            logger.error("Error getting specs for item %s: %s", name, e)
            continue

        if session.debug:
            logger.debug("Raw spec payload for %s: %s", name, payload)

        try:
            record = SpecRecord.from_payload(payload)
        except RecordParseError as e:
            logger.error("Error parsing specs for item %s: %s", name, e)
            continue

        if record.error:
            logger.warning("Item '%s' recorded with error: %s", name, record.error)
        records.append(record)

    return records


async def process_option(session: ExtractionSession, option: str) -> OptionOutcome:
    """Select -> search -> harvest -> extract -> reopen, for one option."""
    executor = ActionExecutor(session)
    outcome = OptionOutcome(option=option)

    try:
        await executor.run(
            click(option_selector(option)),
            sleep(config.OPTION_SETTLE),
            click(config.SEARCH_BUTTON),
            sleep(config.RESULTS_SETTLE),
        )
    except ActionError as e:
        logger.error("Error processing option %s: %s", option, e)
        outcome.error = f"select/search failed: {e}"
        return outcome

    try:
        identifiers = await executor.run(evaluate(ITEM_NAMES_SCRIPT, config.RESULT_NAMES))
    except ActionError as e:
        logger.error("Error getting results for option %s: %s", option, e)
        outcome.error = f"harvest failed: {e}"
        return outcome

    outcome.identifiers = list(identifiers or [])
    if outcome.identifiers:
        logger.info("Found %d items for option '%s'", len(outcome.identifiers), option)
        for j, name in enumerate(outcome.identifiers, start=1):
            logger.debug("%d. %s", j, name)
        outcome.records = await extract_details(session, outcome.identifiers)
    else:
        logger.info("No items found for option '%s'", option)

    # Reopen for the next option. A failure here is only logged: the next
    # selection will fail on its own and be skipped.
    try:
        await executor.run(click(config.DROPDOWN_ARROW), sleep(config.DROPDOWN_SETTLE))
    except ActionError as e:
        logger.error("Error reopening dropdown after option %s: %s", option, e)

    return outcome


async def process_options(session: ExtractionSession, options: List[str]) -> List[SpecRecord]:
    """Runs every option in order and concatenates the records of those that got through."""
    outcomes: List[OptionOutcome] = []
    for i, option in enumerate(options, start=1):
        logger.info("Processing option %d/%d: %s", i, len(options), option)
        outcomes.append(await process_option(session, option))

    results: List[SpecRecord] = []
    for outcome in outcomes:
        if outcome.failed:
            continue
        results.extend(outcome.records)

    failed = sum(1 for o in outcomes if o.failed)
    logger.info(
        "Processed %d options (%d skipped), collected %d records",
        len(outcomes), failed, len(results),
    )
    return results


async def run_extraction(session: ExtractionSession, url: str) -> List[SpecRecord]:
    """Full run: page setup, option listing, then every option. Raises only fatal errors."""
    if session.cancelled:
        raise SessionCancelled("session cancelled before the run started")
    await setup_page(session, url)
    options = await list_options(session)
    return await process_options(session, options)
