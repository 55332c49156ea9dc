# spec_extractor/main.py
import logging
from typing import List
from rich.console import Console
from rich.table import Table
from . import config
from .config import RunSettings
from .delegates import BrowserDelegate, FileManagerDelegate
from .errors import ExtractionError
from .models import ExtractionSession, SpecRecord
from .pipeline import run_extraction

logger = logging.getLogger(__name__)

def render_records(records: List[SpecRecord], console: Console):
    """Prints the records as one table, a column per field."""
    table = Table(title=f"Extracted specs ({len(records)})", show_lines=False)
    for field_name in SpecRecord.field_names():
        table.add_column(field_name, overflow="fold")
    for record in records:
        table.add_row(*(getattr(record, f) for f in SpecRecord.field_names()))
    console.print(table)

async def main(settings: RunSettings) -> List[SpecRecord]:
    """The main orchestrator: owns the browser, runs the extraction, hands records to the sinks."""
    logger.info("Initializing browser...")
    async with BrowserDelegate(
        headless=settings.headless,
        user_agent=config.USER_AGENT,
        viewport=config.VIEWPORT,
        browser_args=config.BROWSER_ARGS,
        action_timeout=settings.action_timeout,
    ) as browser:
        session = ExtractionSession(
            page=browser.page,
            action_timeout=settings.action_timeout,
            global_timeout=settings.global_timeout,
            debug=settings.debug,
        )
        logger.info("Starting scraping process...")
        try:
            records = await run_extraction(session, settings.url)
        except ExtractionError as e:
            logger.error("Scraping failed: %s", e)
            raise

    errored = sum(1 for r in records if r.error)
    logger.info("Scraping completed: %d records (%d with errors)", len(records), errored)

    render_records(records, Console())
    if settings.output_path:
        FileManagerDelegate(settings.output_path).save_records(records)
    return records
