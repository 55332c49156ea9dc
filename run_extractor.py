# run_extractor.py
import asyncio
import argparse
import logging
import sys
from pathlib import Path

# Import RichHandler here for centralized logging
from rich.logging import RichHandler

from spec_extractor import config
from spec_extractor.config import RunSettings
from spec_extractor.errors import ExtractionError
from spec_extractor.main import main as run_pipeline


def configure_logging(debug: bool, log_file_path: Path = config.LOG_FILE):
    root_logger = logging.getLogger()
    root_logger.setLevel(logging.DEBUG if debug else logging.INFO)

    formatter = logging.Formatter(
        fmt="%(asctime)s - %(levelname)-8s - %(name)-25s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S"
    )

    file_handler = logging.FileHandler(log_file_path)
    file_handler.setLevel(logging.DEBUG) # Log all debug messages to file
    file_handler.setFormatter(formatter)
    root_logger.addHandler(file_handler)

    rich_handler = RichHandler(
        level=logging.DEBUG if debug else logging.INFO,
        show_time=True,
        show_level=True,
        show_path=False,
    )
    root_logger.addHandler(rich_handler)


def parse_args(argv=None) -> RunSettings:
    parser = argparse.ArgumentParser(
        description="Extract item specs from every option of a catalog page's dropdown.",
        formatter_class=argparse.RawTextHelpFormatter
    )
    parser.add_argument('--url', type=str, required=True, help="Website URL to scrape.")
    parser.add_argument('--headless', action='store_true', help="Run the browser in headless mode.")
    parser.add_argument('--debug', action='store_true', help="Enable debug logging on the console.")
    parser.add_argument(
        '--timeout',
        type=int,
        default=config.DEFAULT_GLOBAL_TIMEOUT_MIN,
        help="Global timeout in minutes (bounds the whole run)."
    )
    parser.add_argument(
        '--action-timeout',
        type=int,
        default=config.DEFAULT_ACTION_TIMEOUT_MIN,
        help="Timeout in minutes for each unit of browser interaction."
    )
    parser.add_argument(
        '--output',
        type=Path,
        default=None,
        help="Optional path of a JSON file to write the records to."
    )
    args = parser.parse_args(argv)

    if args.timeout <= 0 or args.action_timeout <= 0:
        parser.error("--timeout and --action-timeout must be positive")

    return RunSettings(
        url=args.url,
        headless=args.headless,
        debug=args.debug,
        global_timeout=args.timeout * 60.0,
        action_timeout=args.action_timeout * 60.0,
        output_path=args.output,
    )


def cli(argv=None) -> int:
    settings = parse_args(argv)
    configure_logging(settings.debug)

    logging.info("=" * 60)
    logging.info("Spec extraction starting for %s", settings.url)
    logging.info("Global timeout: %.0fs, action timeout: %.0fs", settings.global_timeout, settings.action_timeout)
    logging.info("=" * 60)

    try:
        asyncio.run(run_pipeline(settings))
    except KeyboardInterrupt:
        logging.warning("Extraction interrupted by user.")
        return 130
    except ExtractionError as e:
        logging.critical("Extraction failed: %s", e)
        return 1
    except Exception as e:
        logging.critical("An unexpected error occurred: %s", e, exc_info=True)
        return 1
    finally:
        logging.info("=" * 60)
        logging.info("Extraction finished.")
    return 0


if __name__ == "__main__":
    sys.exit(cli())
