# spec_extractor/pipeline/__init__.py

# This file makes the step functions directly available from the 'pipeline' package.
from .steps import (
    setup_page, list_options, process_option, process_options, extract_details, run_extraction,
)
